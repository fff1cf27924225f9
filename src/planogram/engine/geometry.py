"""Low-level 1-D interval helpers shared by the engine modules."""


def overlap_length(a_left: float, a_width: float, b_left: float, b_width: float) -> float:
    """Length of the intersection of [a_left, a_left+a_width) and [b_left, b_left+b_width)."""
    return max(0.0, min(a_left + a_width, b_left + b_width) - max(a_left, b_left))


def intervals_overlap(a_lo: float, a_hi: float, b_lo: float, b_hi: float,
                      tolerance: float = 0.0) -> bool:
    """
    True when [a_lo, a_hi] and [b_lo, b_hi] share more than *tolerance*.

    Touching intervals (a_hi == b_lo) never overlap, so an item resting
    exactly on another is not in its band.
    """
    return a_lo < b_hi - tolerance and a_hi > b_lo + tolerance
