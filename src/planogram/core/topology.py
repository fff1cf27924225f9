"""
Topology model: the left-to-right sequence of shelving units.

The Topology is rebuilt on every frame edit and never mutated, so the
engine can hold a reference for the duration of one call without caring
about concurrent configuration changes.

  Spatial queries:
    .width_of(i)            - width of unit i
    .origin_of(i)           - global X where unit i starts
    .bin_at(x)              - (unit index, local X) for a global X
    .surfaces_of(i)         - ordered surfaces of unit i
    .total_width            - sum of all unit widths
    .bin_height             - full configured height of every unit

Usage:
    topo = Topology([Bin.with_default_surfaces(120, (0, 40))], bin_height=200)
    index, local_x = topo.bin_at(130.0)
"""

from typing import Iterable, Sequence, Tuple

import numpy as np

from planogram.core.models import Bin, InvalidInput, Surface, require_finite


class Topology:
    """
    Immutable description of units and their surfaces.

    Internally keeps the cumulative start of every unit (a prefix sum of
    widths) so global-X lookups are a single ``searchsorted``.
    """

    __slots__ = ("_bins", "_bin_height", "_starts", "_ends")

    def __init__(self, bins: Iterable[Bin], bin_height: float) -> None:
        bins = tuple(bins)
        if not bins:
            raise InvalidInput("topology needs at least one bin")
        bin_height = require_finite("bin height", bin_height)
        if bin_height <= 0:
            raise InvalidInput(f"bin height must be > 0, got {bin_height}")

        widths = np.array([b.width for b in bins], dtype=np.float64)
        self._bins: Tuple[Bin, ...] = bins
        self._bin_height: float = bin_height
        self._ends: np.ndarray = np.cumsum(widths)
        self._starts: np.ndarray = self._ends - widths

    # ── Basic accessors ──────────────────────────────────────────────────

    @property
    def bins(self) -> Tuple[Bin, ...]:
        return self._bins

    @property
    def bin_count(self) -> int:
        return len(self._bins)

    @property
    def bin_height(self) -> float:
        return self._bin_height

    @property
    def total_width(self) -> float:
        return float(self._ends[-1])

    def _check_index(self, bin_index: int) -> int:
        if not isinstance(bin_index, (int, np.integer)) or not 0 <= bin_index < len(self._bins):
            raise InvalidInput(
                f"bin index {bin_index!r} out of range (0..{len(self._bins) - 1})"
            )
        return int(bin_index)

    def width_of(self, bin_index: int) -> float:
        return self._bins[self._check_index(bin_index)].width

    def origin_of(self, bin_index: int) -> float:
        """Global X of the left edge of unit *bin_index*."""
        return float(self._starts[self._check_index(bin_index)])

    def surfaces_of(self, bin_index: int) -> Tuple[Surface, ...]:
        return self._bins[self._check_index(bin_index)].surfaces

    # ── Coordinate lookups ───────────────────────────────────────────────

    def bin_at(self, global_x: float) -> Tuple[int, float]:
        """
        Unit whose half-open interval [start, start + width) holds *global_x*.

        X past the last unit maps to the last unit with an extrapolated
        local X (not clamped). Negative X maps to the first unit, again
        with an unclamped (negative) local X.
        """
        global_x = require_finite("global x", global_x)
        index = int(np.searchsorted(self._ends, global_x, side="right"))
        index = min(index, len(self._bins) - 1)
        return index, global_x - float(self._starts[index])

    def local_to_global(self, bin_index: int, local_x: float) -> float:
        return self.origin_of(bin_index) + local_x

    # ── Derivation ───────────────────────────────────────────────────────

    def with_bins(self, bins: Sequence[Bin]) -> "Topology":
        """Copy with a replaced unit sequence (same bin height)."""
        return Topology(bins, self._bin_height)

    def with_bin_height(self, bin_height: float) -> "Topology":
        return Topology(self._bins, bin_height)

    def to_dict(self) -> dict:
        return {"bin_height": self._bin_height,
                "bins": [b.to_dict() for b in self._bins]}

    # ── Representation ───────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Topology):
            return NotImplemented
        return self._bins == other._bins and self._bin_height == other._bin_height

    def __hash__(self) -> int:
        return hash((self._bins, self._bin_height))

    def __repr__(self) -> str:
        return (
            f"Topology(bins={len(self._bins)}, "
            f"width={self.total_width:.1f}, height={self._bin_height:.1f})"
        )
