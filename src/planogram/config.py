"""
Central configuration for the planogram placement engine.

All modules import their tolerances and frame defaults from here so the
engine, the session layer, and the layout loader agree on one set of
numbers.

Contents:
    Engine tolerances   - vertical snap distance, stacking overlap, band noise
    Frame defaults      - board thickness, unit width, layer heights
    PlacementSettings   - the tunable subset, passed to every engine call
"""

from dataclasses import dataclass


# ─────────────────────────────────────────────────────────────────────────────
# Engine tolerances (length units, cm in the default frame)
# ─────────────────────────────────────────────────────────────────────────────

# Max bottom-to-support distance still treated as "resting on" that support.
TOLERANCE_VERTICAL: float = 30.0

# An item can only stack on another if they share this fraction of the
# narrower of the two widths.
STACK_OVERLAP_RATIO: float = 0.30

# Absorbs floating-point noise in band / footprint overlap tests.
BAND_TOLERANCE: float = 0.5


# ─────────────────────────────────────────────────────────────────────────────
# Frame defaults
# ─────────────────────────────────────────────────────────────────────────────

SHELF_THICKNESS: float = 3.0
BASE_THICKNESS: float = 5.0
RAIL_THICKNESS: float = 0.0

DEFAULT_UNIT_WIDTH: float = 120.0
DEFAULT_TOTAL_HEIGHT: float = 200.0
DEFAULT_UNIT_COUNT: int = 2
DEFAULT_LAYER_HEIGHTS: tuple = (0.0, 40.0, 80.0, 120.0, 160.0)

# A new surface goes this far above the current highest one ...
DEFAULT_LAYER_SPACING: float = 40.0
# ... but never closer than this to the top of the frame.
TOP_CLEARANCE: float = 10.0


# ─────────────────────────────────────────────────────────────────────────────
# Placement settings
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PlacementSettings:
    """
    Tunable parameters of a single placement call.

    Attributes:
        tolerance_vertical:  Snap distance for shelves and item tops.
        stack_overlap_ratio: Required shared fraction of the narrower width.
        band_tolerance:      Slack for vertical-band and footprint overlap.
    """
    tolerance_vertical: float = TOLERANCE_VERTICAL
    stack_overlap_ratio: float = STACK_OVERLAP_RATIO
    band_tolerance: float = BAND_TOLERANCE

    def to_dict(self) -> dict:
        return {"tolerance_vertical": self.tolerance_vertical,
                "stack_overlap_ratio": self.stack_overlap_ratio,
                "band_tolerance": self.band_tolerance}

    @classmethod
    def from_dict(cls, d: dict) -> "PlacementSettings":
        return cls(**d)


DEFAULT_SETTINGS = PlacementSettings()
