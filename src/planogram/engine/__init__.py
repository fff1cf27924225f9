"""Placement engine - gravity, collision, and layout audit.

Submodules:
  coords          Top-down <-> floor-relative Y conversion (the only place it lives).
  geometry        1-D interval overlap helpers.
  surface_finder  Closest shelf surface or item top under an item.
  collision       Single-pass horizontal de-confliction.
  orchestrator    place(): gravity + collision for one drop or move.
  validator       Read-only audit of resting / overlap / bounds invariants.
"""

from .coords import to_floor_relative, to_top_down
from .surface_finder import find_best_support
from .collision import resolve_horizontal
from .orchestrator import place, place_item
from .validator import (
    FloatingItemError,
    LayoutIssue,
    LayoutIssueError,
    OutOfBoundsError,
    OverlapError,
    WrongUnitError,
    audit_layout,
    validate_layout,
)

__all__ = [
    # Coordinates
    "to_floor_relative", "to_top_down",
    # Engine
    "find_best_support", "resolve_horizontal", "place", "place_item",
    # Audit
    "audit_layout", "validate_layout", "LayoutIssue",
    "LayoutIssueError", "OutOfBoundsError", "FloatingItemError", "OverlapError",
    "WrongUnitError",
]
