"""
Layout validator: read-only audit of a committed planogram.

The engine tolerates free-floating and unresolved placements, so this
module is how a caller finds out whether the layout still satisfies the
resting and non-overlap invariants after a series of edits.

Checks (per item):
  1. Bounds     - footprint inside [0, total_width], bottom >= 0,
                  top <= bin height, owning unit exists
  2. Resting    - a shelf or item top sits within band tolerance of
                  the item's bottom
  3. Overlap    - no other item shares its band and its footprint
  4. Ownership  - the recorded unit is the one under the left edge

audit_layout() returns every issue; validate_layout() raises the first.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

from planogram.config import DEFAULT_SETTINGS, PlacementSettings
from planogram.core.models import Item
from planogram.core.topology import Topology
from planogram.engine.collision import same_band
from planogram.engine.coords import item_bottom
from planogram.engine.geometry import intervals_overlap
from planogram.engine.surface_finder import find_best_support


# ─────────────────────────────────────────────────────────────────────────────
# Errors
# ─────────────────────────────────────────────────────────────────────────────

class LayoutIssueError(Exception):
    """Base class for layout invariant violations."""


class OutOfBoundsError(LayoutIssueError):
    """Item extends outside the frame or belongs to a missing unit."""


class FloatingItemError(LayoutIssueError):
    """Item is not resting on a surface or another item."""


class OverlapError(LayoutIssueError):
    """Two items occupy the same band and footprint."""


class WrongUnitError(LayoutIssueError):
    """Item is recorded against a unit other than the one under its left edge."""


# ─────────────────────────────────────────────────────────────────────────────
# Issues
# ─────────────────────────────────────────────────────────────────────────────

class IssueKind(str, Enum):
    OUT_OF_BOUNDS = "out_of_bounds"
    FLOATING = "floating"
    OVERLAP = "overlap"
    WRONG_UNIT = "wrong_unit"


_ERRORS = {
    IssueKind.OUT_OF_BOUNDS: OutOfBoundsError,
    IssueKind.FLOATING: FloatingItemError,
    IssueKind.OVERLAP: OverlapError,
    IssueKind.WRONG_UNIT: WrongUnitError,
}


@dataclass(frozen=True)
class LayoutIssue:
    kind: IssueKind
    uid: str
    message: str
    other_uid: Optional[str] = None

    def to_error(self) -> LayoutIssueError:
        return _ERRORS[self.kind](self.message)

    def to_dict(self) -> dict:
        d = {"kind": self.kind.value, "uid": self.uid, "message": self.message}
        if self.other_uid is not None:
            d["other_uid"] = self.other_uid
        return d


# ─────────────────────────────────────────────────────────────────────────────
# Audit
# ─────────────────────────────────────────────────────────────────────────────

_EPS = 1e-6


def _bounds_issue(topology: Topology, item: Item) -> Optional[LayoutIssue]:
    if not 0 <= item.bin_index < topology.bin_count:
        return LayoutIssue(IssueKind.OUT_OF_BOUNDS, item.uid,
                           f"item {item.uid} belongs to missing unit {item.bin_index}")
    bottom = item_bottom(item, topology.bin_height)
    if item.x < -_EPS or item.right > topology.total_width + _EPS:
        return LayoutIssue(
            IssueKind.OUT_OF_BOUNDS, item.uid,
            f"item {item.uid} spans x={item.x:.1f}..{item.right:.1f} "
            f"outside 0..{topology.total_width:.1f}",
        )
    if bottom < -_EPS or bottom + item.height > topology.bin_height + _EPS:
        return LayoutIssue(
            IssueKind.OUT_OF_BOUNDS, item.uid,
            f"item {item.uid} spans height {bottom:.1f}..{bottom + item.height:.1f} "
            f"outside 0..{topology.bin_height:.1f}",
        )
    return None


def _ownership_issue(topology: Topology, item: Item) -> Optional[LayoutIssue]:
    owner, _ = topology.bin_at(item.x)
    if owner != item.bin_index:
        return LayoutIssue(
            IssueKind.WRONG_UNIT, item.uid,
            f"item {item.uid} at x={item.x:.1f} lies in unit {owner}, "
            f"recorded as unit {item.bin_index}",
        )
    return None


def audit_layout(
    topology: Topology,
    items: Iterable[Item],
    settings: Optional[PlacementSettings] = None,
) -> List[LayoutIssue]:
    """All invariant violations in the current layout, in item order."""
    settings = settings or DEFAULT_SETTINGS
    snapshot = tuple(items)
    issues: List[LayoutIssue] = []

    for i, item in enumerate(snapshot):
        bounds = _bounds_issue(topology, item)
        if bounds is not None:
            issues.append(bounds)
            if not 0 <= item.bin_index < topology.bin_count:
                continue
        else:
            ownership = _ownership_issue(topology, item)
            if ownership is not None:
                issues.append(ownership)

        bottom = item_bottom(item, topology.bin_height)
        support = find_best_support(
            topology, snapshot, item.bin_index, bottom, item.x, item.width,
            exclude_uid=item.uid, settings=settings,
        )
        if support is None or support.distance > settings.band_tolerance:
            issues.append(LayoutIssue(
                IssueKind.FLOATING, item.uid,
                f"item {item.uid} bottom at {bottom:.1f} is not resting on anything",
            ))

        item_top = bottom + item.height
        for other in snapshot[i + 1:]:
            if not same_band(bottom, item_top, other, topology.bin_height,
                             settings.band_tolerance):
                continue
            if intervals_overlap(item.x, item.right, other.x, other.right,
                                 settings.band_tolerance):
                issues.append(LayoutIssue(
                    IssueKind.OVERLAP, item.uid,
                    f"items {item.uid} and {other.uid} overlap",
                    other_uid=other.uid,
                ))
    return issues


def validate_layout(
    topology: Topology,
    items: Iterable[Item],
    settings: Optional[PlacementSettings] = None,
) -> bool:
    """
    Fail-fast variant of audit_layout().

    Returns:
        True if the layout has no issues.

    Raises:
        OutOfBoundsError, FloatingItemError, OverlapError: the first issue.
    """
    issues = audit_layout(topology, items, settings)
    if issues:
        raise issues[0].to_error()
    return True
