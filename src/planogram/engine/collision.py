"""
Collision resolver: horizontal de-confliction of a proposed rectangle.

Single pass: the first placed item (in store order) that shares the
proposed item's vertical band and overlaps it horizontally is resolved by
the smaller of the two sideways pushes. If that push leaves the layout,
the other direction is tried; if both leave the layout the proposed X is
kept and the overlap persists. Any further overlap created by the push is
not chased.
"""

import logging
from typing import Iterable, Optional, Tuple

from planogram.config import DEFAULT_SETTINGS, PlacementSettings
from planogram.core.models import Item, require_finite, require_non_negative
from planogram.core.topology import Topology
from planogram.engine.coords import item_bottom, to_floor_relative
from planogram.engine.geometry import intervals_overlap

log = logging.getLogger("planogram.engine.collision")


def same_band(bottom: float, top: float, other: Item, bin_height: float,
              tolerance: float = DEFAULT_SETTINGS.band_tolerance) -> bool:
    """Do floor-relative [bottom, top] and *other*'s vertical extent intersect?"""
    other_bottom = item_bottom(other, bin_height)
    return intervals_overlap(bottom, top, other_bottom, other_bottom + other.height, tolerance)


def find_first_collision(
    topology: Topology,
    items: Iterable[Item],
    x: float,
    y: float,
    width: float,
    height: float,
    exclude_uid: Optional[str] = None,
    settings: Optional[PlacementSettings] = None,
) -> Optional[Item]:
    """First item in the same band whose footprint overlaps [x, x+width)."""
    settings = settings or DEFAULT_SETTINGS
    tol = settings.band_tolerance
    bottom = to_floor_relative(y, height, topology.bin_height)
    top = bottom + height

    for other in items:
        if exclude_uid is not None and other.uid == exclude_uid:
            continue
        if not same_band(bottom, top, other, topology.bin_height, tol):
            continue
        if intervals_overlap(x, x + width, other.x, other.right, tol):
            return other
    return None


def _push_options(proposed_x: float, width: float, other: Item) -> Tuple[Tuple[float, float], ...]:
    """(distance, new_x) for both directions, preferred (smaller) first."""
    push_left = (proposed_x + width - other.x, other.x - width)
    push_right = (other.right - proposed_x, other.right)
    if push_right[0] < push_left[0]:
        return push_right, push_left
    return push_left, push_right


def resolve_horizontal(
    topology: Topology,
    items: Iterable[Item],
    proposed_x: float,
    proposed_y: float,
    width: float,
    height: float,
    exclude_uid: Optional[str] = None,
    settings: Optional[PlacementSettings] = None,
) -> float:
    """
    X at which the proposed rectangle no longer overlaps its first colliding
    neighbour, or *proposed_x* when there is nothing to resolve.

    Args:
        topology:    Frame description; bounds are [0, total_width].
        items:       Placed items; read once at entry.
        proposed_x:  Global left edge after gravity.
        proposed_y:  Top-down Y after gravity.
        width:       Item width.
        height:      Item height.
        exclude_uid: The item being moved.
        settings:    Tolerances; defaults to the module constants.

    Raises:
        InvalidInput: non-finite coordinates or negative size.
    """
    proposed_x = require_finite("proposed x", proposed_x)
    proposed_y = require_finite("proposed y", proposed_y)
    width = require_non_negative("item width", width)
    height = require_non_negative("item height", height)

    other = find_first_collision(
        topology, tuple(items), proposed_x, proposed_y, width, height,
        exclude_uid=exclude_uid, settings=settings,
    )
    if other is None:
        return proposed_x

    total = topology.total_width
    for distance, new_x in _push_options(proposed_x, width, other):
        if new_x >= 0 and new_x + width <= total:
            log.debug("pushed %.2f -> %.2f (by %.2f) off item %s",
                      proposed_x, new_x, distance, other.uid)
            return new_x

    log.warning("overlap with item %s at x=%.2f cannot be resolved inside [0, %.2f]",
                other.uid, proposed_x, total)
    return proposed_x
