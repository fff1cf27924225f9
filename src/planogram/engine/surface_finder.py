"""
Surface finder: where does an item come to rest under gravity?

Candidates are gathered in a fixed order:
  1. the surfaces of the target bin (board tops, rail bands)
  2. the tops of every other placed item that shares enough width

Each candidate must lie within the vertical tolerance of the item's
bottom. The closest one wins; on an exact tie the earlier candidate is
kept, so shelves take precedence over item tops.

All heights here are floor-relative (see engine.coords).
"""

import logging
from typing import Iterable, Optional

from planogram.config import DEFAULT_SETTINGS, PlacementSettings
from planogram.core.models import (
    Item,
    Support,
    SupportKind,
    require_finite,
    require_non_negative,
)
from planogram.core.topology import Topology
from planogram.engine.coords import item_top
from planogram.engine.geometry import overlap_length

log = logging.getLogger("planogram.engine.surface_finder")


def stacking_overlap(x: float, width: float, other: Item,
                     ratio: float = DEFAULT_SETTINGS.stack_overlap_ratio) -> bool:
    """
    True if a footprint [x, x+width) shares enough width with *other* to
    rest on it: strictly more than *ratio* of the narrower of the two.
    """
    shared = overlap_length(x, width, other.x, other.width)
    return shared > ratio * min(width, other.width)


def find_best_support(
    topology: Topology,
    items: Iterable[Item],
    bin_index: int,
    item_bottom_y: float,
    item_x: float,
    item_width: float,
    exclude_uid: Optional[str] = None,
    settings: Optional[PlacementSettings] = None,
) -> Optional[Support]:
    """
    Closest support within tolerance of *item_bottom_y*, or None.

    Args:
        topology:      Frame description (read-only).
        items:         Placed items; read once at entry.
        bin_index:     Unit whose surfaces are considered.
        item_bottom_y: Floor-relative bottom of the item being placed.
        item_x:        Global left edge of the item.
        item_width:    Width of the item.
        exclude_uid:   The item being moved, so it never supports itself.
        settings:      Tolerances; defaults to the module constants.

    Returns:
        Support describing the winning plane, or None if nothing is close.

    Raises:
        InvalidInput: bad bin index, non-finite input, negative width.
    """
    settings = settings or DEFAULT_SETTINGS
    surfaces = topology.surfaces_of(bin_index)
    item_bottom_y = require_finite("item bottom", item_bottom_y)
    item_x = require_finite("item x", item_x)
    item_width = require_non_negative("item width", item_width)
    snapshot = tuple(items)

    best: Optional[Support] = None
    best_distance = settings.tolerance_vertical

    # ── 1. Shelf surfaces of the target bin ──────────────────────────────
    for surface in surfaces:
        distance = abs(item_bottom_y - surface.top)
        if distance < best_distance:
            best_distance = distance
            best = Support(
                top_y=surface.top, bin_index=bin_index,
                kind=SupportKind.SURFACE, distance=distance, surface=surface,
            )

    # ── 2. Tops of other items ───────────────────────────────────────────
    for other in snapshot:
        if exclude_uid is not None and other.uid == exclude_uid:
            continue
        if not stacking_overlap(item_x, item_width, other, settings.stack_overlap_ratio):
            continue
        top = item_top(other, topology.bin_height)
        distance = abs(item_bottom_y - top)
        if distance < best_distance:
            best_distance = distance
            best = Support(
                top_y=top, bin_index=other.bin_index,
                kind=SupportKind.ITEM, distance=distance, item_uid=other.uid,
            )

    if best is None:
        log.debug("no support within %.1f of bottom=%.2f in bin %d",
                  settings.tolerance_vertical, item_bottom_y, bin_index)
    else:
        log.debug("support %s at %.2f (distance %.2f) for bottom=%.2f",
                  best.kind.value, best.top_y, best.distance, item_bottom_y)
    return best
