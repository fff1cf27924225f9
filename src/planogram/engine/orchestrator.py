"""
Placement orchestrator: gravity plus collision for one drop or move.

Data flow:
  1. Clamp the proposed X into the layout (when the item fits at all).
  2. Pick the unit under the item's left edge (its surfaces drive gravity).
  3. Convert the top-down Y into a floor-relative bottom.
  4. Ask the surface finder for the closest support; snap to it, or keep
     the original Y when nothing is within tolerance.
  5. Ask the collision resolver for a non-overlapping X at that Y.
  6. Re-derive the owning unit from the final X.

The orchestrator is a pure function of its inputs: it never mutates the
topology or the items, and the caller decides whether to commit.
"""

import logging
from typing import Iterable, Optional

from planogram.config import PlacementSettings
from planogram.core.models import (
    Item,
    PlacementResult,
    require_finite,
    require_non_negative,
)
from planogram.core.topology import Topology
from planogram.engine.collision import resolve_horizontal
from planogram.engine.coords import to_floor_relative, to_top_down
from planogram.engine.surface_finder import find_best_support

log = logging.getLogger("planogram.engine.orchestrator")


def clamp_to_layout(x: float, width: float, total_width: float) -> float:
    """Keep [x, x+width) inside [0, total_width]; too-wide items pin to 0."""
    max_x = total_width - width
    if max_x <= 0:
        return 0.0
    return min(max(x, 0.0), max_x)


def place(
    topology: Topology,
    items: Iterable[Item],
    global_x: float,
    global_y: float,
    width: float,
    height: float,
    exclude_uid: Optional[str] = None,
    settings: Optional[PlacementSettings] = None,
) -> PlacementResult:
    """
    Apply gravity and collision resolution to a proposed item position.

    Args:
        topology:    Frame description (read-only for the call).
        items:       Currently placed items; snapshotted at entry.
        global_x:    Proposed global left edge.
        global_y:    Proposed top-down Y of the item's top edge.
        width:       Item width (>= 0).
        height:      Item height (>= 0).
        exclude_uid: uid of the item being moved, if any.
        settings:    Tolerances; defaults to the module constants.

    Returns:
        PlacementResult with the owning unit, global X, top-down Y, and the
        support that was snapped to (None for a free-floating placement).

    Raises:
        InvalidInput: non-finite coordinates or negative sizes.
    """
    global_x = require_finite("global x", global_x)
    global_y = require_finite("global y", global_y)
    width = require_non_negative("item width", width)
    height = require_non_negative("item height", height)
    snapshot = tuple(items)
    bin_height = topology.bin_height

    x = clamp_to_layout(global_x, width, topology.total_width)
    bin_index, _ = topology.bin_at(x)

    bottom = to_floor_relative(global_y, height, bin_height)
    support = find_best_support(
        topology, snapshot, bin_index, bottom, x, width,
        exclude_uid=exclude_uid, settings=settings,
    )
    y = global_y if support is None else to_top_down(support.top_y, height, bin_height)

    final_x = resolve_horizontal(
        topology, snapshot, x, y, width, height,
        exclude_uid=exclude_uid, settings=settings,
    )
    final_bin, _ = topology.bin_at(final_x)

    log.debug("place (%.2f, %.2f) %gx%g -> bin %d (%.2f, %.2f)",
              global_x, global_y, width, height, final_bin, final_x, y)
    return PlacementResult(bin_index=final_bin, x=final_x, y=y, support=support)


def place_item(
    topology: Topology,
    items: Iterable[Item],
    item: Item,
    global_x: float,
    global_y: float,
    settings: Optional[PlacementSettings] = None,
) -> PlacementResult:
    """Move an existing *item* to a proposed position, ignoring itself."""
    return place(
        topology, items, global_x, global_y, item.width, item.height,
        exclude_uid=item.uid, settings=settings,
    )
