"""
Planogram session: the single authority that commits placements.

Data flow:
  1. A drop or move request arrives in layout units (x global, y top-down).
  2. The session calls engine.place() against its current topology and a
     snapshot of its items.
  3. The returned PlacementResult is committed to the ItemStore and the
     request is logged as a StepRecord.

Frame edits (units and surfaces) replace the Topology with a new one;
items already on the frame are shifted with their unit but not
re-placed, so audit() is the way to see what an edit left floating.

Usage:
    session = Planogram.from_layout(default_layout())
    item = session.drop_product(get_product("p5"), x=10, y=100)
    session.move(item.uid, x=60, y=20)
    print(session.summary())
"""

import logging
import time
from dataclasses import dataclass
from typing import List, Optional

from planogram.catalog import Product
from planogram.config import (
    DEFAULT_LAYER_HEIGHTS,
    DEFAULT_LAYER_SPACING,
    DEFAULT_UNIT_WIDTH,
    TOP_CLEARANCE,
    PlacementSettings,
)
from planogram.core.item_store import ItemStore
from planogram.core.models import (
    Bin,
    InvalidInput,
    Item,
    PlacementResult,
    Surface,
    SurfaceKind,
    require_finite,
)
from planogram.core.topology import Topology
from planogram.engine.orchestrator import place
from planogram.engine.validator import LayoutIssue, audit_layout
from planogram.layout import LayoutConfig

log = logging.getLogger("planogram.session")


# ---------------------------------------------------------------------------
# StepRecord -- immutable log entry for each placement request
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class StepRecord:
    """
    Log of a single drop / move / remove request.

    Frozen so it can be safely examined without risk of mutation.
    """
    step: int
    action: str
    uid: str
    requested_x: Optional[float] = None
    requested_y: Optional[float] = None
    result: Optional[PlacementResult] = None
    elapsed_ms: float = 0.0

    @property
    def snapped(self) -> bool:
        return self.result is not None and self.result.snapped

    def to_dict(self) -> dict:
        d = {
            "step": self.step,
            "action": self.action,
            "uid": self.uid,
            "elapsed_ms": round(self.elapsed_ms, 3),
        }
        if self.requested_x is not None:
            d["requested"] = [self.requested_x, self.requested_y]
        if self.result is not None:
            d["result"] = self.result.to_dict()
        return d


# ---------------------------------------------------------------------------
# Planogram
# ---------------------------------------------------------------------------

class Planogram:
    """
    Owns one frame topology and the items placed on it.

    Public interface
    ~~~~~~~~~~~~~~~~
    drop(...) / drop_product(...)  -> Item      (new item, gravity + collision)
    move(uid, x, y)                -> Item      (re-place, ignoring itself)
    remove(uid)                    -> Item
    preview(...)                   -> PlacementResult (nothing committed)
    add_unit / remove_unit / set_unit_width
    add_surface / remove_surface / move_surface
    audit()                        -> List[LayoutIssue]
    get_step_log() / summary()
    """

    def __init__(
        self,
        topology: Topology,
        items: Optional[ItemStore] = None,
        settings: Optional[PlacementSettings] = None,
    ) -> None:
        self._topology = topology
        self._items = items if items is not None else ItemStore()
        self._settings = settings or PlacementSettings()
        self._step_log: List[StepRecord] = []
        self._step_counter: int = 0

    @classmethod
    def from_layout(cls, layout: LayoutConfig) -> "Planogram":
        return cls(layout.to_topology(), settings=layout.to_settings())

    # -- Public: state access ------------------------------------------------

    @property
    def topology(self) -> Topology:
        return self._topology

    @property
    def items(self) -> ItemStore:
        return self._items

    @property
    def settings(self) -> PlacementSettings:
        return self._settings

    # -- Public: placement ---------------------------------------------------

    def preview(
        self, width: float, height: float, x: float, y: float,
        exclude_uid: Optional[str] = None,
    ) -> PlacementResult:
        """Where an item would land, without committing anything."""
        return place(
            self._topology, self._items.snapshot(), x, y, width, height,
            exclude_uid=exclude_uid, settings=self._settings,
        )

    def drop(
        self,
        width: float,
        height: float,
        x: float,
        y: float,
        product_id: Optional[str] = None,
        uid: Optional[str] = None,
    ) -> Item:
        """
        Place a new item whose top-left corner was dropped at (x, y).

        Raises:
            InvalidInput: negative size, non-finite position, duplicate uid.
        """
        if uid is not None and uid in self._items:
            raise InvalidInput(f"duplicate item uid {uid!r}")
        t0 = time.perf_counter()
        result = self.preview(width, height, x, y)
        item = Item(
            uid=uid or self._items.new_uid(), bin_index=result.bin_index,
            x=result.x, y=result.y, width=width, height=height,
            product_id=product_id,
        )
        self._items.add(item)
        self._record("drop", item.uid, t0, x, y, result)
        return item

    def drop_product(self, product: Product, x: float, y: float,
                     uid: Optional[str] = None) -> Item:
        return self.drop(product.width, product.height, x, y,
                         product_id=product.id, uid=uid)

    def move(self, uid: str, x: float, y: float) -> Item:
        """
        Re-place an existing item; it never collides with or rests on itself.

        Raises:
            KeyError: no item with *uid*.
        """
        current = self._items.get(uid)
        t0 = time.perf_counter()
        result = self.preview(current.width, current.height, x, y, exclude_uid=uid)
        item = self._items.update(current.moved_to(result.bin_index, result.x, result.y))
        self._record("move", uid, t0, x, y, result)
        return item

    def remove(self, uid: str) -> Item:
        t0 = time.perf_counter()
        item = self._items.remove(uid)
        self._record("remove", uid, t0)
        return item

    # -- Public: frame edits -------------------------------------------------

    def add_unit(self, width: Optional[float] = None) -> int:
        """Append a unit with the default boards; returns its index."""
        if width is None:
            width = DEFAULT_UNIT_WIDTH
        unit = Bin.with_default_surfaces(width, DEFAULT_LAYER_HEIGHTS)
        self._topology = self._topology.with_bins(self._topology.bins + (unit,))
        return self._topology.bin_count - 1

    def remove_unit(self, bin_index: int) -> List[Item]:
        """
        Delete a unit and the items it owns; later units slide left.

        Returns:
            The removed items.

        Raises:
            InvalidInput: bad index, or the unit is the only one left.
        """
        removed_width = self._topology.width_of(bin_index)
        if self._topology.bin_count == 1:
            raise InvalidInput("cannot remove the last unit")

        removed: List[Item] = []
        for item in self._items:
            if item.bin_index == bin_index:
                removed.append(self._items.remove(item.uid))
            elif item.bin_index > bin_index:
                self._items.update(item.moved_to(
                    item.bin_index - 1, item.x - removed_width, item.y,
                ))

        bins = self._topology.bins
        self._topology = self._topology.with_bins(bins[:bin_index] + bins[bin_index + 1:])
        log.info("removed unit %d (%d items dropped)", bin_index, len(removed))
        return removed

    def set_unit_width(self, bin_index: int, width: float) -> None:
        """
        Resize a unit; items of the units to its right move with them.

        Items of the resized unit keep their X, so after a shrink their
        owning unit is re-derived from it like every other item's.
        """
        old_width = self._topology.width_of(bin_index)
        bins = list(self._topology.bins)
        bins[bin_index] = Bin(width=width, surfaces=bins[bin_index].surfaces)
        self._topology = self._topology.with_bins(bins)

        delta = self._topology.width_of(bin_index) - old_width
        for item in self._items:
            if item.bin_index < bin_index:
                continue
            x = item.x + delta if item.bin_index > bin_index else item.x
            owner, _ = self._topology.bin_at(x)
            if owner != item.bin_index or x != item.x:
                self._items.update(item.moved_to(owner, x, item.y))

    def add_surface(self, bin_index: int,
                    kind: SurfaceKind = SurfaceKind.SOLID) -> Surface:
        """
        Add a surface one layer-spacing above the unit's highest surface.

        Raises:
            InvalidInput: no room left below the top clearance.
        """
        surfaces = self._topology.surfaces_of(bin_index)
        highest = max((s.height for s in surfaces), default=0.0)
        ceiling = self._topology.bin_height - TOP_CLEARANCE
        height = min(highest + DEFAULT_LAYER_SPACING, ceiling)
        if height <= highest:
            raise InvalidInput(
                f"unit {bin_index}: no room for a surface above {highest} "
                f"(ceiling {ceiling})"
            )
        surface = Surface.rail(height) if SurfaceKind(kind) is SurfaceKind.RAIL \
            else Surface.solid(height)
        self._replace_surfaces(bin_index, surfaces + (surface,))
        return surface

    def remove_surface(self, bin_index: int, surface_index: int) -> bool:
        """Remove a surface; the base board is kept and False is returned."""
        surfaces = self._topology.surfaces_of(bin_index)
        target = self._surface_at(surfaces, surface_index)
        if target.is_base:
            log.info("unit %d: base surface cannot be removed", bin_index)
            return False
        self._replace_surfaces(
            bin_index, surfaces[:surface_index] + surfaces[surface_index + 1:],
        )
        return True

    def move_surface(self, bin_index: int, surface_index: int, height: float) -> bool:
        """
        Move a surface to a new height; the base board stays at 0.

        Raises:
            InvalidInput: height not in (0, bin_height].
        """
        surfaces = self._topology.surfaces_of(bin_index)
        target = self._surface_at(surfaces, surface_index)
        if target.is_base:
            return False
        height = require_finite("surface height", height)
        if not 0 < height <= self._topology.bin_height:
            raise InvalidInput(
                f"surface height must be in (0, {self._topology.bin_height}], got {height}"
            )
        moved = Surface(height=height, kind=target.kind, thickness=target.thickness)
        self._replace_surfaces(
            bin_index,
            surfaces[:surface_index] + (moved,) + surfaces[surface_index + 1:],
        )
        return True

    # -- Public: logs & summary ----------------------------------------------

    def audit(self) -> List[LayoutIssue]:
        return audit_layout(self._topology, self._items.snapshot(), self._settings)

    def get_step_log(self) -> List[StepRecord]:
        """Return a copy of the full step log."""
        return list(self._step_log)

    def get_latest_step(self) -> Optional[StepRecord]:
        return self._step_log[-1] if self._step_log else None

    def summary(self) -> dict:
        """
        Compute a summary dict of the session.

        Keys: units, total_width, bin_height, items, items_per_unit,
              requests, snapped, issues, computation_time_ms.
        """
        placements = [r for r in self._step_log if r.result is not None]
        per_unit = [0] * self._topology.bin_count
        for item in self._items:
            if 0 <= item.bin_index < len(per_unit):
                per_unit[item.bin_index] += 1

        return {
            "units": self._topology.bin_count,
            "total_width": self._topology.total_width,
            "bin_height": self._topology.bin_height,
            "items": len(self._items),
            "items_per_unit": per_unit,
            "requests": len(self._step_log),
            "snapped": sum(1 for r in placements if r.snapped),
            "issues": len(self.audit()),
            "computation_time_ms": round(sum(r.elapsed_ms for r in self._step_log), 2),
        }

    # -- Private helpers -----------------------------------------------------

    @staticmethod
    def _surface_at(surfaces, surface_index: int) -> Surface:
        if not 0 <= surface_index < len(surfaces):
            raise InvalidInput(
                f"surface index {surface_index} out of range (0..{len(surfaces) - 1})"
            )
        return surfaces[surface_index]

    def _replace_surfaces(self, bin_index: int, surfaces) -> None:
        bins = list(self._topology.bins)
        bins[bin_index] = bins[bin_index].with_surfaces(surfaces)
        self._topology = self._topology.with_bins(bins)

    def _record(self, action: str, uid: str, t0: float,
                x: Optional[float] = None, y: Optional[float] = None,
                result: Optional[PlacementResult] = None) -> None:
        elapsed = (time.perf_counter() - t0) * 1000
        self._step_log.append(StepRecord(
            step=self._step_counter, action=action, uid=uid,
            requested_x=x, requested_y=y, result=result, elapsed_ms=elapsed,
        ))
        self._step_counter += 1
