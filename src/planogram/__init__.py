"""
planogram: gravity and collision placement for shelf planograms.

Public API:
    from planogram.config import PlacementSettings, TOLERANCE_VERTICAL
    from planogram.core import Bin, Surface, Item, ItemStore, Topology, InvalidInput
    from planogram.engine import place, find_best_support, resolve_horizontal
    from planogram.engine import audit_layout, validate_layout
    from planogram.layout import load_layout, default_layout
    from planogram.session import Planogram
    from planogram.catalog import get_product
"""

from planogram.core import (
    Bin,
    InvalidInput,
    Item,
    ItemStore,
    PlacementResult,
    Support,
    Surface,
    SurfaceKind,
    Topology,
)
from planogram.engine import place

__all__ = [
    "Bin",
    "InvalidInput",
    "Item",
    "ItemStore",
    "PlacementResult",
    "Support",
    "Surface",
    "SurfaceKind",
    "Topology",
    "place",
]
