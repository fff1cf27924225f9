"""Core data model: frame topology, items, and engine result types."""

from .models import (
    Bin,
    InvalidInput,
    Item,
    PlacementResult,
    Support,
    SupportKind,
    Surface,
    SurfaceKind,
)
from .item_store import ItemStore
from .topology import Topology

__all__ = [
    "Bin",
    "InvalidInput",
    "Item",
    "ItemStore",
    "PlacementResult",
    "Support",
    "SupportKind",
    "Surface",
    "SurfaceKind",
    "Topology",
]
