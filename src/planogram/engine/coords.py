"""
Coordinate boundary between the two Y conventions.

External (items, drop requests, results): Y is measured downward from the
top of the frame to the item's top edge.

Internal (support math): heights are measured upward from the bin floor,
and an item is described by its bottom edge.

Both directions of the conversion live here and nowhere else.
"""

from planogram.core.models import Item


def to_floor_relative(y: float, height: float, bin_height: float) -> float:
    """Top-down Y of an item's top edge -> height of its bottom above the floor."""
    return bin_height - y - height


def to_top_down(bottom: float, height: float, bin_height: float) -> float:
    """Floor-relative bottom of an item -> top-down Y of its top edge."""
    return bin_height - bottom - height


def item_bottom(item: Item, bin_height: float) -> float:
    return to_floor_relative(item.y, item.height, bin_height)


def item_top(item: Item, bin_height: float) -> float:
    """Floor-relative plane an item offers to anything stacked on it."""
    return item_bottom(item, bin_height) + item.height
