"""
Item store: the set of placed items, keyed by uid.

The store is owned by the caller (usually a Planogram session). Engine
functions only read it: they take one snapshot at call entry and never
mutate it, so commits always happen after a PlacementResult is returned.

Iteration order is insertion order; the collision resolver relies on it
to decide which overlapping neighbour is handled first.
"""

import uuid
from typing import Dict, Iterator, Optional, Tuple

from planogram.core.models import InvalidInput, Item


class ItemStore:
    """Insertion-ordered collection of Items with unique uids."""

    __slots__ = ("_items",)

    def __init__(self, items=()) -> None:
        self._items: Dict[str, Item] = {}
        for item in items:
            self.add(item)

    # ── Queries ──────────────────────────────────────────────────────────

    def get(self, uid: str) -> Item:
        """Item with *uid*; raises KeyError when it is not stored."""
        return self._items[uid]

    def find(self, uid: str) -> Optional[Item]:
        return self._items.get(uid)

    def snapshot(self) -> Tuple[Item, ...]:
        """Frozen view of the current items (Item itself is immutable)."""
        return tuple(self._items.values())

    def in_bin(self, bin_index: int) -> Tuple[Item, ...]:
        return tuple(i for i in self._items.values() if i.bin_index == bin_index)

    def __contains__(self, uid: object) -> bool:
        return uid in self._items

    def __iter__(self) -> Iterator[Item]:
        return iter(tuple(self._items.values()))

    def __len__(self) -> int:
        return len(self._items)

    # ── Mutation (callers only, never the engine) ────────────────────────

    def add(self, item: Item) -> Item:
        if item.uid in self._items:
            raise InvalidInput(f"duplicate item uid {item.uid!r}")
        self._items[item.uid] = item
        return item

    def update(self, item: Item) -> Item:
        """Replace the stored item with the same uid, keeping its order slot."""
        if item.uid not in self._items:
            raise KeyError(item.uid)
        self._items[item.uid] = item
        return item

    def remove(self, uid: str) -> Item:
        return self._items.pop(uid)

    def clear(self) -> None:
        self._items.clear()

    # ── Cloning ──────────────────────────────────────────────────────────

    def copy(self) -> "ItemStore":
        """Independent store holding the same (immutable) items."""
        clone = ItemStore()
        clone._items = dict(self._items)
        return clone

    def new_uid(self) -> str:
        """Fresh short uid not yet used in this store."""
        while True:
            uid = uuid.uuid4().hex[:9]
            if uid not in self._items:
                return uid

    def __repr__(self) -> str:
        return f"ItemStore(items={len(self._items)})"
