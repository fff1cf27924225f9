"""
Product catalog: the merchandise footprints operators drop onto a frame.

Contents:
    Product            - id, name, category, width, height, colour, display type
    DEFAULT_CATALOG    - demo assortment (cleaning, storage, textile, hanging)
    get_product        - lookup by id
    by_category        - filter the default catalog
    generate_products  - random footprints for stress runs

Usage:
    from planogram.catalog import get_product
    bin_box = get_product("p5")
"""

import random
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class Product:
    """
    A catalog product.

    Attributes:
        id:           Catalog identifier.
        name:         Display name.
        category:     Assortment group.
        width:        Facing width (cm).
        height:       Facing height (cm).
        color:        Fill colour for renderers.
        display_type: "flat" (stands on a board) or "hanging" (on a hook rail).
    """
    id: str
    name: str
    category: str
    width: float
    height: float
    color: str = "#9ca3af"
    display_type: str = "flat"

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "category": self.category,
                "width": self.width, "height": self.height, "color": self.color,
                "display_type": self.display_type}

    @classmethod
    def from_dict(cls, d: dict) -> "Product":
        return cls(id=d["id"], name=d["name"], category=d["category"],
                   width=d["width"], height=d["height"],
                   color=d.get("color", "#9ca3af"),
                   display_type=d.get("display_type", "flat"))


DEFAULT_CATALOG: List[Product] = [
    Product("p1", "Grease-cutting dish soap", "cleaning", 10, 25, "#f97316"),
    Product("p2", "Lemon toilet cleaner", "cleaning", 12, 28, "#eab308"),
    Product("p3", "Multi-purpose cleaner", "cleaning", 15, 30, "#22c55e"),
    Product("p4", "Sponge scrubbers (3 pack)", "cleaning", 15, 10, "#fcd34d"),

    Product("p5", "Clear storage box (30L)", "storage", 40, 30, "#3b82f6"),
    Product("p6", "Drawer storage cabinet", "storage", 35, 45, "#6366f1"),
    Product("p7", "Desktop organiser", "storage", 20, 15, "#8b5cf6"),
    Product("p8", "Clothes hangers (10)", "storage", 42, 20, "#a855f7"),

    Product("p9", "Cotton bath towel", "textile", 30, 10, "#f472b6"),
    Product("p10", "Striped hand towel", "textile", 15, 5, "#fb7185"),
    Product("p11", "All-season cushion", "textile", 45, 45, "#f87171"),
    Product("p12", "Cotton bed sheet (1.8m)", "textile", 35, 8, "#ef4444"),

    Product("h1", "Steel spatula", "hanging", 8, 30, "#8b5cf6", "hanging"),
    Product("h2", "Kitchen towel", "hanging", 12, 20, "#a78bfa", "hanging"),
    Product("h3", "Small skimmer", "hanging", 10, 25, "#c084fc", "hanging"),
    Product("h4", "Key ring", "hanging", 6, 15, "#d8b4fe", "hanging"),
    Product("h5", "Storage pouch", "hanging", 15, 35, "#14b8a6", "hanging"),
]

_BY_ID = {p.id: p for p in DEFAULT_CATALOG}


def get_product(product_id: str) -> Product:
    """Default-catalog product with *product_id*; raises KeyError if unknown."""
    return _BY_ID[product_id]


def by_category(category: str) -> List[Product]:
    return [p for p in DEFAULT_CATALOG if p.category == category]


def generate_products(
    n: int,
    min_dim: float = 5.0,
    max_dim: float = 45.0,
    seed: Optional[int] = None,
) -> List[Product]:
    """
    Generate *n* products with width and height drawn from U[min_dim, max_dim].

    Args:
        n:       Number of products.
        min_dim: Minimum width/height.
        max_dim: Maximum width/height.
        seed:    Random seed for reproducibility.

    Returns:
        List of Product objects with ids "g0", "g1", ...
    """
    rng = random.Random(seed)
    return [
        Product(id=f"g{i}", name=f"Generated #{i}", category="generated",
                width=round(rng.uniform(min_dim, max_dim), 1),
                height=round(rng.uniform(min_dim, max_dim), 1))
        for i in range(n)
    ]
