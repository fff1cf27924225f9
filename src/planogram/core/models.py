"""Core data models for planogram placement."""

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Tuple

from planogram.config import BASE_THICKNESS, RAIL_THICKNESS, SHELF_THICKNESS


class InvalidInput(ValueError):
    """A caller broke the engine's contract (negative size, bad index, ...)."""


def require_finite(name: str, value: float) -> float:
    if not isinstance(value, (int, float)) or not math.isfinite(value):
        raise InvalidInput(f"{name} must be a finite number, got {value!r}")
    return float(value)


def require_non_negative(name: str, value: float) -> float:
    value = require_finite(name, value)
    if value < 0:
        raise InvalidInput(f"{name} must be >= 0, got {value}")
    return value


# ─────────────────────────────────────────────────────────────────────────────
# Frame: surfaces and bins
# ─────────────────────────────────────────────────────────────────────────────

class SurfaceKind(str, Enum):
    """How a surface carries merchandise."""

    SOLID = "solid"  # shelf board, items rest on its top face
    RAIL = "rail"    # hook rail, items hang from the band itself


def _surface_kind(value) -> SurfaceKind:
    try:
        return SurfaceKind(value)
    except ValueError as e:
        raise InvalidInput(f"unknown surface kind {value!r}") from e


@dataclass(frozen=True)
class Surface:
    """A horizontal support inside one bin, measured from the bin floor."""

    height: float
    kind: SurfaceKind = SurfaceKind.SOLID
    thickness: float = SHELF_THICKNESS

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", _surface_kind(self.kind))
        object.__setattr__(self, "height", require_non_negative("surface height", self.height))
        object.__setattr__(
            self, "thickness", require_non_negative("surface thickness", self.thickness),
        )

    @classmethod
    def solid(cls, height: float, thickness: Optional[float] = None) -> "Surface":
        """Shelf board; the base board at height 0 is thicker by default."""
        if thickness is None:
            thickness = BASE_THICKNESS if height == 0 else SHELF_THICKNESS
        return cls(height=height, kind=SurfaceKind.SOLID, thickness=thickness)

    @classmethod
    def rail(cls, height: float) -> "Surface":
        return cls(height=height, kind=SurfaceKind.RAIL, thickness=RAIL_THICKNESS)

    @property
    def top(self) -> float:
        """Support plane: exposed top for boards, the band itself for rails."""
        if self.kind is SurfaceKind.RAIL:
            return self.height
        return self.height + self.thickness

    @property
    def is_base(self) -> bool:
        return self.height == 0

    def to_dict(self) -> dict:
        return {"height": self.height, "kind": self.kind.value,
                "thickness": self.thickness}

    @classmethod
    def from_dict(cls, d: dict) -> "Surface":
        kind = _surface_kind(d.get("kind", SurfaceKind.SOLID))
        if kind is SurfaceKind.RAIL:
            return cls.rail(d["height"])
        return cls.solid(d["height"], d.get("thickness"))


@dataclass(frozen=True)
class Bin:
    """One shelving unit: a width and its ordered surfaces."""

    width: float
    surfaces: Tuple[Surface, ...] = ()

    def __post_init__(self) -> None:
        width = require_finite("bin width", self.width)
        if width <= 0:
            raise InvalidInput(f"bin width must be > 0, got {width}")
        object.__setattr__(self, "width", width)
        object.__setattr__(self, "surfaces", tuple(self.surfaces))

    @classmethod
    def with_default_surfaces(cls, width: float, heights=(0.0,)) -> "Bin":
        """Unit with solid boards at *heights*; a base board is always added."""
        heights = sorted(set(float(h) for h in heights) | {0.0})
        return cls(width=width, surfaces=tuple(Surface.solid(h) for h in heights))

    @property
    def base(self) -> Optional[Surface]:
        for surface in self.surfaces:
            if surface.is_base:
                return surface
        return None

    def with_surfaces(self, surfaces) -> "Bin":
        return replace(self, surfaces=tuple(surfaces))

    def to_dict(self) -> dict:
        return {"width": self.width,
                "surfaces": [s.to_dict() for s in self.surfaces]}


# ─────────────────────────────────────────────────────────────────────────────
# Items
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Item:
    """
    A placed merchandise rectangle.

    Attributes:
        uid:        Unique, stable identifier.
        bin_index:  Owning unit.
        x:          Global left edge (from the start of the first unit).
        y:          Top-down distance from the frame top to the item's top edge.
        width:      Horizontal extent.
        height:     Vertical extent.
        product_id: Catalog product this item shows, if any.
    """
    uid: str
    bin_index: int
    x: float
    y: float
    width: float
    height: float
    product_id: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", require_finite("item x", self.x))
        object.__setattr__(self, "y", require_finite("item y", self.y))
        object.__setattr__(self, "width", require_non_negative("item width", self.width))
        object.__setattr__(self, "height", require_non_negative("item height", self.height))

    @property
    def right(self) -> float:
        return self.x + self.width

    def moved_to(self, bin_index: int, x: float, y: float) -> "Item":
        return replace(self, bin_index=bin_index, x=x, y=y)

    def to_dict(self) -> dict:
        return {"uid": self.uid, "bin_index": self.bin_index,
                "position": [self.x, self.y], "size": [self.width, self.height],
                "product_id": self.product_id}

    def __repr__(self) -> str:
        return (
            f"Item({self.uid}, bin={self.bin_index}, "
            f"x={self.x:.1f}, y={self.y:.1f}, {self.width:g}x{self.height:g})"
        )


# ─────────────────────────────────────────────────────────────────────────────
# Engine results
# ─────────────────────────────────────────────────────────────────────────────

class SupportKind(str, Enum):
    SURFACE = "surface"
    ITEM = "item"


@dataclass(frozen=True)
class Support:
    """
    What a placement landed on.

    ``top_y`` is floor-relative: the height of the support plane above the
    bin floor, i.e. where the landed item's bottom edge ends up.
    """
    top_y: float
    bin_index: int
    kind: SupportKind
    distance: float
    surface: Optional[Surface] = None
    item_uid: Optional[str] = None

    def to_dict(self) -> dict:
        d = {"top_y": self.top_y, "bin_index": self.bin_index,
             "kind": self.kind.value, "distance": self.distance}
        if self.item_uid is not None:
            d["item_uid"] = self.item_uid
        return d


@dataclass(frozen=True)
class PlacementResult:
    """
    Validated outcome of one place() call. Not persisted by the engine.

    ``x`` is global and ``y`` uses the top-down item convention, so the
    caller can commit the result to an Item unchanged.
    """
    bin_index: int
    x: float
    y: float
    support: Optional[Support] = field(default=None, compare=False)

    @property
    def snapped(self) -> bool:
        return self.support is not None

    def to_dict(self) -> dict:
        return {"bin_index": self.bin_index, "x": self.x, "y": self.y,
                "support": self.support.to_dict() if self.support else None}
