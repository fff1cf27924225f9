"""
Layout files: YAML description of a planogram frame.

A layout file lists the units left to right, each with its own surfaces,
plus the global frame height and optional placement tolerances:

    total_height: 200
    default_unit_width: 120
    units:
      - surfaces:
          - {height: 0}
          - {height: 40}
          - {height: 120, kind: rail}
      - width: 90
    placement:
      tolerance_vertical: 30

Units without a ``surfaces`` list get the default boards at
0/40/80/120/160. Every unit must carry exactly one surface at height 0.

Usage:
    layout = load_layout("frames/aisle3.yaml")
    topology = layout.to_topology()
    settings = layout.to_settings()
"""

from pathlib import Path
from typing import List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from planogram.config import (
    BAND_TOLERANCE,
    DEFAULT_LAYER_HEIGHTS,
    DEFAULT_TOTAL_HEIGHT,
    DEFAULT_UNIT_COUNT,
    DEFAULT_UNIT_WIDTH,
    STACK_OVERLAP_RATIO,
    TOLERANCE_VERTICAL,
    PlacementSettings,
)
from planogram.core.models import Bin, Surface, SurfaceKind
from planogram.core.topology import Topology


class LayoutConfigError(Exception):
    """A layout (or operations) file could not be read or is invalid."""


# ─────────────────────────────────────────────────────────────────────────────
# Schema
# ─────────────────────────────────────────────────────────────────────────────

class SurfaceSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    height: float = Field(ge=0)
    kind: SurfaceKind = SurfaceKind.SOLID
    thickness: Optional[float] = Field(default=None, ge=0)

    def to_surface(self) -> Surface:
        if self.kind is SurfaceKind.RAIL:
            return Surface.rail(self.height)
        return Surface.solid(self.height, self.thickness)


def _default_surfaces() -> List[SurfaceSpec]:
    return [SurfaceSpec(height=h) for h in DEFAULT_LAYER_HEIGHTS]


class UnitSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    width: Optional[float] = Field(default=None, gt=0)
    surfaces: List[SurfaceSpec] = Field(default_factory=_default_surfaces)

    @model_validator(mode="after")
    def _one_base(self) -> "UnitSpec":
        bases = sum(1 for s in self.surfaces if s.height == 0)
        if bases != 1:
            raise ValueError(f"a unit needs exactly one surface at height 0, got {bases}")
        return self


class PlacementSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    tolerance_vertical: float = Field(default=TOLERANCE_VERTICAL, gt=0)
    stack_overlap_ratio: float = Field(default=STACK_OVERLAP_RATIO, ge=0, le=1)
    band_tolerance: float = Field(default=BAND_TOLERANCE, ge=0)

    def to_settings(self) -> PlacementSettings:
        return PlacementSettings(**self.model_dump())


class LayoutConfig(BaseModel):
    """Validated frame description; the engine's configuration input."""

    model_config = ConfigDict(extra="forbid")

    total_height: float = Field(default=DEFAULT_TOTAL_HEIGHT, gt=0)
    default_unit_width: float = Field(default=DEFAULT_UNIT_WIDTH, gt=0)
    units: List[UnitSpec] = Field(min_length=1)
    placement: PlacementSpec = Field(default_factory=PlacementSpec)

    @model_validator(mode="after")
    def _surfaces_inside_frame(self) -> "LayoutConfig":
        for index, unit in enumerate(self.units):
            for surface in unit.surfaces:
                if surface.height > self.total_height:
                    raise ValueError(
                        f"unit {index}: surface at {surface.height} is above "
                        f"total_height {self.total_height}"
                    )
        return self

    def to_topology(self) -> Topology:
        bins = [
            Bin(width=unit.width or self.default_unit_width,
                surfaces=tuple(s.to_surface() for s in unit.surfaces))
            for unit in self.units
        ]
        return Topology(bins, self.total_height)

    def to_settings(self) -> PlacementSettings:
        return self.placement.to_settings()


# ─────────────────────────────────────────────────────────────────────────────
# Loading
# ─────────────────────────────────────────────────────────────────────────────

def default_layout(unit_count: int = DEFAULT_UNIT_COUNT) -> LayoutConfig:
    """The stock frame: *unit_count* default-width units, boards every 40."""
    return LayoutConfig(units=[UnitSpec() for _ in range(unit_count)])


def parse_layout(data: dict, source: str = "<layout>") -> LayoutConfig:
    try:
        return LayoutConfig.model_validate(data)
    except ValidationError as e:
        raise LayoutConfigError(f"{source}: invalid layout\n{e}") from e


def read_yaml(path: Union[str, Path]) -> object:
    """Parse a YAML file, mapping I/O and syntax errors to LayoutConfigError."""
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as fh:
            return yaml.safe_load(fh)
    except OSError as e:
        raise LayoutConfigError(f"{path}: cannot read file ({e})") from e
    except yaml.YAMLError as e:
        raise LayoutConfigError(f"{path}: invalid YAML ({e})") from e


def load_layout(path: Union[str, Path]) -> LayoutConfig:
    data = read_yaml(path)
    if not isinstance(data, dict):
        raise LayoutConfigError(f"{path}: expected a mapping at the top level")
    return parse_layout(data, source=str(path))
