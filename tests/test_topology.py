"""
Tests for the frame model: surfaces, bins, and the topology lookups.

Tests cover:
- Support planes of solid boards and hook rails
- bin_at() half-open intervals, extrapolation past the last unit
- Prefix-sum origins for units of unequal width
- InvalidInput on empty topologies, bad widths, bad indices
"""

import math

import pytest

from planogram.config import BASE_THICKNESS, SHELF_THICKNESS
from planogram.core import Bin, InvalidInput, Surface, SurfaceKind, Topology


# ---------------------------------------------------------------------------
# 1. Surfaces
# ---------------------------------------------------------------------------

class TestSurface:
    def test_solid_top_includes_thickness(self):
        assert Surface.solid(40.0).top == pytest.approx(40.0 + SHELF_THICKNESS)

    def test_base_board_is_thicker(self):
        base = Surface.solid(0.0)
        assert base.is_base
        assert base.top == pytest.approx(BASE_THICKNESS)

    def test_rail_top_is_its_own_height(self):
        rail = Surface.rail(120.0)
        assert rail.kind is SurfaceKind.RAIL
        assert rail.top == pytest.approx(120.0)

    def test_kind_accepts_plain_string(self):
        assert Surface(height=10.0, kind="rail").kind is SurfaceKind.RAIL

    def test_unknown_kind_rejected(self):
        with pytest.raises(InvalidInput):
            Surface(height=10.0, kind="pegboard")
        with pytest.raises(InvalidInput):
            Surface.from_dict({"height": 10.0, "kind": "pegboard"})

    def test_negative_height_rejected(self):
        with pytest.raises(InvalidInput):
            Surface.solid(-1.0)

    def test_dict_round_trip_keeps_kind(self):
        rail = Surface.rail(90.0)
        assert Surface.from_dict(rail.to_dict()) == rail


# ---------------------------------------------------------------------------
# 2. Bins
# ---------------------------------------------------------------------------

class TestBin:
    def test_default_surfaces_always_include_base(self):
        unit = Bin.with_default_surfaces(120.0, (40.0, 80.0))
        assert [s.height for s in unit.surfaces] == [0.0, 40.0, 80.0]
        assert unit.base is not None and unit.base.height == 0.0

    def test_surface_list_is_frozen_to_tuple(self):
        unit = Bin(width=50.0, surfaces=[Surface.solid(0.0)])
        assert isinstance(unit.surfaces, tuple)

    @pytest.mark.parametrize("width", [0.0, -10.0, math.nan, math.inf])
    def test_non_positive_or_non_finite_width_rejected(self, width):
        with pytest.raises(InvalidInput):
            Bin(width=width)

    def test_bin_without_surfaces_has_no_base(self):
        assert Bin(width=30.0).base is None


# ---------------------------------------------------------------------------
# 3. Topology lookups
# ---------------------------------------------------------------------------

class TestTopology:
    @pytest.fixture
    def uneven(self):
        return Topology([Bin(width=100.0), Bin(width=50.0), Bin(width=80.0)], 200.0)

    def test_totals(self, uneven):
        assert uneven.bin_count == 3
        assert uneven.total_width == pytest.approx(230.0)
        assert uneven.bin_height == pytest.approx(200.0)

    def test_origins_are_prefix_sums(self, uneven):
        assert uneven.origin_of(0) == pytest.approx(0.0)
        assert uneven.origin_of(1) == pytest.approx(100.0)
        assert uneven.origin_of(2) == pytest.approx(150.0)

    def test_width_of(self, uneven):
        assert uneven.width_of(1) == pytest.approx(50.0)

    @pytest.mark.parametrize("x, expected_bin, expected_local", [
        (0.0, 0, 0.0),
        (99.9, 0, 99.9),
        (100.0, 1, 0.0),      # half-open: the boundary belongs to the next unit
        (149.0, 1, 49.0),
        (150.0, 2, 0.0),
        (229.0, 2, 79.0),
    ])
    def test_bin_at_half_open_intervals(self, uneven, x, expected_bin, expected_local):
        index, local_x = uneven.bin_at(x)
        assert index == expected_bin
        assert local_x == pytest.approx(expected_local)

    def test_bin_at_past_the_end_extrapolates(self, uneven):
        index, local_x = uneven.bin_at(300.0)
        assert index == 2
        assert local_x == pytest.approx(150.0)  # not clamped to the unit width

    def test_bin_at_negative_maps_to_first_unit(self, uneven):
        index, local_x = uneven.bin_at(-5.0)
        assert index == 0
        assert local_x == pytest.approx(-5.0)

    def test_local_to_global(self, uneven):
        assert uneven.local_to_global(2, 10.0) == pytest.approx(160.0)

    def test_surfaces_of(self, default_frame):
        assert len(default_frame.surfaces_of(1)) == 5

    @pytest.mark.parametrize("index", [-1, 2, 99])
    def test_index_out_of_range(self, default_frame, index):
        with pytest.raises(InvalidInput):
            default_frame.surfaces_of(index)
        with pytest.raises(InvalidInput):
            default_frame.width_of(index)

    def test_empty_topology_rejected(self):
        with pytest.raises(InvalidInput):
            Topology([], 200.0)

    def test_non_positive_bin_height_rejected(self):
        with pytest.raises(InvalidInput):
            Topology([Bin(width=10.0)], 0.0)

    def test_non_finite_lookup_rejected(self, default_frame):
        with pytest.raises(InvalidInput):
            default_frame.bin_at(math.nan)

    def test_with_bins_returns_new_topology(self, default_frame):
        wider = default_frame.with_bins(default_frame.bins + (Bin(width=60.0),))
        assert wider.bin_count == 3
        assert default_frame.bin_count == 2
        assert wider.bin_height == default_frame.bin_height

    def test_equality(self, default_frame):
        assert default_frame == default_frame.with_bins(default_frame.bins)
        assert default_frame != default_frame.with_bin_height(150.0)
