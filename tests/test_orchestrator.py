"""
Tests for place(): gravity + collision for one drop or move.

Tests cover:
- Concrete shelf scenario (snap at 45, no shelf snap at 5)
- Concrete collision scenario (two 20-wide items in a 40-wide unit)
- No spurious snapping far from any support
- Stacking with and without 30% overlap
- Idempotence on a committed result
- Results stay inside [0, total_width] whenever that is possible
- Unit re-derivation after a push across a unit boundary
- Irregular but legal input, and InvalidInput
"""

import math

import pytest

from planogram.core import Bin, InvalidInput, ItemStore, SupportKind, Surface, Topology
from planogram.engine.coords import to_floor_relative, to_top_down
from planogram.engine.orchestrator import clamp_to_layout, place, place_item

H = 200.0


def y_for_bottom(bottom, height):
    return to_top_down(bottom, height, H)


# ---------------------------------------------------------------------------
# 1. Gravity
# ---------------------------------------------------------------------------

class TestGravity:
    def test_snaps_to_shelf_top_within_tolerance(self, shelf_at_40):
        result = place(shelf_at_40, [], 10.0, y_for_bottom(45.0, 10.0), 20.0, 10.0)
        assert to_floor_relative(result.y, 10.0, H) == pytest.approx(40.0)
        assert result.support.kind is SupportKind.SURFACE

    def test_far_below_shelf_lands_on_floor_instead(self, shelf_at_40):
        result = place(shelf_at_40, [], 10.0, y_for_bottom(5.0, 10.0), 20.0, 10.0)
        assert to_floor_relative(result.y, 10.0, H) == pytest.approx(0.0)

    def test_free_floating_keeps_original_y(self, flat_floor):
        y = y_for_bottom(100.0, 10.0)
        result = place(flat_floor, [], 10.0, y, 20.0, 10.0)
        assert result.y == y
        assert result.support is None
        assert not result.snapped

    def test_rail_hanging(self):
        topo = Topology([Bin(width=80.0, surfaces=(Surface.solid(0.0), Surface.rail(150.0)))], H)
        result = place(topo, [], 0.0, y_for_bottom(140.0, 25.0), 10.0, 25.0)
        assert to_floor_relative(result.y, 25.0, H) == pytest.approx(150.0)

    def test_default_frame_board_thickness(self, default_frame):
        # Board at 40 is 3 thick: items rest at 43.
        result = place(default_frame, [], 10.0, y_for_bottom(50.0, 30.0), 40.0, 30.0)
        assert result.y == pytest.approx(127.0)
        assert result.bin_index == 0


# ---------------------------------------------------------------------------
# 2. Stacking
# ---------------------------------------------------------------------------

class TestStacking:
    def test_rests_on_item_with_enough_overlap(self, flat_floor, resting):
        a = resting("a", x=0.0, width=20.0, height=10.0)
        result = place(flat_floor, [a], 2.0, y_for_bottom(18.0, 10.0), 20.0, 10.0)
        assert to_floor_relative(result.y, 10.0, H) == pytest.approx(10.0)
        assert result.support.item_uid == "a"
        assert result.x == pytest.approx(2.0)

    def test_does_not_rest_on_item_with_little_overlap(self, flat_floor, resting):
        a = resting("a", x=0.0, width=20.0, height=10.0)
        result = place(flat_floor, [a], 15.0, y_for_bottom(18.0, 10.0), 20.0, 10.0)
        assert result.support.kind is SupportKind.SURFACE
        assert to_floor_relative(result.y, 10.0, H) == pytest.approx(0.0)
        # On the floor it now shares a's band and is pushed clear of it.
        assert result.x == pytest.approx(20.0)

    def test_moved_item_does_not_rest_on_itself(self, flat_floor, resting):
        a = resting("a", x=0.0, width=20.0, height=10.0)
        result = place_item(flat_floor, [a], a, 0.0, y_for_bottom(12.0, 10.0))
        assert to_floor_relative(result.y, 10.0, H) == pytest.approx(0.0)
        assert result.x == pytest.approx(0.0)


# ---------------------------------------------------------------------------
# 3. Collision
# ---------------------------------------------------------------------------

class TestCollision:
    def test_two_items_in_forty_wide_unit(self, narrow_bin, resting):
        a = resting("a", x=0.0, width=20.0, height=10.0)
        result = place(narrow_bin, [a], 10.0, y_for_bottom(0.0, 10.0), 20.0, 10.0)
        assert result.x == pytest.approx(20.0)
        assert result.bin_index == 0

    def test_push_across_unit_boundary_updates_bin(self, resting):
        floor = (Surface.solid(0.0, thickness=0.0),)
        topo = Topology([Bin(width=30.0, surfaces=floor), Bin(width=30.0, surfaces=floor)], H)
        a = resting("a", x=10.0, width=15.0, height=10.0)
        result = place(topo, [a], 20.0, y_for_bottom(0.0, 10.0), 10.0, 10.0)
        assert result.x == pytest.approx(25.0)
        assert result.bin_index == 0  # 25 is still inside [0, 30)

        result = place(topo, [a], 22.0, y_for_bottom(0.0, 10.0), 10.0, 10.0)
        assert result.x == pytest.approx(25.0)

        b = resting("b", x=20.0, width=15.0, height=10.0)
        result = place(topo, [b], 28.0, y_for_bottom(0.0, 10.0), 10.0, 10.0)
        assert result.x == pytest.approx(35.0)
        assert result.bin_index == 1


# ---------------------------------------------------------------------------
# 4. Properties
# ---------------------------------------------------------------------------

class TestProperties:
    @pytest.mark.parametrize("x, bottom", [(5.0, 12.0), (50.0, 3.0), (70.0, 100.0)])
    def test_idempotent_on_its_own_result(self, shelf_at_40, resting, x, bottom):
        store = ItemStore([resting("a", x=0.0, width=20.0, height=10.0)])
        first = place(shelf_at_40, store, x, y_for_bottom(bottom, 10.0), 20.0, 10.0)
        second = place(shelf_at_40, store, first.x, first.y, 20.0, 10.0)
        assert second == first

    @pytest.mark.parametrize("x", [-50.0, -0.1, 95.0, 500.0])
    def test_drop_stays_inside_layout(self, flat_floor, x):
        result = place(flat_floor, [], x, y_for_bottom(0.0, 10.0), 20.0, 10.0)
        assert 0.0 <= result.x
        assert result.x + 20.0 <= flat_floor.total_width

    def test_does_not_mutate_inputs(self, narrow_bin, resting):
        store = ItemStore([resting("a", x=0.0, width=20.0, height=10.0)])
        before = store.snapshot()
        place(narrow_bin, store, 10.0, y_for_bottom(0.0, 10.0), 20.0, 10.0)
        assert store.snapshot() == before

    def test_clamp_helper(self):
        assert clamp_to_layout(-5.0, 10.0, 100.0) == 0.0
        assert clamp_to_layout(95.0, 10.0, 100.0) == 90.0
        assert clamp_to_layout(40.0, 10.0, 100.0) == 40.0
        assert clamp_to_layout(40.0, 150.0, 100.0) == 0.0


# ---------------------------------------------------------------------------
# 5. Irregular and invalid input
# ---------------------------------------------------------------------------

class TestIrregularInput:
    def test_zero_width_item_accepted(self, flat_floor):
        result = place(flat_floor, [], 50.0, y_for_bottom(4.0, 10.0), 0.0, 10.0)
        assert to_floor_relative(result.y, 10.0, H) == pytest.approx(0.0)

    def test_item_wider_than_its_bin_accepted(self, default_frame):
        result = place(default_frame, [], 10.0, y_for_bottom(10.0, 20.0), 150.0, 20.0)
        assert result.bin_index == 0
        assert to_floor_relative(result.y, 20.0, H) == pytest.approx(5.0)

    def test_item_wider_than_layout_pinned_to_zero(self, flat_floor):
        result = place(flat_floor, [], 30.0, y_for_bottom(0.0, 10.0), 150.0, 10.0)
        assert result.x == 0.0

    @pytest.mark.parametrize("width, height", [(-1.0, 10.0), (10.0, -1.0)])
    def test_negative_size_rejected(self, flat_floor, width, height):
        with pytest.raises(InvalidInput):
            place(flat_floor, [], 0.0, 0.0, width, height)

    @pytest.mark.parametrize("x, y", [(math.nan, 0.0), (0.0, math.inf)])
    def test_non_finite_position_rejected(self, flat_floor, x, y):
        with pytest.raises(InvalidInput):
            place(flat_floor, [], x, y, 10.0, 10.0)
