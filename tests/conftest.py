"""Shared fixtures for the planogram placement tests."""

import pytest

from planogram.config import DEFAULT_LAYER_HEIGHTS
from planogram.core import Bin, Item, ItemStore, Surface, Topology


BIN_HEIGHT = 200.0


def resting_item(uid, x, width, height, bottom=0.0, bin_index=0, bin_height=BIN_HEIGHT):
    """Item whose bottom edge sits *bottom* above the floor."""
    return Item(uid=uid, bin_index=bin_index, x=x,
                y=bin_height - bottom - height, width=width, height=height)


@pytest.fixture
def default_frame():
    """Two 120-wide units with boards at 0/40/80/120/160 (base top at 5)."""
    bins = [Bin.with_default_surfaces(120.0, DEFAULT_LAYER_HEIGHTS) for _ in range(2)]
    return Topology(bins, BIN_HEIGHT)


@pytest.fixture
def flat_floor():
    """One 100-wide unit with a zero-thickness floor (support plane at 0)."""
    return Topology([Bin(width=100.0, surfaces=(Surface.solid(0.0, thickness=0.0),))],
                    BIN_HEIGHT)


@pytest.fixture
def shelf_at_40():
    """One unit: zero-thickness floor plus a board whose top plane is 40."""
    return Topology(
        [Bin(width=100.0, surfaces=(
            Surface.solid(0.0, thickness=0.0),
            Surface.solid(37.0, thickness=3.0),
        ))],
        BIN_HEIGHT,
    )


@pytest.fixture
def narrow_bin():
    """One 40-wide unit with a zero-thickness floor."""
    return Topology([Bin(width=40.0, surfaces=(Surface.solid(0.0, thickness=0.0),))],
                    BIN_HEIGHT)


@pytest.fixture
def empty_store():
    return ItemStore()


@pytest.fixture
def resting():
    """Factory: resting(uid, x, width, height, bottom=0.0, bin_index=0) -> Item."""
    return resting_item
