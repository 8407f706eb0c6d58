"""Shared pytest fixtures for rasterer tests."""

import pytest

from rasterer import GeoBox, TileScheme


@pytest.fixture
def scheme():
    """Provide the default tile scheme."""
    return TileScheme()


@pytest.fixture
def unit_scheme():
    """Provide a small scheme with round numbers.

    The root box spans 8 degrees on both axes and tiles are one pixel
    wide, so a tile at depth d covers 8 / 2**d degrees.
    """
    return TileScheme(root=GeoBox(ullon=0.0, ullat=8.0, lrlon=8.0, lrlat=0.0),
                      tile_size=1, min_depth=0, max_depth=3)


@pytest.fixture
def root_params(scheme):
    """Provide request parameters covering exactly the default root box."""
    return {
        "ullon": scheme.root.ullon,
        "ullat": scheme.root.ullat,
        "lrlon": scheme.root.lrlon,
        "lrlat": scheme.root.lrlat,
        "w": scheme.tile_size,
        "h": scheme.tile_size,
    }


@pytest.fixture
def campus_params():
    """Provide a small query well inside the default root box."""
    return {
        "ullon": -122.241632,
        "lrlon": -122.24053,
        "ullat": 37.87655,
        "lrlat": 37.87548,
        "w": 892.0,
        "h": 875.0,
    }
