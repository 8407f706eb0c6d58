"""Tests for the rasterer.scheme module."""

import math
from unittest.mock import patch

import pytest

from rasterer import GeoBox, InvalidInput, TileScheme
from rasterer import scheme as scheme_module


class TestGeoBox:
    """Tests for the GeoBox type."""

    def test_valid_box(self):
        """A box with west < east and north > south should be valid."""
        box = GeoBox(ullon=-1.0, ullat=2.0, lrlon=1.0, lrlat=-2.0)
        assert box.is_valid()
        assert box.validate() is box

    @pytest.mark.parametrize("box", [
        GeoBox(1.0, 2.0, 1.0, -2.0),
        GeoBox(-1.0, 2.0, 1.0, 2.0),
        GeoBox(1.0, 2.0, -1.0, -2.0),
        GeoBox(-1.0, -2.0, 1.0, 2.0),
        GeoBox(-1.0, math.inf, 1.0, -2.0),
        GeoBox(math.nan, 2.0, 1.0, -2.0),
    ])
    def test_invalid_boxes(self, box):
        """Degenerate, reversed and non-finite boxes should fail validation."""
        assert not box.is_valid()
        with pytest.raises(InvalidInput):
            box.validate()

    def test_contains(self):
        """contains should accept inner boxes and reject overlapping ones."""
        outer = GeoBox(0.0, 10.0, 10.0, 0.0)
        assert outer.contains(GeoBox(1.0, 9.0, 9.0, 1.0))
        assert outer.contains(outer)
        assert not outer.contains(GeoBox(5.0, 9.0, 11.0, 1.0))
        assert not outer.contains(GeoBox(1.0, 11.0, 9.0, 1.0))

    def test_union(self):
        """union should return the smallest box containing both."""
        a = GeoBox(0.0, 5.0, 2.0, 3.0)
        b = GeoBox(4.0, 2.0, 6.0, 0.0)
        assert a.union(b) == GeoBox(0.0, 5.0, 6.0, 0.0)

    def test_as_dict(self):
        """as_dict should use the request parameter names."""
        assert GeoBox(0.0, 5.0, 2.0, 3.0).as_dict() == {
            "ullon": 0.0, "ullat": 5.0, "lrlon": 2.0, "lrlat": 3.0}


class TestTileScheme:
    """Tests for the TileScheme type."""

    def test_defaults(self):
        """Default scheme should use the stock root box and depth range."""
        scheme = TileScheme()
        assert scheme.root == GeoBox(scheme_module.ROOT_ULLON, scheme_module.ROOT_ULLAT,
                                     scheme_module.ROOT_LRLON, scheme_module.ROOT_LRLAT)
        assert scheme.tile_size == 256
        assert scheme.min_depth == 0
        assert scheme.max_depth == 7

    def test_is_immutable(self):
        """Schemes should be frozen."""
        scheme = TileScheme()
        with pytest.raises(AttributeError):
            scheme.max_depth = 9

    def test_tiles_per_axis(self):
        """Tile count per axis should double with each depth."""
        scheme = TileScheme()
        assert [scheme.tiles_per_axis(d) for d in range(4)] == [1, 2, 4, 8]

    @pytest.mark.parametrize("kwargs", [
        dict(tile_size=0),
        dict(tile_size=-256),
        dict(min_depth=-1),
        dict(min_depth=5, max_depth=3),
        dict(root=GeoBox(0.0, 0.0, 1.0, 1.0)),
    ])
    def test_rejects_bad_configuration(self, kwargs):
        """Invalid schemes should raise ValueError."""
        with pytest.raises(ValueError):
            TileScheme(**kwargs)


class TestFromSettings:
    """Tests for TileScheme.from_settings."""

    def test_reads_keys(self):
        """from_settings should read every scheme key."""
        settings = {
            "root_ullon": 0, "root_ullat": 8, "root_lrlon": 8, "root_lrlat": 0,
            "tile_size": 512, "min_depth": 1, "max_depth": 4,
        }
        scheme = TileScheme.from_settings(settings)
        assert scheme.root == GeoBox(0.0, 8.0, 8.0, 0.0)
        assert scheme.tile_size == 512
        assert scheme.min_depth == 1
        assert scheme.max_depth == 4

    def test_falls_back_to_defaults(self):
        """Missing keys should fall back to the stock scheme."""
        assert TileScheme.from_settings({}) == TileScheme()

    def test_partial_override(self):
        """Only the given keys should change."""
        scheme = TileScheme.from_settings({"max_depth": 5})
        assert scheme.max_depth == 5
        assert scheme.root == TileScheme().root

    def test_uses_package_settings_by_default(self):
        """Without arguments the package settings should be used."""
        with patch("rasterer.config.settings", {"max_depth": 3}):
            assert TileScheme.from_settings().max_depth == 3

    def test_bad_settings_raise(self):
        """A misconfigured scheme should raise ValueError."""
        with pytest.raises(ValueError):
            TileScheme.from_settings({"tile_size": 0})
