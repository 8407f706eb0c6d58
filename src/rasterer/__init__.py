"""Selection of pre-rendered map tiles for a geographic query box.

The package answers one question: which stored tiles, at which depth,
should be stitched together to draw a given box at a given pixel width.
"""

from . import config
from .exceptions import InvalidInput
from .scheme import GeoBox, TileScheme
from .selector import Axis, Corner, Tile, TileGrid, select_tiles
from .query import RasterResult, get_map_raster, parse_params

__all__ = [
    "Axis",
    "Corner",
    "GeoBox",
    "InvalidInput",
    "RasterResult",
    "Tile",
    "TileGrid",
    "TileScheme",
    "config",
    "get_map_raster",
    "parse_params",
    "select_tiles",
]
