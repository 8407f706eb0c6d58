"""Selection of pre-rendered map tiles for a query box.

Given a query box and the width in pixels it will be drawn at, find the
coarsest depth whose tiles are at least as sharp as the query, the range
of tiles at that depth covering the box, and the exact extent of the
resulting grid. The steps are

1. ``dpp`` - resolution of the query in degrees of longitude per pixel,
2. ``select_depth`` - coarsest sufficient depth,
3. ``tile_index`` - tile column/row containing each edge of the box,
4. ``assemble_grid`` - tiles in reading order (north to south, west to east).

Nothing here does I/O or keeps state; every function depends only on its
arguments and the ``TileScheme`` passed in.
"""
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple, Tuple

import numpy as np

from .exceptions import InvalidInput
from .scheme import GeoBox, TileScheme

logger = logging.getLogger(__name__)


class Axis(Enum):
    """Coordinate axis. The value is the direction tile indices grow in."""

    LONGITUDE = 1
    LATITUDE = -1

    @property
    def direction(self) -> int:
        return self.value

    def edges(self, box: GeoBox) -> Tuple[float, float]:
        """Return the (upper left, lower right) coordinates of ``box`` on this axis."""
        if self is Axis.LONGITUDE:
            return box.ullon, box.lrlon
        return box.ullat, box.lrlat


class Corner(Enum):
    """Tile corner. The value is the index offset of the corner."""

    UPPER_LEFT = 0
    LOWER_RIGHT = 1


class Tile(NamedTuple):
    """A stored tile, addressed by depth, column (x) and row (y)."""

    depth: int
    x: int
    y: int

    @property
    def filename(self) -> str:
        return f"d{self.depth}_x{self.x}_y{self.y}.png"

    def footprint(self, scheme: TileScheme) -> GeoBox:
        """Geographic extent of the tile in ``scheme``."""
        return GeoBox(
            ullon=tile_corner(self.x, self.depth, Axis.LONGITUDE, Corner.UPPER_LEFT, scheme),
            ullat=tile_corner(self.y, self.depth, Axis.LATITUDE, Corner.UPPER_LEFT, scheme),
            lrlon=tile_corner(self.x, self.depth, Axis.LONGITUDE, Corner.LOWER_RIGHT, scheme),
            lrlat=tile_corner(self.y, self.depth, Axis.LATITUDE, Corner.LOWER_RIGHT, scheme),
        )


@dataclass(frozen=True)
class TileGrid:
    """Rectangular block of tiles answering one query.

    Attributes
    ----------
    tiles : list of list of Tile
        Rows ordered north to south, each row ordered west to east.
    depth : int
        Depth all tiles belong to.
    bounds : GeoBox
        Extent from the upper left corner of the first tile to the lower
        right corner of the last tile.
    scheme : TileScheme
        Scheme the tiles were selected from.
    """

    tiles: List[List[Tile]]
    depth: int
    bounds: GeoBox
    scheme: TileScheme

    @property
    def shape(self) -> Tuple[int, int]:
        return len(self.tiles), len(self.tiles[0])

    @property
    def render_grid(self) -> List[List[str]]:
        return [[tile.filename for tile in row] for row in self.tiles]

    @property
    def lon_dpp(self) -> float:
        return tile_dpp(self.scheme, Axis.LONGITUDE, self.depth)

    @property
    def lat_dpp(self) -> float:
        return tile_dpp(self.scheme, Axis.LATITUDE, self.depth)


def dpp(coord_a: float, coord_b: float, width: float) -> float:
    """Degrees covered by one pixel when ``coord_a``..``coord_b`` spans ``width`` pixels.

    Raises
    ------
    InvalidInput
        If ``width`` is not a positive finite number.
    """
    if not (math.isfinite(width) and width > 0):
        raise InvalidInput(f"Pixel width must be positive, got {width}")
    return abs(coord_a - coord_b) / width


def tile_dpp(scheme: TileScheme, axis: Axis, depth: int) -> float:
    """Degrees per pixel along ``axis`` for tiles at ``depth``."""
    start, end = axis.edges(scheme.root)
    return dpp(start, end, scheme.tile_size * scheme.tiles_per_axis(depth))


def root_dpp(scheme: TileScheme, axis: Axis = Axis.LONGITUDE) -> float:
    return tile_dpp(scheme, axis, 0)


def select_depth(query_dpp: float, scheme: TileScheme) -> int:
    """Coarsest depth whose longitudinal resolution is at least ``query_dpp``.

    Queries coarser than the root tile get ``min_depth``; queries sharper
    than the deepest tiles get ``max_depth``.

    Parameters
    ----------
    query_dpp : float
        Requested degrees of longitude per pixel.
    scheme : TileScheme
        Tile scheme to select from.

    Returns
    -------
    int
        Depth in ``[scheme.min_depth, scheme.max_depth]``.

    Raises
    ------
    InvalidInput
        If ``query_dpp`` is NaN, zero or negative.
    """
    if math.isnan(query_dpp) or query_dpp <= 0:
        raise InvalidInput(f"Query resolution must be positive, got {query_dpp}")
    ratio = root_dpp(scheme) / query_dpp
    estimated = math.log2(ratio) if ratio > 0 else -math.inf
    # clamp before ceil, the ratio may overflow to inf
    estimated = min(max(estimated, scheme.min_depth), scheme.max_depth)
    return int(math.ceil(estimated))


def tile_index(coord: float, depth: int, axis: Axis, scheme: TileScheme) -> int:
    """Index of the tile containing ``coord`` along ``axis`` at ``depth``.

    Coordinates outside the root box are clamped to the edge tiles.
    """
    origin, _ = axis.edges(scheme.root)
    raw = (coord - origin) * axis.direction / tile_dpp(scheme, axis, depth) / scheme.tile_size
    raw = min(max(raw, 0.0), scheme.tiles_per_axis(depth) - 1)
    return int(math.floor(raw))


def tile_corner(index: int, depth: int, axis: Axis, corner: Corner,
                scheme: TileScheme) -> float:
    """Coordinate of a tile corner along ``axis``. Inverse of ``tile_index``."""
    origin, _ = axis.edges(scheme.root)
    step = tile_dpp(scheme, axis, depth) * scheme.tile_size
    return origin + axis.direction * (index + corner.value) * step


def assemble_grid(depth: int, start_col: int, end_col: int,
                  start_row: int, end_row: int) -> List[List[Tile]]:
    """Tiles of the inclusive column and row ranges, in reading order.

    Raises
    ------
    ValueError
        If either range is empty.
    """
    if start_col > end_col or start_row > end_row:
        raise ValueError(
            f"Empty tile range: cols {start_col}..{end_col}, rows {start_row}..{end_row}")
    rows, cols = np.mgrid[start_row:end_row + 1, start_col:end_col + 1]
    return [[Tile(depth, int(x), int(y)) for x, y in zip(row_x, row_y)]
            for row_x, row_y in zip(cols, rows)]


def select_tiles(query: GeoBox, width: float, scheme: TileScheme) -> TileGrid:
    """Select the tiles covering ``query`` when drawn ``width`` pixels wide.

    Parameters
    ----------
    query : GeoBox
        Requested extent.
    width : float
        Width of the viewport in pixels.
    scheme : TileScheme
        Tile scheme to select from.

    Returns
    -------
    TileGrid

    Raises
    ------
    InvalidInput
        If the query box is degenerate or reversed, or ``width`` is not
        positive.
    """
    query.validate()
    query_dpp = dpp(query.ullon, query.lrlon, width)
    # a valid box over a huge width can underflow to zero
    depth = select_depth(query_dpp, scheme) if query_dpp > 0 else scheme.max_depth

    start_col = tile_index(query.ullon, depth, Axis.LONGITUDE, scheme)
    end_col = tile_index(query.lrlon, depth, Axis.LONGITUDE, scheme)
    start_row = tile_index(query.ullat, depth, Axis.LATITUDE, scheme)
    end_row = tile_index(query.lrlat, depth, Axis.LATITUDE, scheme)
    logger.debug("depth %d, cols %d..%d, rows %d..%d",
                 depth, start_col, end_col, start_row, end_row)

    tiles = assemble_grid(depth, start_col, end_col, start_row, end_row)
    first = tiles[0][0].footprint(scheme)
    last = tiles[-1][-1].footprint(scheme)
    return TileGrid(tiles=tiles, depth=depth, bounds=first.union(last), scheme=scheme)
