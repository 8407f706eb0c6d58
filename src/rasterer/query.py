"""Request glue between the web front end and the tile selector.

The front end sends the query box and viewport size as a flat mapping of
request parameters and expects a flat result record back. This module
converts between the two and turns ``InvalidInput`` into a record with
``query_success`` set to False.
"""
import logging
import math
from dataclasses import asdict, dataclass, field
from typing import List, Mapping, Optional, Tuple

from .exceptions import InvalidInput
from .scheme import GeoBox, TileScheme
from .selector import select_tiles

logger = logging.getLogger(__name__)

REQUIRED_PARAMS = ("ullon", "lrlon", "ullat", "lrlat", "w")


@dataclass
class RasterResult:
    """Result record returned to the front end.

    Callers must check ``query_success`` before using any other field.
    """

    render_grid: List[List[str]] = field(default_factory=list)
    raster_ul_lon: float = 0.0
    raster_ul_lat: float = 0.0
    raster_lr_lon: float = 0.0
    raster_lr_lat: float = 0.0
    depth: int = 0
    query_success: bool = False

    @classmethod
    def failed(cls):
        return cls()

    @classmethod
    def from_grid(cls, grid):
        return cls(render_grid=grid.render_grid,
                   raster_ul_lon=grid.bounds.ullon,
                   raster_ul_lat=grid.bounds.ullat,
                   raster_lr_lon=grid.bounds.lrlon,
                   raster_lr_lat=grid.bounds.lrlat,
                   depth=grid.depth,
                   query_success=True)

    def as_dict(self) -> dict:
        return asdict(self)


def _number(params, key):
    if key not in params or params[key] is None:
        raise InvalidInput(f"Missing parameter '{key}'")
    value = params[key]
    if isinstance(value, bool):
        raise InvalidInput(f"Parameter '{key}' is not numeric: {value!r}")
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise InvalidInput(f"Parameter '{key}' is not numeric: {value!r}") from None
    if not math.isfinite(value):
        raise InvalidInput(f"Parameter '{key}' is not finite: {value!r}")
    return value


def parse_params(params: Mapping) -> Tuple[GeoBox, float]:
    """Extract the query box and viewport width from request parameters.

    Parameters
    ----------
    params : mapping
        Must contain ``ullon``, ``lrlon``, ``ullat``, ``lrlat`` and ``w``
        as numbers or numeric strings. Other keys (``h``) are ignored.

    Returns
    -------
    tuple
        (GeoBox, width)

    Raises
    ------
    InvalidInput
        If a parameter is missing, not numeric or not finite.
    """
    values = {key: _number(params, key) for key in REQUIRED_PARAMS}
    box = GeoBox(ullon=values["ullon"], ullat=values["ullat"],
                 lrlon=values["lrlon"], lrlat=values["lrlat"])
    return box, values["w"]


def get_map_raster(params: Mapping, scheme: Optional[TileScheme] = None) -> dict:
    """Answer a raster request from the front end.

    Parameters
    ----------
    params : mapping
        Request parameters, see ``parse_params``.
    scheme : TileScheme, optional
        Tile scheme to use. Built from the package settings if None.

    Returns
    -------
    dict
        ``render_grid``, ``raster_ul_lon``, ``raster_ul_lat``,
        ``raster_lr_lon``, ``raster_lr_lat``, ``depth`` and
        ``query_success``.
    """
    if scheme is None:
        scheme = TileScheme.from_settings()
    try:
        query, width = parse_params(params)
        grid = select_tiles(query, width, scheme)
    except InvalidInput as err:
        logger.warning("Rejected raster query: %s", err)
        return RasterResult.failed().as_dict()
    return RasterResult.from_grid(grid).as_dict()
