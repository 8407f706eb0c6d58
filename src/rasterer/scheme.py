"""Geographic boxes and tile scheme definitions.

A tile scheme fixes the world extent that depth 0 covers (the root box),
the pixel size of each square tile and the range of stored depths. All
selector operations take the scheme as an argument so alternate tile sets
can be used side by side.
"""
import math
from dataclasses import dataclass, field

from .exceptions import InvalidInput

ROOT_ULLON = -122.2998046875
ROOT_ULLAT = 37.892195547244356
ROOT_LRLON = -122.2119140625
ROOT_LRLAT = 37.82280243352756
TILE_SIZE = 256
MIN_DEPTH = 0
MAX_DEPTH = 7


@dataclass(frozen=True)
class GeoBox:
    """Rectangle in longitude/latitude degrees.

    Parameters
    ----------
    ullon : float
        Upper left (western) longitude.
    ullat : float
        Upper left (northern) latitude.
    lrlon : float
        Lower right (eastern) longitude.
    lrlat : float
        Lower right (southern) latitude.
    """

    ullon: float
    ullat: float
    lrlon: float
    lrlat: float

    def is_valid(self) -> bool:
        """Return True if the box is finite with west < east and north > south."""
        coords = (self.ullon, self.ullat, self.lrlon, self.lrlat)
        if not all(math.isfinite(c) for c in coords):
            return False
        return self.ullon < self.lrlon and self.ullat > self.lrlat

    def validate(self):
        """Raise InvalidInput unless the box is valid.

        Returns
        -------
        GeoBox
            The box itself, to allow chaining.
        """
        if not self.is_valid():
            raise InvalidInput(f"Degenerate or reversed box: {self}")
        return self

    def contains(self, other: "GeoBox") -> bool:
        return (self.ullon <= other.ullon and self.lrlon >= other.lrlon and
                self.ullat >= other.ullat and self.lrlat <= other.lrlat)

    def union(self, other: "GeoBox") -> "GeoBox":
        return GeoBox(ullon=min(self.ullon, other.ullon),
                      ullat=max(self.ullat, other.ullat),
                      lrlon=max(self.lrlon, other.lrlon),
                      lrlat=min(self.lrlat, other.lrlat))

    def as_dict(self) -> dict:
        return dict(ullon=self.ullon, ullat=self.ullat,
                    lrlon=self.lrlon, lrlat=self.lrlat)


def _default_root():
    return GeoBox(ROOT_ULLON, ROOT_ULLAT, ROOT_LRLON, ROOT_LRLAT)


@dataclass(frozen=True)
class TileScheme:
    """Immutable description of a pre-rendered tile pyramid.

    Parameters
    ----------
    root : GeoBox, optional
        Extent covered by the single depth 0 tile.
    tile_size : int, optional
        Width and height of each tile in pixels, by default 256.
    min_depth : int, optional
        Shallowest stored depth, by default 0.
    max_depth : int, optional
        Deepest stored depth, by default 7.

    Raises
    ------
    ValueError
        If the root box is invalid, the tile size is not positive or the
        depth range is empty or negative.
    """

    root: GeoBox = field(default_factory=_default_root)
    tile_size: int = TILE_SIZE
    min_depth: int = MIN_DEPTH
    max_depth: int = MAX_DEPTH

    def __post_init__(self):
        if not self.root.is_valid():
            raise ValueError(f"Invalid root box: {self.root}")
        if self.tile_size <= 0:
            raise ValueError(f"tile_size must be positive, got {self.tile_size}")
        if self.min_depth < 0 or self.min_depth > self.max_depth:
            raise ValueError(
                f"Invalid depth range [{self.min_depth}, {self.max_depth}]")

    def tiles_per_axis(self, depth: int) -> int:
        """Number of tiles along each axis at ``depth``."""
        return 2 ** depth

    @classmethod
    def from_settings(cls, settings=None):
        """Build a scheme from Dynaconf settings.

        Parameters
        ----------
        settings : Dynaconf or mapping, optional
            Settings to read. Defaults to ``rasterer.config.settings``.
            Missing keys fall back to the module defaults.

        Returns
        -------
        TileScheme
        """
        from .config import scheme_settings
        values = scheme_settings(settings)
        root = GeoBox(ullon=float(values["root_ullon"]),
                      ullat=float(values["root_ullat"]),
                      lrlon=float(values["root_lrlon"]),
                      lrlat=float(values["root_lrlat"]))
        return cls(root=root,
                   tile_size=int(values["tile_size"]),
                   min_depth=int(values["min_depth"]),
                   max_depth=int(values["max_depth"]))
