"""Command-line interface for rasterer.

Runs raster queries and inspects the tile scheme from a terminal using the
Typer framework.
"""
import json
import logging

import typer

from . import config
from .query import get_map_raster
from .scheme import TileScheme
from .selector import Tile

app = typer.Typer(help="Select pre-rendered map tiles covering a query box.")


def _scheme(env):
    if env != "DEFAULT":
        config.change_env(env)
    return TileScheme.from_settings(config.settings)


@app.command()
def query(ullon: float = typer.Option(..., help="Western longitude of the query box."),
          ullat: float = typer.Option(..., help="Northern latitude of the query box."),
          lrlon: float = typer.Option(..., help="Eastern longitude of the query box."),
          lrlat: float = typer.Option(..., help="Southern latitude of the query box."),
          width: float = typer.Option(..., "--width", "-w", help="Viewport width in pixels."),
          env: str = "DEFAULT",
          verbose: bool = False):
    """Print the tiles covering a query box as JSON."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
        logging.getLogger("rasterer").setLevel(logging.DEBUG)
    params = dict(ullon=ullon, ullat=ullat, lrlon=lrlon, lrlat=lrlat, w=width)
    result = get_map_raster(params, scheme=_scheme(env))
    typer.echo(json.dumps(result, indent=2))
    if not result["query_success"]:
        raise typer.Exit(code=1)


@app.command()
def footprint(depth: int, x: int, y: int, env: str = "DEFAULT"):
    """Print the filename and geographic extent of a single tile."""
    scheme = _scheme(env)
    count = scheme.tiles_per_axis(depth)
    if not (scheme.min_depth <= depth <= scheme.max_depth and 0 <= x < count and 0 <= y < count):
        typer.echo(f"No tile d{depth} x{x} y{y} in this scheme", err=True)
        raise typer.Exit(code=1)
    tile = Tile(depth, x, y)
    typer.echo(json.dumps(dict(filename=tile.filename, **tile.footprint(scheme).as_dict()),
                          indent=2))


@app.command()
def scheme(env: str = "DEFAULT"):
    """Print the active tile scheme."""
    active = _scheme(env)
    typer.echo(json.dumps(dict(root=active.root.as_dict(),
                               tile_size=active.tile_size,
                               min_depth=active.min_depth,
                               max_depth=active.max_depth), indent=2))


if __name__ == "__main__":
    app()
