"""Configuration management for rasterer.

Settings are loaded with Dynaconf from several locations in order of
increasing priority:

1. Global settings (/etc/rasterer/)
2. User settings (~/.config/rasterer/)
3. Current directory settings (./)
4. Environment variable specified file (RASTERER_SETTINGS_FILE_FOR_DYNACONF)

Individual keys can be overridden with ``RASTERER_`` prefixed environment
variables, e.g. ``RASTERER_MAX_DEPTH=5``.

Recognised keys, read by ``rasterer.scheme.TileScheme.from_settings``:

root_ullon, root_ullat, root_lrlon, root_lrlat
    Extent of the depth 0 tile in degrees.
tile_size
    Width and height of each stored tile in pixels.
min_depth, max_depth
    Range of depths available in the tile store.

Keys left out fall back to the stock tile set, see ``SCHEME_DEFAULTS``.

Attributes
----------
USER_DIR : pathlib.Path
    Path to user configuration directory.
GLOB_DIR : pathlib.Path
    Path to global configuration directory.
CURR_DIR : pathlib.Path
    Path to current working directory.
settings : Dynaconf
    The Dynaconf settings object with loaded configuration.
"""
import os
import pathlib

from dynaconf import Dynaconf

from .scheme import (MAX_DEPTH, MIN_DEPTH, ROOT_LRLAT, ROOT_LRLON, ROOT_ULLAT,
                     ROOT_ULLON, TILE_SIZE)

SCHEME_DEFAULTS = dict(
    root_ullon=ROOT_ULLON,
    root_ullat=ROOT_ULLAT,
    root_lrlon=ROOT_LRLON,
    root_lrlat=ROOT_LRLAT,
    tile_size=TILE_SIZE,
    min_depth=MIN_DEPTH,
    max_depth=MAX_DEPTH,
)

USER_DIR = pathlib.Path("~/.config/rasterer").expanduser()
GLOB_DIR = pathlib.Path("/etc/rasterer/")
CURR_DIR = pathlib.Path("./").absolute()
settings_files = [
    GLOB_DIR / "settings.toml",
    GLOB_DIR / ".secrets.toml",
    USER_DIR / "settings.toml",
    USER_DIR / ".secrets.toml",
    CURR_DIR / "settings.toml",
    CURR_DIR / ".secrets.toml"
    ]
extra_file = os.getenv("RASTERER_SETTINGS_FILE_FOR_DYNACONF")
if extra_file:
    settings_files.append(pathlib.Path(extra_file).absolute())

settings = Dynaconf(
    merge_enabled = True,
    envvar_prefix="RASTERER",
    DEBUG_LEVEL_FOR_DYNACONF='DEBUG',
    settings_files=settings_files,
    environments=True,
    load_dotenv=True,
)


def change_env(new_env):
    """Change the active Dynaconf environment.

    Parameters
    ----------
    new_env : str
        The environment name to switch to (e.g., 'development', 'production').
    """
    settings.setenv(new_env)
    settings.reload()


def scheme_settings(source=None):
    """Tile scheme keys with defaults filled in.

    Parameters
    ----------
    source : Dynaconf or mapping, optional
        Settings to read, by default the package ``settings``.

    Returns
    -------
    dict
        One entry per key of ``SCHEME_DEFAULTS``.
    """
    if source is None:
        source = settings
    return {key: source.get(key, default) for key, default in SCHEME_DEFAULTS.items()}
