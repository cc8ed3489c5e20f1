"""Directory resolution for config, checkpoints and output.

Defaults follow the XDG base directory conventions:

- config file: ``$XDG_CONFIG_HOME/feeddump/config.toml``
- checkpoints: ``$XDG_DATA_HOME/feeddump/collections.json``
- output: ``output_dir`` from the config file, else ``$FEEDDUMP_FOLDER``
  (read through the settings), else ``~/feeddump``

Paths coming from the config file may use ``~`` and environment
variables.
"""

from __future__ import annotations

import os
from pathlib import Path

from feeddump.core.checkpoint import CHECKPOINT_FILENAME
from feeddump.core.exceptions import PathResolutionError

APP_NAME = "feeddump"


def expand(path: str | Path) -> Path:
    """Expand ``~`` and environment variables in ``path``."""
    return Path(os.path.expanduser(os.path.expandvars(str(path))))


def _home(message: str = "$HOME is not set") -> Path:
    home = os.environ.get("HOME")
    if not home:
        raise PathResolutionError(message)
    return Path(home)


def get_xdg_dir(var: str, path_from_home: str) -> Path:
    """Return ``$var``, or ``$HOME/path_from_home`` when it is unset.

    Raises:
        PathResolutionError: If neither ``$var`` nor ``$HOME`` is set.
    """
    value = os.environ.get(var)
    if value:
        return Path(value)
    return _home(f"Neither ${var} nor $HOME is set") / path_from_home


def get_config_file(path: str | Path | None = None) -> Path:
    """Config file location; ``path`` wins when given."""
    if path is not None:
        return expand(path)
    return get_xdg_dir("XDG_CONFIG_HOME", ".config") / APP_NAME / "config.toml"


def get_metadata_dir(configured: str | None = None) -> Path:
    """Directory holding the checkpoint file."""
    base = expand(configured) if configured else get_xdg_dir("XDG_DATA_HOME", ".local/share")
    return base / APP_NAME


def get_checkpoint_file(configured: str | None = None) -> Path:
    return get_metadata_dir(configured) / CHECKPOINT_FILENAME


def get_output_dir(configured: str | None = None, default: Path | None = None) -> Path:
    """Root output directory; one subdirectory per feed alias lives below it.

    Args:
        configured: ``output_dir`` from the config file.
        default: Fallback from settings (``FEEDDUMP_FOLDER``).

    Raises:
        PathResolutionError: If neither is given and ``$HOME`` is unset.
    """
    if configured:
        return expand(configured)
    if default is not None:
        return expand(default)
    return _home() / APP_NAME
