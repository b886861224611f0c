"""Config file discovery.

Lookup order: ``--config`` flag, ``BROWDI_CONFIG`` env var, then
``$XDG_CONFIG_HOME/browdi/browdi.toml``. Data files follow
``$XDG_DATA_HOME`` the same way.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "browdi.toml"
CONFIG_ENV_VAR = "BROWDI_CONFIG"
DB_FILENAME = "browdi.db"


def _xdg_dir(env_var: str, fallback: str) -> Path:
    value = os.environ.get(env_var)
    if value:
        return Path(value)
    return Path.home() / fallback


def config_dir() -> Path:
    """``$XDG_CONFIG_HOME/browdi``."""
    return _xdg_dir("XDG_CONFIG_HOME", ".config") / "browdi"


def data_dir() -> Path:
    """``$XDG_DATA_HOME/browdi``."""
    return _xdg_dir("XDG_DATA_HOME", ".local/share") / "browdi"


def default_store_path() -> Path:
    """Default location of the preference database."""
    return data_dir() / DB_FILENAME


def find_config() -> Path | None:
    """Locate browdi.toml, or None if there is none.

    ``BROWDI_CONFIG`` wins when set; a set but missing path yields None.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    candidate = config_dir() / CONFIG_FILENAME
    if candidate.is_file():
        return candidate
    return None
