"""Where the registry database lives on disk."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Final

APP_DIR_NAME: Final[str] = "guardianbee"
DEFAULT_DB_FILENAME: Final[str] = "guardianbee.db"
DATA_DIR_ENV: Final[str] = "GUARDIANBEE_DATA_DIR"
DATABASE_URI_ENV: Final[str] = "DATABASE_URI"


def _platform_data_home() -> Path:
    if os.name == "nt":
        local = os.getenv("LOCALAPPDATA")
        return Path(local) if local else Path.home() / "AppData" / "Local"
    xdg = os.getenv("XDG_DATA_HOME")
    return Path(xdg) if xdg else Path.home() / ".local" / "share"


def get_data_dir() -> Path:
    """``GUARDIANBEE_DATA_DIR`` if set, else ``guardianbee`` under the platform data home."""

    explicit = os.getenv(DATA_DIR_ENV)
    base = Path(explicit) if explicit else _platform_data_home() / APP_DIR_NAME
    return base.expanduser().resolve()


def get_database_uri() -> str:
    """``DATABASE_URI`` verbatim, or a SQLite file inside the (created) data directory."""

    override = os.getenv(DATABASE_URI_ENV)
    if override:
        return override
    data_dir = get_data_dir()
    data_dir.mkdir(parents=True, exist_ok=True)
    return f"sqlite+pysqlite:///{data_dir / DEFAULT_DB_FILENAME}"
