"""Where the claim database lives.

``DATABASE_URI`` wins. Without it the service keeps a SQLite file in its data
directory (``LISTINGCLAIM_DATA_DIR``, else the platform's user data location).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

APP_DIR_NAME: Final[str] = "listingclaim"
DEFAULT_DB_FILENAME: Final[str] = "listingclaim.db"
SQLITE_DRIVER: Final[str] = "sqlite+aiosqlite"
_TRUTHY: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path
    database_filename: str = DEFAULT_DB_FILENAME

    def database_uri(self, *, create: bool = True) -> str:
        directory = self.data_dir.expanduser().resolve()
        if create:
            directory.mkdir(parents=True, exist_ok=True)
        return f"{SQLITE_DRIVER}:///{directory / self.database_filename}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str
    echo: bool = False


def _platform_data_home() -> Path:
    if os.name == "nt":
        local = os.getenv("LOCALAPPDATA")
        return Path(local) if local else Path.home() / "AppData" / "Local"
    xdg = os.getenv("XDG_DATA_HOME")
    return Path(xdg) if xdg else Path.home() / ".local" / "share"


def get_storage_config() -> StorageConfig:
    override = os.getenv("LISTINGCLAIM_DATA_DIR")
    return StorageConfig(data_dir=Path(override) if override else _platform_data_home() / APP_DIR_NAME)


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    echo = os.getenv("DATABASE_ECHO", "").strip().lower() in _TRUTHY
    uri = os.getenv("DATABASE_URI", "").strip()
    if not uri:
        uri = (storage or get_storage_config()).database_uri()
    return DatabaseConfig(uri=uri, echo=echo)
