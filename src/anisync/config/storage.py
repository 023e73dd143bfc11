"""Data and configuration directory helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

APP_DIR_NAME: Final[str] = "anisync"
HTTP_CACHE_FILENAME: Final[str] = "http_cache.db"
HATO_CACHE_DIR: Final[str] = "hato-cache"
CROSSWALK_CACHE_FILENAME: Final[str] = "mappings.json"
OFFLINE_DATABASE_DIR: Final[str] = "offline-database"
MAPPINGS_FILENAME: Final[str] = "mappings.toml"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path
    config_dir: Path
    http_cache_filename: str = HTTP_CACHE_FILENAME

    def resolve_data_dir(self) -> Path:
        return self.data_dir.expanduser().resolve()

    def ensure_data_dir(self) -> Path:
        data_dir = self.resolve_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def http_cache_path(self, *, ensure: bool = True) -> Path:
        base = self.ensure_data_dir() if ensure else self.resolve_data_dir()
        return base / self.http_cache_filename

    def hato_cache_path(self) -> Path:
        return self.resolve_data_dir() / HATO_CACHE_DIR / CROSSWALK_CACHE_FILENAME

    def offline_database_dir(self) -> Path:
        return self.resolve_data_dir() / OFFLINE_DATABASE_DIR

    def mappings_path(self) -> Path:
        return self.config_dir.expanduser().resolve() / MAPPINGS_FILENAME


def _default_base(windows_var: str, xdg_var: str, fallback: Path) -> Path:
    if os.name == "nt":
        base = os.getenv(windows_var)
        return Path(base) if base else (Path.home() / "AppData" / "Local")
    base = os.getenv(xdg_var)
    return Path(base) if base else fallback


def _default_data_dir() -> Path:
    base_path = _default_base("LOCALAPPDATA", "XDG_DATA_HOME", Path.home() / ".local" / "share")
    return (base_path / APP_DIR_NAME).expanduser().resolve()


def _default_config_dir() -> Path:
    base_path = _default_base("APPDATA", "XDG_CONFIG_HOME", Path.home() / ".config")
    return (base_path / APP_DIR_NAME).expanduser().resolve()


def get_storage_config() -> StorageConfig:
    env_data_dir = os.getenv("ANISYNC_DATA_DIR")
    env_config_dir = os.getenv("ANISYNC_CONFIG_DIR")
    return StorageConfig(
        data_dir=Path(env_data_dir) if env_data_dir else _default_data_dir(),
        config_dir=Path(env_config_dir) if env_config_dir else _default_config_dir(),
    )
