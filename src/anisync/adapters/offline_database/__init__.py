"""anime-offline-database adapter."""

from __future__ import annotations

from .loader import (
    OfflineDatabase,
    OfflineDatabaseError,
    build_offline_database,
    download_offline_database,
    load_offline_database,
    parse_offline_database,
)
from .schema import LatestRelease, OfflineDatabaseEntry, OfflineDatabasePayload

__all__ = [
    "LatestRelease",
    "OfflineDatabase",
    "OfflineDatabaseEntry",
    "OfflineDatabaseError",
    "OfflineDatabasePayload",
    "build_offline_database",
    "download_offline_database",
    "load_offline_database",
    "parse_offline_database",
]
