"""Domain model for tracked list entries."""

from __future__ import annotations

from .entries import AnimeEntry, MangaEntry, MediaEntry, TargetID, same_progress
from .enums import ListStatus, MediaKind, Service, SyncDirection

__all__ = [
    "AnimeEntry",
    "ListStatus",
    "MangaEntry",
    "MediaEntry",
    "MediaKind",
    "Service",
    "SyncDirection",
    "TargetID",
    "same_progress",
]
