"""Domain enums shared by entries, strategies and adapters."""

from __future__ import annotations

from enum import StrEnum


class Service(StrEnum):
    """Catalog services whose lists are reconciled."""

    ANILIST = "anilist"
    MYANIMELIST = "mal"


class MediaKind(StrEnum):
    """Discriminant separating episodic entries (anime) from chaptered ones (manga)."""

    ANIME = "anime"
    MANGA = "manga"


class ListStatus(StrEnum):
    CURRENT = "current"
    COMPLETED = "completed"
    ON_HOLD = "on_hold"
    DROPPED = "dropped"
    PLANNING = "planning"
    REPEATING = "repeating"


class SyncDirection(StrEnum):
    ANILIST_TO_MAL = "anilist-to-mal"
    MAL_TO_ANILIST = "mal-to-anilist"

    @property
    def origin(self) -> Service:
        """Service the source entries are read from."""

        if self is SyncDirection.ANILIST_TO_MAL:
            return Service.ANILIST
        return Service.MYANIMELIST

    @property
    def destination(self) -> Service:
        """Service whose list receives the updates."""

        if self is SyncDirection.ANILIST_TO_MAL:
            return Service.MYANIMELIST
        return Service.ANILIST

    @property
    def label(self) -> str:
        names = {Service.ANILIST: "AniList", Service.MYANIMELIST: "MAL"}
        return f"{names[self.origin]} to {names[self.destination]}"
