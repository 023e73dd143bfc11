"""List entries tracked on either catalog.

An entry is either an :class:`AnimeEntry` or a :class:`MangaEntry`; the ``kind``
field is the discriminant, so callers branch on ``entry.kind`` instead of
inspecting the class. Whether an entry plays the *source* or the *target* role
depends only on the sync direction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from .enums import MediaKind, Service

if TYPE_CHECKING:
    from datetime import date

    from .enums import ListStatus

type TargetID = int
"""Destination-catalog identifier keying the user's known targets."""


@dataclass(frozen=True, slots=True, kw_only=True)
class _ListEntry:
    anilist_id: int = 0
    mal_id: int = 0
    title_en: str = ""
    title_native: str = ""
    title_romaji: str = ""
    status: ListStatus | None = None
    score: float = 0.0
    progress: int = 0
    started_at: date | None = None
    finished_at: date | None = None

    @property
    def title(self) -> str:
        return self.title_en or self.title_native or self.title_romaji

    @property
    def titles(self) -> tuple[str, str, str]:
        return (self.title_en, self.title_native, self.title_romaji)

    def id_for(self, service: Service) -> int:
        if service is Service.ANILIST:
            return self.anilist_id
        return self.mal_id


@dataclass(frozen=True, slots=True, kw_only=True)
class AnimeEntry(_ListEntry):
    episodes: int = 0
    season_year: int = 0
    kind: Literal[MediaKind.ANIME] = MediaKind.ANIME

    @property
    def unit_count(self) -> int:
        return self.episodes


@dataclass(frozen=True, slots=True, kw_only=True)
class MangaEntry(_ListEntry):
    chapters: int = 0
    volumes: int = 0
    progress_volumes: int = 0
    kind: Literal[MediaKind.MANGA] = MediaKind.MANGA

    @property
    def unit_count(self) -> int:
        return self.chapters


type MediaEntry = AnimeEntry | MangaEntry


def same_progress(source: MediaEntry, target: MediaEntry) -> bool:
    """Return ``True`` when applying ``source`` to ``target`` would change nothing."""

    if source.kind is not target.kind:
        return False
    if source.status != target.status or source.score != target.score:
        return False
    if source.kind is MediaKind.MANGA and target.kind is MediaKind.MANGA:
        return (
            source.progress == target.progress
            and source.progress_volumes == target.progress_volumes
        )
    progress_matches = source.progress == target.progress
    source_total, target_total = source.unit_count, target.unit_count
    if source_total == target_total or source_total == 0 or target_total == 0:
        return progress_matches
    if progress_matches:
        return True
    # catalogs disagree on the episode total; compare episodes left instead
    return source_total - source.progress == target_total - target.progress
