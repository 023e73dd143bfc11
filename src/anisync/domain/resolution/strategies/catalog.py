"""Manga matching through a MAL-backed catalog (Jikan).

Toward MAL the catalog is searched with the source's romaji and English titles
and the first result whose titles agree gives the MAL ID. Toward AniList the
source's MAL entry is fetched and its title set, synonyms included, is compared
with the manga already on the user's list.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from anisync.domain.matching import normalize_title, same_title
from anisync.domain.model import MangaEntry, MediaKind, Service
from anisync.domain.ports import CrosswalkLookupError

from .base import known_target

if TYPE_CHECKING:
    from anisync.domain.model import MediaEntry
    from anisync.domain.ports import CatalogManga, MangaCatalog
    from anisync.domain.resolution.context import RunContext

    from .base import KnownTargets

log = getLogger(__name__)


def search_queries(entry: MediaEntry) -> list[str]:
    """Romaji then English title, skipping one that normalizes like the other."""

    queries: list[str] = []
    seen: set[str] = set()
    for title in (entry.title_romaji, entry.title_en):
        if not title:
            continue
        normalized = normalize_title(title)
        if normalized in seen:
            continue
        seen.add(normalized)
        queries.append(title)
    return queries


def catalog_matches(record: CatalogManga, entry: MediaEntry) -> bool:
    """Compare ``entry`` with every title variant the catalog knows for ``record``."""

    variants = [
        MangaEntry(title_en=english, title_native=record.title_japanese, title_romaji=record.title)
        for english in (record.title_english, *record.synonyms)
    ]
    if any(same_title(entry, variant) for variant in variants):
        return True
    # romaji main title against English and the reverse
    if entry.title_en and record.title and normalize_title(entry.title_en) == normalize_title(record.title):
        return True
    return bool(
        entry.title_romaji
        and record.title_english
        and normalize_title(entry.title_romaji) == normalize_title(record.title_english)
    )


@dataclass(slots=True, kw_only=True)
class MangaCatalogStrategy:
    """Manga-only lookup through :class:`~anisync.domain.ports.MangaCatalog`.

    Only sources with an origin ID and no foreign ID are considered. Catalog
    failures make the strategy decline, as the crosswalk strategies do.
    """

    catalog: MangaCatalog | None
    enabled: bool = True

    @property
    def name(self) -> str:
        return "JikanStrategy"

    def attempt(
        self,
        source: MediaEntry,
        known_targets: KnownTargets,
        context: RunContext,
    ) -> MediaEntry | None:
        if self.catalog is None or source.kind is not MediaKind.MANGA:
            return None
        if context.source_id(source) <= 0 or context.target_id(source) > 0:
            return None
        try:
            if context.options.direction.destination is Service.MYANIMELIST:
                return self._find_mal_target(self.catalog, source, known_targets, context)
            return self._find_anilist_target(self.catalog, source, known_targets, context)
        except CrosswalkLookupError as exc:
            log.warning("[%s] %s lookup for %r failed: %s", context.label, self.name, source.title, exc)
            return None

    def _find_mal_target(
        self,
        catalog: MangaCatalog,
        source: MediaEntry,
        known_targets: KnownTargets,
        context: RunContext,
    ) -> MediaEntry | None:
        for query in search_queries(source):
            context.raise_if_cancelled(f"{self.name} search")
            for record in catalog.search_manga(query):
                if catalog_matches(record, source):
                    log.debug("[%s] Jikan matched %r -> MAL ID %d", context.label, source.title, record.mal_id)
                    return known_target(record.mal_id, known_targets, context, via=self.name)
        log.debug("[%s] Jikan found nothing for %r", context.label, source.title)
        return None

    def _find_anilist_target(
        self,
        catalog: MangaCatalog,
        source: MediaEntry,
        known_targets: KnownTargets,
        context: RunContext,
    ) -> MediaEntry | None:
        mal_id = context.source_id(source)
        context.raise_if_cancelled(f"{self.name} fetch")
        record = catalog.get_manga(mal_id)
        if record is None:
            return None
        for target_id, target in sorted(known_targets.items(), key=lambda item: (item[1].title, item[0])):
            if target.kind is MediaKind.MANGA and catalog_matches(record, target):
                log.debug("[%s] Jikan matched MAL %d -> %s (ID %d)", context.label, mal_id, target.title, target_id)
                return target
        log.debug("[%s] Jikan title %r not on the user's list", context.label, record.title)
        return None
