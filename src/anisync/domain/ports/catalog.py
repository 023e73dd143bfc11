"""Port onto a MAL-backed manga catalog that can be searched by title."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence


@dataclass(frozen=True, slots=True, kw_only=True)
class CatalogManga:
    """A manga as the catalog describes it; ``title`` is the romanized main title."""

    mal_id: int
    title: str = ""
    title_english: str = ""
    title_japanese: str = ""
    synonyms: tuple[str, ...] = ()


@runtime_checkable
class MangaCatalog(Protocol):
    """Raise :class:`~anisync.domain.ports.CrosswalkLookupError` when the catalog cannot answer."""

    def search_manga(self, query: str) -> Sequence[CatalogManga]: ...

    def get_manga(self, mal_id: int) -> CatalogManga | None: ...
