"""Jikan (unofficial MyAnimeList REST API) client for manga lookups.

Only the two read endpoints the matcher needs are wrapped: a title search and a
fetch by MAL ID. Responses are kept in the shared HTTP cache for a week, so a
rerun asks Jikan only about titles it has not seen recently.
"""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from anisync.adapters.http_resilience import ResilientClient
from anisync.domain.ports import CrosswalkLookupError

from .schema import JikanMangaResponse, JikanSearchResponse

if TYPE_CHECKING:
    from anisync.adapters.http_resilience import ClientFactory
    from anisync.config import JikanConfig
    from anisync.domain.ports import CatalogManga

log = getLogger(__name__)


class JikanAPIError(CrosswalkLookupError):
    """Raised when Jikan cannot be reached or answers unexpectedly."""


class JikanClient:
    def __init__(
        self,
        *,
        config: JikanConfig,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient

    def search_manga(self, query: str) -> list[CatalogManga]:
        if not query:
            return []
        payload = asyncio.run(self._get_async("/manga", {"q": query}))
        if payload is None:
            return []
        try:
            results = JikanSearchResponse.model_validate_json(payload)
        except ValidationError as exc:
            raise JikanAPIError("Jikan search payload validation failed") from exc
        log.debug("Jikan search %r: %d results", query, len(results.data))
        return [manga.to_catalog() for manga in results.data]

    def get_manga(self, mal_id: int) -> CatalogManga | None:
        if mal_id <= 0:
            return None
        payload = asyncio.run(self._get_async(f"/manga/{mal_id}", None))
        if payload is None:
            log.debug("Jikan has no manga %d", mal_id)
            return None
        try:
            response = JikanMangaResponse.model_validate_json(payload)
        except ValidationError as exc:
            raise JikanAPIError(f"Jikan manga {mal_id} payload validation failed") from exc
        return response.data.to_catalog()

    async def _get_async(self, path: str, params: dict[str, str] | None) -> bytes | None:
        """Return the response body, or ``None`` for a 404."""

        url = f"{self._resilience.base_url}{path}"
        try:
            client = self._client_factory(self._resilience)
        except (ImportError, OSError, ValueError) as exc:
            raise JikanAPIError(f"Jikan client setup failed: {exc}") from exc
        async with client:
            try:
                response = await client.get(url, params=params)
            except httpx.HTTPError as exc:
                raise JikanAPIError(f"Jikan request failed: {exc}") from exc

            log.debug("Jikan GET %s -> HTTP %d", path, response.status_code)
            if response.status_code == httpx.codes.NOT_FOUND:
                return None
            if response.status_code != httpx.codes.OK:
                raise JikanAPIError(f"Jikan returned HTTP {response.status_code} for {path}")
            return response.content
