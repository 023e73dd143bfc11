"""Hato mapping service client (anime and manga, AniList <-> MAL)."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from anisync.adapters.http_resilience import ResilientClient
from anisync.domain.model import Service
from anisync.domain.ports import CrosswalkLookupError

from .schema import HatoMapping, HatoMappingResponse

if TYPE_CHECKING:
    from anisync.adapters.crosswalk_cache import CrosswalkCache
    from anisync.adapters.http_resilience import ClientFactory
    from anisync.config import HatoConfig
    from anisync.domain.model import MediaKind

log = getLogger(__name__)


class HatoAPIError(CrosswalkLookupError):
    """Raised when the Hato API returns an unexpected response."""


def _counterpart(service: Service) -> Service:
    return Service.MYANIMELIST if service is Service.ANILIST else Service.ANILIST


class HatoClient:
    """Crosswalk lookups against Hato, remembered in a :class:`CrosswalkCache`.

    Negative answers (404) are cached as well, so each ID is asked at most once
    per cache lifetime.
    """

    def __init__(
        self,
        *,
        config: HatoConfig,
        cache: CrosswalkCache | None = None,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._cache = cache
        self._client_factory = client_factory or ResilientClient

    def lookup(self, service: Service, kind: MediaKind, media_id: int) -> int | None:
        if self._cache is not None:
            cached = self._cache.get(service, kind, media_id)
            if cached is not None:
                log.debug("Hato cache hit for %s %s %d", service, kind, media_id)
                return cached.target_id

        mapping = self.fetch_mapping(service, kind, media_id)
        target_id = mapping.id_for(_counterpart(service)) if mapping is not None else None
        if self._cache is not None:
            self._cache.set(service, kind, media_id, target_id)
        return target_id

    def fetch_mapping(self, service: Service, kind: MediaKind, media_id: int) -> HatoMapping | None:
        return asyncio.run(self._fetch_mapping_async(service, kind, media_id))

    def save_cache(self) -> bool:
        return self._cache.save() if self._cache is not None else False

    async def _fetch_mapping_async(
        self,
        service: Service,
        kind: MediaKind,
        media_id: int,
    ) -> HatoMapping | None:
        url = f"{self._resilience.base_url}/api/mappings/{service}/{kind}/{media_id}"
        try:
            client = self._client_factory(self._resilience)
        except (ImportError, OSError, ValueError) as exc:
            raise HatoAPIError(f"Hato client setup failed: {exc}") from exc
        async with client:
            try:
                response = await client.get(url)
            except httpx.HTTPError as exc:
                raise HatoAPIError(f"Hato request failed: {exc}") from exc

            if response.status_code == httpx.codes.NOT_FOUND:
                log.debug("Hato has no mapping for %s %s %d", service, kind, media_id)
                return None
            if response.status_code != httpx.codes.OK:
                raise HatoAPIError(f"Hato returned HTTP {response.status_code} for {url}")

            try:
                payload = HatoMappingResponse.model_validate_json(response.content)
            except ValidationError as exc:
                raise HatoAPIError("Hato payload validation failed") from exc
        return payload.data
