"""ARM (arm.haglund.dev) client: anime ID crosswalk between AniList and MAL."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING, Final

import httpx
from pydantic import TypeAdapter, ValidationError

from anisync.adapters.http_resilience import ResilientClient
from anisync.domain.model import MediaKind, Service
from anisync.domain.ports import CrosswalkLookupError

from .schema import ARMIds

if TYPE_CHECKING:
    from anisync.adapters.http_resilience import ClientFactory
    from anisync.config import ARMConfig

log = getLogger(__name__)

# ARM names the services differently from our Service enum
ARM_SOURCE_NAMES: Final[dict[Service, str]] = {
    Service.ANILIST: "anilist",
    Service.MYANIMELIST: "myanimelist",
}

_RESPONSE = TypeAdapter(ARMIds | None)


class ARMAPIError(CrosswalkLookupError):
    """Raised when the ARM API returns an unexpected response."""


class ARMClient:
    """Anime-only crosswalk; responses are cached by the HTTP layer."""

    def __init__(
        self,
        *,
        config: ARMConfig,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient

    def lookup(self, service: Service, kind: MediaKind, media_id: int) -> int | None:
        if kind is not MediaKind.ANIME:
            return None
        counterpart = Service.MYANIMELIST if service is Service.ANILIST else Service.ANILIST
        ids = asyncio.run(self._fetch_ids_async(service, counterpart, media_id))
        return ids.id_for(counterpart) if ids is not None else None

    async def _fetch_ids_async(
        self,
        service: Service,
        counterpart: Service,
        media_id: int,
    ) -> ARMIds | None:
        params = {
            "source": ARM_SOURCE_NAMES[service],
            "id": str(media_id),
            "include": ARM_SOURCE_NAMES[counterpart],
        }
        url = f"{self._resilience.base_url}/api/v2/ids"
        try:
            client = self._client_factory(self._resilience)
        except (ImportError, OSError, ValueError) as exc:
            raise ARMAPIError(f"ARM client setup failed: {exc}") from exc
        async with client:
            try:
                response = await client.get(url, params=params)
            except httpx.HTTPError as exc:
                raise ARMAPIError(f"ARM request failed: {exc}") from exc

            log.debug("ARM %s %d -> HTTP %d", service, media_id, response.status_code)
            if response.status_code == httpx.codes.NOT_FOUND:
                return None
            if response.status_code != httpx.codes.OK:
                raise ARMAPIError(f"ARM returned HTTP {response.status_code}")

            try:
                return _RESPONSE.validate_json(response.content)
            except ValidationError as exc:
                raise ARMAPIError("ARM payload validation failed") from exc
