"""Async HTTP client shared by the crosswalk services.

Each remote lookup source (Hato, ARM, Jikan, the offline database release feed) opens a
:class:`ResilientClient` from its :class:`~anisync.config.ResilienceConfig`:
requests go through ``httpx-retries``, are throttled by an ``aiolimiter``
bucket and, when the config asks for it, answered from a hishel SQLite cache.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING, TypedDict, Unpack

import httpx
from aiolimiter import AsyncLimiter
from hishel import AsyncSqliteStorage
from hishel.httpx import AsyncCacheClient
from httpx_retries import RetryTransport

from anisync.config import get_storage_config

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from httpx._types import HeaderTypes, QueryParamTypes, TimeoutTypes, URLTypes

    from anisync.config import CacheConfig, ResilienceConfig

log = getLogger(__name__)


class RequestOptions(TypedDict, total=False):
    params: QueryParamTypes | None
    headers: HeaderTypes | None
    timeout: TimeoutTypes


class AsyncClientOptions(TypedDict, total=False):
    base_url: str
    timeout: TimeoutTypes
    headers: HeaderTypes
    transport: httpx.AsyncBaseTransport
    follow_redirects: bool


@dataclass(slots=True)
class RequestStats:
    sent: int = 0
    from_cache: int = 0


class ResilientClient:
    """``httpx.AsyncClient`` for one crosswalk service; use as ``async with``.

    The limiter lives as long as the client, so a batch of lookups made through
    one client shares the service's rate limit.
    """

    def __init__(self, config: ResilienceConfig) -> None:
        self.config = config
        self.stats = RequestStats()
        self._limiter = (
            AsyncLimiter(config.ratelimit.max_calls, config.ratelimit.per_seconds)
            if config.ratelimit is not None
            else None
        )
        self._client = _open_client(config)

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self.stats.sent:
            log.debug(
                "%s: %d requests, %d answered from cache",
                self.config.name,
                self.stats.sent,
                self.stats.from_cache,
            )
        await self._client.aclose()

    async def get(self, url: URLTypes, **kwargs: Unpack[RequestOptions]) -> httpx.Response:
        if self._limiter is None:
            response = await self._client.get(url, **kwargs)
        else:
            async with self._limiter:
                response = await self._client.get(url, **kwargs)
        self.stats.sent += 1
        if response.extensions.get("hishel_from_cache"):
            self.stats.from_cache += 1
        return response


def _open_client(config: ResilienceConfig) -> httpx.AsyncClient:
    options: AsyncClientOptions = {
        "timeout": config.timeout_seconds,
        "transport": RetryTransport(retry=config.retry.build()),
        # release assets on GitHub answer with a redirect
        "follow_redirects": True,
    }
    if config.base_url is not None:
        options["base_url"] = config.base_url
    if config.default_headers:
        options["headers"] = dict(config.default_headers)

    storage = cache_storage(config.cache)
    if storage is None:
        return httpx.AsyncClient(**options)
    log.debug("%s responses are cached", config.name)
    return AsyncCacheClient(**options, storage=storage)


def cache_storage(config: CacheConfig | None) -> AsyncSqliteStorage | None:
    """Build the hishel storage for ``config``; ``None`` when caching is off."""

    if config is None or not config.enabled:
        return None
    if config.backend == "memory":
        location = ":memory:"
    elif config.backend == "sqlite":
        path = Path(config.sqlite_path) if config.sqlite_path else get_storage_config().http_cache_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        location = str(path)
    else:
        raise ValueError(f"Unsupported cache backend: {config.backend}")
    return AsyncSqliteStorage(
        database_path=location,
        default_ttl=config.default_ttl_seconds,
        refresh_ttl_on_access=config.refresh_ttl_on_access,
    )


type ClientFactory = Callable[[ResilienceConfig], ResilientClient]
