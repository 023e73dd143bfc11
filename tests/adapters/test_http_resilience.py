from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import httpx
import pytest
from hishel import AsyncSqliteStorage

from anisync.adapters.http_resilience import ResilientClient, cache_storage
from anisync.config import CacheConfig, RateLimit, ResilienceConfig
from tests.helpers.http import make_client_factory

if TYPE_CHECKING:
    from pathlib import Path


def test_cache_storage_disabled() -> None:
    assert cache_storage(None) is None
    assert cache_storage(CacheConfig(enabled=False)) is None


def test_cache_storage_creates_sqlite_parent(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "http_cache.db"

    storage = cache_storage(CacheConfig(sqlite_path=str(path), default_ttl_seconds=60))

    assert isinstance(storage, AsyncSqliteStorage)
    assert path.parent.is_dir()


def test_cache_storage_rejects_unknown_backend() -> None:
    with pytest.raises(ValueError, match="Unsupported cache backend"):
        cache_storage(CacheConfig(backend="redis"))  # type: ignore[arg-type]


def test_client_counts_requests() -> None:
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.headers.get("Accept", ""))
        return httpx.Response(200, json={})

    config = ResilienceConfig(name="test", ratelimit=RateLimit(max_calls=10, per_seconds=1.0))
    factory = make_client_factory(handler)

    async def run() -> ResilientClient:
        async with factory(config) as client:
            await client.get("http://example.com/a")
            await client.get("http://example.com/b", headers={"Accept": "application/json"})
        return client

    client = asyncio.run(run())

    assert client.stats.sent == 2
    assert client.stats.from_cache == 0
    assert seen == ["*/*", "application/json"]
