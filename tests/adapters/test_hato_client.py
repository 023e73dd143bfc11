from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest

from anisync.adapters.crosswalk_cache import CrosswalkCache
from anisync.adapters.hato import HatoAPIError, HatoClient
from anisync.config import HatoConfig, ResilienceConfig
from anisync.domain.model import MediaKind, Service
from anisync.domain.ports import CrosswalkLookupError
from tests.helpers.http import make_client_factory

if TYPE_CHECKING:
    from pathlib import Path

    from anisync.adapters.http_resilience import ResilientClient


@pytest.fixture
def hato_config(tmp_path: Path) -> HatoConfig:
    return HatoConfig(
        enabled=True,
        cache_path=tmp_path / "mappings.json",
        resilience=ResilienceConfig(name="hato", base_url="http://example.com"),
    )


def _mapping_payload(**ids: int | None) -> dict[str, object]:
    return {"data": {"anidb_id": 69, "kitsu_id": 12, "type": 0, "type_str": "anime", **ids}}


def test_lookup_translates_anilist_to_mal(hato_config: HatoConfig) -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=_mapping_payload(anilist_id=21, mal_id=21))

    client = HatoClient(config=hato_config, client_factory=make_client_factory(handler))

    assert client.lookup(Service.ANILIST, MediaKind.ANIME, 21) == 21
    assert requests[0].url.path == "/api/mappings/anilist/anime/21"


def test_lookup_translates_mal_manga_to_anilist(hato_config: HatoConfig) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/mappings/mal/manga/2"
        return httpx.Response(200, json=_mapping_payload(anilist_id=30002, mal_id=2))

    client = HatoClient(config=hato_config, client_factory=make_client_factory(handler))

    assert client.lookup(Service.MYANIMELIST, MediaKind.MANGA, 2) == 30002


def test_not_found_and_zero_ids_mean_no_mapping(hato_config: HatoConfig) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/1"):
            return httpx.Response(404)
        return httpx.Response(200, json=_mapping_payload(anilist_id=2, mal_id=0))

    client = HatoClient(config=hato_config, client_factory=make_client_factory(handler))

    assert client.lookup(Service.ANILIST, MediaKind.ANIME, 1) is None
    assert client.lookup(Service.ANILIST, MediaKind.ANIME, 2) is None


def test_server_errors_raise_lookup_error(hato_config: HatoConfig) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    client = HatoClient(config=hato_config, client_factory=make_client_factory(handler))

    with pytest.raises(HatoAPIError, match="HTTP 503"):
        client.lookup(Service.ANILIST, MediaKind.ANIME, 1)


def test_transport_errors_are_wrapped(hato_config: HatoConfig) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    client = HatoClient(config=hato_config, client_factory=make_client_factory(handler))

    with pytest.raises(CrosswalkLookupError):
        client.lookup(Service.ANILIST, MediaKind.ANIME, 1)


def test_cache_answers_repeat_lookups(hato_config: HatoConfig) -> None:
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        if request.url.path.endswith("/404"):
            return httpx.Response(404)
        return httpx.Response(200, json=_mapping_payload(anilist_id=21, mal_id=21))

    cache = CrosswalkCache(hato_config.cache_path)
    client = HatoClient(config=hato_config, cache=cache, client_factory=make_client_factory(handler))

    for _ in range(2):
        assert client.lookup(Service.ANILIST, MediaKind.ANIME, 21) == 21
        assert client.lookup(Service.ANILIST, MediaKind.ANIME, 404) is None

    assert calls == 2
    assert client.save_cache()
    assert CrosswalkCache(hato_config.cache_path).lookup(Service.ANILIST, MediaKind.ANIME, 21) == 21


def test_client_setup_failure_raises_lookup_error(hato_config: HatoConfig) -> None:
    def factory(resilience: ResilienceConfig) -> ResilientClient:
        raise OSError("unable to open database file")

    client = HatoClient(config=hato_config, client_factory=factory)

    with pytest.raises(HatoAPIError, match="setup failed"):
        client.lookup(Service.MYANIMELIST, MediaKind.MANGA, 2)
