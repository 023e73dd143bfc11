from __future__ import annotations

import json
from typing import TYPE_CHECKING

import httpx
import pytest

from anisync.adapters.offline_database import (
    OfflineDatabaseEntry,
    OfflineDatabaseError,
    build_offline_database,
    download_offline_database,
    load_offline_database,
    parse_offline_database,
)
from anisync.config import OfflineDatabaseConfig, ResilienceConfig
from anisync.domain.model import MediaKind, Service
from tests.helpers.http import make_client_factory

if TYPE_CHECKING:
    from pathlib import Path

RELEASE_URL = "http://example.com/releases/latest"
ASSET_URL = "http://example.com/download/anime-offline-database-minified.json"

DATABASE = {
    "lastUpdate": "2026-10-12",
    "data": [
        {
            "title": "Fullmetal Alchemist: Brotherhood",
            "type": "TV",
            "sources": [
                "https://anidb.net/anime/6107",
                "https://anilist.co/anime/5114",
                "https://myanimelist.net/anime/5114",
            ],
        },
        {
            "title": "Frieren",
            "sources": ["https://anilist.co/anime/154587", "https://myanimelist.net/anime/52991"],
        },
        {"title": "AniList only", "sources": ["https://anilist.co/anime/999"]},
    ],
}


@pytest.fixture
def database_config(tmp_path: Path) -> OfflineDatabaseConfig:
    return OfflineDatabaseConfig(
        enabled=True,
        auto_update=True,
        cache_dir=tmp_path / "offline-db",
        release_url=RELEASE_URL,
        resilience=ResilienceConfig(name="offline-database"),
    )


def _release(tag: str) -> dict[str, object]:
    return {
        "tag_name": tag,
        "assets": [
            {"name": "anime-offline-database.json", "browser_download_url": "http://example.com/full"},
            {"name": "anime-offline-database-minified.json", "browser_download_url": ASSET_URL},
        ],
    }


def test_build_pairs_entries_with_both_ids() -> None:
    entries = [OfflineDatabaseEntry.model_validate(item) for item in DATABASE["data"]]

    database = build_offline_database(entries)

    assert len(database) == 2
    assert database.lookup(Service.ANILIST, MediaKind.ANIME, 154587) == 52991
    assert database.lookup(Service.MYANIMELIST, MediaKind.ANIME, 5114) == 5114
    assert database.lookup(Service.ANILIST, MediaKind.ANIME, 999) is None
    assert database.lookup(Service.ANILIST, MediaKind.MANGA, 154587) is None


def test_parse_rejects_invalid_file(tmp_path: Path) -> None:
    path = tmp_path / "db.json"
    path.write_text('{"data": "nope"}')

    with pytest.raises(OfflineDatabaseError):
        parse_offline_database(path)


def test_load_downloads_missing_database(database_config: OfflineDatabaseConfig) -> None:
    requested: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(str(request.url))
        if str(request.url) == RELEASE_URL:
            return httpx.Response(200, json=_release("2026-41"))
        return httpx.Response(200, content=json.dumps(DATABASE).encode())

    database = load_offline_database(database_config, client_factory=make_client_factory(handler))

    assert requested == [RELEASE_URL, ASSET_URL]
    assert database.last_update == "2026-10-12"
    assert database.lookup(Service.MYANIMELIST, MediaKind.ANIME, 52991) == 154587
    assert database_config.version_path.read_text() == "2026-41"
    assert not database_config.database_path.with_suffix(".tmp").exists()


def test_up_to_date_database_is_not_downloaded_again(database_config: OfflineDatabaseConfig) -> None:
    database_config.cache_dir.mkdir(parents=True)
    database_config.database_path.write_text(json.dumps(DATABASE))
    database_config.version_path.write_text("2026-41")
    requested: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(str(request.url))
        return httpx.Response(200, json=_release("2026-41"))

    tag = download_offline_database(
        database_config, client_factory=make_client_factory(handler), only_if_newer=True
    )

    assert tag == "2026-41"
    assert requested == [RELEASE_URL]


def test_failed_update_keeps_cached_copy(database_config: OfflineDatabaseConfig) -> None:
    database_config.cache_dir.mkdir(parents=True)
    database_config.database_path.write_text(json.dumps(DATABASE))

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502)

    database = load_offline_database(database_config, client_factory=make_client_factory(handler))

    assert len(database) == 2


def test_failed_first_download_raises(database_config: OfflineDatabaseConfig) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"tag_name": "2026-41", "assets": []})

    with pytest.raises(OfflineDatabaseError, match="no asset"):
        load_offline_database(database_config, client_factory=make_client_factory(handler))
