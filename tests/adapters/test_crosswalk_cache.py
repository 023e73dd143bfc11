from __future__ import annotations

import json
import threading
from typing import TYPE_CHECKING

from anisync.adapters.crosswalk_cache import CrosswalkCache, cache_key
from anisync.domain.model import MediaKind, Service

if TYPE_CHECKING:
    from pathlib import Path


def test_cache_key_format() -> None:
    assert cache_key(Service.ANILIST, MediaKind.ANIME, 21) == "anilist_anime_21"
    assert cache_key(Service.MYANIMELIST, MediaKind.MANGA, 2) == "mal_manga_2"


def test_missing_file_starts_empty(tmp_path: Path) -> None:
    cache = CrosswalkCache(tmp_path / "mappings.json")

    assert len(cache) == 0
    assert cache.get(Service.ANILIST, MediaKind.ANIME, 1) is None
    assert not cache.save()
    assert not (tmp_path / "mappings.json").exists()


def test_negative_results_are_cached(tmp_path: Path) -> None:
    cache = CrosswalkCache(tmp_path / "mappings.json")

    cache.set(Service.ANILIST, MediaKind.ANIME, 1, None)

    entry = cache.get(Service.ANILIST, MediaKind.ANIME, 1)
    assert entry is not None
    assert entry.target_id is None
    assert cache.lookup(Service.ANILIST, MediaKind.ANIME, 1) is None


def test_save_writes_only_when_dirty(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "mappings.json"
    cache = CrosswalkCache(path)
    cache.set(Service.ANILIST, MediaKind.ANIME, 21, 21)

    assert cache.dirty
    assert cache.save()
    assert not cache.dirty
    assert not cache.save()

    document = json.loads(path.read_text())
    assert document["anilist_anime_21"]["target_id"] == 21
    assert "cached_at" in document["anilist_anime_21"]


def test_reload_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "mappings.json"
    cache = CrosswalkCache(path)
    cache.set(Service.MYANIMELIST, MediaKind.MANGA, 2, 30013)
    cache.set(Service.MYANIMELIST, MediaKind.MANGA, 3, None)
    cache.save()

    reloaded = CrosswalkCache(path)

    assert len(reloaded) == 2
    assert reloaded.lookup(Service.MYANIMELIST, MediaKind.MANGA, 2) == 30013
    assert reloaded.get(Service.MYANIMELIST, MediaKind.MANGA, 3) is not None
    assert not reloaded.dirty


def test_corrupt_file_is_ignored(tmp_path: Path) -> None:
    path = tmp_path / "mappings.json"
    path.write_text("{not json")

    cache = CrosswalkCache(path)

    assert len(cache) == 0


def test_concurrent_writers(tmp_path: Path) -> None:
    cache = CrosswalkCache(tmp_path / "mappings.json")

    def fill(kind: MediaKind) -> None:
        for media_id in range(1, 101):
            cache.set(Service.ANILIST, kind, media_id, media_id + 1000)

    threads = [threading.Thread(target=fill, args=(kind,)) for kind in MediaKind]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(cache) == 200
    assert cache.lookup(Service.ANILIST, MediaKind.MANGA, 50) == 1050
