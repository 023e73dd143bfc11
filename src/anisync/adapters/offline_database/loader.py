"""Load (and keep current) the anime-offline-database crosswalk table.

The database lists every anime with its URLs on many sites; entries that carry
both a MAL and an AniList URL become one ID pair. The JSON file is downloaded
from the project's latest GitHub release and refreshed when a newer release
tag appears.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final

import httpx
from pydantic import ValidationError

from anisync.adapters.http_resilience import ResilientClient
from anisync.domain.model import MediaKind, Service

from .schema import LatestRelease, OfflineDatabaseEntry, OfflineDatabasePayload

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from anisync.adapters.http_resilience import ClientFactory
    from anisync.config import OfflineDatabaseConfig

log = getLogger(__name__)

MAL_ANIME_URL_PREFIX: Final[str] = "https://myanimelist.net/anime/"
ANILIST_ANIME_URL_PREFIX: Final[str] = "https://anilist.co/anime/"


class OfflineDatabaseError(RuntimeError):
    """Raised when no usable offline database can be loaded or downloaded."""


@dataclass(slots=True)
class OfflineDatabase:
    mal_to_anilist: dict[int, int] = field(default_factory=dict[int, int])
    anilist_to_mal: dict[int, int] = field(default_factory=dict[int, int])
    last_update: str | None = None

    def __len__(self) -> int:
        return len(self.mal_to_anilist)

    def lookup(self, service: Service, kind: MediaKind, media_id: int) -> int | None:
        if kind is not MediaKind.ANIME:
            return None
        table = self.anilist_to_mal if service is Service.ANILIST else self.mal_to_anilist
        return table.get(media_id)


def _id_from_url(url: str, prefix: str) -> int | None:
    if not url.startswith(prefix):
        return None
    tail = url.removeprefix(prefix).split("/", 1)[0]
    return int(tail) if tail.isdigit() and int(tail) > 0 else None


def build_offline_database(
    entries: Iterable[OfflineDatabaseEntry],
    *,
    last_update: str | None = None,
) -> OfflineDatabase:
    database = OfflineDatabase(last_update=last_update)
    for entry in entries:
        mal_id = anilist_id = None
        for url in entry.sources:
            mal_id = _id_from_url(url, MAL_ANIME_URL_PREFIX) or mal_id
            anilist_id = _id_from_url(url, ANILIST_ANIME_URL_PREFIX) or anilist_id
        if mal_id is not None and anilist_id is not None:
            database.mal_to_anilist[mal_id] = anilist_id
            database.anilist_to_mal[anilist_id] = mal_id
    return database


def parse_offline_database(path: Path) -> OfflineDatabase:
    try:
        payload = OfflineDatabasePayload.model_validate_json(path.read_bytes())
    except (OSError, ValidationError) as exc:
        raise OfflineDatabaseError(f"Cannot read offline database {path}: {exc}") from exc
    database = build_offline_database(payload.data, last_update=payload.last_update)
    log.info("Loaded offline database with %d AniList/MAL pairs", len(database))
    return database


def load_offline_database(
    config: OfflineDatabaseConfig,
    *,
    client_factory: ClientFactory | None = None,
) -> OfflineDatabase:
    """Download the database when missing, refresh it if enabled, then parse it."""

    path = config.database_path
    if not path.exists():
        try:
            download_offline_database(config, client_factory=client_factory)
        except (httpx.HTTPError, OfflineDatabaseError) as exc:
            raise OfflineDatabaseError(f"Cannot download offline database: {exc}") from exc
    elif config.auto_update:
        try:
            download_offline_database(config, client_factory=client_factory, only_if_newer=True)
        except (httpx.HTTPError, OfflineDatabaseError) as exc:
            log.warning("Offline database update failed: %s (using cached copy)", exc)
    return parse_offline_database(path)


def cached_version(config: OfflineDatabaseConfig) -> str | None:
    try:
        return config.version_path.read_text(encoding="utf-8").strip() or None
    except FileNotFoundError:
        return None


def download_offline_database(
    config: OfflineDatabaseConfig,
    *,
    client_factory: ClientFactory | None = None,
    only_if_newer: bool = False,
) -> str:
    """Fetch the latest release asset; return the release tag now on disk."""

    return asyncio.run(
        _download_async(config, client_factory or ResilientClient, only_if_newer=only_if_newer)
    )


async def _download_async(
    config: OfflineDatabaseConfig,
    client_factory: ClientFactory,
    *,
    only_if_newer: bool,
) -> str:
    async with client_factory(config.resilience) as client:
        response = await client.get(config.release_url)
        response.raise_for_status()
        try:
            release = LatestRelease.model_validate_json(response.content)
        except ValidationError as exc:
            raise OfflineDatabaseError("Unexpected release metadata") from exc

        current = cached_version(config)
        if only_if_newer and current == release.tag_name:
            log.debug("Offline database is up to date (%s)", current)
            return release.tag_name

        asset = next((a for a in release.assets if a.name == config.asset_name), None)
        if asset is None:
            raise OfflineDatabaseError(f"Release {release.tag_name} has no asset {config.asset_name}")

        log.info("Downloading offline database %s", release.tag_name)
        download = await client.get(asset.browser_download_url)
        download.raise_for_status()

    config.cache_dir.mkdir(parents=True, exist_ok=True)
    partial = config.database_path.with_suffix(".tmp")
    partial.write_bytes(download.content)
    partial.replace(config.database_path)
    config.version_path.write_text(release.tag_name, encoding="utf-8")
    return release.tag_name
