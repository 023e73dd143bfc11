"""Configuration for the ID crosswalk sources (Hato, ARM, Jikan, offline database)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from .env import env_flag, env_str
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig
from .storage import get_storage_config

if TYPE_CHECKING:
    from pathlib import Path

    from .storage import StorageConfig

DEFAULT_HATO_BASE_URL: Final[str] = "https://hato.malupdaterosx.moe"
DEFAULT_HATO_USER_AGENT: Final[str] = "anisync/1.0 (+https://github.com/anisync/anisync)"
DEFAULT_ARM_BASE_URL: Final[str] = "https://arm.haglund.dev"
ARM_CACHE_TTL_SECONDS: Final[float] = 7 * 24 * 60 * 60
DEFAULT_JIKAN_BASE_URL: Final[str] = "https://api.jikan.moe/v4"
JIKAN_CACHE_TTL_SECONDS: Final[float] = 7 * 24 * 60 * 60
OFFLINE_DATABASE_RELEASE_URL: Final[str] = (
    "https://api.github.com/repos/manami-project/anime-offline-database/releases/latest"
)
OFFLINE_DATABASE_ASSET_NAME: Final[str] = "anime-offline-database-minified.json"


@dataclass(frozen=True, slots=True)
class HatoConfig:
    enabled: bool
    cache_path: Path
    resilience: ResilienceConfig


@dataclass(frozen=True, slots=True)
class ARMConfig:
    enabled: bool
    resilience: ResilienceConfig


@dataclass(frozen=True, slots=True)
class JikanConfig:
    enabled: bool
    resilience: ResilienceConfig


@dataclass(frozen=True, slots=True)
class OfflineDatabaseConfig:
    enabled: bool
    auto_update: bool
    cache_dir: Path
    release_url: str = OFFLINE_DATABASE_RELEASE_URL
    asset_name: str = OFFLINE_DATABASE_ASSET_NAME
    resilience: ResilienceConfig = field(
        default_factory=lambda: ResilienceConfig(name="offline-database", timeout_seconds=120.0)
    )

    @property
    def database_path(self) -> Path:
        return self.cache_dir / self.asset_name

    @property
    def version_path(self) -> Path:
        return self.cache_dir / "version.txt"


def get_hato_config(*, storage: StorageConfig | None = None) -> HatoConfig:
    storage_config = storage or get_storage_config()
    base_url = env_str("ANISYNC_HATO_BASE_URL", default=DEFAULT_HATO_BASE_URL).rstrip("/")
    user_agent = env_str("ANISYNC_HATO_USER_AGENT", default=DEFAULT_HATO_USER_AGENT)
    resilience = ResilienceConfig(
        name="hato",
        base_url=base_url,
        ratelimit=RateLimit(max_calls=2, per_seconds=1.0),
        default_headers={"User-Agent": user_agent, "Accept": "application/json"},
    )
    return HatoConfig(
        enabled=env_flag("ANISYNC_HATO_ENABLED", default=True),
        cache_path=storage_config.hato_cache_path(),
        resilience=resilience,
    )


def get_arm_config(*, storage: StorageConfig | None = None) -> ARMConfig:
    storage_config = storage or get_storage_config()
    base_url = env_str("ANISYNC_ARM_BASE_URL", default=DEFAULT_ARM_BASE_URL).rstrip("/")
    resilience = ResilienceConfig(
        name="arm",
        base_url=base_url,
        ratelimit=RateLimit(max_calls=4, per_seconds=1.0),
        cache=CacheConfig(
            sqlite_path=str(storage_config.http_cache_path(ensure=False)),
            default_ttl_seconds=ARM_CACHE_TTL_SECONDS,
        ),
        default_headers={"Accept": "application/json"},
    )
    return ARMConfig(enabled=env_flag("ANISYNC_ARM_ENABLED", default=True), resilience=resilience)


def get_offline_database_config(*, storage: StorageConfig | None = None) -> OfflineDatabaseConfig:
    storage_config = storage or get_storage_config()
    return OfflineDatabaseConfig(
        enabled=env_flag("ANISYNC_OFFLINE_DB_ENABLED", default=True),
        auto_update=env_flag("ANISYNC_OFFLINE_DB_AUTO_UPDATE", default=True),
        cache_dir=storage_config.offline_database_dir(),
    )


def get_jikan_config(*, storage: StorageConfig | None = None) -> JikanConfig:
    storage_config = storage or get_storage_config()
    base_url = env_str("ANISYNC_JIKAN_BASE_URL", default=DEFAULT_JIKAN_BASE_URL).rstrip("/")
    # Jikan allows 3 requests per second; stay below it
    resilience = ResilienceConfig(
        name="jikan",
        base_url=base_url,
        timeout_seconds=15.0,
        ratelimit=RateLimit(max_calls=2, per_seconds=1.0),
        cache=CacheConfig(
            sqlite_path=str(storage_config.http_cache_path(ensure=False)),
            default_ttl_seconds=JIKAN_CACHE_TTL_SECONDS,
        ),
        default_headers={"Accept": "application/json"},
    )
    return JikanConfig(enabled=env_flag("ANISYNC_JIKAN_ENABLED", default=True), resilience=resilience)
