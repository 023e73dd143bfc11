"""Application configuration helpers."""

from __future__ import annotations

from .crosswalk import (
    ARMConfig,
    HatoConfig,
    JikanConfig,
    OfflineDatabaseConfig,
    get_arm_config,
    get_hato_config,
    get_jikan_config,
    get_offline_database_config,
)
from .env import env_flag, env_str
from .errors import ConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .storage import StorageConfig, get_storage_config
from .sync import StrategyToggles, get_strategy_toggles

__all__ = [
    "ARMConfig",
    "CacheConfig",
    "ConfigurationError",
    "HatoConfig",
    "JikanConfig",
    "OfflineDatabaseConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "StrategyToggles",
    "configure_logging",
    "env_flag",
    "env_str",
    "get_arm_config",
    "get_hato_config",
    "get_jikan_config",
    "get_offline_database_config",
    "get_storage_config",
    "get_strategy_toggles",
]
