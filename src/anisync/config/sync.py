"""Switches deciding which match strategies are composed into the chain."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_flag


@dataclass(frozen=True, slots=True)
class StrategyToggles:
    manual_mappings: bool = True
    offline_database: bool = True
    hato: bool = True
    arm: bool = True
    jikan: bool = True
    title: bool = True
    foreign_id_search: bool = True
    api_search: bool = True


def get_strategy_toggles() -> StrategyToggles:
    """Read strategy switches from ``ANISYNC_STRATEGY_*`` variables (all default on)."""

    return StrategyToggles(
        manual_mappings=env_flag("ANISYNC_STRATEGY_MANUAL_MAPPINGS", default=True),
        offline_database=env_flag("ANISYNC_OFFLINE_DB_ENABLED", default=True),
        hato=env_flag("ANISYNC_HATO_ENABLED", default=True),
        arm=env_flag("ANISYNC_ARM_ENABLED", default=True),
        jikan=env_flag("ANISYNC_JIKAN_ENABLED", default=True),
        title=env_flag("ANISYNC_STRATEGY_TITLE", default=True),
        foreign_id_search=env_flag("ANISYNC_STRATEGY_FOREIGN_ID_SEARCH", default=True),
        api_search=env_flag("ANISYNC_STRATEGY_API_SEARCH", default=True),
    )
