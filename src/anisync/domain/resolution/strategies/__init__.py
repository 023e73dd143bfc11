"""Match strategies, in their default chain order."""

from __future__ import annotations

from .base import KnownTargets, MatchStrategy
from .catalog import MangaCatalogStrategy
from .identity import (
    CrosswalkStrategy,
    ExactIdStrategy,
    ManualMappingStrategy,
    arm_strategy,
    hato_strategy,
    offline_database_strategy,
)
from .search import APISearchStrategy, ForeignIdSearchStrategy
from .title import TitleStrategy

__all__ = [
    "APISearchStrategy",
    "CrosswalkStrategy",
    "ExactIdStrategy",
    "ForeignIdSearchStrategy",
    "KnownTargets",
    "MangaCatalogStrategy",
    "ManualMappingStrategy",
    "MatchStrategy",
    "TitleStrategy",
    "arm_strategy",
    "hato_strategy",
    "offline_database_strategy",
]
