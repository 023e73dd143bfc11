"""Shared title matching helpers used by the resolution strategies."""

from __future__ import annotations

from .heuristics import (
    SERIES_MIN_EPISODES,
    SPECIAL_MAX_EPISODES,
    MatchRejection,
    identical_title,
    looks_like_special_vs_series,
    rejection_for,
)
from .titles import (
    SIMILARITY_THRESHOLD,
    normalize_title,
    same_title,
    title_similarity,
)

__all__ = [
    "SERIES_MIN_EPISODES",
    "SIMILARITY_THRESHOLD",
    "SPECIAL_MAX_EPISODES",
    "MatchRejection",
    "identical_title",
    "looks_like_special_vs_series",
    "normalize_title",
    "rejection_for",
    "same_title",
    "title_similarity",
]
