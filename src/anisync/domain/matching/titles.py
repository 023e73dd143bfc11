"""Title normalization and similarity scoring.

Titles are compared per variant (English, native, romaji) in increasing order
of leniency: case-insensitive equality, equality after normalization, then a
fuzzy similarity score that must reach :data:`SIMILARITY_THRESHOLD`.
"""

from __future__ import annotations

import re
from logging import getLogger
from typing import TYPE_CHECKING, Final

from rapidfuzz import fuzz
from rapidfuzz.distance import Levenshtein

if TYPE_CHECKING:
    from anisync.domain.model import MediaEntry

log = getLogger(__name__)

SIMILARITY_THRESHOLD: Final[float] = 98.0

_BRACKETED = re.compile(r"\(.*\)")
_DROPPED_PUNCTUATION = str.maketrans("", "", ":!?.")
_SEPARATORS = re.compile(r"[-_]")
_WHITESPACE = re.compile(r"\s+")


def normalize_title(title: str) -> str:
    """Fold case, drop bracketed asides and punctuation, collapse separators."""

    normalized = _BRACKETED.sub("", title.casefold())
    normalized = normalized.translate(_DROPPED_PUNCTUATION)
    normalized = _SEPARATORS.sub(" ", normalized)
    return _WHITESPACE.sub(" ", normalized).strip()


def title_similarity(left: str, right: str) -> float:
    """Return a 0-100 similarity score for two raw titles."""

    if not left or not right:
        return 0.0
    normalized_left = normalize_title(left)
    normalized_right = normalize_title(right)
    if not normalized_left or not normalized_right:
        return 0.0
    if normalized_left == normalized_right:
        return 100.0
    return max(
        fuzz.ratio(normalized_left, normalized_right),
        Levenshtein.normalized_similarity(normalized_left, normalized_right) * 100.0,
    )


def _title_pairs(left: MediaEntry, right: MediaEntry) -> list[tuple[str, str]]:
    return [(a, b) for a, b in zip(left.titles, right.titles, strict=True) if a and b]


def same_title(left: MediaEntry, right: MediaEntry) -> bool:
    pairs = _title_pairs(left, right)
    if any(a.casefold() == b.casefold() for a, b in pairs):
        return True
    for a, b in pairs:
        score = title_similarity(a, b)
        if score >= SIMILARITY_THRESHOLD:
            log.debug("Fuzzy title match (%.1f): %r ~ %r", score, a, b)
            return True
    return False
