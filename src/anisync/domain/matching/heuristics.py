"""False-positive guards applied to fuzzy title matches.

A candidate that looks like the same title is still rejected when the IDs
disagree or when the source is an anime special (OVA, movie, recap) and the
candidate looks like the main series.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from anisync.domain.model import MediaKind

if TYPE_CHECKING:
    from anisync.domain.model import MediaEntry

SPECIAL_MAX_EPISODES: Final[int] = 1
"""Sources with at most this many episodes (zero included) count as specials."""

SERIES_MIN_EPISODES: Final[int] = 4
"""Candidates need more than this many episodes to count as a full series."""


@dataclass(frozen=True, slots=True)
class MatchRejection:
    reason: str
    detail: str = ""


def identical_title(left: MediaEntry, right: MediaEntry) -> bool:
    """``True`` when any title variant is present on both sides and exactly equal."""

    return any(a and a == b for a, b in zip(left.titles, right.titles, strict=True))


def looks_like_special_vs_series(source: MediaEntry, candidate: MediaEntry) -> bool:
    """``True`` for an anime special matched against a longer series.

    Manga never trips this check; chapter totals drift between catalogs while a
    series is running.
    """

    if source.kind is not MediaKind.ANIME or candidate.kind is not MediaKind.ANIME:
        return False
    if identical_title(source, candidate):
        return False
    return source.unit_count <= SPECIAL_MAX_EPISODES and candidate.unit_count > SERIES_MIN_EPISODES


def rejection_for(
    source: MediaEntry,
    candidate: MediaEntry,
    *,
    source_foreign_id: int,
    candidate_id: int,
) -> MatchRejection | None:
    """Return why ``candidate`` must not be accepted for ``source``, or ``None``."""

    if source_foreign_id > 0 and candidate_id > 0:
        if source_foreign_id != candidate_id:
            return MatchRejection(
                reason="different foreign id",
                detail=f"({source_foreign_id} vs {candidate_id})",
            )
        return None

    if looks_like_special_vs_series(source, candidate):
        return MatchRejection(
            reason="episode count mismatch (special vs series)",
            detail=f"({source.unit_count} vs {candidate.unit_count})",
        )
    return None
