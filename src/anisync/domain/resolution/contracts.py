"""Values produced and consumed by the resolution pass and the deduplicator."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterable

    from anisync.domain.model import MediaEntry, TargetID

DEFAULT_IGNORED_TITLES: Final[frozenset[str]] = frozenset(
    {"scott pilgrim takes off", "bocchi the rock! recap part 2"}
)
FORCE_SYNC_STRATEGY: Final[str] = "ForceSync"


@dataclass(frozen=True, slots=True, kw_only=True)
class MatchResult:
    """Target found by the strategy chain for one source."""

    target: MediaEntry
    target_id: TargetID
    strategy_name: str
    strategy_index: int


@dataclass(frozen=True, slots=True, kw_only=True)
class ResolvedMapping:
    source: MediaEntry
    source_id: int
    target: MediaEntry
    target_id: TargetID
    strategy_name: str
    strategy_index: int


@dataclass(frozen=True, slots=True, kw_only=True)
class Conflict:
    """A mapping discarded because another source claimed the same target."""

    loser: MediaEntry
    winner: MediaEntry
    target: MediaEntry
    target_id: TargetID
    loser_strategy: str
    winner_strategy: str


class UnresolvedReason(StrEnum):
    NOT_FOUND = "not_found"
    STRATEGY_FAILED = "strategy_failed"
    MISSING_FOREIGN_ID = "missing_foreign_id"


@dataclass(frozen=True, slots=True, kw_only=True)
class UnresolvedSource:
    source: MediaEntry
    reason: UnresolvedReason
    detail: str = ""


@dataclass(frozen=True, slots=True, kw_only=True)
class IgnoredSource:
    source: MediaEntry
    reason: str


class PassState(StrEnum):
    IDLE = "idle"
    RESOLVING = "resolving"
    DEDUPLICATING = "deduplicating"
    DONE = "done"


@dataclass(slots=True, kw_only=True)
class ResolutionResult:
    """Outcome of one resolution pass.

    ``cancelled`` is set when the pass stopped early; ``kept`` and ``conflicts``
    then cover only the sources visited before cancellation.
    """

    kept: list[ResolvedMapping] = field(default_factory=list["ResolvedMapping"])
    conflicts: list[Conflict] = field(default_factory=list["Conflict"])
    unresolved: list[UnresolvedSource] = field(default_factory=list["UnresolvedSource"])
    ignored: list[IgnoredSource] = field(default_factory=list["IgnoredSource"])
    cancelled: bool = False

    @property
    def considered(self) -> int:
        return len(self.kept) + len(self.conflicts) + len(self.unresolved)


@dataclass(frozen=True, slots=True, kw_only=True)
class IgnoreRules:
    """Sources the operator never wants synced, matched by title or catalog ID."""

    titles: frozenset[str] = frozenset()
    anilist_ids: frozenset[int] = frozenset()
    mal_ids: frozenset[int] = frozenset()

    @classmethod
    def from_lists(
        cls,
        *,
        titles: Iterable[str] = (),
        anilist_ids: Iterable[int] = (),
        mal_ids: Iterable[int] = (),
        include_defaults: bool = True,
    ) -> IgnoreRules:
        folded = {title.strip().casefold() for title in titles if title.strip()}
        if include_defaults:
            folded |= DEFAULT_IGNORED_TITLES
        return cls(
            titles=frozenset(folded),
            anilist_ids=frozenset(anilist_ids),
            mal_ids=frozenset(mal_ids),
        )

    def reason_for(self, entry: MediaEntry) -> str | None:
        if any(title and title.casefold() in self.titles for title in entry.titles):
            return "title in ignore list"
        if entry.anilist_id > 0 and entry.anilist_id in self.anilist_ids:
            return "AniList ID in ignore list"
        if entry.mal_id > 0 and entry.mal_id in self.mal_ids:
            return "MAL ID in ignore list"
        return None
