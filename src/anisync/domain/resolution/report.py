"""Report sink receiving structured warnings from a resolution pass.

Warnings carry the entries involved rather than rendered messages; turning them
into text is left to whoever consumes the report.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from anisync.domain.matching import MatchRejection
    from anisync.domain.model import MediaEntry, SyncDirection

    from .context import RunContext
    from .contracts import Conflict, UnresolvedSource


class WarningKind(StrEnum):
    REJECTED_MATCH = "rejected_match"
    UNRESOLVED = "unresolved"
    DUPLICATE_CONFLICT = "duplicate_conflict"


@dataclass(frozen=True, slots=True, kw_only=True)
class SyncWarning:
    kind: WarningKind
    source: MediaEntry
    direction: SyncDirection
    reason: str
    detail: str = ""
    candidate: MediaEntry | None = None
    conflict: Conflict | None = None


@runtime_checkable
class ReportSink(Protocol):
    def add_warning(self, warning: SyncWarning) -> None: ...


@dataclass(slots=True)
class SyncReport:
    """In-memory sink; safe to share between passes running on different threads."""

    warnings: list[SyncWarning] = field(default_factory=list["SyncWarning"])
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def add_warning(self, warning: SyncWarning) -> None:
        with self._lock:
            self.warnings.append(warning)

    def of_kind(self, kind: WarningKind) -> list[SyncWarning]:
        with self._lock:
            return [warning for warning in self.warnings if warning.kind is kind]

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)


def rejection_warning(
    source: MediaEntry,
    candidate: MediaEntry,
    rejection: MatchRejection,
    context: RunContext,
) -> SyncWarning:
    return SyncWarning(
        kind=WarningKind.REJECTED_MATCH,
        source=source,
        direction=context.options.direction,
        reason=rejection.reason,
        detail=rejection.detail,
        candidate=candidate,
    )


def unresolved_warning(unresolved: UnresolvedSource, context: RunContext) -> SyncWarning:
    return SyncWarning(
        kind=WarningKind.UNRESOLVED,
        source=unresolved.source,
        direction=context.options.direction,
        reason=unresolved.reason.value,
        detail=unresolved.detail,
    )


def conflict_warning(conflict: Conflict, context: RunContext) -> SyncWarning:
    return SyncWarning(
        kind=WarningKind.DUPLICATE_CONFLICT,
        source=conflict.loser,
        direction=context.options.direction,
        reason="duplicate target",
        detail=f"{conflict.loser_strategy} lost to {conflict.winner_strategy}",
        candidate=conflict.target,
        conflict=conflict,
    )
