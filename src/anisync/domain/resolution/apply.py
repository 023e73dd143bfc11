"""Apply kept mappings to the destination catalog and tally the outcome."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from anisync.domain.model import same_progress

from .errors import ResolutionCancelledError

if TYPE_CHECKING:
    from anisync.domain.model import ListStatus, MediaEntry, TargetID
    from anisync.domain.ports import DestinationUpdater

    from .context import RunContext
    from .contracts import ResolutionResult, ResolvedMapping

log = getLogger(__name__)


class UpdateKind(StrEnum):
    UPDATED = "updated"
    SKIPPED = "skipped"
    DRY_RUN = "dry_run"
    ERROR = "error"


@dataclass(frozen=True, slots=True, kw_only=True)
class UpdateOutcome:
    kind: UpdateKind
    source: MediaEntry
    target_id: TargetID | None = None
    reason: str = ""
    error: Exception | None = None

    @property
    def status(self) -> ListStatus | None:
        return self.source.status


@dataclass(slots=True)
class SyncStatistics:
    total: int = 0
    outcomes: list[UpdateOutcome] = field(default_factory=list["UpdateOutcome"])
    cancelled: bool = False

    def record(self, outcome: UpdateOutcome) -> None:
        self.outcomes.append(outcome)

    def count(self, kind: UpdateKind) -> int:
        return sum(1 for outcome in self.outcomes if outcome.kind is kind)

    @property
    def updated(self) -> int:
        return self.count(UpdateKind.UPDATED)

    @property
    def skipped(self) -> int:
        return self.count(UpdateKind.SKIPPED)

    @property
    def dry_run(self) -> int:
        return self.count(UpdateKind.DRY_RUN)

    @property
    def errors(self) -> int:
        return self.count(UpdateKind.ERROR)

    def status_counts(self) -> Counter[str]:
        """Per-status totals over everything except errors."""

        return Counter(
            str(outcome.status) if outcome.status is not None else "unknown"
            for outcome in self.outcomes
            if outcome.kind is not UpdateKind.ERROR
        )


def _progress_change(mapping: ResolvedMapping) -> str:
    return f"progress {mapping.target.progress} -> {mapping.source.progress}"


def apply_resolution(
    result: ResolutionResult,
    *,
    updater: DestinationUpdater | None,
    context: RunContext,
) -> SyncStatistics:
    """Push every kept mapping through ``updater``.

    Without an updater, or in dry-run mode, nothing is written and each pending
    change is recorded as a dry-run outcome. A failing update is recorded and
    the remaining mappings are still applied.
    """

    stats = SyncStatistics(total=result.considered + len(result.ignored))
    for ignored in result.ignored:
        stats.record(UpdateOutcome(kind=UpdateKind.SKIPPED, source=ignored.source, reason=ignored.reason))
    for unresolved in result.unresolved:
        stats.record(UpdateOutcome(kind=UpdateKind.SKIPPED, source=unresolved.source, reason="unmapped"))
    for conflict in result.conflicts:
        stats.record(
            UpdateOutcome(
                kind=UpdateKind.SKIPPED,
                source=conflict.loser,
                target_id=conflict.target_id,
                reason="duplicate target",
            )
        )

    dry_run = context.options.dry_run or updater is None
    for mapping in result.kept:
        try:
            context.raise_if_cancelled("destination update")
        except ResolutionCancelledError as exc:
            log.warning("[%s] Updates stopped: %s", context.label, exc)
            stats.cancelled = True
            break

        if not context.options.force_sync and same_progress(mapping.source, mapping.target):
            stats.record(
                UpdateOutcome(
                    kind=UpdateKind.SKIPPED,
                    source=mapping.source,
                    target_id=mapping.target_id,
                    reason="no changes",
                )
            )
            continue

        if dry_run or updater is None:
            log.info("[%s] Dry run: would update %r (%s)", context.label, mapping.source.title, _progress_change(mapping))
            stats.record(
                UpdateOutcome(
                    kind=UpdateKind.DRY_RUN,
                    source=mapping.source,
                    target_id=mapping.target_id,
                    reason=_progress_change(mapping),
                )
            )
            continue

        try:
            updater.update(mapping.target_id, mapping.source)
        except Exception as exc:  # noqa: BLE001
            log.error("[%s] Failed to update %r: %s", context.label, mapping.source.title, exc)
            stats.record(
                UpdateOutcome(
                    kind=UpdateKind.ERROR,
                    source=mapping.source,
                    target_id=mapping.target_id,
                    error=exc,
                )
            )
            continue
        log.info("[%s] Updated %r (%s)", context.label, mapping.source.title, _progress_change(mapping))
        stats.record(
            UpdateOutcome(
                kind=UpdateKind.UPDATED,
                source=mapping.source,
                target_id=mapping.target_id,
                reason=_progress_change(mapping),
            )
        )

    log.info(
        "[%s] Updated %d, dry run %d, skipped %d, errors %d (of %d)",
        context.label,
        stats.updated,
        stats.dry_run,
        stats.skipped,
        stats.errors,
        stats.total,
    )
    return stats
