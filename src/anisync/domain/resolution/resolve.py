"""Resolution pass: run the chain over every eligible source in input order."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from .contracts import (
    FORCE_SYNC_STRATEGY,
    IgnoredSource,
    IgnoreRules,
    ResolvedMapping,
    UnresolvedReason,
    UnresolvedSource,
)
from .errors import NoTargetFoundError, ResolutionCancelledError, StrategyFailureError
from .report import unresolved_warning

if TYPE_CHECKING:
    from collections.abc import Iterable

    from anisync.domain.model import MediaEntry

    from .chain import StrategyChain
    from .context import RunContext
    from .strategies import KnownTargets

log = getLogger(__name__)


@dataclass(slots=True, kw_only=True)
class PassOutcome:
    resolved: list[ResolvedMapping] = field(default_factory=list["ResolvedMapping"])
    unresolved: list[UnresolvedSource] = field(default_factory=list["UnresolvedSource"])
    ignored: list[IgnoredSource] = field(default_factory=list["IgnoredSource"])
    cancelled: bool = False


@dataclass(slots=True, kw_only=True)
class ResolutionPass:
    chain: StrategyChain
    ignore: IgnoreRules = field(default_factory=IgnoreRules.from_lists)

    def run(
        self,
        sources: Iterable[MediaEntry],
        known_targets: KnownTargets,
        context: RunContext,
    ) -> PassOutcome:
        outcome = PassOutcome()
        for source in sources:
            try:
                context.raise_if_cancelled("next source")
            except ResolutionCancelledError as exc:
                self._cancelled(outcome, exc, context)
                break
            if source.status is None:
                log.debug("[%s] Skipping %r: no list status", context.label, source.title)
                continue
            reason = self.ignore.reason_for(source)
            if reason is not None:
                log.info("[%s] Ignoring %r: %s", context.label, source.title, reason)
                outcome.ignored.append(IgnoredSource(source=source, reason=reason))
                continue

            try:
                mapping = self._resolve_one(source, known_targets, context)
            except ResolutionCancelledError as exc:
                self._cancelled(outcome, exc, context)
                break
            except StrategyFailureError as exc:
                self._unresolved(outcome, source, UnresolvedReason.STRATEGY_FAILED, str(exc), context)
                continue
            except NoTargetFoundError as exc:
                self._unresolved(outcome, source, UnresolvedReason.NOT_FOUND, str(exc), context)
                continue

            if mapping is None:
                self._unresolved(
                    outcome,
                    source,
                    UnresolvedReason.MISSING_FOREIGN_ID,
                    "force sync needs a foreign ID",
                    context,
                )
                continue
            outcome.resolved.append(mapping)

        log.info(
            "[%s] Resolved %d, unresolved %d, ignored %d%s",
            context.label,
            len(outcome.resolved),
            len(outcome.unresolved),
            len(outcome.ignored),
            " (cancelled)" if outcome.cancelled else "",
        )
        return outcome

    def _resolve_one(
        self,
        source: MediaEntry,
        known_targets: KnownTargets,
        context: RunContext,
    ) -> ResolvedMapping | None:
        if context.options.force_sync:
            foreign_id = context.target_id(source)
            if foreign_id <= 0:
                return None
            return ResolvedMapping(
                source=source,
                source_id=context.source_id(source),
                target=known_targets.get(foreign_id, source),
                target_id=foreign_id,
                strategy_name=FORCE_SYNC_STRATEGY,
                strategy_index=0,
            )

        match = self.chain.find_target(source, known_targets, context)
        return ResolvedMapping(
            source=source,
            source_id=context.source_id(source),
            target=match.target,
            target_id=match.target_id,
            strategy_name=match.strategy_name,
            strategy_index=match.strategy_index,
        )

    @staticmethod
    def _unresolved(
        outcome: PassOutcome,
        source: MediaEntry,
        reason: UnresolvedReason,
        detail: str,
        context: RunContext,
    ) -> None:
        log.debug("[%s] Unresolved %r: %s", context.label, source.title, detail)
        unresolved = UnresolvedSource(source=source, reason=reason, detail=detail)
        outcome.unresolved.append(unresolved)
        context.report.add_warning(unresolved_warning(unresolved, context))

    @staticmethod
    def _cancelled(outcome: PassOutcome, exc: ResolutionCancelledError, context: RunContext) -> None:
        log.warning("[%s] Resolution stopped: %s", context.label, exc)
        outcome.cancelled = True
