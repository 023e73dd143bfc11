"""One resolution pass end to end: resolve every source, then deduplicate."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from .contracts import PassState, ResolutionResult
from .deduplicate import deduplicate_mappings
from .report import conflict_warning

if TYPE_CHECKING:
    from collections.abc import Iterable

    from anisync.domain.model import MediaEntry, TargetID

    from .context import RunContext
    from .deduplicate import DeduplicateMappings
    from .resolve import ResolutionPass

log = getLogger(__name__)


def index_targets(targets: Iterable[MediaEntry], context: RunContext) -> dict[TargetID, MediaEntry]:
    """Key the user's destination entries by destination ID; entries without one are dropped."""

    indexed: dict[TargetID, MediaEntry] = {}
    for target in targets:
        target_id = context.target_id(target)
        if target_id > 0:
            indexed[target_id] = target
    return indexed


@dataclass(slots=True)
class ResolutionEngine:
    resolution_pass: ResolutionPass
    deduplicate: DeduplicateMappings = deduplicate_mappings
    state: PassState = field(default=PassState.IDLE, init=False)

    def run(
        self,
        sources: Iterable[MediaEntry],
        targets: Iterable[MediaEntry],
        context: RunContext,
    ) -> ResolutionResult:
        known_targets = index_targets(targets, context)
        log.info("[%s] Resolving against %d known targets", context.label, len(known_targets))

        self.state = PassState.RESOLVING
        outcome = self.resolution_pass.run(sources, known_targets, context)

        # partial results after cancellation are deduplicated too
        self.state = PassState.DEDUPLICATING
        deduplicated = self.deduplicate(outcome.resolved)
        for conflict in deduplicated.conflicts:
            context.report.add_warning(conflict_warning(conflict, context))
        if deduplicated.conflicts:
            log.warning("[%s] %d duplicate target claims discarded", context.label, len(deduplicated.conflicts))

        self.state = PassState.DONE
        return ResolutionResult(
            kept=deduplicated.kept,
            conflicts=deduplicated.conflicts,
            unresolved=outcome.unresolved,
            ignored=outcome.ignored,
            cancelled=outcome.cancelled,
        )
