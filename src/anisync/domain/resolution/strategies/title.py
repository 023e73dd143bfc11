"""Title-based matching against the user's destination list."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from anisync.domain.matching import rejection_for, same_title
from anisync.domain.resolution.report import rejection_warning

if TYPE_CHECKING:
    from anisync.domain.model import MediaEntry
    from anisync.domain.resolution.context import RunContext

    from .base import KnownTargets

log = getLogger(__name__)


@dataclass(slots=True, kw_only=True)
class TitleStrategy:
    """Exact title first, then fuzzy title plus kind, guarded by rejection heuristics."""

    enabled: bool = True

    @property
    def name(self) -> str:
        return "TitleStrategy"

    def attempt(
        self,
        source: MediaEntry,
        known_targets: KnownTargets,
        context: RunContext,
    ) -> MediaEntry | None:
        candidates = sorted(known_targets.items(), key=lambda item: (item[1].title, item[0]))

        source_title = source.title
        if source_title:
            for target_id, target in candidates:
                if target.title == source_title:
                    log.debug("[%s] Exact title match %r (ID %d)", context.label, source_title, target_id)
                    return target

        source_foreign_id = context.target_id(source)
        for target_id, target in candidates:
            if target.kind is not source.kind or not same_title(source, target):
                continue
            rejection = rejection_for(
                source,
                target,
                source_foreign_id=source_foreign_id,
                candidate_id=target_id,
            )
            if rejection is not None:
                log.debug(
                    "[%s] Rejected %r -> %r: %s %s",
                    context.label,
                    source_title,
                    target.title,
                    rejection.reason,
                    rejection.detail,
                )
                context.report.add_warning(rejection_warning(source, target, rejection, context))
                continue
            log.debug("[%s] Fuzzy title match %r -> %r (ID %d)", context.label, source_title, target.title, target_id)
            return target

        log.debug("[%s] No title match for %r", context.label, source_title)
        return None
