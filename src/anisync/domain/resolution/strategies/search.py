"""Strategies that query the destination service.

Both run after every local strategy declined; each checks for cancellation
before its network call and lets service errors propagate to the chain.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from anisync.domain.matching import rejection_for, same_title
from anisync.domain.resolution.report import rejection_warning

if TYPE_CHECKING:
    from anisync.domain.model import MediaEntry
    from anisync.domain.ports import DestinationService
    from anisync.domain.resolution.context import RunContext

    from .base import KnownTargets

log = getLogger(__name__)


def _existing_by_origin_id(
    origin_id: int,
    known_targets: KnownTargets,
    context: RunContext,
) -> MediaEntry | None:
    for target in known_targets.values():
        if context.source_id(target) == origin_id:
            return target
    return None


@dataclass(slots=True, kw_only=True)
class ForeignIdSearchStrategy:
    """Ask the destination which of its entries is recorded against the source's ID.

    Whatever the service returns, the user's own entry for the same title wins
    over the fetched object so their progress is kept.
    """

    service: DestinationService | None
    enabled: bool = True

    @property
    def name(self) -> str:
        return "ForeignIdSearchStrategy"

    def attempt(
        self,
        source: MediaEntry,
        known_targets: KnownTargets,
        context: RunContext,
    ) -> MediaEntry | None:
        origin_id = context.source_id(source)
        if self.service is None or origin_id <= 0:
            return None
        context.raise_if_cancelled("foreign ID search")
        found = self.service.get_by_foreign_id(origin_id)
        if found is None:
            log.debug("[%s] No destination entry for ID %d", context.label, origin_id)
            return None
        if found.title != source.title:
            log.debug("[%s] Foreign ID %d titles differ: %r vs %r", context.label, origin_id, source.title, found.title)

        existing = known_targets.get(context.target_id(found))
        if existing is None:
            existing = _existing_by_origin_id(origin_id, known_targets, context)
        if existing is not None:
            log.debug("[%s] Foreign ID %d already on list: %s", context.label, origin_id, existing.title)
            return existing

        if found.kind is not source.kind:
            log.debug("[%s] Foreign ID %d resolved to a %s, skipping", context.label, origin_id, found.kind)
            return None
        return found


@dataclass(slots=True, kw_only=True)
class APISearchStrategy:
    """Last resort: fetch by destination ID, otherwise search by title."""

    service: DestinationService | None
    enabled: bool = True

    @property
    def name(self) -> str:
        return "APISearchStrategy"

    def attempt(
        self,
        source: MediaEntry,
        known_targets: KnownTargets,
        context: RunContext,
    ) -> MediaEntry | None:
        if self.service is None:
            return None

        target_id = context.target_id(source)
        if target_id > 0:
            existing = known_targets.get(target_id)
            if existing is not None:
                return existing
            context.raise_if_cancelled("API fetch by ID")
            return self.service.get_by_id(target_id)

        title = source.title
        if not title:
            return None
        context.raise_if_cancelled("API title search")
        for result in self.service.search_by_title(title):
            result_id = context.target_id(result)
            existing = known_targets.get(result_id)
            if existing is not None:
                rejection = rejection_for(
                    source,
                    existing,
                    source_foreign_id=target_id,
                    candidate_id=result_id,
                )
                if rejection is not None:
                    context.report.add_warning(rejection_warning(source, existing, rejection, context))
                    log.debug("[%s] Rejected search result %r: %s", context.label, existing.title, rejection.reason)
                    continue
                if not same_title(source, existing):
                    log.debug("[%s] Search result %r does not match %r", context.label, existing.title, title)
                    continue
                return existing
            if result.kind is source.kind:
                return result
            log.debug("[%s] Ignoring %s result %r for %r", context.label, result.kind, result.title, title)
        return None
