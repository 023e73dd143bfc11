"""ID-based strategies: exact foreign ID, operator mappings, crosswalk tables."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from anisync.domain.model import MediaKind
from anisync.domain.ports import CrosswalkLookupError

from .base import known_target

if TYPE_CHECKING:
    from anisync.domain.model import MediaEntry
    from anisync.domain.ports import CrosswalkLookup
    from anisync.domain.resolution.context import RunContext

    from .base import KnownTargets

log = getLogger(__name__)


@dataclass(slots=True, kw_only=True)
class ExactIdStrategy:
    """Match on the foreign ID the source already carries."""

    enabled: bool = True

    @property
    def name(self) -> str:
        return "ExactIdStrategy"

    def attempt(
        self,
        source: MediaEntry,
        known_targets: KnownTargets,
        context: RunContext,
    ) -> MediaEntry | None:
        foreign_id = context.target_id(source)
        if foreign_id <= 0:
            return None
        target = known_targets.get(foreign_id)
        if target is not None:
            log.debug("[%s] Found target by ID %d: %s", context.label, foreign_id, target.title)
        return target


@dataclass(slots=True, kw_only=True)
class ManualMappingStrategy:
    """Follow an operator-supplied ID pair; only targets already on the list count."""

    mappings: CrosswalkLookup | None
    enabled: bool = True

    @property
    def name(self) -> str:
        return "ManualMappingStrategy"

    def attempt(
        self,
        source: MediaEntry,
        known_targets: KnownTargets,
        context: RunContext,
    ) -> MediaEntry | None:
        origin_id = context.source_id(source)
        if self.mappings is None or origin_id <= 0:
            return None
        target_id = self.mappings.lookup(context.options.direction.origin, source.kind, origin_id)
        if target_id is None:
            return None
        return known_target(target_id, known_targets, context, via="manual mapping")


@dataclass(slots=True, kw_only=True)
class CrosswalkStrategy:
    """Translate the source's origin ID through a crosswalk table.

    Remote tables are consulted only after a cancellation check. A
    :class:`CrosswalkLookupError` makes the strategy decline instead of failing
    the source, so an unreachable mapping service never blocks title matching.
    """

    name: str
    table: CrosswalkLookup | None
    kinds: frozenset[MediaKind] = field(default_factory=lambda: frozenset(MediaKind))
    remote: bool = False
    enabled: bool = True

    def attempt(
        self,
        source: MediaEntry,
        known_targets: KnownTargets,
        context: RunContext,
    ) -> MediaEntry | None:
        origin_id = context.source_id(source)
        if self.table is None or source.kind not in self.kinds or origin_id <= 0:
            return None
        if self.remote:
            context.raise_if_cancelled(f"{self.name} lookup")
        try:
            target_id = self.table.lookup(context.options.direction.origin, source.kind, origin_id)
        except CrosswalkLookupError as exc:
            log.warning("[%s] %s lookup for ID %d failed: %s", context.label, self.name, origin_id, exc)
            return None
        if target_id is None:
            return None
        return known_target(target_id, known_targets, context, via=self.name)


def offline_database_strategy(table: CrosswalkLookup | None, *, enabled: bool = True) -> CrosswalkStrategy:
    return CrosswalkStrategy(
        name="OfflineDatabaseStrategy",
        table=table,
        kinds=frozenset({MediaKind.ANIME}),
        enabled=enabled and table is not None,
    )


def hato_strategy(table: CrosswalkLookup | None, *, enabled: bool = True) -> CrosswalkStrategy:
    return CrosswalkStrategy(
        name="HatoStrategy",
        table=table,
        remote=True,
        enabled=enabled and table is not None,
    )


def arm_strategy(table: CrosswalkLookup | None, *, enabled: bool = True) -> CrosswalkStrategy:
    return CrosswalkStrategy(
        name="ARMStrategy",
        table=table,
        kinds=frozenset({MediaKind.ANIME}),
        remote=True,
        enabled=enabled and table is not None,
    )
