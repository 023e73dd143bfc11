"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from anisync.adapters.arm import ARMClient
from anisync.adapters.crosswalk_cache import CrosswalkCache
from anisync.adapters.hato import HatoClient
from anisync.adapters.jikan import JikanClient
from anisync.adapters.mappings import ManualMappings, load_mappings
from anisync.adapters.offline_database import OfflineDatabaseError, load_offline_database
from anisync.config import (
    StrategyToggles,
    get_arm_config,
    get_hato_config,
    get_jikan_config,
    get_offline_database_config,
    get_storage_config,
)
from anisync.domain.resolution import (
    IgnoreRules,
    ResolutionEngine,
    ResolutionPass,
    StrategyChain,
    apply_resolution,
)
from anisync.domain.resolution.strategies import (
    APISearchStrategy,
    ExactIdStrategy,
    ForeignIdSearchStrategy,
    MangaCatalogStrategy,
    ManualMappingStrategy,
    TitleStrategy,
    arm_strategy,
    hato_strategy,
    offline_database_strategy,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from anisync.adapters.offline_database import OfflineDatabase
    from anisync.config import StorageConfig
    from anisync.domain.model import MediaEntry
    from anisync.domain.ports import DestinationService, DestinationUpdater
    from anisync.domain.resolution import ResolutionResult, RunContext, SyncStatistics

log = getLogger(__name__)


@dataclass(slots=True)
class CrosswalkSources:
    """Lookup tables loaded once per run and shared by every pass."""

    manual_mappings: ManualMappings = field(default_factory=ManualMappings)
    ignore: IgnoreRules = field(default_factory=IgnoreRules.from_lists)
    offline_database: OfflineDatabase | None = None
    hato: HatoClient | None = None
    arm: ARMClient | None = None
    jikan: JikanClient | None = None

    def save_caches(self) -> None:
        if self.hato is not None and self.hato.save_cache():
            log.info("Saved Hato crosswalk cache")


def load_crosswalk_sources(
    *,
    toggles: StrategyToggles,
    storage: StorageConfig | None = None,
    mappings_path: Path | None = None,
) -> CrosswalkSources:
    storage_config = storage or get_storage_config()
    manual_mappings, ignore = load_mappings(mappings_path or storage_config.mappings_path())
    sources = CrosswalkSources(manual_mappings=manual_mappings, ignore=ignore)

    if toggles.offline_database:
        database_config = get_offline_database_config(storage=storage_config)
        if database_config.enabled:
            try:
                sources.offline_database = load_offline_database(database_config)
            except OfflineDatabaseError as exc:
                log.warning("Offline database unavailable, continuing without it: %s", exc)

    if toggles.hato:
        hato_config = get_hato_config(storage=storage_config)
        if hato_config.enabled:
            sources.hato = HatoClient(config=hato_config, cache=CrosswalkCache(hato_config.cache_path))

    if toggles.arm:
        arm_config = get_arm_config(storage=storage_config)
        if arm_config.enabled:
            sources.arm = ARMClient(config=arm_config)

    if toggles.jikan:
        jikan_config = get_jikan_config(storage=storage_config)
        if jikan_config.enabled:
            sources.jikan = JikanClient(config=jikan_config)

    return sources


def build_strategy_chain(
    sources: CrosswalkSources,
    *,
    toggles: StrategyToggles,
    destination: DestinationService | None = None,
) -> StrategyChain:
    """Compose the enabled strategies in priority order."""

    chain = StrategyChain.compose(
        ExactIdStrategy(),
        ManualMappingStrategy(
            mappings=sources.manual_mappings,
            enabled=toggles.manual_mappings and len(sources.manual_mappings) > 0,
        ),
        offline_database_strategy(sources.offline_database, enabled=toggles.offline_database),
        hato_strategy(sources.hato, enabled=toggles.hato),
        arm_strategy(sources.arm, enabled=toggles.arm),
        MangaCatalogStrategy(catalog=sources.jikan, enabled=toggles.jikan and sources.jikan is not None),
        TitleStrategy(enabled=toggles.title),
        ForeignIdSearchStrategy(
            service=destination,
            enabled=toggles.foreign_id_search and destination is not None,
        ),
        APISearchStrategy(
            service=destination,
            enabled=toggles.api_search and destination is not None,
        ),
    )
    log.info("Strategy chain: %s", " -> ".join(chain.names))
    return chain


def resolve_lists(
    *,
    sources: Sequence[MediaEntry],
    targets: Sequence[MediaEntry],
    context: RunContext,
    chain: StrategyChain,
    ignore: IgnoreRules,
    updater: DestinationUpdater | None = None,
) -> tuple[ResolutionResult, SyncStatistics]:
    """Run one resolution pass and apply (or dry-run) its kept mappings."""

    log.info(
        "Starting %s resolution: sources=%d, targets=%d, force_sync=%s, dry_run=%s",
        context.label,
        len(sources),
        len(targets),
        context.options.force_sync,
        context.options.dry_run,
    )
    engine = ResolutionEngine(ResolutionPass(chain=chain, ignore=ignore))
    result = engine.run(sources, targets, context)
    statistics = apply_resolution(result, updater=updater, context=context)
    log.info(
        f"Finished {context.label} resolution: kept={len(result.kept)}, "
        f"conflicts={len(result.conflicts)}, unresolved={len(result.unresolved)}, "
        f"ignored={len(result.ignored)}, cancelled={result.cancelled}"
    )
    return result, statistics
