"""Translate list exports into domain entries and resolution results into a report."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from anisync.domain.model import AnimeEntry, MangaEntry, MediaKind

from .schema import (
    ConflictRecord,
    EntryRef,
    ListEntryPayload,
    ListFilePayload,
    MappingRecord,
    ResolutionReportPayload,
    SkippedRecord,
    StatisticsRecord,
    WarningRecord,
)

if TYPE_CHECKING:
    from pathlib import Path

    from anisync.domain.model import MediaEntry, Service
    from anisync.domain.resolution import ResolutionResult, RunContext, SyncStatistics, SyncWarning

log = getLogger(__name__)


class ListFileError(ValueError):
    """Raised when a list export cannot be read or validated."""


def parse_list_entry(payload: ListEntryPayload, kind: MediaKind) -> MediaEntry:
    common = {
        "anilist_id": payload.anilist_id,
        "mal_id": payload.mal_id,
        "title_en": payload.title_en,
        "title_native": payload.title_native,
        "title_romaji": payload.title_romaji,
        "status": payload.status,
        "score": payload.score,
        "progress": payload.progress,
        "started_at": payload.started_at,
        "finished_at": payload.finished_at,
    }
    if kind is MediaKind.ANIME:
        return AnimeEntry(**common, episodes=payload.episodes, season_year=payload.season_year)
    return MangaEntry(
        **common,
        chapters=payload.chapters,
        volumes=payload.volumes,
        progress_volumes=payload.progress_volumes,
    )


def load_list_file(path: Path) -> tuple[Service, MediaKind, list[MediaEntry]]:
    try:
        payload = ListFilePayload.model_validate_json(path.read_bytes())
    except (OSError, ValidationError) as exc:
        raise ListFileError(f"Cannot read list file {path}: {exc}") from exc
    entries = [parse_list_entry(entry, payload.kind) for entry in payload.entries]
    log.info("Loaded %d %s entries (%s) from %s", len(entries), payload.kind, payload.service, path)
    return payload.service, payload.kind, entries


def _ref(entry: MediaEntry) -> EntryRef:
    return EntryRef(anilist_id=entry.anilist_id, mal_id=entry.mal_id, title=entry.title)


def _warning_record(warning: SyncWarning) -> WarningRecord:
    return WarningRecord(
        kind=warning.kind.value,
        source=_ref(warning.source),
        reason=warning.reason,
        detail=warning.detail,
        candidate=_ref(warning.candidate) if warning.candidate is not None else None,
    )


def build_report_payload(
    result: ResolutionResult,
    *,
    context: RunContext,
    warnings: list[SyncWarning],
    statistics: SyncStatistics | None = None,
) -> ResolutionReportPayload:
    return ResolutionReportPayload(
        direction=context.options.direction,
        kind=context.kind,
        cancelled=result.cancelled,
        kept=[
            MappingRecord(
                source=_ref(mapping.source),
                target=_ref(mapping.target),
                target_id=mapping.target_id,
                strategy=mapping.strategy_name,
                priority=mapping.strategy_index,
            )
            for mapping in result.kept
        ],
        conflicts=[
            ConflictRecord(
                loser=_ref(conflict.loser),
                winner=_ref(conflict.winner),
                target=_ref(conflict.target),
                target_id=conflict.target_id,
                loser_strategy=conflict.loser_strategy,
                winner_strategy=conflict.winner_strategy,
            )
            for conflict in result.conflicts
        ],
        unresolved=[
            SkippedRecord(source=_ref(item.source), reason=item.reason.value, detail=item.detail)
            for item in result.unresolved
        ],
        ignored=[SkippedRecord(source=_ref(item.source), reason=item.reason) for item in result.ignored],
        warnings=[_warning_record(warning) for warning in warnings],
        statistics=(
            StatisticsRecord(
                total=statistics.total,
                updated=statistics.updated,
                dry_run=statistics.dry_run,
                skipped=statistics.skipped,
                errors=statistics.errors,
                by_status=dict(statistics.status_counts()),
            )
            if statistics is not None
            else None
        ),
    )


def write_report(path: Path, payload: ResolutionReportPayload) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(payload.model_dump_json(indent=2), encoding="utf-8")
