"""Pydantic models for list export files and the resolution report."""

from __future__ import annotations

from datetime import date  # noqa: TC003

from pydantic import BaseModel, ConfigDict, Field, field_validator

from anisync.domain.model import ListStatus, MediaKind, Service, SyncDirection


class ListEntryPayload(BaseModel):
    """One entry of an exported list; unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore")

    anilist_id: int = 0
    mal_id: int = 0
    title_en: str = ""
    title_native: str = ""
    title_romaji: str = ""
    status: ListStatus | None = None
    score: float = 0.0
    progress: int = 0
    started_at: date | None = None
    finished_at: date | None = None
    episodes: int = 0
    season_year: int = 0
    chapters: int = 0
    volumes: int = 0
    progress_volumes: int = 0

    @field_validator("status", mode="before")
    @classmethod
    def _blank_status(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator(
        "anilist_id",
        "mal_id",
        "episodes",
        "chapters",
        "volumes",
        "progress",
        "progress_volumes",
        "season_year",
        mode="before",
    )
    @classmethod
    def _missing_number(cls, value: object) -> object:
        return 0 if value is None else value

    @field_validator("title_en", "title_native", "title_romaji", mode="before")
    @classmethod
    def _missing_title(cls, value: object) -> object:
        return "" if value is None else value


class ListFilePayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    service: Service
    kind: MediaKind
    entries: list[ListEntryPayload] = Field(default_factory=list)


class EntryRef(BaseModel):
    anilist_id: int
    mal_id: int
    title: str


class MappingRecord(BaseModel):
    source: EntryRef
    target: EntryRef
    target_id: int
    strategy: str
    priority: int


class ConflictRecord(BaseModel):
    loser: EntryRef
    winner: EntryRef
    target: EntryRef
    target_id: int
    loser_strategy: str
    winner_strategy: str


class SkippedRecord(BaseModel):
    source: EntryRef
    reason: str
    detail: str = ""


class WarningRecord(BaseModel):
    kind: str
    source: EntryRef
    reason: str
    detail: str = ""
    candidate: EntryRef | None = None


class StatisticsRecord(BaseModel):
    total: int
    updated: int
    dry_run: int
    skipped: int
    errors: int
    by_status: dict[str, int] = Field(default_factory=dict)


class ResolutionReportPayload(BaseModel):
    direction: SyncDirection
    kind: MediaKind
    cancelled: bool
    kept: list[MappingRecord] = Field(default_factory=list)
    conflicts: list[ConflictRecord] = Field(default_factory=list)
    unresolved: list[SkippedRecord] = Field(default_factory=list)
    ignored: list[SkippedRecord] = Field(default_factory=list)
    warnings: list[WarningRecord] = Field(default_factory=list)
    statistics: StatisticsRecord | None = None
