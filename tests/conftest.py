from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from anisync.domain.model import AnimeEntry, ListStatus, MediaKind, SyncDirection
from anisync.domain.resolution import RunContext, SyncOptions, SyncReport

if TYPE_CHECKING:
    from collections.abc import Callable


@pytest.fixture
def make_context() -> Callable[..., RunContext]:
    def factory(
        direction: SyncDirection = SyncDirection.ANILIST_TO_MAL,
        *,
        kind: MediaKind = MediaKind.ANIME,
        force_sync: bool = False,
        dry_run: bool = False,
    ) -> RunContext:
        return RunContext(
            options=SyncOptions(direction=direction, force_sync=force_sync, dry_run=dry_run),
            kind=kind,
            report=SyncReport(),
        )

    return factory


@pytest.fixture
def forward_context(make_context: Callable[..., RunContext]) -> RunContext:
    return make_context(SyncDirection.ANILIST_TO_MAL)


@pytest.fixture
def reverse_context(make_context: Callable[..., RunContext]) -> RunContext:
    return make_context(SyncDirection.MAL_TO_ANILIST)


@pytest.fixture
def make_anime() -> Callable[..., AnimeEntry]:
    def factory(title: str, *, status: ListStatus | None = ListStatus.CURRENT, **fields: object) -> AnimeEntry:
        return AnimeEntry(title_en=title, status=status, **fields)  # type: ignore[arg-type]

    return factory
