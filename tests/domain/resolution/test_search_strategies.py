from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from anisync.domain.model import AnimeEntry, MangaEntry
from anisync.domain.resolution import ResolutionCancelledError, SyncReport, WarningKind
from anisync.domain.resolution.strategies import APISearchStrategy, ForeignIdSearchStrategy

if TYPE_CHECKING:
    from anisync.domain.resolution import RunContext
    from tests.helpers.resolution import FakeDestinationService


def test_foreign_id_search_prefers_users_entry(
    reverse_context: RunContext, fake_destination: FakeDestinationService
) -> None:
    existing = AnimeEntry(anilist_id=101, mal_id=37341, title_en="Sword Art Online", progress=7)
    fetched = AnimeEntry(anilist_id=101, mal_id=37341, title_en="Sword Art Online", progress=0)
    fake_destination.by_foreign_id[37341] = fetched
    source = AnimeEntry(anilist_id=999, mal_id=37341, title_en="SAO")

    strategy = ForeignIdSearchStrategy(service=fake_destination)
    result = strategy.attempt(source, {101: existing}, reverse_context)

    assert result is existing
    assert result.progress == 7
    assert fake_destination.calls == [("get_by_foreign_id", 37341)]


def test_foreign_id_search_finds_existing_by_origin_id(
    reverse_context: RunContext, fake_destination: FakeDestinationService
) -> None:
    existing = AnimeEntry(anilist_id=101, mal_id=37341, progress=7)
    fake_destination.by_foreign_id[37341] = AnimeEntry(anilist_id=555, mal_id=37341)

    strategy = ForeignIdSearchStrategy(service=fake_destination)
    result = strategy.attempt(AnimeEntry(mal_id=37341), {101: existing}, reverse_context)

    assert result is existing


def test_foreign_id_search_returns_fetched_entry(
    forward_context: RunContext, fake_destination: FakeDestinationService
) -> None:
    fetched = AnimeEntry(anilist_id=20, mal_id=40, title_en="Dandadan")
    fake_destination.by_foreign_id[20] = fetched

    strategy = ForeignIdSearchStrategy(service=fake_destination)

    assert strategy.attempt(AnimeEntry(anilist_id=20), {}, forward_context) is fetched


def test_foreign_id_search_skips_other_kind(
    forward_context: RunContext, fake_destination: FakeDestinationService
) -> None:
    fake_destination.by_foreign_id[20] = MangaEntry(anilist_id=20, mal_id=40)

    strategy = ForeignIdSearchStrategy(service=fake_destination)

    assert strategy.attempt(AnimeEntry(anilist_id=20), {}, forward_context) is None


def test_foreign_id_search_checks_cancellation_first(
    forward_context: RunContext, fake_destination: FakeDestinationService
) -> None:
    forward_context.cancel_event.set()
    strategy = ForeignIdSearchStrategy(service=fake_destination)

    with pytest.raises(ResolutionCancelledError):
        strategy.attempt(AnimeEntry(anilist_id=20), {}, forward_context)
    assert fake_destination.calls == []


def test_api_search_fetches_by_destination_id(
    forward_context: RunContext, fake_destination: FakeDestinationService
) -> None:
    fetched = AnimeEntry(mal_id=30, title_en="Kaiju No. 8")
    fake_destination.by_id[30] = fetched

    strategy = APISearchStrategy(service=fake_destination)

    assert strategy.attempt(AnimeEntry(anilist_id=1, mal_id=30), {}, forward_context) is fetched
    assert fake_destination.calls == [("get_by_id", 30)]


def test_api_search_uses_known_target_without_calling(
    forward_context: RunContext, fake_destination: FakeDestinationService
) -> None:
    known = AnimeEntry(mal_id=30, title_en="Kaiju No. 8")

    strategy = APISearchStrategy(service=fake_destination)

    assert strategy.attempt(AnimeEntry(anilist_id=1, mal_id=30), {30: known}, forward_context) is known
    assert fake_destination.calls == []


def test_api_search_by_title_skips_other_kinds(
    forward_context: RunContext, fake_destination: FakeDestinationService
) -> None:
    manga = MangaEntry(mal_id=5, title_en="Frieren")
    anime = AnimeEntry(mal_id=6, title_en="Frieren")
    fake_destination.search_results["Frieren"] = (manga, anime)

    strategy = APISearchStrategy(service=fake_destination)

    assert strategy.attempt(AnimeEntry(anilist_id=1, title_en="Frieren"), {}, forward_context) is anime


def test_api_search_rejects_known_special(
    forward_context: RunContext, fake_destination: FakeDestinationService
) -> None:
    series = AnimeEntry(mal_id=7, title_en="Frieren", episodes=28)
    fake_destination.search_results["Frieren!"] = (AnimeEntry(mal_id=7, title_en="Frieren"),)
    special = AnimeEntry(anilist_id=1, title_en="Frieren!", episodes=1)

    strategy = APISearchStrategy(service=fake_destination)

    assert strategy.attempt(special, {7: series}, forward_context) is None
    assert isinstance(forward_context.report, SyncReport)
    assert len(forward_context.report.of_kind(WarningKind.REJECTED_MATCH)) == 1


def test_api_search_checks_cancellation_before_search(
    forward_context: RunContext, fake_destination: FakeDestinationService
) -> None:
    forward_context.cancel_event.set()
    strategy = APISearchStrategy(service=fake_destination)

    with pytest.raises(ResolutionCancelledError):
        strategy.attempt(AnimeEntry(anilist_id=1, title_en="Frieren"), {}, forward_context)
    assert fake_destination.calls == []
