from __future__ import annotations

from typing import TYPE_CHECKING

from anisync.domain.model import AnimeEntry, ListStatus
from anisync.domain.resolution import (
    PassState,
    ResolutionEngine,
    ResolutionPass,
    StrategyChain,
    SyncReport,
    WarningKind,
    index_targets,
)
from anisync.domain.resolution.strategies import ExactIdStrategy, TitleStrategy

if TYPE_CHECKING:
    from anisync.domain.resolution import RunContext


def _engine() -> ResolutionEngine:
    chain = StrategyChain.compose(ExactIdStrategy(), TitleStrategy())
    return ResolutionEngine(ResolutionPass(chain=chain))


def test_index_targets_drops_entries_without_destination_id(reverse_context: RunContext) -> None:
    with_id = AnimeEntry(anilist_id=3, mal_id=30)
    without_id = AnimeEntry(mal_id=40)

    assert index_targets([with_id, without_id], reverse_context) == {3: with_id}


def test_run_resolves_and_deduplicates(forward_context: RunContext) -> None:
    target = AnimeEntry(mal_id=52991, title_en="Frieren", status=ListStatus.CURRENT)
    other = AnimeEntry(mal_id=21, title_en="One Piece", status=ListStatus.CURRENT)
    sources = [
        AnimeEntry(anilist_id=1, title_en="Frieren!", status=ListStatus.CURRENT),
        AnimeEntry(anilist_id=154587, title_en="Frieren", status=ListStatus.CURRENT),
        AnimeEntry(anilist_id=21, mal_id=21, title_en="One Piece", status=ListStatus.CURRENT),
        AnimeEntry(anilist_id=5, title_en="Unknown Show", status=ListStatus.CURRENT),
    ]
    engine = _engine()

    result = engine.run(sources, [target, other], forward_context)

    assert engine.state is PassState.DONE
    assert not result.cancelled
    assert [(m.source_id, m.target_id) for m in result.kept] == [(154587, 52991), (21, 21)]
    [conflict] = result.conflicts
    assert conflict.loser is sources[0]
    assert [u.source for u in result.unresolved] == [sources[3]]
    assert result.considered == 4

    assert isinstance(forward_context.report, SyncReport)
    assert len(forward_context.report.of_kind(WarningKind.DUPLICATE_CONFLICT)) == 1
    assert len(forward_context.report.of_kind(WarningKind.UNRESOLVED)) == 1


def test_cancelled_run_keeps_partial_results(forward_context: RunContext) -> None:
    target = AnimeEntry(mal_id=21, title_en="One Piece")
    sources = [AnimeEntry(anilist_id=21, mal_id=21, title_en="One Piece", status=ListStatus.CURRENT)]
    forward_context.cancel_event.set()

    result = _engine().run(sources, [target], forward_context)

    assert result.cancelled
    assert result.kept == []
