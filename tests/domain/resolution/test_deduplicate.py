from __future__ import annotations

from anisync.domain.model import AnimeEntry
from anisync.domain.resolution import ResolvedMapping, deduplicate_mappings


def _mapping(
    source: AnimeEntry,
    target: AnimeEntry,
    *,
    strategy: str = "TitleStrategy",
    index: int = 5,
) -> ResolvedMapping:
    return ResolvedMapping(
        source=source,
        source_id=source.anilist_id,
        target=target,
        target_id=target.mal_id,
        strategy_name=strategy,
        strategy_index=index,
    )


def test_exact_title_wins_conflict() -> None:
    target = AnimeEntry(mal_id=10, title_en="Frieren")
    fuzzy = _mapping(AnimeEntry(anilist_id=1, title_en="Frieren: Beyond Journey's End"), target)
    exact = _mapping(AnimeEntry(anilist_id=2, title_en="frieren"), target)

    result = deduplicate_mappings([fuzzy, exact])

    assert result.kept == [exact]
    [conflict] = result.conflicts
    assert conflict.loser is fuzzy.source
    assert conflict.winner is exact.source
    assert conflict.target_id == 10
    assert conflict.target is target


def test_strategy_priority_beats_exact_title() -> None:
    target = AnimeEntry(mal_id=10, title_en="Frieren")
    by_id = _mapping(AnimeEntry(anilist_id=9, title_en="Sousou no Frieren"), target, strategy="ExactIdStrategy", index=0)
    by_title = _mapping(AnimeEntry(anilist_id=1, title_en="Frieren"), target)

    result = deduplicate_mappings([by_title, by_id])

    assert result.kept == [by_id]
    assert result.conflicts[0].loser_strategy == "TitleStrategy"
    assert result.conflicts[0].winner_strategy == "ExactIdStrategy"


def test_ties_break_on_source_id() -> None:
    target = AnimeEntry(mal_id=10, title_en="Frieren")
    higher = _mapping(AnimeEntry(anilist_id=7, title_en="Frieren A"), target)
    lower = _mapping(AnimeEntry(anilist_id=3, title_en="Frieren B"), target)

    assert deduplicate_mappings([higher, lower]).kept == [lower]
    assert deduplicate_mappings([lower, higher]).kept == [lower]


def test_each_target_keeps_one_mapping_in_first_seen_order() -> None:
    first_target = AnimeEntry(mal_id=20, title_en="Mushishi")
    second_target = AnimeEntry(mal_id=10, title_en="Frieren")
    a = _mapping(AnimeEntry(anilist_id=1, title_en="Mushishi"), first_target)
    b = _mapping(AnimeEntry(anilist_id=2, title_en="Frieren"), second_target)
    c = _mapping(AnimeEntry(anilist_id=3, title_en="Frieren 2"), second_target)

    result = deduplicate_mappings([a, b, c])

    assert [mapping.target_id for mapping in result.kept] == [20, 10]
    assert len(result.kept) + len(result.conflicts) == 3


def test_no_duplicates_pass_through() -> None:
    mappings = [
        _mapping(AnimeEntry(anilist_id=i, title_en=f"Title {i}"), AnimeEntry(mal_id=100 + i))
        for i in range(1, 4)
    ]

    result = deduplicate_mappings(mappings)

    assert result.kept == mappings
    assert result.conflicts == []
