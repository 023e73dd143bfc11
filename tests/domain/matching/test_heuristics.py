from __future__ import annotations

import pytest

from anisync.domain.matching import identical_title, looks_like_special_vs_series, rejection_for
from anisync.domain.model import AnimeEntry, MangaEntry


def test_rejects_different_foreign_id() -> None:
    rejection = rejection_for(
        AnimeEntry(title_en="DanMachi", episodes=1),
        AnimeEntry(title_en="DanMachi", episodes=1),
        source_foreign_id=44983,
        candidate_id=28121,
    )

    assert rejection is not None
    assert rejection.reason == "different foreign id"
    assert rejection.detail == "(44983 vs 28121)"


def test_accepts_close_episode_counts() -> None:
    assert (
        rejection_for(
            AnimeEntry(episodes=12),
            AnimeEntry(episodes=13),
            source_foreign_id=0,
            candidate_id=500,
        )
        is None
    )


@pytest.mark.parametrize("source_episodes", [0, 1])
def test_rejects_special_against_series(source_episodes: int) -> None:
    rejection = rejection_for(
        AnimeEntry(title_native="ガールズバンドクライ なぁ、未来。", episodes=source_episodes),
        AnimeEntry(title_native="ガールズバンドクライ", episodes=13),
        source_foreign_id=0,
        candidate_id=55102,
    )

    assert rejection is not None
    assert rejection.reason == "episode count mismatch (special vs series)"
    assert rejection.detail == f"({source_episodes} vs 13)"


@pytest.mark.parametrize(
    ("source_episodes", "candidate_episodes"),
    [
        (2, 13),
        (1, 4),
        (0, 4),
        (1, 2),
    ],
)
def test_accepts_when_not_special_vs_series(source_episodes: int, candidate_episodes: int) -> None:
    source = AnimeEntry(title_en="Short OVA!", episodes=source_episodes)
    candidate = AnimeEntry(title_en="Short OVA", episodes=candidate_episodes)

    assert not looks_like_special_vs_series(source, candidate)
    assert rejection_for(source, candidate, source_foreign_id=0, candidate_id=12345) is None


def test_same_foreign_id_is_never_rejected() -> None:
    assert (
        rejection_for(
            AnimeEntry(title_en="Girls Band Cry", episodes=0),
            AnimeEntry(title_en="Girls Band Cry!", episodes=13),
            source_foreign_id=55102,
            candidate_id=55102,
        )
        is None
    )


def test_identical_title_is_not_rejected() -> None:
    source = AnimeEntry(title_native="Girls Band Cry", episodes=0)
    candidate = AnimeEntry(title_native="Girls Band Cry", episodes=13)

    assert identical_title(source, candidate)
    assert rejection_for(source, candidate, source_foreign_id=0, candidate_id=55102) is None


def test_identical_title_ignores_empty_variants() -> None:
    assert not identical_title(AnimeEntry(), AnimeEntry())
    assert not identical_title(AnimeEntry(title_en="Anime A"), AnimeEntry(title_en="Anime B"))


def test_manga_chapter_totals_never_reject() -> None:
    assert (
        rejection_for(
            MangaEntry(title_en="One Piece!", chapters=1),
            MangaEntry(title_en="One Piece", chapters=1100),
            source_foreign_id=0,
            candidate_id=13,
        )
        is None
    )
    assert (
        rejection_for(
            MangaEntry(chapters=500),
            MangaEntry(chapters=1100),
            source_foreign_id=0,
            candidate_id=13,
        )
        is None
    )
