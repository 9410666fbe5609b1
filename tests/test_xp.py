"""Tests for XP accrual and level derivation."""

import pytest

from lingua_franca.gamification.xp import RatingTier, XpEngine
from lingua_franca.models.progress import UserProgress, level_for_xp
from lingua_franca.storage.progress import ProgressStore


@pytest.fixture
def store(tmp_path):
    return ProgressStore(tmp_path / "lf_user_stats.json")


@pytest.mark.parametrize(
    "xp, level",
    [(0, 1), (1, 1), (99, 1), (100, 2), (199, 2), (200, 3), (1050, 11)],
)
def test_level_for_xp(xp, level):
    assert level_for_xp(xp) == level


def test_award_updates_xp_count_and_level(store):
    progress = XpEngine(store).award_xp(25)

    assert progress.xp == 25
    assert progress.cards_reviewed == 1
    assert progress.level == 1
    assert store.load().xp == 25


def test_level_up_on_crossing_threshold(store):
    store.save(UserProgress(xp=90, cards_reviewed=6))

    progress = XpEngine(store).award_xp(RatingTier.OKAY)

    assert progress.xp == 105
    assert progress.level == 2


def test_sequential_awards_match_single_award(tmp_path):
    split = ProgressStore(tmp_path / "split.json")
    single = ProgressStore(tmp_path / "single.json")

    XpEngine(split).award_xp(60)
    a = XpEngine(split).award_xp(70)
    b = XpEngine(single).award_xp(130)

    assert a.xp == b.xp == 130
    assert a.level == b.level == 2
    assert a.cards_reviewed == 2
    assert b.cards_reviewed == 1


def test_level_invariant_holds_after_every_award(store):
    engine = XpEngine(store)
    for amount in [10, 15, 25, 0, 25, 25, 10, 99]:
        progress = engine.award_xp(amount)
        assert progress.level == progress.xp // 100 + 1


def test_zero_amount_still_counts_card(store):
    progress = XpEngine(store).award_xp(0)

    assert progress.xp == 0
    assert progress.cards_reviewed == 1


def test_negative_amount_rejected(store):
    with pytest.raises(ValueError):
        XpEngine(store).award_xp(-10)
    assert store.load().cards_reviewed == 0


def test_non_integer_amount_rejected(store):
    with pytest.raises(TypeError):
        XpEngine(store).award_xp(12.5)


def test_award_keeps_streak(store):
    store.save(UserProgress(streak=7))

    assert XpEngine(store).award_xp(10).streak == 7


def test_rating_tiers():
    assert [int(t) for t in RatingTier] == [10, 15, 25]
