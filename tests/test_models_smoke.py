"""Smoke tests for Pydantic models."""

from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from lingua_franca.models.progress import UserProgress, calendar_day
from lingua_franca.models.session import ContentStatus, QuizPhase, QuizState, View
from lingua_franca.models.vocabulary import DifficultyLevel, Register, VocabCard


class TestUserProgress:
    def test_defaults(self):
        progress = UserProgress()
        assert progress.xp == 0
        assert progress.streak == 0
        assert progress.cards_reviewed == 0
        assert progress.level == 1
        assert isinstance(progress.last_login, datetime)

    def test_level_derived_from_xp(self):
        assert UserProgress(xp=199, level=7).level == 2

    def test_accepts_record_aliases(self):
        progress = UserProgress.model_validate({
            "xp": 10,
            "streak": 1,
            "lastLogin": "2024-05-01T12:00:00",
            "cardsLearned": 4,
            "level": 1,
        })
        assert progress.cards_reviewed == 4
        assert progress.last_active_date == date(2024, 5, 1)

    def test_to_record(self):
        record = UserProgress(xp=5, last_login=datetime(2024, 5, 1)).to_record()
        assert record["lastLogin"] == "2024-05-01T00:00:00"
        assert "cards_reviewed" not in record

    def test_negative_values_rejected(self):
        with pytest.raises(ValidationError):
            UserProgress(streak=-1)

    def test_display_helpers(self):
        progress = UserProgress(xp=340)
        assert progress.xp_into_level == 40
        assert progress.next_level_xp == 400


def test_calendar_day_converts_aware_to_local():
    moment = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
    assert calendar_day(moment) == moment.astimezone().date()


class TestVocabCard:
    def test_variant_lookup(self, make_cards):
        card = make_cards(1)[0]
        variant = card.variant(Register.INFORMAL)
        assert variant.text == "mot0 (informal)"
        assert variant.phonetic_transcription == "/mot0/"
        assert variant.pronunciation_tip == "Keep the vowels short."

    def test_cards_are_immutable(self, make_cards):
        card = make_cards(1)[0]
        with pytest.raises(ValidationError):
            card.word = "autre"

    def test_missing_register_rejected(self, card_json):
        payload = card_json("x")
        del payload["variations"]["formal"]
        with pytest.raises(ValidationError):
            VocabCard.model_validate(payload)


class TestEnums:
    def test_levels(self):
        assert [level.value for level in DifficultyLevel] == ["A2", "B1", "B2"]

    def test_register_keys(self):
        assert [r.key for r in Register] == ["formal", "informal", "slang"]

    def test_views_and_status(self):
        assert View("practice") == View.PRACTICE
        assert ContentStatus.ERROR.value == "error"

    def test_quiz_state_defaults(self):
        state = QuizState()
        assert state.index == 0
        assert state.phase == QuizPhase.AWAITING_REVEAL
        assert state.revealed is False
