"""Shared fixtures."""

import pytest

from lingua_franca.models.vocabulary import VocabCard


def _variant(word: str, register: str) -> dict:
    return {
        "french": f"{word} ({register})",
        "phonetic": f"/{word}/",
        "english": f"{word} in English",
        "context": f"{register} situations",
        "example": f"Voici {word}.",
        "pronunciationTips": "Keep the vowels short.",
    }


def card_payload(word: str) -> dict:
    return {
        "word": word,
        "meaning": f"meaning of {word}",
        "variations": {
            "formal": _variant(word, "formal"),
            "informal": _variant(word, "informal"),
            "slang": _variant(word, "slang"),
        },
    }


@pytest.fixture
def make_cards():
    """Factory building ``n`` distinct cards, optionally with a word prefix."""

    def _make(n: int, prefix: str = "mot") -> list[VocabCard]:
        return [VocabCard.model_validate(card_payload(f"{prefix}{i}")) for i in range(n)]

    return _make


@pytest.fixture
def card_json():
    return card_payload
