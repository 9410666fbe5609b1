"""Vocabulary card models produced by the content generator."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class DifficultyLevel(StrEnum):
    """CEFR levels offered for generated content."""

    A2 = "A2"
    B1 = "B1"
    B2 = "B2"


class Register(StrEnum):
    """Usage register of a card variant."""

    FORMAL = "Formal"
    INFORMAL = "Informal"
    SLANG = "Slang"

    @property
    def key(self) -> str:
        """Key of this register inside a card's ``variations`` object."""
        return self.value.lower()


class Variant(BaseModel):
    """One phrasing of a card in a given register.

    Aliases follow the generator's JSON field names.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    text: str = Field(alias="french")
    phonetic_transcription: str = Field(alias="phonetic")
    translation: str = Field(alias="english")
    usage_context: str = Field(alias="context")
    example_sentence: str = Field(alias="example")
    pronunciation_tip: str = Field(alias="pronunciationTips")


class Variations(BaseModel):
    model_config = ConfigDict(frozen=True)

    formal: Variant
    informal: Variant
    slang: Variant


class VocabCard(BaseModel):
    """A generated vocabulary entry with its three register variants."""

    model_config = ConfigDict(frozen=True)

    word: str
    meaning: str
    variations: Variations

    def variant(self, register: Register) -> Variant:
        return getattr(self.variations, register.key)
