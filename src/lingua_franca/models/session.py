"""Session state models."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class View(StrEnum):
    """Top-level screens of the app."""

    LEARN = "learn"
    PRACTICE = "practice"
    PROFILE = "profile"


class ContentStatus(StrEnum):
    """Lifecycle of the current content request."""

    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


class QuizPhase(StrEnum):
    AWAITING_REVEAL = "awaiting_reveal"
    REVEALED = "revealed"


class QuizState(BaseModel):
    """Position in the practice round: active card index and reveal phase."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(default=0, ge=0)
    phase: QuizPhase = QuizPhase.AWAITING_REVEAL

    @property
    def revealed(self) -> bool:
        return self.phase == QuizPhase.REVEALED
