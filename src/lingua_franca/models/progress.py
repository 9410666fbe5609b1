"""User progress model for gamification state (XP, streak, level)."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

XP_PER_LEVEL = 100


def level_for_xp(xp: int) -> int:
    """Level derived from cumulative XP: one level per 100 XP, starting at 1."""
    return xp // XP_PER_LEVEL + 1


def calendar_day(moment: datetime) -> date:
    """Strip time-of-day, converting aware datetimes to local time first."""
    if moment.tzinfo is not None:
        return moment.astimezone().date()
    return moment.date()


class UserProgress(BaseModel):
    """The single persisted progress record.

    Field aliases match the persisted layout (``lastLogin``, ``cardsLearned``)
    so records written by earlier versions of the app load unchanged.
    """

    model_config = ConfigDict(populate_by_name=True)

    xp: int = Field(default=0, ge=0)
    streak: int = Field(default=0, ge=0)
    last_login: datetime = Field(default_factory=datetime.now, alias="lastLogin")
    cards_reviewed: int = Field(default=0, ge=0, alias="cardsLearned")
    level: int = Field(default=1, ge=1)

    @model_validator(mode="after")
    def _derive_level(self) -> "UserProgress":
        # level is never trusted from input
        self.level = level_for_xp(self.xp)
        return self

    @property
    def last_active_date(self) -> date:
        return calendar_day(self.last_login)

    @property
    def xp_into_level(self) -> int:
        """XP earned towards the next level."""
        return self.xp % XP_PER_LEVEL

    @property
    def next_level_xp(self) -> int:
        """Cumulative XP at which the next level starts."""
        return self.level * XP_PER_LEVEL

    def to_record(self) -> dict:
        """Serialize to the persisted JSON layout."""
        return self.model_dump(by_alias=True, mode="json")

    def stats(self) -> dict:
        """Snapshot for display, including derived progress fields."""
        return {
            "xp": self.xp,
            "streak": self.streak,
            "level": self.level,
            "cards_reviewed": self.cards_reviewed,
            "last_active_date": self.last_active_date.isoformat(),
            "xp_into_level": self.xp_into_level,
            "next_level_xp": self.next_level_xp,
        }
