"""XP accrual and level derivation."""

from enum import IntEnum

import structlog

from lingua_franca.models.progress import UserProgress, level_for_xp
from lingua_franca.storage.progress import ProgressStore

logger = structlog.get_logger()


class RatingTier(IntEnum):
    """XP awarded for each self-rating button in practice mode."""

    HARD = 10
    OKAY = 15
    EASY = 25


class XpEngine:
    """Sole mutation path for XP, reviewed-card count and level.

    Args:
        store: Progress store holding the record.
    """

    def __init__(self, store: ProgressStore):
        self.store = store

    def award_xp(self, amount: int) -> UserProgress:
        """Add ``amount`` XP for one reviewed card and persist.

        Args:
            amount: Non-negative XP to add.

        Returns:
            The updated progress record.
        """
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise TypeError(f"XP amount must be an integer, got {amount!r}")
        if amount < 0:
            raise ValueError(f"XP amount must be non-negative, got {amount}")

        with self.store.locked():
            progress = self.store.load()
            old_level = progress.level
            progress.xp += amount
            progress.cards_reviewed += 1
            progress.level = level_for_xp(progress.xp)
            self.store.save(progress)

        logger.info("xp_awarded", amount=amount, xp=progress.xp, level=progress.level)
        if progress.level > old_level:
            logger.info("level_up", old_level=old_level, level=progress.level)
        return progress
