"""Day-based streak reconciliation run once per session start."""

from datetime import datetime

import structlog

from lingua_franca.models.progress import UserProgress, calendar_day
from lingua_franca.storage.progress import ProgressStore

logger = structlog.get_logger()


def next_streak(streak: int, days_since_last_active: int) -> int:
    """Streak after a gap of ``days_since_last_active`` calendar days.

    Same day keeps the streak, the next day extends it, and any longer gap
    resets it to zero.
    """
    if days_since_last_active == 0:
        return streak
    if days_since_last_active == 1:
        return streak + 1
    return 0


class StreakEngine:
    """Reconciles the persisted streak against the current date.

    Args:
        store: Progress store holding the record.
    """

    def __init__(self, store: ProgressStore):
        self.store = store

    def reconcile(self, now: datetime | None = None) -> UserProgress:
        """Apply the streak transition for ``now`` and persist the result.

        The day delta is an absolute value, so a clock moved back by one day
        extends the streak the same way a forward step does.
        """
        now = now or datetime.now()
        with self.store.locked():
            progress = self.store.load()
            today = calendar_day(now)
            last_day = progress.last_active_date
            if today < last_day:
                logger.warning(
                    "streak_clock_moved_backward",
                    last_active_date=last_day.isoformat(),
                    today=today.isoformat(),
                )
            days = abs((today - last_day).days)
            old_streak = progress.streak
            progress.streak = next_streak(old_streak, days)
            progress.last_login = now
            self.store.save(progress)

        logger.info(
            "streak_reconciled",
            days_since_last_active=days,
            old_streak=old_streak,
            streak=progress.streak,
        )
        return progress
