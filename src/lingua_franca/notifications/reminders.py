"""Practice reminders delivered to the connected client."""

import asyncio

import structlog

logger = structlog.get_logger()

REMINDER_TITLE = "LinguaFranca Reminder"
REMINDER_BODY = "C'est l'heure! Time to practice your French vocabulary."


class ReminderScheduler:
    """Schedules a delayed reminder message once the user grants permission.

    Permission is asked by the client (browser notifications); the scheduler
    only records the answer.

    Args:
        send_fn: Async callable delivering a message dict to the client.
        delay_seconds: Delay before the reminder fires.
    """

    def __init__(self, send_fn, delay_seconds: float = 5.0):
        self._send = send_fn
        self.delay_seconds = delay_seconds
        self._granted = False
        self._task: asyncio.Task | None = None

    @property
    def granted(self) -> bool:
        return self._granted

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def request_permission(self, granted: bool) -> bool:
        """Record the client's permission answer."""
        self._granted = bool(granted)
        logger.info("reminder_permission", granted=self._granted)
        return self._granted

    def schedule_reminder(self) -> bool:
        """Start the reminder timer, replacing any pending one.

        Returns:
            False if permission has not been granted.
        """
        if not self._granted:
            return False
        self.cancel()
        self._task = asyncio.create_task(self._fire())
        logger.info("reminder_scheduled", delay_seconds=self.delay_seconds)
        return True

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def _fire(self) -> None:
        try:
            await asyncio.sleep(self.delay_seconds)
            await self._send({
                "type": "reminder",
                "title": REMINDER_TITLE,
                "body": REMINDER_BODY,
            })
        except asyncio.CancelledError:
            pass
        except Exception:
            logger.exception("reminder_send_failed")
