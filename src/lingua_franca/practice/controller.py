"""Session controller: view switching, content refresh and practice rounds."""

import asyncio
from datetime import datetime

import structlog

from lingua_franca.config import DEFAULT_TOPICS
from lingua_franca.gamification.streak import StreakEngine
from lingua_franca.gamification.xp import XpEngine
from lingua_franca.models.progress import UserProgress
from lingua_franca.models.session import ContentStatus, QuizState, View
from lingua_franca.models.vocabulary import DifficultyLevel, Register, VocabCard
from lingua_franca.practice import quiz

logger = structlog.get_logger()

EMPTY_CONTENT_MESSAGE = "Could not generate content. Please check API key."
FETCH_ERROR_MESSAGE = "An error occurred while fetching data."


class SessionController:
    """Drives the in-memory session state for one connected client.

    Content is requested from ``generator`` in a background task. Every
    request bumps a generation counter; a result that arrives after a newer
    request was issued is dropped, so late responses never overwrite newer
    cards.

    Args:
        streak_engine: Reconciles the streak on start.
        xp_engine: Awards XP for ratings.
        generator: Object with ``async generate(level, topic) -> list[VocabCard]``.
        synthesizer: Optional object with ``async synthesize(text, register)``.
        topics: Ordered selectable topics; the first one is active initially.
        level: Initially active difficulty level.
    """

    def __init__(
        self,
        streak_engine: StreakEngine,
        xp_engine: XpEngine,
        generator,
        synthesizer=None,
        topics: list[str] | None = None,
        level: DifficultyLevel = DifficultyLevel.A2,
    ) -> None:
        self.streak_engine = streak_engine
        self.xp_engine = xp_engine
        self.generator = generator
        self.synthesizer = synthesizer
        self.topics: list[str] = list(topics or DEFAULT_TOPICS)

        self._view: View = View.LEARN
        self._level: DifficultyLevel = DifficultyLevel(level)
        self._topic: str = self.topics[0]
        self._cards: tuple[VocabCard, ...] = ()
        self._quiz: QuizState = QuizState()
        self._status: ContentStatus = ContentStatus.IDLE
        self._error: str | None = None
        self._stats: UserProgress | None = None

        self._generation: int = 0
        self._fetch_task: asyncio.Task | None = None
        self._round_complete_callbacks: list = []
        self._content_change_callbacks: list = []

    @property
    def view(self) -> View:
        return self._view

    @property
    def active_level(self) -> DifficultyLevel:
        return self._level

    @property
    def active_topic(self) -> str:
        return self._topic

    @property
    def cards(self) -> tuple[VocabCard, ...]:
        return self._cards

    @property
    def quiz_state(self) -> QuizState:
        return self._quiz

    @property
    def quiz_index(self) -> int:
        return self._quiz.index

    @property
    def revealed(self) -> bool:
        """Whether answers are visible; always true outside practice."""
        if self._view != View.PRACTICE:
            return True
        return self._quiz.revealed

    @property
    def content_status(self) -> ContentStatus:
        return self._status

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def stats(self) -> UserProgress | None:
        return self._stats

    @property
    def active_card(self) -> VocabCard | None:
        if 0 <= self._quiz.index < len(self._cards):
            return self._cards[self._quiz.index]
        return None

    def on_round_complete(self, callback) -> None:
        """Register a callback for the end of a practice round.

        Args:
            callback: Async callable(stats).
        """
        self._round_complete_callbacks.append(callback)

    def on_content_change(self, callback) -> None:
        """Register a callback fired when a content request settles.

        Args:
            callback: Async callable().
        """
        self._content_change_callbacks.append(callback)

    async def start(self, now: datetime | None = None) -> asyncio.Task:
        """Reconcile the streak, then request the first batch of content.

        Returns:
            The pending content request.
        """
        # store access takes a file lock, keep it off the event loop
        self._stats = await asyncio.to_thread(self.streak_engine.reconcile, now)
        logger.info(
            "session_started",
            streak=self._stats.streak,
            xp=self._stats.xp,
            level=self._stats.level,
        )
        return self.request_content()

    async def close(self) -> None:
        """Cancel any pending content request."""
        task = self._fetch_task
        self._fetch_task = None
        if task is not None and not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)

    def set_view(self, view: View | str) -> asyncio.Task | None:
        """Switch screens.

        Entering practice hides the answer and resumes the current card if it
        still exists. Entering learn refreshes content.
        """
        view = View(view)
        if view == self._view:
            return None
        logger.info("view_changed", old_view=self._view.value, view=view.value)
        self._view = view
        if view == View.PRACTICE:
            self._quiz = quiz.enter(self._quiz, len(self._cards))
        elif view == View.LEARN:
            return self.request_content()
        return None

    def set_level(self, level: DifficultyLevel | str) -> asyncio.Task | None:
        level = DifficultyLevel(level)
        if level == self._level:
            return None
        self._level = level
        return self.request_content()

    def set_topic(self, topic: str) -> asyncio.Task | None:
        if topic not in self.topics:
            raise ValueError(f"Unknown topic: {topic!r}")
        if topic == self._topic:
            return None
        self._topic = topic
        return self.request_content()

    def request_content(self) -> asyncio.Task:
        """Request a new card list for the active level and topic.

        Supersedes any request still in flight.
        """
        self._generation += 1
        generation = self._generation
        if self._fetch_task is not None and not self._fetch_task.done():
            self._fetch_task.cancel()
            logger.debug("content_fetch_superseded", generation=generation - 1)

        self._status = ContentStatus.LOADING
        self._error = None
        self._fetch_task = asyncio.create_task(
            self._fetch(generation, self._level, self._topic)
        )
        return self._fetch_task

    def retry(self) -> asyncio.Task:
        """Re-issue the request for the current level and topic."""
        return self.request_content()

    async def wait_for_content(self) -> None:
        """Wait for the pending content request, if any, to settle."""
        if self._fetch_task is not None:
            await asyncio.gather(self._fetch_task, return_exceptions=True)

    async def _fetch(self, generation: int, level: DifficultyLevel, topic: str) -> bool:
        try:
            cards = await self.generator.generate(level, topic)
        except asyncio.CancelledError:
            logger.debug("content_fetch_cancelled", generation=generation)
            raise
        except Exception:
            if generation != self._generation:
                logger.debug("stale_fetch_discarded", generation=generation)
                return False
            logger.exception("content_fetch_failed", level=level.value, topic=topic)
            self._status = ContentStatus.ERROR
            self._error = FETCH_ERROR_MESSAGE
            await self._notify_content_change()
            return False

        if generation != self._generation:
            logger.debug(
                "stale_fetch_discarded",
                generation=generation,
                current_generation=self._generation,
            )
            return False

        self._cards = tuple(cards)
        self._quiz = QuizState()
        if self._cards:
            self._status = ContentStatus.LOADED
            self._error = None
            logger.info("content_loaded", level=level.value, topic=topic, count=len(self._cards))
        else:
            self._status = ContentStatus.ERROR
            self._error = EMPTY_CONTENT_MESSAGE
            logger.warning("content_empty", level=level.value, topic=topic)
        await self._notify_content_change()
        return self._status == ContentStatus.LOADED

    async def _notify_content_change(self) -> None:
        for callback in self._content_change_callbacks:
            await callback()

    def _practice_ready(self) -> bool:
        return (
            self._view == View.PRACTICE
            and self._status == ContentStatus.LOADED
            and bool(self._cards)
        )

    def reveal(self) -> bool:
        """Show the answer for the active card.

        Returns:
            True if the state changed.
        """
        if not self._practice_ready() or self._quiz.revealed:
            return False
        self._quiz = quiz.reveal(self._quiz)
        return True

    async def submit_rating(self, amount: int) -> bool:
        """Award XP for the revealed card and move to the next one.

        Ratings are only accepted once the active card has been revealed;
        otherwise nothing changes.

        Args:
            amount: XP to award.

        Returns:
            True if the rating was accepted.
        """
        if not self._practice_ready() or not quiz.can_rate(self._quiz):
            logger.debug(
                "rating_rejected",
                view=self._view.value,
                status=self._status.value,
                phase=self._quiz.phase.value,
            )
            return False

        self._stats = await asyncio.to_thread(self.xp_engine.award_xp, amount)
        self._quiz, round_complete = quiz.advance(self._quiz, len(self._cards))
        if round_complete:
            logger.info("round_complete", cards=len(self._cards), xp=self._stats.xp)
            for callback in self._round_complete_callbacks:
                await callback(self._stats)
        return True

    async def pronounce(self, text: str, register: Register | str) -> bytes | None:
        """Synthesize ``text`` in the given register's voice.

        Failures yield None and leave the session untouched.
        """
        if self.synthesizer is None:
            return None
        try:
            return await self.synthesizer.synthesize(text, Register(register))
        except Exception:
            logger.exception("pronunciation_failed", register=str(register))
            return None

    def snapshot(self) -> dict:
        """JSON-ready view of the session for the client."""
        return {
            "view": self._view.value,
            "level": self._level.value,
            "topic": self._topic,
            "topics": list(self.topics),
            "content_status": self._status.value,
            "error": self._error,
            "cards": [card.model_dump() for card in self._cards],
            "quiz": {
                "index": self._quiz.index,
                "total": len(self._cards),
                "phase": self._quiz.phase.value,
                "revealed": self.revealed,
            },
            "stats": self._stats.stats() if self._stats is not None else None,
        }
