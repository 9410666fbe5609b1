"""Browser WebSocket handler - connects a client to its session controller."""

import structlog
from fastapi import WebSocket, WebSocketDisconnect

from lingua_franca.audio.encoder import audio_data_url
from lingua_franca.config import Settings, load_topics
from lingua_franca.content.generator import VocabularyGenerator
from lingua_franca.content.pronunciation import PronunciationSynthesizer
from lingua_franca.gamification.streak import StreakEngine
from lingua_franca.gamification.xp import RatingTier, XpEngine
from lingua_franca.models.progress import UserProgress
from lingua_franca.models.session import View
from lingua_franca.models.vocabulary import DifficultyLevel, Register
from lingua_franca.notifications.reminders import ReminderScheduler
from lingua_franca.practice.controller import SessionController
from lingua_franca.storage.progress import ProgressStore

logger = structlog.get_logger()


class InvalidMessage(ValueError):
    """Client message that cannot be applied."""


def rating_amount(data: dict) -> int:
    """XP amount of a ``rate`` message, given as ``amount`` or ``tier``."""
    if "tier" in data:
        try:
            return int(RatingTier[str(data["tier"]).upper()])
        except KeyError:
            raise InvalidMessage(f"Unknown rating tier: {data['tier']!r}")
    amount = data.get("amount")
    if isinstance(amount, bool) or not isinstance(amount, int) or amount < 0:
        raise InvalidMessage("Rating amount must be a non-negative integer")
    return amount


class LearningSession:
    """Owns the controller and collaborators for one browser connection.

    Args:
        settings: Application settings.
        browser_ws: WebSocket connection to the browser.
        store: Progress store shared by all sessions of this process.
    """

    def __init__(self, settings: Settings, browser_ws: WebSocket, store: ProgressStore):
        self.settings = settings
        self.browser_ws = browser_ws
        self.store = store
        self.generator = VocabularyGenerator(
            api_key=settings.openai_api_key,
            model=settings.content_model,
            cards_per_batch=settings.cards_per_batch,
            language=settings.target_language,
        )
        self.synthesizer = PronunciationSynthesizer(
            api_key=settings.openai_api_key,
            model=settings.tts_model,
            voices={
                Register.FORMAL: settings.tts_voice_formal,
                Register.INFORMAL: settings.tts_voice_informal,
                Register.SLANG: settings.tts_voice_slang,
            },
            language=settings.target_language,
        )
        self.controller = SessionController(
            streak_engine=StreakEngine(store),
            xp_engine=XpEngine(store),
            generator=self.generator,
            synthesizer=self.synthesizer,
            topics=load_topics(),
            level=DifficultyLevel(settings.default_level),
        )
        self.reminders = ReminderScheduler(
            self._send_to_browser,
            delay_seconds=settings.reminder_delay_seconds,
        )
        self.controller.on_content_change(self._send_state)
        self.controller.on_round_complete(self._on_round_complete)

    async def start(self) -> None:
        await self.controller.start()
        await self._send_state()

    async def stop(self) -> None:
        self.reminders.cancel()
        await self.controller.close()

    async def handle(self, data: dict) -> None:
        """Apply one client message and answer with the resulting state."""
        msg_type = data.get("type", "")
        controller = self.controller
        try:
            if msg_type == "get_state":
                pass
            elif msg_type == "set_view":
                controller.set_view(data.get("view", ""))
            elif msg_type == "set_level":
                controller.set_level(data.get("level", ""))
            elif msg_type == "set_topic":
                controller.set_topic(data.get("topic", ""))
            elif msg_type == "retry":
                controller.retry()
            elif msg_type == "reveal":
                controller.reveal()
            elif msg_type == "rate":
                await controller.submit_rating(rating_amount(data))
            elif msg_type == "pronounce":
                await self._pronounce(data)
                return
            elif msg_type == "enable_reminders":
                await self._enable_reminders(data)
                return
            else:
                raise InvalidMessage(f"Unknown message type: {msg_type!r}")
        except ValueError as e:
            logger.warning("invalid_client_message", type=msg_type, detail=str(e))
            await self._send_to_browser({"type": "error", "detail": str(e)})
            return
        await self._send_state()

    async def _pronounce(self, data: dict) -> None:
        text = str(data.get("text", ""))
        register = Register(data.get("register", Register.FORMAL.value))
        audio = await self.controller.pronounce(text, register)
        await self._send_to_browser({
            "type": "audio",
            "text": text,
            "register": register.value,
            "audio": audio_data_url(audio) if audio else None,
        })

    async def _enable_reminders(self, data: dict) -> None:
        if self.controller.view != View.PROFILE:
            raise InvalidMessage("Reminders can only be enabled from the profile view")
        granted = self.reminders.request_permission(bool(data.get("granted", False)))
        scheduled = self.reminders.schedule_reminder() if granted else False
        await self._send_to_browser({
            "type": "reminder_status",
            "granted": granted,
            "scheduled": scheduled,
        })

    async def _on_round_complete(self, stats: UserProgress) -> None:
        await self._send_to_browser({
            "type": "round_complete",
            "cards": len(self.controller.cards),
            "stats": stats.stats(),
        })

    async def _send_state(self) -> None:
        await self._send_to_browser({"type": "state", **self.controller.snapshot()})

    async def _send_to_browser(self, data: dict) -> None:
        """Send a message to the browser WebSocket."""
        try:
            await self.browser_ws.send_json(data)
        except Exception:
            logger.warning("browser_send_failed")


async def handle_browser_websocket(
    websocket: WebSocket, settings: Settings, store: ProgressStore
) -> None:
    """Handle a browser WebSocket connection."""
    await websocket.accept()
    session = LearningSession(settings, websocket, store)

    try:
        await session.start()
        while True:
            data = await websocket.receive_json()
            if not isinstance(data, dict):
                await session._send_to_browser({"type": "error", "detail": "Expected a JSON object"})
                continue
            await session.handle(data)

    except WebSocketDisconnect:
        logger.info("browser_disconnected")
    except Exception:
        logger.exception("websocket_handler_error")
    finally:
        await session.stop()
