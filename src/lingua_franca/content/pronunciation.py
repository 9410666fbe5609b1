"""Pronunciation audio synthesis using OpenAI text-to-speech."""

import structlog
from openai import AsyncOpenAI

from lingua_franca.content.prompts import build_pronunciation_instructions
from lingua_franca.models.vocabulary import Register

logger = structlog.get_logger()


class PronunciationSynthesizer:
    """Synthesizes a spoken version of a phrase, one voice per register.

    Failures are logged and reported as ``None``; they never raise.

    Args:
        api_key: OpenAI API key.
        model: Text-to-speech model.
        voices: Voice name for each register.
        language: Language of the phrases, used in delivery instructions.
    """

    def __init__(
        self,
        api_key: str,
        voices: dict[Register, str],
        model: str = "gpt-4o-mini-tts",
        language: str = "French",
    ):
        self.client = AsyncOpenAI(api_key=api_key)
        self.model = model
        self.voices = voices
        self.language = language

    async def synthesize(self, text: str, register: Register) -> bytes | None:
        """Return MP3 audio for ``text``, or None if synthesis failed."""
        if not text.strip():
            return None
        try:
            response = await self.client.audio.speech.create(
                model=self.model,
                voice=self.voices[register],
                input=text,
                instructions=build_pronunciation_instructions(register, self.language),
                response_format="mp3",
            )
            audio = response.content
        except Exception:
            logger.exception("pronunciation_synthesis_failed", register=str(register))
            return None
        return audio or None
