"""Vocabulary card generation using an LLM."""

import json

import structlog
from openai import AsyncOpenAI
from pydantic import ValidationError

from lingua_franca.content.prompts import build_vocabulary_messages
from lingua_franca.models.vocabulary import DifficultyLevel, VocabCard

logger = structlog.get_logger()


def parse_cards(payload: str | None) -> list[VocabCard]:
    """Parse a generator response into cards.

    Accepts either ``{"cards": [...]}`` or a bare list. Items that fail
    validation are skipped; an unparsable payload yields no cards.
    """
    if not payload:
        return []
    try:
        data = json.loads(payload)
    except json.JSONDecodeError:
        logger.warning("vocabulary_response_not_json")
        return []

    items = data.get("cards", []) if isinstance(data, dict) else data
    if not isinstance(items, list):
        return []

    cards = []
    for item in items:
        try:
            cards.append(VocabCard.model_validate(item))
        except ValidationError:
            logger.warning("vocabulary_card_invalid", item=item)
    return cards


class VocabularyGenerator:
    """Generates vocabulary cards for a level and topic.

    API errors propagate to the caller; an empty list means the model
    produced no usable content.

    Args:
        api_key: OpenAI API key.
        model: Model to use for generation.
        cards_per_batch: Number of cards requested per call.
        language: Target language of the cards.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        cards_per_batch: int = 3,
        language: str = "French",
    ):
        self.client = AsyncOpenAI(api_key=api_key)
        self.model = model
        self.cards_per_batch = cards_per_batch
        self.language = language

    async def generate(self, level: DifficultyLevel, topic: str) -> list[VocabCard]:
        """Request a fresh batch of cards.

        Args:
            level: CEFR level of the learner.
            topic: Topic the vocabulary should relate to.

        Returns:
            Parsed cards, possibly empty.
        """
        messages = build_vocabulary_messages(
            level=str(level),
            topic=topic,
            count=self.cards_per_batch,
            language=self.language,
        )
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            temperature=0.8,
            response_format={"type": "json_object"},
        )
        cards = parse_cards(response.choices[0].message.content)
        logger.info("vocabulary_generated", level=str(level), topic=topic, count=len(cards))
        return cards
