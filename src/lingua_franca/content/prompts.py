"""Prompt templates for vocabulary generation and pronunciation."""

from lingua_franca.models.vocabulary import Register

VOCABULARY_SYSTEM_PROMPT = """\
You are a {language} teacher writing vocabulary flashcards for English speakers.

Respond ONLY with a JSON object of this shape:
{{
    "cards": [
        {{
            "word": "<the main {language} word or phrase>",
            "meaning": "<English definition>",
            "variations": {{
                "formal": <variant>,
                "informal": <variant>,
                "slang": <variant>
            }}
        }}
    ]
}}

Each <variant> is an object:
{{
    "french": "<the phrase in {language}>",
    "phonetic": "<IPA transcription>",
    "english": "<English translation>",
    "context": "<when to use this version>",
    "example": "<a full example sentence>",
    "pronunciationTips": "<tips for pronouncing it>"
}}
"""

VOCABULARY_USER_PROMPT = """\
Generate {count} distinct {language} vocabulary words or short phrases related to \
"{topic}" suitable for a learner at {level} level.
For each word, provide:
1. The core word/phrase.
2. English meaning.
3. Three variations/usages: Formal (Professional/Polite), Informal (Friends/Family), \
and Slang (Street/Youth).
4. IPA phonetic transcription for the {language} phrase in each variation.

Ensure the slang is authentic modern {language} slang (verlan, argot, etc.) where appropriate.
"""

# Delivery instructions for text-to-speech, per register
PRONUNCIATION_STYLES: dict[Register, str] = {
    Register.FORMAL: "Speak clearly and politely, as in a professional setting.",
    Register.INFORMAL: "Speak in a relaxed, friendly tone, as with friends or family.",
    Register.SLANG: "Speak casually and quickly, like a young native speaker on the street.",
}


def build_vocabulary_messages(
    level: str,
    topic: str,
    count: int = 3,
    language: str = "French",
) -> list[dict[str, str]]:
    """Build chat messages requesting a batch of vocabulary cards."""
    return [
        {"role": "system", "content": VOCABULARY_SYSTEM_PROMPT.format(language=language)},
        {
            "role": "user",
            "content": VOCABULARY_USER_PROMPT.format(
                count=count, language=language, topic=topic, level=level
            ),
        },
    ]


def build_pronunciation_instructions(register: Register, language: str = "French") -> str:
    return f"Say the following {language} phrase naturally. {PRONUNCIATION_STYLES[register]}"
