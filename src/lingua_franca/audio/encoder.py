"""Audio encoding utilities for sending synthesized speech over JSON."""

import base64


def audio_to_base64(audio: bytes) -> str:
    """Encode raw audio bytes (e.g. MP3) as a base64 string.

    Args:
        audio: Encoded audio bytes.

    Returns:
        ASCII base64 string.
    """
    return base64.b64encode(audio).decode("ascii")


def audio_data_url(audio: bytes, mime_type: str = "audio/mpeg") -> str:
    """Build a ``data:`` URL the browser can play directly."""
    return f"data:{mime_type};base64,{audio_to_base64(audio)}"
