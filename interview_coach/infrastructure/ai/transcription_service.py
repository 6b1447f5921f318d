"""Speech-to-text for recorded answers using the OpenAI Whisper API."""

import logging
from typing import Any

from openai import AsyncOpenAI, OpenAIError

from interview_coach.config import get_settings
from interview_coach.exceptions import TranscriptionFailedError

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "answer-audio.webm"
EXTENSION_BY_MIME = {
    "audio/webm": "webm",
    "audio/wav": "wav",
    "audio/x-wav": "wav",
    "audio/mpeg": "mp3",
    "audio/mp3": "mp3",
    "audio/mp4": "mp4",
    "audio/aac": "aac",
    "audio/ogg": "ogg",
    "video/webm": "webm",
    "video/mp4": "mp4",
}


def upload_filename(filename: str, content_type: str) -> str:
    """File name with an extension Whisper recognises for the content type."""
    extension = EXTENSION_BY_MIME.get((content_type or "").strip().lower(), "webm")
    base = (filename or "").rsplit(".", 1)[0].strip() or "answer-audio"
    return f"{base}.{extension}"


class WhisperTranscriptionService:
    """Transcribes audio or video answers. Client-level retries cover 429 and 5xx."""

    def __init__(self) -> None:
        self._client: AsyncOpenAI | None = None

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            settings = get_settings()
            self._client = AsyncOpenAI(
                api_key=settings.OPENAI_API_KEY,
                base_url=settings.OPENAI_BASE_URL,
                timeout=settings.OPENAI_TIMEOUT_SECONDS,
                max_retries=settings.OPENAI_MAX_RETRIES,
            )
        return self._client

    async def transcribe(self, content: bytes, filename: str, content_type: str) -> str:
        """
        Transcribe recorded media.

        Raises:
            TranscriptionFailedError: If the API call fails
        """
        if not content:
            return ""
        settings = get_settings()
        name = upload_filename(filename, content_type)
        options: dict[str, Any] = {
            "model": settings.WHISPER_MODEL_NAME,
            "file": (name, content, content_type or "audio/webm"),
            "temperature": 0,
        }
        if settings.TRANSCRIPTION_LANGUAGE:
            options["language"] = settings.TRANSCRIPTION_LANGUAGE
        try:
            response = await self._get_client().audio.transcriptions.create(**options)
        except OpenAIError as e:
            logger.error(f"Whisper transcription failed for {name}: {e!s}")
            raise TranscriptionFailedError(str(e)) from e

        text = (response.text or "").strip()
        logger.info(f"Transcribed {len(content)} bytes into {len(text)} characters")
        return text
