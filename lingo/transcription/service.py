"""Speech-to-text for dictated translations."""

import asyncio
import logging
import mimetypes
from enum import Enum
from typing import Callable, Optional

from openai import OpenAI

from ..config import config
from ..errors import TranscriptionError

logger = logging.getLogger(__name__)

SUPPORTED_MIME_TYPES = (
    "audio/wav",
    "audio/mp3",
    "audio/mpeg",
    "audio/webm",
    "audio/mp4",
    "audio/ogg",
    "audio/flac",
)


class TranscriptionStatus(str, Enum):
    """Lifecycle of the transcription backend."""
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class TranscriptionService:
    """
    Owns the speech-to-text backend.

    The backend is created once by :meth:`initialize`; until then, or after
    initialization failed, :meth:`transcribe` refuses to run.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        client_factory: Optional[Callable[[str], OpenAI]] = None,
        max_audio_bytes: Optional[int] = None,
    ):
        self.api_key = api_key if api_key is not None else config.openai_api_key
        self.model = model or config.transcription_model
        self.max_audio_bytes = max_audio_bytes or config.max_audio_bytes
        self._client_factory = client_factory or (lambda key: OpenAI(api_key=key))
        self._client: Optional[OpenAI] = None
        self.status = TranscriptionStatus.IDLE
        self.error: Optional[str] = None

    @property
    def is_ready(self) -> bool:
        return self.status == TranscriptionStatus.READY

    def initialize(self) -> TranscriptionStatus:
        """Create the backend client. Safe to call more than once."""
        if self.status in (TranscriptionStatus.READY, TranscriptionStatus.LOADING):
            return self.status

        self.status = TranscriptionStatus.LOADING
        if not self.api_key:
            self.status = TranscriptionStatus.ERROR
            self.error = "OPENAI_API_KEY is not set"
            logger.info("Transcription disabled: %s", self.error)
            return self.status

        try:
            self._client = self._client_factory(self.api_key)
        except Exception as e:
            self.status = TranscriptionStatus.ERROR
            self.error = str(e)
            logger.warning("Failed to initialize transcription backend: %s", e)
            return self.status

        self.status = TranscriptionStatus.READY
        self.error = None
        return self.status

    def validate(self, audio: bytes, mime_type: str) -> None:
        """Reject unsupported or oversized audio."""
        if not audio or not mime_type:
            raise TranscriptionError("Missing audio or mimeType")
        if mime_type not in SUPPORTED_MIME_TYPES:
            raise TranscriptionError(
                f"Unsupported audio format. Supported: {', '.join(SUPPORTED_MIME_TYPES)}"
            )
        if len(audio) > self.max_audio_bytes:
            limit_mb = self.max_audio_bytes // (1024 * 1024)
            raise TranscriptionError(f"Audio file too large. Maximum size is {limit_mb}MB.")

    def transcribe(self, audio: bytes, mime_type: str, language: Optional[str] = None) -> str:
        """
        Transcribe audio to plain text.

        Args:
            audio: Raw audio bytes
            mime_type: One of SUPPORTED_MIME_TYPES
            language: Optional ISO-639-1 hint, e.g. "pt"

        Returns:
            The transcribed text, stripped
        """
        if not self.is_ready:
            raise TranscriptionError(
                f"Transcription service is not ready ({self.status.value})"
            )
        self.validate(audio, mime_type)

        extension = mimetypes.guess_extension(mime_type) or ".wav"
        kwargs = {
            "model": self.model,
            "file": (f"audio{extension}", audio, mime_type),
        }
        if language:
            kwargs["language"] = language.split("-")[0].split("_")[0].lower()

        try:
            result = self._client.audio.transcriptions.create(**kwargs)
        except Exception as e:
            logger.warning("Transcription failed: %s", e)
            raise TranscriptionError(f"Transcription failed: {e}") from e

        return (getattr(result, "text", "") or "").strip()

    async def transcribe_async(
        self,
        audio: bytes,
        mime_type: str,
        language: Optional[str] = None,
    ) -> str:
        """Run :meth:`transcribe` in a worker thread."""
        return await asyncio.to_thread(self.transcribe, audio, mime_type, language)
