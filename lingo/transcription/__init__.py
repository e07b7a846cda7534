"""Speech-to-text for dictated translations."""

from .service import SUPPORTED_MIME_TYPES, TranscriptionService, TranscriptionStatus

__all__ = ["SUPPORTED_MIME_TYPES", "TranscriptionService", "TranscriptionStatus"]
