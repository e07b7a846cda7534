"""Error kinds raised across the workbench.

Every error carries a fixed ``kind`` from :class:`ErrorKind`, so callers can
either catch the concrete class or match on the kind.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of error kinds."""
    SAMPLING_PRECONDITION = "sampling_precondition"
    FETCH_FAILURE = "fetch_failure"
    PERSISTENCE_FAILURE = "persistence_failure"
    UNSUPPORTED_PREVIEW_TARGET = "unsupported_preview_target"
    PREVIEW_FAILURE = "preview_failure"
    ENCODING_PRECONDITION = "encoding_precondition"
    TRANSCRIPTION_FAILURE = "transcription_failure"


class LingoError(Exception):
    """Base class for all workbench errors."""

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SamplingPreconditionError(LingoError, ValueError):
    """Sample size was negative."""
    kind = ErrorKind.SAMPLING_PRECONDITION


class FetchError(LingoError):
    """The GlotPress API could not be reached or answered with a non-2xx status."""
    kind = ErrorKind.FETCH_FAILURE

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code


class PersistenceError(LingoError):
    """The translation store rejected or failed to save a record."""
    kind = ErrorKind.PERSISTENCE_FAILURE

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code


class UnsupportedPreviewTargetError(LingoError):
    """The project cannot be previewed in WordPress Playground."""
    kind = ErrorKind.UNSUPPORTED_PREVIEW_TARGET


class PreviewError(LingoError):
    """A preview was requested without anything to show."""
    kind = ErrorKind.PREVIEW_FAILURE


class EncodingPreconditionError(LingoError, ValueError):
    """A PO entry was malformed."""
    kind = ErrorKind.ENCODING_PRECONDITION


class TranscriptionError(LingoError):
    """Audio could not be transcribed."""
    kind = ErrorKind.TRANSCRIPTION_FAILURE
