"""Data models for translation sessions."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class SessionState(str, Enum):
    """Session state enum."""
    IDLE = "idle"
    LOADING = "loading"
    ACTIVE = "active"
    COMPLETE = "complete"
    ERROR = "error"


@dataclass
class SessionStats:
    """Counters for a translation session."""

    total: int = 0
    completed: int = 0
    skipped: int = 0

    def to_dict(self) -> dict:
        return {"total": self.total, "completed": self.completed, "skipped": self.skipped}


@dataclass
class StartSessionOptions:
    """Parameters for starting a session."""

    project_slug: str
    locale_slug: str
    sample_size: int = 10
    project_name: Optional[str] = None
    user_id: Optional[str] = None
    user_email: Optional[str] = None


@dataclass(frozen=True)
class TranslationForPreview:
    """An (original, translation) pair ready to be written into a PO file."""

    original: str
    translation: str
    context: Optional[str] = None
    plural: Optional[str] = None
    references: Tuple[str, ...] = field(default_factory=tuple)
