"""Data models for the translation workbench."""

from .translation_unit import TranslationUnit
from .session import SessionState, SessionStats, StartSessionOptions, TranslationForPreview
from .submission import SubmittedTranslation, TranslationFilters, TranslationStatus, UserStats
from .po_entry import POEntry

__all__ = [
    "TranslationUnit",
    "SessionState",
    "SessionStats",
    "StartSessionOptions",
    "TranslationForPreview",
    "SubmittedTranslation",
    "TranslationFilters",
    "TranslationStatus",
    "UserStats",
    "POEntry",
]
