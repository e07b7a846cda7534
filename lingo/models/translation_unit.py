"""Data models for strings pulled from GlotPress."""

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class TranslationUnit:
    """A single untranslated string, normalized from the GlotPress API."""

    id: str
    singular: str
    plural: Optional[str] = None
    context: Optional[str] = None
    references: Tuple[str, ...] = field(default_factory=tuple)
    priority: str = "normal"  # normal, high
    project_id: str = ""

    @property
    def has_plural(self) -> bool:
        """Check if this string has a plural form."""
        return self.plural is not None
