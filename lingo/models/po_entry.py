"""Data model for PO catalog entries."""

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class POEntry:
    """A single msgid/msgstr block of a PO file."""

    msgid: str
    msgstr: Union[str, Tuple[str, ...]] = ""
    msgid_plural: Optional[str] = None
    msgctxt: Optional[str] = None
    references: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def translations(self) -> Tuple[str, ...]:
        """Return msgstr as a tuple of forms; never empty."""
        if isinstance(self.msgstr, str):
            return (self.msgstr,)
        return tuple(self.msgstr) or ("",)
