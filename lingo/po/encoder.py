"""PO file generation for WordPress translation previews."""

import re
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Mapping, Optional

from ..errors import EncodingPreconditionError
from ..models.po_entry import POEntry
from ..models.session import TranslationForPreview
from .plurals import DEFAULT_PLURAL_FORMS

# Lines longer than this are written in multiline form
MAX_LINE_LENGTH = 80

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}
_UNESCAPES = {
    "\\": "\\",
    '"': '"',
    "n": "\n",
    "r": "\r",
    "t": "\t",
}
_ESCAPE_RE = re.compile(r'[\\"\n\r\t]')
_UNESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)


def _revision_date() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S") + "+0000"


def default_headers() -> Dict[str, str]:
    """Return the default header block, stamped with the current time."""
    return {
        "Project-Id-Version": "Wappu Lingo Preview",
        "Report-Msgid-Bugs-To": "",
        "POT-Creation-Date": "",
        "PO-Revision-Date": _revision_date(),
        "Last-Translator": "Wappu Lingo User",
        "Language-Team": "",
        "Language": "",
        "MIME-Version": "1.0",
        "Content-Type": "text/plain; charset=UTF-8",
        "Content-Transfer-Encoding": "8bit",
        "Plural-Forms": DEFAULT_PLURAL_FORMS,
    }


def escape_po_string(text: Optional[str]) -> str:
    """
    Escape special characters in a PO string.

    Backslashes are escaped in the same pass as every other character, so
    no substitution can be applied twice.
    """
    if not text:
        return ""
    return _ESCAPE_RE.sub(lambda m: _ESCAPES[m.group(0)], text)


def unescape_po_string(text: Optional[str]) -> str:
    """Reverse :func:`escape_po_string`. Unknown escapes are left as-is."""
    if not text:
        return ""
    return _UNESCAPE_RE.sub(lambda m: _UNESCAPES.get(m.group(1), m.group(0)), text)


def format_po_string(text: Optional[str]) -> str:
    """
    Format a string as the quoted value of a PO keyword.

    Strings with newlines or longer than MAX_LINE_LENGTH once escaped use
    the multiline form: ``""`` followed by one quoted line per segment.
    """
    escaped = escape_po_string(text)

    if "\n" not in (text or "") and len(escaped) <= MAX_LINE_LENGTH:
        return f'"{escaped}"'

    # Split before escaping so an escaped backslash followed by "n" is never
    # mistaken for a line break
    parts = (text or "").split("\n")
    lines = []
    for index, part in enumerate(parts):
        suffix = "\\n" if index < len(parts) - 1 else ""
        lines.append(f'"{escape_po_string(part)}{suffix}"')
    return '""\n' + "\n".join(lines)


def generate_po_headers(headers: Mapping[str, Optional[str]]) -> str:
    """Generate the header block (the entry with an empty msgid)."""
    lines = ['msgid ""', 'msgstr ""']

    for key, value in headers.items():
        if value:
            lines.append(f'"{escape_po_string(f"{key}: {value}")}\\n"')

    return "\n".join(lines)


def generate_po_entry(entry: POEntry) -> str:
    """Generate a single PO entry block."""
    if entry.msgid is None:
        raise EncodingPreconditionError("PO entry has no msgid")

    lines: List[str] = []

    for ref in entry.references or ():
        lines.append(f"#: {ref}")

    if entry.msgctxt:
        lines.append(f"msgctxt {format_po_string(entry.msgctxt)}")

    lines.append(f"msgid {format_po_string(entry.msgid)}")

    if entry.msgid_plural:
        lines.append(f"msgid_plural {format_po_string(entry.msgid_plural)}")
        for index, translation in enumerate(entry.translations):
            lines.append(f"msgstr[{index}] {format_po_string(translation)}")
    else:
        lines.append(f"msgstr {format_po_string(entry.translations[0])}")

    return "\n".join(lines)


def generate_po_content(
    entries: Iterable[POEntry],
    headers: Optional[Mapping[str, Optional[str]]] = None,
) -> str:
    """
    Generate a complete PO document.

    Args:
        entries: Entries in output order
        headers: Header overrides; known keys keep their default position,
            new keys are appended in the order given

    Returns:
        PO file text ending with a newline
    """
    merged = default_headers()
    if headers:
        merged.update(headers)

    sections = [generate_po_headers(merged)]
    sections.extend(generate_po_entry(entry) for entry in entries)

    return "\n\n".join(sections) + "\n"


encode = generate_po_content


def create_po_entries(
    translations: Iterable[TranslationForPreview],
    nplurals: int = 2,
) -> List[POEntry]:
    """
    Build PO entries from session translations.

    A single translation typed for a plural string is repeated for every
    plural form.
    """
    entries = []
    for t in translations:
        if t.plural:
            msgstr = tuple([t.translation] * max(nplurals, 1))
        else:
            msgstr = t.translation
        entries.append(POEntry(
            msgid=t.original,
            msgid_plural=t.plural,
            msgstr=msgstr,
            msgctxt=t.context,
            references=tuple(t.references or ()),
        ))
    return entries
