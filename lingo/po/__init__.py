"""Gettext PO encoding."""

from .encoder import (
    create_po_entries,
    encode,
    escape_po_string,
    format_po_string,
    generate_po_content,
    unescape_po_string,
)
from .plurals import DEFAULT_PLURAL_FORMS, get_nplurals, get_plural_forms

__all__ = [
    "create_po_entries",
    "encode",
    "escape_po_string",
    "format_po_string",
    "generate_po_content",
    "unescape_po_string",
    "DEFAULT_PLURAL_FORMS",
    "get_nplurals",
    "get_plural_forms",
]
