"""Normalization of raw GlotPress string records."""

from typing import Any, Iterable, List, Mapping

from ..models.translation_unit import TranslationUnit


def normalize_string(raw: Mapping[str, Any]) -> TranslationUnit:
    """
    Convert a GlotPress API record into a TranslationUnit.

    Missing or empty optional fields fall back to defaults; text is never
    validated.
    """
    references = raw.get("references") or ()
    return TranslationUnit(
        id=str(raw.get("original_id", "")),
        singular=raw.get("singular") or "",
        plural=raw.get("plural") or None,
        context=raw.get("context") or None,
        references=tuple(str(ref) for ref in references),
        priority=raw.get("priority") or "normal",
        project_id=str(raw.get("project_id") or ""),
    )


def normalize_strings(raws: Iterable[Mapping[str, Any]]) -> List[TranslationUnit]:
    """Normalize a batch of records."""
    return [normalize_string(raw) for raw in raws]
