"""A session from fetch to PO file."""

import asyncio

from lingo.models import StartSessionOptions
from lingo.po import encode
from lingo.preview.playground import generate_translation_po
from lingo.session import SessionTracker

from conftest import make_glotpress_client


def test_single_string_session_to_po():
    glotpress = make_glotpress_client(rows=[{"original_id": "1", "singular": "Hello"}])

    async def run():
        tracker = SessionTracker(glotpress.fetch_session_strings)
        await tracker.start_session(StartSessionOptions(
            project_slug="wp/dev", locale_slug="it", sample_size=10,
        ))
        assert tracker.current_unit.singular == "Hello"
        tracker.submit("Ciao")
        return tracker

    tracker = asyncio.run(run())

    assert tracker.is_complete
    content = generate_translation_po(tracker.translations_for_preview(), "it_IT")
    assert 'msgid "Hello"\nmsgstr "Ciao"' in content
    assert content.endswith('msgstr "Ciao"\n')


def test_empty_catalog_has_only_header():
    content = encode([], {"Language": "it"})
    assert content.count('msgid "') == 1
