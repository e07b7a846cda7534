"""Tests for PO file generation."""

import re

import polib
import pytest

from lingo.errors import EncodingPreconditionError
from lingo.models import POEntry, TranslationForPreview
from lingo.po import (
    create_po_entries,
    encode,
    escape_po_string,
    format_po_string,
    generate_po_content,
    unescape_po_string,
)
from lingo.po.encoder import generate_po_entry


def test_escape_special_characters():
    assert escape_po_string('a"b\\c\nd\te\r') == 'a\\"b\\\\c\\nd\\te\\r'


def test_escape_empty_values():
    assert escape_po_string("") == ""
    assert escape_po_string(None) == ""
    assert unescape_po_string("") == ""


def test_backslash_is_not_double_escaped():
    # A literal backslash followed by "n" must not turn into a newline
    assert escape_po_string("\\n") == "\\\\n"
    assert unescape_po_string(escape_po_string("\\n")) == "\\n"


@pytest.mark.parametrize("text", [
    "plain",
    'say "hi"',
    "C:\\path\\to\\file",
    "line1\nline2\n",
    "tab\there",
    "\r\n windows",
    '\\"already escaped\\"',
    "\\n\\t literal escapes",
    "ends with backslash \\",
    "mixed \\\n\t\"\\\\ soup",
    "ünïcödé ✓ 日本語",
])
def test_round_trip(text):
    assert unescape_po_string(escape_po_string(text)) == text


def test_single_line_string():
    assert format_po_string("Hello") == '"Hello"'


def test_multiline_string():
    assert format_po_string("Line one\nLine two") == '""\n"Line one\\n"\n"Line two"'


def test_trailing_newline_keeps_empty_last_segment():
    assert format_po_string("Hi\n") == '""\n"Hi\\n"\n""'


def test_long_string_uses_multiline_form():
    assert format_po_string("x" * 80) == '"' + "x" * 80 + '"'
    assert format_po_string("x" * 81) == '""\n"' + "x" * 81 + '"'


def test_escaped_backslash_n_is_not_a_line_break():
    assert format_po_string("a\\nb") == '"a\\\\nb"'


def test_header_block():
    content = encode([], {"Language": "it"})

    assert content.startswith('msgid ""\nmsgstr ""\n')
    assert '"Language: it\\n"' in content.splitlines()
    assert content.endswith("\n")
    assert not content.endswith("\n\n")


def test_header_defaults_and_order():
    lines = generate_po_content([], {"Language": "de_DE", "X-Generator": "lingo"}).splitlines()

    assert lines[2] == '"Project-Id-Version: Wappu Lingo Preview\\n"'
    assert '"Content-Type: text/plain; charset=UTF-8\\n"' in lines
    assert '"Plural-Forms: nplurals=2; plural=(n != 1);\\n"' in lines
    assert lines[-1] == '"X-Generator: lingo\\n"'
    # Known keys keep their default position
    assert lines.index('"Language: de_DE\\n"') < lines.index('"MIME-Version: 1.0\\n"')


def test_empty_headers_are_omitted():
    content = encode([])
    assert "Report-Msgid-Bugs-To" not in content
    assert '"Language: ' not in content


def test_revision_date_format():
    content = encode([])
    assert re.search(
        r'^"PO-Revision-Date: \d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\+0000\\n"$',
        content,
        re.MULTILINE,
    )


def test_simple_entry():
    assert generate_po_entry(POEntry(msgid="Hello", msgstr="Ciao")) == 'msgid "Hello"\nmsgstr "Ciao"'


def test_entry_with_references_and_context():
    entry = POEntry(
        msgid="Save",
        msgstr="Salva",
        msgctxt="button",
        references=("a.php:1", "b.php:2"),
    )
    assert generate_po_entry(entry) == (
        '#: a.php:1\n'
        '#: b.php:2\n'
        'msgctxt "button"\n'
        'msgid "Save"\n'
        'msgstr "Salva"'
    )


def test_plural_entry():
    entry = POEntry(
        msgid="%d file",
        msgid_plural="%d files",
        msgstr=("%d plik", "%d pliki", "%d plików"),
    )
    assert generate_po_entry(entry) == (
        'msgid "%d file"\n'
        'msgid_plural "%d files"\n'
        'msgstr[0] "%d plik"\n'
        'msgstr[1] "%d pliki"\n'
        'msgstr[2] "%d plików"'
    )


def test_sequence_msgstr_without_plural_uses_first_form():
    entry = POEntry(msgid="Hi", msgstr=("Ciao", "ignored"))
    assert generate_po_entry(entry) == 'msgid "Hi"\nmsgstr "Ciao"'


def test_blocks_are_separated_by_one_blank_line():
    content = encode([POEntry(msgid="A", msgstr="a"), POEntry(msgid="B", msgstr="b")])
    blocks = content.rstrip("\n").split("\n\n")

    assert len(blocks) == 3
    assert blocks[1] == 'msgid "A"\nmsgstr "a"'
    assert blocks[2] == 'msgid "B"\nmsgstr "b"'


def test_create_po_entries_repeats_plural_translation():
    entries = create_po_entries([
        TranslationForPreview(original="%d item", translation="%d elementi", plural="%d items"),
        TranslationForPreview(original="Hello", translation="Ciao", context="greeting"),
    ], nplurals=3)

    assert entries[0].msgstr == ("%d elementi",) * 3
    assert entries[0].msgid_plural == "%d items"
    assert entries[1].msgstr == "Ciao"
    assert entries[1].msgctxt == "greeting"


def test_output_parses_with_polib():
    tricky = 'She said "yes"\nthen left\tquickly \\ bye'
    long_text = "word " * 30
    entries = [
        POEntry(msgid="Hello", msgstr="Ciao", references=("hello.php:1",)),
        POEntry(msgid="Save", msgstr="Salva", msgctxt="button"),
        POEntry(msgid=tricky, msgstr=tricky.upper()),
        POEntry(msgid=long_text, msgstr=long_text),
        POEntry(msgid="%d item", msgid_plural="%d items", msgstr=("%d elemento", "%d elementi")),
    ]

    catalog = polib.pofile(encode(entries, {"Language": "it_IT"}))

    assert catalog.metadata["Language"] == "it_IT"
    assert catalog.metadata["Content-Type"] == "text/plain; charset=UTF-8"

    parsed = {(e.msgctxt, e.msgid): e for e in catalog}
    assert parsed[(None, "Hello")].msgstr == "Ciao"
    assert parsed[(None, "Hello")].occurrences == [("hello.php", "1")]
    assert parsed[("button", "Save")].msgstr == "Salva"
    assert parsed[(None, tricky)].msgstr == tricky.upper()
    assert parsed[(None, long_text)].msgstr == long_text

    plural = parsed[(None, "%d item")]
    assert plural.msgid_plural == "%d items"
    assert plural.msgstr_plural == {0: "%d elemento", 1: "%d elementi"}


def test_entry_without_msgid_is_rejected():
    with pytest.raises(EncodingPreconditionError):
        generate_po_entry(POEntry(msgid=None, msgstr="orphan"))


def test_empty_msgstr_sequence_falls_back_to_empty_string():
    assert generate_po_entry(POEntry(msgid="a", msgstr=())) == 'msgid "a"\nmsgstr ""'


def test_plural_entry_always_has_a_form():
    entry = POEntry(msgid="%d file", msgid_plural="%d files", msgstr=())
    assert generate_po_entry(entry) == (
        'msgid "%d file"\n'
        'msgid_plural "%d files"\n'
        'msgstr[0] ""'
    )
