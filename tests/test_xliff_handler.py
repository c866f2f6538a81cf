#!/usr/bin/env python3
"""
Tests for XliffHandler.

Tests verify:
1. Units of the first <file> are parsed, including units inside groups
2. The sentinel id "none" falls back to the resname attribute
3. Target state is passed through; missing target/state give '' / None
4. Only the first note becomes a comment
5. Documents without namespace parse the same way
6. Export is rejected with ExportNotImplementedError
"""

import pytest

from muidb.errors import ExportNotImplementedError, ParseError
from muidb.format_handlers import SourceRecord
from muidb.format_handlers.xliff import XliffHandler

from samples import XLIFF_DE


@pytest.fixture
def handler():
    return XliffHandler()


@pytest.fixture
def records(handler):
    return {r.id: r for r in handler.parse(XLIFF_DE)}


def test_parse_first_file_only(handler):
    ids = [r.id for r in handler.parse(XLIFF_DE)]

    assert ids == ["Greeting", "Title", "Farewell", "Pending"]


def test_none_id_uses_resname(records):
    assert "none" not in records
    assert records["Title"].text == "Titel"
    assert records["Title"].state == "final"


def test_target_state_and_first_note(records):
    greeting = records["Greeting"]

    assert greeting.text == "Hallo"
    assert greeting.state == "translated"
    assert greeting.comments == ["Shown on the start page"]
    assert greeting.comment == "Shown on the start page"


def test_missing_state_and_target(records):
    assert records["Farewell"].text == "Auf Wiedersehen"
    assert records["Farewell"].state is None
    assert records["Pending"].text == ""
    assert records["Pending"].state is None
    assert records["Pending"].comments == []


def test_parse_without_namespace(handler):
    content = """<xliff version="1.2">
  <file source-language="en" target-language="fr" datatype="xml" original="x">
    <body>
      <trans-unit id="A"><source>a</source><target state="signed-off">b</target></trans-unit>
    </body>
  </file>
</xliff>"""

    parsed = handler.parse(content)

    assert [(r.id, r.text, r.state) for r in parsed] == [("A", "b", "signed-off")]


def test_inline_markup_in_target_is_flattened(handler):
    content = """<xliff version="1.2" xmlns="urn:oasis:names:tc:xliff:document:1.2">
  <file source-language="en" target-language="de" datatype="xml" original="x">
    <body>
      <trans-unit id="A"><source>a</source><target>Hallo <g id="1">Welt</g>!</target></trans-unit>
    </body>
  </file>
</xliff>"""

    assert handler.parse(content)[0].text == "Hallo Welt!"


def test_document_without_file_element(handler):
    with pytest.raises(ParseError):
        handler.parse('<xliff version="1.2"></xliff>')


def test_unit_without_usable_id(handler):
    content = """<xliff version="1.2"><file original="x"><body>
      <trans-unit id="none"><source>a</source></trans-unit>
    </body></file></xliff>"""

    with pytest.raises(ParseError):
        handler.parse(content)


def test_malformed_document(handler):
    with pytest.raises(ParseError):
        handler.parse("<xliff><file>")


def test_export_is_not_implemented(handler):
    assert handler.can_render is False
    with pytest.raises(ExportNotImplementedError):
        handler.render([SourceRecord("A", "a")])
    with pytest.raises(NotImplementedError):
        handler.render([])
