#!/usr/bin/env python3
"""
Tests for database persistence.

Tests verify:
1. load(save(db)) == db, including unknown states, comments and output files
2. Saving an unchanged database is byte-stable
3. create_if_missing returns an empty database, otherwise missing files fail
4. Duplicate ids in a file are merged and remembered for verify
5. Malformed files raise ParseError
6. A failed write leaves the previous file and no temporary files behind
7. Carriage returns and tabs survive a round trip; unstorable characters are
   rejected before the database changes
8. Output files listed twice are remembered for verify, the last one wins
"""

import os

import pytest

from muidb import Database, ParseError
from muidb import storage


def build_db(path=None):
    db = Database(str(path) if path else None)
    db.add_or_update_translation("Greeting", "en", "Hello", "initial", "Start page")
    db.add_or_update_translation("Greeting", "de", "Hallo", "final")
    db.add_or_update_translation("Greeting", "fr", "", "pending-review")
    db.add_or_update_translation("Farewell", "en", "  Bye <now> & \"later\"  ", "translated")
    db.add_comment("Greeting", "Keep it short")
    db.add_comment("Farewell", "multi\nline")
    db.add_output_file("Strings.de.resx", "de")
    db.add_output_file("sub/Strings.fr.resx", "fr")
    return db


def test_round_trip(db_path):
    db = build_db(db_path)
    db.save()

    loaded = Database.open(str(db_path))

    assert loaded == db
    assert [i.id for i in loaded.items] == ["Greeting", "Farewell"]
    assert loaded.get_item("Greeting").languages == ["en", "de", "fr"]
    assert loaded.get_item("Greeting").comments == ("Start page", "Keep it short")
    assert loaded.get_item("Farewell").texts["en"].value == "  Bye <now> & \"later\"  "
    assert loaded.output_files == db.output_files


def test_unknown_state_survives_round_trip(db_path):
    build_db(db_path).save()

    loaded = storage.load(db_path)

    assert loaded.get_item("Greeting").texts["fr"].state == "pending-review"


def test_save_is_byte_stable(db_path):
    db = build_db(db_path)
    db.save()
    first = db_path.read_bytes()

    Database.open(str(db_path)).save()

    assert db_path.read_bytes() == first
    assert first.startswith(b"<?xml version='1.0' encoding='utf-8'?>")


def test_empty_database_round_trip(db_path):
    Database(str(db_path)).save()

    loaded = Database.open(str(db_path))

    assert len(loaded) == 0
    assert loaded.output_files == ()


def test_create_if_missing(db_path):
    db = Database.open(str(db_path), create_if_missing=True)

    assert len(db) == 0
    assert db.path == db_path
    assert not db_path.exists()


def test_missing_file_fails_without_flag(db_path):
    with pytest.raises(FileNotFoundError):
        Database.open(str(db_path))


def test_duplicate_ids_are_merged(db_path):
    db_path.write_text("""<?xml version='1.0' encoding='utf-8'?>
<muidb version="1">
  <items>
    <item id="A">
      <text lang="en" state="initial">first</text>
      <comment>one</comment>
    </item>
    <item id="B"><text lang="en" state="final">b</text></item>
    <item id="A">
      <text lang="en" state="translated">second</text>
      <text lang="de" state="initial">zweite</text>
      <comment>two</comment>
    </item>
  </items>
</muidb>
""", encoding="utf-8")

    db = Database.open(str(db_path))

    assert len(db) == 2
    assert db.duplicate_ids == ["A"]
    item = db.get_item("A")
    assert item.texts["en"].value == "second"
    assert item.texts["en"].state == "translated"
    assert item.texts["de"].value == "zweite"
    assert item.comments == ("one", "two")


def test_duplicate_output_files_are_remembered(db_path):
    db_path.write_text("""<muidb version="1">
  <files>
    <file name="Strings.resx" lang="en" format="resx"/>
    <file name="Other.resx" lang="fr" format="resx"/>
    <file name="Strings.resx" lang="de" format="resx"/>
  </files>
</muidb>
""", encoding="utf-8")

    db = Database.open(str(db_path))

    assert db.duplicate_output_files == ["Strings.resx"]
    assert [(s.name, s.lang) for s in db.output_files] == [("Strings.resx", "de"), ("Other.resx", "fr")]


def test_element_text_values_still_load(db_path):
    db_path.write_text(
        '<muidb><files><file lang="de">Strings.de.resx</file></files>'
        '<items><item id="A"><text lang="en" state="final">a</text><comment>note</comment></item></items></muidb>',
        encoding="utf-8",
    )

    db = Database.open(str(db_path))

    assert db.output_files[0].name == "Strings.de.resx"
    assert db.get_item("A").texts["en"].value == "a"
    assert db.get_item("A").comments == ("note",)


def test_missing_state_attribute_defaults_to_initial(db_path):
    db_path.write_text('<muidb><items><item id="A"><text lang="en">a</text></item></items></muidb>', encoding="utf-8")

    assert Database.open(str(db_path)).get_item("A").texts["en"].state == "initial"


@pytest.mark.parametrize("content", [
    "<muidb><items><item id='A'>",
    "<root/>",
    "<muidb><items><item><text lang='en'>a</text></item></items></muidb>",
    "<muidb><items><item id='A'><text>a</text></item></items></muidb>",
    "<muidb><files><file lang='de'></file></files></muidb>",
])
def test_malformed_file_raises_parse_error(db_path, content):
    db_path.write_text(content, encoding="utf-8")

    with pytest.raises(ParseError):
        Database.open(str(db_path))


def test_save_without_path_fails():
    with pytest.raises(ValueError):
        Database().save()


def test_failed_write_keeps_previous_file(db_path, monkeypatch):
    build_db(db_path).save()
    before = db_path.read_bytes()

    def broken_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(storage.os, "replace", broken_replace)
    db = Database.open(str(db_path))
    db.add_or_update_translation("New", "en", "new", "initial")

    with pytest.raises(OSError):
        db.save()

    assert db_path.read_bytes() == before
    assert sorted(os.listdir(db_path.parent)) == [db_path.name]


def test_line_endings_and_tabs_round_trip(db_path):
    db = Database(str(db_path))
    db.add_or_update_translation("A", "en", "line1\r\nline2\rline3\tend", "initial", "note\rtwo")
    db.add_comment("A", "tab\there\r\n")
    db.save()

    loaded = Database.open(str(db_path))

    assert loaded == db
    assert loaded.get_item("A").texts["en"].value == "line1\r\nline2\rline3\tend"
    assert loaded.get_item("A").comments == ("note\rtwo", "tab\there\r\n")
    assert b"&#13;" in db_path.read_bytes()


@pytest.mark.parametrize("change", [
    lambda db: db.add_or_update_translation("A", "en", "bell\x07", "initial"),
    lambda db: db.add_or_update_translation("A\x00", "en", "a", "initial"),
    lambda db: db.add_or_update_translation("A", "en", "a", "odd\x1b"),
    lambda db: db.add_or_update_translation("A", "de", "a", "initial", "note\x0c"),
    lambda db: db.add_comment("A", "bell\x07"),
    lambda db: db.add_output_file("Strings\x01.resx", "en"),
])
def test_unstorable_characters_rejected(db_path, change):
    db = Database(str(db_path))
    db.add_or_update_translation("A", "en", "a", "initial", "first")
    db.save()
    before = db_path.read_bytes()

    with pytest.raises(ValueError):
        change(db)

    assert db == Database.open(str(db_path))
    db.save()
    assert db_path.read_bytes() == before
