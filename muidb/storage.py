#!/usr/bin/env python3
"""
On-disk format of the translation database.

The database is an XML document:

```xml
<?xml version='1.0' encoding='utf-8'?>
<muidb version="1">
  <files>
    <file name="Strings.de.resx" lang="de" format="resx"/>
  </files>
  <items>
    <item id="Greeting">
      <text lang="en" state="initial" value="Hello"/>
      <comment text="Shown on the start page"/>
    </item>
  </items>
</muidb>
```

Texts and comments live in attributes so that carriage returns and tabs
survive a reload.

Saving writes a temporary file next to the target and replaces the target,
so an interrupted save leaves the previous file intact. Saving an unchanged
database produces identical bytes.
"""

import os
import tempfile
from pathlib import Path
from typing import Union
from xml.etree import ElementTree as ET

from .database import Database
from .errors import ParseError
from .logger import get_logger
from .model import TranslationItem
from .states import DEFAULT_STATE

logger = get_logger(__name__)

FORMAT_VERSION = "1"
ROOT_TAG = "muidb"

PathLike = Union[str, Path]


def load(path: PathLike, create_if_missing: bool = False) -> Database:
    """
    Load a database file.

    Args:
        path: Database file
        create_if_missing: Return an empty database instead of failing when
            the file does not exist

    Returns:
        Database bound to path

    Raises:
        FileNotFoundError: file missing and create_if_missing not set
        ParseError: file is not a valid database document
    """
    db_path = Path(path)
    if not db_path.exists() and create_if_missing:
        logger.debug("database %s not found, starting empty", db_path)
        return Database(str(db_path))

    with db_path.open("rb") as f:
        try:
            root = ET.parse(f).getroot()
        except ET.ParseError as e:
            raise ParseError(f"Invalid database file {db_path}: {e}") from e

    return from_element(root, db_path)


def from_element(root: ET.Element, path: PathLike = None) -> Database:
    """Build a Database from a parsed <muidb> element."""
    if root.tag != ROOT_TAG:
        raise ParseError(f"Root element must be '{ROOT_TAG}', found '{root.tag}'")

    db = Database(str(path) if path else None)

    for file_elem in root.findall("files/file"):
        name = file_elem.get("name")
        if name is None:
            name = (file_elem.text or "").strip()
        lang = file_elem.get("lang")
        if not name or not lang:
            raise ParseError("output file entry needs a name and a lang attribute")
        db._load_output_file(name, lang, file_elem.get("format", "resx"))

    for item_elem in root.findall("items/item"):
        item_id = item_elem.get("id")
        if not item_id:
            raise ParseError("item without id attribute")

        item = TranslationItem(item_id)
        for text_elem in item_elem.findall("text"):
            lang = text_elem.get("lang")
            if not lang:
                raise ParseError(f"text without lang attribute (item id={item_id})")
            item._set_text(lang, _content(text_elem, "value"), text_elem.get("state", DEFAULT_STATE))
        for comment_elem in item_elem.findall("comment"):
            item._append_comment(_content(comment_elem, "text"))

        db._load_item(item)

    return db


def _content(elem: ET.Element, attr: str) -> str:
    # Files written before values moved into attributes keep them as element text
    value = elem.get(attr)
    if value is None:
        value = elem.text or ""
    return value


def to_element(db: Database) -> ET.Element:
    """Build the <muidb> element for a Database."""
    root = ET.Element(ROOT_TAG, {"version": FORMAT_VERSION})

    files = ET.SubElement(root, "files")
    for spec in db.output_files:
        ET.SubElement(files, "file", {"name": spec.name, "lang": spec.lang, "format": spec.format})

    items = ET.SubElement(root, "items")
    for item in db.items:
        item_elem = ET.SubElement(items, "item", {"id": item.id})
        for lang, entry in item:
            ET.SubElement(item_elem, "text", {"lang": lang, "state": entry.state, "value": entry.value})
        for comment in item.comments:
            ET.SubElement(item_elem, "comment", {"text": comment})

    return root


def dumps(db: Database) -> bytes:
    """Serialize a Database to the bytes save() writes."""
    root = to_element(db)
    ET.indent(root, space="  ")
    return ET.tostring(root, encoding="utf-8", xml_declaration=True) + b"\n"


def save(db: Database, path: PathLike) -> None:
    """Write a Database to path atomically."""
    atomic_write(Path(path), dumps(db))
    logger.debug("saved %d items to %s", len(db), path)


def atomic_write(path: Path, content: bytes) -> None:
    """
    Write content to path through a temporary file in the same directory.

    The temporary file is removed if anything fails before the replace.
    """
    directory = path.parent
    directory.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=directory)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise
