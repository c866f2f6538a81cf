#!/usr/bin/env python3
"""
The translation database and its merge engine.

Database owns every TranslationItem and OutputFileSpec. All changes to
translations go through add_or_update_translation and add_comment; items
are only ever created by the merge.
"""

import re
from pathlib import Path
from typing import Iterable, Iterator, Optional

from .format_handlers import SourceRecord
from .logger import get_logger
from .model import ImportResult, MergeOutcome, OutputFileSpec, TranslationItem
from .states import DEFAULT_STATE

logger = get_logger(__name__)

# Characters XML 1.0 cannot carry, even as character references
_XML_ILLEGAL = re.compile(r"[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def _check_storable(value: Optional[str], what: str) -> None:
    if value and _XML_ILLEGAL.search(value):
        raise ValueError(f"{what} contains characters that cannot be stored: {value!r}")


class Database:
    """
    In-memory translation database.

    Handles:
    - Item lookup and enumeration (insertion order)
    - Merging (id, lang, text, state, comment) tuples
    - Output file configuration
    - Loading and saving through muidb.storage
    """

    def __init__(self, path: Optional[str] = None):
        self.path = Path(path) if path else None
        self._items: dict[str, TranslationItem] = {}
        self._output_files: list[OutputFileSpec] = []
        # Ids and output file names listed more than once in the loaded file; reported by verify
        self.duplicate_ids: list[str] = []
        self.duplicate_output_files: list[str] = []

    # Lookup

    @property
    def items(self) -> list[TranslationItem]:
        return list(self._items.values())

    @property
    def output_files(self) -> tuple[OutputFileSpec, ...]:
        return tuple(self._output_files)

    def get_item(self, item_id: str) -> Optional[TranslationItem]:
        return self._items.get(item_id)

    def languages(self) -> list[str]:
        """Distinct language codes, in order of first appearance."""
        seen = {}
        for item in self._items.values():
            for lang in item.languages:
                seen.setdefault(lang, None)
        return list(seen)

    def __contains__(self, item_id: str) -> bool:
        return item_id in self._items

    def __iter__(self) -> Iterator[TranslationItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Database):
            return NotImplemented
        return (
            list(self._items.items()) == list(other._items.items())
            and self._output_files == other._output_files
        )

    def __repr__(self) -> str:
        return f"Database(path={str(self.path)!r}, items={len(self._items)}, output_files={len(self._output_files)})"

    # Mutation

    def add_or_update_translation(
        self,
        item_id: str,
        lang: str,
        text: Optional[str],
        state: Optional[str] = None,
        comment: Optional[str] = None,
    ) -> MergeOutcome:
        """
        Merge one translation into the database.

        The state is stored as given, without checking it against the
        recognized states, and overwrites whatever the entry held before.

        Args:
            item_id: Item id; the item is created if missing
            lang: Language code of the translation
            text: Translated text (None is stored as empty string)
            state: Review state (None is stored as 'initial')
            comment: Appended to the item's comments when non-empty

        Returns:
            MergeOutcome.ADDED if the (id, lang) entry is new, else UPDATED
        """
        if not item_id:
            raise ValueError("item id must not be empty")
        if not lang:
            raise ValueError(f"language must not be empty (item id={item_id})")
        _check_storable(item_id, "item id")
        _check_storable(lang, f"language (item id={item_id})")
        _check_storable(text, f"text (item id={item_id}, lang={lang})")
        _check_storable(state, f"state (item id={item_id}, lang={lang})")
        _check_storable(comment, f"comment (item id={item_id})")

        item = self._items.get(item_id)
        if item is None:
            item = TranslationItem(item_id)
            self._items[item_id] = item

        outcome = MergeOutcome.UPDATED if item.has_language(lang) else MergeOutcome.ADDED
        item._set_text(lang, text if text is not None else "", state if state is not None else DEFAULT_STATE)

        if comment:
            item._append_comment(comment)

        logger.debug("%s id=%s lang=%s state=%s", outcome.value, item_id, lang, state)
        return outcome

    def add_comment(self, item_id: str, comment: str) -> None:
        """Append a comment to an existing item."""
        item = self._items.get(item_id)
        if item is None:
            raise KeyError(f"no item with id '{item_id}'")
        _check_storable(comment, f"comment (item id={item_id})")
        if comment:
            item._append_comment(comment)

    def import_records(self, records: Iterable[SourceRecord], lang: str, default_state: Optional[str] = None) -> ImportResult:
        """
        Merge parsed source records at one language.

        Args:
            records: Records from a format handler
            lang: Language the records are written in
            default_state: State for records whose source carries none

        Returns:
            ImportResult with each (id, lang) pair in exactly one bucket
        """
        result = ImportResult()
        for record in records:
            state = record.state if record.state is not None else default_state
            outcome = self.add_or_update_translation(record.id, lang, record.text, state, record.comment)
            result.record(record.id, lang, outcome)
        return result

    def add_output_file(self, name: str, lang: str, format: str = "resx") -> OutputFileSpec:
        """Register an output file; an existing spec with the same name is replaced."""
        if not name:
            raise ValueError("output file name must not be empty")
        if not lang:
            raise ValueError("output file language must not be empty")
        _check_storable(name, "output file name")
        _check_storable(lang, "output file language")
        _check_storable(format, "output file format")

        spec = OutputFileSpec(name=name, lang=lang, format=format)
        for i, existing in enumerate(self._output_files):
            if existing.name == name:
                self._output_files[i] = spec
                break
        else:
            self._output_files.append(spec)
        return spec

    def sort_items(self) -> None:
        """Reorder items by id."""
        self._items = dict(sorted(self._items.items()))

    # Persistence

    @classmethod
    def open(cls, path: str, create_if_missing: bool = False) -> "Database":
        """Load a database file (see muidb.storage.load)."""
        from .storage import load
        return load(path, create_if_missing=create_if_missing)

    def save(self, path: Optional[str] = None) -> Path:
        """Save to path, or to the path the database was opened from."""
        from .storage import save
        target = Path(path) if path else self.path
        if target is None:
            raise ValueError("database has no path; pass one to save()")
        save(self, target)
        self.path = target
        return target

    # Used by muidb.storage while loading

    def _load_item(self, item: TranslationItem) -> None:
        existing = self._items.get(item.id)
        if existing is None:
            self._items[item.id] = item
            return

        # Duplicate id in the file: later entries win, comments are kept
        self.duplicate_ids.append(item.id)
        for lang, entry in item:
            existing._set_text(lang, entry.value, entry.state)
        for comment in item.comments:
            existing._append_comment(comment)

    def _load_output_file(self, name: str, lang: str, format: str) -> None:
        if any(spec.name == name for spec in self._output_files):
            # Same file listed twice: the later spec replaces the earlier one
            self.duplicate_output_files.append(name)
        self.add_output_file(name, lang, format)
