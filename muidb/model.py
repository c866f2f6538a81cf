#!/usr/bin/env python3
"""
Data model of the translation database.

TranslationItem is one localizable string with its per-language TextEntry
objects and its shared comments. Items are created and mutated only through
Database, so every change passes through the merge logic there.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping, Optional

from .states import Classification, classify


@dataclass
class TextEntry:
    """Translation of one item into one language."""
    value: str = ""
    state: str = "initial"

    @property
    def classification(self) -> Classification:
        return classify(self.state)


class TranslationItem:
    """
    One localizable unit.

    Attributes:
        id: Stable identity key, unique within a database
        texts: Read-only mapping of language code -> TextEntry
        comments: Developer/translator notes shared by all languages
    """

    def __init__(self, item_id: str):
        if not item_id:
            raise ValueError("item id must not be empty")
        self._id = item_id
        self._texts: dict[str, TextEntry] = {}
        self._comments: list[str] = []

    @property
    def id(self) -> str:
        return self._id

    @property
    def texts(self) -> Mapping[str, TextEntry]:
        return MappingProxyType(self._texts)

    @property
    def comments(self) -> tuple[str, ...]:
        return tuple(self._comments)

    @property
    def languages(self) -> list[str]:
        return list(self._texts)

    def get_text(self, lang: str) -> Optional[TextEntry]:
        return self._texts.get(lang)

    def has_language(self, lang: str) -> bool:
        return lang in self._texts

    def __iter__(self) -> Iterator[tuple[str, TextEntry]]:
        return iter(list(self._texts.items()))

    def __eq__(self, other) -> bool:
        if not isinstance(other, TranslationItem):
            return NotImplemented
        return (
            self._id == other._id
            and self._texts == other._texts
            and self._comments == other._comments
        )

    def __repr__(self) -> str:
        return f"TranslationItem(id={self._id!r}, texts={self._texts!r}, comments={self._comments!r})"

    # Mutators used by Database only.

    def _set_text(self, lang: str, value: str, state: str) -> None:
        entry = self._texts.get(lang)
        if entry is None:
            self._texts[lang] = TextEntry(value=value, state=state)
        else:
            entry.value = value
            entry.state = state

    def _append_comment(self, comment: str) -> None:
        self._comments.append(comment)


@dataclass(frozen=True)
class OutputFileSpec:
    """
    A configured export target.

    Attributes:
        name: File name, relative to the database's directory
        lang: Language projected into the file
        format: Format tag of the file (see FileFormat)
    """
    name: str
    lang: str
    format: str = "resx"


class MergeOutcome(str, Enum):
    """Result of merging one (id, lang) pair."""
    ADDED = "added"
    UPDATED = "updated"


@dataclass
class ImportResult:
    """
    Add/update report of one import.

    Both buckets hold (id, lang) pairs in merge order. A pair is never in
    both buckets.
    """
    added: list[tuple[str, str]] = field(default_factory=list)
    updated: list[tuple[str, str]] = field(default_factory=list)
    _seen: set = field(default_factory=set, repr=False, compare=False)

    def record(self, item_id: str, lang: str, outcome: MergeOutcome) -> None:
        key = (item_id, lang)
        if key in self._seen:
            return
        self._seen.add(key)
        if outcome is MergeOutcome.ADDED:
            self.added.append(key)
        else:
            self.updated.append(key)

    @property
    def added_items(self) -> list[str]:
        return [item_id for item_id, _ in self.added]

    @property
    def updated_items(self) -> list[str]:
        return [item_id for item_id, _ in self.updated]

    @property
    def total(self) -> int:
        return len(self.added) + len(self.updated)

    def to_dict(self) -> dict:
        return {
            "added": len(self.added),
            "updated": len(self.updated),
            "added_items": self.added_items,
            "updated_items": self.updated_items,
        }
