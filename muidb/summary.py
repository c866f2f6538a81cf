#!/usr/bin/env python3
"""
Aggregate counts of a database, as shown by the info command.

A single pass over the items feeds a SummaryAccumulator, which produces an
immutable DatabaseSummary.
"""

from dataclasses import dataclass, field

from .database import Database
from .model import OutputFileSpec, TextEntry, TranslationItem
from .states import TranslationState, UnknownState


@dataclass(frozen=True)
class UnknownStateEntry:
    """An entry whose state is not one of the recognized states."""
    item_id: str
    lang: str
    state: str

    def __str__(self) -> str:
        return f"unknown state '{self.state}' for item id={self.item_id} and lang={self.lang}"


@dataclass(frozen=True)
class DatabaseSummary:
    item_count: int
    comment_count: int
    languages: tuple[str, ...]
    state_counts: dict[TranslationState, int]
    unknown_states: tuple[UnknownStateEntry, ...]
    output_files: tuple[OutputFileSpec, ...]

    @property
    def unknown_count(self) -> int:
        return len(self.unknown_states)

    def count(self, state: TranslationState) -> int:
        return self.state_counts.get(state, 0)

    def to_dict(self) -> dict:
        return {
            "items": self.item_count,
            "comments": self.comment_count,
            "languages": list(self.languages),
            "states": {state.value: self.count(state) for state in TranslationState},
            "unknown": self.unknown_count,
            "unknown_states": [
                {"id": u.item_id, "lang": u.lang, "state": u.state} for u in self.unknown_states
            ],
            "output_files": [
                {"name": f.name, "lang": f.lang, "format": f.format} for f in self.output_files
            ],
        }


@dataclass
class SummaryAccumulator:
    item_count: int = 0
    comment_count: int = 0
    languages: dict = field(default_factory=dict)
    state_counts: dict = field(default_factory=lambda: {s: 0 for s in TranslationState})
    unknown_states: list = field(default_factory=list)

    def add_item(self, item: TranslationItem) -> None:
        self.item_count += 1
        self.comment_count += len(item.comments)
        for lang, entry in item:
            self.add_entry(item.id, lang, entry)

    def add_entry(self, item_id: str, lang: str, entry: TextEntry) -> None:
        self.languages.setdefault(lang, None)
        state = entry.classification
        if isinstance(state, UnknownState):
            self.unknown_states.append(UnknownStateEntry(item_id, lang, entry.state))
        else:
            self.state_counts[state] += 1

    def finish(self, output_files: tuple[OutputFileSpec, ...] = ()) -> DatabaseSummary:
        return DatabaseSummary(
            item_count=self.item_count,
            comment_count=self.comment_count,
            languages=tuple(self.languages),
            state_counts=dict(self.state_counts),
            unknown_states=tuple(self.unknown_states),
            output_files=tuple(output_files),
        )


def summarize(db: Database) -> DatabaseSummary:
    acc = SummaryAccumulator()
    for item in db.items:
        acc.add_item(item)
    return acc.finish(db.output_files)
