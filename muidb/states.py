#!/usr/bin/env python3
"""
Review states of a translation.

Entries store their state as a raw string so that tool-specific values
survive a save/load cycle. Reporting code goes through classify() instead of
comparing strings.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class TranslationState(str, Enum):
    """The four recognized review states, lowest confidence first."""
    INITIAL = "initial"
    TRANSLATED = "translated"
    REVIEWED = "reviewed"
    FINAL = "final"


DEFAULT_STATE = TranslationState.INITIAL.value


@dataclass(frozen=True)
class UnknownState:
    """A state string outside the recognized set."""
    value: Optional[str]

    def __str__(self) -> str:
        return str(self.value)


Classification = Union[TranslationState, UnknownState]


def classify(raw: Optional[str]) -> Classification:
    """
    Classify a raw state string.

    Matching is exact: "Final" or " final" are unknown, they are not
    silently folded into a recognized state.
    """
    for state in TranslationState:
        if raw == state.value:
            return state
    return UnknownState(raw)
