#!/usr/bin/env python3
"""
Consistency pass over a whole database.

Anomalies are flagged, never repaired by dropping data: entries with unknown
states keep their state, items missing an output language stay as they
are. The only normalizations are the merge of duplicate ids and
duplicate output files (done while loading) and ordering items by id.
Running verify twice yields the same database and the same report, except
that duplicates are reported by the first run only.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .database import Database
from .logger import get_logger
from .states import TranslationState, UnknownState

logger = get_logger(__name__)


class IssueKind(str, Enum):
    UNKNOWN_STATE = "unknown_state"
    MISSING_OUTPUT_LANGUAGE = "missing_output_language"
    DUPLICATE_ID = "duplicate_id"
    EMPTY_TRANSLATION = "empty_translation"
    UNUSED_OUTPUT_LANGUAGE = "unused_output_language"
    DUPLICATE_OUTPUT_FILE = "duplicate_output_file"


@dataclass(frozen=True)
class Issue:
    kind: IssueKind
    message: str
    item_id: Optional[str] = None
    lang: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "id": self.item_id,
            "lang": self.lang,
        }


@dataclass
class VerificationReport:
    issues: list[Issue] = field(default_factory=list)
    reordered: bool = False

    @property
    def ok(self) -> bool:
        return not self.issues

    def of_kind(self, kind: IssueKind) -> list[Issue]:
        return [i for i in self.issues if i.kind is kind]

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "reordered": self.reordered,
            "issues": [i.to_dict() for i in self.issues],
        }


def verify(db: Database) -> VerificationReport:
    """
    Check the database and normalize its item order.

    Args:
        db: Database to check; modified in place

    Returns:
        VerificationReport listing every anomaly found
    """
    report = VerificationReport()

    for item_id in dict.fromkeys(db.duplicate_ids):
        report.issues.append(Issue(
            IssueKind.DUPLICATE_ID,
            f"duplicate item id={item_id} merged into one item",
            item_id=item_id,
        ))
    db.duplicate_ids.clear()

    for name in dict.fromkeys(db.duplicate_output_files):
        report.issues.append(Issue(
            IssueKind.DUPLICATE_OUTPUT_FILE,
            f"output file '{name}' listed more than once; the last entry is kept",
        ))
    db.duplicate_output_files.clear()

    before = [item.id for item in db.items]
    db.sort_items()
    report.reordered = before != [item.id for item in db.items]

    output_langs = list(dict.fromkeys(spec.lang for spec in db.output_files))
    used_langs = set(db.languages())

    for lang in output_langs:
        if lang not in used_langs:
            report.issues.append(Issue(
                IssueKind.UNUSED_OUTPUT_LANGUAGE,
                f"output language '{lang}' has no translations",
                lang=lang,
            ))

    for item in db.items:
        for lang, entry in item:
            state = entry.classification
            if isinstance(state, UnknownState):
                report.issues.append(Issue(
                    IssueKind.UNKNOWN_STATE,
                    f"unknown state '{entry.state}' for item id={item.id} and lang={lang}",
                    item_id=item.id,
                    lang=lang,
                ))
            elif state is not TranslationState.INITIAL and not entry.value:
                report.issues.append(Issue(
                    IssueKind.EMPTY_TRANSLATION,
                    f"empty text in state '{entry.state}' for item id={item.id} and lang={lang}",
                    item_id=item.id,
                    lang=lang,
                ))

        for lang in output_langs:
            if not item.has_language(lang):
                report.issues.append(Issue(
                    IssueKind.MISSING_OUTPUT_LANGUAGE,
                    f"item id={item.id} has no text for output language '{lang}'",
                    item_id=item.id,
                    lang=lang,
                ))

    for issue in report.issues:
        logger.debug(issue.message)
    return report
