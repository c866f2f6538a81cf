"""
muidb - translation database for multi-language resources

Merges RESX and XLIFF files into one database that tracks the review state
of every translation, and writes per-language RESX files from it.

Quick start:
    muidb import-file app.muidb --type resx --in Strings.resx --lang en
    muidb import-file app.muidb --type xliff --in Strings.de.xlf --lang de
    muidb export-file app.muidb --type resx --out Strings.de.resx --lang de
"""

__version__ = "1.0.0"

from .database import Database
from .errors import ConfigError, ExportNotImplementedError, FormatError, MuiDBError, ParseError
from .model import ImportResult, MergeOutcome, OutputFileSpec, TextEntry, TranslationItem
from .states import TranslationState, UnknownState, classify

__all__ = [
    "Database",
    "TranslationItem",
    "TextEntry",
    "OutputFileSpec",
    "ImportResult",
    "MergeOutcome",
    "TranslationState",
    "UnknownState",
    "classify",
    "MuiDBError",
    "FormatError",
    "ParseError",
    "ExportNotImplementedError",
    "ConfigError",
]
