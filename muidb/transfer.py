#!/usr/bin/env python3
"""
Import from and export to resource files.

Import parses a file with its format handler and merges the records into a
database. Export projects one language of a database into records and
renders them with the format handler.
"""

from enum import Flag
from pathlib import Path
from typing import Callable, Optional, Union

from .config import MuiDBConfig
from .database import Database
from .format_handlers import FileFormat, SourceRecord
from .logger import get_logger
from .model import ImportResult, OutputFileSpec
from .storage import atomic_write

logger = get_logger(__name__)

PathLike = Union[str, Path]


class ExportOptions(Flag):
    NONE = 0
    INCLUDE_COMMENTS = 1


def _as_format(fmt: Union[str, FileFormat]) -> FileFormat:
    return fmt if isinstance(fmt, FileFormat) else FileFormat.from_tag(fmt)


def import_file(
    db: Database,
    path: PathLike,
    fmt: Union[str, FileFormat],
    lang: str,
    config: Optional[MuiDBConfig] = None,
) -> ImportResult:
    """
    Merge a resource file into the database.

    The format is resolved before the file is read, so an unknown format
    fails without touching the database.

    Args:
        db: Target database
        path: Source file
        fmt: Format tag or FileFormat
        lang: Language the file is written in
        config: Supplies the state for records whose source has none

    Returns:
        ImportResult of the merge

    Raises:
        FormatError: unknown format tag
        ParseError: malformed source file
    """
    file_format = _as_format(fmt)
    config = config or MuiDBConfig()

    content = Path(path).read_text(encoding="utf-8-sig")
    records = file_format.handler.parse(content)
    logger.debug("parsed %d records from %s", len(records), path)

    if file_format is FileFormat.RESX:
        default_state = config.resx_import_state
    else:
        default_state = config.xliff_default_state

    return db.import_records(records, lang, default_state=default_state)


def project(db: Database, lang: str, options: ExportOptions = ExportOptions.INCLUDE_COMMENTS) -> list[SourceRecord]:
    """
    Project one language of the database into records.

    Items without an entry for lang are left out; nothing is synthesized
    for them.
    """
    include_comments = bool(options & ExportOptions.INCLUDE_COMMENTS)
    records = []
    for item in db.items:
        entry = item.get_text(lang)
        if entry is None:
            continue
        records.append(SourceRecord(
            id=item.id,
            text=entry.value,
            state=entry.state,
            comments=list(item.comments) if include_comments else [],
        ))
    return records


def export_file(
    db: Database,
    path: PathLike,
    lang: str,
    fmt: Union[str, FileFormat] = FileFormat.RESX,
    options: ExportOptions = ExportOptions.INCLUDE_COMMENTS,
) -> int:
    """
    Write one language of the database to a file.

    Content is fully rendered before anything is written, so a format that
    cannot be exported fails without creating the file.

    Returns:
        Number of records written

    Raises:
        FormatError: unknown format tag
        ExportNotImplementedError: format is import-only
    """
    handler = _as_format(fmt).handler
    records = project(db, lang, options)
    content = handler.render(records, include_comments=bool(options & ExportOptions.INCLUDE_COMMENTS))

    atomic_write(Path(path), content.encode("utf-8"))
    logger.debug("exported %d records (lang=%s) to %s", len(records), lang, path)
    return len(records)


def export_all(
    db: Database,
    base_dir: Optional[PathLike] = None,
    options: ExportOptions = ExportOptions.INCLUDE_COMMENTS,
    progress: Optional[Callable[[OutputFileSpec, Path], None]] = None,
) -> list[Path]:
    """
    Write every configured output file of the database.

    Args:
        db: Source database
        base_dir: Directory output names are resolved against; defaults to
            the directory of the database file
        options: Export options applied to every file
        progress: Called with (spec, path) before each file is written

    Returns:
        Paths written, in configuration order
    """
    if base_dir is None:
        base_dir = db.path.parent if db.path else Path(".")

    written = []
    for spec in db.output_files:
        file_path = Path(base_dir) / spec.name
        if progress:
            progress(spec, file_path)
        export_file(db, file_path, spec.lang, spec.format, options)
        written.append(file_path)
    return written
