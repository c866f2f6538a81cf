#!/usr/bin/env python3
"""
Format handlers for localization file formats.

Supported formats:
- RESX: .NET resource files (import and export)
- XLIFF: XLIFF 1.2 interchange files (import only)

Adding a format means adding a FileFormat member and its handler class.
"""

from enum import Enum
from typing import Any

from ..errors import FormatError
from .base import FormatHandler, SourceRecord
from .resx import ResxHandler
from .xliff import XliffHandler


class FileFormat(Enum):
    """Closed set of supported formats, keyed by their --type tag."""
    RESX = "resx"
    XLIFF = "xliff"

    @classmethod
    def from_tag(cls, tag: str) -> "FileFormat":
        """Resolve a type tag (case-insensitive) or raise FormatError."""
        try:
            return cls(tag.strip().lower())
        except (ValueError, AttributeError):
            available = ', '.join(f.value for f in cls)
            raise FormatError(f"unknown format: {tag}. Available: {available}") from None

    @property
    def handler(self) -> FormatHandler:
        return _HANDLERS[self]()


_HANDLERS: dict[FileFormat, type[FormatHandler]] = {
    FileFormat.RESX: ResxHandler,
    FileFormat.XLIFF: XliffHandler,
}


def list_formats() -> list[dict[str, Any]]:
    """List all formats with their extensions and capabilities."""
    result = []
    for fmt in FileFormat:
        handler = fmt.handler
        result.append({
            'name': handler.name,
            'extensions': handler.file_extensions,
            'import': True,
            'export': handler.can_render,
        })
    return result


__all__ = [
    'FileFormat',
    'FormatHandler',
    'SourceRecord',
    'ResxHandler',
    'XliffHandler',
    'list_formats',
]
