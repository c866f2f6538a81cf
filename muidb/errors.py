#!/usr/bin/env python3
"""
Exception classes for muidb.

Business logic raises these and lets them propagate; the CLI entry point is
the only place that turns them into a message and an exit code.
"""

from typing import Any, Optional


class MuiDBError(Exception):
    """Base error with an optional details mapping."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class FormatError(MuiDBError):
    """Unrecognized import/export type tag."""


class ParseError(MuiDBError):
    """Malformed source document or database file."""


class ExportNotImplementedError(MuiDBError, NotImplementedError):
    """Export into a format that can only be read."""


class ConfigError(MuiDBError):
    """Malformed configuration file."""
