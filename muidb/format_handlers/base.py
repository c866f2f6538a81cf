#!/usr/bin/env python3
"""
Base classes for format handlers.

FormatHandler is the abstract base class that all format-specific handlers
must implement. SourceRecord is the format-neutral record that flows between
handlers and the database, in both directions.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional
from xml.etree import ElementTree as ET

from ..errors import ParseError


@dataclass
class SourceRecord:
    """
    One translatable record read from or written to a resource file.

    Attributes:
        id: Resource identifier (RESX data name, XLIFF unit id/resname)
        text: Text in the file's language
        state: Review state as found in the source, None when the format has none
        comments: Notes attached to the record, in order
    """
    id: str
    text: str = ""
    state: Optional[str] = None
    comments: list[str] = field(default_factory=list)

    def __post_init__(self):
        """Ensure id is string."""
        self.id = str(self.id)

    @property
    def comment(self) -> Optional[str]:
        """First comment, which is the one merged on import."""
        return self.comments[0] if self.comments else None


class FormatHandler(ABC):
    """
    Abstract base class for format-specific handlers.

    A handler converts between file content and SourceRecord lists. Handlers
    for read-only formats return False from can_render and raise
    ExportNotImplementedError from render.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Format tag, as given to --type."""
        pass

    @property
    @abstractmethod
    def file_extensions(self) -> list[str]:
        """List of file extensions this handler supports (without dot)."""
        pass

    @property
    def can_render(self) -> bool:
        return True

    @abstractmethod
    def parse(self, content: str) -> list[SourceRecord]:
        """
        Parse file content into records.

        Args:
            content: Raw file content as string

        Returns:
            List of SourceRecord objects in document order

        Raises:
            ParseError: content is not a valid document of this format
        """
        pass

    @abstractmethod
    def render(self, records: list[SourceRecord], include_comments: bool = True) -> str:
        """
        Render records into file content.

        Args:
            records: Records to write, in output order
            include_comments: Whether record comments are written at all

        Returns:
            Complete file content as string
        """
        pass

    def _parse_xml(self, content: str) -> ET.Element:
        """Parse XML content, converting parser failures into ParseError."""
        try:
            return ET.fromstring(content)
        except ET.ParseError as e:
            raise ParseError(f"Invalid {self.name} document: {e}") from e
