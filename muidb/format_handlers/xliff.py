#!/usr/bin/env python3
"""
XLIFF 1.2 format handler (import only).

Handles trans-units of the first <file> element, with or without the XLIFF
namespace, including units nested in <group> elements.
"""

from xml.etree import ElementTree as ET

from ..errors import ExportNotImplementedError, ParseError
from .base import FormatHandler, SourceRecord

# Unit id that means "use the resname attribute instead"
NO_ID = 'none'


class XliffHandler(FormatHandler):
    """
    Handler for XLIFF interchange files.

    XLIFF structure:
    ```xml
    <xliff version="1.2" xmlns="urn:oasis:names:tc:xliff:document:1.2">
      <file source-language="en" target-language="de" datatype="xml" original="Strings.resx">
        <body>
          <trans-unit id="Greeting">
            <source>Hello</source>
            <target state="translated">Hallo</target>
            <note>Shown on the start page</note>
          </trans-unit>
        </body>
      </file>
    </xliff>
    ```

    The target's state attribute is passed through unchanged; only the first
    note of a unit is kept.
    """

    @property
    def name(self) -> str:
        return "xliff"

    @property
    def file_extensions(self) -> list[str]:
        return ["xlf", "xliff"]

    @property
    def can_render(self) -> bool:
        return False

    def parse(self, content: str) -> list[SourceRecord]:
        root = self._parse_xml(content)

        file_elem = root if self._local_name(root) == 'file' else root.find('{*}file')
        if file_elem is None:
            raise ParseError("Invalid xliff document: no <file> element found")

        records = []
        for unit in file_elem.iterfind('.//{*}trans-unit'):
            unit_id = self._resolve_id(unit)
            if not unit_id:
                raise ParseError(
                    "Invalid xliff document: trans-unit without id or resname",
                    details={'unit': ET.tostring(unit, encoding='unicode')[:200]},
                )

            target = unit.find('{*}target')
            note = unit.find('{*}note')
            note_text = ''.join(note.itertext()) if note is not None else ''
            records.append(SourceRecord(
                id=unit_id,
                text=''.join(target.itertext()) if target is not None else '',
                state=target.get('state') if target is not None else None,
                comments=[note_text] if note_text else [],
            ))

        return records

    def _resolve_id(self, unit: ET.Element) -> str:
        unit_id = unit.get('id')
        if unit_id == NO_ID:
            unit_id = unit.get('resname')
        return unit_id or ''

    @staticmethod
    def _local_name(elem: ET.Element) -> str:
        return elem.tag.rsplit('}', 1)[-1]

    def render(self, records: list[SourceRecord], include_comments: bool = True) -> str:
        raise ExportNotImplementedError("xliff export is not implemented, yet")
