#!/usr/bin/env python3
"""
RESX (.NET resource file) format handler.

Only string resources are handled; binary and typed resources are skipped on
read and never produced on write.
"""

from xml.etree import ElementTree as ET

from .base import FormatHandler, SourceRecord

XML_SPACE = '{http://www.w3.org/XML/1998/namespace}space'

RESHEADERS = [
    ('resmimetype', 'text/microsoft-resx'),
    ('version', '2.0'),
    ('reader', 'System.Resources.ResXResourceReader, System.Windows.Forms, '
               'Version=4.0.0.0, Culture=neutral, PublicKeyToken=b77a5c561934e089'),
    ('writer', 'System.Resources.ResXResourceWriter, System.Windows.Forms, '
               'Version=4.0.0.0, Culture=neutral, PublicKeyToken=b77a5c561934e089'),
]


class ResxHandler(FormatHandler):
    """
    Handler for .resx resource files.

    RESX structure:
    ```xml
    <?xml version="1.0" encoding="utf-8"?>
    <root>
      <resheader name="resmimetype"><value>text/microsoft-resx</value></resheader>
      <data name="Greeting" xml:space="preserve">
        <value>Hello</value>
        <comment>Shown on the start page</comment>
      </data>
    </root>
    ```

    RESX has no review state, so parsed records carry state None.
    """

    @property
    def name(self) -> str:
        return "resx"

    @property
    def file_extensions(self) -> list[str]:
        return ["resx"]

    def parse(self, content: str) -> list[SourceRecord]:
        root = self._parse_xml(content)
        records = []

        for data in root.findall('data'):
            name = data.get('name')
            if not name or not self._is_string_resource(data):
                continue

            value = data.find('value')
            comment = data.find('comment')
            records.append(SourceRecord(
                id=name,
                text=(value.text or '') if value is not None else '',
                comments=[comment.text] if comment is not None and comment.text else [],
            ))

        return records

    def _is_string_resource(self, data: ET.Element) -> bool:
        """Designer metadata (>>name) and typed/binary resources are not translatable."""
        if data.get('name', '').startswith('>>'):
            return False
        if data.get('mimetype'):
            return False
        data_type = data.get('type')
        return data_type is None or data_type.startswith('System.String')

    def render(self, records: list[SourceRecord], include_comments: bool = True) -> str:
        root = ET.Element('root')

        for name, value in RESHEADERS:
            header = ET.SubElement(root, 'resheader', {'name': name})
            ET.SubElement(header, 'value').text = value

        for record in records:
            data = ET.SubElement(root, 'data', {'name': record.id, XML_SPACE: 'preserve'})
            ET.SubElement(data, 'value').text = record.text
            if include_comments and record.comments:
                ET.SubElement(data, 'comment').text = '\n'.join(record.comments)

        ET.indent(root, space='  ')
        body = ET.tostring(root, encoding='unicode')
        return '<?xml version="1.0" encoding="utf-8"?>\n' + body + '\n'
