"""Checkstyle XML formatter, for CI tools that ingest checkstyle reports."""

import xml.etree.ElementTree as ET
from typing import Dict, List

from ..metrics.models import FuncMetrics
from .base import BaseFormatter, violation_messages

CHECKSTYLE_VERSION = "5.0"
SOURCE = "complexity"


class CheckstyleFormatter(BaseFormatter):
    """``<file>`` elements in first-seen order, one ``<error>`` per violation."""

    def render(self, metrics: List[FuncMetrics]) -> None:
        print(self.format(metrics))

    def format(self, metrics: List[FuncMetrics]) -> str:
        root = ET.Element("checkstyle", version=CHECKSTYLE_VERSION)
        files: Dict[str, ET.Element] = {}
        for m in metrics:
            for message in violation_messages(m):
                file_el = files.get(m.file)
                if file_el is None:
                    file_el = ET.SubElement(root, "file", name=m.file)
                    files[m.file] = file_el
                ET.SubElement(
                    file_el,
                    "error",
                    line=str(m.line),
                    column=str(m.col),
                    message=message,
                    severity="error",
                    source=SOURCE,
                )
        ET.indent(root, space="    ")
        return '<?xml version="1.0" encoding="UTF-8"?>\n' + ET.tostring(root, encoding="unicode")
