"""CSV formatter for Complexity Insight."""

import csv
import io
from typing import List

from ..metrics.models import FuncMetrics
from .base import BaseFormatter


def _bool(value: bool) -> str:
    return "true" if value else "false"


class CsvFormatter(BaseFormatter):
    """One row per flagged function, no header.

    Columns: file, line, name, complexity, maintainability, difficulty,
    volume, time to code (hours), loc, declaration loc, too complex,
    not maintainable.
    """

    def render(self, metrics: List[FuncMetrics]) -> None:
        print(self.format(metrics), end="")

    def format(self, metrics: List[FuncMetrics]) -> str:
        output = io.StringIO()
        writer = csv.writer(output, lineterminator="\n")
        for m in metrics:
            if not m.flagged:
                continue
            writer.writerow([
                m.file, m.line, m.name,
                m.cyclomatic_complexity, m.maintainability_index,
                f"{m.halstead_difficulty:0.3f}", f"{m.halstead_volume:0.3f}",
                f"{m.time_to_code_hours:0.3f}",
                m.loc, m.const_decl_loc,
                _bool(m.too_complex), _bool(m.not_maintainable),
            ])
        return output.getvalue()
