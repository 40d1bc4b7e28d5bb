"""Vet-like plain text formatter."""

from typing import List

from ..metrics.models import FuncMetrics
from .base import BaseFormatter, violation_messages


class TextFormatter(BaseFormatter):
    """One ``file:line:col: message`` line per violation.

    With ``diagnostics=True`` every function gets a line with its raw
    complexity, difficulty and volume, flagged or not.
    """

    def __init__(self, diagnostics: bool = False):
        self.diagnostics = diagnostics

    def render(self, metrics: List[FuncMetrics]) -> None:
        print(self.format(metrics), end="")

    def format(self, metrics: List[FuncMetrics]) -> str:
        lines = []
        for m in metrics:
            if self.diagnostics:
                messages = [
                    f"Cyclomatic complexity: {m.cyclomatic_complexity}, "
                    f"Halstead difficulty: {m.halstead_difficulty:0.3f}, "
                    f"volume: {m.halstead_volume:0.3f}"
                ]
            else:
                messages = violation_messages(m)
            lines.extend(f"{m.file}:{m.line}:{m.col}: {msg}\n" for msg in messages)
        return "".join(lines)
