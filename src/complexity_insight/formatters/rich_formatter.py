"""Rich terminal table of all measured functions."""

import io
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..metrics.models import FuncMetrics
from .base import BaseFormatter


def _status_label(m: FuncMetrics) -> str:
    if m.too_complex and m.not_maintainable:
        return "[red bold]complex, unmaintainable[/red bold]"
    if m.too_complex:
        return "[red]too complex[/red]"
    if m.not_maintainable:
        return "[yellow]low maintainability[/yellow]"
    return "[green]ok[/green]"


class RichFormatter(BaseFormatter):
    """Table with one row per function, worst complexity first."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def _table(self, metrics: List[FuncMetrics]) -> Table:
        table = Table(title="Function complexity", show_lines=False)
        table.add_column("Location", style="cyan")
        table.add_column("Function", style="bold")
        table.add_column("Cyclo", justify="right")
        table.add_column("MI", justify="right")
        table.add_column("Difficulty", justify="right")
        table.add_column("Volume", justify="right")
        table.add_column("LOC", justify="right")
        table.add_column("Status")

        ordered = sorted(
            metrics, key=lambda m: (-m.cyclomatic_complexity, m.maintainability_index)
        )
        for m in ordered:
            table.add_row(
                escape(f"{m.file}:{m.line}"),
                escape(m.name),
                str(m.cyclomatic_complexity),
                str(m.maintainability_index),
                f"{m.halstead_difficulty:.3f}",
                f"{m.halstead_volume:.3f}",
                str(m.loc),
                _status_label(m),
            )
        return table

    def render(self, metrics: List[FuncMetrics]) -> None:
        self.console.print(self._table(metrics))
        flagged = sum(1 for m in metrics if m.flagged)
        if flagged:
            self.console.print(f"[red]{flagged} of {len(metrics)} functions flagged[/red]")
        else:
            self.console.print(f"[green]All {len(metrics)} functions within thresholds[/green]")

    def format(self, metrics: List[FuncMetrics]) -> str:
        console = Console(file=io.StringIO(), width=120, record=True)
        console.print(self._table(metrics))
        return console.export_text()
