"""CLI entry point."""

import typer

from ._common import console

app = typer.Typer(
    name="complexity-insight",
    help="Complexity Insight - per-function complexity metrics for Go code",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import the callback to register it
from .analyze import main as _main_callback  # noqa: F401, E402

__all__ = ["app", "console"]
