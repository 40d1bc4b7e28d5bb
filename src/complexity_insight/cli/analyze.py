"""Main analysis command."""

from pathlib import Path
from typing import List, Optional

import click
import typer
from rich.markup import escape

from ..api import analyze
from ..config import OUTPUT_FORMATS
from ..exceptions import ComplexityInsightError
from ..formatters import get_formatter
from ..logging_config import setup_logging
from . import app
from ._common import console, err_console, resolve_config


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    paths: Optional[List[str]] = typer.Argument(
        None,
        help="Go files, package directories or dir/... patterns (default: ./...)",
    ),
    cyclo_over: Optional[int] = typer.Option(
        None,
        "--cyclo-over",
        help="Flag functions with cyclomatic complexity above this (default: 10)",
        min=0,
    ),
    maint_under: Optional[int] = typer.Option(
        None,
        "--maint-under",
        help="Flag functions with maintainability index below this (default: 20)",
        min=0,
    ),
    output_format: Optional[str] = typer.Option(
        None,
        "--output-format",
        "-f",
        help="Report format (default: txt)",
        click_type=click.Choice(list(OUTPUT_FORMATS)),
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (YAML, JSON or TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    tests: Optional[bool] = typer.Option(
        None,
        "--tests/--no-tests",
        help="Include _test.go files",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "-w",
        "--workers",
        help="Parallel parse workers (default: auto-detect)",
        min=1,
        max=32,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
    ),
):
    """
    Report cyclomatic complexity, Halstead metrics and maintainability of Go functions.

    Exits 1 when a function is too complex or not maintainable, or when a
    package could not be measured.

    [bold cyan]Examples:[/bold cyan]

      complexity-insight ./...

      complexity-insight --cyclo-over 15 --maint-under 30 ./pkg

      complexity-insight --output-format checkstyle ./... > report.xml
    """
    if ctx.invoked_subcommand is not None:
        return

    from .. import __version__

    if version:
        console.print(
            f"[bold cyan]Complexity Insight[/bold cyan] version [green]{__version__}[/green]"
        )
        raise typer.Exit(0)

    logger = setup_logging(verbose=verbose, quiet=quiet)

    try:
        settings = resolve_config(
            config=config,
            cyclo_over=cyclo_over,
            maint_under=maint_under,
            output_format=output_format,
            include_tests=tests,
            workers=workers,
            verbose=verbose,
            quiet=quiet,
        )

        report = analyze(paths or ["./..."], config=settings)
        get_formatter(settings.output_format).render(report.metrics)

        for error in report.errors:
            err_console.print(f"[red]Error:[/red] {escape(str(error))}")

        if report.failed:
            raise typer.Exit(1)

    except typer.Exit:
        raise

    except ComplexityInsightError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    except KeyboardInterrupt:
        logger.info("Analysis interrupted by user")
        err_console.print("\n[yellow]Analysis interrupted[/yellow]")
        raise typer.Exit(130)

    except Exception as e:
        logger.exception("Unexpected error during analysis")
        err_console.print(f"[red]Unexpected error:[/red] {escape(str(e))}")
        if verbose:
            err_console.print_exception()
        raise typer.Exit(1)
