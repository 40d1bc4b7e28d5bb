"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import AnalysisConfig, load_config

console = Console()
# Reports own stdout; errors and summaries go here
err_console = Console(stderr=True)


def resolve_config(
    config: Optional[Path] = None,
    cyclo_over: Optional[int] = None,
    maint_under: Optional[int] = None,
    output_format: Optional[str] = None,
    include_tests: Optional[bool] = None,
    workers: Optional[int] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> AnalysisConfig:
    """Build the config from CLI options; unset options keep file/env values."""
    return load_config(
        config_file=config,
        cyclo_over=cyclo_over,
        maint_under=maint_under,
        output_format=output_format,
        include_tests=include_tests,
        workers=workers,
        verbose=verbose,
        quiet=quiet,
    )
