"""Public API for Complexity Insight.

Example:
    >>> from complexity_insight import analyze
    >>>
    >>> report = analyze(["./..."])
    >>> for m in report.flagged:
    ...     print(m.file, m.name, m.cyclomatic_complexity)
    >>>
    >>> # With customization
    >>> report = analyze(["./pkg"], cyclo_over=15, include_tests=True)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

from .config import AnalysisConfig, load_config
from .exceptions import PreconditionError
from .logging_config import get_logger
from .metrics.models import FuncMetrics
from .metrics.pipeline import MetricsSink, run_pass
from .scanning.discover import discover_go_files
from .scanning.loader import load_sources

logger = get_logger(__name__)


@dataclass
class RunReport:
    """Outcome of an analysis run.

    Attributes:
        metrics: Records of every successful pass, in emission order.
        errors: Pass-level precondition errors.
        config: The configuration the run used.
    """

    metrics: list[FuncMetrics] = field(default_factory=list)
    errors: list[PreconditionError] = field(default_factory=list)
    config: AnalysisConfig = field(default_factory=AnalysisConfig)

    @property
    def flagged(self) -> list[FuncMetrics]:
        return [m for m in self.metrics if m.flagged]

    @property
    def failed(self) -> bool:
        """True if any function was flagged or any pass failed."""
        return bool(self.errors) or any(m.flagged for m in self.metrics)


def analyze(
    paths: Sequence[str] = (".",),
    config_file: Optional[Path] = None,
    sink: Optional[MetricsSink] = None,
    config: Optional[AnalysisConfig] = None,
    **overrides,
) -> RunReport:
    """Measure every function in the Go packages matched by ``paths``.

    Each package is one pass. A pass that hits missing position or binding
    data contributes no records; its error is recorded and the remaining
    packages are still analyzed.

    Args:
        paths: Files, directories or ``dir/...`` patterns.
        config_file: Optional config file (YAML, JSON or TOML).
        sink: Called once per record, after its pass succeeded.
        config: Ready-made configuration; skips ``load_config``.
        **overrides: Configuration overrides (e.g. cyclo_over=15).

    Returns:
        RunReport with all records and pass errors.

    Raises:
        ConfigurationError: If configuration or paths are invalid.
        FileAccessError: If a file can't be read.
        ParsingError: If a file doesn't parse.
        UnsupportedLanguageError: If the Go grammar is not installed.
    """
    if config is None:
        config = load_config(config_file=config_file, **overrides)
    report = RunReport(config=config)

    def emit(metrics: FuncMetrics) -> None:
        report.metrics.append(metrics)
        if sink is not None:
            sink(metrics)

    packages = discover_go_files(paths, config)
    logger.info(f"Analyzing {len(packages)} packages")

    # Load everything first so an unreadable or broken file aborts before
    # any output.
    loaded = [(pkg, load_sources(pkg.files, config.workers)) for pkg in packages]

    for pkg, sources in loaded:
        try:
            run_pass(sources, config.thresholds, emit)
        except PreconditionError as e:
            logger.error(f"Package {pkg.directory}: {e}")
            report.errors.append(e)

    logger.info(
        f"Analysis complete: {len(report.metrics)} functions, "
        f"{len(report.flagged)} flagged, {len(report.errors)} failed passes"
    )
    return report
