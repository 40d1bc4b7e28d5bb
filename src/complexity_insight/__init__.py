"""
Complexity Insight - per-function complexity metrics for Go code

Measures cyclomatic complexity, Halstead difficulty and volume, lines of
code and the maintainability index of every function, and flags the ones
that cross configurable thresholds.
"""

__version__ = "0.1.0"

from .api import RunReport, analyze
from .config import AnalysisConfig, ThresholdConfig, load_config
from .metrics import FuncMetrics, compute_metrics, run_pass

__all__ = [
    "analyze",
    "RunReport",
    "AnalysisConfig",
    "ThresholdConfig",
    "load_config",
    "FuncMetrics",
    "compute_metrics",
    "run_pass",
]
