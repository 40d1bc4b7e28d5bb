"""Per-function complexity metrics over a Go-shaped syntax tree."""

from .cyclomatic import cyclomatic_complexity
from .halstead import HalsteadMetrics, halstead_metrics, ln_or_zero, log2_or_zero
from .lexicon import BindingTable, LexicalClassifier, SymbolResolver
from .loc import count_decl_loc, count_loc
from .maintainability import maintainability_index
from .models import FuncMetrics, FunctionUnit, SourceFile
from .pipeline import MetricsSink, PassResult, compute_metrics, locate_functions, run_pass
from .tally import TokenTally, tally_tokens

__all__ = [
    "cyclomatic_complexity",
    "HalsteadMetrics",
    "halstead_metrics",
    "ln_or_zero",
    "log2_or_zero",
    "BindingTable",
    "LexicalClassifier",
    "SymbolResolver",
    "count_loc",
    "count_decl_loc",
    "maintainability_index",
    "FuncMetrics",
    "FunctionUnit",
    "SourceFile",
    "MetricsSink",
    "PassResult",
    "compute_metrics",
    "locate_functions",
    "run_pass",
    "TokenTally",
    "tally_tokens",
]
