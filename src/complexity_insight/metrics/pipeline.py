"""Function locator and metric pass orchestration.

A pass takes the parsed files of one package, finds every function
declaration, and computes a FuncMetrics record per function:

    locate_functions -> tally_tokens -> halstead_metrics --+
                     -> cyclomatic_complexity -------------+-> maintainability_index
                     -> count_loc ------------------------+

Records reach the sink only after the whole pass has succeeded, so a
precondition failure in any function produces no output for the pass.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterator, Sequence

from ..config import ThresholdConfig
from ..exceptions import MissingPositionError, PreconditionError
from .cyclomatic import cyclomatic_complexity
from .halstead import halstead_metrics
from .lexicon import LexicalClassifier, SymbolResolver
from .loc import count_decl_loc, count_loc
from .maintainability import maintainability_index
from .models import FuncMetrics, FunctionUnit, SourceFile
from .nodes import FuncDecl, walk
from .tally import tally_tokens

logger = logging.getLogger(__name__)

MetricsSink = Callable[[FuncMetrics], None]


def discard(metrics: FuncMetrics) -> None:
    """Default sink: drop the record."""


def locate_functions(source: SourceFile) -> Iterator[FunctionUnit]:
    """Yield a FunctionUnit for every function declaration in ``source``.

    Function literals are not units of their own; they are measured as
    part of the declaration that contains them.

    Raises:
        MissingPositionError: If a declaration has no span.
    """
    for node in walk(source.root):
        if not isinstance(node, FuncDecl):
            continue
        if node.span is None:
            raise MissingPositionError("FuncDecl", source.path)
        yield FunctionUnit(
            file=source.path,
            line=node.span.start.line,
            col=node.span.start.column,
            name=node.name.name,
            decl=node,
        )


def compute_metrics(
    unit: FunctionUnit,
    thresholds: ThresholdConfig,
    classifier: LexicalClassifier,
    resolver: SymbolResolver,
) -> FuncMetrics:
    """Compute the full metric record for one function.

    Args:
        unit: Function to measure.
        thresholds: Ceiling/floor used for the two flags.
        classifier: Lexical classifier of the unit's language.
        resolver: Binding information for the unit's file.

    Returns:
        FuncMetrics for the function.

    Raises:
        PreconditionError: If position or binding data is missing.
    """
    halstead = halstead_metrics(tally_tokens(unit.decl, classifier, resolver))
    complexity = cyclomatic_complexity(unit.decl)
    loc = count_loc(unit.decl)
    index = maintainability_index(halstead.volume, complexity, loc)

    metrics = FuncMetrics(
        file=unit.file,
        line=unit.line,
        col=unit.col,
        name=unit.name,
        cyclomatic_complexity=complexity,
        maintainability_index=index,
        halstead_difficulty=halstead.difficulty,
        halstead_volume=halstead.volume,
        time_to_code_hours=halstead.time_to_code_hours,
        loc=loc,
        const_decl_loc=count_decl_loc(unit.decl),
        too_complex=complexity > thresholds.cyclo_over,
        not_maintainable=index < thresholds.maint_under,
    )
    logger.debug(
        "%s:%d %s complexity=%d index=%d volume=%.3f",
        unit.file,
        unit.line,
        unit.name,
        complexity,
        index,
        halstead.volume,
    )
    return metrics


@dataclass(frozen=True)
class PassResult:
    """Records produced by one successful pass, in file-then-declaration order."""

    metrics: tuple[FuncMetrics, ...] = field(default_factory=tuple)

    @property
    def flagged(self) -> list[FuncMetrics]:
        return [m for m in self.metrics if m.flagged]

    @property
    def failed(self) -> bool:
        return bool(self.flagged)


def run_pass(
    sources: Sequence[SourceFile],
    thresholds: ThresholdConfig,
    sink: MetricsSink = discard,
) -> PassResult:
    """Measure every function of ``sources`` and emit the records to ``sink``.

    Args:
        sources: Parsed files forming one analysis pass.
        thresholds: Ceiling/floor for the flags.
        sink: Receives each record once, after the whole pass succeeded.

    Returns:
        PassResult with all records.

    Raises:
        PreconditionError: Missing position or binding data; nothing is
            emitted for the pass.
    """
    collected: list[FuncMetrics] = []
    for source in sources:
        try:
            for unit in locate_functions(source):
                collected.append(
                    compute_metrics(unit, thresholds, source.classifier, source.resolver)
                )
        except PreconditionError as e:
            logger.error(f"Pass aborted in {source.path}: {e}")
            raise

    for metrics in collected:
        sink(metrics)

    result = PassResult(metrics=tuple(collected))
    logger.info(
        f"Measured {len(collected)} functions in {len(sources)} files "
        f"({len(result.flagged)} flagged)"
    )
    return result
