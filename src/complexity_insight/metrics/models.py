"""Data models for the metric pipeline."""

from __future__ import annotations

from dataclasses import dataclass

from .lexicon import LexicalClassifier, SymbolResolver
from .nodes import File, FuncDecl


@dataclass(frozen=True)
class SourceFile:
    """A parsed file ready for analysis.

    Attributes:
        path: Path used in reports.
        root: Converted syntax tree of the whole file.
        classifier: Lexical classifier of the file's language.
        resolver: Identifier binding information for ``root``.
    """

    path: str
    root: File
    classifier: LexicalClassifier
    resolver: SymbolResolver


@dataclass(frozen=True)
class FunctionUnit:
    """One function declaration discovered in a file."""

    file: str
    line: int
    col: int
    name: str
    decl: FuncDecl


@dataclass(frozen=True)
class FuncMetrics:
    """Metric record emitted once per function.

    Attributes:
        file: Source path.
        line: 1-based line of the declaration.
        col: 1-based column of the declaration.
        name: Function or method name.
        cyclomatic_complexity: Decision-point count, >= 1.
        maintainability_index: Normalized index in [0, 100].
        halstead_difficulty: Halstead difficulty D.
        halstead_volume: Halstead volume V.
        time_to_code_hours: Estimated implementation time.
        loc: Lines spanned by the declaration.
        const_decl_loc: Lines spent on variable/constant declarations.
        too_complex: Complexity exceeds the configured ceiling.
        not_maintainable: Index is below the configured floor.
    """

    file: str
    line: int
    col: int
    name: str
    cyclomatic_complexity: int
    maintainability_index: int
    halstead_difficulty: float
    halstead_volume: float
    time_to_code_hours: float
    loc: int
    const_decl_loc: int
    too_complex: bool
    not_maintainable: bool

    @property
    def flagged(self) -> bool:
        return self.too_complex or self.not_maintainable
