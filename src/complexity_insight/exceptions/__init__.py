"""Exception hierarchy for Complexity Insight."""

from .analysis import (
    AnalysisError,
    FileAccessError,
    MissingPositionError,
    ParsingError,
    PreconditionError,
    UnresolvedBindingError,
    UnsupportedLanguageError,
)
from .base import ComplexityInsightError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
)

__all__ = [
    "ComplexityInsightError",
    "AnalysisError",
    "FileAccessError",
    "ParsingError",
    "UnsupportedLanguageError",
    "PreconditionError",
    "MissingPositionError",
    "UnresolvedBindingError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
]
