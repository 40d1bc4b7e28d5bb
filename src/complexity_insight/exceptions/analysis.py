"""Analysis-related exceptions: file access, parsing, missing preconditions."""

from pathlib import Path
from typing import List, Optional

from .base import ComplexityInsightError


class AnalysisError(ComplexityInsightError):
    """Base class for analysis-related errors."""
    pass


class FileAccessError(AnalysisError):
    """Raised when a source file cannot be accessed or read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class ParsingError(AnalysisError):
    """Raised when file content cannot be parsed into a syntax tree."""

    def __init__(self, filepath: Path, language: str, reason: str):
        super().__init__(
            f"Failed to parse {language} file: {filepath}",
            details={"filepath": str(filepath), "language": language, "reason": reason},
        )
        self.filepath = filepath
        self.language = language
        self.reason = reason


class UnsupportedLanguageError(AnalysisError):
    """Raised when no front end is available for a language."""

    def __init__(self, language: str, supported_languages: List[str]):
        super().__init__(
            f"Unsupported language: {language}",
            details={"language": language, "supported": ", ".join(supported_languages)},
        )
        self.language = language
        self.supported_languages = supported_languages


class PreconditionError(AnalysisError):
    """Base class for missing data the metric pass cannot work without.

    These are fatal to the pass that hits them.
    """
    pass


class MissingPositionError(PreconditionError):
    """Raised when a node required for position or LOC data has no span."""

    def __init__(self, node_type: str, filepath: Optional[str] = None):
        details = {"node": node_type}
        if filepath:
            details["filepath"] = filepath
        super().__init__(f"No position data for {node_type} node", details=details)
        self.node_type = node_type
        self.filepath = filepath


class UnresolvedBindingError(PreconditionError):
    """Raised when the resolver has no binding information for an identifier."""

    def __init__(self, name: str, line: Optional[int] = None):
        details = {"identifier": name}
        if line is not None:
            details["line"] = str(line)
        super().__init__(f"No binding data for identifier {name!r}", details=details)
        self.name = name
        self.line = line
