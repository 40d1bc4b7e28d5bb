"""Output formatters for Complexity Insight."""

from .base import BaseFormatter, violation_messages
from .checkstyle_formatter import CheckstyleFormatter
from .csv_formatter import CsvFormatter
from .rich_formatter import RichFormatter
from .text_formatter import TextFormatter


def get_formatter(name: str) -> BaseFormatter:
    """Get a formatter instance by name.

    Args:
        name: One of "txt", "csv", "checkstyle", "table", "diagnostics"

    Returns:
        Formatter instance

    Raises:
        ValueError: If name is not recognized
    """
    formatters = {
        "txt": TextFormatter,
        "csv": CsvFormatter,
        "checkstyle": CheckstyleFormatter,
        "table": RichFormatter,
        "diagnostics": lambda: TextFormatter(diagnostics=True),
    }
    factory = formatters.get(name)
    if factory is None:
        raise ValueError(f"Unknown formatter: {name!r}. Choose from: {', '.join(sorted(formatters))}")
    return factory()


__all__ = [
    "BaseFormatter",
    "TextFormatter",
    "CsvFormatter",
    "CheckstyleFormatter",
    "RichFormatter",
    "get_formatter",
    "violation_messages",
]
