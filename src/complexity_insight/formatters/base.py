"""Base formatter interface for Complexity Insight output rendering."""

from abc import ABC, abstractmethod
from typing import List

from ..metrics.models import FuncMetrics


def violation_messages(metrics: FuncMetrics) -> List[str]:
    """One message per true flag, complexity first."""
    messages = []
    if metrics.too_complex:
        messages.append(
            f"func {metrics.name} seems to be complex "
            f"(cyclomatic complexity={metrics.cyclomatic_complexity})"
        )
    if metrics.not_maintainable:
        messages.append(
            f"func {metrics.name} seems to have low maintainability "
            f"(maintainability index={metrics.maintainability_index})"
        )
    return messages


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, metrics: List[FuncMetrics]) -> None:
        """Render records to stdout."""

    @abstractmethod
    def format(self, metrics: List[FuncMetrics]) -> str:
        """Return formatted string representation of records."""
