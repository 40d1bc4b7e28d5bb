"""Maintainability index, normalized to the 0-100 range.

Uses the Visual Studio variant of the classic formula:

    MI = max(0, (171 - 5.2 ln(V) - 0.23 CC - 16.2 ln(LOC)) * 100 / 171)
"""

from __future__ import annotations

from .halstead import ln_or_zero


def maintainability_index(volume: float, complexity: int, loc: int) -> int:
    """Combine Halstead volume, cyclomatic complexity and LOC into an index.

    Args:
        volume: Halstead volume of the function.
        complexity: Cyclomatic complexity of the function.
        loc: Lines of code of the function.

    Returns:
        Integer index in [0, 100]; lower means harder to maintain.
    """
    raw = 171.0 - 5.2 * ln_or_zero(volume) - 0.23 * complexity - 16.2 * ln_or_zero(loc)
    normalized = int(max(0.0, raw * 100.0 / 171.0))
    return min(normalized, 100)
