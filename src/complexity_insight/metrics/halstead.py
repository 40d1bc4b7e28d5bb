"""Halstead software-science metrics derived from a token tally.

Notation:
    n1 = distinct operators     N1 = total operators
    n2 = distinct operands      N2 = total operands

    vocabulary  n = n1 + n2
    length      N = N1 + N2
    volume      V = N * log2(n)
    difficulty  D = (n1 * N2) / (2 * n2)
    effort      E = D * V
    time        T = E / 18 seconds (Stroud number), reported in hours
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .tally import TokenTally

# Stands in for 2 * n2 when a function has no operands.
DIFFICULTY_EPSILON = 1e-13

STROUD_NUMBER = 18
SECONDS_PER_HOUR = 3600


def log2_or_zero(value: float) -> float:
    """log2 with log2(0) defined as 0."""
    if value == 0:
        return 0.0
    return math.log2(value)


def ln_or_zero(value: float) -> float:
    """Natural log with ln(0) defined as 0."""
    if value == 0:
        return 0.0
    return math.log(value)


@dataclass(frozen=True)
class HalsteadMetrics:
    distinct_operators: int
    distinct_operands: int
    total_operators: int
    total_operands: int
    vocabulary: int
    length: int
    volume: float
    difficulty: float
    effort: float
    time_to_code_hours: float


def halstead_metrics(tally: TokenTally) -> HalsteadMetrics:
    """Compute Halstead metrics for a tally.

    Args:
        tally: Operator and operand occurrence counts of one function.

    Returns:
        HalsteadMetrics with all derived measures.
    """
    n1 = tally.distinct_operators
    n2 = tally.distinct_operands
    big_n1 = tally.total_operators
    big_n2 = tally.total_operands

    vocabulary = n1 + n2
    length = big_n1 + big_n2
    volume = length * log2_or_zero(vocabulary)

    divisor = float(2 * n2) if n2 != 0 else DIFFICULTY_EPSILON
    difficulty = (n1 * big_n2) / divisor

    effort = difficulty * volume
    return HalsteadMetrics(
        distinct_operators=n1,
        distinct_operands=n2,
        total_operators=big_n1,
        total_operands=big_n2,
        vocabulary=vocabulary,
        length=length,
        volume=volume,
        difficulty=difficulty,
        effort=effort,
        time_to_code_hours=effort / (STROUD_NUMBER * SECONDS_PER_HOUR),
    )
