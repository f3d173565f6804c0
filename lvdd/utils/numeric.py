"""
Numeric helper functions.

This module provides the null-propagating arithmetic shared by both
algorithms. Every ratio shown to the caller goes through these helpers, so an
absent measurement yields an absent ratio instead of an error.

Functions:
    round2: Round to 2 decimals, half away from zero
    safe_div: Guarded division returning None on absent operand or zero divisor
    avg2: Mean of two optional values

Example:
    >>> from lvdd.utils.numeric import safe_div, avg2
    >>> safe_div(80, 60)
    1.33
    >>> avg2(7, 10)
    8.5
    >>> avg2(None, 7.25)
    7.25
"""

from __future__ import annotations

import math
from typing import Optional


def round2(value: float) -> float:
    """
    Round a value to 2 decimal places, half away from zero.

    Multiplies by 100, rounds to the nearest integer and divides by 100.
    Unlike the built-in ``round``, ties never go to even.

    Args:
        value: Value to round.

    Returns:
        Rounded value.

    Example:
        >>> round2(0.125)
        0.13
        >>> round2(-0.125)
        -0.13
    """
    scaled = math.floor(abs(value) * 100 + 0.5)
    return math.copysign(scaled / 100, value)


def safe_div(numerator: Optional[float], denominator: Optional[float]) -> Optional[float]:
    """
    Divide two optional values.

    Args:
        numerator: Dividend, or None when not measured.
        denominator: Divisor, or None when not measured.

    Returns:
        Quotient rounded to 2 decimals, or None if either operand is absent
        or the denominator is zero.
    """
    if numerator is None or denominator is None or denominator == 0:
        return None
    return round2(numerator / denominator)


def avg2(a: Optional[float], b: Optional[float]) -> Optional[float]:
    """
    Average two optional values.

    A single present value is returned as-is, without rounding.

    Args:
        a: First value or None.
        b: Second value or None.

    Returns:
        Rounded mean of both, the one present value, or None.
    """
    if a is None and b is None:
        return None
    if a is None:
        return b
    if b is None:
        return a
    return round2((a + b) / 2)
