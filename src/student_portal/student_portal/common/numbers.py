"""Integer rounding helpers.

All percentages in the portal round half away from zero. Python's ``round``
rounds half to even, so the helpers below work on exact integer ratios.
"""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def round_ratio(numerator: int, denominator: int) -> int:
    """Round ``numerator / denominator`` half away from zero.

    Returns 0 for a zero denominator.
    """
    if denominator == 0:
        return 0
    sign = -1 if (numerator < 0) != (denominator < 0) else 1
    n, d = abs(numerator), abs(denominator)
    return sign * ((2 * n + d) // (2 * d))


def percent(part: int, whole: int) -> int:
    """Integer percentage of ``part`` in ``whole``; 0 when ``whole`` is 0."""
    return round_ratio(part * 100, whole)


def round_decimal(value: Decimal, places: int = 2) -> Decimal:
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
