"""Numeric helpers shared by the rule engine."""

from __future__ import annotations

import math


def clamp(value: float, lo: float = 0, hi: float = 100) -> float:
    """Clamp a value to [lo, hi]."""
    return max(lo, min(hi, value))


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round with halves going towards positive infinity.

    Unlike the built-in ``round``, ``2.5 -> 3`` and ``-2.5 -> -2``. Returns an
    ``int`` when ``ndigits`` is 0. Non-finite values are returned unchanged.
    """
    if not math.isfinite(value):
        return value
    if ndigits == 0:
        return int(math.floor(value + 0.5))
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def format_number(value: float) -> str:
    """Format a number for advisory text: ``7.0 -> '7'``, ``6.123456 -> '6.123456'``."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)
