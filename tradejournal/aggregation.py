"""Rounding, summation and display helpers shared by the calculators."""

import math
from typing import Any, Iterable


__all__ = [
    "MINUS_SIGN",
    "first_finite",
    "format_signed",
    "is_finite_number",
    "round_to_tenth",
    "round_to_two_decimals",
    "sum_finite",
]


MINUS_SIGN = "−"


def is_finite_number(value: Any) -> bool:
    """True for real int/float values that are neither NaN nor infinite."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _round_half_up(value: float, digits: int) -> float:
    # Ties go toward +inf (-3.25 -> -3.2, 3.25 -> 3.3).
    scale = 10 ** digits
    scaled = value * scale
    if not math.isfinite(scaled):
        # Already far beyond decimal precision.
        return value
    rounded = math.floor(scaled + 0.5) / scale
    return rounded + 0.0  # -0.0 -> 0.0


def round_to_tenth(value: float) -> float:
    """Round to the nearest 0.1; returns nan for non-finite input."""
    if not is_finite_number(value):
        return math.nan
    return _round_half_up(float(value), 1)


def round_to_two_decimals(value: float) -> float:
    """Round to the nearest 0.01; returns nan for non-finite input."""
    if not is_finite_number(value):
        return math.nan
    return _round_half_up(float(value), 2)


def sum_finite(values: Iterable[Any]) -> float | None:
    """
    Sum the finite entries of *values* in the order given.

    Missing and non-finite entries are skipped. Returns None only when no
    entry was finite, so an all-invalid input is distinguishable from a
    genuine zero total.
    """
    total = 0.0
    seen = False
    for value in values:
        if not is_finite_number(value):
            continue
        total += float(value)
        seen = True
    return total if seen else None


def first_finite(values: Iterable[Any]) -> float | None:
    """Return the first finite entry of *values*, or None."""
    for value in values:
        if is_finite_number(value):
            return float(value)
    return None


def format_signed(value: Any, *, decimals: int, zero: str) -> str:
    """
    Render an already-rounded number for display.

    Positive values get a leading "+", negative values a Unicode minus
    (U+2212) and exact zero renders as *zero*. Non-finite input renders
    as an empty string.
    """
    if not is_finite_number(value):
        return ""
    if value > 0:
        return f"+{value:.{decimals}f}"
    if value < 0:
        return f"{MINUS_SIGN}{abs(value):.{decimals}f}"
    return zero
