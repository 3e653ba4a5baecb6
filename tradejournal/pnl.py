"""Monetary profit and loss calculations."""

import re
from typing import Any, Iterable

from tradejournal.aggregation import (
    format_signed,
    is_finite_number,
    round_to_two_decimals,
    sum_finite,
)
from tradejournal.types import Outcome


__all__ = [
    "calculate_overall_pnl",
    "calculate_pnl",
    "format_pnl",
    "infer_risk_is_percentage",
    "round_to_two_decimals",
]


_CURRENCY_SUFFIX = re.compile(r"[€$£¥]$")


def calculate_pnl(
    *,
    pips: float | None,
    lot_size: float | None,
    risk: float | None,
    outcome: Outcome | str | None = None,
    risk_is_percentage: bool = True,
) -> float | None:
    """
    Calculate the monetary result of a trade leg.

    Result is ``pips * lot_size * multiplier`` where the multiplier is
    ``risk / 100`` for percentage risk and ``risk`` itself for an absolute
    amount. When an outcome is given the pip sign is forced to match it.

    Args:
        pips: Pip distance (sign is overridden by a resolved outcome)
        lot_size: Lot size multiplier
        risk: Risk setting, percentage points or absolute amount
        outcome: Optional outcome used to force the sign
        risk_is_percentage: Interpret *risk* as percentage points

    Returns:
        P&L rounded to 2 decimals, or None on missing/non-finite input
    """
    if not is_finite_number(pips) or not is_finite_number(lot_size) or not is_finite_number(risk):
        return None

    effective_pips = float(pips)
    resolved = Outcome.coerce(outcome)
    if resolved is Outcome.LOSS:
        effective_pips = -abs(effective_pips)
    elif resolved is Outcome.PROFIT:
        effective_pips = abs(effective_pips)

    multiplier = risk / 100 if risk_is_percentage else float(risk)
    if not is_finite_number(multiplier):
        return None

    raw = effective_pips * lot_size * multiplier
    if not is_finite_number(raw):
        return None

    return round_to_two_decimals(raw)


def calculate_overall_pnl(values: Iterable[float | None]) -> float | None:
    """Total P&L across legs; None when no leg has a finite value or the sum overflows."""
    total = sum_finite(values)
    if total is None or not is_finite_number(total):
        return None
    return round_to_two_decimals(total)


def format_pnl(value: Any) -> str:
    """Format P&L for display ("+1.00", "−0.50", "0.00"); "" when not a number."""
    if not is_finite_number(value):
        return ""
    return format_signed(round_to_two_decimals(value), decimals=2, zero="0.00")


def infer_risk_is_percentage(raw_value: Any, default: bool = True) -> bool:
    """
    Guess whether a user-entered risk value is a percentage.

    "2%" is a percentage, "50$" / "20€" are absolute amounts. Anything else
    (including non-strings and blanks) falls back to *default*.
    """
    if not isinstance(raw_value, str):
        return default

    s = raw_value.strip()
    if not s:
        return default
    if "%" in s:
        return True
    if _CURRENCY_SUFFIX.search(s):
        return False
    return default
