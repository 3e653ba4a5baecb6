"""Pip distance calculations.

All prices are assumed to be quoted to four decimals, so one pip is
``1/10000`` of the quote currency. Pairs quoted to two decimals (JPY
crosses) are not scaled differently and will report 100x the real pip
count.
"""

from typing import Any, Iterable

from tradejournal.aggregation import (
    format_signed,
    is_finite_number,
    round_to_tenth,
    sum_finite,
)
from tradejournal.types import Outcome, Position


__all__ = [
    "PIP_SCALE",
    "apply_outcome_to_pips",
    "calculate_overall_pips",
    "calculate_pips",
    "calculate_stop_loss_distance",
    "calculate_take_profit_distance",
    "format_pips",
]


PIP_SCALE = 10000


def _to_pips(difference: float) -> float | None:
    pips = difference * PIP_SCALE
    if not is_finite_number(pips):
        return None
    return round_to_tenth(pips)


def calculate_pips(
    entry_price: float | None,
    take_profit_price: float | None,
    stop_loss_price: float | None,
    position: Position | str | None,
    outcome: Outcome | str | None,
) -> float | None:
    """
    Calculate the signed pip result of a resolved trade leg.

    The exit price is the take-profit for a PROFIT outcome and the
    stop-loss for a LOSS outcome. The magnitude is rounded to 0.1 pip and
    the sign follows the outcome, not the position.

    Returns:
        Signed pips, or None if the outcome is unset, the position or
        outcome is unrecognised, or a required price is missing/non-finite
    """
    if Position.coerce(position) is None:
        return None

    resolved = Outcome.coerce(outcome)
    if resolved is Outcome.PROFIT:
        exit_price = take_profit_price
    elif resolved is Outcome.LOSS:
        exit_price = stop_loss_price
    else:
        return None

    if not is_finite_number(entry_price) or not is_finite_number(exit_price):
        return None

    distance = _to_pips(abs(exit_price - entry_price))
    if distance is None:
        return None

    return apply_outcome_to_pips(distance, resolved)


def _directional_distance(
    entry_price: float | None,
    level_price: float | None,
    position: Position | str | None,
    *,
    favourable_when_long: bool,
) -> float | None:
    direction = Position.coerce(position)
    if direction is None:
        return None
    if not is_finite_number(entry_price) or not is_finite_number(level_price):
        return None

    # Take-profit sits above entry for LONG, stop-loss below; SHORT mirrors both.
    above = (direction == Position.LONG) == favourable_when_long
    difference = level_price - entry_price if above else entry_price - level_price
    return _to_pips(difference)


def calculate_stop_loss_distance(
    entry_price: float | None,
    stop_loss_price: float | None,
    position: Position | str | None,
) -> float | None:
    """
    Distance from entry to stop-loss in pips.

    Positive when the stop sits on the losing side of the entry (below
    for LONG, above for SHORT).
    """
    return _directional_distance(
        entry_price, stop_loss_price, position, favourable_when_long=False
    )


def calculate_take_profit_distance(
    entry_price: float | None,
    take_profit_price: float | None,
    position: Position | str | None,
) -> float | None:
    """
    Distance from entry to take-profit in pips.

    Positive when the target sits on the winning side of the entry (above
    for LONG, below for SHORT).
    """
    return _directional_distance(
        entry_price, take_profit_price, position, favourable_when_long=True
    )


def apply_outcome_to_pips(value: Any, outcome: Outcome | str | None) -> float | None:
    """
    Force the sign of a pip value to match *outcome*.

    PROFIT makes the value positive, LOSS negative; any other outcome
    leaves the sign alone. The result is rounded to 0.1 pip, so applying
    the same outcome twice gives the same answer.
    """
    if not is_finite_number(value):
        return None

    resolved = Outcome.coerce(outcome)
    if resolved is Outcome.PROFIT:
        value = abs(value)
    elif resolved is Outcome.LOSS:
        value = -abs(value)

    return round_to_tenth(value)


def calculate_overall_pips(values: Iterable[float | None]) -> float | None:
    """Total pips across legs; None when no leg has a finite value or the sum overflows."""
    total = sum_finite(values)
    if total is None or not is_finite_number(total):
        return None
    return round_to_tenth(total)


def format_pips(value: Any) -> str:
    """Format pips for display ("+12.5", "−3.2", "0"); "" when not a number."""
    if not is_finite_number(value):
        return ""
    return format_signed(round_to_tenth(value), decimals=1, zero="0")
