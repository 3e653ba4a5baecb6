"""Capital simulation and profit factor.

Replays a trading history, oldest first, against a compounding capital
balance. Each trade risks a fraction of the balance *as it stands after
all earlier trades*, so both the chronological sort and the single pass
over the running balance are load-bearing.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence

import numpy as np

from tradejournal.aggregation import first_finite, is_finite_number
from tradejournal.recording.types import TradeRecord
from tradejournal.time_utils import trade_sort_key
from tradejournal.types import Outcome

log = logging.getLogger(__name__)


__all__ = [
    "CapitalState",
    "ProfitFactorResult",
    "calculate_profit_factor",
    "max_drawdown",
    "normalise_risk_fraction",
]


@dataclass(frozen=True)
class ProfitFactorResult:
    """Outcome of a capital simulation run.

    Attributes:
        profit_factor: ``total_profit / total_loss``, or None when no loss
            was recorded (the ratio is undefined, not infinite).
        total_profit: Sum of all profit amounts added to capital.
        total_loss: Sum of all loss amounts removed from capital.
        final_capital: Balance after the last replayed trade, or None when
            the simulation did not run (invalid starting capital).
        equity_curve: Starting capital followed by the balance after each
            replayed trade.
        replayed: Number of trades that moved the balance.
        skipped: Number of resolved trades left out (no usable risk or pips,
            or a non-positive amount). ``replayed + skipped`` equals the
            number of resolved trades.
    """
    profit_factor: float | None
    total_profit: float
    total_loss: float
    final_capital: float | None = None
    equity_curve: tuple[float, ...] = ()
    replayed: int = 0
    skipped: int = 0

    @property
    def max_drawdown(self) -> float:
        return max_drawdown(self.equity_curve)


@dataclass
class CapitalState:
    """Mutable balance for one simulation run. Never clamped at zero."""
    running_capital: float
    total_profit: float = 0.0
    total_loss: float = 0.0
    equity_curve: list[float] = field(default_factory=list)

    def __post_init__(self):
        self.equity_curve.append(self.running_capital)

    def add_profit(self, amount: float) -> None:
        self.total_profit += amount
        self.running_capital += amount
        self.equity_curve.append(self.running_capital)

    def add_loss(self, amount: float) -> None:
        self.total_loss += amount
        self.running_capital -= amount
        self.equity_curve.append(self.running_capital)


def max_drawdown(equity: Sequence[float]) -> float:
    """Largest peak-to-trough fall of an equity curve (zero or negative)."""
    if len(equity) == 0:
        return 0.0
    arr = np.asarray(equity, dtype=float)
    peaks = np.maximum.accumulate(arr)
    return float(min(0.0, np.min(arr - peaks)))


def normalise_risk_fraction(value: Any) -> float | None:
    """
    Convert a stored risk value to a fraction of capital.

    Values above 1 are percentage points (2 -> 0.02); values up to and
    including 1 are already fractions (0.01 -> 0.01, so 1 means 100%).

    Returns:
        The fraction, or None for missing, non-finite or non-positive input
    """
    if not is_finite_number(value) or value <= 0:
        return None
    return value / 100 if value > 1 else float(value)


def _is_resolved(trade: TradeRecord) -> bool:
    outcome = Outcome.coerce(trade.outcome)
    return outcome is not None and outcome.is_resolved


def _empty_result() -> ProfitFactorResult:
    return ProfitFactorResult(profit_factor=None, total_profit=0.0, total_loss=0.0)


def calculate_profit_factor(
    trades: Iterable[TradeRecord], initial_capital: Any
) -> ProfitFactorResult:
    """
    Replay resolved trades against a compounding balance.

    For every PROFIT/LOSS trade, oldest first:
      - risk_amount = capital * risk fraction (first finite risk entry)
      - PROFIT adds ``risk_amount * pips`` (first finite pips entry)
      - LOSS removes ``risk_amount``

    Trades without a usable risk value are skipped, as are PROFIT trades
    without a finite pips value and trades whose amount is not positive
    (e.g. risk taken on a negative balance). Unset trades never participate.

    Args:
        trades: Trade records in any order
        initial_capital: Starting balance; must be a finite positive number

    Returns:
        ProfitFactorResult. With an invalid starting balance the result is
        empty and *trades* is not consumed.
    """
    if not is_finite_number(initial_capital) or initial_capital <= 0:
        return _empty_result()

    resolved = [t for t in trades if _is_resolved(t)]
    # sorted() is stable: equal timestamps keep their input order.
    ordered = sorted(resolved, key=trade_sort_key)

    state = CapitalState(running_capital=float(initial_capital))
    replayed = 0
    skipped = 0

    for trade in ordered:
        risk_fraction = normalise_risk_fraction(first_finite(trade.risk))
        if risk_fraction is None:
            log.debug("Skipping trade %s: no usable risk value in %r", trade.id, trade.risk)
            skipped += 1
            continue

        risk_amount = state.running_capital * risk_fraction

        if Outcome.coerce(trade.outcome) is Outcome.PROFIT:
            pips = first_finite(trade.pips)
            if pips is None:
                log.debug("Skipping profit trade %s: no pips recorded", trade.id)
                skipped += 1
                continue

            # Currency risk times raw pips, kept exactly as the journal defines it.
            profit_amount = risk_amount * pips
            if is_finite_number(profit_amount) and profit_amount > 0:
                state.add_profit(profit_amount)
                replayed += 1
            else:
                log.debug("Skipping profit trade %s: non-positive amount %r", trade.id, profit_amount)
                skipped += 1
            continue

        loss_amount = risk_amount
        if is_finite_number(loss_amount) and loss_amount > 0:
            state.add_loss(loss_amount)
            replayed += 1
        else:
            log.debug("Skipping loss trade %s: non-positive amount %r", trade.id, loss_amount)
            skipped += 1

    profit_factor = state.total_profit / state.total_loss if state.total_loss > 0 else None

    log.debug(
        "Capital simulation: %d replayed, %d skipped, profit=%.2f loss=%.2f final=%.2f",
        replayed,
        skipped,
        state.total_profit,
        state.total_loss,
        state.running_capital,
    )

    return ProfitFactorResult(
        profit_factor=profit_factor,
        total_profit=state.total_profit,
        total_loss=state.total_loss,
        final_capital=state.running_capital,
        equity_curve=tuple(state.equity_curve),
        replayed=replayed,
        skipped=skipped,
    )
