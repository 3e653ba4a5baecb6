"""
Journal reporting: per-leg results, per-trade aggregates and the capital
simulation, assembled for display layers.
"""

import logging
import sys
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from tradejournal.aggregation import is_finite_number
from tradejournal.config import JournalConfig
from tradejournal.metrics import ProfitFactorResult, calculate_profit_factor
from tradejournal.pips import apply_outcome_to_pips, calculate_overall_pips, calculate_pips
from tradejournal.pnl import calculate_overall_pnl, calculate_pnl
from tradejournal.recording import TradeRecord, trade_records_from_rows
from tradejournal.time_utils import calculate_duration


log = logging.getLogger(__name__)


__all__ = [
    "JournalReport",
    "LegResult",
    "TradeSummary",
    "build_report",
    "configure_logging",
    "report_from_rows",
    "summarise_trade",
]


def configure_logging(level: str = "INFO", force: bool = False) -> None:
    """
    Configure root logger with console output.

    By default, this is non-destructive: if the root logger already has handlers,
    it will do nothing (assuming the application has configured logging).

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        force: If True, clear existing handlers and force this configuration
    """
    root_logger = logging.getLogger()

    if root_logger.hasHandlers() and not force:
        return

    root_logger.setLevel(level.upper())

    if force:
        root_logger.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)


@dataclass(frozen=True)
class LegResult:
    pip_distance: float | None
    pnl: float | None


@dataclass(frozen=True)
class TradeSummary:
    """Derived figures for one trade; aggregates follow leg order."""
    trade_id: str
    legs: tuple[LegResult, ...]
    overall_pips: float | None
    overall_pnl: float | None
    duration: str | None = None


@dataclass(frozen=True)
class JournalReport:
    trades: tuple[TradeSummary, ...]
    simulation: ProfitFactorResult

    def summary_for(self, trade_id: str) -> TradeSummary | None:
        for t in self.trades:
            if t.trade_id == trade_id:
                return t
        return None


def _at(values: tuple, index: int) -> Any:
    return values[index] if index < len(values) else None


def _leg_risk(record: TradeRecord, index: int) -> tuple[float | None, bool]:
    """Risk value for a leg plus its unit; falls back to the first finite entry."""
    risk = _at(record.risk, index)
    if is_finite_number(risk):
        return risk, record.risk_unit_is_percentage(index)
    for i, value in enumerate(record.risk):
        if is_finite_number(value):
            return value, record.risk_unit_is_percentage(i)
    return None, True


def summarise_trade(record: TradeRecord) -> TradeSummary:
    """
    Compute pip distance and P&L for every leg of *record*.

    Legs with prices use the price-based pip distance; otherwise the stored
    pips entry for that leg is used with its sign forced by the outcome.
    """
    count = max(len(record.legs), len(record.pips))
    results: list[LegResult] = []

    for i in range(count):
        leg = _at(record.legs, i)
        outcome = leg.outcome if leg is not None else record.outcome

        pip_distance = None
        if leg is not None:
            pip_distance = calculate_pips(
                leg.entry_price,
                leg.take_profit_price,
                leg.stop_loss_price,
                leg.position,
                leg.outcome,
            )
        if pip_distance is None:
            pip_distance = apply_outcome_to_pips(_at(record.pips, i), outcome)

        risk, risk_is_percentage = _leg_risk(record, i)
        pnl = calculate_pnl(
            pips=pip_distance,
            lot_size=record.lot_size,
            risk=risk,
            outcome=outcome,
            risk_is_percentage=risk_is_percentage,
        )
        results.append(LegResult(pip_distance=pip_distance, pnl=pnl))

    return TradeSummary(
        trade_id=record.id,
        legs=tuple(results),
        overall_pips=calculate_overall_pips(r.pip_distance for r in results),
        overall_pnl=calculate_overall_pnl(r.pnl for r in results),
        duration=calculate_duration(record.open_time, record.close_time),
    )


def build_report(records: Iterable[TradeRecord], *, initial_capital: Any) -> JournalReport:
    """
    Summarise every trade and run the capital simulation.

    Trade summaries keep the input order; the simulation orders trades
    chronologically on its own.
    """
    records = list(records)
    summaries = tuple(summarise_trade(r) for r in records)
    simulation = calculate_profit_factor(records, initial_capital)

    log.info(
        "Journal report: %d trades, profit factor %s",
        len(summaries),
        "n/a" if simulation.profit_factor is None else f"{simulation.profit_factor:.2f}",
    )
    return JournalReport(trades=summaries, simulation=simulation)


def report_from_rows(rows: Iterable[Mapping[str, Any]], config: JournalConfig) -> JournalReport:
    """Ingest storage rows with *config* and build the report."""
    records = trade_records_from_rows(
        rows, default_risk_is_percentage=config.default_risk_is_percentage
    )
    return build_report(records, initial_capital=config.initial_capital)
