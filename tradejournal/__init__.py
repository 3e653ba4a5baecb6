# tradejournal/__init__.py
"""
Tradejournal - performance engine for a personal trade journal.

Turns journalled entry/exit prices and risk settings into pip distances,
monetary P&L and a compounding profit-factor simulation.
"""

from .types import Outcome, Position
from .pips import (
    apply_outcome_to_pips,
    calculate_overall_pips,
    calculate_pips,
    calculate_stop_loss_distance,
    calculate_take_profit_distance,
    format_pips,
)
from .pnl import calculate_overall_pnl, calculate_pnl, format_pnl, infer_risk_is_percentage
from .metrics import ProfitFactorResult, calculate_profit_factor
from .recording import TradeLeg, TradeRecord, trade_record_from_row
from .report import JournalReport, build_report, configure_logging
from .config import JournalConfig
from .session import Session, SessionProvider

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "JournalConfig",
    "JournalReport",
    "Outcome",
    "Position",
    "ProfitFactorResult",
    "Session",
    "SessionProvider",
    "TradeLeg",
    "TradeRecord",
    "apply_outcome_to_pips",
    "build_report",
    "calculate_overall_pips",
    "calculate_overall_pnl",
    "calculate_pips",
    "calculate_pnl",
    "calculate_profit_factor",
    "calculate_stop_loss_distance",
    "calculate_take_profit_distance",
    "configure_logging",
    "format_pips",
    "format_pnl",
    "infer_risk_is_percentage",
    "trade_record_from_row",
]
