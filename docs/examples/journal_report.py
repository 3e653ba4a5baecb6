# examples/journal_report.py
"""Build a journal report from storage rows."""
import logging

from tradejournal import JournalConfig, configure_logging, format_pips, format_pnl
from tradejournal.report import report_from_rows

log = logging.getLogger(__name__)


ROWS = [
    {
        "id": "1",
        "symbol": "EURUSD",
        "position": "LONG",
        "trade_outcome": "profit",
        "risk_percent": '["2%"]',
        "pips": '["50"]',
        "lot_size": "1",
        "entry_price": '["1.1000"]',
        "stop_loss": '["1.0950"]',
        "take_profit": '["1.1050"]',
        "open_time": "2025-01-15T09:00:00Z",
        "close_time": "2025-01-15T11:30:00Z",
    },
    {
        "id": "2",
        "symbol": "GBPUSD",
        "position": "SHORT",
        "trade_outcome": "loss",
        "risk_percent": '["2%"]',
        "lot_size": "0.5",
        "entry_price": '["1.2700"]',
        "stop_loss": '["1.2730"]',
        "take_profit": '["1.2600"]',
        "open_time": "2025-01-16T14:00:00Z",
        "close_time": "2025-01-16T15:10:00Z",
    },
]


if __name__ == "__main__":
    config = JournalConfig.from_env()
    if config.initial_capital is None:
        config = JournalConfig(initial_capital=10000.0, log_level=config.log_level)

    configure_logging(config.log_level)
    report = report_from_rows(ROWS, config)

    for trade in report.trades:
        log.info(
            "Trade %s: %s pips, %s (%s)",
            trade.trade_id,
            format_pips(trade.overall_pips),
            format_pnl(trade.overall_pnl),
            trade.duration or "open",
        )

    sim = report.simulation
    log.info(
        "Profit %.2f, loss %.2f, final capital %.2f, max drawdown %.2f",
        sim.total_profit,
        sim.total_loss,
        sim.final_capital,
        sim.max_drawdown,
    )
