# tests/conftest.py
import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from tradejournal.recording import TradeRecord
from tradejournal.types import Outcome


@pytest.fixture
def make_trade():
    """Factory for TradeRecord with sensible defaults."""
    def _make(trade_id="t1", outcome=Outcome.PROFIT, risk=(0.01,), pips=(30.0,), **overrides):
        defaults = dict(
            id=trade_id,
            outcome=outcome,
            risk=tuple(risk),
            pips=tuple(pips),
            lot_size=1.0,
            date="2025-01-15T12:00:00Z",
        )
        defaults.update(overrides)
        return TradeRecord(**defaults)

    return _make


@pytest.fixture
def storage_row():
    """A storage row as returned by the trades table."""
    return {
        "id": 42,
        "symbol": "eurusd",
        "position": "LONG",
        "trade_outcome": "profit",
        "risk_percent": '["2%"]',
        "pips": '["50"]',
        "lot_size": "1",
        "entry_price": '["1.1000"]',
        "stop_loss": '["1.0950"]',
        "take_profit": '["1.1050"]',
        "take_profit_outcome": '["profit"]',
        "open_time": "2025-01-15T09:00:00Z",
        "close_time": "2025-01-15T11:30:00Z",
        "created_at": "2025-01-15T12:00:00Z",
    }
