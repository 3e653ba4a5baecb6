"""Tests for journal configuration."""

import pytest

from tradejournal.config import JournalConfig


def test_defaults():
    cfg = JournalConfig.from_raw()
    assert cfg.initial_capital is None
    assert cfg.default_risk_is_percentage is True
    assert cfg.log_level == "INFO"


def test_from_raw_coerces_values():
    cfg = JournalConfig.from_raw(initial_capital="2500", default_risk_is_percentage="no", log_level="debug")
    assert cfg.initial_capital == 2500.0
    assert cfg.default_risk_is_percentage is False
    assert cfg.log_level == "DEBUG"


@pytest.mark.parametrize("capital", ["abc", [1]])
def test_non_numeric_capital_raises(capital):
    with pytest.raises(ValueError, match="initial_capital is not numeric"):
        JournalConfig.from_raw(initial_capital=capital)


@pytest.mark.parametrize("capital", [0, -10, "nan", "inf"])
def test_non_positive_capital_raises(capital):
    with pytest.raises(ValueError, match="initial_capital must be > 0"):
        JournalConfig.from_raw(initial_capital=capital)


def test_bad_boolean_raises():
    with pytest.raises(ValueError, match="default_risk_is_percentage"):
        JournalConfig.from_raw(default_risk_is_percentage="maybe")


def test_bad_log_level_raises():
    with pytest.raises(ValueError, match="log_level"):
        JournalConfig.from_raw(log_level="VERBOSE")


def test_from_env():
    cfg = JournalConfig.from_env(
        {
            "TRADEJOURNAL_INITIAL_CAPITAL": "10000",
            "TRADEJOURNAL_RISK_IS_PERCENTAGE": "false",
            "TRADEJOURNAL_LOG_LEVEL": "warning",
        }
    )
    assert cfg == JournalConfig(initial_capital=10000.0, default_risk_is_percentage=False, log_level="WARNING")


def test_from_env_defaults(monkeypatch):
    for name in ("TRADEJOURNAL_INITIAL_CAPITAL", "TRADEJOURNAL_RISK_IS_PERCENTAGE", "TRADEJOURNAL_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    assert JournalConfig.from_env() == JournalConfig()
