"""Tests for tradejournal.time_utils – centralised timestamp handling."""

from datetime import datetime, timezone

import pytest

from tradejournal.recording import TradeRecord
from tradejournal.time_utils import (
    calculate_duration,
    parse_timestamp,
    resolve_trade_timestamp,
    trade_sort_key,
)


# ---------------------------------------------------------------------------
# parse_timestamp
# ---------------------------------------------------------------------------

class TestParseTimestamp:

    def test_iso_string_with_z(self):
        dt = parse_timestamp("2025-01-15T12:30:00Z")
        assert dt == datetime(2025, 1, 15, 12, 30, tzinfo=timezone.utc)

    def test_iso_string_space_separator(self):
        dt = parse_timestamp("2025-01-15 12:30:00+00:00")
        assert dt == datetime(2025, 1, 15, 12, 30, tzinfo=timezone.utc)

    def test_slash_date_format(self):
        dt = parse_timestamp("2025/01/15T12:30:00Z")
        assert dt == datetime(2025, 1, 15, 12, 30, tzinfo=timezone.utc)

    def test_date_only(self):
        assert parse_timestamp("2025-01-15") == datetime(2025, 1, 15, tzinfo=timezone.utc)

    def test_integer_milliseconds(self):
        dt = parse_timestamp(1736899200000)
        assert dt == datetime(2025, 1, 15, tzinfo=timezone.utc)

    def test_numeric_string(self):
        dt = parse_timestamp("1736899200000")
        assert dt == datetime(2025, 1, 15, tzinfo=timezone.utc)

    def test_naive_datetime_gets_utc(self):
        dt = parse_timestamp(datetime(2025, 1, 15, 12, 30))
        assert dt.tzinfo == timezone.utc
        assert dt.hour == 12

    def test_aware_datetime_is_returned_unchanged(self):
        original = datetime(2025, 1, 15, 12, 30, tzinfo=timezone.utc)
        assert parse_timestamp(original) is original

    @pytest.mark.parametrize(
        "value", ["", "   ", "not a date", None, True, [], float("nan"), "--5", "-.-5", "²"]
    )
    def test_unparseable_returns_none(self, value):
        assert parse_timestamp(value) is None


# ---------------------------------------------------------------------------
# Trade timestamp resolution
# ---------------------------------------------------------------------------

class TestResolveTradeTimestamp:

    def test_date_wins_over_other_fields(self):
        t = TradeRecord(id="1", date="2025-01-01", open_time="2024-01-01")
        assert resolve_trade_timestamp(t) == datetime(2025, 1, 1, tzinfo=timezone.utc)

    def test_first_parseable_candidate_wins(self):
        t = TradeRecord(id="1", date="garbage", open_time=None, close_time="2025-03-01", created_at="2025-04-01")
        assert resolve_trade_timestamp(t) == datetime(2025, 3, 1, tzinfo=timezone.utc)

    def test_nothing_parseable(self):
        t = TradeRecord(id="1")
        assert resolve_trade_timestamp(t) is None
        assert trade_sort_key(t) == 0.0

    def test_sort_key_is_epoch_milliseconds(self):
        t = TradeRecord(id="1", created_at="2025-01-15T00:00:00Z")
        assert trade_sort_key(t) == 1736899200000.0


# ---------------------------------------------------------------------------
# calculate_duration
# ---------------------------------------------------------------------------

class TestCalculateDuration:

    def test_minutes_only(self):
        assert calculate_duration("2025-01-15T09:00:00Z", "2025-01-15T09:45:00Z") == "45min"

    def test_hours_and_minutes(self):
        assert calculate_duration("2025-01-15T09:00:00Z", "2025-01-15T11:30:00Z") == "2h 30min"

    def test_single_day(self):
        assert calculate_duration("2025-01-15T09:00:00Z", "2025-01-16T12:05:00Z") == "1 day 3h 5min"

    def test_plural_days_show_zero_hours(self):
        assert calculate_duration("2025-01-15T09:00:00Z", "2025-01-17T09:00:00Z") == "2 days 0h 0min"

    def test_negative_span_is_clamped(self):
        assert calculate_duration("2025-01-15T10:00:00Z", "2025-01-15T09:00:00Z") == "0min"

    def test_missing_end_returns_none(self):
        assert calculate_duration("2025-01-15T10:00:00Z", None) is None
