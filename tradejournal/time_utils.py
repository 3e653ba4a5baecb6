"""Centralised timestamp handling.

All timestamp parsing for trade records goes through this module.
Internal representation: UTC-aware ``datetime``. Milliseconds since epoch
are used only as sort keys.
"""

from datetime import datetime, timezone
from typing import Any, Protocol


__all__ = [
    "TIMESTAMP_FIELDS",
    "calculate_duration",
    "parse_timestamp",
    "resolve_trade_timestamp",
    "trade_sort_key",
]


# Candidate fields, in priority order.
TIMESTAMP_FIELDS = ("date", "open_time", "close_time", "created_at")


class _Timestamped(Protocol):
    date: Any
    open_time: Any
    close_time: Any
    created_at: Any


# ---------------------------------------------------------------------------
# Core conversions
# ---------------------------------------------------------------------------


def parse_timestamp(ts: Any) -> datetime | None:
    """Parse a timestamp representation to a UTC-aware datetime.

    Accepted inputs:
      * ``datetime`` (naive values are taken as UTC)
      * ISO 8601 string (``T`` or space separator, with or without ``Z``)
      * ``YYYY/MM/DD`` date prefix (normalised to dashes)
      * Integer or float milliseconds since epoch
      * String containing a numeric value (e.g. ``"1640995200000"``)

    Returns None for empty or unparseable input.
    """
    if isinstance(ts, datetime):
        return ts if ts.tzinfo is not None else ts.replace(tzinfo=timezone.utc)

    if isinstance(ts, bool):
        return None

    if isinstance(ts, (int, float)):
        try:
            return datetime.fromtimestamp(ts / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    if not isinstance(ts, str):
        return None

    s = ts.strip()
    if not s:
        return None

    # String that looks like a number -> treat as milliseconds
    if s.replace(".", "", 1).lstrip("-").isdigit():
        try:
            value = float(s)
        except ValueError:
            # isdigit() also accepts "--5" or superscript digits.
            return None
        return parse_timestamp(value)

    # Normalise YYYY/MM/DD -> YYYY-MM-DD
    if len(s) >= 10 and s[4] == "/" and s[7] == "/":
        s = f"{s[:4]}-{s[5:7]}-{s[8:]}"

    s = s.replace("Z", "+00:00")
    s = s.replace(" ", "T", 1)

    try:
        dt = datetime.fromisoformat(s)
    except ValueError:
        return None
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Trade timestamp helpers
# ---------------------------------------------------------------------------


def resolve_trade_timestamp(trade: _Timestamped) -> datetime | None:
    """Return the first candidate timestamp of *trade* that parses, or None."""
    for name in TIMESTAMP_FIELDS:
        parsed = parse_timestamp(getattr(trade, name, None))
        if parsed is not None:
            return parsed
    return None


def trade_sort_key(trade: _Timestamped) -> float:
    """Milliseconds since epoch for chronological ordering (0.0 if unknown)."""
    dt = resolve_trade_timestamp(trade)
    if dt is None:
        return 0.0
    return dt.timestamp() * 1000


def calculate_duration(open_time: Any, close_time: Any) -> str | None:
    """
    Human readable holding time, e.g. ``"2 days 3h 15min"`` or ``"45min"``.

    Negative spans are clamped to zero. Returns None when either end
    cannot be parsed.
    """
    start = parse_timestamp(open_time)
    end = parse_timestamp(close_time)
    if start is None or end is None:
        return None

    total_minutes = max(int((end - start).total_seconds()), 0) // 60
    days, rem = divmod(total_minutes, 60 * 24)
    hours, minutes = divmod(rem, 60)

    parts: list[str] = []
    if days > 0:
        parts.append(f"{days} day{'s' if days > 1 else ''}")
    if hours > 0 or days > 0:
        parts.append(f"{hours}h")
    parts.append(f"{minutes}min")
    return " ".join(parts)
