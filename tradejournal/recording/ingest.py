"""Ingestion boundary: storage rows -> typed trade records.

Storage keeps numerics as strings and per-leg values as JSON arrays
serialised into a single text column. Everything is parsed here, once;
nothing downstream re-interprets raw strings.
"""

import json
import logging
import math
import re
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Iterable

from tradejournal.pnl import infer_risk_is_percentage
from tradejournal.recording.types import TradeLeg, TradeRecord
from tradejournal.time_utils import parse_timestamp
from tradejournal.types import Outcome, Position

log = logging.getLogger(__name__)


__all__ = [
    "parse_multi_value_field",
    "parse_optional_number",
    "serialize_multi_value_field",
    "trade_record_from_row",
    "trade_records_from_rows",
]


_NUMBER_DECORATION = re.compile(r"[%€$£¥\s]")


def parse_optional_number(value: Any) -> float | None:
    """
    Parse a user-entered numeric value.

    Numbers pass through when finite. Strings are trimmed; percent signs,
    currency symbols and inner spaces are dropped, a decimal comma and the
    Unicode minus sign are accepted. Everything else gives None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None
    if not isinstance(value, str):
        return None

    s = _NUMBER_DECORATION.sub("", value).replace("−", "-").replace(",", ".")
    if not s:
        return None
    try:
        parsed = float(s)
    except ValueError:
        log.debug("Ignoring non-numeric value %r", value)
        return None
    return parsed if math.isfinite(parsed) else None


def _coerce_to_string(value: Any) -> str:
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    return str(value)


def parse_multi_value_field(value: Any) -> list[str]:
    """
    Split a stored multi-value column into its entries.

    Storage format is a JSON array of strings. Legacy rows hold a single
    bare value, which becomes a one-item list.
    """
    if not isinstance(value, str):
        return []

    s = value.strip()
    if not s:
        return []

    try:
        parsed = json.loads(s)
    except ValueError:
        if s[0] in "[{":
            log.warning("Failed to parse multi value field %r, using it as a single value", s)
    else:
        if isinstance(parsed, list):
            return [_coerce_to_string(entry) for entry in parsed]

    return [s]


def serialize_multi_value_field(values: Iterable[Any]) -> str | None:
    """Serialise entries for storage; None when no entry has content."""
    normalised = [_coerce_to_string(v) for v in values]
    if not any(v.strip() for v in normalised):
        return None
    return json.dumps(normalised)


def _parse_date(value: Any) -> datetime | None:
    dt = parse_timestamp(value)
    if dt is None and value not in (None, ""):
        log.debug("Ignoring unparseable timestamp %r", value)
    return dt


def _entries(raw: Any) -> list[Any]:
    # Rows built in code may carry lists or bare numbers instead of JSON text.
    if isinstance(raw, (list, tuple)):
        return list(raw)
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return [raw]
    return parse_multi_value_field(raw)


def _numbers(raw: Any) -> tuple[float | None, ...]:
    return tuple(parse_optional_number(v) for v in _entries(raw))


def _entry(values: tuple, index: int) -> Any:
    if not values:
        return None
    # A single value applies to every leg.
    if len(values) == 1:
        return values[0]
    return values[index] if index < len(values) else None


def _build_legs(
    row: Mapping[str, Any], position: Position, trade_outcome: Outcome
) -> tuple[TradeLeg, ...]:
    entries = _numbers(row.get("entry_price"))
    stops = _numbers(row.get("stop_loss"))
    targets = _numbers(row.get("take_profit"))
    outcomes = tuple(
        Outcome.coerce(v) or Outcome.UNSET
        for v in _entries(row.get("take_profit_outcome"))
    )

    count = max(len(entries), len(stops), len(targets), len(outcomes))
    legs = []
    for i in range(count):
        outcome = _entry(outcomes, i)
        if outcome is None or outcome is Outcome.UNSET:
            outcome = trade_outcome
        legs.append(
            TradeLeg(
                entry_price=_entry(entries, i),
                stop_loss_price=_entry(stops, i),
                take_profit_price=_entry(targets, i),
                position=position,
                outcome=outcome,
            )
        )
    return tuple(legs)


def trade_record_from_row(
    row: Mapping[str, Any], *, default_risk_is_percentage: bool = True
) -> TradeRecord:
    """
    Build a TradeRecord from a storage row.

    Args:
        row: Mapping keyed by storage column name
        default_risk_is_percentage: Risk unit used when an entry carries
            neither "%" nor a currency symbol

    Raises:
        TypeError: If *row* is not a mapping
    """
    if not isinstance(row, Mapping):
        raise TypeError(f"Trade row must be a mapping, got {type(row).__name__}")

    position = Position.coerce(row.get("position")) or Position.LONG
    outcome = Outcome.coerce(row.get("trade_outcome"))
    if outcome is None:
        log.debug("Unknown trade outcome %r, treating as unset", row.get("trade_outcome"))
        outcome = Outcome.UNSET

    raw_risk = _entries(row.get("risk_percent"))

    open_time = _parse_date(row.get("open_time"))
    created_at = _parse_date(row.get("created_at"))
    date = _parse_date(row.get("date")) or open_time or created_at

    return TradeRecord(
        id=_coerce_to_string(row.get("id")).strip(),
        symbol=_coerce_to_string(row.get("symbol")).strip().upper(),
        position=position,
        outcome=outcome,
        risk=tuple(parse_optional_number(v) for v in raw_risk),
        risk_is_percentage=tuple(
            infer_risk_is_percentage(v, default_risk_is_percentage) for v in raw_risk
        ),
        pips=_numbers(row.get("pips")),
        lot_size=parse_optional_number(row.get("lot_size")),
        date=date,
        open_time=open_time,
        close_time=_parse_date(row.get("close_time")),
        created_at=created_at,
        legs=_build_legs(row, position, outcome),
    )


def trade_records_from_rows(
    rows: Iterable[Mapping[str, Any]], *, default_risk_is_percentage: bool = True
) -> list[TradeRecord]:
    """Convert storage rows to records, preserving row order."""
    return [
        trade_record_from_row(r, default_risk_is_percentage=default_risk_is_percentage)
        for r in rows
    ]
