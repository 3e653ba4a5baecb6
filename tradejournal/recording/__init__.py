from .ingest import (
    parse_multi_value_field,
    parse_optional_number,
    serialize_multi_value_field,
    trade_record_from_row,
    trade_records_from_rows,
)
from .types import TradeLeg, TradeRecord

__all__ = [
    "TradeLeg",
    "TradeRecord",
    "parse_multi_value_field",
    "parse_optional_number",
    "serialize_multi_value_field",
    "trade_record_from_row",
    "trade_records_from_rows",
]
