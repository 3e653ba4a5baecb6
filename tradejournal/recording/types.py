from dataclasses import dataclass, field
from datetime import datetime

from tradejournal.types import Outcome, Position


@dataclass(frozen=True)
class TradeLeg:
    """One priced scenario within a trade (e.g. one of several take-profits)."""
    entry_price: float | None = None
    stop_loss_price: float | None = None
    take_profit_price: float | None = None
    position: Position = Position.LONG
    outcome: Outcome = Outcome.UNSET


@dataclass(frozen=True)
class TradeRecord:
    """A journalled trade as consumed by the calculators.

    Numeric fields are already parsed; ``None`` marks a missing or invalid
    value. ``risk``, ``risk_is_percentage`` and ``pips`` hold one entry per
    leg, in leg order.
    """
    id: str
    outcome: Outcome = Outcome.UNSET
    risk: tuple[float | None, ...] = ()
    risk_is_percentage: tuple[bool, ...] = ()
    pips: tuple[float | None, ...] = ()
    lot_size: float | None = None
    date: datetime | str | None = None
    open_time: datetime | str | None = None
    close_time: datetime | str | None = None
    created_at: datetime | str | None = None
    symbol: str = ""
    position: Position = Position.LONG
    legs: tuple[TradeLeg, ...] = field(default_factory=tuple)

    def risk_unit_is_percentage(self, index: int) -> bool:
        """Whether risk entry *index* is in percentage points (default True)."""
        if 0 <= index < len(self.risk_is_percentage):
            return self.risk_is_percentage[index]
        return True
