"""Trade journal domain types."""

from enum import Enum
from typing import Any


class Position(str, Enum):
    """Trade direction.

    Determines which price movements count as favourable. Stored records
    use the upper-case names ("LONG" / "SHORT").
    """
    LONG = "LONG"
    SHORT = "SHORT"

    @classmethod
    def coerce(cls, value: Any) -> "Position | None":
        """
        Convert a loosely typed value to a Position.

        Accepts Position members and case-insensitive strings.

        Returns:
            The matching Position, or None if the value is not recognised
        """
        if isinstance(value, Position):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                return None
        return None


class Outcome(str, Enum):
    """How a trade (or trade leg) resolved.

    UNSET means not resolved yet; the empty string is how unset outcomes
    are persisted.
    """
    UNSET = ""
    PROFIT = "profit"
    LOSS = "loss"

    @property
    def is_resolved(self) -> bool:
        return self is not Outcome.UNSET

    @classmethod
    def coerce(cls, value: Any) -> "Outcome | None":
        """
        Convert a loosely typed value to an Outcome.

        None and blank strings map to UNSET ("unset" is accepted too).
        Anything unrecognised returns None so callers can fail closed.
        """
        if isinstance(value, Outcome):
            return value
        if value is None:
            return Outcome.UNSET
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("", "unset"):
                return Outcome.UNSET
            try:
                return cls(s)
            except ValueError:
                return None
        return None
