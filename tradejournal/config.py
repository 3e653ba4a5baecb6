from __future__ import annotations

import math
import os
from dataclasses import dataclass
from typing import Any, Mapping


_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


def _parse_bool(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    s = str(value).strip().lower()
    if s in _TRUE:
        return True
    if s in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")


@dataclass(frozen=True)
class JournalConfig:
    initial_capital: float | None = None
    default_risk_is_percentage: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_raw(
        cls,
        *,
        initial_capital: Any = None,
        default_risk_is_percentage: Any = True,
        log_level: Any = "INFO",
    ) -> JournalConfig:
        """Validate and construct from raw values.

        Raises ``ValueError`` with a clear message on bad values instead of
        letting ``TypeError`` propagate.
        """
        capital: float | None = None
        if initial_capital not in (None, ""):
            try:
                capital = float(initial_capital)
            except (TypeError, ValueError) as exc:
                raise ValueError(
                    f"initial_capital is not numeric: {initial_capital!r}"
                ) from exc
            if not math.isfinite(capital) or capital <= 0:
                raise ValueError(f"initial_capital must be > 0, got {initial_capital!r}")

        level = str(log_level).strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}, got {log_level!r}")

        return cls(
            initial_capital=capital,
            default_risk_is_percentage=_parse_bool(
                default_risk_is_percentage, "default_risk_is_percentage"
            ),
            log_level=level,
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> JournalConfig:
        """Read ``TRADEJOURNAL_*`` variables (defaults apply when unset)."""
        env = os.environ if environ is None else environ
        return cls.from_raw(
            initial_capital=env.get("TRADEJOURNAL_INITIAL_CAPITAL"),
            default_risk_is_percentage=env.get("TRADEJOURNAL_RISK_IS_PERCENTAGE", True),
            log_level=env.get("TRADEJOURNAL_LOG_LEVEL", "INFO"),
        )
