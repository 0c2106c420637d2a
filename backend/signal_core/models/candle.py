"""Candle (OHLC bar) model."""

import math
from datetime import datetime

from pydantic import BaseModel, ConfigDict, model_validator

from signal_core.errors import MalformedCandleError


class Candle(BaseModel):
    """One OHLC observation.

    ``timestamp`` is an opaque sortable token (epoch millis, ISO string,
    datetime). It is carried through to the output untouched; ordering is
    the caller's responsibility.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: int | float | str | datetime
    open: float
    high: float
    low: float
    close: float
    volume: float | None = None

    @model_validator(mode="after")
    def check_ohlc(self) -> "Candle":
        for name in ("open", "high", "low", "close"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise MalformedCandleError(f"{name} is not finite ({value})")
        if self.volume is not None and not math.isfinite(self.volume):
            raise MalformedCandleError(f"volume is not finite ({self.volume})")

        if self.low > min(self.open, self.close) or max(self.open, self.close) > self.high:
            raise MalformedCandleError(
                f"expected low <= open/close <= high, got "
                f"o={self.open} h={self.high} l={self.low} c={self.close}"
            )
        return self

    @property
    def is_bullish(self) -> bool:
        """Check if this is a bullish (green) candle."""
        return self.close > self.open

    @property
    def is_bearish(self) -> bool:
        """Check if this is a bearish (red) candle."""
        return self.close < self.open

    @property
    def body(self) -> float:
        """Signed body, close minus open."""
        return self.close - self.open

    @property
    def range_size(self) -> float:
        """Get the full range (high - low) of the candle."""
        return self.high - self.low
