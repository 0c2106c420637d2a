"""Signal output model."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SignalRecord(BaseModel):
    """Engine output for one eligible bar.

    The boolean predicate fields are diagnostic; buy_signal / sell_signal
    and confidence are derived from them by the aggregator.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: int | float | str | datetime
    buy_signal: bool
    sell_signal: bool
    confidence: int = Field(ge=0, le=4)

    # Indicator values at the bar (None while an indicator is warming up)
    ema_filter: float | None = None
    adx: float | None = None
    atr: float | None = None

    chop: bool = False
    strong_trend: bool = False
    bullish_trend: bool = False
    bearish_trend: bool = False
    high_volatility: bool = False
    momentum_buy: bool = False
    momentum_sell: bool = False

    @model_validator(mode="after")
    def check_exclusive(self) -> "SignalRecord":
        if self.buy_signal and self.sell_signal:
            raise ValueError("buy_signal and sell_signal are mutually exclusive")
        return self

    @property
    def direction(self) -> str | None:
        """'buy', 'sell' or None when the bar carries no signal."""
        if self.buy_signal:
            return "buy"
        if self.sell_signal:
            return "sell"
        return None
