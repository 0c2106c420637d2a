"""Signal engine configuration model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, model_validator

from signal_core.errors import InvalidConfigError

if TYPE_CHECKING:
    from signal_core.settings import EngineSettings


class SignalConfig(BaseModel):
    """Parameter bundle for one compute_signals() invocation.

    Every field must be strictly positive. There is no clamping and no
    cross-field validation (macd_fast >= macd_slow is accepted).
    """

    model_config = ConfigDict(frozen=True)

    # Reserved, accepted but not used by the decision logic
    sensitivity: float = 2.0

    # Trend estimator window (rolling mean of close - open)
    trend_length: int = 21

    # Indicator periods
    ema_filter_length: int = 34
    atr_length: int = 14
    macd_fast: int = 12
    macd_slow: int = 26
    macd_signal: int = 9
    adx_length: int = 14

    # Filter thresholds
    volatility_factor: float = 1.5
    adx_threshold: float = 20.0

    @model_validator(mode="after")
    def check_positive(self) -> SignalConfig:
        for name in type(self).model_fields:
            value = getattr(self, name)
            if not value > 0:
                raise InvalidConfigError(name, value)
        return self

    @property
    def warmup_bars(self) -> int:
        """Leading bars without output; the first record is at this index."""
        return max(
            self.ema_filter_length,
            self.atr_length,
            self.macd_slow,
            self.adx_length,
        ) - 1

    @property
    def min_candles(self) -> int:
        """Smallest input length that produces at least one record."""
        return self.warmup_bars + 1

    @classmethod
    def from_settings(cls, settings: EngineSettings, **overrides) -> SignalConfig:
        """Build a config from environment defaults, with explicit overrides."""
        values = {name: getattr(settings, name) for name in cls.model_fields}
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
