"""Technical indicators (pure math, no I/O)."""

from signal_core.indicators.indicators import (
    adx,
    atr,
    ema,
    macd,
    sma,
    true_range,
    IndicatorCalculator,
)

__all__ = [
    "adx",
    "atr",
    "ema",
    "macd",
    "sma",
    "true_range",
    "IndicatorCalculator",
]
