"""Index-aligned indicator series for one engine invocation."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class AdxPoint:
    """ADX value at a bar."""

    adx: float


@dataclass(frozen=True)
class MacdPoint:
    """MACD values at a bar. signal/histogram stay None until the
    signal EMA has warmed up, which happens later than the MACD line."""

    line: float
    signal: float | None
    histogram: float | None


def _value(series: np.ndarray, index: int) -> float | None:
    """Read series[index], None when out of range or not yet available."""
    if index < 0 or index >= len(series):
        return None
    value = float(series[index])
    if math.isnan(value):
        return None
    return value


@dataclass(frozen=True, eq=False)
class IndicatorFrame:
    """Parallel indicator series, one entry per input bar.

    NaN marks "not yet available". Use the *_at() accessors to get
    None instead of NaN; they never wrap around on negative indices.
    """

    ema_filter: np.ndarray
    atr: np.ndarray
    true_range: np.ndarray
    adx: np.ndarray
    macd_line: np.ndarray
    macd_signal: np.ndarray
    macd_histogram: np.ndarray
    close_open_mean: np.ndarray
    open_close_mean: np.ndarray

    def __post_init__(self):
        for arr in (
            self.ema_filter, self.atr, self.true_range, self.adx,
            self.macd_line, self.macd_signal, self.macd_histogram,
            self.close_open_mean, self.open_close_mean,
        ):
            arr.flags.writeable = False

    def __len__(self) -> int:
        return len(self.ema_filter)

    def ema_at(self, index: int) -> float | None:
        return _value(self.ema_filter, index)

    def atr_at(self, index: int) -> float | None:
        return _value(self.atr, index)

    def true_range_at(self, index: int) -> float | None:
        return _value(self.true_range, index)

    def adx_at(self, index: int) -> AdxPoint | None:
        value = _value(self.adx, index)
        if value is None:
            return None
        return AdxPoint(adx=value)

    def macd_at(self, index: int) -> MacdPoint | None:
        line = _value(self.macd_line, index)
        if line is None:
            return None
        return MacdPoint(
            line=line,
            signal=_value(self.macd_signal, index),
            histogram=_value(self.macd_histogram, index),
        )

    def trend_bias_at(self, index: int) -> tuple[float, float]:
        """(close-open mean, open-close mean) for the bar; zero before warm-up."""
        if index < 0 or index >= len(self):
            return 0.0, 0.0
        return float(self.close_open_mean[index]), float(self.open_close_mean[index])

    def to_series(self) -> dict[str, list[float | None]]:
        """Plain lists for chart overlays, NaN replaced by None."""
        return {
            "ema_filter": _to_list(self.ema_filter),
            "atr": _to_list(self.atr),
            "true_range": _to_list(self.true_range),
            "adx": _to_list(self.adx),
            "macd_line": _to_list(self.macd_line),
            "macd_signal": _to_list(self.macd_signal),
            "macd_histogram": _to_list(self.macd_histogram),
            "close_open_mean": _to_list(self.close_open_mean),
            "open_close_mean": _to_list(self.open_close_mean),
        }


def _to_list(series: np.ndarray) -> list[float | None]:
    return [None if math.isnan(v) else float(v) for v in series]
