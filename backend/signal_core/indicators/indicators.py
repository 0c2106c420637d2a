"""Technical indicators for signal generation.

Pure NumPy implementations. Every function returns an array of the same
length as its input, with NaN for the warm-up bars, so that index i of
any output lines up with bar i of the input.
"""

from typing import Sequence

import numpy as np

from signal_core.models import Candle, IndicatorFrame, SignalConfig
from signal_core.trend import rolling_mean_diff


def _as_array(values: Sequence[float]) -> np.ndarray:
    return np.asarray(values, dtype=np.float64)


def _first_valid(arr: np.ndarray) -> int | None:
    valid = np.flatnonzero(~np.isnan(arr))
    return int(valid[0]) if len(valid) else None


# =============================================================================
# Moving averages
# =============================================================================

def sma(values: Sequence[float], period: int) -> np.ndarray:
    """
    Calculate Simple Moving Average.

    Args:
        values: Sequence of price values
        period: SMA period

    Returns:
        Array of SMA values (NaN for the first period-1 values)
    """
    arr = _as_array(values)
    result = np.full(len(arr), np.nan)
    if len(arr) < period:
        return result

    for i in range(period - 1, len(arr)):
        result[i] = np.mean(arr[i - period + 1 : i + 1])
    return result


def ema(values: Sequence[float], period: int) -> np.ndarray:
    """
    Calculate Exponential Moving Average.

    Seeded with the SMA of the first ``period`` values, then
    ``ema = prev + (value - prev) * 2 / (period + 1)``.

    Leading NaNs are skipped, so an EMA can be taken of another
    indicator's output (MACD signal line). The first EMA value then sits
    at ``first_valid + period - 1``.

    Args:
        values: Sequence of price values
        period: EMA period

    Returns:
        Array of EMA values (same length as input, NaN for initial values)
    """
    arr = _as_array(values)
    result = np.full(len(arr), np.nan)

    start = _first_valid(arr)
    if start is None or len(arr) - start < period:
        return result

    multiplier = 2.0 / (period + 1)
    seed_at = start + period - 1
    result[seed_at] = np.mean(arr[start : seed_at + 1])

    for i in range(seed_at + 1, len(arr)):
        result[i] = result[i - 1] + (arr[i] - result[i - 1]) * multiplier

    return result


def _wilder(values: np.ndarray, period: int, start: int) -> np.ndarray:
    """Wilder smoothing seeded with the mean of values[start:start+period].

    The first smoothed value lands at start + period - 1.
    """
    result = np.full(len(values), np.nan)
    seed_at = start + period - 1
    if seed_at >= len(values):
        return result

    result[seed_at] = np.mean(values[start : seed_at + 1])
    for i in range(seed_at + 1, len(values)):
        result[i] = (result[i - 1] * (period - 1) + values[i]) / period
    return result


# =============================================================================
# Volatility
# =============================================================================

def true_range(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
) -> np.ndarray:
    """
    Calculate True Range.

    TR = max(high - low, abs(high - prev_close), abs(low - prev_close))

    Bar 0 has no previous close and is NaN.

    Args:
        highs: Sequence of high prices
        lows: Sequence of low prices
        closes: Sequence of close prices

    Returns:
        Array of True Range values
    """
    h = _as_array(highs)
    l = _as_array(lows)
    c = _as_array(closes)

    result = np.full(len(h), np.nan)
    if len(h) < 2:
        return result

    prev_close = c[:-1]
    result[1:] = np.maximum.reduce([
        h[1:] - l[1:],
        np.abs(h[1:] - prev_close),
        np.abs(l[1:] - prev_close),
    ])
    return result


def atr(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    period: int = 14,
) -> np.ndarray:
    """
    Calculate Average True Range (ATR).

    Wilder's smoothing (RMA) of True Range, seeded with the simple mean of
    the first ``period`` True Range values. Because True Range starts at
    bar 1, the first ATR value is at index ``period``.

    Args:
        highs: Sequence of high prices
        lows: Sequence of low prices
        closes: Sequence of close prices
        period: ATR period

    Returns:
        Array of ATR values
    """
    tr = true_range(highs, lows, closes)
    return _wilder(tr, period, start=1)


# =============================================================================
# Trend strength
# =============================================================================

def adx(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    period: int = 14,
) -> np.ndarray:
    """
    Calculate Average Directional Index (Wilder).

    +DM / -DM and True Range are Wilder-summed over ``period`` bars
    starting at bar 1, giving +DI / -DI from index ``period``. DX is then
    averaged over ``period`` values, so the first ADX is at index
    ``2 * period - 1``.

    Flat stretches (zero True Range, or +DI + -DI == 0) give DI / DX of 0
    instead of NaN.

    Args:
        highs: Sequence of high prices
        lows: Sequence of low prices
        closes: Sequence of close prices
        period: ADX period

    Returns:
        Array of ADX values
    """
    h = _as_array(highs)
    l = _as_array(lows)
    n = len(h)
    result = np.full(n, np.nan)
    if n < 2 * period:
        return result

    tr = true_range(highs, lows, closes)

    up_move = np.zeros(n)
    down_move = np.zeros(n)
    up_move[1:] = h[1:] - h[:-1]
    down_move[1:] = l[:-1] - l[1:]

    plus_dm = np.where((up_move > down_move) & (up_move > 0), up_move, 0.0)
    minus_dm = np.where((down_move > up_move) & (down_move > 0), down_move, 0.0)

    # Wilder running sums (not averages): seed = sum of bars 1..period
    tr_sum = np.full(n, np.nan)
    plus_sum = np.full(n, np.nan)
    minus_sum = np.full(n, np.nan)
    tr_sum[period] = np.sum(tr[1 : period + 1])
    plus_sum[period] = np.sum(plus_dm[1 : period + 1])
    minus_sum[period] = np.sum(minus_dm[1 : period + 1])
    for i in range(period + 1, n):
        tr_sum[i] = tr_sum[i - 1] - tr_sum[i - 1] / period + tr[i]
        plus_sum[i] = plus_sum[i - 1] - plus_sum[i - 1] / period + plus_dm[i]
        minus_sum[i] = minus_sum[i - 1] - minus_sum[i - 1] / period + minus_dm[i]

    dx = np.full(n, np.nan)
    for i in range(period, n):
        if tr_sum[i] > 0:
            plus_di = 100.0 * plus_sum[i] / tr_sum[i]
            minus_di = 100.0 * minus_sum[i] / tr_sum[i]
        else:
            plus_di = minus_di = 0.0
        di_sum = plus_di + minus_di
        dx[i] = 100.0 * abs(plus_di - minus_di) / di_sum if di_sum > 0 else 0.0

    return _wilder(dx, period, start=period)


# =============================================================================
# Momentum
# =============================================================================

def macd(
    values: Sequence[float],
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Calculate MACD (Moving Average Convergence Divergence).

    line = EMA(fast) - EMA(slow), signal = EMA(signal_period) of line,
    histogram = line - signal.

    Returns:
        Tuple of (macd_line, signal_line, histogram)
    """
    fast_ema = ema(values, fast_period)
    slow_ema = ema(values, slow_period)

    macd_line = fast_ema - slow_ema
    signal_line = ema(macd_line, signal_period)
    histogram = macd_line - signal_line

    return macd_line, signal_line, histogram


# =============================================================================
# IndicatorCalculator class
# =============================================================================

class IndicatorCalculator:
    """Computes every series the signal engine needs in one pass."""

    def __init__(self, config: SignalConfig):
        self.config = config

    def calculate(self, candles: Sequence[Candle]) -> IndicatorFrame:
        """
        Build the IndicatorFrame for a candle sequence.

        Args:
            candles: Validated candles in ascending time order

        Returns:
            IndicatorFrame aligned bar for bar with ``candles``
        """
        cfg = self.config
        opens = [c.open for c in candles]
        highs = [c.high for c in candles]
        lows = [c.low for c in candles]
        closes = [c.close for c in candles]

        macd_line, signal_line, histogram = macd(
            closes, cfg.macd_fast, cfg.macd_slow, cfg.macd_signal
        )
        close_open_mean, open_close_mean = rolling_mean_diff(
            opens, closes, cfg.trend_length
        )

        return IndicatorFrame(
            ema_filter=ema(closes, cfg.ema_filter_length),
            atr=atr(highs, lows, closes, cfg.atr_length),
            true_range=true_range(highs, lows, closes),
            adx=adx(highs, lows, closes, cfg.adx_length),
            macd_line=macd_line,
            macd_signal=signal_line,
            macd_histogram=histogram,
            close_open_mean=close_open_mean,
            open_close_mean=open_close_mean,
        )
