"""Smart algo signal generation.

Strategy Logic (every filter must agree for an entry):
- Trend: close vs EMA filter, confirmed by the rolling body bias
- Volatility: previous bar's True Range above ATR * volatility_factor
- Momentum: fresh MACD / signal-line crossover
- Trend strength: ADX at or above threshold (below it the bar is chop)

Confidence counts how many of the four filters fire (0-4), regardless
of direction.

This module is pure business logic with no I/O dependencies. Each call
recomputes every indicator from the full candle window and keeps no
state between calls.
"""

import logging
from typing import Any, Iterable, Mapping, Sequence

from signal_core.conditions import BarConditions, evaluate_bar
from signal_core.errors import (
    InputTooLargeError,
    InsufficientDataError,
    MalformedCandleError,
)
from signal_core.indicators import IndicatorCalculator
from signal_core.models import Candle, IndicatorFrame, SignalConfig, SignalRecord

logger = logging.getLogger(__name__)

CandleInput = Candle | Mapping[str, Any]


def _to_candles(candles: Iterable[CandleInput]) -> list[Candle]:
    """Validate raw mappings into Candles, tagging errors with the bar index."""
    result = []
    for i, item in enumerate(candles):
        if isinstance(item, Candle):
            result.append(item)
            continue
        try:
            result.append(Candle.model_validate(item))
        except MalformedCandleError as e:
            raise MalformedCandleError(str(e), index=i) from e
    return result


def confidence_score(conditions: BarConditions) -> int:
    """Number of filters that fired, 0-4."""
    return sum((
        conditions.has_trend,
        conditions.high_volatility,
        conditions.strong_trend,
        conditions.has_momentum,
    ))


def aggregate(
    candle: Candle,
    frame: IndicatorFrame,
    index: int,
    conditions: BarConditions,
) -> SignalRecord:
    """Combine one bar's filter results into a SignalRecord."""
    confirmed = conditions.high_volatility and conditions.strong_trend
    adx_point = frame.adx_at(index)

    return SignalRecord(
        timestamp=candle.timestamp,
        buy_signal=conditions.bullish_trend and conditions.momentum_buy and confirmed,
        sell_signal=conditions.bearish_trend and conditions.momentum_sell and confirmed,
        confidence=confidence_score(conditions),
        ema_filter=frame.ema_at(index),
        adx=adx_point.adx if adx_point is not None else None,
        atr=frame.atr_at(index),
        chop=conditions.chop,
        strong_trend=conditions.strong_trend,
        bullish_trend=conditions.bullish_trend,
        bearish_trend=conditions.bearish_trend,
        high_volatility=conditions.high_volatility,
        momentum_buy=conditions.momentum_buy,
        momentum_sell=conditions.momentum_sell,
    )


class SignalGenerator:
    """
    Generate buy/sell signals from a complete candle history.

    The generator holds only its (immutable) config, so one instance can
    be shared between threads.
    """

    def __init__(self, config: SignalConfig | None = None, max_candles: int | None = None):
        self.config = config or SignalConfig()
        self.max_candles = max_candles
        self.indicator_calc = IndicatorCalculator(self.config)

    def _prepare(self, candles: Iterable[CandleInput]) -> list[Candle]:
        bars = _to_candles(candles)
        if self.max_candles is not None and len(bars) > self.max_candles:
            raise InputTooLargeError(len(bars), self.max_candles)
        return bars

    def has_enough_data(self, count: int) -> bool:
        return count >= self.config.min_candles

    def require_enough_data(self, candles: Sequence[Any]) -> None:
        """Raise InsufficientDataError when no bar would be eligible."""
        if not self.has_enough_data(len(candles)):
            raise InsufficientDataError(len(candles), self.config.min_candles)

    def generate(self, candles: Iterable[CandleInput]) -> list[SignalRecord]:
        """
        Compute one SignalRecord per eligible bar.

        Args:
            candles: Candles (or mappings with the same keys) in ascending
                time order

        Returns:
            Records for bars at index >= config.warmup_bars, in input
            order. Empty when the input is too short.
        """
        bars = self._prepare(candles)
        if not self.has_enough_data(len(bars)):
            logger.warning(
                f"Not enough data for signals: {len(bars)} candles, "
                f"need {self.config.min_candles}"
            )
            return []

        frame = self.indicator_calc.calculate(bars)

        records = []
        for i in range(self.config.warmup_bars, len(bars)):
            conditions = evaluate_bar(frame, i, bars[i].close, self.config)
            records.append(aggregate(bars[i], frame, i, conditions))

        logger.debug(
            f"Computed {len(records)} records from {len(bars)} candles "
            f"({sum(1 for r in records if r.direction)} signals)"
        )
        return records

    def indicator_series(self, candles: Iterable[CandleInput]) -> IndicatorFrame:
        """Indicator series for charting. No minimum length; short inputs
        simply yield all-NaN series."""
        return self.indicator_calc.calculate(self._prepare(candles))


def compute_signals(
    candles: Iterable[CandleInput],
    config: SignalConfig | None = None,
    *,
    max_candles: int | None = None,
) -> list[SignalRecord]:
    """
    Compute buy/sell signals for a candle series.

    Args:
        candles: Candles in ascending timestamp order
        config: Signal parameters (defaults when None)
        max_candles: Optional input size ceiling

    Returns:
        One SignalRecord per eligible bar; [] when the input is shorter
        than config.warmup_bars + 1

    Raises:
        MalformedCandleError: A candle breaks the OHLC invariant
        InputTooLargeError: More than max_candles candles
    """
    return SignalGenerator(config, max_candles=max_candles).generate(candles)


def compute_indicator_series(
    candles: Iterable[CandleInput],
    config: SignalConfig | None = None,
) -> dict[str, list[float | None]]:
    """Indicator series (None for warm-up bars) for chart overlays."""
    return SignalGenerator(config).indicator_series(candles).to_series()


def actionable_signals(records: Iterable[SignalRecord]) -> list[SignalRecord]:
    """Only the records carrying a buy or sell signal."""
    return [r for r in records if r.buy_signal or r.sell_signal]


def latest_signals(records: Sequence[SignalRecord], n: int = 5) -> list[SignalRecord]:
    """The last ``n`` records."""
    if n <= 0:
        return []
    return list(records[-n:])
