"""Per-bar filter predicates: trend, volatility, momentum, trend strength."""

from dataclasses import dataclass

from signal_core.models import IndicatorFrame, SignalConfig

# The volatility check compares the True Range of the previous bar with the
# ATR of the current bar. Existing signal history was produced with this
# offset, so it is kept as is.
TRUE_RANGE_LAG = 1


@dataclass(frozen=True)
class BarConditions:
    """Filter results for one bar."""

    bullish_trend: bool
    bearish_trend: bool
    high_volatility: bool
    momentum_buy: bool
    momentum_sell: bool
    strong_trend: bool
    chop: bool

    @property
    def has_trend(self) -> bool:
        return self.bullish_trend or self.bearish_trend

    @property
    def has_momentum(self) -> bool:
        return self.momentum_buy or self.momentum_sell


def trend_direction(
    frame: IndicatorFrame, index: int, close: float
) -> tuple[bool, bool]:
    """(bullish, bearish) from the EMA filter and the body bias."""
    ema_value = frame.ema_at(index)
    if ema_value is None:
        return False, False

    close_open, open_close = frame.trend_bias_at(index)
    bullish = close > ema_value and close_open > 0
    bearish = close < ema_value and open_close > 0
    return bullish, bearish


def volatility_expansion(
    frame: IndicatorFrame, index: int, volatility_factor: float
) -> bool:
    """True Range (one bar back) above ATR * factor."""
    tr = frame.true_range_at(index - TRUE_RANGE_LAG)
    atr_value = frame.atr_at(index)
    if tr is None or atr_value is None:
        return False
    return tr > atr_value * volatility_factor


def momentum_crossover(frame: IndicatorFrame, index: int) -> tuple[bool, bool]:
    """(buy, sell) on the bar where the MACD line crosses its signal line."""
    current = frame.macd_at(index)
    previous = frame.macd_at(index - 1)
    if (
        current is None
        or previous is None
        or current.signal is None
        or current.histogram is None
        or previous.signal is None
    ):
        return False, False

    buy = (
        current.histogram > 0
        and current.line > current.signal
        and previous.line <= previous.signal
    )
    sell = (
        current.histogram < 0
        and current.line < current.signal
        and previous.line >= previous.signal
    )
    return buy, sell


def trend_strength(
    frame: IndicatorFrame, index: int, adx_threshold: float
) -> tuple[bool, bool]:
    """(strong_trend, chop). Both False while ADX is unavailable."""
    point = frame.adx_at(index)
    if point is None:
        return False, False
    return point.adx >= adx_threshold, point.adx < adx_threshold


def evaluate_bar(
    frame: IndicatorFrame,
    index: int,
    close: float,
    config: SignalConfig,
) -> BarConditions:
    """Run all four filters for one bar."""
    bullish, bearish = trend_direction(frame, index, close)
    momentum_buy, momentum_sell = momentum_crossover(frame, index)
    strong, chop = trend_strength(frame, index, config.adx_threshold)

    return BarConditions(
        bullish_trend=bullish,
        bearish_trend=bearish,
        high_volatility=volatility_expansion(frame, index, config.volatility_factor),
        momentum_buy=momentum_buy,
        momentum_sell=momentum_sell,
        strong_trend=strong,
        chop=chop,
    )
