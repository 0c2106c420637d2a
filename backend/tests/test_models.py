"""Tests for candle, config and signal models."""

import math

import numpy as np
import pytest
from pydantic import ValidationError

from signal_core.errors import InvalidConfigError, MalformedCandleError
from signal_core.models import (
    AdxPoint,
    Candle,
    IndicatorFrame,
    MacdPoint,
    SignalConfig,
    SignalRecord,
)
from signal_core.settings import EngineSettings


class TestCandle:
    """Tests for Candle validation."""

    def test_valid_candle(self):
        candle = Candle(timestamp=1700000000000, open=1.1, high=1.2, low=1.0, close=1.15)

        assert candle.is_bullish
        assert not candle.is_bearish
        assert candle.body == pytest.approx(0.05)
        assert candle.range_size == pytest.approx(0.2)
        assert candle.volume is None

    def test_timestamp_passed_through(self):
        candle = Candle(timestamp="2024-01-01T00:00:00Z", open=1, high=1, low=1, close=1)
        assert candle.timestamp == "2024-01-01T00:00:00Z"

    def test_low_above_open_rejected(self):
        with pytest.raises(MalformedCandleError, match="low <= open/close <= high"):
            Candle(timestamp=0, open=1.0, high=1.2, low=1.05, close=1.1)

    def test_close_above_high_rejected(self):
        with pytest.raises(MalformedCandleError):
            Candle(timestamp=0, open=1.0, high=1.2, low=0.9, close=1.3)

    @pytest.mark.parametrize("field", ["open", "high", "low", "close"])
    def test_non_finite_rejected(self, field):
        values = {"open": 1.0, "high": 1.0, "low": 1.0, "close": 1.0}
        values[field] = math.nan
        with pytest.raises(MalformedCandleError, match="not finite"):
            Candle(timestamp=0, **values)

    def test_infinite_volume_rejected(self):
        with pytest.raises(MalformedCandleError):
            Candle(timestamp=0, open=1, high=1, low=1, close=1, volume=math.inf)

    def test_non_numeric_is_validation_error(self):
        with pytest.raises(ValidationError):
            Candle(timestamp=0, open="abc", high=1, low=1, close=1)

    def test_frozen(self):
        candle = Candle(timestamp=0, open=1, high=1, low=1, close=1)
        with pytest.raises(ValidationError):
            candle.close = 2.0


class TestSignalConfig:
    """Tests for SignalConfig."""

    def test_defaults(self):
        config = SignalConfig()

        assert config.sensitivity == 2.0
        assert config.trend_length == 21
        assert config.ema_filter_length == 34
        assert config.atr_length == 14
        assert config.volatility_factor == 1.5
        assert (config.macd_fast, config.macd_slow, config.macd_signal) == (12, 26, 9)
        assert config.adx_length == 14
        assert config.adx_threshold == 20.0

    def test_warmup_bars(self):
        assert SignalConfig().warmup_bars == 33
        assert SignalConfig().min_candles == 34
        assert SignalConfig(adx_length=50).warmup_bars == 49
        # trend_length does not extend the warm-up
        assert SignalConfig(trend_length=100).warmup_bars == 33

    @pytest.mark.parametrize(
        "field,value",
        [
            ("ema_filter_length", 0),
            ("atr_length", -1),
            ("macd_slow", 0),
            ("volatility_factor", 0.0),
            ("adx_threshold", -5.0),
            ("sensitivity", 0.0),
        ],
    )
    def test_non_positive_rejected(self, field, value):
        with pytest.raises(InvalidConfigError) as exc_info:
            SignalConfig(**{field: value})

        assert exc_info.value.field == field
        assert field in str(exc_info.value)

    def test_no_cross_field_validation(self):
        config = SignalConfig(macd_fast=30, macd_slow=10)
        assert config.macd_fast == 30

    def test_frozen(self):
        config = SignalConfig()
        with pytest.raises(ValidationError):
            config.atr_length = 5

    def test_from_settings(self):
        settings = EngineSettings(ema_filter_length=50, adx_threshold=25.0)
        config = SignalConfig.from_settings(settings, atr_length=10, macd_fast=None)

        assert config.ema_filter_length == 50
        assert config.adx_threshold == 25.0
        assert config.atr_length == 10
        assert config.macd_fast == 12

    def test_settings_from_env(self, monkeypatch):
        monkeypatch.setenv("SIGNAL_TREND_LENGTH", "30")
        assert EngineSettings().trend_length == 30


class TestSignalRecord:
    """Tests for SignalRecord."""

    def test_direction(self):
        buy = SignalRecord(timestamp=1, buy_signal=True, sell_signal=False, confidence=4)
        sell = SignalRecord(timestamp=1, buy_signal=False, sell_signal=True, confidence=4)
        flat = SignalRecord(timestamp=1, buy_signal=False, sell_signal=False, confidence=0)

        assert buy.direction == "buy"
        assert sell.direction == "sell"
        assert flat.direction is None

    def test_buy_and_sell_exclusive(self):
        with pytest.raises(ValidationError, match="mutually exclusive"):
            SignalRecord(timestamp=1, buy_signal=True, sell_signal=True, confidence=4)

    @pytest.mark.parametrize("confidence", [-1, 5])
    def test_confidence_bounds(self, confidence):
        with pytest.raises(ValidationError):
            SignalRecord(
                timestamp=1, buy_signal=False, sell_signal=False, confidence=confidence
            )


class TestIndicatorFrame:
    """Tests for IndicatorFrame accessors."""

    def _frame(self) -> IndicatorFrame:
        nan = np.nan
        return IndicatorFrame(
            ema_filter=np.array([nan, 1.0, 2.0]),
            atr=np.array([nan, nan, 0.5]),
            true_range=np.array([nan, 0.4, 0.6]),
            adx=np.array([nan, nan, 22.0]),
            macd_line=np.array([nan, 0.1, 0.2]),
            macd_signal=np.array([nan, nan, 0.15]),
            macd_histogram=np.array([nan, nan, 0.05]),
            close_open_mean=np.zeros(3),
            open_close_mean=np.zeros(3),
        )

    def test_unavailable_is_none(self):
        frame = self._frame()

        assert frame.ema_at(0) is None
        assert frame.atr_at(1) is None
        assert frame.adx_at(1) is None
        assert frame.macd_at(0) is None

    def test_out_of_range_is_none(self):
        frame = self._frame()

        assert frame.ema_at(-1) is None
        assert frame.true_range_at(3) is None
        assert frame.macd_at(-1) is None

    def test_tagged_points(self):
        frame = self._frame()

        assert frame.adx_at(2) == AdxPoint(adx=22.0)
        assert frame.macd_at(1) == MacdPoint(line=0.1, signal=None, histogram=None)
        assert frame.macd_at(2) == MacdPoint(line=0.2, signal=0.15, histogram=0.05)

    def test_series_read_only(self):
        frame = self._frame()
        with pytest.raises(ValueError):
            frame.atr[2] = 1.0

    def test_to_series(self):
        series = self._frame().to_series()

        assert series["ema_filter"] == [None, 1.0, 2.0]
        assert series["adx"] == [None, None, 22.0]
        assert set(series) == {
            "ema_filter", "atr", "true_range", "adx",
            "macd_line", "macd_signal", "macd_histogram",
            "close_open_mean", "open_close_mean",
        }
