"""Data models for the signal engine."""

from signal_core.models.candle import Candle
from signal_core.models.config import SignalConfig
from signal_core.models.frame import AdxPoint, IndicatorFrame, MacdPoint
from signal_core.models.signal import SignalRecord

__all__ = [
    "Candle",
    "SignalConfig",
    "AdxPoint",
    "IndicatorFrame",
    "MacdPoint",
    "SignalRecord",
]
