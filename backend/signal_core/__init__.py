"""Technical signal engine.

Pure business logic: turns a finished OHLC candle history into per-bar
buy/sell signals with a 0-4 confidence score. No database, network or
file access happens here except in the CLI (``python -m signal_core``).
"""

from signal_core.errors import (
    InputTooLargeError,
    InsufficientDataError,
    InvalidConfigError,
    MalformedCandleError,
    SignalEngineError,
)
from signal_core.models import Candle, SignalConfig, SignalRecord
from signal_core.signal_generator import (
    SignalGenerator,
    actionable_signals,
    compute_indicator_series,
    compute_signals,
    latest_signals,
)

__all__ = [
    "Candle",
    "SignalConfig",
    "SignalRecord",
    "SignalGenerator",
    "compute_signals",
    "compute_indicator_series",
    "actionable_signals",
    "latest_signals",
    "SignalEngineError",
    "InvalidConfigError",
    "MalformedCandleError",
    "InsufficientDataError",
    "InputTooLargeError",
]
