"""Exceptions raised by the signal engine.

All of them derive from SignalEngineError rather than ValueError so that
they pass through pydantic validators unchanged instead of being folded
into a ValidationError.
"""


class SignalEngineError(Exception):
    """Base class for signal engine errors."""


class InvalidConfigError(SignalEngineError):
    """A configured period or factor is not strictly positive."""

    def __init__(self, field: str, value):
        self.field = field
        self.value = value
        super().__init__(f"{field} must be > 0, got {value!r}")


class MalformedCandleError(SignalEngineError):
    """A candle breaks the OHLC invariant or carries non-finite numbers."""

    def __init__(self, message: str, index: int | None = None):
        self.index = index
        if index is not None:
            message = f"candle #{index}: {message}"
        super().__init__(message)


class InsufficientDataError(SignalEngineError):
    """Fewer candles than the longest indicator window needs.

    compute_signals() never raises this; it returns an empty list instead.
    Callers that prefer an exception use SignalGenerator.require_enough_data().
    """

    def __init__(self, available: int, required: int):
        self.available = available
        self.required = required
        super().__init__(
            f"need at least {required} candles, got {available}"
        )


class InputTooLargeError(SignalEngineError):
    """More candles than the configured ceiling."""

    def __init__(self, available: int, limit: int):
        self.available = available
        self.limit = limit
        super().__init__(f"{available} candles exceeds limit of {limit}")
