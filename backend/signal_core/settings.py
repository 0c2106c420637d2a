"""Engine configuration loaded from environment variables.

Variables use the SIGNAL_ prefix, e.g. SIGNAL_EMA_FILTER_LENGTH=50.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    """Default signal parameters and runtime limits."""

    model_config = SettingsConfigDict(
        env_prefix="SIGNAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Signal parameters (defaults match the charting script)
    sensitivity: float = 2.0
    trend_length: int = 21
    ema_filter_length: int = 34
    atr_length: int = 14
    volatility_factor: float = 1.5
    macd_fast: int = 12
    macd_slow: int = 26
    macd_signal: int = 9
    adx_length: int = 14
    adx_threshold: float = 20.0

    # Input ceiling per invocation
    max_candles: int = 100_000

    log_level: str = "INFO"


@lru_cache
def get_settings() -> EngineSettings:
    """Get cached settings instance."""
    return EngineSettings()
