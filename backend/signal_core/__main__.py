"""CLI entry point for the signal engine.

Reads a finished candle history from a CSV or JSON file, computes the
signals and prints them as a console table or JSON.

Usage:
    python -m signal_core candles.csv
    python -m signal_core candles.json --format json --only-signals
    python -m signal_core candles.csv --ema-filter-length 50 --adx-threshold 25 --last 10
"""

import argparse
import logging
import sys

from pydantic import ValidationError

from signal_core.errors import SignalEngineError
from signal_core.loaders import dump_records, load_candles
from signal_core.models import SignalConfig, SignalRecord
from signal_core.settings import get_settings
from signal_core.signal_generator import (
    SignalGenerator,
    actionable_signals,
    latest_signals,
)

logger = logging.getLogger("signal_core")

# (flag, config field, type)
CONFIG_FLAGS = [
    ("--sensitivity", "sensitivity", float),
    ("--trend-length", "trend_length", int),
    ("--ema-filter-length", "ema_filter_length", int),
    ("--atr-length", "atr_length", int),
    ("--volatility-factor", "volatility_factor", float),
    ("--macd-fast", "macd_fast", int),
    ("--macd-slow", "macd_slow", int),
    ("--macd-signal", "macd_signal", int),
    ("--adx-length", "adx_length", int),
    ("--adx-threshold", "adx_threshold", float),
]


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="python -m signal_core",
        description="Compute trend/volatility/momentum signals from OHLC candles",
    )
    parser.add_argument("candles", help="Candle file (.csv or .json)")
    parser.add_argument(
        "--format", choices=("table", "json"), default="table",
        help="Output format (default: table)",
    )
    parser.add_argument(
        "--only-signals", action="store_true",
        help="Print only bars with a buy or sell signal",
    )
    parser.add_argument(
        "--last", type=int, default=None, metavar="N",
        help="Print only the last N records",
    )
    parser.add_argument(
        "--max-candles", type=int, default=None,
        help="Reject inputs longer than this (default: SIGNAL_MAX_CANDLES)",
    )
    for flag, field, type_ in CONFIG_FLAGS:
        parser.add_argument(flag, dest=field, type=type_, default=None)
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def print_table(records: list[SignalRecord]) -> None:
    """Print records as a fixed-width console table."""
    print(
        f"  {'Timestamp':<26} {'Signal':>6} {'Conf':>4} {'EMA':>12} "
        f"{'ADX':>7} {'ATR':>10}  Filters"
    )
    print("-" * 90)
    for r in records:
        flags = [
            name for name, on in (
                ("bull", r.bullish_trend),
                ("bear", r.bearish_trend),
                ("vol", r.high_volatility),
                ("mom+", r.momentum_buy),
                ("mom-", r.momentum_sell),
                ("chop", r.chop),
            ) if on
        ]
        print(
            f"  {str(r.timestamp):<26} {(r.direction or '-').upper():>6} {r.confidence:>4} "
            f"{_fmt(r.ema_filter, 12)} {_fmt(r.adx, 7, 2)} {_fmt(r.atr, 10)}  {','.join(flags)}"
        )
    print("-" * 90)
    print(f"  {len(records)} records, {len(actionable_signals(records))} signals")


def _fmt(value: float | None, width: int, digits: int = 5) -> str:
    if value is None:
        return f"{'-':>{width}}"
    return f"{value:>{width}.{digits}f}"


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = get_settings()

    level = logging.DEBUG if args.verbose else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )

    overrides = {field: getattr(args, field) for _, field, _ in CONFIG_FLAGS}
    try:
        config = SignalConfig.from_settings(settings, **overrides)
        candles = load_candles(args.candles)
        generator = SignalGenerator(
            config,
            max_candles=args.max_candles or settings.max_candles,
        )
        records = generator.generate(candles)
    except (SignalEngineError, ValidationError, ValueError, OSError) as e:
        logger.error(f"Signal computation failed: {e}")
        return 1

    if args.only_signals:
        records = actionable_signals(records)
    if args.last is not None:
        records = latest_signals(records, args.last)

    if args.format == "json":
        sys.stdout.write(dump_records(records).decode("utf-8") + "\n")
    else:
        print_table(records)
    return 0


if __name__ == "__main__":
    sys.exit(main())
