"""Candle loading for the command line entry point.

CSV files are read with pandas, JSON files with orjson. The engine
itself never touches files; library callers pass candles directly.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import orjson
import pandas as pd

from signal_core.models import SignalRecord

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("timestamp", "open", "high", "low", "close")


def load_candles_csv(path: Path) -> list[dict[str, Any]]:
    """Read rows with timestamp/open/high/low/close[/volume] columns."""
    df = pd.read_csv(path)
    df.columns = [str(c).strip().lower() for c in df.columns]

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"{path}: missing columns {', '.join(missing)}")

    columns = list(REQUIRED_COLUMNS)
    if "volume" in df.columns:
        columns.append("volume")
    df = df[columns].copy()
    if "volume" in df.columns:
        df["volume"] = df["volume"].astype("float64")

    rows = df.to_dict(orient="records")
    for row in rows:
        # NaN volume means the column was blank for that row
        if "volume" in row and pd.isna(row["volume"]):
            row["volume"] = None
    logger.info(f"Loaded {len(rows)} candles from {path}")
    return rows


def load_candles_json(path: Path) -> list[dict[str, Any]]:
    """Read a JSON array of candle objects (or {"candles": [...]})."""
    data = orjson.loads(path.read_bytes())
    if isinstance(data, dict):
        data = data.get("candles", [])
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of candles")
    logger.info(f"Loaded {len(data)} candles from {path}")
    return data


def load_candles(path: str | Path) -> list[dict[str, Any]]:
    """Pick the loader by file extension (.csv or .json)."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return load_candles_csv(path)
    if suffix == ".json":
        return load_candles_json(path)
    raise ValueError(f"Unsupported candle file type: {path.suffix or '(none)'}")


def dump_records(records: list[SignalRecord]) -> bytes:
    """Serialize records to a JSON array using orjson."""
    return orjson.dumps(
        [r.model_dump(mode="json") for r in records],
        option=orjson.OPT_INDENT_2,
    )
