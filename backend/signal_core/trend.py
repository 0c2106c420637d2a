"""Directional bias estimator.

Rolling mean of candle bodies over a trailing window that ends one bar
before the bar being evaluated. This is a simple moving mean, not
Wilder's recursive average, even though it stands in for one.
"""

from typing import Sequence

import numpy as np


def rolling_mean_diff(
    opens: Sequence[float],
    closes: Sequence[float],
    length: int,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Mean of (close - open) and of (open - close) over bars [i - length, i).

    Both means are computed independently rather than one being the
    negation of the other. Bars with fewer than ``length`` predecessors
    get 0.0 (no bias), not NaN.

    Args:
        opens: Sequence of open prices
        closes: Sequence of close prices
        length: Window size

    Returns:
        Tuple of (close_open_mean, open_close_mean) arrays
    """
    o = np.asarray(opens, dtype=np.float64)
    c = np.asarray(closes, dtype=np.float64)
    n = len(o)

    close_open = np.zeros(n)
    open_close = np.zeros(n)
    if n <= length:
        return close_open, open_close

    close_open_diff = c - o
    open_close_diff = o - c
    for i in range(length, n):
        close_open[i] = np.sum(close_open_diff[i - length : i]) / length
        open_close[i] = np.sum(open_close_diff[i - length : i]) / length

    return close_open, open_close
