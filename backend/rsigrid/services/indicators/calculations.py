"""
Technical Indicator Calculations

Pure Python/NumPy implementations of the grid indicators.
NO I/O - All math is deterministic.

Array functions (`rsi`, `sma`) return only computed values, never NaN
padding; the `*_series` wrappers attach candle open times to them.
"""

from functools import partial
from itertools import accumulate
from typing import Sequence

import numpy as np

from rsigrid.schemas.indicators import IndicatorPoint
from rsigrid.schemas.market import Candle
from rsigrid.services.base import NumericError

ENGINE_NAME = "IndicatorEngine"


def _require_period(period: int, label: str) -> None:
    if isinstance(period, bool) or not isinstance(period, int) or period < 1:
        raise NumericError(
            ENGINE_NAME,
            f"{label} period must be a positive integer",
            {"period": period},
        )


def mean(values: np.ndarray) -> float:
    """Arithmetic mean of a non-empty window."""
    if len(values) == 0:
        raise NumericError(ENGINE_NAME, "Cannot average an empty window")
    return float(np.mean(values))


# =============================================================================
# MOMENTUM INDICATORS
# =============================================================================


def _wilder_update(
    period: int, averages: tuple[float, float], sample: tuple[float, float]
) -> tuple[float, float]:
    avg_gain, avg_loss = averages
    gain, loss = sample
    return (
        (avg_gain * (period - 1) + gain) / period,
        (avg_loss * (period - 1) + loss) / period,
    )


def rsi_from_averages(avg_gain: float, avg_loss: float) -> float:
    """RSI for one step. No losses means RS is infinite and RSI is exactly 100."""
    rs = float("inf") if avg_loss == 0 else avg_gain / avg_loss
    return 100.0 - 100.0 / (1.0 + rs)


def rsi(closes: np.ndarray, period: int = 14) -> np.ndarray:
    """
    Relative Strength Index (Wilder smoothing).

    The first `period` gains/losses seed the averages; each later step emits
    RSI from the current averages and then folds in that step's gain/loss.
    Value k belongs to close index `period + 1 + k`.

    Returns:
        Array of length max(0, len(closes) - period - 1)
    """
    _require_period(period, "RSI")
    closes = np.asarray(closes, dtype=float)

    count = len(closes) - period - 1
    if count <= 0:
        return np.empty(0)

    # Calculate price changes
    deltas = np.diff(closes)

    # Separate gains and losses
    gains = np.where(deltas > 0, deltas, 0.0)
    losses = np.where(deltas < 0, -deltas, 0.0)

    # First average
    seed = (mean(gains[:period]), mean(losses[:period]))

    # Running averages; the last change would only feed a step past the window
    samples = zip(gains[period:-1].tolist(), losses[period:-1].tolist())
    states = accumulate(samples, partial(_wilder_update, period), initial=seed)

    return np.array([rsi_from_averages(g, l) for g, l in states])


# =============================================================================
# MOVING AVERAGES
# =============================================================================


def sma(data: np.ndarray, period: int = 14) -> np.ndarray:
    """
    Simple Moving Average over full windows only.

    Returns:
        Array of length max(0, len(data) - period + 1)
    """
    _require_period(period, "SMA")
    data = np.asarray(data, dtype=float)

    if len(data) < period:
        return np.empty(0)

    return np.array(
        [mean(data[i - period + 1 : i + 1]) for i in range(period - 1, len(data))]
    )


# =============================================================================
# TIME-ALIGNED SERIES
# =============================================================================


def rsi_series(candles: Sequence[Candle], period: int = 14) -> list[IndicatorPoint]:
    """RSI points stamped with the open time of the candle each value closes on."""
    values = rsi(np.array([c.close for c in candles], dtype=float), period)
    return [
        IndicatorPoint(time=candle.open_time, value=float(value))
        for candle, value in zip(candles[period + 1 :], values)
    ]


def sma_series(
    series: Sequence[IndicatorPoint], period: int = 14
) -> list[IndicatorPoint]:
    """SMA of an indicator series; each point takes the time of its window's last point."""
    values = sma(np.array([p.value for p in series], dtype=float), period)
    return [
        IndicatorPoint(time=point.time, value=float(value))
        for point, value in zip(series[period - 1 :], values)
    ]


def trim(series: Sequence[IndicatorPoint], limit: int) -> list[IndicatorPoint]:
    """Keep the newest `limit` points (order and timestamps untouched)."""
    if limit <= 0:
        return []
    return list(series[-limit:])
