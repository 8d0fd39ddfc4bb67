"""
Indicator Engine Service

CONTRACT:
    Input:  Candle batch (oldest first)
    Output: SymbolSnapshot

RESPONSIBILITIES:
    - Calculate RSI with Wilder smoothing
    - Calculate the SMA of the RSI series
    - Keep every point aligned to its source candle's open time
    - Trim both series to the display window
    - Report latest price and volume

PURE PYTHON - No I/O.
Uses NumPy for calculations.
All math is deterministic and reproducible.
"""

from rsigrid.services.indicators.interface import IndicatorServiceInterface
from rsigrid.services.indicators.service import (
    IndicatorService,
    compute_snapshot,
    get_indicator_service,
    kline_limit,
)

__all__ = [
    "IndicatorServiceInterface",
    "IndicatorService",
    "compute_snapshot",
    "get_indicator_service",
    "kline_limit",
]
