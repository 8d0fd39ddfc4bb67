"""
RSIGrid Schema Contracts

This module defines all JSON contracts between system components.
These are the authoritative interfaces - all modules must conform to these schemas.
"""

from rsigrid.schemas.market import (
    Timeframe,
    CandleRequest,
    Candle,
    MAX_KLINE_LIMIT,
)
from rsigrid.schemas.indicators import (
    IndicatorPoint,
    SymbolSnapshot,
    GridRequest,
    GridSnapshot,
)

__all__ = [
    # Market
    "Timeframe",
    "CandleRequest",
    "Candle",
    "MAX_KLINE_LIMIT",
    # Indicators
    "IndicatorPoint",
    "SymbolSnapshot",
    "GridRequest",
    "GridSnapshot",
]
