"""
CONTRACT 1: Candle Source

Input: CandleRequest
Output: list[Candle]

This module describes raw kline data fetched from the Binance public API,
normalized into a standard format.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# ENUMS
# =============================================================================


class Timeframe(str, Enum):
    M1 = "1m"
    M3 = "3m"
    M5 = "5m"
    M15 = "15m"
    M30 = "30m"
    H1 = "1h"
    H2 = "2h"
    H4 = "4h"
    H8 = "8h"
    D1 = "1d"
    D3 = "3d"
    W1 = "1w"


# Binance rejects klines requests above this limit
MAX_KLINE_LIMIT = 1000


# =============================================================================
# INPUT: CandleRequest
# =============================================================================


class CandleRequest(BaseModel):
    """
    Request for a candle window.
    Sent by: Grid Service / API
    Received by: Data Ingestion Service
    """

    symbol: str = Field(..., min_length=1, description="Trading pair (e.g., 'BTCUSDT')")
    timeframe: Timeframe = Field(
        default=Timeframe.M15,
        description="Kline interval",
    )
    limit: int = Field(
        default=95,
        ge=1,
        le=MAX_KLINE_LIMIT,
        description="Number of candles to fetch (newest last)",
    )


# =============================================================================
# OUTPUT: Candle
# =============================================================================


class Candle(BaseModel):
    """Single kline (OHLCV) observation. Immutable once received."""

    model_config = ConfigDict(frozen=True)

    open_time: int = Field(..., description="Kline open time, epoch milliseconds")
    open: float
    high: float
    low: float
    close: float
    volume: float = Field(..., ge=0)
    close_time: Optional[int] = None
