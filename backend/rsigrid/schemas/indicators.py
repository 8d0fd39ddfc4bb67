"""
CONTRACT 2: Indicator Engine

Input: list[Candle]
Output: SymbolSnapshot

This module describes the RSI / SMA-of-RSI series handed to the dashboard.
Pure Python/NumPy - all math is deterministic.
"""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

from rsigrid.schemas.market import Timeframe


# =============================================================================
# SERIES
# =============================================================================


class IndicatorPoint(BaseModel):
    """
    One indicator value.

    `time` is the open time of the candle the value was derived from,
    so RSI and SMA points can be lined up against the source klines.
    """

    model_config = ConfigDict(frozen=True)

    time: int
    value: float


# =============================================================================
# OUTPUT: SymbolSnapshot
# =============================================================================


class SymbolSnapshot(BaseModel):
    """
    Indicator output for one symbol.
    Returned by: Indicator Engine
    Consumed by: Grid Service, API, Cache
    """

    model_config = ConfigDict(frozen=True)

    rsi: list[IndicatorPoint] = Field(default_factory=list, description="RSI series, oldest first")
    sma: list[IndicatorPoint] = Field(default_factory=list, description="SMA of the RSI series")
    price: float = Field(default=0.0, description="Close of the latest candle")
    volume: float = Field(default=0.0, description="Volume of the latest candle")

    @classmethod
    def empty(cls) -> "SymbolSnapshot":
        """The uniform 'no data' snapshot."""
        return cls()

    @property
    def has_data(self) -> bool:
        return bool(self.rsi)


# =============================================================================
# GRID
# =============================================================================


class GridRequest(BaseModel):
    """
    Request for a batch of symbol snapshots.
    Sent by: Frontend / Grid Poller
    Received by: Grid Service
    """

    symbols: list[str] = Field(
        default_factory=list,
        max_length=500,
        description="Trading pairs to compute (e.g., ['BTCUSDT', 'ETHUSDT'])",
    )
    timeframe: Timeframe = Field(default=Timeframe.M15)
    display_limit: int = Field(default=80, ge=1, le=500)
    rsi_period: int = Field(default=14, ge=1, le=200)
    sma_period: int = Field(default=14, ge=1, le=200)


class GridSnapshot(BaseModel):
    """Snapshots for every requested symbol, in request order."""

    timeframe: Timeframe
    symbols: dict[str, SymbolSnapshot]
    errors: list[str] = Field(
        default_factory=list,
        description="Symbols whose fetch failed (served as empty snapshots)",
    )
    updated_at: datetime

    class Config:
        json_schema_extra = {
            "example": {
                "timeframe": "15m",
                "symbols": {
                    "BTCUSDT": {
                        "rsi": [{"time": 1717000000000, "value": 56.2}],
                        "sma": [{"time": 1717000000000, "value": 51.8}],
                        "price": 67250.5,
                        "volume": 182.4,
                    }
                },
                "errors": [],
                "updated_at": "2024-05-29T16:26:40Z",
            }
        }
