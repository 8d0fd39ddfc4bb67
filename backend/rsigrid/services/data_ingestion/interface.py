"""
Data Ingestion Service Interface

Defines the contract for the candle source layer.
"""

from abc import abstractmethod
from dataclasses import dataclass, field

from rsigrid.services.base import BaseService
from rsigrid.schemas.market import Candle, CandleRequest, Timeframe


@dataclass
class DataIngestionResult:
    """Candles per symbol plus the symbols that could not be fetched."""

    candles: dict[str, list[Candle]]
    errors: dict[str, str] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)


class DataIngestionServiceInterface(BaseService[CandleRequest, list[Candle]]):
    """
    Data Ingestion Service Contract.

    INPUT: CandleRequest
        - symbol: Trading pair
        - timeframe: Kline interval
        - limit: Number of candles

    OUTPUT: list[Candle]
        - Oldest first, at most `limit` items

    A failed fetch raises ExternalAPIError for single requests; batch
    fetches report it per symbol in DataIngestionResult.errors instead.
    """

    @property
    def name(self) -> str:
        return "DataIngestionService"

    @abstractmethod
    async def execute(self, input_data: CandleRequest) -> list[Candle]:
        """Fetch and normalize one candle window."""
        pass

    @abstractmethod
    async def fetch_many(
        self, symbols: list[str], timeframe: Timeframe, limit: int
    ) -> DataIngestionResult:
        """Fetch candle windows for several symbols concurrently."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check connectivity to the exchange."""
        pass
