"""
Data Ingestion Service Implementation

Fetches kline windows from Binance. A batch fetch runs one request per
symbol concurrently; one symbol failing never affects the others.
"""

import asyncio
import logging
from typing import Optional

from rsigrid.core.config import settings
from rsigrid.core.symbols import normalize_symbol
from rsigrid.schemas.market import Candle, CandleRequest, Timeframe
from rsigrid.services.base import ExternalAPIError
from rsigrid.services.data_ingestion.interface import (
    DataIngestionServiceInterface,
    DataIngestionResult,
)
from rsigrid.services.data_ingestion.binance_adapter import (
    BinanceKlineClient,
    get_binance_client,
)

logger = logging.getLogger(__name__)


class DataIngestionService(DataIngestionServiceInterface):
    """
    Data Ingestion Service.

    Uses the shared Binance client unless one is injected.
    """

    def __init__(
        self,
        client: Optional[BinanceKlineClient] = None,
        max_concurrency: Optional[int] = None,
    ):
        self._client = client
        self._max_concurrency = max_concurrency or settings.max_concurrent_fetches

    @property
    def name(self) -> str:
        return "DataIngestionService"

    @property
    def client(self) -> BinanceKlineClient:
        return self._client or get_binance_client()

    async def execute(self, input_data: CandleRequest) -> list[Candle]:
        """Fetch one candle window (raises ExternalAPIError on failure)."""
        return await self.client.fetch_klines(
            symbol=input_data.symbol,
            timeframe=input_data.timeframe,
            limit=input_data.limit,
        )

    async def fetch_many(
        self, symbols: list[str], timeframe: Timeframe, limit: int
    ) -> DataIngestionResult:
        """Fetch candle windows for all symbols; failures are collected, not raised."""
        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def fetch_one(symbol: str) -> list[Candle]:
            async with semaphore:
                return await self.execute(
                    CandleRequest(symbol=symbol, timeframe=timeframe, limit=limit)
                )

        symbols = [normalize_symbol(s) for s in symbols]
        results = await asyncio.gather(
            *(fetch_one(symbol) for symbol in symbols),
            return_exceptions=True,
        )

        result = DataIngestionResult(candles={})
        for symbol, outcome in zip(symbols, results):
            if isinstance(outcome, ExternalAPIError):
                logger.warning(f"Klines fetch failed for {symbol}: {outcome.message}")
                result.errors[symbol] = outcome.message
            elif isinstance(outcome, Exception):
                logger.error(f"Unexpected error fetching {symbol}: {outcome!r}")
                result.errors[symbol] = str(outcome)
            else:
                if not outcome:
                    result.warnings.append(f"No klines returned for {symbol}")
                result.candles[symbol] = outcome

        return result

    async def health_check(self) -> bool:
        """Check the exchange answers a one-candle request."""
        try:
            await self.client.fetch_klines("BTCUSDT", Timeframe.M1, limit=1)
            return True
        except ExternalAPIError as e:
            logger.warning(f"Binance health check failed: {e}")
            return False


# Singleton instance
_service_instance: Optional[DataIngestionService] = None


def get_data_ingestion_service() -> DataIngestionService:
    """Get or create data ingestion service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = DataIngestionService()
    return _service_instance
