"""
Grid Service Implementation

Fetches candles for every requested symbol, runs the indicator engine on
each batch and assembles one GridSnapshot. A symbol whose fetch fails is
served as an empty snapshot so the dashboard has a single "no data" shape.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from rsigrid.core.config import settings
from rsigrid.core.symbols import unique_symbols
from rsigrid.schemas.indicators import GridRequest, GridSnapshot, SymbolSnapshot
from rsigrid.services.base import BaseService
from rsigrid.services.cache.redis_client import SnapshotCache, get_snapshot_cache
from rsigrid.services.data_ingestion.interface import DataIngestionServiceInterface
from rsigrid.services.data_ingestion.service import get_data_ingestion_service
from rsigrid.services.indicators.service import compute_snapshot, kline_limit

logger = logging.getLogger(__name__)


class GridService(BaseService[GridRequest, GridSnapshot]):
    """
    Grid Service.

    INPUT: GridRequest
    OUTPUT: GridSnapshot (one SymbolSnapshot per requested symbol)
    """

    def __init__(
        self,
        data_service: Optional[DataIngestionServiceInterface] = None,
        cache: Optional[SnapshotCache] = None,
    ):
        self._data_service = data_service
        self._cache = cache

    @property
    def name(self) -> str:
        return "GridService"

    @property
    def data_service(self) -> DataIngestionServiceInterface:
        return self._data_service or get_data_ingestion_service()

    @property
    def cache(self) -> SnapshotCache:
        return self._cache or get_snapshot_cache()

    async def execute(self, input_data: GridRequest) -> GridSnapshot:
        """Compute snapshots for all symbols in the request."""
        symbols = unique_symbols(input_data.symbols)
        updated_at = datetime.now(timezone.utc)

        if not symbols:
            return GridSnapshot(
                timeframe=input_data.timeframe, symbols={}, updated_at=updated_at
            )

        limit = kline_limit(input_data.display_limit, input_data.rsi_period)
        fetched = await self.data_service.fetch_many(
            symbols, input_data.timeframe, limit
        )
        for warning in fetched.warnings:
            logger.info(warning)

        snapshots: dict[str, SymbolSnapshot] = {}
        for symbol in symbols:
            candles = fetched.candles.get(symbol)
            if candles is None:
                snapshots[symbol] = SymbolSnapshot.empty()
                continue
            snapshots[symbol] = compute_snapshot(
                candles,
                rsi_period=input_data.rsi_period,
                sma_period=input_data.sma_period,
                display_limit=input_data.display_limit,
            )

        grid = GridSnapshot(
            timeframe=input_data.timeframe,
            symbols=snapshots,
            errors=[s for s in symbols if s in fetched.errors],
            updated_at=updated_at,
        )

        logger.info(
            f"Grid {grid.timeframe.value}: {len(symbols) - len(grid.errors)}/"
            f"{len(symbols)} symbols fetched"
        )
        # Cache keys carry no parameters, so only default-shaped grids go in
        if (
            input_data.display_limit,
            input_data.rsi_period,
            input_data.sma_period,
        ) == (settings.display_limit, settings.rsi_period, settings.sma_period):
            await self.cache.set_grid(grid)
        return grid

    async def health_check(self) -> bool:
        return await self.data_service.health_check()


# Singleton instance
_service_instance: Optional[GridService] = None


def get_grid_service() -> GridService:
    """Get or create grid service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = GridService()
    return _service_instance
