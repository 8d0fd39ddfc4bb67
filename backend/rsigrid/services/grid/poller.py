"""
Grid Poller for periodic indicator refresh.

Recomputes the configured grid on a fixed interval (60s by default).
Each cycle starts from freshly fetched candles; only the latest
GridSnapshot is kept between cycles.
"""

import asyncio
import logging
from typing import Optional

from rsigrid.core.config import settings
from rsigrid.schemas.indicators import GridRequest, GridSnapshot
from rsigrid.schemas.market import Timeframe
from rsigrid.services.grid.service import GridService, get_grid_service

logger = logging.getLogger(__name__)


class GridPoller:
    """
    Refreshes a grid in the background.

    Usage:
        poller = GridPoller(["BTCUSDT", "ETHUSDT"], Timeframe.M15)
        await poller.start()
        latest = poller.latest
        await poller.stop()
    """

    def __init__(
        self,
        symbols: Optional[list[str]] = None,
        timeframe: Optional[Timeframe] = None,
        interval_seconds: Optional[float] = None,
        grid_service: Optional[GridService] = None,
    ):
        self.symbols = list(symbols if symbols is not None else settings.symbols)
        self.timeframe = Timeframe(timeframe or settings.default_timeframe)
        self.interval_seconds = interval_seconds or settings.refresh_interval_seconds
        self._grid_service = grid_service
        self._task: Optional[asyncio.Task] = None
        self._running = False
        self._latest: Optional[GridSnapshot] = None
        self.cycles = 0

    @property
    def grid_service(self) -> GridService:
        return self._grid_service or get_grid_service()

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def latest(self) -> Optional[GridSnapshot]:
        return self._latest

    def build_request(self) -> GridRequest:
        return GridRequest(
            symbols=self.symbols,
            timeframe=self.timeframe,
            display_limit=settings.display_limit,
            rsi_period=settings.rsi_period,
            sma_period=settings.sma_period,
        )

    async def refresh(self) -> GridSnapshot:
        """Run one refresh cycle now."""
        grid = await self.grid_service.execute(self.build_request())
        self._latest = grid
        self.cycles += 1
        return grid

    async def start(self) -> bool:
        """Start the refresh loop."""
        if self._running:
            logger.warning("Grid poller already running")
            return True

        self._running = True
        self._task = asyncio.create_task(self._poll_loop())
        logger.info(
            f"Grid poller started: {len(self.symbols)} symbols, "
            f"{self.timeframe.value}, every {self.interval_seconds}s"
        )
        return True

    async def stop(self) -> None:
        """Stop the refresh loop."""
        self._running = False

        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        logger.info("Grid poller stopped")

    async def _poll_loop(self) -> None:
        while self._running:
            try:
                await self.refresh()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error(f"Grid refresh failed: {e}", exc_info=True)

            await asyncio.sleep(self.interval_seconds)


# Singleton instance
_grid_poller: Optional[GridPoller] = None


def get_grid_poller() -> GridPoller:
    """Get the grid poller singleton."""
    global _grid_poller
    if _grid_poller is None:
        _grid_poller = GridPoller()
    return _grid_poller


async def start_grid_poller() -> GridPoller:
    """Start the grid poller."""
    poller = get_grid_poller()
    await poller.start()
    return poller


async def stop_grid_poller() -> None:
    """Stop the grid poller."""
    global _grid_poller
    if _grid_poller:
        await _grid_poller.stop()
        _grid_poller = None
