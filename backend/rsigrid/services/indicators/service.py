"""
Indicator Engine Service Implementation

Turns a candle batch into RSI / SMA-of-RSI series and a price snapshot.
Pure Python/NumPy calculations, no I/O and no shared state.
"""

import logging
from typing import Optional, Sequence

from rsigrid.core.config import settings
from rsigrid.schemas.market import Candle, MAX_KLINE_LIMIT
from rsigrid.schemas.indicators import SymbolSnapshot
from rsigrid.services.base import ValidationError
from rsigrid.services.indicators.interface import IndicatorServiceInterface
from rsigrid.services.indicators.calculations import (
    rsi_series,
    sma_series,
    trim,
)

logger = logging.getLogger(__name__)


def kline_limit(display_limit: int, rsi_period: int) -> int:
    """
    Candles to request so that `display_limit` RSI points exist.

    One candle is lost to differencing and `rsi_period` changes seed the
    averages, hence L + P + 1.
    """
    if display_limit < 1:
        raise ValidationError(
            "IndicatorService",
            "display_limit must be at least 1",
            {"display_limit": display_limit},
        )
    limit = display_limit + rsi_period + 1
    if limit > MAX_KLINE_LIMIT:
        raise ValidationError(
            "IndicatorService",
            f"display_limit + rsi_period + 1 exceeds {MAX_KLINE_LIMIT} candles",
            {"display_limit": display_limit, "rsi_period": rsi_period},
        )
    return limit


def compute_snapshot(
    candles: Sequence[Candle],
    rsi_period: int = 14,
    sma_period: int = 14,
    display_limit: int = 80,
) -> SymbolSnapshot:
    """
    Compute the indicator snapshot for one candle batch.

    Both series are computed over the full batch and only then trimmed to the
    newest `display_limit` points, so the SMA warm-up uses RSI values that
    are not displayed. Price and volume always come from the last candle.
    """
    if not candles:
        return SymbolSnapshot.empty()

    rsi_points = rsi_series(candles, rsi_period)
    sma_points = sma_series(rsi_points, sma_period)
    latest = candles[-1]

    return SymbolSnapshot(
        rsi=trim(rsi_points, display_limit),
        sma=trim(sma_points, display_limit),
        price=latest.close,
        volume=latest.volume,
    )


class IndicatorService(IndicatorServiceInterface):
    """
    Indicator Engine Service.

    Periods default to the configured values but can be overridden per call.
    All calculations are deterministic and reproducible.
    """

    def __init__(
        self,
        rsi_period: Optional[int] = None,
        sma_period: Optional[int] = None,
        display_limit: Optional[int] = None,
    ):
        self.rsi_period = rsi_period if rsi_period is not None else settings.rsi_period
        self.sma_period = sma_period if sma_period is not None else settings.sma_period
        self.display_limit = (
            display_limit if display_limit is not None else settings.display_limit
        )

    @property
    def name(self) -> str:
        return "IndicatorService"

    async def execute(
        self, input_data: dict[str, Sequence[Candle]]
    ) -> dict[str, SymbolSnapshot]:
        """Calculate snapshots for all symbols in the batch."""
        results = {}

        for symbol, candles in input_data.items():
            results[symbol] = await self.calculate_for_symbol(candles)

        return results

    async def calculate_for_symbol(
        self,
        candles: Sequence[Candle],
        rsi_period: Optional[int] = None,
        sma_period: Optional[int] = None,
        display_limit: Optional[int] = None,
    ) -> SymbolSnapshot:
        """Calculate the snapshot for a single symbol."""
        if rsi_period is None:
            rsi_period = self.rsi_period
        if sma_period is None:
            sma_period = self.sma_period
        if display_limit is None:
            display_limit = self.display_limit
        if display_limit < 1:
            raise ValidationError(
                self.name,
                "display_limit must be at least 1",
                {"display_limit": display_limit},
            )

        snapshot = compute_snapshot(
            candles,
            rsi_period=rsi_period,
            sma_period=sma_period,
            display_limit=display_limit,
        )

        if candles and not snapshot.has_data:
            logger.debug(
                f"Insufficient history: {len(candles)} candles for RSI period {rsi_period}"
            )
        return snapshot

    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        return True


# Singleton instance
_service_instance: Optional[IndicatorService] = None


def get_indicator_service() -> IndicatorService:
    """Get or create indicator service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = IndicatorService()
    return _service_instance
