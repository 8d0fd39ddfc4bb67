"""
Indicator API Endpoints

Endpoints for RSI / SMA-of-RSI snapshots of a single symbol.
"""

import logging

from fastapi import APIRouter, HTTPException, Query

from rsigrid.core.config import settings
from rsigrid.core.symbols import normalize_symbol
from rsigrid.schemas.market import Timeframe, CandleRequest
from rsigrid.schemas.indicators import SymbolSnapshot
from rsigrid.services.base import ExternalAPIError, NumericError, ValidationError
from rsigrid.services.cache.redis_client import get_snapshot_cache
from rsigrid.services.data_ingestion import get_data_ingestion_service
from rsigrid.services.indicators import get_indicator_service, kline_limit

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{symbol}", response_model=SymbolSnapshot)
async def get_indicators(
    symbol: str,
    timeframe: Timeframe | None = None,
    limit: int = Query(default=settings.display_limit, ge=1, le=500),
    rsi_period: int = Query(default=settings.rsi_period, ge=1, le=200),
    sma_period: int = Query(default=settings.sma_period, ge=1, le=200),
):
    """
    Get the RSI and SMA-of-RSI series for a symbol.

    Returns:
        - rsi: up to `limit` RSI points, oldest first
        - sma: up to `limit` SMA-of-RSI points
        - price / volume of the latest candle

    An upstream failure is served as the empty snapshot (zero price and
    volume, empty series), the same shape as "not enough history".
    """
    symbol = normalize_symbol(symbol)
    timeframe = timeframe or Timeframe(settings.default_timeframe)
    if not symbol:
        raise HTTPException(status_code=400, detail="Symbol must not be blank")

    try:
        candle_limit = kline_limit(limit, rsi_period)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)

    data_service = get_data_ingestion_service()
    try:
        candles = await data_service.execute(
            CandleRequest(symbol=symbol, timeframe=timeframe, limit=candle_limit)
        )
    except ExternalAPIError as e:
        logger.warning(f"Serving empty snapshot for {symbol}: {e.message}")
        return SymbolSnapshot.empty()

    indicator_service = get_indicator_service()
    try:
        snapshot = await indicator_service.calculate_for_symbol(
            candles,
            rsi_period=rsi_period,
            sma_period=sma_period,
            display_limit=limit,
        )
    except NumericError as e:
        logger.error(f"Indicator calculation failed for {symbol}: {e}")
        raise HTTPException(
            status_code=500, detail=f"Indicator calculation failed: {e.message}"
        )

    # Cache keys carry no parameters, so only default-shaped snapshots go in
    if (limit, rsi_period, sma_period) == (
        settings.display_limit,
        settings.rsi_period,
        settings.sma_period,
    ):
        await get_snapshot_cache().set_snapshot(symbol, timeframe, snapshot)

    return snapshot


@router.get("/{symbol}/cached", response_model=SymbolSnapshot)
async def get_cached_indicators(
    symbol: str,
    timeframe: Timeframe | None = None,
):
    """
    Get the snapshot computed by the last refresh cycle, without fetching.
    """
    timeframe = timeframe or Timeframe(settings.default_timeframe)
    snapshot = await get_snapshot_cache().get_snapshot(normalize_symbol(symbol), timeframe)
    if snapshot is None:
        raise HTTPException(status_code=404, detail=f"No cached snapshot for {symbol}")
    return snapshot
