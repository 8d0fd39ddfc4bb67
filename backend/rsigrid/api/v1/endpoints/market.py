"""
Market Data API Endpoints

Reference data for the dashboard: tradable pairs and kline intervals.
"""

from fastapi import APIRouter

from rsigrid.core.config import settings
from rsigrid.core.symbols import DEFAULT_SYMBOLS
from rsigrid.schemas.market import Timeframe

router = APIRouter()


@router.get("/symbols")
async def get_symbols():
    """
    Get the symbol lists.

    `default` is the built-in list; `configured` is what the poller refreshes.
    """
    return {
        "default": DEFAULT_SYMBOLS,
        "configured": settings.symbols,
        "count": len(settings.symbols),
    }


@router.get("/timeframes")
async def get_timeframes():
    """Get supported kline intervals."""
    return {
        "timeframes": [{"value": tf.value, "label": tf.value} for tf in Timeframe],
        "default": settings.default_timeframe,
    }
