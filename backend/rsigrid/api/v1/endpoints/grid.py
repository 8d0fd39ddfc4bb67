"""
Grid API Endpoints

Batch snapshots for the dashboard grid.
"""

from fastapi import APIRouter, HTTPException

from rsigrid.schemas.market import Timeframe
from rsigrid.schemas.indicators import GridRequest, GridSnapshot
from rsigrid.services.base import ValidationError
from rsigrid.services.cache.redis_client import get_snapshot_cache
from rsigrid.services.grid import get_grid_service, get_grid_poller

router = APIRouter()


@router.post("", response_model=GridSnapshot)
async def compute_grid(request: GridRequest):
    """
    Compute snapshots for a list of symbols.

    Symbols are fetched concurrently. Any symbol that fails to fetch is
    returned as an empty snapshot and listed in `errors`.
    """
    service = get_grid_service()
    try:
        return await service.execute(request)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.get("/latest", response_model=GridSnapshot)
async def get_latest_grid(timeframe: Timeframe | None = None):
    """
    Get the grid from the most recent background refresh cycle.
    """
    poller = get_grid_poller()
    timeframe = timeframe or poller.timeframe

    if poller.latest is not None and poller.latest.timeframe == timeframe:
        return poller.latest

    grid = await get_snapshot_cache().get_grid(timeframe)
    if grid is None:
        raise HTTPException(status_code=404, detail="No grid computed yet")
    return grid
