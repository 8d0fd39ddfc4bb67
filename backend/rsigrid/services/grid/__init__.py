"""
Grid Service

CONTRACT:
    Input:  GridRequest
    Output: GridSnapshot

RESPONSIBILITIES:
    - Fetch candle windows for many symbols concurrently
    - Run the indicator engine per symbol
    - Degrade failed symbols to empty snapshots
    - Cache the latest grid
    - Refresh the configured grid on a fixed interval
"""

from rsigrid.services.grid.service import GridService, get_grid_service
from rsigrid.services.grid.poller import (
    GridPoller,
    get_grid_poller,
    start_grid_poller,
    stop_grid_poller,
)

__all__ = [
    "GridService",
    "get_grid_service",
    "GridPoller",
    "get_grid_poller",
    "start_grid_poller",
    "stop_grid_poller",
]
