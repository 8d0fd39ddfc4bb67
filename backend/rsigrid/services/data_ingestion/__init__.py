"""
Data Ingestion Service

CONTRACT:
    Input:  CandleRequest
    Output: list[Candle]

RESPONSIBILITIES:
    - Fetch klines from the Binance public REST API
    - Normalize rows to Candle models
    - Fan out batch fetches concurrently
    - Isolate per-symbol failures

Pure data fetching and transformation.
"""

from rsigrid.services.data_ingestion.interface import (
    DataIngestionServiceInterface,
    DataIngestionResult,
)
from rsigrid.services.data_ingestion.service import (
    DataIngestionService,
    get_data_ingestion_service,
)

__all__ = [
    "DataIngestionServiceInterface",
    "DataIngestionResult",
    "DataIngestionService",
    "get_data_ingestion_service",
]
