"""
Cache module for RSIGrid.

Provides Redis caching for computed indicator snapshots.
"""

from rsigrid.services.cache.redis_client import (
    SnapshotCache,
    get_snapshot_cache,
    init_redis,
    close_redis,
)

__all__ = [
    "SnapshotCache",
    "get_snapshot_cache",
    "init_redis",
    "close_redis",
]
