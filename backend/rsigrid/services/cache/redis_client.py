"""
Redis cache client for computed indicator snapshots.

Lets the API answer from the last refresh cycle instead of hitting
Binance on every request. Falls back to process memory when Redis is down.
"""

import logging
import time
from typing import Optional, Dict, Tuple

import redis.asyncio as redis

from rsigrid.core.config import settings
from rsigrid.schemas.indicators import GridSnapshot, SymbolSnapshot
from rsigrid.schemas.market import Timeframe

logger = logging.getLogger(__name__)

# Global Redis connection pool
_redis_pool: Optional[redis.Redis] = None


async def init_redis() -> Optional[redis.Redis]:
    """
    Initialize Redis connection pool.
    Called on application startup.
    """
    global _redis_pool

    if _redis_pool is not None:
        return _redis_pool

    if not settings.redis_url:
        logger.info("Redis disabled (no redis_url). Using in-memory cache.")
        return None

    try:
        _redis_pool = redis.from_url(
            settings.redis_url,
            encoding="utf-8",
            decode_responses=True,
        )
        # Test connection
        await _redis_pool.ping()
        logger.info(f"Redis connected: {settings.redis_url}")
        return _redis_pool
    except Exception as e:
        logger.warning(f"Redis connection failed: {e}. Using in-memory fallback.")
        _redis_pool = None
        return None


async def close_redis() -> None:
    """Close Redis connection pool."""
    global _redis_pool
    if _redis_pool:
        await _redis_pool.aclose()
        _redis_pool = None
        logger.info("Redis connection closed")


def _timeframe_value(timeframe: Timeframe | str) -> str:
    return Timeframe(timeframe).value


class SnapshotCache:
    """
    Redis-based cache for indicator snapshots.

    Keys:
    - snapshot:{symbol}:{timeframe} → SymbolSnapshot JSON
    - grid:{timeframe} → GridSnapshot JSON (latest refresh cycle)
    """

    def __init__(
        self,
        redis_client: Optional[redis.Redis] = None,
        ttl: Optional[int] = None,
    ):
        self._redis = redis_client
        self._ttl = ttl or settings.cache_ttl_seconds
        # In-memory fallback when Redis is unavailable: key -> (expires_at, value)
        self._memory_cache: Dict[str, Tuple[float, str]] = {}

    @property
    def redis(self) -> Optional[redis.Redis]:
        return self._redis or _redis_pool

    def _memory_get(self, key: str) -> Optional[str]:
        """Fallback to memory cache."""
        entry = self._memory_cache.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if time.monotonic() >= expires_at:
            del self._memory_cache[key]
            return None
        return value

    def _memory_set(self, key: str, value: str, ex: int) -> None:
        """Fallback to memory cache."""
        self._memory_cache[key] = (time.monotonic() + ex, value)

    async def _set(self, key: str, value: str) -> None:
        if self.redis:
            try:
                await self.redis.set(key, value, ex=self._ttl)
                return
            except Exception as e:
                logger.debug(f"Redis set {key} failed: {e}")

        self._memory_set(key, value, self._ttl)

    async def _get(self, key: str) -> Optional[str]:
        if self.redis:
            try:
                return await self.redis.get(key)
            except Exception as e:
                logger.debug(f"Redis get {key} failed: {e}")

        return self._memory_get(key)

    # ============ Symbol Snapshots ============

    async def set_snapshot(
        self, symbol: str, timeframe: Timeframe | str, snapshot: SymbolSnapshot
    ) -> None:
        key = f"snapshot:{symbol.upper()}:{_timeframe_value(timeframe)}"
        await self._set(key, snapshot.model_dump_json())

    async def get_snapshot(
        self, symbol: str, timeframe: Timeframe | str
    ) -> Optional[SymbolSnapshot]:
        """Get a cached snapshot, or None if missing/expired."""
        key = f"snapshot:{symbol.upper()}:{_timeframe_value(timeframe)}"
        value = await self._get(key)
        return SymbolSnapshot.model_validate_json(value) if value else None

    # ============ Grid ============

    async def set_grid(self, grid: GridSnapshot) -> None:
        """Store a whole refresh cycle and each of its symbol snapshots."""
        await self._set(f"grid:{grid.timeframe.value}", grid.model_dump_json())
        for symbol, snapshot in grid.symbols.items():
            await self.set_snapshot(symbol, grid.timeframe, snapshot)

    async def get_grid(self, timeframe: Timeframe | str) -> Optional[GridSnapshot]:
        """Get the latest cached grid for a timeframe."""
        value = await self._get(f"grid:{_timeframe_value(timeframe)}")
        return GridSnapshot.model_validate_json(value) if value else None


# Singleton instance
_snapshot_cache: Optional[SnapshotCache] = None


def get_snapshot_cache() -> SnapshotCache:
    """Get the snapshot cache singleton."""
    global _snapshot_cache
    if _snapshot_cache is None:
        _snapshot_cache = SnapshotCache()
    return _snapshot_cache
