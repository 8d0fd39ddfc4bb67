"""
Binance Klines Adapter

Fetches OHLCV candles from the public Binance spot REST API.
No API key needed. Requests are not retried; the next refresh cycle
is the retry.
"""

import asyncio
import logging
from typing import Any, Optional

import aiohttp

from rsigrid.core.config import settings
from rsigrid.core.symbols import normalize_symbol
from rsigrid.schemas.market import Candle, Timeframe, MAX_KLINE_LIMIT
from rsigrid.services.base import ExternalAPIError

logger = logging.getLogger(__name__)

KLINES_PATH = "/api/v3/klines"


def parse_kline(row: list[Any]) -> Candle:
    """
    Convert one Binance kline row to a Candle.

    Row layout: [openTime, open, high, low, close, volume, closeTime, ...]
    with prices and volume sent as strings.
    """
    return Candle(
        open_time=int(row[0]),
        open=float(row[1]),
        high=float(row[2]),
        low=float(row[3]),
        close=float(row[4]),
        volume=float(row[5]),
        close_time=int(row[6]) if len(row) > 6 else None,
    )


def parse_klines(payload: Any) -> list[Candle]:
    """Parse a klines response body; raises ValueError on anything malformed."""
    if not isinstance(payload, list):
        raise ValueError(f"Expected a list of klines, got {type(payload).__name__}")
    for row in payload:
        if not isinstance(row, (list, tuple)):
            raise ValueError(f"Expected a kline row list, got {type(row).__name__}")
    return [parse_kline(row) for row in payload]


class BinanceKlineClient:
    """
    Thin async client for the Binance klines endpoint.

    One aiohttp session is shared by all requests and closed on shutdown.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.base_url = (base_url or settings.binance_base_url).rstrip("/")
        self._timeout = timeout or settings.request_timeout_seconds
        self._session = session

    @property
    def name(self) -> str:
        return "BinanceKlineClient"

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure we have an active HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout),
                headers={"Accept": "application/json"},
            )
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def fetch_klines(
        self,
        symbol: str,
        timeframe: Timeframe = Timeframe.M15,
        limit: int = 500,
    ) -> list[Candle]:
        """
        Fetch the most recent `limit` candles for a symbol, oldest first.

        Raises:
            ExternalAPIError: transport failure, non-200 status or bad payload
        """
        symbol = normalize_symbol(symbol)
        if not 1 <= limit <= MAX_KLINE_LIMIT:
            raise ValueError(f"limit must be between 1 and {MAX_KLINE_LIMIT}, got {limit}")

        params = {
            "symbol": symbol,
            "interval": Timeframe(timeframe).value,
            "limit": str(limit),
        }
        url = f"{self.base_url}{KLINES_PATH}"
        session = await self._ensure_session()

        try:
            async with session.get(url, params=params) as response:
                if response.status != 200:
                    body = await response.text()
                    raise ExternalAPIError(
                        self.name,
                        f"Failed to fetch klines for {symbol}: HTTP {response.status}",
                        {"symbol": symbol, "status": response.status, "body": body[:200]},
                    )
                payload = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise ExternalAPIError(
                self.name,
                f"Failed to fetch klines for {symbol}: {type(e).__name__}",
                {"symbol": symbol},
            ) from e

        try:
            candles = parse_klines(payload)
        except (ValueError, TypeError, IndexError, KeyError) as e:
            raise ExternalAPIError(
                self.name,
                f"Malformed klines for {symbol}: {e}",
                {"symbol": symbol},
            ) from e

        logger.debug(f"Fetched {len(candles)} {params['interval']} candles for {symbol}")
        return candles


# Singleton instance
_client_instance: Optional[BinanceKlineClient] = None


def get_binance_client() -> BinanceKlineClient:
    """Get or create the shared Binance client."""
    global _client_instance
    if _client_instance is None:
        _client_instance = BinanceKlineClient()
    return _client_instance


async def close_binance_client() -> None:
    """Close the shared client's session."""
    global _client_instance
    if _client_instance:
        await _client_instance.close()
        _client_instance = None
