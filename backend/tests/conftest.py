from typing import Optional

import pytest

from rsigrid.schemas.market import Candle, Timeframe
from rsigrid.services.base import ExternalAPIError

START_MS = 1_700_000_000_000
MINUTE_MS = 60_000


def make_candles(
    closes: list[float],
    volumes: Optional[list[float]] = None,
    start: int = START_MS,
    step: int = MINUTE_MS,
) -> list[Candle]:
    volumes = volumes or [10.0] * len(closes)
    return [
        Candle(
            open_time=start + i * step,
            open=close,
            high=close,
            low=close,
            close=close,
            volume=volume,
            close_time=start + (i + 1) * step - 1,
        )
        for i, (close, volume) in enumerate(zip(closes, volumes))
    ]


class FakeKlineClient:
    """Stands in for BinanceKlineClient; symbols listed in `failing` raise."""

    def __init__(
        self,
        candles: dict[str, list[Candle]],
        failing: Optional[set[str]] = None,
    ) -> None:
        self.candles = candles
        self.failing = failing or set()
        self.calls: list[tuple[str, Timeframe, int]] = []

    async def fetch_klines(
        self, symbol: str, timeframe: Timeframe = Timeframe.M15, limit: int = 500
    ) -> list[Candle]:
        self.calls.append((symbol, timeframe, limit))
        if symbol in self.failing:
            raise ExternalAPIError(
                "BinanceKlineClient", f"Failed to fetch klines for {symbol}: HTTP 400"
            )
        return self.candles.get(symbol, [])[-limit:]


@pytest.fixture
def rising_candles() -> list[Candle]:
    return make_candles([float(c) for c in range(1, 121)])


@pytest.fixture
def zigzag_candles() -> list[Candle]:
    closes = [100.0 + (3.0 if i % 3 == 0 else -2.0) * (i % 7) for i in range(120)]
    return make_candles(closes, volumes=[float(i + 1) for i in range(120)])
