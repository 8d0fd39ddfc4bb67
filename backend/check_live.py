"""
Quick live check against Binance.
Run with: python check_live.py [SYMBOL ...]
"""

import asyncio
import os
import sys

# Set working directory
backend_dir = os.path.dirname(os.path.abspath(__file__))
os.chdir(backend_dir)
sys.path.insert(0, backend_dir)

from dotenv import load_dotenv
load_dotenv(os.path.join(backend_dir, ".env"))


async def check_live(symbols: list[str]):
    """Fetch a small grid and print the latest RSI / SMA per symbol."""
    print("\n" + "=" * 60)
    print("RSIGRID - LIVE CHECK")
    print("=" * 60)

    from rsigrid.schemas.indicators import GridRequest
    from rsigrid.schemas.market import Timeframe
    from rsigrid.services.grid import get_grid_service
    from rsigrid.services.data_ingestion.binance_adapter import close_binance_client

    service = get_grid_service()

    print("\n[1] Health Check...")
    print("-" * 40)
    print(f"Binance reachable: {await service.health_check()}")

    print("\n[2] Grid Fetch...")
    print("-" * 40)
    grid = await service.execute(
        GridRequest(symbols=symbols, timeframe=Timeframe.M15, display_limit=20)
    )
    print(f"Errors: {grid.errors}")

    for symbol, snapshot in grid.symbols.items():
        print(f"\n{symbol}:")
        print(f"  Price:  {snapshot.price}")
        print(f"  Volume: {snapshot.volume}")
        print(f"  RSI points: {len(snapshot.rsi)}  SMA points: {len(snapshot.sma)}")
        if snapshot.rsi:
            print(f"  Latest RSI: {snapshot.rsi[-1].value:.2f} @ {snapshot.rsi[-1].time}")
        if snapshot.sma:
            print(f"  Latest SMA: {snapshot.sma[-1].value:.2f} @ {snapshot.sma[-1].time}")

    await close_binance_client()

    print("\n" + "=" * 60)
    print("LIVE CHECK COMPLETE")
    print("=" * 60 + "\n")


if __name__ == "__main__":
    asyncio.run(check_live(sys.argv[1:] or ["BTCUSDT", "ETHUSDT"]))
