import pydantic
import pytest

from conftest import FakeKlineClient, make_candles
from rsigrid.schemas.indicators import GridRequest, SymbolSnapshot
from rsigrid.schemas.market import CandleRequest, Timeframe
from rsigrid.services.base import ExternalAPIError
from rsigrid.services.cache.redis_client import SnapshotCache
from rsigrid.services.data_ingestion import DataIngestionService
from rsigrid.services.grid import GridService
from rsigrid.services.indicators import compute_snapshot


@pytest.fixture
def fake_client(zigzag_candles, rising_candles) -> FakeKlineClient:
    return FakeKlineClient(
        {
            "BTCUSDT": zigzag_candles,
            "ETHUSDT": rising_candles,
            "NEWUSDT": make_candles([1.0, 2.0, 3.0]),
        },
        failing={"BADUSDT"},
    )


@pytest.fixture
def grid_service(fake_client) -> GridService:
    return GridService(
        data_service=DataIngestionService(client=fake_client),
        cache=SnapshotCache(),
    )


@pytest.mark.asyncio
async def test_execute_single_request(fake_client) -> None:
    service = DataIngestionService(client=fake_client)

    candles = await service.execute(
        CandleRequest(symbol="BTCUSDT", timeframe=Timeframe.H1, limit=20)
    )

    assert len(candles) == 20
    assert fake_client.calls == [("BTCUSDT", Timeframe.H1, 20)]


@pytest.mark.asyncio
async def test_execute_single_request_propagates_failure(fake_client) -> None:
    service = DataIngestionService(client=fake_client)

    with pytest.raises(ExternalAPIError):
        await service.execute(CandleRequest(symbol="BADUSDT", limit=20))


@pytest.mark.asyncio
async def test_fetch_many_isolates_failures(fake_client) -> None:
    service = DataIngestionService(client=fake_client, max_concurrency=2)

    result = await service.fetch_many(
        ["btcusdt", "BADUSDT", "ETHUSDT", "GHOSTUSDT"], Timeframe.M15, 95
    )

    assert set(result.candles) == {"BTCUSDT", "ETHUSDT", "GHOSTUSDT"}
    assert list(result.errors) == ["BADUSDT"]
    assert result.warnings == ["No klines returned for GHOSTUSDT"]
    assert all(limit == 95 for _, _, limit in fake_client.calls)


@pytest.mark.asyncio
async def test_grid_degrades_failed_symbol(grid_service, zigzag_candles) -> None:
    grid = await grid_service.execute(
        GridRequest(symbols=["BTCUSDT", "BADUSDT", "ETHUSDT"], display_limit=80)
    )

    assert list(grid.symbols) == ["BTCUSDT", "BADUSDT", "ETHUSDT"]
    assert grid.errors == ["BADUSDT"]
    assert grid.symbols["BADUSDT"] == SymbolSnapshot.empty()
    assert grid.symbols["BTCUSDT"] == compute_snapshot(zigzag_candles[-95:])
    assert all(p.value == 100.0 for p in grid.symbols["ETHUSDT"].rsi)


@pytest.mark.asyncio
async def test_grid_requests_display_plus_seed_candles(grid_service, fake_client) -> None:
    await grid_service.execute(
        GridRequest(symbols=["BTCUSDT"], display_limit=30, rsi_period=7)
    )

    assert fake_client.calls == [("BTCUSDT", Timeframe.M15, 38)]


@pytest.mark.asyncio
async def test_grid_short_history_and_empty_response(grid_service) -> None:
    grid = await grid_service.execute(GridRequest(symbols=["NEWUSDT", "GHOSTUSDT"]))

    assert grid.errors == []
    assert grid.symbols["NEWUSDT"].rsi == []
    assert grid.symbols["NEWUSDT"].price == 3.0
    assert grid.symbols["GHOSTUSDT"] == SymbolSnapshot.empty()


@pytest.mark.asyncio
async def test_grid_collapses_duplicate_symbols(grid_service, fake_client) -> None:
    grid = await grid_service.execute(
        GridRequest(symbols=["ethusdt", "ETHUSDT", " BTCUSDT"])
    )

    assert list(grid.symbols) == ["ETHUSDT", "BTCUSDT"]
    assert len(fake_client.calls) == 2


@pytest.mark.asyncio
async def test_grid_with_no_symbols_skips_fetch(grid_service, fake_client) -> None:
    grid = await grid_service.execute(GridRequest(symbols=[], timeframe=Timeframe.D1))

    assert grid.symbols == {}
    assert grid.timeframe == Timeframe.D1
    assert fake_client.calls == []


def test_grid_request_rejects_empty_display_window() -> None:
    with pytest.raises(pydantic.ValidationError):
        GridRequest(symbols=["BTCUSDT"], display_limit=0)


@pytest.mark.asyncio
async def test_grid_is_cached(grid_service) -> None:
    grid = await grid_service.execute(
        GridRequest(symbols=["BTCUSDT"], timeframe=Timeframe.H1)
    )

    assert await grid_service.cache.get_grid(Timeframe.H1) == grid
    assert await grid_service.cache.get_snapshot("BTCUSDT", "1h") == grid.symbols["BTCUSDT"]


@pytest.mark.asyncio
async def test_custom_parameter_grid_is_not_cached(grid_service) -> None:
    await grid_service.execute(
        GridRequest(symbols=["BTCUSDT"], timeframe=Timeframe.H1, display_limit=20)
    )

    assert await grid_service.cache.get_grid(Timeframe.H1) is None
    assert await grid_service.cache.get_snapshot("BTCUSDT", "1h") is None
