import numpy as np
import pytest

from conftest import make_candles
from rsigrid.schemas.indicators import IndicatorPoint
from rsigrid.services.base import NumericError
from rsigrid.services.indicators.calculations import (
    mean,
    rsi,
    rsi_from_averages,
    rsi_series,
    sma,
    sma_series,
    trim,
)


def test_rsi_hand_computed_small_period() -> None:
    # changes: +1, -1, +2, -1 -> seed averages 0.5 / 0.5
    # step 2: RS = 1 -> 50, then avgGain 1.25, avgLoss 0.25
    # step 3: RS = 5 -> 100 - 100/6
    values = rsi(np.array([1.0, 2.0, 1.0, 3.0, 2.0]), period=2)

    assert len(values) == 2
    assert values[0] == pytest.approx(50.0)
    assert values[1] == pytest.approx(100.0 - 100.0 / 6.0)


@pytest.mark.parametrize("length", [0, 1, 5, 14])
def test_rsi_empty_when_history_not_longer_than_period(length: int) -> None:
    assert len(rsi(np.arange(1.0, length + 1.0), period=14)) == 0


def test_rsi_empty_when_exactly_one_candle_past_period() -> None:
    assert len(rsi(np.arange(1.0, 16.0), period=14)) == 0


def test_rsi_flat_closes_saturate_at_100() -> None:
    values = rsi(np.full(20, 100.0), period=14)

    assert len(values) == 5
    assert all(v == 100.0 for v in values)


def test_rsi_linear_increase_is_exactly_100() -> None:
    values = rsi(np.arange(1.0, 31.0), period=14)

    assert len(values) == 15
    assert all(v == 100.0 for v in values)


def test_rsi_monotonic_decrease_is_exactly_0() -> None:
    values = rsi(np.arange(30.0, 0.0, -1.0), period=14)

    assert len(values) == 15
    assert all(v == 0.0 for v in values)


def test_rsi_never_nan_when_losses_vanish() -> None:
    # losses only inside the seed window, then a long rally
    closes = np.concatenate([np.array([10.0, 9.0]), np.arange(9.0, 60.0)])
    values = rsi(closes, period=3)

    assert not np.isnan(values).any()
    assert values[-1] <= 100.0


@pytest.mark.parametrize("period", [1, 2, 5, 14, 30])
@pytest.mark.parametrize("seed", [0, 1, 2])
def test_rsi_length_and_bounds_on_random_walks(period: int, seed: int) -> None:
    rng = np.random.default_rng(seed)
    closes = 100.0 + np.cumsum(rng.normal(0.0, 1.0, size=120))

    values = rsi(closes, period=period)

    assert len(values) == 120 - period - 1
    assert ((values >= 0.0) & (values <= 100.0)).all()


def test_rsi_uses_wilder_smoothing_not_a_rolling_window() -> None:
    # One early loss keeps influencing RSI long after it leaves a 3-bar window
    closes = np.array([10.0, 11.0, 12.0, 9.0, 10.0, 11.0, 12.0, 13.0, 14.0, 15.0])
    values = rsi(closes, period=3)

    assert values[-1] < 100.0


def test_rsi_from_averages_zero_loss_is_100() -> None:
    assert rsi_from_averages(0.0, 0.0) == 100.0
    assert rsi_from_averages(2.5, 0.0) == 100.0
    assert rsi_from_averages(0.0, 1.0) == 0.0
    assert rsi_from_averages(1.0, 1.0) == 50.0


@pytest.mark.parametrize("period", [0, -1, 1.5, True])
def test_rsi_rejects_bad_period(period) -> None:
    with pytest.raises(NumericError):
        rsi(np.arange(1.0, 40.0), period=period)


def test_mean_of_empty_window_raises() -> None:
    with pytest.raises(NumericError):
        mean(np.array([]))


def test_sma_full_windows_only() -> None:
    values = sma(np.array([1.0, 2.0, 3.0, 4.0, 5.0]), period=3)

    assert values.tolist() == pytest.approx([2.0, 3.0, 4.0])


def test_sma_empty_when_shorter_than_period() -> None:
    assert len(sma(np.array([1.0, 2.0]), period=3)) == 0


def test_sma_is_unweighted() -> None:
    values = sma(np.array([0.0, 0.0, 15.0]), period=3)

    assert values.tolist() == pytest.approx([5.0])


def test_sma_of_identical_values() -> None:
    values = sma(np.full(14, 63.25), period=14)

    assert len(values) == 1
    assert values[0] == pytest.approx(63.25)


def test_rsi_series_alignment() -> None:
    candles = make_candles([1.0, 2.0, 1.0, 3.0, 2.0])

    series = rsi_series(candles, period=2)

    assert [p.time for p in series] == [candles[3].open_time, candles[4].open_time]
    assert series[0].value == pytest.approx(50.0)


def test_rsi_series_times_follow_candle_offset(zigzag_candles) -> None:
    period = 14
    series = rsi_series(zigzag_candles, period=period)

    assert len(series) == len(zigzag_candles) - period - 1
    for k, point in enumerate(series):
        assert point.time == zigzag_candles[period + 1 + k].open_time


def test_rsi_series_empty_input() -> None:
    assert rsi_series([], period=14) == []


def test_sma_series_takes_time_of_window_end(zigzag_candles) -> None:
    rsi_points = rsi_series(zigzag_candles, period=14)

    sma_points = sma_series(rsi_points, period=14)

    assert len(sma_points) == len(rsi_points) - 14 + 1
    for i, point in enumerate(sma_points):
        window = rsi_points[i : i + 14]
        assert point.time == window[-1].time
        assert point.value == pytest.approx(sum(p.value for p in window) / 14)


def test_sma_series_on_flat_rsi() -> None:
    points = [IndicatorPoint(time=t, value=42.0) for t in range(14)]

    sma_points = sma_series(points, period=14)

    assert len(sma_points) == 1
    assert sma_points[0].time == 13
    assert sma_points[0].value == pytest.approx(42.0)


def test_sma_series_shorter_than_period() -> None:
    points = [IndicatorPoint(time=t, value=50.0) for t in range(13)]

    assert sma_series(points, period=14) == []


def test_series_times_strictly_increasing(zigzag_candles) -> None:
    rsi_points = rsi_series(zigzag_candles, period=5)
    sma_points = sma_series(rsi_points, period=4)
    open_times = {c.open_time for c in zigzag_candles}

    for series in (rsi_points, sma_points):
        times = [p.time for p in series]
        assert times == sorted(set(times))
        assert set(times) <= open_times


def test_trim_keeps_newest_points_in_order() -> None:
    points = [IndicatorPoint(time=t, value=float(t)) for t in range(10)]

    trimmed = trim(points, 4)

    assert trimmed == points[-4:]
    assert [p.time for p in trimmed] == [6, 7, 8, 9]


def test_trim_shorter_series_untouched() -> None:
    points = [IndicatorPoint(time=t, value=1.0) for t in range(3)]

    assert trim(points, 10) == points


def test_trim_zero_limit() -> None:
    points = [IndicatorPoint(time=t, value=1.0) for t in range(3)]

    assert trim(points, 0) == []
