from __future__ import annotations

from collections import Counter

import pytest
from hypothesis import given
from hypothesis import strategies as st

from trapviz.contracts.error import BadInputError
from trapviz.series import (
    Metric,
    MetricSeries,
    Sample,
    decimate,
    horizon_window,
    partition,
    window_index,
    window_values,
)

finite_x = st.floats(min_value=-1e6, max_value=1e6, allow_nan=False, allow_infinity=False)
finite_y = st.floats(min_value=-1e9, max_value=1e9, allow_nan=False, allow_infinity=False)
samples = st.lists(st.builds(Sample, finite_x, finite_y), max_size=200)
periods = st.floats(min_value=0.5, max_value=5_000.0, allow_nan=False, allow_infinity=False)


def test_decimate_uses_latest_sample_time_and_window_mean() -> None:
    data = [
        Sample(0, 1),
        Sample(40, 3),
        Sample(99, 5),
        Sample(100, 10),
        Sample(150, 20),
        Sample(310, 7),
    ]

    result = decimate(data, 100)

    assert result.points == [Sample(99, 3.0), Sample(150, 15.0), Sample(310, 7.0)]
    assert result.first_window == 0
    assert result.horizon == 0


def test_decimate_budget_keeps_newest_windows() -> None:
    data = [Sample(0, 1), Sample(100, 10), Sample(150, 20), Sample(310, 7)]

    result = decimate(data, 100, budget=2)

    assert result.points == [Sample(150, 15.0), Sample(310, 7.0)]
    assert result.horizon == 100
    assert window_values(data, result) == [10, 20, 7]


def test_decimate_orders_windows_not_arrival() -> None:
    data = [Sample(250, 1), Sample(10, 2)]

    result = decimate(data, 100)

    assert [point.x for point in result.points] == [10, 250]


def test_decimate_empty_data() -> None:
    result = decimate([], 100)

    assert result.points == []
    assert result.horizon is None
    assert window_values([Sample(1, 1)], result) == []


@pytest.mark.parametrize("period", [0, -5, float("nan"), float("inf")])
def test_decimate_rejects_bad_period(period: float) -> None:
    with pytest.raises(BadInputError):
        decimate([Sample(1, 1)], period)


def test_negative_timestamps_fall_into_negative_windows() -> None:
    assert window_index(-0.5, 100) == -1
    assert window_index(0, 100) == 0
    assert window_index(99.999, 100) == 0


@given(samples, periods)
def test_decimate_is_idempotent(data: list[Sample], period: float) -> None:
    first = decimate(data, period, budget=50)
    second = decimate(list(data), period, budget=50)

    assert first == second


@given(samples, periods, periods)
def test_partition_never_duplicates_or_drops(
    data: list[Sample], period_a: float, period_b: float
) -> None:
    expected = Counter((s.x, s.y) for s in data)
    for period in (period_a, period_b):
        windows = partition(data, period)
        seen = Counter((s.x, s.y) for window in windows.values() for s in window)
        assert seen == expected
        assert sum(len(window) for window in windows.values()) == len(data)


@given(samples, periods)
def test_each_point_sits_in_its_own_window(data: list[Sample], period: float) -> None:
    result = decimate(data, period)
    indexes = [window_index(point.x, period) for point in result.points]

    assert indexes == sorted(set(indexes))
    assert len(result.points) == len({window_index(s.x, period) for s in data})


@given(samples, periods, st.integers(min_value=1, max_value=20))
def test_horizon_window_matches_decimation(
    data: list[Sample], period: float, budget: int
) -> None:
    assert horizon_window(data, period, budget) == decimate(data, period, budget).first_window


@given(samples, periods, st.integers(min_value=1, max_value=20))
def test_evicting_before_horizon_keeps_points(
    data: list[Sample], period: float, budget: int
) -> None:
    series = MetricSeries(Metric.RX_RATE)
    for sample in data:
        series.append(sample)
    before = decimate(series.data, period, budget)

    if before.first_window is not None:
        series.evict_before(before.first_window, period)

    after = decimate(series.data, period, budget)
    assert after.points == before.points
    assert window_values(series.data, after) == window_values(data, before)
