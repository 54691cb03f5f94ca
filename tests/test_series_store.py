from __future__ import annotations

import pytest

from trapviz.config import AppConfig
from trapviz.contracts.error import UnknownMetricError
from trapviz.series import SERIES_META, ChartData, Metric, MetricSeries, Sample


def _fill(series: MetricSeries, count: int = 10) -> None:
    for idx in range(count):
        series.append(Sample(idx * 10.0, float(idx)))


def test_metric_set_and_metadata() -> None:
    assert [m.value for m in Metric] == [
        "txDelta",
        "rxDelta",
        "rxRate",
        "txRate",
        "txPacketRate",
        "rxPacketRate",
        "txPacketDelta",
        "rxPacketDelta",
    ]
    assert SERIES_META[Metric.RX_RATE].title == "Ingress throughput in kbps"
    assert SERIES_META[Metric.TX_PACKET_DELTA].ylabel == "packets sent"


def test_append_preserves_order_and_tracks_extremes() -> None:
    series = MetricSeries(Metric.TX_DELTA)
    for sample in (Sample(5, 3.0), Sample(1, -2.0), Sample(1, 9.0)):
        series.append(sample)

    assert series.data == [Sample(5, 3.0), Sample(1, -2.0), Sample(1, 9.0)]
    assert series.min_y == Sample(1, -2.0)
    assert series.max_y == Sample(1, 9.0)
    assert series.meta.title == "Tx Bytes per sample period"


def test_recompute_builds_all_views(app_config: AppConfig) -> None:
    series = MetricSeries(Metric.RX_RATE)
    _fill(series, 20)

    series.recompute(app_config.charting, app_config.histogram)

    assert [point.x for point in series.filtered_data] == [90.0, 190.0]
    assert sum(count for _edge, count in series.hist_data) == 20
    assert dict(series.basic_stats)["max"] == 19.0


def test_recompute_keeps_bound_list_identity(app_config: AppConfig) -> None:
    series = MetricSeries(Metric.RX_RATE)
    bound = series.filtered_data
    _fill(series)

    series.recompute(app_config.charting, app_config.histogram)

    assert series.filtered_data is bound
    assert bound


def test_reset_views_keeps_raw_samples(app_config: AppConfig) -> None:
    series = MetricSeries(Metric.RX_RATE)
    _fill(series)
    series.recompute(app_config.charting, app_config.histogram)

    series.reset_views()

    assert series.filtered_data == []
    assert series.hist_data == []
    assert len(series.data) == 10


def test_clear_empties_every_metric(app_config: AppConfig) -> None:
    charts = ChartData()
    for series in charts:
        _fill(series)
        series.recompute(app_config.charting, app_config.histogram)
    assert all(series.filtered_data and series.hist_data for series in charts)

    charts.clear()

    assert len(charts) == 8
    for series in charts:
        assert series.data == []
        assert series.filtered_data == []
        assert series.hist_data == []
        assert series.basic_stats == []
        assert series.min_y is None and series.max_y is None


def test_recompute_one_metric_leaves_others_alone(app_config: AppConfig) -> None:
    charts = ChartData()
    _fill(charts[Metric.TX_RATE])
    _fill(charts["rxRate"])

    charts[Metric.TX_RATE].recompute(app_config.charting, app_config.histogram)

    assert charts[Metric.TX_RATE].filtered_data
    assert charts[Metric.RX_RATE].filtered_data == []
    assert len(charts[Metric.RX_RATE].data) == 10


def test_unknown_metric_is_rejected() -> None:
    charts = ChartData()

    with pytest.raises(UnknownMetricError):
        charts["latency"]
    with pytest.raises(UnknownMetricError):
        charts.append("bogus", Sample(0, 0))
    assert charts.sample_counts() == {m.value: 0 for m in Metric}
