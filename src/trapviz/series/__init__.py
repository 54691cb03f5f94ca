from .decimate import (
    Decimation,
    decimate,
    horizon_window,
    partition,
    window_index,
    window_values,
)
from .histogram import DEFAULT_HISTOGRAM_BINS, DEFAULT_MIN_BIN_WIDTH, bin_edges, build_histogram
from .metrics import SERIES_META, Metric, Sample, SeriesMeta, resolve_metric
from .stats import SUMMARY_QUANTILES, summarize
from .store import ChartData, MetricSeries

__all__ = [
    "ChartData",
    "Decimation",
    "Metric",
    "MetricSeries",
    "Sample",
    "SeriesMeta",
    "SERIES_META",
    "SUMMARY_QUANTILES",
    "DEFAULT_HISTOGRAM_BINS",
    "DEFAULT_MIN_BIN_WIDTH",
    "bin_edges",
    "build_histogram",
    "decimate",
    "horizon_window",
    "partition",
    "resolve_metric",
    "summarize",
    "window_index",
    "window_values",
]
