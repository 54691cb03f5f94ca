from __future__ import annotations

import logging
from collections.abc import Iterator

from ..config import ChartingPolicy, HistogramPolicy
from .decimate import Decimation, decimate, window_index, window_values
from .histogram import build_histogram
from .metrics import SERIES_META, Metric, Sample, SeriesMeta, resolve_metric
from .stats import summarize

logger = logging.getLogger(__name__)


class MetricSeries:
    """Raw buffer plus derived chart views for one metric.

    The derived lists are mutated in place so a renderer bound to them keeps
    seeing the current contents.
    """

    __slots__ = (
        "metric",
        "meta",
        "data",
        "filtered_data",
        "hist_data",
        "basic_stats",
        "min_y",
        "max_y",
    )

    def __init__(self, metric: Metric, meta: SeriesMeta | None = None) -> None:
        self.metric = metric
        self.meta = meta or SERIES_META[metric]
        self.data: list[Sample] = []
        self.filtered_data: list[Sample] = []
        self.hist_data: list[tuple[float, int]] = []
        self.basic_stats: list[tuple[str, float]] = []
        self.min_y: Sample | None = None
        self.max_y: Sample | None = None

    def __len__(self) -> int:
        return len(self.data)

    def __repr__(self) -> str:
        return (
            f"MetricSeries({self.metric.value!r}, samples={len(self.data)}, "
            f"filtered={len(self.filtered_data)})"
        )

    def append(self, sample: Sample) -> None:
        self.data.append(sample)
        if self.min_y is None or sample.y < self.min_y.y:
            self.min_y = sample
        if self.max_y is None or sample.y > self.max_y.y:
            self.max_y = sample

    def clear(self) -> None:
        self.data.clear()
        self.filtered_data.clear()
        self.hist_data.clear()
        self.basic_stats.clear()
        self.min_y = None
        self.max_y = None

    def reset_views(self) -> None:
        self.filtered_data.clear()
        self.hist_data.clear()

    def evict_before(self, first_window: int, period_ms: float) -> int:
        """Drop raw samples in windows older than ``first_window``; returns how many."""

        kept = [s for s in self.data if window_index(s.x, period_ms) >= first_window]
        dropped = len(self.data) - len(kept)
        if dropped:
            self.data[:] = kept
        return dropped

    def recompute(self, charting: ChartingPolicy, histogram: HistogramPolicy) -> Decimation:
        """Rebuild filtered, histogram and stats views from ``data``."""

        result = decimate(self.data, charting.charting_period_ms, charting.display_budget)
        values = window_values(self.data, result)
        self.filtered_data[:] = result.points
        self.hist_data[:] = build_histogram(values, histogram.bins, histogram.min_bin_width)
        self.basic_stats[:] = summarize(values)
        return result


class ChartData:
    """Registry holding one ``MetricSeries`` per tracked metric."""

    def __init__(self) -> None:
        self._series: dict[Metric, MetricSeries] = {
            metric: MetricSeries(metric) for metric in Metric
        }

    def __getitem__(self, metric: Metric | str) -> MetricSeries:
        return self._series[resolve_metric(metric)]

    def __iter__(self) -> Iterator[MetricSeries]:
        return iter(self._series.values())

    def __len__(self) -> int:
        return len(self._series)

    def append(self, metric: Metric | str, sample: Sample) -> MetricSeries:
        series = self[metric]
        series.append(sample)
        return series

    def clear(self) -> None:
        for series in self._series.values():
            series.clear()
        logger.debug("Cleared %d series", len(self._series))

    def sample_counts(self) -> dict[str, int]:
        return {series.metric.value: len(series) for series in self}


__all__ = ["ChartData", "MetricSeries"]
