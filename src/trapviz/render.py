"""Rendering collaborator contract and headless renderers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

from .series.metrics import Metric, Sample, SeriesMeta

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChartView:
    """The three derived sequences of one metric plus its presentation metadata."""

    metric: Metric
    meta: SeriesMeta
    filtered_data: list[Sample]
    hist_data: list[tuple[float, int]]
    basic_stats: list[tuple[str, float]]

    def to_dict(self) -> dict[str, Any]:
        return {
            "metric": self.metric.value,
            "title": self.meta.title,
            "ylabel": self.meta.ylabel,
            "xlabel": self.meta.xlabel,
            "filtered": [sample.as_point() for sample in self.filtered_data],
            "histogram": [{"bin": edge, "count": count} for edge, count in self.hist_data],
            "stats": [{"label": label, "value": value} for label, value in self.basic_stats],
        }


class ChartRenderer(Protocol):
    def bind(self, view: ChartView) -> None: ...

    def render_main(self, view: ChartView) -> None: ...

    def render_histogram(self, view: ChartView) -> None: ...

    def render_stats(self, view: ChartView) -> None: ...


@dataclass
class RecordingRenderer:
    """Keeps every call it receives; useful for offline replay and tests."""

    bound: list[Metric] = field(default_factory=list)
    calls: list[tuple[str, Metric]] = field(default_factory=list)
    last_view: ChartView | None = None

    def bind(self, view: ChartView) -> None:
        self.bound.append(view.metric)
        self.last_view = view

    def render_main(self, view: ChartView) -> None:
        self.calls.append(("main", view.metric))
        self.last_view = view

    def render_histogram(self, view: ChartView) -> None:
        self.calls.append(("histogram", view.metric))

    def render_stats(self, view: ChartView) -> None:
        self.calls.append(("stats", view.metric))

    @property
    def frames(self) -> int:
        return sum(1 for kind, _ in self.calls if kind == "main")


class LogRenderer:
    """Writes one summary line per frame to the ``trapviz`` logger."""

    def bind(self, view: ChartView) -> None:
        logger.info("Charting %s (%s)", view.metric.value, view.meta.title)

    def render_main(self, view: ChartView) -> None:
        if not view.filtered_data:
            logger.info("%s: no data", view.metric.value)
            return
        last = view.filtered_data[-1]
        logger.info(
            "%s: %d points, last x=%.1f y=%.3f",
            view.metric.value,
            len(view.filtered_data),
            last.x,
            last.y,
        )

    def render_histogram(self, view: ChartView) -> None:
        if view.hist_data:
            peak_edge, peak_count = max(view.hist_data, key=lambda item: item[1])
            logger.debug(
                "%s histogram peak bin %.3f (%d)", view.metric.value, peak_edge, peak_count
            )

    def render_stats(self, view: ChartView) -> None:
        if view.basic_stats:
            summary = ", ".join(f"{label}={value:.3f}" for label, value in view.basic_stats)
            logger.debug("%s stats: %s", view.metric.value, summary)


__all__ = ["ChartRenderer", "ChartView", "LogRenderer", "RecordingRenderer"]
