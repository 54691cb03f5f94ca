"""The charting actor: chart registry, selection and render scheduling."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from .config import AppConfig
from .contracts.error import BadInputError
from .ingest.models import StatsMessage
from .render import ChartRenderer, ChartView
from .scheduler import ManualTimer, RenderScheduler, TimerBackend
from .series.decimate import horizon_window
from .series.metrics import Metric, Sample, resolve_metric
from .series.store import ChartData, MetricSeries

logger = logging.getLogger(__name__)


class Dashboard:
    """Owns every mutable piece of charting state.

    All mutation goes through the entry points below, called from one event
    loop: ``ingest``/``ingest_message``, ``select_metric``, ``clear``,
    ``toggle`` and the configuration setters. Derived views are only kept up
    to date for the selected metric; other metrics only buffer samples.

    Raw buffers roll: samples older than the oldest window on screen are
    evicted. The selected metric is trimmed on every rebuild; the others are
    compacted whenever their buffer doubles since the last compaction.
    """

    def __init__(
        self,
        renderer: ChartRenderer,
        config: AppConfig | None = None,
        *,
        timer: TimerBackend | None = None,
        metric: Metric | str = Metric.RX_RATE,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self.config = config or AppConfig()
        self.config.validate()
        self.charts = ChartData()
        self.renderer = renderer
        self.selected = resolve_metric(metric)
        self._x_val = 0
        self._compact_at: dict[Metric, int] = {}
        scheduler_kwargs = {"clock": clock} if clock is not None else {}
        self.scheduler = RenderScheduler(
            self.render_views,
            self.config.charting,
            timer if timer is not None else ManualTimer(),
            **scheduler_kwargs,
        )
        self.reset_chart()

    @property
    def series(self) -> MetricSeries:
        return self.charts[self.selected]

    def view(self, metric: Metric | str | None = None) -> ChartView:
        series = self.series if metric is None else self.charts[metric]
        return ChartView(
            metric=series.metric,
            meta=series.meta,
            filtered_data=series.filtered_data,
            hist_data=series.hist_data,
            basic_stats=series.basic_stats,
        )

    def start(self) -> None:
        self.scheduler.start()

    def stop(self) -> None:
        self.scheduler.stop()

    def ingest(self, metric: Metric | str, sample: Sample) -> None:
        """Append one sample; refreshes derived views when ``metric`` is on screen."""

        self.ingest_batch([(metric, sample)])

    def ingest_batch(self, samples: Iterable[tuple[Metric | str, Sample]]) -> int:
        count = 0
        touched: set[Metric] = set()
        for metric, sample in samples:
            touched.add(self.charts.append(metric, sample).metric)
            count += 1
        for metric in touched - {self.selected}:
            self._maybe_compact(self.charts[metric])
        if self.selected in touched:
            self.refresh()
        return count

    def ingest_message(self, message: StatsMessage) -> int:
        """Append every metric carried by ``message`` as one batch."""

        x = message.t if message.t is not None else float(self._x_val)
        self._x_val += 1
        return self.ingest_batch((metric, Sample(x, value)) for metric, value in message.values())

    def refresh(self) -> None:
        self._rebuild(self.series)

    def _rebuild(self, series: MetricSeries) -> None:
        charting = self.config.charting
        result = series.recompute(charting, self.config.histogram)
        if result.first_window is not None:
            series.evict_before(result.first_window, charting.charting_period_ms)
        self._compact_at[series.metric] = max(2 * len(series), charting.display_budget)

    def _maybe_compact(self, series: MetricSeries) -> None:
        charting = self.config.charting
        if len(series) < self._compact_at.get(series.metric, charting.display_budget):
            return
        first = horizon_window(series.data, charting.charting_period_ms, charting.display_budget)
        if first is not None:
            dropped = series.evict_before(first, charting.charting_period_ms)
            if dropped:
                logger.debug("Evicted %d %s samples", dropped, series.metric.value)
        self._compact_at[series.metric] = max(2 * len(series), charting.display_budget)

    def select_metric(self, metric: Metric | str) -> Metric:
        """Point the charts at ``metric``; raises ``UnknownMetricError`` for unknown ids."""

        resolved = resolve_metric(metric)
        self.selected = resolved
        self.reset_chart()
        logger.info("Selected metric %s", resolved.value)
        return resolved

    def reset_chart(self, metric: Metric | str | None = None) -> None:
        """Empty a metric's filtered and histogram views.

        For the selected metric (the default) the views are then rebuilt from
        the raw buffer, which is trimmed to the oldest window on screen, and
        the renderer is re-bound to them.
        """

        series = self.series if metric is None else self.charts[metric]
        series.reset_views()
        if series.metric is not self.selected:
            return
        self._rebuild(series)
        self.renderer.bind(self.view())

    def clear(self) -> None:
        self.charts.clear()
        self._compact_at.clear()
        self.reset_chart()
        self._x_val = 0
        logger.info("Cleared all chart data")

    def toggle(self) -> bool:
        """Pause or resume rendering; returns ``True`` when now running."""

        self.scheduler.toggle()
        return self.scheduler.running

    def set_charting_period(self, period_ms: float) -> None:
        """Change the charting cadence; the scheduler picks it up on its next retune."""

        if not period_ms > 0:
            raise BadInputError(f"charting period must be > 0; got {period_ms!r}")
        self.config.charting.charting_period_ms = float(period_ms)
        self.refresh()

    def set_update_bounds(self, min_ms: float, max_ms: float) -> None:
        if not (min_ms > 0 and max_ms > 0):
            raise BadInputError("update period bounds must be > 0")
        if min_ms > max_ms:
            raise BadInputError(f"update period min {min_ms} exceeds max {max_ms}")
        self.config.charting.update_period_min_ms = float(min_ms)
        self.config.charting.update_period_max_ms = float(max_ms)

    def render_views(self) -> None:
        view = self.view()
        self.renderer.render_histogram(view)
        self.renderer.render_stats(view)
        self.renderer.render_main(view)


__all__ = ["Dashboard"]
