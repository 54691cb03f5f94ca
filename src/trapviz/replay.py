"""Feed recorded stats captures through a dashboard without a GUI."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import Any

from .config import AppConfig
from .dashboard import Dashboard
from .ingest.models import StatsMessage
from .render import ChartRenderer, LogRenderer, RecordingRenderer
from .scheduler import AsyncioTimer, ManualTimer
from .series.metrics import Metric

logger = logging.getLogger(__name__)


def summarize_dashboard(dashboard: Dashboard) -> dict[str, Any]:
    scheduler = dashboard.scheduler
    view = dashboard.view()
    series = dashboard.series
    return {
        "metric": dashboard.selected.value,
        "samples": dashboard.charts.sample_counts(),
        "state": scheduler.state.value,
        "update_period_ms": scheduler.update_period_ms,
        "render_count": scheduler.render_count,
        "retunes": scheduler.retune_count,
        "min": series.min_y.as_point() if series.min_y else None,
        "max": series.max_y.as_point() if series.max_y else None,
        "view": view.to_dict(),
    }


def replay_messages(
    messages: Iterable[StatsMessage],
    config: AppConfig,
    *,
    metric: Metric | str = Metric.RX_RATE,
    ticks_per_message: int = 1,
    pause_after: int | None = None,
    renderer: ChartRenderer | None = None,
) -> dict[str, Any]:
    """Ingest ``messages`` in order, firing the render timer after each one.

    With ``pause_after`` the dashboard is paused once that many messages have
    been ingested; later messages are still buffered but not rendered.
    """

    timer = ManualTimer()
    dashboard = Dashboard(renderer or RecordingRenderer(), config, timer=timer, metric=metric)
    dashboard.start()
    ingested = 0
    for message in messages:
        dashboard.ingest_message(message)
        timer.fire(ticks_per_message)
        ingested += 1
        if ingested == pause_after:
            dashboard.toggle()
    logger.info(
        "Replayed %d messages; update period %.1f ms after %d retunes",
        ingested,
        dashboard.scheduler.update_period_ms,
        dashboard.scheduler.retune_count,
    )
    summary = summarize_dashboard(dashboard)
    summary["messages"] = ingested
    return summary


async def replay_realtime(
    messages: Iterable[StatsMessage],
    config: AppConfig,
    *,
    metric: Metric | str = Metric.RX_RATE,
    speed: float = 1.0,
    renderer: ChartRenderer | None = None,
) -> dict[str, Any]:
    """Replay honouring message timestamps while the scheduler runs on asyncio."""

    dashboard = Dashboard(renderer or LogRenderer(), config, timer=AsyncioTimer(), metric=metric)
    dashboard.start()
    previous_t: float | None = None
    ingested = 0
    try:
        for message in messages:
            if message.t is not None and previous_t is not None and message.t > previous_t:
                await asyncio.sleep((message.t - previous_t) / 1000.0 / speed)
            if message.t is not None:
                previous_t = message.t
            dashboard.ingest_message(message)
            ingested += 1
        # one last frame so the final samples are drawn
        await asyncio.sleep(dashboard.scheduler.update_period_ms / 1000.0)
    finally:
        dashboard.stop()
    summary = summarize_dashboard(dashboard)
    summary["messages"] = ingested
    return summary


__all__ = ["replay_messages", "replay_realtime", "summarize_dashboard"]
