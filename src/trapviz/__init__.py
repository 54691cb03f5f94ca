"""Throughput telemetry charts with an adaptive render loop."""

from .config import AppConfig, ChartingPolicy, HistogramPolicy, load_app_config
from .dashboard import Dashboard
from .render import ChartRenderer, ChartView, LogRenderer, RecordingRenderer
from .scheduler import AsyncioTimer, ManualTimer, RenderScheduler, SchedulerState
from .series import ChartData, Metric, MetricSeries, Sample

__version__ = "0.1.0"

__all__ = [
    "AppConfig",
    "AsyncioTimer",
    "ChartData",
    "ChartRenderer",
    "ChartView",
    "ChartingPolicy",
    "Dashboard",
    "HistogramPolicy",
    "LogRenderer",
    "ManualTimer",
    "Metric",
    "MetricSeries",
    "RecordingRenderer",
    "RenderScheduler",
    "Sample",
    "SchedulerState",
    "load_app_config",
]
