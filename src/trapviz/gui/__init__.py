"""PyQt6 chart window (install the ``gui`` extra)."""

from __future__ import annotations

from typing import TYPE_CHECKING

__all__ = ["ChartController", "ChartsPane", "QtTimer", "build_window", "run_gui"]


def __getattr__(name: str):  # pragma: no cover - thin re-export shim
    if name in {"ChartController", "build_window", "run_gui"}:
        from . import app

        return getattr(app, name)
    if name == "ChartsPane":
        from .charts import ChartsPane

        return ChartsPane
    if name == "QtTimer":
        from .timer import QtTimer

        return QtTimer
    raise AttributeError(name)


if TYPE_CHECKING:  # pragma: no cover - import-time typing only
    from .app import ChartController, build_window, run_gui
    from .charts import ChartsPane
    from .timer import QtTimer
