# mypy: ignore-errors
"""Shared helpers and optional Qt imports for the chart window."""

from __future__ import annotations

from typing import Any, cast

QT_IMPORT_ERROR: Exception | None = None

try:  # pragma: no cover - only when PyQt6 is present
    from PyQt6.QtCore import QObject, Qt, QTimer, pyqtSignal
    from PyQt6.QtWidgets import (
        QApplication,
        QComboBox,
        QHBoxLayout,
        QLabel,
        QMainWindow,
        QPushButton,
        QVBoxLayout,
        QWidget,
    )
except Exception as exc:  # pragma: no cover - CI or headless environments  # noqa: BLE001
    QT_IMPORT_ERROR = exc
    QApplication = cast(Any, object)
    QMainWindow = cast(Any, object)
    QWidget = cast(Any, object)
    QLabel = cast(Any, object)
    QPushButton = cast(Any, object)
    QVBoxLayout = cast(Any, object)
    QHBoxLayout = cast(Any, object)
    QComboBox = cast(Any, None)
    QTimer = cast(Any, None)
    QObject = cast(Any, object)
    pyqtSignal = None  # type: ignore[assignment]  # noqa: N816
    Qt = None  # type: ignore[assignment]

try:  # pragma: no cover - optional plotting dependency
    import pyqtgraph as pg  # type: ignore[import-not-found]
except Exception as exc:  # pragma: no cover - charting optional  # noqa: BLE001
    QT_IMPORT_ERROR = QT_IMPORT_ERROR or exc
    pg = cast(Any, None)
else:  # pragma: no cover - requires PyQtGraph
    pg.setConfigOption("background", "#121212")
    pg.setConfigOption("foreground", "#EEEEEE")
    pg.setConfigOptions(antialias=True)


def require_qt() -> None:
    if QT_IMPORT_ERROR is not None:
        raise RuntimeError(
            "The chart window requires PyQt6 and pyqtgraph. Install with `pip install .[gui]`."
        ) from QT_IMPORT_ERROR


def style_plot(
    widget: Any,
    *,
    title: str,
    title_color: str,
    axis_color: str,
    border_color: str = "#2D2D2D",
) -> None:
    """Apply a consistent dark theme to a pyqtgraph PlotWidget."""

    if pg is None or Qt is None:
        return
    widget.setStyleSheet(
        f"border: 1px solid {border_color}; border-radius: 12px; background-color: #11141d;"
    )
    plot_item = widget.getPlotItem()
    plot_item.setTitle(
        f"<span style='color:{title_color}; font-size:14px; font-weight:600;'>{title}</span>"
    )
    axis_pen = pg.mkPen(border_color, width=1.1)
    text_pen = pg.mkPen(axis_color)
    for axis_name in ("left", "bottom"):
        axis = plot_item.getAxis(axis_name)
        axis.setPen(axis_pen)
        axis.setTextPen(text_pen)
    plot_item.getViewBox().setBorder(axis_pen)


__all__ = [
    "QT_IMPORT_ERROR",
    "QApplication",
    "QComboBox",
    "QHBoxLayout",
    "QLabel",
    "QMainWindow",
    "QObject",
    "QPushButton",
    "QTimer",
    "QVBoxLayout",
    "QWidget",
    "Qt",
    "pg",
    "pyqtSignal",
    "require_qt",
    "style_plot",
]
