# mypy: ignore-errors
"""Chart window wiring: dashboard, Qt timer, selection and live polling."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from ..config import AppConfig
from ..contracts.error import EnvelopeError
from ..dashboard import Dashboard
from ..ingest.models import StatsMessage
from ..ingest.poller import HttpPoller
from ..series.metrics import Metric
from .charts import ChartsPane
from .common import QApplication, QMainWindow, QObject, pyqtSignal, require_qt
from .timer import QtTimer

logger = logging.getLogger(__name__)

if QObject is not object:  # pragma: no cover - requires PyQt6

    class _UiBridge(QObject):  # type: ignore[misc]
        call = pyqtSignal(object)

        def __init__(self) -> None:
            super().__init__()
            self.call.connect(self._dispatch)

        def submit(self, func: Callable[..., None], *args, **kwargs) -> None:
            self.call.emit((func, args, kwargs))

        def _dispatch(self, payload: object) -> None:
            if not isinstance(payload, tuple):
                return
            func, args, kwargs = payload
            if callable(func):
                func(*args, **kwargs)

else:  # pragma: no cover - PyQt6 missing

    class _UiBridge:
        def submit(self, func: Callable[..., None], *args, **kwargs) -> None:
            func(*args, **kwargs)


class ChartController:
    """Connects pane controls and the optional poller to one ``Dashboard``."""

    def __init__(
        self,
        pane: ChartsPane,
        dashboard: Dashboard,
        poller: HttpPoller | None = None,
    ) -> None:
        self._pane = pane
        self.dashboard = dashboard
        self._poller = poller
        self._ui = _UiBridge()
        pane.on_series_selected(self._on_series_selected)
        pane.pause_button.clicked.connect(self._on_pause_clicked)
        pane.clear_button.clicked.connect(self.dashboard.clear)
        if poller is not None:
            poller.on_messages = self._handle_messages
            poller.on_error = self._handle_error

    def start(self) -> None:
        self.dashboard.start()
        if self._poller is not None:
            self._poller.start()

    def shutdown(self) -> None:
        if self._poller is not None:
            self._poller.stop()
        self.dashboard.stop()

    def _on_series_selected(self, name: str) -> None:
        try:
            self.dashboard.select_metric(name)
        except EnvelopeError as exc:
            self._pane.status_label.setText(str(exc))

    def _on_pause_clicked(self) -> None:
        self._pane.set_running(self.dashboard.toggle())

    def _handle_messages(self, messages: list[StatsMessage]) -> None:
        self._ui.submit(self._ingest, messages)

    def _ingest(self, messages: list[StatsMessage]) -> None:
        for message in messages:
            self.dashboard.ingest_message(message)

    def _handle_error(self, exc: Exception) -> None:
        self._ui.submit(self._pane.status_label.setText, f"Error: {exc}")


if QMainWindow is not object:  # pragma: no cover - requires PyQt6

    class ChartWindow(QMainWindow):  # type: ignore[misc]
        def __init__(self) -> None:
            super().__init__()
            self._controller: ChartController | None = None

        def set_controller(self, controller: ChartController) -> None:
            self._controller = controller

        def closeEvent(self, event) -> None:  # type: ignore[override]  # noqa: N802
            if self._controller is not None:
                self._controller.shutdown()
            super().closeEvent(event)

else:  # pragma: no cover - PyQt6 missing
    ChartWindow = object


def build_window(
    config: AppConfig,
    *,
    url: str | None = None,
    metric: Metric | str = Metric.RX_RATE,
    poll_interval: float = 0.5,
) -> tuple[ChartWindow, ChartController]:
    require_qt()
    window = ChartWindow()
    pane = ChartsPane(window)
    dashboard = Dashboard(pane, config, timer=QtTimer(window), metric=metric)
    poller = HttpPoller(url, interval=poll_interval) if url else None
    controller = ChartController(pane, dashboard, poller)
    window.set_controller(controller)
    window.setCentralWidget(pane)
    window.setWindowTitle("trapviz")
    window.resize(1100, 760)
    return window, controller


def run_gui(
    config: AppConfig,
    argv: Sequence[str] | None = None,
    *,
    url: str | None = None,
    metric: Metric | str = Metric.RX_RATE,
) -> int:
    """Launch the chart window and block in the Qt event loop."""

    require_qt()
    app = QApplication.instance() or QApplication(list(argv or []))
    window, controller = build_window(config, url=url, metric=metric)
    controller.start()
    window.show()
    logger.info("Chart window started (source=%s)", url or "none")
    return app.exec()


__all__ = ["ChartController", "ChartWindow", "build_window", "run_gui"]
