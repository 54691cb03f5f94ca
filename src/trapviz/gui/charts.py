# mypy: ignore-errors
"""Three linked pyqtgraph charts acting as the dashboard's renderer."""

from __future__ import annotations

from collections.abc import Callable

from ..render import ChartView
from ..series.metrics import Metric
from .common import (
    QComboBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
    pg,
    style_plot,
)


class ChartsPane(QWidget):  # type: ignore[misc]
    """Main line chart, distribution histogram and basic-stats bars."""

    def __init__(self, parent: QWidget | None = None) -> None:  # type: ignore[override]
        super().__init__(parent)
        self.setObjectName("chartsPane")
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)

        controls = QHBoxLayout()
        controls.addWidget(QLabel("Series:"))
        self.series_selector = QComboBox()
        self.series_selector.addItems([metric.value for metric in Metric])
        controls.addWidget(self.series_selector)
        self.pause_button = QPushButton("Pause")
        self.clear_button = QPushButton("Clear")
        controls.addWidget(self.pause_button)
        controls.addWidget(self.clear_button)
        controls.addStretch()
        self.status_label = QLabel("Waiting for samples…")
        self.status_label.setObjectName("chartStatus")
        controls.addWidget(self.status_label)
        layout.addLayout(controls)

        self.main_plot = pg.PlotWidget()
        self.main_plot.setObjectName("mainPlot")
        self.main_plot.showGrid(x=True, y=True, alpha=0.3)
        self._main_curve = self.main_plot.plot(pen=pg.mkPen("#00FF6C", width=2.2))
        layout.addWidget(self.main_plot, 2)

        lower = QHBoxLayout()
        self.hist_plot = pg.PlotWidget()
        self.hist_plot.setObjectName("histogramPlot")
        self.hist_plot.setLabel("left", "Count", color="#F97316")
        self.hist_plot.setLabel("bottom", "Bin", color="#8CA3AF")
        style_plot(
            self.hist_plot, title="Distribution", title_color="#F97316", axis_color="#8CA3AF"
        )
        self._hist_bars = pg.BarGraphItem(
            x=[0], height=[0], width=1.0, brush=pg.mkBrush("#F97316"), pen=pg.mkPen("#F97316")
        )
        self.hist_plot.addItem(self._hist_bars)
        lower.addWidget(self.hist_plot)

        self.stats_plot = pg.PlotWidget()
        self.stats_plot.setObjectName("statsPlot")
        style_plot(
            self.stats_plot, title="Basic Stats", title_color="#7B61FF", axis_color="#8CA3AF"
        )
        self._stats_bars = pg.BarGraphItem(
            x=[0], height=[0], width=0.6, brush=pg.mkBrush("#7B61FF"), pen=pg.mkPen("#7B61FF")
        )
        self.stats_plot.addItem(self._stats_bars)
        lower.addWidget(self.stats_plot)
        layout.addLayout(lower, 1)

    def on_series_selected(self, callback: Callable[[str], None]) -> None:
        self.series_selector.currentTextChanged.connect(callback)

    def set_running(self, running: bool) -> None:
        self.pause_button.setText("Pause" if running else "Resume")

    def bind(self, view: ChartView) -> None:
        idx = self.series_selector.findText(view.metric.value)
        if idx >= 0 and idx != self.series_selector.currentIndex():
            self.series_selector.blockSignals(True)
            self.series_selector.setCurrentIndex(idx)
            self.series_selector.blockSignals(False)
        style_plot(
            self.main_plot, title=view.meta.title, title_color="#00FF6C", axis_color="#8CA3AF"
        )
        self.main_plot.setLabel("left", view.meta.ylabel, color="#00FF6C")
        self.main_plot.setLabel("bottom", view.meta.xlabel, color="#8CA3AF")
        self.stats_plot.setLabel("left", view.meta.ylabel, color="#7B61FF")
        self.render_main(view)
        self.render_histogram(view)
        self.render_stats(view)

    def render_main(self, view: ChartView) -> None:
        xs = [sample.x for sample in view.filtered_data]
        ys = [sample.y for sample in view.filtered_data]
        self._main_curve.setData(xs, ys)
        if ys:
            self.status_label.setText(f"{len(ys)} points · last {ys[-1]:.2f}")
        else:
            self.status_label.setText("Waiting for samples…")

    def render_histogram(self, view: ChartView) -> None:
        if not view.hist_data:
            self._hist_bars.setOpts(x=[0], height=[0], width=1.0)
            return
        edges = [edge for edge, _count in view.hist_data]
        width = edges[1] - edges[0] if len(edges) > 1 else 1.0
        self._hist_bars.setOpts(
            x=[edge + width / 2 for edge in edges],
            height=[count for _edge, count in view.hist_data],
            width=width * 0.9,
        )

    def render_stats(self, view: ChartView) -> None:
        heights = [value for _label, value in view.basic_stats] or [0]
        xs = list(range(len(heights)))
        self._stats_bars.setOpts(x=xs, height=heights, width=0.6)
        axis = self.stats_plot.getAxis("bottom")
        axis.setTicks([[(idx, label) for idx, (label, _value) in enumerate(view.basic_stats)]])


__all__ = ["ChartsPane"]
