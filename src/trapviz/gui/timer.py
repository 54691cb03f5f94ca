# mypy: ignore-errors
"""Qt event-loop timer backend for the render scheduler."""

from __future__ import annotations

from collections.abc import Callable

from .common import QTimer, require_qt


class QtTimerHandle:
    __slots__ = ("_timer",)

    def __init__(self, timer: QTimer) -> None:
        self._timer = timer

    @property
    def interval_ms(self) -> int:
        return self._timer.interval()

    def cancel(self) -> None:
        if self._timer is None:
            return
        self._timer.stop()
        self._timer.timeout.disconnect()
        self._timer.deleteLater()
        self._timer = None


class QtTimer:
    """Creates one repeating ``QTimer`` per schedule call, parented to ``parent``."""

    def __init__(self, parent=None) -> None:
        require_qt()
        self._parent = parent

    def schedule(self, period_ms: float, callback: Callable[[], None]) -> QtTimerHandle:
        timer = QTimer(self._parent)
        # QTimer intervals are int milliseconds capped at 2**31 - 1.
        timer.setInterval(max(1, min(int(round(period_ms)), 2**31 - 1)))
        timer.timeout.connect(callback)
        timer.start()
        return QtTimerHandle(timer)


__all__ = ["QtTimer", "QtTimerHandle"]
