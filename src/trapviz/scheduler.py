"""Adaptive render scheduler.

The scheduler owns a single repeating timer. Every fire calls ``tick()``,
which renders, measures how long rendering took and, every
``tune_window_size`` renders, retunes the update period to half the charting
period clamped to the configured bounds. Hosts plug in a timer backend: Qt,
asyncio, or ``ManualTimer`` for driving ticks synchronously.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from enum import StrEnum
from typing import Protocol

from .config import ChartingPolicy

logger = logging.getLogger(__name__)

PAUSED_UPDATE_PERIOD_MS = 9_999_999_999


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class TimerBackend(Protocol):
    def schedule(self, period_ms: float, callback: Callable[[], None]) -> TimerHandle: ...


class SchedulerState(StrEnum):
    RUNNING = "running"
    PAUSED = "paused"


def clamp_period(period_ms: float, policy: ChartingPolicy) -> float:
    lo = policy.update_period_min_ms
    hi = policy.update_period_max_ms
    if period_ms < lo:
        return lo
    if period_ms > hi:
        return hi
    return period_ms


def target_update_period(policy: ChartingPolicy) -> float:
    """Half the charting period, bounded by the update-period limits."""

    return clamp_period(policy.charting_period_ms / 2, policy)


class RenderScheduler:
    """RUNNING/PAUSED state machine around a repeating render timer."""

    def __init__(
        self,
        render: Callable[[], None],
        policy: ChartingPolicy,
        timer: TimerBackend,
        *,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        policy.validate()
        self.policy = policy
        self._render = render
        self._timer = timer
        self._clock = clock
        self._handle: TimerHandle | None = None
        self._saved_period_ms: float | None = None
        self.state = SchedulerState.RUNNING
        self.update_period_ms = clamp_period(policy.initial_update_period_ms, policy)
        self.render_count = 0
        self.render_time_ms = 0.0
        self.retune_count = 0

    @property
    def running(self) -> bool:
        return self.state is SchedulerState.RUNNING

    @property
    def scheduled(self) -> bool:
        return self._handle is not None

    @property
    def avg_render_time_ms(self) -> float:
        if self.render_count == 0:
            return 0.0
        return self.render_time_ms / self.render_count

    def start(self) -> None:
        if self.running and self._handle is None:
            self._reschedule()

    def stop(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def tick(self) -> bool:
        """Render once and retune when a tuning window completes.

        Returns ``False`` without rendering while paused.
        """

        if not self.running:
            return False
        started = self._clock()
        self._render()
        elapsed_ms = (self._clock() - started) * 1000.0
        self.render_count += 1
        self.render_time_ms += elapsed_ms
        self.maybe_retune()
        return True

    def maybe_retune(self) -> bool:
        if self.render_count % self.policy.tune_window_size != 0:
            return False
        self.retune()
        return True

    def retune(self) -> float:
        if not self.running:
            logger.debug("Retune skipped while paused")
            return self.update_period_ms
        window = self.policy.tune_window_size
        # Measured render cost is reported only; the period follows the charting cadence.
        avg_render_ms = self.avg_render_time_ms
        new_period = target_update_period(self.policy)
        logger.debug(
            "Retune: avg render %.3f ms, charting period %.1f ms, update period %.1f -> %.1f ms",
            avg_render_ms,
            self.policy.charting_period_ms,
            self.update_period_ms,
            new_period,
        )
        if new_period != self.update_period_ms:
            self.update_period_ms = new_period
            if self._handle is not None:
                self._reschedule()
        self.render_count = self.render_count % window
        self.render_time_ms = 0.0
        self.retune_count += 1
        return self.update_period_ms

    def toggle(self) -> SchedulerState:
        """Pause or resume; resuming restores the period saved at pause time."""

        if self.running:
            self._saved_period_ms = self.update_period_ms
            self.update_period_ms = PAUSED_UPDATE_PERIOD_MS
            self.state = SchedulerState.PAUSED
            self.stop()
            logger.info("Rendering paused (saved update period %.1f ms)", self._saved_period_ms)
        else:
            if self._saved_period_ms is not None:
                self.update_period_ms = self._saved_period_ms
            self._saved_period_ms = None
            self.state = SchedulerState.RUNNING
            self._reschedule()
            logger.info("Rendering resumed at %.1f ms", self.update_period_ms)
        return self.state

    def _reschedule(self) -> None:
        self.stop()
        self._handle = self._timer.schedule(self.update_period_ms, self._on_timer)

    def _on_timer(self) -> None:
        self.tick()


class _ManualHandle:
    __slots__ = ("period_ms", "callback", "cancelled", "_owner")

    def __init__(self, owner: ManualTimer, period_ms: float, callback: Callable[[], None]) -> None:
        self._owner = owner
        self.period_ms = period_ms
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        if not self.cancelled:
            self.cancelled = True
            self._owner._forget(self)


class ManualTimer:
    """Timer backend driven explicitly by the caller (tests, offline replay)."""

    def __init__(self) -> None:
        self.live_handles: list[_ManualHandle] = []
        self.history: list[float] = []
        self._elapsed_ms = 0.0

    def schedule(self, period_ms: float, callback: Callable[[], None]) -> _ManualHandle:
        handle = _ManualHandle(self, period_ms, callback)
        self.live_handles.append(handle)
        self.history.append(period_ms)
        self._elapsed_ms = 0.0
        return handle

    def _forget(self, handle: _ManualHandle) -> None:
        if handle in self.live_handles:
            self.live_handles.remove(handle)

    @property
    def period_ms(self) -> float | None:
        if not self.live_handles:
            return None
        return self.live_handles[-1].period_ms

    def fire(self, count: int = 1) -> int:
        """Fire the live handle ``count`` times; returns how many fires happened."""

        fired = 0
        for _ in range(count):
            if not self.live_handles:
                break
            self.live_handles[-1].callback()
            fired += 1
        return fired

    def advance(self, ms: float) -> int:
        """Move simulated time forward, firing whenever a full period elapses."""

        fired = 0
        remaining = ms
        while self.live_handles:
            handle = self.live_handles[-1]
            due_in = handle.period_ms - self._elapsed_ms
            if remaining < due_in:
                self._elapsed_ms += remaining
                break
            remaining -= due_in
            self._elapsed_ms = 0.0
            handle.callback()
            fired += 1
        return fired


class _AsyncioHandle:
    __slots__ = ("_loop", "_period_s", "_callback", "_pending", "cancelled")

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        period_ms: float,
        callback: Callable[[], None],
    ) -> None:
        self._loop = loop
        self._period_s = period_ms / 1000.0
        self._callback = callback
        self.cancelled = False
        self._pending: asyncio.TimerHandle | None = loop.call_later(self._period_s, self._fire)

    def _fire(self) -> None:
        self._pending = None
        if self.cancelled:
            return
        try:
            self._callback()
        except Exception:  # noqa: BLE001 - logged; the next frame still runs
            logger.exception("Render timer callback failed")
        finally:
            if not self.cancelled:
                self._pending = self._loop.call_later(self._period_s, self._fire)

    def cancel(self) -> None:
        self.cancelled = True
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None


class AsyncioTimer:
    """Repeating timer on an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def schedule(self, period_ms: float, callback: Callable[[], None]) -> _AsyncioHandle:
        loop = self._loop or asyncio.get_running_loop()
        return _AsyncioHandle(loop, period_ms, callback)


__all__ = [
    "PAUSED_UPDATE_PERIOD_MS",
    "AsyncioTimer",
    "ManualTimer",
    "RenderScheduler",
    "SchedulerState",
    "TimerBackend",
    "TimerHandle",
    "clamp_period",
    "target_update_period",
]
