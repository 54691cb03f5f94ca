"""Windowed decimation of raw samples for charting.

Windows are aligned to multiples of the charting period: a sample at ``x``
falls into window ``floor(x / period)``. Each non-empty window contributes a
single point placed at the most recent sample time seen in that window, with
the mean of the window's values. The partition depends only on ``x`` and the
period, so decimating the same data twice yields the same points.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from statistics import fmean

from ..contracts.error import BadInputError
from .metrics import Sample


@dataclass(frozen=True, slots=True)
class Decimation:
    """Result of one decimation pass."""

    period_ms: float
    points: list[Sample] = field(default_factory=list)
    first_window: int | None = None

    @property
    def horizon(self) -> float | None:
        """Start of the oldest retained window, or ``None`` when empty."""

        if self.first_window is None:
            return None
        return self.first_window * self.period_ms

    def covers(self, sample: Sample) -> bool:
        if self.first_window is None:
            return False
        return window_index(sample.x, self.period_ms) >= self.first_window


def _check_period(period_ms: float) -> None:
    if not period_ms > 0 or math.isinf(period_ms):
        raise BadInputError(f"charting period must be a positive finite number; got {period_ms!r}")


def window_index(x: float, period_ms: float) -> int:
    return math.floor(x / period_ms)


def partition(data: Iterable[Sample], period_ms: float) -> dict[int, list[Sample]]:
    """Group samples by window index, keeping arrival order inside each window."""

    _check_period(period_ms)
    windows: dict[int, list[Sample]] = {}
    for sample in data:
        windows.setdefault(window_index(sample.x, period_ms), []).append(sample)
    return windows


def decimate(
    data: Sequence[Sample], period_ms: float, budget: int | None = None
) -> Decimation:
    """Reduce ``data`` to one point per window, keeping the newest ``budget`` windows."""

    windows = partition(data, period_ms)
    if not windows:
        return Decimation(period_ms=period_ms)
    keys = sorted(windows)
    if budget is not None and budget > 0:
        keys = keys[-budget:]
    points = [
        Sample(
            x=max(sample.x for sample in windows[key]),
            y=fmean(sample.y for sample in windows[key]),
        )
        for key in keys
    ]
    return Decimation(period_ms=period_ms, points=points, first_window=keys[0])


def horizon_window(data: Iterable[Sample], period_ms: float, budget: int) -> int | None:
    """Index of the oldest window ``decimate`` keeps for ``budget``; ``None`` for no data."""

    _check_period(period_ms)
    keys = sorted({window_index(sample.x, period_ms) for sample in data})
    if not keys:
        return None
    if budget <= 0:
        return keys[0]
    return keys[max(0, len(keys) - budget)]


def window_values(data: Iterable[Sample], decimation: Decimation) -> list[float]:
    """Raw values of the samples inside the retained windows, in arrival order."""

    return [sample.y for sample in data if decimation.covers(sample)]


__all__ = [
    "Decimation",
    "decimate",
    "horizon_window",
    "partition",
    "window_index",
    "window_values",
]
