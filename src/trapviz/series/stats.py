"""Descriptive statistics rendered as a small bar series."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

SUMMARY_QUANTILES: tuple[tuple[str, float], ...] = (("p50", 0.5), ("p90", 0.9), ("p99", 0.99))


def summarize(values: Sequence[float]) -> list[tuple[str, float]]:
    """Return ``[(label, value), ...]`` for min, max, mean and quantiles.

    Quantiles use the nearest-rank index ``round(p * (n - 1))`` on the sorted
    window. An empty window yields an empty list.
    """

    if len(values) == 0:
        return []
    data = np.sort(np.asarray(values, dtype=float))
    last = len(data) - 1
    out: list[tuple[str, float]] = [
        ("min", float(data[0])),
        ("max", float(data[-1])),
        ("mean", float(data.mean())),
    ]
    for label, p in SUMMARY_QUANTILES:
        idx = min(last, max(0, int(round(p * last))))
        out.append((label, float(data[idx])))
    return out


__all__ = ["SUMMARY_QUANTILES", "summarize"]
