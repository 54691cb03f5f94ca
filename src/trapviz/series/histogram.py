from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

DEFAULT_HISTOGRAM_BINS = 20
DEFAULT_MIN_BIN_WIDTH = 1.0


def bin_edges(lo: float, hi: float, bins: int, min_bin_width: float) -> np.ndarray:
    """Return histogram edges covering ``[lo, hi]``.

    ``bins`` equal-width bins span the observed range unless that would make a
    bin narrower than ``min_bin_width``; in that case the width is floored and
    only as many bins as needed to reach ``hi`` are used (at least one). The
    floor never drops below the float spacing at ``max(|lo|, |hi|)``, and the
    returned edges are strictly increasing.
    """

    if bins <= 0:
        raise ValueError("bins must be > 0")
    if not min_bin_width > 0:
        raise ValueError("min_bin_width must be > 0")
    span = hi - lo
    width = max(min_bin_width, float(np.spacing(max(abs(lo), abs(hi)))))
    if span / bins >= width:
        edges = np.linspace(lo, hi, bins + 1)
    else:
        count = max(1, math.ceil(span / width))
        edges = lo + width * np.arange(count + 1, dtype=float)
        edges[-1] = max(edges[-1], hi)
    for idx in range(1, len(edges)):
        if edges[idx] <= edges[idx - 1]:
            edges[idx] = np.nextafter(edges[idx - 1], np.inf)
    return edges


def build_histogram(
    values: Sequence[float],
    bins: int = DEFAULT_HISTOGRAM_BINS,
    min_bin_width: float = DEFAULT_MIN_BIN_WIDTH,
) -> list[tuple[float, int]]:
    """Bin ``values`` into ``(lower_edge, count)`` pairs ordered by edge."""

    if len(values) == 0:
        return []
    arr = np.asarray(values, dtype=float)
    edges = bin_edges(float(arr.min()), float(arr.max()), bins, min_bin_width)
    counts, _ = np.histogram(arr, bins=edges)
    return [(float(edge), int(count)) for edge, count in zip(edges[:-1], counts, strict=True)]


__all__ = ["DEFAULT_HISTOGRAM_BINS", "DEFAULT_MIN_BIN_WIDTH", "bin_edges", "build_histogram"]
