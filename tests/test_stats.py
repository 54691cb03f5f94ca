from __future__ import annotations

import pytest

from trapviz.series import summarize


def test_empty_window_returns_empty_sequence() -> None:
    assert summarize([]) == []


def test_summary_labels_and_values() -> None:
    stats = summarize([3.0, 1.0, 2.0])

    assert stats == [
        ("min", 1.0),
        ("max", 3.0),
        ("mean", 2.0),
        ("p50", 2.0),
        ("p90", 3.0),
        ("p99", 3.0),
    ]


def test_single_value_window() -> None:
    stats = dict(summarize([5]))

    assert stats == {"min": 5.0, "max": 5.0, "mean": 5.0, "p50": 5.0, "p90": 5.0, "p99": 5.0}


def test_quantiles_use_nearest_rank() -> None:
    stats = dict(summarize([float(v) for v in range(1, 101)]))

    assert stats["mean"] == pytest.approx(50.5)
    assert stats["p50"] == 51.0
    assert stats["p90"] == 90.0
    assert stats["p99"] == 99.0
