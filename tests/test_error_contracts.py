from __future__ import annotations

import json

import pytest

from trapviz.contracts.error import (
    BadInputError,
    ErrorEnvelope,
    Exit,
    IOErrorEnvelope,
    PolicyError,
    UnknownMetricError,
    guard_cli,
)


def _raise(exc: Exception) -> None:
    raise exc


@pytest.mark.parametrize(
    "exc, code, label",
    [
        (BadInputError("bad"), Exit.BAD_INPUT, "BadInput"),
        (UnknownMetricError("bogus"), Exit.POLICY, "UnknownMetric"),
        (PolicyError("nope"), Exit.POLICY, "Policy"),
        (IOErrorEnvelope("disk"), Exit.IO, "IO"),
        (FileNotFoundError("gone.ndjson"), Exit.IO, "FileNotFound"),
    ],
)
def test_guard_cli_maps_exceptions(
    capsys: pytest.CaptureFixture[str], exc: Exception, code: Exit, label: str
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        guard_cli(_raise)(exc)

    assert excinfo.value.code == int(code)
    payload = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
    assert payload["error"] == label


def test_unknown_metric_hint_lists_metrics() -> None:
    exc = UnknownMetricError("bogus")

    assert str(exc) == "Unknown metric: 'bogus'"
    assert exc.hint is not None
    assert "rxPacketDelta" in exc.hint
    assert isinstance(exc, PolicyError)


def test_guard_cli_passes_through_results() -> None:
    assert guard_cli(lambda value: value * 2)(21) == 42


def test_envelope_omits_empty_hint() -> None:
    assert json.loads(ErrorEnvelope("BadInput", "detail").to_json()) == {
        "error": "BadInput",
        "detail": "detail",
    }
    assert json.loads(ErrorEnvelope("BadInput", "detail", "fix it").to_json())["hint"] == "fix it"
