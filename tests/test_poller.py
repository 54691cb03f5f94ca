from __future__ import annotations

import gzip
import json
import threading
from typing import Any

import pytest

from trapviz.contracts.error import BadInputError
from trapviz.ingest import poller as poller_mod
from trapviz.ingest.models import StatsMessage
from trapviz.ingest.poller import HttpPoller, decode_batch, validate_endpoint
from trapviz.series.metrics import Metric


class FakeResponse:
    def __init__(self, body: bytes, headers: dict[str, str] | None = None) -> None:
        self._body = body
        self.headers = headers or {}

    def read(self, limit: int = -1) -> bytes:
        return self._body if limit < 0 else self._body[:limit]

    def __enter__(self) -> FakeResponse:
        return self

    def __exit__(self, *exc: Any) -> None:
        return None


@pytest.mark.parametrize(
    "url",
    ["ftp://example.com/stats", "file:///etc/passwd", "http:///stats", "stats"],
)
def test_validate_endpoint_rejects(url: str) -> None:
    with pytest.raises(ValueError):
        validate_endpoint(url)


def test_validate_endpoint_strips_whitespace() -> None:
    assert validate_endpoint("  http://127.0.0.1:8080/stats ") == "http://127.0.0.1:8080/stats"


def test_decode_batch_shapes() -> None:
    single = decode_batch({"rxRate": 1.0})
    listed = decode_batch([{"rxRate": 1.0}, {"rxRate": 2.0}])
    wrapped = decode_batch({"samples": [{"txRate": 3.0}]})

    assert len(single) == 1
    assert [msg.rx_rate for msg in listed] == [1.0, 2.0]
    assert wrapped[0].values() == [(Metric.TX_RATE, 3.0)]


def test_fetch_decodes_plain_and_gzip(monkeypatch: pytest.MonkeyPatch) -> None:
    body = json.dumps([{"t": 10, "rxRate": 5.0}]).encode("utf-8")
    responses = [
        FakeResponse(body),
        FakeResponse(gzip.compress(body), {"Content-Encoding": "gzip"}),
    ]
    seen: list[str] = []

    def fake_urlopen(req: Any, timeout: float) -> FakeResponse:
        seen.append(req.full_url)
        return responses.pop(0)

    monkeypatch.setattr(poller_mod, "urlopen", fake_urlopen)
    poller = HttpPoller("http://127.0.0.1:9000/stats")

    assert poller.fetch()[0].rx_rate == 5.0
    assert poller.fetch()[0].t == 10.0
    assert seen == ["http://127.0.0.1:9000/stats"] * 2


def test_fetch_rejects_invalid_json(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(poller_mod, "urlopen", lambda req, timeout: FakeResponse(b"<html>"))
    poller = HttpPoller("http://127.0.0.1:9000/stats")

    with pytest.raises(BadInputError, match="invalid JSON"):
        poller.fetch()


def test_fetch_rejects_oversized_response(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(poller_mod, "_MAX_RESPONSE_BYTES", 8)
    monkeypatch.setattr(poller_mod, "urlopen", lambda req, timeout: FakeResponse(b"[" * 64))
    poller = HttpPoller("http://127.0.0.1:9000/stats")

    with pytest.raises(BadInputError, match="exceeds"):
        poller.fetch()


def test_background_loop_delivers_messages_and_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    bodies = [b"{broken", json.dumps({"txDelta": 2.0}).encode("utf-8")]

    def fake_urlopen(req: Any, timeout: float) -> FakeResponse:
        body = bodies.pop(0) if bodies else b"[]"
        return FakeResponse(body)

    monkeypatch.setattr(poller_mod, "urlopen", fake_urlopen)
    poller = HttpPoller("http://127.0.0.1:9000/stats", interval=0.01)
    delivered = threading.Event()
    received: list[StatsMessage] = []
    errors: list[Exception] = []

    def on_messages(messages: list[StatsMessage]) -> None:
        received.extend(messages)
        delivered.set()

    poller.on_messages = on_messages
    poller.on_error = errors.append
    poller.start()
    try:
        assert delivered.wait(2.0)
    finally:
        poller.stop()

    assert not poller.running
    assert received[0].tx_delta == 2.0
    assert isinstance(errors[0], BadInputError)
