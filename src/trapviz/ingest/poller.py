"""Background HTTP poller delivering stats messages."""

from __future__ import annotations

import gzip
import json
import logging
import threading
from collections.abc import Callable
from typing import Any
from urllib.parse import urlparse
from urllib.request import Request, urlopen

from ..contracts.error import BadInputError
from .models import StatsMessage, parse_message

logger = logging.getLogger(__name__)

ALLOWED_ENDPOINT_SCHEMES = {"http", "https"}
_MAX_RESPONSE_BYTES = 5 * 1024 * 1024


def validate_endpoint(url: str) -> str:
    if url is None:
        raise ValueError("Stats endpoint URL must be provided")
    candidate = url.strip()
    parsed = urlparse(candidate)
    if parsed.scheme not in ALLOWED_ENDPOINT_SCHEMES:
        raise ValueError(f"Stats endpoint must use http or https; got {url!r}")
    if not parsed.hostname:
        raise ValueError(f"Stats endpoint must include a host; got {url!r}")
    return candidate


def decode_batch(payload: Any) -> list[StatsMessage]:
    """Accept a single message, a list of messages, or ``{"samples": [...]}``."""

    if isinstance(payload, dict) and isinstance(payload.get("samples"), list):
        payload = payload["samples"]
    if isinstance(payload, list):
        return [parse_message(item) for item in payload]
    return [parse_message(payload)]


class HttpPoller:
    """Polling loop that fetches stats batches on a background thread.

    Callbacks run on the poller thread; hosts that own the dashboard on
    another thread must marshal them back themselves.
    """

    def __init__(self, url: str, interval: float = 0.5, timeout: float = 1.0) -> None:
        self.url = validate_endpoint(url)
        self.interval = interval
        self.timeout = timeout
        self._thread: threading.Thread | None = None
        self._stop = threading.Event()
        self.on_messages: Callable[[list[StatsMessage]], None] | None = None
        self.on_error: Callable[[Exception], None] | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="trapviz-poller", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        thread = self._thread
        if thread and thread is not threading.current_thread():
            thread.join(timeout=1.0)
        self._thread = None

    def fetch(self) -> list[StatsMessage]:
        req = Request(  # noqa: S310  # nosec B310 - scheme checked in validate_endpoint
            self.url, headers={"Accept": "application/json", "Accept-Encoding": "gzip"}
        )
        with urlopen(req, timeout=self.timeout) as resp:  # noqa: S310  # nosec B310
            payload = resp.read(_MAX_RESPONSE_BYTES + 1)
            if len(payload) > _MAX_RESPONSE_BYTES:
                raise BadInputError("stats response exceeds 5 MiB")
            if resp.headers.get("Content-Encoding", "").lower() == "gzip":
                payload = gzip.decompress(payload)
        try:
            decoded = json.loads(payload.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise BadInputError(f"stats endpoint returned invalid JSON: {exc}") from exc
        return decode_batch(decoded)

    def _run(self) -> None:
        while not self._stop.is_set():
            try:
                messages = self.fetch()
                if messages and self.on_messages:
                    self.on_messages(messages)
            except Exception as exc:  # noqa: BLE001 - reported through on_error
                logger.warning("Stats poll failed: %s", exc)
                if self.on_error:
                    self.on_error(exc)
            self._stop.wait(self.interval)
        self._thread = None


__all__ = ["ALLOWED_ENDPOINT_SCHEMES", "HttpPoller", "decode_batch", "validate_endpoint"]
