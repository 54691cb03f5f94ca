"""Line-delimited JSON captures of stats messages."""

from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from ..contracts.error import BadInputError, IOErrorEnvelope
from .models import StatsMessage, parse_message


def _numbered_lines(path: Path) -> Iterator[tuple[int, bytes]]:
    try:
        stream = path.open("rb")
    except FileNotFoundError:
        raise
    except OSError as exc:
        raise IOErrorEnvelope(f"Cannot read capture {path}: {exc.strerror or exc}") from exc
    with stream:
        yield from enumerate(stream, start=1)


def _decode_line(raw: bytes) -> Any:
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise BadInputError(f"invalid UTF-8 at byte {exc.start}: {exc.reason}") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise BadInputError(f"invalid JSON: {exc.msg}") from exc


def iter_messages(path: Path) -> Iterator[tuple[int, StatsMessage]]:
    """Yield ``(line_number, message)`` for each non-blank line of ``path``.

    Raises ``BadInputError`` naming the first bad line, ``IOErrorEnvelope``
    when the file cannot be opened.
    """

    for idx, raw in _numbered_lines(path):
        if not raw.strip():
            continue
        try:
            message = parse_message(_decode_line(raw))
        except BadInputError as exc:
            raise BadInputError(f"[line {idx}] {exc}") from exc
        yield idx, message


def validate_file(path: Path) -> list[str]:
    """Return one error string per invalid line; an empty list means the file is clean."""

    problems: list[str] = []
    for idx, raw in _numbered_lines(path):
        if not raw.strip():
            continue
        try:
            parse_message(_decode_line(raw))
        except BadInputError as exc:
            problems.append(f"[invalid line {idx}] {exc}")
    return problems


__all__ = ["iter_messages", "validate_file"]
