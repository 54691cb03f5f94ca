"""Sample ingestion: message model, NDJSON captures and HTTP polling."""

from .models import StatsMessage, parse_message
from .ndjson import iter_messages, validate_file
from .poller import HttpPoller, decode_batch, validate_endpoint

__all__ = [
    "HttpPoller",
    "StatsMessage",
    "decode_batch",
    "iter_messages",
    "parse_message",
    "validate_endpoint",
    "validate_file",
]
