"""Contract helpers for trapviz."""

from .error import (
    BadInputError,
    EnvelopeError,
    ErrorEnvelope,
    Exit,
    IOErrorEnvelope,
    PolicyError,
    UnknownMetricError,
    die,
    guard_cli,
)

__all__ = [
    "Exit",
    "ErrorEnvelope",
    "EnvelopeError",
    "BadInputError",
    "PolicyError",
    "UnknownMetricError",
    "IOErrorEnvelope",
    "guard_cli",
    "die",
]
