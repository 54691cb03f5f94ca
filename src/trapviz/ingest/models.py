"""Pydantic models for incoming stats messages."""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..contracts.error import BadInputError
from ..series.metrics import Metric


def _metric_field(metric: Metric) -> Any:
    return Field(
        default=None,
        alias=metric.value,
        description=f"Value of {metric.value} for this sample period.",
    )


class StatsMessage(BaseModel):
    """One sample period: an optional timestamp plus any subset of the metrics."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    t: float | None = Field(
        default=None,
        description="Sample time in ms; when omitted the dashboard numbers samples itself.",
    )
    tx_delta: float | None = _metric_field(Metric.TX_DELTA)
    rx_delta: float | None = _metric_field(Metric.RX_DELTA)
    rx_rate: float | None = _metric_field(Metric.RX_RATE)
    tx_rate: float | None = _metric_field(Metric.TX_RATE)
    tx_packet_rate: float | None = _metric_field(Metric.TX_PACKET_RATE)
    rx_packet_rate: float | None = _metric_field(Metric.RX_PACKET_RATE)
    tx_packet_delta: float | None = _metric_field(Metric.TX_PACKET_DELTA)
    rx_packet_delta: float | None = _metric_field(Metric.RX_PACKET_DELTA)

    @field_validator("*")
    @classmethod
    def check_finite(cls, value: float | None) -> float | None:
        if value is not None and not math.isfinite(value):
            raise ValueError("must be a finite number")
        return value

    def values(self) -> list[tuple[Metric, float]]:
        """Metric values present in this message, in ``Metric`` declaration order."""

        dumped = self.model_dump(by_alias=True)
        return [
            (metric, float(dumped[metric.value]))
            for metric in Metric
            if dumped[metric.value] is not None
        ]


def parse_message(payload: Any) -> StatsMessage:
    """Validate one decoded JSON payload, raising ``BadInputError`` on failure."""

    if not isinstance(payload, dict):
        raise BadInputError(f"stats message must be a JSON object; got {type(payload).__name__}")
    try:
        return StatsMessage.model_validate(payload)
    except ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or '<root>'}: {err['msg']}"
            for err in exc.errors()
        )
        raise BadInputError(f"invalid stats message: {details}") from exc


__all__ = ["StatsMessage", "parse_message"]
