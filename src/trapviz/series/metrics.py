"""Tracked metric identifiers, samples and their presentation metadata."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from ..contracts.error import UnknownMetricError


class Metric(StrEnum):
    """Logical throughput quantities reported per sample period."""

    TX_DELTA = "txDelta"
    RX_DELTA = "rxDelta"
    RX_RATE = "rxRate"
    TX_RATE = "txRate"
    TX_PACKET_RATE = "txPacketRate"
    RX_PACKET_RATE = "rxPacketRate"
    TX_PACKET_DELTA = "txPacketDelta"
    RX_PACKET_DELTA = "rxPacketDelta"


@dataclass(frozen=True, slots=True)
class Sample:
    """One raw or decimated point; ``x`` is a timestamp (ms) or ordinal."""

    x: float
    y: float

    def as_point(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True, slots=True)
class SeriesMeta:
    title: str
    ylabel: str
    xlabel: str


SERIES_META: dict[Metric, SeriesMeta] = {
    Metric.TX_DELTA: SeriesMeta("Tx Bytes per sample period", "Tx Bytes per sample", "Time"),
    Metric.RX_DELTA: SeriesMeta("Rx Bytes per sample period", "Rx Bytes per sample", "Time"),
    Metric.RX_RATE: SeriesMeta("Ingress throughput in kbps", "kbps, mean", "sample number"),
    Metric.TX_RATE: SeriesMeta("Egress throughput in kbps", "kbps, mean", "sample number"),
    Metric.TX_PACKET_RATE: SeriesMeta("Egress packet rate", "pkts per sec, mean", "time"),
    Metric.RX_PACKET_RATE: SeriesMeta("Ingress packet rate", "pkts per sec, mean", "time"),
    Metric.TX_PACKET_DELTA: SeriesMeta(
        "Egress packets per sample", "packets sent", "sample number"
    ),
    Metric.RX_PACKET_DELTA: SeriesMeta(
        "Ingress packets per sample", "packets received", "sample number"
    ),
}


def resolve_metric(name: Metric | str) -> Metric:
    """Return the ``Metric`` for ``name`` or raise ``UnknownMetricError``."""

    if isinstance(name, Metric):
        return name
    try:
        return Metric(str(name).strip())
    except ValueError:
        raise UnknownMetricError(name) from None


__all__ = ["Metric", "Sample", "SeriesMeta", "SERIES_META", "resolve_metric"]
