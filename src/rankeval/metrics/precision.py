"""Breakdown of a precision-at-k score."""

from typing import ClassVar

from pydantic import Field

from rankeval.metrics.base import MetricDetail
from rankeval.metrics.registry import register_metric_detail
from rankeval.wire.stream import VINT_MAX, StreamInput, StreamOutput


@register_metric_detail
class PrecisionAtKDetail(MetricDetail):
    """
    Counts behind a precision-at-k score.

    Attributes:
        k: Number of top-ranked documents that were inspected
        relevant: How many of those were rated relevant
    """

    tag: ClassVar[str] = "precision_at_k"

    k: int = Field(..., ge=0, le=VINT_MAX)
    relevant: int = Field(..., ge=0, le=VINT_MAX)

    def write_payload(self, out: StreamOutput) -> None:
        out.write_vint(self.k)
        out.write_vint(self.relevant)

    @classmethod
    def read_payload(cls, stream: StreamInput) -> "PrecisionAtKDetail":
        return cls(
            k=stream.read_vint("precision_at_k.k"),
            relevant=stream.read_vint("precision_at_k.relevant"),
        )
