"""Breakdown of a reciprocal rank score."""

from typing import ClassVar

from pydantic import Field

from rankeval.metrics.base import MetricDetail
from rankeval.metrics.registry import register_metric_detail
from rankeval.wire.stream import INT_MAX, StreamInput, StreamOutput

NO_RELEVANT_DOCUMENT = -1


@register_metric_detail
class ReciprocalRankDetail(MetricDetail):
    """
    Position of the first relevant document.

    ``first_relevant`` is a 1-based rank, or -1 when no relevant document
    was retrieved.
    """

    tag: ClassVar[str] = "reciprocal_rank"

    first_relevant: int = Field(..., ge=NO_RELEVANT_DOCUMENT, le=INT_MAX)

    def write_payload(self, out: StreamOutput) -> None:
        out.write_int(self.first_relevant)

    @classmethod
    def read_payload(cls, stream: StreamInput) -> "ReciprocalRankDetail":
        return cls(first_relevant=stream.read_int("reciprocal_rank.first_relevant"))
