"""Breakdown of a discounted cumulative gain score."""

from typing import ClassVar

from pydantic import Field, computed_field

from rankeval.metrics.base import MetricDetail
from rankeval.metrics.registry import register_metric_detail
from rankeval.wire.stream import VINT_MAX, StreamInput, StreamOutput


@register_metric_detail
class DiscountedCumulativeGainDetail(MetricDetail):
    """
    Raw and ideal DCG values behind a (possibly normalized) DCG score.

    Attributes:
        dcg: DCG of the ranking as returned
        ideal_dcg: DCG of the ideal ordering, None when not computed
        unrated_docs: Number of returned documents without a rating
    """

    tag: ClassVar[str] = "dcg"

    dcg: float
    ideal_dcg: float | None = None
    unrated_docs: int = Field(default=0, ge=0, le=VINT_MAX)

    @computed_field
    @property
    def normalized_dcg(self) -> float | None:
        if not self.ideal_dcg:
            return None
        return self.dcg / self.ideal_dcg

    def write_payload(self, out: StreamOutput) -> None:
        out.write_double(self.dcg)
        out.write_optional_double(self.ideal_dcg)
        out.write_vint(self.unrated_docs)

    @classmethod
    def read_payload(cls, stream: StreamInput) -> "DiscountedCumulativeGainDetail":
        return cls(
            dcg=stream.read_double("dcg.dcg"),
            ideal_dcg=stream.read_optional_double("dcg.ideal_dcg"),
            unrated_docs=stream.read_vint("dcg.unrated_docs"),
        )
