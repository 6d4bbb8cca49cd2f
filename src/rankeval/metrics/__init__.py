"""
Metric detail variants.

Importing this package registers the built-in variants:
- precision_at_k: relevant count among the top k
- reciprocal_rank: rank of the first relevant document
- dcg: raw and ideal discounted cumulative gain
"""

from rankeval.metrics.base import MetricDetail
from rankeval.metrics.registry import MetricDetailRegistry, register_metric_detail
from rankeval.metrics.precision import PrecisionAtKDetail
from rankeval.metrics.reciprocal_rank import NO_RELEVANT_DOCUMENT, ReciprocalRankDetail
from rankeval.metrics.dcg import DiscountedCumulativeGainDetail

__all__ = [
    "MetricDetail",
    "MetricDetailRegistry",
    "register_metric_detail",
    "PrecisionAtKDetail",
    "ReciprocalRankDetail",
    "NO_RELEVANT_DOCUMENT",
    "DiscountedCumulativeGainDetail",
]
