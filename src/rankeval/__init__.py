"""
RankEval - per-request ranking evaluation results.

This package provides the result record produced by evaluating one ranking
request, the key type for the unrated documents it reports, and the open set
of metric detail variants it can carry, together with a binary encoding for
transfer between processes and a rendered (JSON-ready) form for reporting.
"""

__version__ = "0.1.0"

from .entities import DocumentKey, EvaluationResult
from .errors import (
    ConfigurationError,
    DecodeError,
    DuplicateVariantError,
    MalformedDocumentError,
    MalformedInputError,
    MalformedStringError,
    PermanentError,
    RankEvalError,
    TruncatedInputError,
    UnknownVariantError,
    is_retryable,
)
from .metrics import (
    DiscountedCumulativeGainDetail,
    MetricDetail,
    MetricDetailRegistry,
    PrecisionAtKDetail,
    ReciprocalRankDetail,
    register_metric_detail,
)
from .wire import StreamInput, StreamOutput

__all__ = [
    # Version
    "__version__",
    # Entities
    "DocumentKey",
    "EvaluationResult",
    # Metric details
    "MetricDetail",
    "MetricDetailRegistry",
    "register_metric_detail",
    "PrecisionAtKDetail",
    "ReciprocalRankDetail",
    "DiscountedCumulativeGainDetail",
    # Wire
    "StreamInput",
    "StreamOutput",
    # Errors
    "RankEvalError",
    "PermanentError",
    "DecodeError",
    "TruncatedInputError",
    "MalformedInputError",
    "MalformedStringError",
    "UnknownVariantError",
    "MalformedDocumentError",
    "DuplicateVariantError",
    "ConfigurationError",
    "is_retryable",
]
