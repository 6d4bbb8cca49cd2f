"""EvaluationResult entity: the outcome of evaluating one ranking request."""

import json
import struct
from typing import Any

from loguru import logger
from pydantic import BaseModel, Field

from rankeval.entities.document_key import DocumentKey
from rankeval.errors import DecodeError, MalformedDocumentError
from rankeval.metrics import MetricDetail, MetricDetailRegistry
from rankeval.wire.stream import StreamInput, StreamOutput

_DOUBLE_BITS = struct.Struct(">Q")


def _double_bits(value: float) -> int:
    return _DOUBLE_BITS.unpack(struct.pack(">d", value))[0]


class EvaluationResult(BaseModel):
    """
    Quality of one ranking request as computed by a ranking metric.

    Holds everything needed to render this request's part of an overall
    evaluation response: the request id, its quality level, the documents
    that showed up in the ranking without a rating, and optionally a
    metric-specific breakdown.

    ``id``, ``quality_level`` and ``unknown_docs`` are fixed at construction.
    ``unknown_docs`` is copied into a tuple, so callers only ever see a
    read-only view of the list the result owns. ``detail`` may be passed to
    the constructor or attached later with ``attach_detail``.

    Equality compares ``quality_level`` bit for bit: ``NaN`` equals a ``NaN``
    with the same bits, and ``0.0`` differs from ``-0.0``. The hash covers
    ``detail`` too, so only hash a result once it is fully assembled.

    Attributes:
        id: Identifier of the originating request
        quality_level: Score produced by the metric; any float, including
            negative values or values above 1
        unknown_docs: Unrated documents in discovery order
        detail: Metric breakdown, None unless attached
    """

    id: str = Field(..., frozen=True)
    quality_level: float = Field(..., frozen=True)
    unknown_docs: tuple[DocumentKey, ...] = Field(default=(), frozen=True)
    detail: MetricDetail | None = None

    model_config = {
        "frozen": False,
    }

    def attach_detail(self, detail: MetricDetail) -> None:
        """Attach the metric breakdown. A second call replaces the first."""
        if self.detail is not None:
            logger.debug(
                f"Replacing metric detail '{self.detail.tag}' with '{detail.tag}' on result '{self.id}'"
            )
        self.detail = detail

    # ==================== Binary encoding ====================

    def write_to(self, out: StreamOutput) -> None:
        out.write_string(self.id)
        out.write_double(self.quality_level)
        out.write_vint(len(self.unknown_docs))
        for key in self.unknown_docs:
            key.write_to(out)
        MetricDetailRegistry.write_optional(out, self.detail)

    @classmethod
    def read_from(cls, stream: StreamInput) -> "EvaluationResult":
        id_ = stream.read_string("id")
        quality_level = stream.read_double("quality_level")
        count = stream.read_array_size("unknown_docs.count")
        unknown_docs = [
            DocumentKey.read_from(stream, f"unknown_docs[{i}]") for i in range(count)
        ]
        detail = MetricDetailRegistry.read_optional(stream)
        return cls(id=id_, quality_level=quality_level, unknown_docs=unknown_docs, detail=detail)

    def to_bytes(self) -> bytes:
        out = StreamOutput()
        self.write_to(out)
        return out.getvalue()

    @classmethod
    def from_bytes(cls, data: bytes, max_array_size: int | None = None) -> "EvaluationResult":
        """
        Decode a result that occupies the whole buffer.

        Raises:
            TruncatedInputError: If the buffer ends mid-field
            MalformedStringError: If a string is longer than the input or not UTF-8
            UnknownVariantError: If the metric detail tag is not registered
            MalformedInputError: On any other invalid byte, or trailing bytes
        """
        stream = StreamInput(data, max_array_size=max_array_size)
        try:
            result = cls.read_from(stream)
            stream.ensure_consumed()
        except DecodeError as e:
            logger.debug(f"Failed to decode evaluation result: {e}")
            raise
        return result

    # ==================== Textual rendering ====================

    def render(self) -> dict[str, Any]:
        """
        Render as ``{id: {quality_level, unknown_docs[, metric_details]}}``.

        ``metric_details`` is left out entirely when no detail is attached.
        """
        body: dict[str, Any] = {
            "quality_level": self.quality_level,
            "unknown_docs": [key.render() for key in self.unknown_docs],
        }
        if self.detail is not None:
            body["metric_details"] = MetricDetailRegistry.render(self.detail)
        return {self.id: body}

    def to_json(self, **kwargs: Any) -> str:
        return json.dumps(self.render(), **kwargs)

    @classmethod
    def from_rendered(cls, document: Any) -> "EvaluationResult":
        """Parse the output of ``render`` back into a result."""
        if not isinstance(document, dict) or len(document) != 1:
            raise MalformedDocumentError(
                "Evaluation result must be an object with exactly one request id",
                details={"got": list(document) if isinstance(document, dict) else type(document).__name__},
            )
        (id_, body), = document.items()
        if not isinstance(body, dict):
            raise MalformedDocumentError(
                f"Body of evaluation result '{id_}' must be an object",
                details={"got": type(body).__name__},
            )

        quality_level = body.get("quality_level")
        if isinstance(quality_level, bool) or not isinstance(quality_level, (int, float)):
            raise MalformedDocumentError(
                f"quality_level of '{id_}' must be a number",
                details={"got": type(quality_level).__name__},
            )

        try:
            quality_level = float(quality_level)
        except OverflowError as e:
            raise MalformedDocumentError(
                f"quality_level of '{id_}' is out of float range",
                original_error=e,
            ) from e

        unknown_docs = body.get("unknown_docs")
        if not isinstance(unknown_docs, list):
            raise MalformedDocumentError(
                f"unknown_docs of '{id_}' must be an array",
                details={"got": type(unknown_docs).__name__},
            )

        detail = None
        if "metric_details" in body:
            detail = MetricDetailRegistry.from_rendered(body["metric_details"])

        return cls(
            id=id_,
            quality_level=quality_level,
            unknown_docs=[DocumentKey.from_rendered(key) for key in unknown_docs],
            detail=detail,
        )

    @classmethod
    def from_json(cls, text: str) -> "EvaluationResult":
        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedDocumentError("Evaluation result is not valid JSON", original_error=e) from e
        return cls.from_rendered(document)

    # ==================== Equality ====================

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if type(other) is not type(self):
            return False
        return (
            self.id == other.id
            and _double_bits(self.quality_level) == _double_bits(other.quality_level)
            and self.unknown_docs == other.unknown_docs
            and self.detail == other.detail
        )

    def __hash__(self) -> int:
        return hash((self.id, _double_bits(self.quality_level), self.unknown_docs, self.detail))
