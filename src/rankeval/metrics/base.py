"""
Base class for metric details.

A metric detail is the breakdown a ranking metric attaches to an evaluation
result to explain how its score was derived. Each concrete variant carries a
stable string ``tag`` that names it on the wire and in rendered output, so
new variants can be added without changing the evaluation result format.
"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from pydantic import BaseModel, ValidationError

from rankeval.errors import MalformedDocumentError
from rankeval.wire.stream import StreamInput, StreamOutput


class MetricDetail(BaseModel, ABC):
    """
    Abstract base class for metric detail variants.

    Subclasses must:
    - set the class-level ``tag``
    - implement ``write_payload`` and ``read_payload``

    The default ``render`` returns the model fields under their own names;
    ``from_rendered`` validates that mapping back into the variant.

    Example:
        >>> @register_metric_detail
        ... class RecallDetail(MetricDetail):
        ...     tag: ClassVar[str] = "recall"
        ...     retrieved: int
        ...
        ...     def write_payload(self, out):
        ...         out.write_vint(self.retrieved)
        ...
        ...     @classmethod
        ...     def read_payload(cls, stream):
        ...         return cls(retrieved=stream.read_vint("recall.retrieved"))
    """

    tag: ClassVar[str]

    model_config = {
        "frozen": True,
    }

    @abstractmethod
    def write_payload(self, out: StreamOutput) -> None:
        """Write the variant's fields. The tag is written by the caller."""
        pass

    @classmethod
    @abstractmethod
    def read_payload(cls, stream: StreamInput) -> "MetricDetail":
        """Read the variant's fields. The tag has already been consumed."""
        pass

    def render(self) -> dict[str, Any]:
        return self.model_dump()

    @classmethod
    def from_rendered(cls, fields: Any) -> "MetricDetail":
        if not isinstance(fields, dict):
            raise MalformedDocumentError(
                f"Fields of metric detail '{cls.tag}' must be an object",
                details={"got": type(fields).__name__},
            )
        try:
            return cls.model_validate(fields, strict=True)
        except ValidationError as e:
            raise MalformedDocumentError(
                f"Invalid fields for metric detail '{cls.tag}'",
                details={"errors": [err["msg"] for err in e.errors()]},
                original_error=e,
            ) from e
