"""Registry resolving metric detail tags to variant classes."""

from typing import Any

from loguru import logger
from pydantic import ValidationError

from rankeval.errors import (
    DuplicateVariantError,
    MalformedDocumentError,
    MalformedInputError,
    UnknownVariantError,
)
from rankeval.metrics.base import MetricDetail
from rankeval.wire.stream import StreamInput, StreamOutput


class MetricDetailRegistry:
    """Registry of metric detail variants keyed by tag.

    The registry owns the optional-detail wire protocol: a presence flag,
    then the tag, then the variant's payload. Decoding looks the tag up here,
    so the evaluation result never needs to know the concrete variants.
    """

    _registry: dict[str, type[MetricDetail]] = {}

    @classmethod
    def register(cls, tag: str, detail_class: type[MetricDetail]) -> None:
        """Register a metric detail variant.

        Args:
            tag: Wire and rendering tag; must equal ``detail_class.tag``
            detail_class: Variant class to register

        Raises:
            TypeError: If detail_class is not a subclass of MetricDetail
            ValueError: If tag does not match the class's own tag
            DuplicateVariantError: If tag is registered to another class
        """
        if not isinstance(detail_class, type) or not issubclass(detail_class, MetricDetail):
            raise TypeError(f"{detail_class!r} must be a subclass of MetricDetail")

        if getattr(detail_class, "tag", None) != tag:
            raise ValueError(
                f"{detail_class.__name__} declares tag "
                f"'{getattr(detail_class, 'tag', None)}', cannot register as '{tag}'"
            )

        existing = cls._registry.get(tag)
        if existing is detail_class:
            return
        if existing is not None:
            raise DuplicateVariantError(
                f"Metric detail tag '{tag}' is already registered to {existing.__name__}",
                details={"tag": tag, "existing": existing.__name__, "new": detail_class.__name__},
            )

        cls._registry[tag] = detail_class
        logger.debug(f"Registered metric detail '{tag}': {detail_class.__name__}")

    @classmethod
    def unregister(cls, tag: str) -> None:
        cls._registry.pop(tag, None)

    @classmethod
    def get(cls, tag: str) -> type[MetricDetail]:
        """Look up the variant class for a tag.

        Raises:
            UnknownVariantError: If no variant is registered under tag
        """
        try:
            return cls._registry[tag]
        except KeyError:
            raise UnknownVariantError(tag, cls.list_types()) from None

    @classmethod
    def is_registered(cls, tag: str) -> bool:
        return tag in cls._registry

    @classmethod
    def list_types(cls) -> list[str]:
        """Get list of registered metric detail tags."""
        return list(cls._registry.keys())

    @classmethod
    def write_optional(cls, out: StreamOutput, detail: MetricDetail | None) -> None:
        out.write_bool(detail is not None)
        if detail is None:
            return
        out.write_string(detail.tag)
        detail.write_payload(out)

    @classmethod
    def read_optional(cls, stream: StreamInput, field: str = "metric_details") -> MetricDetail | None:
        if not stream.read_bool(f"{field}.present"):
            return None
        offset = stream.position
        tag = stream.read_string(f"{field}.tag")
        if tag not in cls._registry:
            raise UnknownVariantError(tag, cls.list_types(), field=f"{field}.tag", offset=offset)
        payload_offset = stream.position
        try:
            return cls._registry[tag].read_payload(stream)
        except ValidationError as e:
            raise MalformedInputError(
                f"Invalid payload for metric detail '{tag}'",
                field=f"{field}.{tag}",
                offset=payload_offset,
                details={"errors": [err["msg"] for err in e.errors()]},
                original_error=e,
            ) from e

    @classmethod
    def render(cls, detail: MetricDetail) -> dict[str, Any]:
        return {detail.tag: detail.render()}

    @classmethod
    def from_rendered(cls, data: Any) -> MetricDetail:
        """Parse a rendered ``{tag: {fields}}`` object back into a variant."""
        if not isinstance(data, dict) or len(data) != 1:
            raise MalformedDocumentError(
                "metric_details must be an object with exactly one variant tag",
                details={"got": list(data) if isinstance(data, dict) else type(data).__name__},
            )
        (tag, fields), = data.items()
        return cls.get(tag).from_rendered(fields)


def register_metric_detail(detail_class: type[MetricDetail]) -> type[MetricDetail]:
    """Class decorator registering a variant under its own ``tag``."""
    MetricDetailRegistry.register(detail_class.tag, detail_class)
    return detail_class
