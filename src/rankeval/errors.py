"""
RankEval Error Classification System.

This module provides a hierarchy of exceptions for the failures that can occur
while encoding, decoding, and parsing evaluation results.

Error Categories:
-----------------
1. Decode Errors: The binary input cannot be turned into a value
   - Input ended before a field was complete
   - A length prefix or flag byte is invalid
   - A metric detail tag has no registered variant

2. Document Errors: The rendered (textual) form is structurally wrong
   - Missing or mistyped fields
   - More than one top-level key

3. Registry and Configuration Errors
   - Conflicting metric detail registrations
   - Invalid settings values

Every error raised by this package is permanent. Malformed input never
becomes valid by retrying; ``is_retryable`` exists so transport layers can
classify these errors the same way they classify their own.

Usage:
------
    from rankeval.errors import DecodeError, UnknownVariantError

    try:
        result = EvaluationResult.from_bytes(payload)
    except UnknownVariantError as e:
        # Producer runs a newer build with an extra metric variant
        logger.error(f"Version skew: {e}")
    except DecodeError as e:
        logger.error(f"Corrupt payload at offset {e.offset}: {e}")
"""

from typing import Any


class RankEvalError(Exception):
    """
    Base exception for all RankEval errors.

    Attributes:
        message: Human-readable error description
        details: Additional context about the error (optional)
        original_error: The underlying exception that caused this error (optional)
    """

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.original_error = original_error

    def __str__(self) -> str:
        base = self.message
        if self.details:
            base += f" | Details: {self.details}"
        if self.original_error:
            base += f" | Caused by: {type(self.original_error).__name__}: {self.original_error}"
        return base

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error_type": type(self).__name__,
            "message": self.message,
            "details": self.details,
            "original_error": str(self.original_error) if self.original_error else None
        }


class PermanentError(RankEvalError):
    """
    Base class for errors that will not succeed on retry.

    All decode, parse, and registry errors derive from this class.
    """
    pass


# =============================================================================
# Binary decode errors
# =============================================================================

class DecodeError(PermanentError):
    """
    Raised when a binary payload cannot be decoded.

    Attributes:
        field: Name of the field being read when decoding failed
        offset: Byte offset in the input where the failing field starts
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        offset: int | None = None,
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        details = details or {}
        if field is not None:
            details["field"] = field
        if offset is not None:
            details["offset"] = offset
        super().__init__(message, details, original_error)
        self.field = field
        self.offset = offset


class TruncatedInputError(DecodeError):
    """
    Raised when the input ends before a field could be fully read.

    Attributes:
        needed: Number of bytes the field required
        available: Number of bytes that were left
    """

    def __init__(
        self,
        message: str = "Input ended before field was complete",
        field: str | None = None,
        offset: int | None = None,
        needed: int | None = None,
        available: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = details or {}
        details["needed"] = needed
        details["available"] = available
        super().__init__(message, field, offset, details)
        self.needed = needed
        self.available = available


class MalformedInputError(DecodeError):
    """
    Raised when bytes are present but do not form a valid value.

    Common causes:
    - Boolean flag byte other than 0x00 / 0x01
    - Variable-length integer longer than five bytes
    - Array count above the configured maximum
    - Trailing bytes after a complete value
    """
    pass


class MalformedStringError(MalformedInputError):
    """
    Raised when a length-prefixed string is invalid.

    Either the length prefix describes more bytes than remain in the input,
    or the bytes are not valid UTF-8.
    """
    pass


class UnknownVariantError(DecodeError):
    """
    Raised when a metric detail tag has no registered variant.

    This usually means the producer runs a build that knows a metric variant
    this build does not.

    Attributes:
        tag: The unrecognized tag
        known_tags: Tags registered at the time of the failure
    """

    def __init__(
        self,
        tag: str,
        known_tags: list[str] | None = None,
        field: str | None = None,
        offset: int | None = None,
    ):
        known_tags = known_tags or []
        message = (
            f"Unknown metric detail variant: '{tag}'. "
            f"Registered variants: {', '.join(known_tags) or '(none)'}"
        )
        super().__init__(message, field, offset, details={"tag": tag})
        self.tag = tag
        self.known_tags = known_tags


# =============================================================================
# Textual form, registry and configuration errors
# =============================================================================

class MalformedDocumentError(PermanentError):
    """Raised when a rendered evaluation result has the wrong structure."""

    def __init__(
        self,
        message: str = "Malformed evaluation document",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, details, original_error)


class DuplicateVariantError(PermanentError):
    """Raised when a tag is already registered to a different variant class."""
    pass


class ConfigurationError(PermanentError):
    """
    Raised when there's a configuration problem.

    Common causes:
    - Non-numeric limit in the environment
    - Negative limits
    """

    def __init__(
        self,
        message: str = "Configuration error",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, details, original_error)


def is_retryable(error: Exception) -> bool:
    """
    Check if an error is retryable.

    Nothing raised by this package is retryable; the helper lets callers
    treat RankEval errors uniformly with their transport's own errors.

    Args:
        error: The exception to check

    Returns:
        True if the error is a RankEvalError outside the PermanentError branch
    """
    return isinstance(error, RankEvalError) and not isinstance(error, PermanentError)
