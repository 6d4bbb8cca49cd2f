"""Binary stream primitives shared by every encoder and decoder."""

from .stream import INT_MAX, INT_MIN, VINT_MAX, StreamInput, StreamOutput

__all__ = ["StreamInput", "StreamOutput", "VINT_MAX", "INT_MIN", "INT_MAX"]
