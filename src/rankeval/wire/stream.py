"""
Binary stream primitives.

Every binary encoder in RankEval writes to a ``StreamOutput`` and every
decoder reads from a ``StreamInput``. The encodings are:

    vint    unsigned, 7 bits per byte, least significant group first, high
            bit set on every byte except the last; at most 5 bytes
    int     4-byte signed, big-endian
    double  8-byte IEEE-754, big-endian
    bool    1 byte, 0x00 or 0x01
    string  vint byte length followed by that many UTF-8 bytes

Fixed-width values use network byte order (big-endian).
"""

import struct

from rankeval.config.settings import settings
from rankeval.errors import MalformedInputError, MalformedStringError, TruncatedInputError

VINT_MAX = 2**32 - 1
VINT_MAX_BYTES = 5
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1

_DOUBLE = struct.Struct(">d")
_INT = struct.Struct(">i")


class StreamOutput:
    """Append-only byte sink."""

    def __init__(self):
        self._buffer = bytearray()

    def getvalue(self) -> bytes:
        return bytes(self._buffer)

    def write_bool(self, value: bool) -> None:
        self._buffer.append(1 if value else 0)

    def write_vint(self, value: int) -> None:
        if value < 0 or value > VINT_MAX:
            raise ValueError(f"vint out of range [0, {VINT_MAX}]: {value}")
        while value > 0x7F:
            self._buffer.append((value & 0x7F) | 0x80)
            value >>= 7
        self._buffer.append(value)

    def write_int(self, value: int) -> None:
        self._buffer.extend(_INT.pack(value))

    def write_double(self, value: float) -> None:
        self._buffer.extend(_DOUBLE.pack(value))

    def write_optional_double(self, value: float | None) -> None:
        self.write_bool(value is not None)
        if value is not None:
            self.write_double(value)

    def write_string(self, value: str) -> None:
        encoded = value.encode("utf-8")
        self.write_vint(len(encoded))
        self._buffer.extend(encoded)


class StreamInput:
    """
    Sequential reader over an immutable byte buffer.

    Every ``read_*`` method takes the name of the field being read. Errors
    carry that name and the offset where the field started, so a failed
    decode points at the spot where producer and consumer disagree.

    Attributes:
        max_array_size: Largest count ``read_array_size`` accepts
    """

    def __init__(self, data: bytes, max_array_size: int | None = None):
        self._data = memoryview(bytes(data))
        self._position = 0
        self.max_array_size = settings.MAX_ARRAY_SIZE if max_array_size is None else max_array_size

    @property
    def position(self) -> int:
        return self._position

    @property
    def remaining(self) -> int:
        return len(self._data) - self._position

    def _take(self, size: int, field: str) -> memoryview:
        if size > self.remaining:
            raise TruncatedInputError(
                f"Input ended while reading '{field}'",
                field=field,
                offset=self._position,
                needed=size,
                available=self.remaining,
            )
        start = self._position
        self._position += size
        return self._data[start:self._position]

    def read_byte(self, field: str) -> int:
        return self._take(1, field)[0]

    def read_bool(self, field: str) -> bool:
        offset = self._position
        value = self.read_byte(field)
        if value not in (0, 1):
            raise MalformedInputError(
                f"Invalid boolean byte 0x{value:02x} for '{field}'",
                field=field,
                offset=offset,
            )
        return value == 1

    def read_vint(self, field: str) -> int:
        offset = self._position
        result = 0
        for shift in range(0, 7 * VINT_MAX_BYTES, 7):
            byte = self.read_byte(field)
            result |= (byte & 0x7F) << shift
            if not byte & 0x80:
                if result > VINT_MAX:
                    break
                return result
        raise MalformedInputError(
            f"Variable-length integer for '{field}' exceeds 32 bits",
            field=field,
            offset=offset,
        )

    def read_int(self, field: str) -> int:
        return _INT.unpack(self._take(_INT.size, field))[0]

    def read_double(self, field: str) -> float:
        return _DOUBLE.unpack(self._take(_DOUBLE.size, field))[0]

    def read_optional_double(self, field: str) -> float | None:
        if self.read_bool(field):
            return self.read_double(field)
        return None

    def read_string(self, field: str) -> str:
        offset = self._position
        length = self.read_vint(field)
        if length > self.remaining:
            raise MalformedStringError(
                f"String length {length} for '{field}' exceeds remaining input",
                field=field,
                offset=offset,
                details={"length": length, "remaining": self.remaining},
            )
        raw = self._take(length, field)
        try:
            return bytes(raw).decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedStringError(
                f"Invalid UTF-8 in '{field}'",
                field=field,
                offset=offset,
                original_error=e,
            ) from e

    def read_array_size(self, field: str) -> int:
        offset = self._position
        size = self.read_vint(field)
        if size > self.max_array_size:
            raise MalformedInputError(
                f"Array size {size} for '{field}' exceeds limit {self.max_array_size}",
                field=field,
                offset=offset,
            )
        return size

    def ensure_consumed(self) -> None:
        if self.remaining:
            raise MalformedInputError(
                f"{self.remaining} trailing bytes after complete value",
                offset=self._position,
            )
