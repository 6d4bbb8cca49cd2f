"""
Tests for the binary stream primitives.

These tests verify:
1. Byte layout of each primitive
2. Field name and offset reporting on failure
3. Limits on varints and array sizes
"""

import struct

import pytest

from rankeval.errors import MalformedInputError, MalformedStringError, TruncatedInputError
from rankeval.wire import StreamInput, StreamOutput, VINT_MAX


class TestStreamOutput:
    """Tests for StreamOutput encodings."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (0, b"\x00"),
            (1, b"\x01"),
            (127, b"\x7f"),
            (128, b"\x80\x01"),
            (300, b"\xac\x02"),
            (VINT_MAX, b"\xff\xff\xff\xff\x0f"),
        ],
    )
    def test_vint_layout(self, value, expected):
        """vint stores 7 bits per byte, low group first."""
        out = StreamOutput()
        out.write_vint(value)
        assert out.getvalue() == expected

    def test_vint_rejects_out_of_range(self):
        """Negative and >32-bit values cannot be written as vint."""
        out = StreamOutput()
        with pytest.raises(ValueError):
            out.write_vint(-1)
        with pytest.raises(ValueError):
            out.write_vint(VINT_MAX + 1)

    def test_double_is_big_endian(self):
        """Doubles are written in network byte order."""
        out = StreamOutput()
        out.write_double(1.0)
        assert out.getvalue() == b"\x3f\xf0\x00\x00\x00\x00\x00\x00"

    def test_string_is_utf8_with_byte_length(self):
        """The length prefix counts UTF-8 bytes, not characters."""
        out = StreamOutput()
        out.write_string("é")
        assert out.getvalue() == b"\x02\xc3\xa9"

    def test_empty_string(self):
        out = StreamOutput()
        out.write_string("")
        assert out.getvalue() == b"\x00"

    def test_bool_bytes(self):
        out = StreamOutput()
        out.write_bool(True)
        out.write_bool(False)
        assert out.getvalue() == b"\x01\x00"

    def test_optional_double(self):
        out = StreamOutput()
        out.write_optional_double(None)
        out.write_optional_double(2.5)
        assert out.getvalue() == b"\x00\x01" + struct.pack(">d", 2.5)


class TestStreamInput:
    """Tests for StreamInput decoding and failures."""

    def test_reads_back_in_order(self):
        """Values come back in the order they were written."""
        out = StreamOutput()
        out.write_string("abc")
        out.write_vint(300)
        out.write_int(-7)
        out.write_double(-0.25)
        out.write_bool(True)

        stream = StreamInput(out.getvalue())
        assert stream.read_string("s") == "abc"
        assert stream.read_vint("v") == 300
        assert stream.read_int("i") == -7
        assert stream.read_double("d") == -0.25
        assert stream.read_bool("b") is True
        assert stream.remaining == 0
        stream.ensure_consumed()

    def test_truncated_double_reports_field_and_offset(self):
        """A short read names the field and where it started."""
        stream = StreamInput(b"\x01a\x00\x00")
        stream.read_string("name")

        with pytest.raises(TruncatedInputError) as exc_info:
            stream.read_double("score")

        error = exc_info.value
        assert error.field == "score"
        assert error.offset == 2
        assert error.needed == 8
        assert error.available == 2

    def test_empty_input_is_truncated(self):
        with pytest.raises(TruncatedInputError):
            StreamInput(b"").read_vint("count")

    def test_string_longer_than_input(self):
        """A length prefix past the end of input is a malformed string."""
        with pytest.raises(MalformedStringError) as exc_info:
            StreamInput(b"\x05ab").read_string("id")
        assert exc_info.value.field == "id"
        assert exc_info.value.offset == 0

    def test_invalid_utf8(self):
        with pytest.raises(MalformedStringError) as exc_info:
            StreamInput(b"\x02\xff\xfe").read_string("id")
        assert isinstance(exc_info.value.original_error, UnicodeDecodeError)

    def test_invalid_bool_byte(self):
        with pytest.raises(MalformedInputError, match="Invalid boolean"):
            StreamInput(b"\x02").read_bool("flag")

    def test_vint_overflow(self):
        """Five-byte vints above 32 bits are rejected."""
        with pytest.raises(MalformedInputError):
            StreamInput(b"\xff\xff\xff\xff\x7f").read_vint("count")

    def test_vint_too_many_bytes(self):
        """A fifth byte with the continuation bit set is rejected."""
        with pytest.raises(MalformedInputError):
            StreamInput(b"\x80\x80\x80\x80\x80\x01").read_vint("count")

    def test_vint_max_value(self):
        assert StreamInput(b"\xff\xff\xff\xff\x0f").read_vint("count") == VINT_MAX

    def test_array_size_limit(self):
        """Counts above max_array_size are rejected before allocation."""
        stream = StreamInput(b"\x0b", max_array_size=10)
        with pytest.raises(MalformedInputError, match="exceeds limit"):
            stream.read_array_size("docs")

    def test_array_size_within_limit(self):
        assert StreamInput(b"\x0a", max_array_size=10).read_array_size("docs") == 10

    def test_ensure_consumed_rejects_trailing_bytes(self):
        stream = StreamInput(b"\x00\x00")
        stream.read_bool("flag")
        with pytest.raises(MalformedInputError, match="trailing"):
            stream.ensure_consumed()

    def test_input_buffer_is_copied(self):
        """Mutating the source bytearray after construction has no effect."""
        data = bytearray(b"\x01a")
        stream = StreamInput(data)
        data[1] = ord("b")
        assert stream.read_string("s") == "a"
