"""Byte-level field primitives.

This module provides the fixed-width and string field codecs the document
encoder and decoder are built on. All multi-byte numbers are little-endian;
that is part of the wire format.
"""

from __future__ import annotations

import struct

from ..exceptions import BufferExhaustedError, DecodeError, MalformedLengthError

INT32 = struct.Struct("<i")
INT64 = struct.Struct("<q")
DOUBLE = struct.Struct("<d")

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class ByteWriter:
    """Appends encoded fields to a growable byte buffer.

    Besides appending at the end, the writer can patch a previously reserved
    int32 slot, which is how document length prefixes are filled in once the
    body has been written.

    Example:
        >>> writer = ByteWriter()
        >>> start = writer.reserve_int32()
        >>> writer.write_byte(0x0A)
        >>> writer.write_cstring("n")
        >>> writer.patch_int32(start, len(writer) - start + 1)
        >>> writer.write_byte(0x00)
        >>> writer.to_bytes()
        b'\\x08\\x00\\x00\\x00\\nn\\x00\\x00'
    """

    def __init__(self) -> None:
        """Initialize an empty writer."""
        self._buffer = bytearray()

    def __len__(self) -> int:
        return len(self._buffer)

    @property
    def position(self) -> int:
        """Offset at which the next byte will be written."""
        return len(self._buffer)

    def write_byte(self, value: int) -> None:
        """Write a single unsigned byte.

        Raises:
            ValueError: If value is not in 0-255
        """
        if not 0 <= value <= 0xFF:
            raise ValueError(f"byte value must be 0-255, got {value}")
        self._buffer.append(value)

    def write_bool(self, value: bool) -> None:
        """Write a boolean as one byte (0x01 for True, 0x00 for False)."""
        self._buffer.append(0x01 if value else 0x00)

    def write_int32(self, value: int) -> None:
        """Write a signed 32-bit little-endian integer.

        Raises:
            ValueError: If value doesn't fit in 32 bits
        """
        if value < INT32_MIN or value > INT32_MAX:
            raise ValueError(f"Value {value} doesn't fit in int32")
        self._buffer += INT32.pack(value)

    def write_int64(self, value: int) -> None:
        """Write a signed 64-bit little-endian integer.

        Raises:
            ValueError: If value doesn't fit in 64 bits
        """
        if value < INT64_MIN or value > INT64_MAX:
            raise ValueError(f"Value {value} doesn't fit in int64")
        self._buffer += INT64.pack(value)

    def write_double(self, value: float) -> None:
        """Write an IEEE-754 binary64 little-endian float."""
        self._buffer += DOUBLE.pack(value)

    def write_bytes(self, data: bytes) -> None:
        """Write a raw byte run."""
        self._buffer += data

    def write_cstring(self, value: str) -> None:
        """Write UTF-8 text followed by a single NUL byte.

        Raises:
            ValueError: If value contains an embedded NUL character
        """
        if "\x00" in value:
            raise ValueError(f"C-string must not contain a NUL character: {value!r}")
        self._buffer += value.encode("utf-8")
        self._buffer.append(0x00)

    def write_string(self, value: str) -> None:
        """Write a length-prefixed UTF-8 string.

        The int32 prefix counts the UTF-8 bytes plus the trailing NUL.
        """
        raw = value.encode("utf-8")
        self.write_int32(len(raw) + 1)
        self._buffer += raw
        self._buffer.append(0x00)

    def reserve_int32(self) -> int:
        """Append a zeroed int32 slot and return its offset."""
        offset = len(self._buffer)
        self._buffer += b"\x00\x00\x00\x00"
        return offset

    def patch_int32(self, offset: int, value: int) -> None:
        """Overwrite the int32 slot at offset.

        Raises:
            ValueError: If the slot lies outside the written buffer
        """
        if offset < 0 or offset + 4 > len(self._buffer):
            raise ValueError(f"Cannot patch int32 at offset {offset} (size {len(self._buffer)})")
        INT32.pack_into(self._buffer, offset, value)

    def to_bytes(self) -> bytes:
        """Return an immutable copy of the buffer."""
        return bytes(self._buffer)


class ByteReader:
    """Reads encoded fields from an in-memory byte buffer.

    The reader keeps a cursor that every read advances. It can be moved with
    seek(), which the decoder uses to jump over nested documents by their
    declared length. Every read is checked against the real buffer size.

    Example:
        >>> reader = ByteReader(data)
        >>> length = reader.read_int32()
        >>> tag = reader.read_byte()
        >>> key = reader.read_cstring()
    """

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        """Initialize a reader over data.

        Args:
            data: Byte buffer to read from
        """
        self._data = bytes(data)
        self._position = 0

    def __len__(self) -> int:
        return len(self._data)

    @property
    def position(self) -> int:
        """Current read offset."""
        return self._position

    def seek(self, offset: int) -> None:
        """Move the cursor to offset.

        Raises:
            BufferExhaustedError: If offset lies outside the buffer
        """
        if offset < 0 or offset > len(self._data):
            raise BufferExhaustedError(
                f"Cannot seek to offset {offset}, buffer has {len(self._data)} bytes"
            )
        self._position = offset

    def remaining(self) -> int:
        """Return the number of unread bytes."""
        return len(self._data) - self._position

    def _take(self, size: int) -> bytes:
        if size < 0:
            raise MalformedLengthError(f"Negative read size {size} at offset {self._position}")
        end = self._position + size
        if end > len(self._data):
            raise BufferExhaustedError(
                f"Not enough bytes at offset {self._position}: need {size}, "
                f"have {len(self._data) - self._position}"
            )
        chunk = self._data[self._position:end]
        self._position = end
        return chunk

    def read_byte(self) -> int:
        """Read a single unsigned byte."""
        return self._take(1)[0]

    def read_bool(self) -> bool:
        """Read a one-byte boolean.

        Raises:
            DecodeError: If the byte is neither 0x00 nor 0x01
        """
        offset = self._position
        value = self.read_byte()
        if value not in (0x00, 0x01):
            raise DecodeError(f"Invalid boolean byte 0x{value:02x} at offset {offset}")
        return value == 0x01

    def read_int32(self) -> int:
        """Read a signed 32-bit little-endian integer."""
        return INT32.unpack(self._take(4))[0]

    def peek_int32(self) -> int:
        """Read an int32 without moving the cursor."""
        offset = self._position
        value = self.read_int32()
        self._position = offset
        return value

    def read_int64(self) -> int:
        """Read a signed 64-bit little-endian integer."""
        return INT64.unpack(self._take(8))[0]

    def read_double(self) -> float:
        """Read an IEEE-754 binary64 little-endian float."""
        return DOUBLE.unpack(self._take(8))[0]

    def read_bytes(self, num_bytes: int) -> bytes:
        """Read a raw byte run of num_bytes."""
        return self._take(num_bytes)

    def read_cstring(self) -> str:
        """Read NUL-terminated UTF-8 text and skip past the NUL.

        Raises:
            BufferExhaustedError: If no NUL byte follows the cursor
            DecodeError: If the bytes are not valid UTF-8
        """
        end = self._data.find(b"\x00", self._position)
        if end < 0:
            raise BufferExhaustedError(f"Unterminated C-string at offset {self._position}")
        raw = self._data[self._position:end]
        offset = self._position
        self._position = end + 1
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Invalid UTF-8 in C-string at offset {offset}: {e}") from e

    def read_string(self) -> str:
        """Read a length-prefixed UTF-8 string.

        Raises:
            MalformedLengthError: If the prefix is < 1 or the span isn't NUL-terminated
            BufferExhaustedError: If the declared span runs past the buffer
            DecodeError: If the bytes are not valid UTF-8
        """
        offset = self._position
        length = self.read_int32()
        if length < 1:
            raise MalformedLengthError(f"Invalid string length {length} at offset {offset}")
        raw = self._take(length)
        if raw[-1] != 0x00:
            raise MalformedLengthError(f"String at offset {offset} is not NUL-terminated")
        try:
            return raw[:-1].decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Invalid UTF-8 in string at offset {offset}: {e}") from e
