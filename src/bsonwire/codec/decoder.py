"""Document decoder.

This module provides the decode() family of functions that convert binary
documents back into Python dicts and lists.

Documents and arrays share one recursive routine. The only difference
between them is how element keys are interpreted: as field names for a
document, or as decimal indices for an array.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any

from ..config import DEFAULT_OPTIONS, CodecOptions
from ..exceptions import DecodeError, InvalidKeyError, MalformedLengthError
from ..models.values import Binary, Int64, MaxKey, MinKey, ObjectId, Regex
from ..utils.dates import millis_to_datetime
from .primitives import ByteReader
from .types import BinarySubtype, WireType, wire_type_from_tag

logger = logging.getLogger(__name__)

# int32 length + 0x00 terminator
MIN_UNIT_SIZE = 5


class _DocumentBuilder:
    """Collects elements keyed by field name."""

    def __init__(self) -> None:
        self._document: dict[str, Any] = {}

    def add(self, key: str, value: Any) -> None:
        self._document[key] = value

    def result(self) -> dict[str, Any]:
        return self._document


class _ArrayBuilder:
    """Collects elements keyed by decimal index and orders them by index.

    Field order on the wire is not trusted; the indices must form exactly
    0..n-1 once sorted.
    """

    def __init__(self) -> None:
        self._items: list[tuple[int, Any]] = []

    def add(self, key: str, value: Any) -> None:
        if not (key.isascii() and key.isdigit()):
            raise InvalidKeyError(f"Array key {key!r} is not a non-negative integer index")
        self._items.append((int(key), value))

    def result(self) -> list[Any]:
        self._items.sort(key=lambda item: item[0])
        for expected, (index, _value) in enumerate(self._items):
            if index != expected:
                raise InvalidKeyError(
                    f"Array indices must be contiguous from 0: expected {expected}, got {index}"
                )
        return [value for _index, value in self._items]


def decode(data: bytes, options: CodecOptions | None = None) -> dict[str, Any]:
    """Decode a binary document to a dict.

    The document must start at offset 0 and span the whole buffer.

    Args:
        data: Encoded document
        options: Codec options; defaults to CodecOptions()

    Returns:
        Decoded document

    Raises:
        UnsupportedTypeError: If an element has a recognised but unsupported type
        UnknownTypeError: If an element has an unknown type tag
        InvalidKeyError: If an array key is not a valid index
        MalformedLengthError: If a length prefix is inconsistent with the data
        BufferExhaustedError: If a field read runs past the end of data
        DecodeError: For any other malformed payload

    Examples:
        ```python
        from bsonwire import decode

        data = bytes.fromhex("160000000268656c6c6f0006000000776f726c640000")
        assert decode(data) == {"hello": "world"}
        ```
    """
    reader = ByteReader(data)
    try:
        document = _read_unit(reader, _DocumentBuilder(), 1, options or DEFAULT_OPTIONS)
    except DecodeError as e:
        logger.debug("Failed to decode %d-byte document: %s", len(reader), e)
        raise

    if reader.remaining():
        raise MalformedLengthError(
            f"{reader.remaining()} trailing bytes after document of {reader.position} bytes"
        )
    return document


def decode_document(
    data: bytes, offset: int = 0, options: CodecOptions | None = None
) -> dict[str, Any]:
    """Decode the document that starts at offset, ignoring anything after it.

    Raises:
        DecodeError: See decode()
    """
    reader = ByteReader(data)
    reader.seek(offset)
    return _read_unit(reader, _DocumentBuilder(), 1, options or DEFAULT_OPTIONS)


def decode_array(data: bytes, offset: int = 0, options: CodecOptions | None = None) -> list[Any]:
    """Decode the array that starts at offset, ignoring anything after it.

    Raises:
        DecodeError: See decode()
    """
    reader = ByteReader(data)
    reader.seek(offset)
    return _read_unit(reader, _ArrayBuilder(), 1, options or DEFAULT_OPTIONS)


def decode_all(data: bytes, options: CodecOptions | None = None) -> list[dict[str, Any]]:
    """Decode a buffer holding zero or more documents back to back.

    Raises:
        DecodeError: See decode()
    """
    opts = options or DEFAULT_OPTIONS
    reader = ByteReader(data)
    documents = []
    while reader.remaining():
        documents.append(_read_unit(reader, _DocumentBuilder(), 1, opts))
    logger.debug("Decoded %d documents from %d bytes", len(documents), len(reader))
    return documents


def _read_unit(
    reader: ByteReader,
    builder: _DocumentBuilder | _ArrayBuilder,
    depth: int,
    options: CodecOptions,
) -> Any:
    """Read one length-prefixed unit starting at the reader's position.

    On success the reader is left just past the unit's terminator.
    """
    if depth > options.max_depth:
        raise DecodeError(f"Nesting depth exceeds max_depth={options.max_depth}")

    start = reader.position
    declared = reader.read_int32()
    # Exclude the trailing terminator from the scan bound
    end = start + declared - 1

    if end == start:
        return builder.result()

    if declared < MIN_UNIT_SIZE:
        raise MalformedLengthError(f"Invalid length {declared} for unit at offset {start}")
    if start + declared > len(reader):
        raise MalformedLengthError(
            f"Unit at offset {start} declares {declared} bytes, "
            f"only {len(reader) - start} available"
        )

    while reader.position < end:
        tag = reader.read_byte()
        key = reader.read_cstring()
        wire_type = wire_type_from_tag(tag)
        builder.add(key, _read_value(reader, wire_type, depth, options))

        if reader.position > end:
            raise MalformedLengthError(
                f"Element {key!r} overruns the unit ending at offset {end}"
            )

    if reader.read_byte() != 0x00:
        raise MalformedLengthError(f"Unit at offset {start} is not terminated by 0x00")

    return builder.result()


def _read_value(reader: ByteReader, wire_type: WireType, depth: int, options: CodecOptions) -> Any:
    """Read the payload for wire_type and advance past exactly its encoded width."""
    if wire_type is WireType.DOUBLE:
        return reader.read_double()

    if wire_type is WireType.STRING:
        return reader.read_string()

    if wire_type is WireType.DOCUMENT or wire_type is WireType.ARRAY:
        builder = _DocumentBuilder() if wire_type is WireType.DOCUMENT else _ArrayBuilder()
        start = reader.position
        declared = reader.peek_int32()
        value = _read_unit(reader, builder, depth + 1, options)
        # Advance by the declared length, not by what the nested read consumed
        reader.seek(start + declared)
        return value

    if wire_type is WireType.BINARY:
        return _read_binary(reader)

    if wire_type is WireType.OBJECT_ID:
        return ObjectId(binary=reader.read_bytes(12))

    if wire_type is WireType.BOOLEAN:
        return reader.read_bool()

    if wire_type is WireType.UTC_DATETIME:
        millis = reader.read_int64()
        try:
            return millis_to_datetime(millis, tz_aware=options.tz_aware)
        except OverflowError as e:
            raise DecodeError(f"Datetime {millis} ms is outside the supported range") from e

    if wire_type is WireType.NULL:
        return None

    if wire_type is WireType.REGEX:
        pattern = reader.read_cstring()
        flags = reader.read_cstring()
        try:
            return Regex(pattern=pattern, flags=flags)
        except ValueError as e:
            raise DecodeError(f"Invalid regex flags {flags!r}: {e}") from e

    if wire_type is WireType.INT32:
        return reader.read_int32()

    if wire_type is WireType.INT64:
        return Int64(reader.read_int64())

    if wire_type is WireType.MIN_KEY:
        return MinKey()

    if wire_type is WireType.MAX_KEY:
        return MaxKey()

    # wire_type_from_tag already rejected the unsupported kinds
    raise DecodeError(f"No decoder for element type {wire_type.name}")


def _read_binary(reader: ByteReader) -> bytes | uuid.UUID | Binary:
    """Read ``int32 payload_length | subtype | payload``.

    Subtype 0x00 decodes to bytes, a 16-byte subtype 0x04 to uuid.UUID, and
    everything else to Binary.
    """
    offset = reader.position
    length = reader.read_int32()
    if length < 0:
        raise MalformedLengthError(f"Negative binary length {length} at offset {offset}")
    subtype = reader.read_byte()
    data = reader.read_bytes(length)

    if subtype == BinarySubtype.GENERIC:
        return data

    if subtype == BinarySubtype.UUID and length == 16:
        low = int.from_bytes(data[:8], "little")
        high = int.from_bytes(data[8:], "little")
        return uuid.UUID(int=(high << 64) | low)

    return Binary(subtype=subtype, data=data)
