"""Document encoder.

This module provides the encode() family of functions that convert Python
mappings and sequences into length-prefixed binary documents.

Every document or array unit is laid out as::

    int32 total_length | element* | 0x00
    element = byte type_tag | cstring key | payload

total_length counts the prefix itself and the trailing terminator. Nested
units are written into the same buffer and backpatched in place.
"""

from __future__ import annotations

import datetime
import logging
import re
import struct
import uuid
from collections.abc import Mapping, Sequence
from typing import Any, Iterable

from ..config import DEFAULT_OPTIONS, CodecOptions
from ..exceptions import EncodeError, InvalidKeyError, UnencodableValueError
from ..models.values import Binary, Regex
from ..utils.dates import datetime_to_millis
from .primitives import ByteWriter
from .types import EMPTY_PAYLOAD_TYPES, BinarySubtype, WireType, wire_type_for

logger = logging.getLogger(__name__)

# Low 64 bits, then high 64 bits
_UUID_HALVES = struct.Struct("<QQ")
_UINT64_MASK = (1 << 64) - 1


def encode(obj: Mapping[str, Any] | Sequence[Any], options: CodecOptions | None = None) -> bytes:
    """Encode a document or an array to binary form.

    Mappings encode as documents, lists and tuples as arrays.

    Args:
        obj: Document (mapping with str keys) or array (list/tuple) to encode
        options: Codec options; defaults to CodecOptions()

    Returns:
        Encoded bytes

    Raises:
        InvalidKeyError: If a document key is not a str or contains NUL
        UnencodableValueError: If obj, or any value inside it, has no wire mapping
        EncodeError: If the tree is nested deeper than options.max_depth

    Examples:
        ```python
        from bsonwire import encode

        data = encode({"hello": "world"})
        assert data.hex() == "160000000268656c6c6f0006000000776f726c640000"

        data = encode(["awesome", 5.05, 1986])
        ```
    """
    if isinstance(obj, Mapping):
        return encode_document(obj, options)
    if isinstance(obj, (list, tuple)):
        return encode_array(obj, options)
    raise UnencodableValueError(obj, "top-level value must be a mapping or a list")


def encode_document(document: Mapping[str, Any], options: CodecOptions | None = None) -> bytes:
    """Encode a mapping as a document.

    Keys are written in sorted order unless options.sort_keys is False, in
    which case the mapping's iteration order is kept.

    Raises:
        InvalidKeyError: If a key is not a str or contains NUL
        UnencodableValueError: If a value has no wire mapping
        EncodeError: If the tree is nested deeper than options.max_depth
    """
    opts = options or DEFAULT_OPTIONS
    writer = ByteWriter()
    _write_unit(writer, _document_items(document, opts), 1, opts)
    logger.debug("Encoded document with %d keys into %d bytes", len(document), len(writer))
    return writer.to_bytes()


def encode_array(array: Sequence[Any], options: CodecOptions | None = None) -> bytes:
    """Encode a sequence as an array (a document keyed "0", "1", "2", ...).

    Raises:
        UnencodableValueError: If an element has no wire mapping
        EncodeError: If the tree is nested deeper than options.max_depth
    """
    opts = options or DEFAULT_OPTIONS
    writer = ByteWriter()
    _write_unit(writer, _array_items(array), 1, opts)
    logger.debug("Encoded array of %d elements into %d bytes", len(array), len(writer))
    return writer.to_bytes()


def _document_items(document: Mapping[Any, Any], options: CodecOptions) -> list[tuple[str, Any]]:
    items = list(document.items())
    for key, _value in items:
        if not isinstance(key, str):
            raise InvalidKeyError(f"Document keys must be str, got {key!r}")
    if options.sort_keys:
        items.sort(key=lambda kv: kv[0])
    return items


def _array_items(array: Sequence[Any]) -> Iterable[tuple[str, Any]]:
    return ((str(index), value) for index, value in enumerate(array))


def _write_unit(
    writer: ByteWriter, items: Iterable[tuple[str, Any]], depth: int, options: CodecOptions
) -> None:
    """Write one length-prefixed document/array unit at the end of writer."""
    if depth > options.max_depth:
        raise EncodeError(f"Nesting depth exceeds max_depth={options.max_depth}")

    start = writer.reserve_int32()
    for key, value in items:
        _write_element(writer, key, value, depth, options)

    # The terminator isn't written yet, hence the +1
    writer.patch_int32(start, len(writer) - start + 1)
    writer.write_byte(0x00)


def _write_element(
    writer: ByteWriter, key: str, value: Any, depth: int, options: CodecOptions
) -> None:
    """Write ``type_tag | cstring key | payload`` for a single entry.

    Raises:
        InvalidKeyError: If key contains NUL
        UnencodableValueError: If value has no wire mapping
    """
    wire_type = wire_type_for(value)

    writer.write_byte(wire_type)
    try:
        writer.write_cstring(key)
    except ValueError as err:
        raise InvalidKeyError(f"Invalid key {key!r}: {err}") from err

    # No payload
    if wire_type in EMPTY_PAYLOAD_TYPES:
        return

    if wire_type is WireType.DOUBLE:
        writer.write_double(value)
        return

    if wire_type is WireType.STRING:
        try:
            writer.write_string(value)
        except UnicodeEncodeError as err:
            raise UnencodableValueError(value, str(err)) from err
        return

    if wire_type is WireType.DOCUMENT:
        _write_unit(writer, _document_items(value, options), depth + 1, options)
        return

    if wire_type is WireType.ARRAY:
        _write_unit(writer, _array_items(value), depth + 1, options)
        return

    if wire_type is WireType.BINARY:
        _write_binary(writer, value)
        return

    if wire_type is WireType.OBJECT_ID:
        writer.write_bytes(value.binary)
        return

    if wire_type is WireType.BOOLEAN:
        writer.write_bool(value)
        return

    if wire_type is WireType.UTC_DATETIME:
        _write_datetime(writer, value)
        return

    if wire_type is WireType.REGEX:
        _write_regex(writer, value)
        return

    if wire_type is WireType.INT32:
        writer.write_int32(value)
        return

    if wire_type is WireType.INT64:
        writer.write_int64(value)
        return

    # wire_type_for never yields the unsupported kinds
    raise UnencodableValueError(value, f"no encoder for {wire_type.name}")


def _write_binary(writer: ByteWriter, value: Any) -> None:
    """Write ``int32 payload_length | subtype | payload``.

    UUIDs are written as the least-significant 64 bits followed by the
    most-significant 64 bits, each little-endian.
    """
    if isinstance(value, uuid.UUID):
        subtype = BinarySubtype.UUID
        data = _UUID_HALVES.pack(value.int & _UINT64_MASK, value.int >> 64)
    elif isinstance(value, Binary):
        subtype = value.subtype
        data = value.data
    else:
        subtype = BinarySubtype.GENERIC
        data = bytes(value)

    writer.write_int32(len(data))
    writer.write_byte(subtype)
    writer.write_bytes(data)


def _write_datetime(writer: ByteWriter, value: datetime.datetime) -> None:
    writer.write_int64(datetime_to_millis(value))


def _write_regex(writer: ByteWriter, value: Regex | re.Pattern[str]) -> None:
    """Write the pattern and the wire flag letters as two C-strings."""
    regex = value if isinstance(value, Regex) else Regex.from_pattern(value)
    try:
        writer.write_cstring(regex.pattern)
    except ValueError as err:
        raise UnencodableValueError(value, str(err)) from err
    writer.write_cstring(regex.flags)

