"""Wire type tags and type dispatch.

This module holds the single table that both directions of the codec share:
the one-byte type tag that precedes every element, the runtime Python types
that map onto each tag, and the tags that are recognised but not supported.
"""

from __future__ import annotations

import datetime
import enum
import re
import uuid
from collections.abc import Mapping
from typing import Any

from ..exceptions import UnencodableValueError, UnknownTypeError, UnsupportedTypeError
from ..models.values import Binary, Int64, MaxKey, MinKey, ObjectId, Regex
from .primitives import INT32_MAX, INT32_MIN, INT64_MAX, INT64_MIN


class WireType(enum.IntEnum):
    """Element type tags."""

    DOUBLE = 0x01
    STRING = 0x02
    DOCUMENT = 0x03
    ARRAY = 0x04
    BINARY = 0x05
    UNDEFINED = 0x06  # deprecated
    OBJECT_ID = 0x07
    BOOLEAN = 0x08
    UTC_DATETIME = 0x09
    NULL = 0x0A
    REGEX = 0x0B
    DB_POINTER = 0x0C  # deprecated
    JS_CODE = 0x0D
    SYMBOL = 0x0E  # deprecated
    JS_CODE_WITH_SCOPE = 0x0F
    INT32 = 0x10
    TIMESTAMP = 0x11
    INT64 = 0x12
    MAX_KEY = 0x7F
    MIN_KEY = 0xFF


class BinarySubtype(enum.IntEnum):
    """Binary payload subtypes."""

    GENERIC = 0x00
    FUNCTION = 0x01
    BINARY_OLD = 0x02
    UUID_OLD = 0x03
    UUID = 0x04
    MD5 = 0x05
    USER_DEFINED = 0x80


# Recognised on the wire, but with no Python value to decode into.
UNSUPPORTED_TYPES = frozenset(
    {
        WireType.UNDEFINED,
        WireType.DB_POINTER,
        WireType.JS_CODE,
        WireType.SYMBOL,
        WireType.JS_CODE_WITH_SCOPE,
        WireType.TIMESTAMP,
    }
)

# Types with no payload after the key
EMPTY_PAYLOAD_TYPES = frozenset({WireType.NULL, WireType.MIN_KEY, WireType.MAX_KEY})

# Exact-type fast path; subclasses fall through to the isinstance chain below.
_EXACT_TYPES: dict[type, WireType] = {
    float: WireType.DOUBLE,
    str: WireType.STRING,
    dict: WireType.DOCUMENT,
    list: WireType.ARRAY,
    tuple: WireType.ARRAY,
    bytes: WireType.BINARY,
    bytearray: WireType.BINARY,
    memoryview: WireType.BINARY,
    uuid.UUID: WireType.BINARY,
    Binary: WireType.BINARY,
    ObjectId: WireType.OBJECT_ID,
    bool: WireType.BOOLEAN,
    datetime.datetime: WireType.UTC_DATETIME,
    type(None): WireType.NULL,
    Regex: WireType.REGEX,
    re.Pattern: WireType.REGEX,
    MinKey: WireType.MIN_KEY,
    MaxKey: WireType.MAX_KEY,
}


def wire_type_for(value: Any) -> WireType:
    """Return the wire type a Python value encodes as.

    Args:
        value: Value to classify

    Returns:
        The element type tag for value

    Raises:
        UnencodableValueError: If value has no wire mapping
    """
    if type(value) is int:
        return _int_wire_type(value)

    wire_type = _EXACT_TYPES.get(type(value))
    if wire_type is not None:
        return wire_type

    # bool must be checked before int
    if isinstance(value, bool):
        return WireType.BOOLEAN
    if isinstance(value, Int64):
        if INT64_MIN <= value <= INT64_MAX:
            return WireType.INT64
        raise UnencodableValueError(value, "integer outside the signed 64-bit range")
    if isinstance(value, int):
        return _int_wire_type(value)
    if isinstance(value, float):
        return WireType.DOUBLE
    if isinstance(value, str):
        return WireType.STRING
    if isinstance(value, Mapping):
        return WireType.DOCUMENT
    if isinstance(value, (list, tuple)):
        return WireType.ARRAY
    if isinstance(value, (bytes, bytearray, memoryview, uuid.UUID, Binary)):
        return WireType.BINARY
    if isinstance(value, datetime.datetime):
        return WireType.UTC_DATETIME

    raise UnencodableValueError(value)


def _int_wire_type(value: int) -> WireType:
    if INT32_MIN <= value <= INT32_MAX:
        return WireType.INT32
    if INT64_MIN <= value <= INT64_MAX:
        return WireType.INT64
    raise UnencodableValueError(value, "integer outside the signed 64-bit range")


def wire_type_from_tag(tag: int) -> WireType:
    """Look up the wire type for a tag byte read from the stream.

    There is no way to know the payload length of an unknown or unsupported
    type, so both fail immediately.

    Raises:
        UnknownTypeError: If tag is not a known type tag
        UnsupportedTypeError: If tag is known but has no runtime representation
    """
    try:
        wire_type = WireType(tag)
    except ValueError as e:
        raise UnknownTypeError(f"Unknown element type tag 0x{tag:02x}") from e

    if wire_type in UNSUPPORTED_TYPES:
        raise UnsupportedTypeError(
            f"Element type {wire_type.name} (0x{tag:02x}) is not implemented"
        )

    return wire_type
