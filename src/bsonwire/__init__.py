"""bsonwire: Binary Document Codec

A Python library that encodes dicts and lists to the length-prefixed,
little-endian binary document format described at bsonspec.org, and decodes
them back.

Key Features:
- Byte-exact output for the published bsonspec.org examples
- Deterministic encoding (sorted keys by default)
- Bounds-checked decoding with a precise error taxonomy
- Pydantic value models for binary, object ids, regexes and min/max keys

Quick Start:
    >>> from bsonwire import encode, decode
    >>>
    >>> data = encode({"hello": "world"})
    >>> data.hex()
    '160000000268656c6c6f0006000000776f726c640000'
    >>> decode(data)
    {'hello': 'world'}

Wire format reference: http://bsonspec.org/spec.html
"""

from __future__ import annotations

from .codec import (
    BinarySubtype,
    WireType,
    decode,
    decode_all,
    decode_array,
    decode_document,
    encode,
    encode_array,
    encode_document,
)
from .config import CodecOptions
from .exceptions import (
    BsonwireError,
    BufferExhaustedError,
    DecodeError,
    EncodeError,
    InvalidKeyError,
    MalformedLengthError,
    UnencodableValueError,
    UnknownTypeError,
    UnsupportedTypeError,
)
from .models import Binary, Int64, MaxKey, MinKey, ObjectId, Regex
from .utils import format_utc, parse_utc, to_display

__version__ = "0.1.0"

__all__ = [
    # Core API
    "encode",
    "encode_document",
    "encode_array",
    "decode",
    "decode_document",
    "decode_array",
    "decode_all",
    "CodecOptions",
    # Wire types
    "WireType",
    "BinarySubtype",
    # Value models
    "Binary",
    "Int64",
    "MaxKey",
    "MinKey",
    "ObjectId",
    "Regex",
    # Exceptions
    "BsonwireError",
    "EncodeError",
    "UnencodableValueError",
    "DecodeError",
    "UnsupportedTypeError",
    "UnknownTypeError",
    "MalformedLengthError",
    "BufferExhaustedError",
    "InvalidKeyError",
    # Utilities
    "format_utc",
    "parse_utc",
    "to_display",
    # Version
    "__version__",
]
