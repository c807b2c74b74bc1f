"""Binary document codec for bsonwire.

This module provides encoding and decoding between Python dicts/lists and
length-prefixed little-endian binary documents.
"""

from __future__ import annotations

from .decoder import decode, decode_all, decode_array, decode_document
from .encoder import encode, encode_array, encode_document
from .primitives import ByteReader, ByteWriter
from .types import BinarySubtype, WireType

__all__ = [
    "encode",
    "encode_document",
    "encode_array",
    "decode",
    "decode_document",
    "decode_array",
    "decode_all",
    "ByteReader",
    "ByteWriter",
    "BinarySubtype",
    "WireType",
]
