"""Exception hierarchy for bsonwire.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from BsonwireError for easy catching of any bsonwire-specific error.
Every error is fail-fast: the codec never returns a partially encoded buffer or a
partially decoded document.
"""

from __future__ import annotations


class BsonwireError(Exception):
    """Base exception for all bsonwire errors."""

    pass


class EncodeError(BsonwireError):
    """Raised when encoding a document fails.

    Examples:
        - Nesting deeper than the configured max_depth
        - Integer outside the signed 64-bit range
    """

    pass


class UnencodableValueError(EncodeError):
    """Raised when a value has no wire mapping.

    The offending value is kept on the ``value`` attribute.
    """

    def __init__(self, value: object, reason: str = "") -> None:
        message = f"Don't know how to encode {value!r} ({type(value).__name__})"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.value = value


class DecodeError(BsonwireError):
    """Raised when decoding binary data fails.

    Examples:
        - Invalid boolean payload byte
        - Invalid UTF-8 in a string payload
        - Nesting deeper than the configured max_depth
    """

    pass


class UnsupportedTypeError(DecodeError):
    """Raised for a recognised wire type that has no runtime representation.

    Examples:
        - Undefined (0x06), DB pointer (0x0C), symbol (0x0E)
        - JavaScript code (0x0D), code with scope (0x0F)
        - Timestamp (0x11)
    """

    pass


class UnknownTypeError(DecodeError):
    """Raised for a type tag that does not appear in the wire vocabulary at all."""

    pass


class MalformedLengthError(DecodeError):
    """Raised when a length prefix does not describe a cleanly terminated span.

    Examples:
        - Document length smaller than the minimal empty document
        - Declared span runs past the end of the buffer
        - Missing 0x00 terminator at the declared end
        - Trailing bytes after the top-level document
    """

    pass


class BufferExhaustedError(DecodeError):
    """Raised when a primitive read would go past the end of the buffer."""

    pass


class InvalidKeyError(BsonwireError):
    """Raised when a document or array key is not valid.

    Examples:
        - Document key that is not a str
        - Key containing an embedded NUL byte
        - Array key that does not parse as a non-negative index
        - Array indices with gaps or duplicates
    """

    pass
