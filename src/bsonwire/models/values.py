"""Value types without a native Python counterpart.

Most wire kinds map directly onto Python builtins (float, str, dict, list,
bool, int, None, bytes, uuid.UUID, datetime). The types in this module cover
the rest.
"""

from __future__ import annotations

import re
from typing import Annotated

from pydantic import field_validator

from .base import BsonValue
from .fields import ByteRange, ExactBytes

# Wire flag letter -> Python re flag. Letters are emitted in alphabetical order.
REGEX_FLAGS: dict[str, re.RegexFlag] = {
    "i": re.IGNORECASE,
    "l": re.LOCALE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "u": re.UNICODE,
    "x": re.VERBOSE,
}


class Int64(int):
    """An int that always encodes as the 64-bit integer wire kind.

    Plain ints encode as int32 when they fit. Decoded 64-bit integers come
    back as Int64, so they keep their wire kind on re-encoding.

    Example:
        >>> Int64(5) == 5
        True
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Int64({int(self)})"


class Binary(BsonValue):
    """Binary payload with an explicit subtype byte.

    Plain bytes encode as subtype 0x00 and uuid.UUID as subtype 0x04; use
    Binary for any other subtype.

    Those two forms are canonical on decode: subtype 0x00 comes back as
    bytes and a 16-byte subtype 0x04 comes back as uuid.UUID, even when the
    value was written from a Binary. The encoded bytes are the same either way.

    Attributes:
        subtype: Binary subtype (0-255)
        data: Raw payload
    """

    subtype: Annotated[int, ByteRange()]
    data: bytes


class ObjectId(BsonValue):
    """A 12-byte object identifier.

    Attributes:
        binary: The 12 identity bytes, written to the wire as-is
    """

    binary: Annotated[bytes, ExactBytes(12)]

    @classmethod
    def from_hex(cls, text: str) -> ObjectId:
        """Build an ObjectId from its 24-character hex form.

        Raises:
            ValueError: If text is not 24 hex characters
        """
        if len(text) != 24:
            raise ValueError(f"ObjectId hex must be 24 characters, got {len(text)}")
        return cls(binary=bytes.fromhex(text))

    @property
    def hex(self) -> str:
        return self.binary.hex()

    def __str__(self) -> str:
        return self.hex


class Regex(BsonValue):
    """A regular expression as stored on the wire.

    Attributes:
        pattern: Pattern text (must not contain NUL)
        flags: Flag letters from ``ilmsux``, kept in alphabetical order
    """

    pattern: str
    flags: str = ""

    @field_validator("flags")
    @classmethod
    def _normalize_flags(cls, value: str) -> str:
        unknown = sorted(set(value) - set(REGEX_FLAGS))
        if unknown:
            raise ValueError(f"unsupported regex flags {''.join(unknown)!r}")
        return "".join(sorted(set(value)))

    @classmethod
    def from_pattern(cls, compiled: re.Pattern[str]) -> Regex:
        """Convert a compiled Python pattern, translating its flags to wire letters.

        Example:
            >>> Regex.from_pattern(re.compile("^a", re.I | re.M))
            Regex(pattern='^a', flags='imu')
        """
        pattern = compiled.pattern
        if isinstance(pattern, bytes):
            pattern = pattern.decode("utf-8")
        letters = "".join(
            letter for letter, flag in REGEX_FLAGS.items() if compiled.flags & flag
        )
        return cls(pattern=pattern, flags=letters)

    def compile(self) -> re.Pattern[str]:
        """Compile into a Python pattern.

        The ``l`` flag is dropped; Python only allows LOCALE on bytes patterns.
        """
        flags = 0
        for letter in self.flags:
            if letter != "l":
                flags |= REGEX_FLAGS[letter]
        return re.compile(self.pattern, flags)


class MinKey(BsonValue):
    """Sentinel that compares lower than every other value on the server side."""

    def __repr__(self) -> str:
        return "MinKey()"


class MaxKey(BsonValue):
    """Sentinel that compares higher than every other value on the server side."""

    def __repr__(self) -> str:
        return "MaxKey()"
