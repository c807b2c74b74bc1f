"""Base class for bsonwire value types.

Value kinds that have no native Python counterpart (binary with an explicit
subtype, object ids, regular expressions, the min/max key sentinels) are
modelled as small immutable Pydantic models deriving from BsonValue.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class BsonValue(BaseModel):
    """Base class for all bsonwire value models.

    Instances are frozen: a value tree cannot change while it is being encoded,
    and values can be used as dict keys or set members.

    Example:
        >>> from bsonwire.models import Binary
        >>> Binary(subtype=0x80, data=b"\\x01\\x02") == Binary(subtype=0x80, data=b"\\x01\\x02")
        True
    """

    model_config = ConfigDict(
        # Values are immutable and hashable
        frozen=True,
        # Forbid extra fields not defined in schema
        extra="forbid",
        # Lax coercion (e.g. bytearray -> bytes)
        strict=False,
    )
