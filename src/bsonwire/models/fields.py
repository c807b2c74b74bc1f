"""Annotated field constraints shared by the value models."""

from __future__ import annotations

from typing import Any, cast

from pydantic import Field
from pydantic.fields import FieldInfo


def ExactBytes(size: int, **kwargs: Any) -> FieldInfo:
    """Constrain a bytes field to exactly ``size`` bytes.

    Example:
        >>> class Digest(BsonValue):
        ...     md5: Annotated[bytes, ExactBytes(16)]
    """
    return cast(FieldInfo, Field(min_length=size, max_length=size, **kwargs))


def ByteRange(**kwargs: Any) -> FieldInfo:
    """Constrain an int field to one unsigned byte (0-255)."""
    return cast(FieldInfo, Field(ge=0, le=0xFF, **kwargs))
