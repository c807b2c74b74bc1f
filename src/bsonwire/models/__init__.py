"""Value models for bsonwire.

This module provides the value types for wire kinds that have no native
Python counterpart.
"""

from __future__ import annotations

from .base import BsonValue
from .values import REGEX_FLAGS, Binary, Int64, MaxKey, MinKey, ObjectId, Regex

__all__ = [
    "BsonValue",
    "Binary",
    "Int64",
    "MaxKey",
    "MinKey",
    "ObjectId",
    "Regex",
    "REGEX_FLAGS",
]
