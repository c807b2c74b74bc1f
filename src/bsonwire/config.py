"""Configuration for the bsonwire codec.

This module provides the options dataclass shared by the encoder and decoder.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CodecOptions:
    """Options controlling how documents are encoded and decoded.

    Attributes:
        sort_keys: Emit document keys in sorted order (default True).
            Structurally equal documents then encode to identical bytes no
            matter what order their keys were inserted in. With False, the
            mapping's own iteration order is used.

        max_depth: Maximum nesting of documents/arrays (default 100).
            The top-level document counts as depth 1. Exceeding it raises
            EncodeError or DecodeError.

        tz_aware: Return timezone-aware UTC datetimes when decoding (default True).
            With False, decoded datetimes are naive and implicitly UTC.

    Examples:
        ```python
        from bsonwire import CodecOptions, decode, encode

        # Keep insertion order on the wire
        data = encode({"b": 1, "a": 2}, CodecOptions(sort_keys=False))

        # Naive datetimes on decode
        doc = decode(data, CodecOptions(tz_aware=False))
        ```
    """

    # Encoding
    sort_keys: bool = True

    # Shared
    max_depth: int = 100

    # Decoding
    tz_aware: bool = True

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {self.max_depth}")


DEFAULT_OPTIONS = CodecOptions()
