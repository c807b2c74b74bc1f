#!/usr/bin/env python3
"""Basic usage example for bsonwire.

This example demonstrates:
1. Encoding a nested document
2. Inspecting the length-prefixed layout
3. Decoding back to dicts and lists
4. Handling a malformed buffer
"""

from __future__ import annotations

import datetime
import uuid

from bsonwire import DecodeError, Int64, ObjectId, decode, encode, to_display


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("bsonwire Basic Usage Example")
    print("=" * 60)
    print()

    # Build a document
    print("1. Building a document...")
    document = {
        "_id": ObjectId.from_hex("507f1f77bcf86cd799439011"),
        "name": "survey-7",
        "started": datetime.datetime(2024, 6, 1, 8, 0, tzinfo=datetime.timezone.utc),
        "session": uuid.uuid4(),
        "samples": [12.5, 12.75, 13.0],
        "total_bytes": Int64(1_048_576),
        "tags": {"site": "harbor", "depth_m": 12},
    }
    print(f"   Keys: {', '.join(document)}")
    print()

    # Encode the document
    print("2. Encoding...")
    data = encode(document)

    print(f"   Encoded size: {len(data)} bytes")
    print(f"   Length prefix: {int.from_bytes(data[:4], 'little')}")
    print(f"   Terminator: 0x{data[-1]:02x}")
    print(f"   Hex: {data.hex()}")
    print()

    # Decode the document
    print("3. Decoding...")
    decoded = decode(data)
    print(to_display(decoded))
    print()

    # Verify round-trip
    if decoded == document:
        print("   ✓ Round-trip successful!")
    else:
        print("   ✗ Round-trip failed!")
    print()

    # Malformed input
    print("4. Decoding a truncated buffer...")
    try:
        decode(data[:-1])
    except DecodeError as e:
        print(f"   {type(e).__name__}: {e}")
    print()

    print("=" * 60)


if __name__ == "__main__":
    main()
