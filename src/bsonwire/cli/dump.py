"""Document dump and demo CLI commands."""

from __future__ import annotations

import datetime
import logging
import math
from pathlib import Path
from typing import Any

from ..codec import decode, decode_all, encode
from ..utils.display import to_display

logger = logging.getLogger(__name__)


def dump_file(file_path: Path) -> int:
    """Decode every document in a file and print it.

    Args:
        file_path: Path to a file holding one or more encoded documents

    Returns:
        Number of documents printed
    """
    data = file_path.read_bytes()
    logger.debug("Read %d bytes from %s", len(data), file_path)

    documents = decode_all(data)

    print(f"{len(documents)} document{'s' if len(documents) != 1 else ''} in {file_path}")
    for index, document in enumerate(documents):
        print(f"{'-' * 20} #{index} {'-' * 20}")
        print(to_display(document))

    return len(documents)


def demo_document() -> dict[str, Any]:
    """Build the sample document used by the demo."""
    now = datetime.datetime.now(datetime.timezone.utc)
    # The wire keeps millisecond precision only
    now = now.replace(microsecond=now.microsecond // 1000 * 1000)
    return {
        "hello": "world",
        "PI": math.pi,
        "null": None,
        "createDate": datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc),
        "BSON": ["awesome", 5.05, 1986, True, None, now],
    }


def run_demo() -> None:
    """Encode the sample document, decode it again and print both forms."""
    document = demo_document()
    data = encode(document)

    print(f"Encoded {len(document)} keys into {len(data)} bytes:")
    for offset in range(0, len(data), 16):
        chunk = data[offset:offset + 16]
        print(f"  {offset:04x}  {chunk.hex(' ')}")
    print()

    decoded = decode(data)
    print("Decoded:")
    print(to_display(decoded))

    if decoded != document:
        raise RuntimeError("Round trip produced a different document")
    print()
    print("Round trip OK")
