"""End-to-end integration tests."""

from __future__ import annotations

import datetime
import re
import uuid
from pathlib import Path

import pytest

from bsonwire import (
    Binary,
    CodecOptions,
    Int64,
    MaxKey,
    MinKey,
    ObjectId,
    Regex,
    UnsupportedTypeError,
    decode,
    decode_all,
    decode_document,
    encode,
    to_display,
)


def sensor_log_entry() -> dict:
    """A reading as it would be stored by a data logger."""
    return {
        "_id": ObjectId.from_hex("65a1b2c3d4e5f60718293a4b"),
        "station": "north-pier",
        "session": uuid.UUID("12345678-1234-5678-1234-567812345678"),
        "taken": datetime.datetime(2024, 3, 5, 12, 30, 15, 250000, tzinfo=datetime.timezone.utc),
        "readings": [
            {"sensor": "temp", "value": 11.75, "ok": True},
            {"sensor": "salinity", "value": 35.1, "ok": False},
        ],
        "sequence": Int64(9_000_000_000),
        "count": 2,
        "raw": b"\x00\x01\x02\x03",
        "signature": Binary(subtype=0x80, data=b"\xca\xfe"),
        "match": Regex(pattern="^north-", flags="i"),
        "notes": None,
        "range": [MinKey(), MaxKey()],
    }


class TestEndToEndWorkflow:
    """Test complete end-to-end workflows."""

    def test_log_entry_workflow(self) -> None:
        """Test a realistic document through encode, decode and display."""
        # 1. Encode
        entry = sensor_log_entry()
        data = encode(entry)

        # 2. Length prefix spans the whole buffer
        assert int.from_bytes(data[:4], "little") == len(data)
        assert data[-1] == 0x00

        # 3. Decode
        decoded = decode(data)
        assert decoded == entry
        assert isinstance(decoded["sequence"], Int64)
        assert isinstance(decoded["session"], uuid.UUID)

        # 4. Keys come back sorted
        assert list(decoded) == sorted(entry)

        # 5. Display
        text = to_display(decoded)
        assert '"station": "north-pier"' in text
        assert "ObjectId(65a1b2c3d4e5f60718293a4b)" in text
        assert "Date(2024-03-05T12:30:15.250Z)" in text
        assert "9000000000L" in text

    def test_log_file_workflow(self, tmp_path: Path) -> None:
        """Test writing a log of documents and reading it back."""
        entries = [sensor_log_entry() for _ in range(3)]
        for index, entry in enumerate(entries):
            entry["count"] = index

        path = tmp_path / "log.bson"
        with path.open("wb") as f:
            for entry in entries:
                f.write(encode(entry))

        assert decode_all(path.read_bytes()) == entries

    def test_embedded_document(self) -> None:
        """Test decoding a document inside a larger framed buffer."""
        header = b"HDR\x01"
        payload = encode({"cmd": "ping", "seq": 7})
        frame = header + payload + b"\xde\xad\xbe\xef"

        assert decode_document(frame, offset=len(header)) == {"cmd": "ping", "seq": 7}

    def test_compiled_regex_workflow(self) -> None:
        """Test a Python pattern survives the trip as a usable regex."""
        data = encode({"filter": re.compile(r"sensor-\d+", re.IGNORECASE)})

        regex = decode(data)["filter"]
        assert isinstance(regex, Regex)
        assert regex.compile().match("SENSOR-42")

    def test_naive_datetimes(self) -> None:
        """Test a naive-datetime workflow with tz_aware=False."""
        options = CodecOptions(tz_aware=False)
        stamp = datetime.datetime(2001, 2, 3, 4, 5, 6, 7000)

        assert decode(encode({"t": stamp}, options), options) == {"t": stamp}

    def test_foreign_document_with_unsupported_field(self) -> None:
        """Test documents from other writers with script fields are rejected."""
        code = b"\x0d" + b"js\x00" + b"\x05\x00\x00\x00f();\x00"
        body = code
        data = (len(body) + 5).to_bytes(4, "little") + body + b"\x00"

        with pytest.raises(UnsupportedTypeError, match="JS_CODE"):
            decode(data)
