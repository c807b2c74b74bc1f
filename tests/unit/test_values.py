"""Unit tests for value models and options."""

from __future__ import annotations

import re

import pytest
from pydantic import ValidationError

from bsonwire import Binary, CodecOptions, Int64, MaxKey, MinKey, ObjectId, Regex


class TestInt64:
    """Test the 64-bit integer marker."""

    def test_is_int(self) -> None:
        """Test Int64 behaves as an int."""
        value = Int64(5)

        assert value == 5
        assert value + 1 == 6
        assert isinstance(value, int)

    def test_repr(self) -> None:
        """Test Int64 is distinguishable in output."""
        assert repr(Int64(-3)) == "Int64(-3)"


class TestBinary:
    """Test Binary model validation."""

    def test_valid(self) -> None:
        """Test construction and equality."""
        assert Binary(subtype=5, data=b"x") == Binary(subtype=5, data=b"x")

    def test_subtype_range(self) -> None:
        """Test subtype must fit in a byte."""
        with pytest.raises(ValidationError):
            Binary(subtype=256, data=b"")

        with pytest.raises(ValidationError):
            Binary(subtype=-1, data=b"")

    def test_frozen(self) -> None:
        """Test instances are immutable."""
        value = Binary(subtype=0x80, data=b"")

        with pytest.raises(ValidationError):
            value.subtype = 1  # type: ignore[misc]

    def test_extra_fields_forbidden(self) -> None:
        """Test unknown fields are rejected."""
        with pytest.raises(ValidationError):
            Binary(subtype=0, data=b"", extra=1)  # type: ignore[call-arg]


class TestObjectId:
    """Test ObjectId model."""

    def test_from_hex(self) -> None:
        """Test hex round-trip."""
        oid = ObjectId.from_hex("507f1f77bcf86cd799439011")

        assert oid.binary == bytes.fromhex("507f1f77bcf86cd799439011")
        assert oid.hex == "507f1f77bcf86cd799439011"
        assert str(oid) == oid.hex

    def test_from_hex_wrong_length(self) -> None:
        """Test hex form must be 24 characters."""
        with pytest.raises(ValueError, match="24"):
            ObjectId.from_hex("abcd")

    def test_binary_length(self) -> None:
        """Test binary must be exactly 12 bytes."""
        with pytest.raises(ValidationError):
            ObjectId(binary=b"\x00" * 11)

    def test_hashable(self) -> None:
        """Test ObjectIds can be used in sets."""
        a = ObjectId(binary=b"\x01" * 12)
        b = ObjectId(binary=b"\x01" * 12)

        assert len({a, b}) == 1


class TestRegex:
    """Test Regex model."""

    def test_flags_normalized(self) -> None:
        """Test flags are sorted and de-duplicated."""
        assert Regex(pattern="a", flags="xmim").flags == "imx"

    def test_unknown_flag(self) -> None:
        """Test flags outside ilmsux are rejected."""
        with pytest.raises(ValidationError, match="unsupported regex flags"):
            Regex(pattern="a", flags="iq")

    def test_from_pattern(self) -> None:
        """Test Python flags translate to wire letters."""
        regex = Regex.from_pattern(re.compile("^a", re.IGNORECASE | re.MULTILINE))

        assert regex == Regex(pattern="^a", flags="imu")

    def test_compile(self) -> None:
        """Test converting back to a Python pattern."""
        compiled = Regex(pattern="^A", flags="im").compile()

        assert compiled.match("a")
        assert compiled.flags & re.IGNORECASE
        assert compiled.flags & re.MULTILINE

    def test_compile_drops_locale(self) -> None:
        """Test the locale flag is ignored for str patterns."""
        compiled = Regex(pattern="a", flags="l").compile()

        assert not compiled.flags & re.LOCALE


class TestKeys:
    """Test MinKey/MaxKey sentinels."""

    def test_equality(self) -> None:
        """Test sentinels compare equal to themselves only."""
        assert MinKey() == MinKey()
        assert MaxKey() == MaxKey()
        assert MinKey() != MaxKey()

    def test_repr(self) -> None:
        """Test sentinel reprs."""
        assert repr(MinKey()) == "MinKey()"
        assert repr(MaxKey()) == "MaxKey()"


class TestCodecOptions:
    """Test codec options."""

    def test_defaults(self) -> None:
        """Test default values."""
        options = CodecOptions()

        assert options.sort_keys is True
        assert options.max_depth == 100
        assert options.tz_aware is True

    def test_invalid_depth(self) -> None:
        """Test max_depth validation."""
        with pytest.raises(ValueError, match="max_depth"):
            CodecOptions(max_depth=0)
