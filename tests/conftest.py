"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import datetime

import pytest


@pytest.fixture
def hello_world_bytes() -> bytes:
    """{"hello": "world"}, the first example from bsonspec.org."""
    return bytes.fromhex(
        "16000000"  # total length 22
        "02" "68656c6c6f00"  # string "hello"
        "06000000" "776f726c6400"  # "world"
        "00"
    )


@pytest.fixture
def awesome_array_bytes() -> bytes:
    """{"BSON": ["awesome", 5.05, 1986]}, the second example from bsonspec.org."""
    return bytes.fromhex(
        "31000000"  # total length 49
        "04" "42534f4e00"  # array "BSON"
        "26000000"  # array length 38
        "02" "3000" "08000000" "617765736f6d6500"  # "0": "awesome"
        "01" "3100" "333333333333" "1440"  # "1": 5.05
        "10" "3200" "c2070000"  # "2": 1986
        "00"
        "00"
    )


@pytest.fixture
def epoch() -> datetime.datetime:
    """The Unix epoch as an aware UTC datetime."""
    return datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)
