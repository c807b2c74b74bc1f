"""UTC datetime helpers.

The wire stores datetimes as signed 64-bit milliseconds since the Unix epoch.
These functions convert between that count, datetime objects and the textual
``YYYY-MM-DDTHH:MM:SS.mmmZ`` form used in diagnostic output. They keep no
state, so they are safe to call from any thread.
"""

from __future__ import annotations

import datetime

EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)

_TEXT_FORMAT = "%Y-%m-%dT%H:%M:%S"


def datetime_to_millis(value: datetime.datetime) -> int:
    """Convert a datetime to milliseconds since the epoch.

    Naive datetimes are taken to be UTC. Sub-millisecond precision is
    truncated toward negative infinity.

    Example:
        >>> datetime_to_millis(datetime.datetime(1970, 1, 1, 0, 0, 1))
        1000
    """
    if value.tzinfo is None or value.utcoffset() is None:
        value = value.replace(tzinfo=datetime.timezone.utc)
    delta = value - EPOCH
    return (delta.days * 86_400 + delta.seconds) * 1000 + delta.microseconds // 1000


def millis_to_datetime(millis: int, tz_aware: bool = True) -> datetime.datetime:
    """Convert milliseconds since the epoch to a UTC datetime.

    Args:
        millis: Milliseconds since 1970-01-01T00:00:00Z
        tz_aware: Return an aware datetime (True) or a naive UTC one (False)

    Raises:
        OverflowError: If millis falls outside the datetime range (years 1-9999)
    """
    value = EPOCH + datetime.timedelta(milliseconds=millis)
    if not tz_aware:
        value = value.replace(tzinfo=None)
    return value


def format_utc(value: datetime.datetime) -> str:
    """Format a datetime as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC.

    Example:
        >>> format_utc(datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc))
        '1970-01-01T00:00:00.000Z'
    """
    if value.tzinfo is not None and value.utcoffset() is not None:
        value = value.astimezone(datetime.timezone.utc)
    return (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}T"
        f"{value.hour:02d}:{value.minute:02d}:{value.second:02d}."
        f"{value.microsecond // 1000:03d}Z"
    )


def parse_utc(text: str) -> datetime.datetime:
    """Parse ``YYYY-MM-DDTHH:MM:SS.mmmZ`` into an aware UTC datetime.

    Raises:
        ValueError: If text is not in that exact form
    """
    if not text.endswith("Z") or len(text) != 24 or text[19] != ".":
        raise ValueError(f"Not a UTC timestamp of the form YYYY-MM-DDTHH:MM:SS.mmmZ: {text!r}")
    base = datetime.datetime.strptime(text[:19], _TEXT_FORMAT)
    millis = text[20:23]
    if not millis.isdigit():
        raise ValueError(f"Invalid milliseconds in {text!r}")
    return base.replace(microsecond=int(millis) * 1000, tzinfo=datetime.timezone.utc)
