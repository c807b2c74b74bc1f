"""Utility functions for bsonwire.

This module provides UTC datetime conversion/formatting and diagnostic rendering.
"""

from __future__ import annotations

from .dates import datetime_to_millis, format_utc, millis_to_datetime, parse_utc
from .display import to_display

__all__ = [
    # Date functions
    "datetime_to_millis",
    "millis_to_datetime",
    "format_utc",
    "parse_utc",
    # Rendering
    "to_display",
]
