"""Text rendering of decoded documents.

Used for diagnostic output only; the rendering is not parseable back into
a document.
"""

from __future__ import annotations

import datetime
import json
import uuid
from collections.abc import Mapping
from typing import Any

from ..models.values import Binary, Int64, MaxKey, MinKey, ObjectId, Regex
from .dates import format_utc


def to_display(value: Any, indent: int = 2) -> str:
    """Render a value tree as indented text.

    Args:
        value: Document, array or scalar to render
        indent: Spaces per nesting level

    Returns:
        Multi-line text

    Example:
        >>> print(to_display({"hello": "world", "n": [1, 2]}))
        {
          "hello": "world",
          "n": [
            1,
            2
          ]
        }
    """
    return "\n".join(_render(value, 0, indent))


def _render(value: Any, level: int, indent: int) -> list[str]:
    pad = " " * (indent * (level + 1))
    closing = " " * (indent * level)

    if isinstance(value, Mapping):
        if not value:
            return ["{}"]
        lines = ["{"]
        items = list(value.items())
        for position, (key, item) in enumerate(items):
            rendered = _render(item, level + 1, indent)
            rendered[0] = f"{pad}{_quote(key)}: {rendered[0]}"
            if position < len(items) - 1:
                rendered[-1] += ","
            lines.extend(rendered)
        lines.append(closing + "}")
        return lines

    if isinstance(value, (list, tuple)):
        if not value:
            return ["[]"]
        lines = ["["]
        for position, item in enumerate(value):
            rendered = _render(item, level + 1, indent)
            rendered[0] = pad + rendered[0]
            if position < len(value) - 1:
                rendered[-1] += ","
            lines.extend(rendered)
        lines.append(closing + "]")
        return lines

    return [_render_scalar(value)]


def _quote(text: str) -> str:
    # Escapes quotes and control characters, keeps non-ASCII readable
    return json.dumps(text, ensure_ascii=False)


def _render_scalar(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Int64):
        return f"{int(value)}L"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return _quote(value)
    if isinstance(value, datetime.datetime):
        return f"Date({format_utc(value)})"
    if isinstance(value, ObjectId):
        return f"ObjectId({value.hex})"
    if isinstance(value, uuid.UUID):
        return f"UUID({value})"
    if isinstance(value, Binary):
        return f"Binary(0x{value.subtype:02x}, {value.data.hex()})"
    if isinstance(value, (bytes, bytearray, memoryview)):
        return f"Binary(0x00, {bytes(value).hex()})"
    if isinstance(value, Regex):
        return f"/{value.pattern}/{value.flags}"
    if isinstance(value, MinKey):
        return "MinKey"
    if isinstance(value, MaxKey):
        return "MaxKey"
    return repr(value)
