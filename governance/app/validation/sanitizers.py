"""Sanitization primitives shared by the field validators."""

import math
import re
from typing import Any, Optional

MAX_SAFE_INTEGER = 2**53 - 1

# C0 control characters except tab, newline and carriage return, plus DEL
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
_WHITESPACE_RUN = re.compile(r"\s+")
_LEADING_FLOAT = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

_HTML_ESCAPES = str.maketrans({
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#x27;",
    "/": "&#x2F;",
})


def sanitize_string(value: Any) -> str:
    """Normalize single-line text.

    Non-strings become ''. Strings are trimmed, stripped of NUL and control
    characters, and every whitespace run (newlines included) collapses to a
    single space.
    """
    if not isinstance(value, str):
        return ""

    cleaned = _CONTROL_CHARS.sub("", value.strip())
    return _WHITESPACE_RUN.sub(" ", cleaned).strip()


def sanitize_multiline(value: str) -> str:
    """Trim and drop NUL bytes, keeping newlines (notes, bio, comments)."""
    return value.strip().replace("\0", "")


def sanitize_number(
    value: Any,
    min_value: int = 0,
    max_value: int = MAX_SAFE_INTEGER,
) -> Optional[int]:
    """Parse a number, floor it and clamp it into ``[min_value, max_value]``.

    Strings are read up to the end of their leading numeric prefix, so
    '12.9' and '12.9kg' both give 12.9 before flooring.

    Returns:
        The clamped integer, or None for empty, non-numeric or non-finite input
    """
    if value is None or value == "" or isinstance(value, bool):
        return None

    if isinstance(value, int):
        # Arbitrary-precision ints may not fit in a float
        return max(min_value, min(max_value, value))
    if isinstance(value, float):
        number = value
    elif isinstance(value, str):
        match = _LEADING_FLOAT.match(value)
        if match is None:
            return None
        number = float(match.group(1))
    else:
        return None

    if not math.isfinite(number):
        return None

    return max(min_value, min(max_value, math.floor(number)))


def escape_html(text: str) -> str:
    """Entity-encode text for display in an HTML context.

    Meant for render boundaries; stored values are not escaped.
    """
    return text.translate(_HTML_ESCAPES)
