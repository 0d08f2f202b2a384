"""
Subscriber email validation.

The pattern is deliberately lax: ``local@domain.tld`` with no whitespace and
a single ``@``. It is not an RFC 5322 parser.
"""

from __future__ import annotations

import math
import re
from typing import Any

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

# Floats at or above this magnitude are written in exponent form.
_EXPONENT_THRESHOLD = 1e21


def _is_blank(value: Any) -> bool:
    """Missing, null, false, zero, NaN and the empty string count as no value."""
    if value is None or value is False or value == "":
        return True
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0 or (isinstance(value, float) and math.isnan(value))
    return False


def _stringify(value: Any) -> str:
    """Render a decoded JSON value the way a JavaScript ``String()`` call does."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer() and abs(value) < _EXPONENT_THRESHOLD:
            return str(int(value))
        return repr(value)
    if isinstance(value, list):
        return ",".join(_stringify(item) for item in value)
    return "[object Object]"


def coerce_email(value: Any) -> str:
    """Turn the raw ``email`` field of a request body into a trimmed string.

    Blank values become ``""``. Anything else is stringified: numbers and
    booleans as written, lists joined with commas, objects as
    ``[object Object]``.
    """
    if _is_blank(value):
        return ""
    return _stringify(value).strip()


def is_valid_email(value: str) -> bool:
    return EMAIL_PATTERN.fullmatch(value) is not None
