"""Lenient parsing of user- or dataset-supplied numeric values."""

from __future__ import annotations

import math
import re
from typing import Any

_STRIP = re.compile(r"[$,\s]")
_NUMBER = re.compile(r"^[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?$")


def parse_numeric(value: Any) -> float | None:
    """Parse a number, returning None for anything that is not a finite number.

    Currency symbols, thousands separators and whitespace are ignored, a
    trailing ``%`` is dropped (the value stays in percent) and accounting
    parentheses mean a negative value: ``"(1,250)"`` parses as ``-1250.0``.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else None

    cleaned = _STRIP.sub("", str(value))
    if cleaned.startswith("(") and cleaned.endswith(")"):
        cleaned = "-" + cleaned[1:-1]
    if cleaned.endswith("%"):
        cleaned = cleaned[:-1]
    if not _NUMBER.match(cleaned):
        return None

    number = float(cleaned)
    return number if math.isfinite(number) else None
