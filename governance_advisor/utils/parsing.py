"""
Lenient number parsing for questionnaire answers.

Answers arrive from form widgets, so numbers are often strings (``"5"``,
``"42.5%"``). Both parsers read the leading number and ignore the rest;
anything without one, booleans included, parses to ``None``.
"""

from __future__ import annotations

import math
import re
from typing import Any, Optional

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_int(value: Any) -> Optional[int]:
    """``"5"`` → 5, ``"4.7"`` → 4, ``4.7`` → 4, ``"x"`` → None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = _INT_PREFIX.match(value)
        return int(match.group(1)) if match else None
    return None


def parse_float(value: Any) -> Optional[float]:
    """``"42.5%"`` → 42.5, ``7`` → 7.0, ``"n/a"`` → None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = _FLOAT_PREFIX.match(value)
        return float(match.group(1)) if match else None
    return None
