"""Tolerant numeric coercion for externally sourced values"""

import math
import re
from typing import Any

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def safe_number(value: Any, default: float = 0.0) -> float:
    """Coerce to float; None, NaN, inf and non-numeric values become default"""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(number) or math.isinf(number):
        return default
    return number


def non_negative(value: Any) -> float:
    """Coerce to a float that is never below zero"""
    return max(safe_number(value), 0.0)


def non_negative_int(value: Any) -> int:
    """Coerce to an int count (truncated) that is never below zero"""
    return int(non_negative(value))


def parse_int(value: Any) -> int:
    """
    Integer parsing with parseInt semantics.

    Examples:
        "12abc" -> 12, " 7.9" -> 7, -3.5 -> -3, "" -> 0, None -> 0
    """
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0

    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else 0


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(value, upper))


def round_half_up(value: float) -> int:
    """Round to nearest int with ties rounding up (712.5 -> 713)"""
    return int(math.floor(value + 0.5))
