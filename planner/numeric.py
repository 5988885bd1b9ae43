from __future__ import annotations

import math
import re
from typing import Any

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_int(value: Any, default: int = 0) -> int:
    """Parse a leading integer the way the planner's saved data expects, else return default."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return default
        return int(value)
    match = _INT_PREFIX.match(str(value))
    if not match:
        return default
    return int(match.group(1))


def parse_float(value: Any, default: float = 0.0) -> float:
    """Parse a leading float, falling back to default for NaN or non-numeric input."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        value = float(value)
        return default if math.isnan(value) else value
    match = _FLOAT_PREFIX.match(str(value))
    if not match:
        return default
    return float(match.group(1))


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and not math.isnan(value)


def round_to(num: float, decimals: int = 0) -> float:
    """Round to `decimals` places with halves rounding toward +inf."""
    factor = 10 ** (decimals or 0)
    return math.floor(num * factor + 0.5) / factor


def clean_zero(value: float) -> float:
    """Normalize -0 and floating point noise to 0."""
    if value == 0 or abs(value) < 1e-9:
        return 0
    return value


def clamp_farming_level(level: Any) -> int:
    """Clamp a farming level to the game's 0..10 range; non-numeric input becomes 0."""
    return max(0, min(10, parse_int(level, 0)))
