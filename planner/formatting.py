from __future__ import annotations

from typing import Any

from planner.numeric import parse_float, round_to


def format_number(value: Any, decimals: int = 0) -> str:
    """Format a number with thousands separators and at most `decimals` fraction digits."""
    decimals = decimals or 0
    value = round_to(parse_float(value, 0.0), decimals)
    if decimals <= 0:
        return f"{int(value):,}"
    text = f"{value:,.{decimals}f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def format_currency(value: Any, decimals: int = 0, suffix: str = "g") -> str:
    return format_number(value, decimals) + (suffix or "g")
