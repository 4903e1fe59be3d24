import math
from typing import Any


def safe_to_fixed(value: Any, decimals: int = 1) -> str:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or math.isnan(value):
        return "N/A"
    return f"{value:.{decimals}f}"


def or_na(value: Any) -> str:
    if value is None or value == "" or value == 0:
        return "N/A"
    return str(value)


def initials(name: Any) -> str:
    if not isinstance(name, str):
        return "?"
    parts = [p for p in name.split() if p]
    if not parts:
        return "?"
    if len(parts) == 1:
        return parts[0][0].upper()
    return (parts[0][0] + parts[-1][0]).upper()
