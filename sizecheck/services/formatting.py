from __future__ import annotations

import math

UNAVAILABLE = "N/A"

_UNITS = ("K", "M", "G", "T", "P", "E")


def format_bytes(size_bytes: int | None) -> str:
    """Render *size_bytes* the way ``du -h`` does: ``512``, ``1.5K``, ``12M``.

    Values below ten keep one decimal, larger ones are whole numbers, and both
    round up.  ``None`` renders as ``N/A``.
    """
    if size_bytes is None:
        return UNAVAILABLE
    if size_bytes < 1024:
        return str(size_bytes)
    value = float(size_bytes)
    for unit in _UNITS:
        value /= 1024
        if value < 10:
            rounded = math.ceil(value * 10) / 10
            if rounded < 10:
                return f"{rounded:.1f}{unit}"
            value = rounded
        whole = math.ceil(value)
        if whole < 1024 or unit == _UNITS[-1]:
            return f"{whole}{unit}"
    return f"{math.ceil(value)}{_UNITS[-1]}"


def format_count(value: int) -> str:
    return f"{value:,}"


def format_percentage(value: int | None, fallback: str) -> str:
    return fallback if value is None else f"{value}%"
