from __future__ import annotations

from collections.abc import Sequence
from datetime import timedelta

_UNITS = ("B", "KB", "MB", "GB", "TB")


def format_bytes(size: int) -> str:
    value = float(size)
    for unit in _UNITS:
        if value < 1024.0 or unit == _UNITS[-1]:
            if unit == "B":
                return f"{int(value)} {unit}"
            return f"{value:.1f} {unit}"
        value /= 1024.0
    return f"{size} B"


def format_age(age: timedelta) -> str:
    days = age.days
    if days == 1:
        return "1 day ago"
    return f"{days} days ago"


def percentage(part: int, total: int) -> str:
    if total <= 0:
        return "0"
    return f"{part / total * 100:.1f}"


def truncate[T](items: Sequence[T], limit: int) -> tuple[list[T], int]:
    """Return the first *limit* items and how many were left out."""
    shown = list(items[:limit])
    return shown, max(0, len(items) - limit)
