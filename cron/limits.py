"""Field bounds and display names for the five POSIX cron slots."""

from __future__ import annotations

from core.models.cron import FIELD_ORDER, LIMITS

__all__ = ["DOW_NAMES", "FIELD_ORDER", "LIMITS", "MONTH_NAMES", "full_range"]

MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
DOW_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def full_range(min_val: int, max_val: int) -> tuple[int, ...]:
    """All legal values between min_val and max_val, inclusive."""
    return tuple(range(min_val, max_val + 1))
