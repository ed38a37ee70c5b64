"""English descriptions of cron schedules."""

from __future__ import annotations

from typing import Callable, Sequence, TypeVar

from core.models.cron import CronFields
from cron.limits import DOW_NAMES, MONTH_NAMES

T = TypeVar("T")


def format_list(items: Sequence[T], fmt: Callable[[T], str] | None = None) -> str:
    """Join items as English prose: "A", "A and B", "A, B, and C"."""
    words = [fmt(item) if fmt else str(item) for item in items]
    if not words:
        return ""
    if len(words) == 1:
        return words[0]
    if len(words) == 2:
        return f"{words[0]} and {words[1]}"
    return ", ".join(words[:-1]) + ", and " + words[-1]


def _plural(noun: str, values: Sequence[int]) -> str:
    return noun + "s" if len(values) > 1 else noun


def _month_label(n: int) -> str:
    return f"{MONTH_NAMES[n - 1]} ({n})"


def _dow_label(n: int) -> str:
    return f"{DOW_NAMES[n]} ({n})"


def _time_clause(fields: CronFields) -> str:
    minute, hour = fields.minute, fields.hour
    if minute.any and hour.any:
        return "Every minute"
    if hour.any:
        return f"At {_plural('minute', minute.values)} {format_list(minute.values)} past every hour"
    if minute.any:
        return f"Every minute of {_plural('hour', hour.values)} {format_list(hour.values)}"
    return (
        f"At {format_list(minute.values)} {_plural('minute', minute.values)} "
        f"past {format_list(hour.values)} {_plural('hour', hour.values)}"
    )


def _date_clause(fields: CronFields) -> str:
    dom, month, dow = fields.dom, fields.month, fields.dow
    if dom.any and dow.any:
        return "every day"

    months = "every month" if month.any else "in " + format_list(month.values, _month_label)
    by_date = f"on {_plural('day', dom.values)} {format_list(dom.values)} of {months}"
    by_weekday = f"on {format_list(dow.values, _dow_label)} of {months}"

    if dow.any:
        return by_date
    if dom.any:
        return by_weekday
    # POSIX ORs day-of-month and day-of-week when both are restricted.
    return f"{by_date} (or) {by_weekday}"


def humanize(fields: CronFields) -> str:
    """Describe a schedule in one English sentence."""
    return f"{_time_clause(fields)}, {_date_clause(fields)}."
