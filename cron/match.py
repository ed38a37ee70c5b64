"""Check whether a datetime falls on a cron schedule."""

from __future__ import annotations

from datetime import datetime

from core.models.cron import CronFields
from cron.parser import parse_cron


def cron_matches(expression: str, dt: datetime) -> bool:
    """Check if a datetime matches a strict POSIX cron expression.

    Args:
        expression: 5-field cron string (minute hour dom month dow)
        dt: datetime to check against

    Returns:
        True if the datetime matches the schedule.

    Raises:
        ValueError: if the expression does not parse.
    """
    result = parse_cron(expression)
    if not result.ok:
        raise ValueError(f"Invalid cron expression {expression!r}: {result.error}")
    return fields_match(result.fields, dt)


def fields_match(fields: CronFields, dt: datetime) -> bool:
    """Check if a datetime matches already-parsed cron fields."""
    if dt.minute not in fields.minute.values:
        return False
    if dt.hour not in fields.hour.values:
        return False
    if dt.month not in fields.month.values:
        return False

    dom_hit = dt.day in fields.dom.values
    dow_hit = dt.isoweekday() % 7 in fields.dow.values  # 0=Sun, 6=Sat

    # When both day fields are restricted, either one is enough.
    if not fields.dom.any and not fields.dow.any:
        return dom_hit or dow_hit
    return dom_hit and dow_hit
