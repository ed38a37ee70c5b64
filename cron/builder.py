"""Canonical cron serialization."""

from __future__ import annotations

from typing import Iterable

from core.models.cron import CronFields
from cron.limits import FIELD_ORDER, LIMITS, full_range


def condense(values: Iterable[int], min_val: int, max_val: int) -> str:
    """Shortest POSIX spelling of a value set.

    The full range becomes `*`, a contiguous run of two or more values
    becomes `first-last`, anything else is a comma list.
    """
    ordered = sorted(set(values))
    if tuple(ordered) == full_range(min_val, max_val):
        return "*"

    contiguous = all(b == a + 1 for a, b in zip(ordered, ordered[1:]))
    if contiguous and len(ordered) >= 2:
        return f"{ordered[0]}-{ordered[-1]}"
    return ",".join(str(v) for v in ordered)


def build_cron(fields: CronFields) -> str:
    """Canonical 5-field cron string for the given fields."""
    parts = []
    for slot in FIELD_ORDER:
        limit = LIMITS[slot]
        parts.append(condense(getattr(fields, slot).values, limit.min, limit.max))
    return " ".join(parts)
