"""Value-in/value-out helpers for building cron fields interactively.

A UI holds the current CronFields and replaces one slot at a time with the
result of these calls. Neither helper can fail.
"""

from __future__ import annotations

from core.models.cron import CronFields, FieldSpec
from cron.limits import FIELD_ORDER, LIMITS, full_range


def set_every(spec: FieldSpec, min_val: int, max_val: int) -> FieldSpec:
    """Reset a field to "every value"."""
    return FieldSpec(any=True, values=full_range(min_val, max_val))


def toggle_value(spec: FieldSpec, value: int, min_val: int, max_val: int) -> FieldSpec:
    """Flip membership of one value.

    Toggling out of an `any` field starts a fresh selection. A selection
    that ends up empty or covering the whole range collapses back to `any`,
    since POSIX cron cannot express "never".
    """
    selected = set() if spec.any else set(spec.values)
    selected ^= {value}
    values = tuple(sorted(v for v in selected if min_val <= v <= max_val))

    if not values or values == full_range(min_val, max_val):
        return set_every(spec, min_val, max_val)
    return FieldSpec(any=False, values=values)


def empty_fields() -> CronFields:
    """Every minute of every hour of every day."""
    return CronFields(**{
        slot: FieldSpec(any=True, values=LIMITS[slot].full_range)
        for slot in FIELD_ORDER
    })


def toggle_slot(fields: CronFields, slot: str, value: int) -> CronFields:
    """Apply toggle_value to a named slot of a CronFields."""
    limit = LIMITS[slot]
    updated = toggle_value(getattr(fields, slot), value, limit.min, limit.max)
    return fields.model_copy(update={slot: updated})


def reset_slot(fields: CronFields, slot: str) -> CronFields:
    """Apply set_every to a named slot of a CronFields."""
    limit = LIMITS[slot]
    updated = set_every(getattr(fields, slot), limit.min, limit.max)
    return fields.model_copy(update={slot: updated})
