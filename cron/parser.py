"""Strict POSIX cron parser. No steps, no names, no macros.

Supports the standard 5-field line: minute hour day_of_month month day_of_week

Examples:
    "0 16 * * 1-5"    -> weekdays at 4pm
    "0 9 * * 0"       -> Sundays at 9am
    "0 9,17 * * *"    -> 9am and 5pm daily
    "*/5 * * * *"     -> rejected (step syntax)

Failures are returned as values (FieldError / ParseResult.failure), never
raised, and the first invalid field in schedule order wins.
"""

from __future__ import annotations

import re

from core.models.cron import CronFields, FieldError, FieldSpec, ParseResult
from cron.builder import build_cron
from cron.humanize import humanize
from cron.limits import FIELD_ORDER, LIMITS, full_range

# Any ASCII control character or space separates fields.
_SEPARATOR_RE = re.compile(r"[\x00-\x20]+")
_ALLOWED_RE = re.compile(r"[0-9,-]+")


def tokenize(text: str) -> list[str]:
    """Split a cron line into fields on runs of whitespace/control chars."""
    return [token for token in _SEPARATOR_RE.split(text) if token]


def _to_int(digits: str, max_val: int) -> int | None:
    """Convert a digit run, or None when it has more digits than max_val."""
    significant = digits.lstrip("0") or "0"
    if len(significant) > len(str(max_val)):
        return None
    return int(significant)


def parse_field(token: str, min_val: int, max_val: int, label: str) -> FieldSpec | FieldError:
    """Parse one cron field into the set of values it denotes.

    An explicit list is never promoted to `any`, even when it covers the
    whole range; only `*` produces `any=True`.
    """
    text = token.strip()
    if not text:
        return FieldError(error=f"{label}: empty field.")

    if text == "*":
        return FieldSpec(any=True, values=full_range(min_val, max_val))

    if not _ALLOWED_RE.fullmatch(text):
        return FieldError(
            error=f"{label}: only digits, comma, and hyphen allowed (no steps, names, or macros)."
        )

    values: set[int] = set()
    for part in text.split(","):
        if not part:
            return FieldError(error=f"{label}: empty list element.")

        if "-" in part:
            bounds = part.split("-")
            if len(bounds) != 2 or not bounds[0] or not bounds[1]:
                return FieldError(error=f"{label}: invalid range syntax.")
            start, end = _to_int(bounds[0], max_val), _to_int(bounds[1], max_val)
            if start is None or end is None:
                return FieldError(error=f"{label}: range out of bounds ({min_val}-{max_val}).")
            if start > end:
                return FieldError(error=f"{label}: range must be low-high.")
            if start < min_val or end > max_val:
                return FieldError(error=f"{label}: range out of bounds ({min_val}-{max_val}).")
            values.update(range(start, end + 1))
        else:
            n = _to_int(part, max_val)
            if n is None:
                return FieldError(error=f"{label}: value out of bounds ({min_val}-{max_val}).")
            if n < min_val or n > max_val:
                return FieldError(error=f"{label}: value {n} out of bounds ({min_val}-{max_val}).")
            values.add(n)

    return FieldSpec(any=False, values=tuple(sorted(values)))


def parse_cron(text: str) -> ParseResult:
    """Parse a full 5-field POSIX cron line.

    Returns the parsed fields together with the canonical cron string and an
    English description, or the first error encountered.
    """
    trimmed = text.strip()

    if trimmed.startswith("@"):
        return ParseResult.failure("POSIX does not define @macros such as @reboot or @daily.")
    if "/" in trimmed:
        return ParseResult.failure("Step syntax like */5 or 1-10/2 is not POSIX.")

    tokens = tokenize(trimmed)
    if len(tokens) != 5:
        return ParseResult.failure(f"Expected exactly 5 fields, found {len(tokens)}.")

    parsed: dict[str, FieldSpec] = {}
    for slot, token in zip(FIELD_ORDER, tokens):
        limit = LIMITS[slot]
        result = parse_field(token, limit.min, limit.max, limit.name)
        if isinstance(result, FieldError):
            return ParseResult.failure(result.error)
        parsed[slot] = result

    fields = CronFields(**parsed)
    return ParseResult.success(fields, cron=build_cron(fields), human=humanize(fields))
