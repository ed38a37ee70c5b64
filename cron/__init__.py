"""Strict POSIX cron engine -- parse, canonicalize, describe and edit schedules."""

from core.models.cron import CronFields, FieldError, FieldLimit, FieldSpec, ParseResult
from cron.builder import build_cron, condense
from cron.editor import empty_fields, reset_slot, set_every, toggle_slot, toggle_value
from cron.humanize import format_list, humanize
from cron.limits import DOW_NAMES, FIELD_ORDER, LIMITS, MONTH_NAMES
from cron.match import cron_matches, fields_match
from cron.parser import parse_cron, parse_field, tokenize

__all__ = [
    "CronFields",
    "FieldError",
    "FieldLimit",
    "FieldSpec",
    "ParseResult",
    "build_cron",
    "condense",
    "empty_fields",
    "reset_slot",
    "set_every",
    "toggle_slot",
    "toggle_value",
    "format_list",
    "humanize",
    "DOW_NAMES",
    "FIELD_ORDER",
    "LIMITS",
    "MONTH_NAMES",
    "cron_matches",
    "fields_match",
    "parse_cron",
    "parse_field",
    "tokenize",
]
