"""Pydantic data models shared across all components."""

from core.models.cron import CronFields, FieldError, FieldLimit, FieldSpec, ParseResult
from core.models.licenses import LicensePackage, LicensesPayload
from core.models.subnet import AddressFlags, SubnetInfo

__all__ = [
    "CronFields",
    "FieldError",
    "FieldLimit",
    "FieldSpec",
    "ParseResult",
    "LicensePackage",
    "LicensesPayload",
    "AddressFlags",
    "SubnetInfo",
]
