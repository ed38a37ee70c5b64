"""Cron models -- immutable field state for the POSIX cron editor and parser."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class FieldLimit(BaseModel):
    """Legal bounds and display label for one cron slot."""

    model_config = ConfigDict(frozen=True)

    min: int
    max: int
    name: str

    @property
    def full_range(self) -> tuple[int, ...]:
        return tuple(range(self.min, self.max + 1))


# Schedule order; parsing and serialization both walk the slots in this order.
FIELD_ORDER = ("minute", "hour", "dom", "month", "dow")

LIMITS: dict[str, FieldLimit] = {
    "minute": FieldLimit(min=0, max=59, name="Minute"),
    "hour": FieldLimit(min=0, max=23, name="Hour"),
    "dom": FieldLimit(min=1, max=31, name="Day of month"),
    "month": FieldLimit(min=1, max=12, name="Month"),
    "dow": FieldLimit(min=0, max=6, name="Day of week"),  # 0=Sun, 6=Sat
}


class FieldSpec(BaseModel):
    """Parsed state of one cron field.

    `values` is always fully materialized: an `any` field still carries the
    complete legal range, so consumers only look at `any` to decide how to
    render or serialize the field.
    """

    model_config = ConfigDict(frozen=True)

    any: bool
    values: tuple[int, ...] = ()

    @field_validator("values")
    @classmethod
    def _sorted_unique(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        return tuple(sorted(set(v)))


class FieldError(BaseModel):
    """Why a single field failed to parse."""

    model_config = ConfigDict(frozen=True)

    error: str


class CronFields(BaseModel):
    """The five POSIX cron slots, in schedule order."""

    model_config = ConfigDict(frozen=True)

    minute: FieldSpec
    hour: FieldSpec
    dom: FieldSpec
    month: FieldSpec
    dow: FieldSpec

    @model_validator(mode="after")
    def _within_limits(self) -> CronFields:
        for slot in FIELD_ORDER:
            limit = LIMITS[slot]
            spec = getattr(self, slot)
            if not spec.values:
                raise ValueError(f"{slot}: no values selected")
            if spec.values[0] < limit.min or spec.values[-1] > limit.max:
                raise ValueError(f"{slot}: values must be within {limit.min}-{limit.max}")
            if spec.any and spec.values != limit.full_range:
                raise ValueError(f"{slot}: an 'any' field must carry {limit.min}-{limit.max}")
        return self


class ParseResult(BaseModel):
    """Outcome of parsing a full cron line.

    On success `fields`, `cron` (canonical string) and `human` are set.
    On failure only `error` is set.
    """

    model_config = ConfigDict(frozen=True)

    ok: bool
    fields: CronFields | None = None
    cron: str | None = None
    human: str | None = None
    error: str | None = None

    @classmethod
    def success(cls, fields: CronFields, cron: str, human: str) -> ParseResult:
        return cls(ok=True, fields=fields, cron=cron, human=human)

    @classmethod
    def failure(cls, error: str) -> ParseResult:
        return cls(ok=False, error=error)
