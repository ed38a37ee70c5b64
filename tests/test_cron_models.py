"""Tests for the cron field models."""

import pytest
from pydantic import ValidationError

from core.models.cron import FIELD_ORDER, LIMITS, CronFields, FieldLimit, FieldSpec
from cron import empty_fields


def _raw(**overrides: dict) -> dict:
    """JSON-shaped fields, every slot `any` unless overridden."""
    raw = {
        slot: {"any": True, "values": list(LIMITS[slot].full_range)}
        for slot in FIELD_ORDER
    }
    raw.update(overrides)
    return raw


class TestFieldLimit:
    """Tests for slot bounds."""

    def test_full_range_is_inclusive(self):
        assert FieldLimit(min=1, max=3, name="x").full_range == (1, 2, 3)

    def test_limits_cover_every_slot(self):
        assert tuple(LIMITS) == FIELD_ORDER
        assert LIMITS["dow"].full_range == (0, 1, 2, 3, 4, 5, 6)


class TestCronFieldsValidation:
    """Tests for the per-slot invariants enforced on CronFields."""

    def test_empty_fields_are_valid(self):
        assert CronFields.model_validate(_raw()) == empty_fields()

    def test_restricted_values_within_bounds(self):
        fields = CronFields.model_validate(_raw(dow={"any": False, "values": [6, 0]}))

        assert fields.dow == FieldSpec(any=False, values=(0, 6))

    def test_explicit_full_list_is_allowed(self):
        fields = CronFields.model_validate(_raw(hour={"any": False, "values": list(range(24))}))

        assert fields.hour.any is False

    @pytest.mark.parametrize("slot,values", [
        ("dow", [7]),
        ("month", [0]),
        ("month", [13]),
        ("dom", [0, 15]),
        ("hour", [24]),
        ("minute", [-1]),
    ])
    def test_value_outside_slot_bounds(self, slot, values):
        with pytest.raises(ValidationError, match=f"{slot}: values must be within"):
            CronFields.model_validate(_raw(**{slot: {"any": False, "values": values}}))

    def test_any_with_no_values(self):
        with pytest.raises(ValidationError, match="minute: no values selected"):
            CronFields.model_validate(_raw(minute={"any": True, "values": []}))

    def test_restricted_with_no_values(self):
        with pytest.raises(ValidationError, match="hour: no values selected"):
            CronFields.model_validate(_raw(hour={"any": False, "values": []}))

    def test_any_with_partial_range(self):
        with pytest.raises(ValidationError, match="dow: an 'any' field must carry 0-6"):
            CronFields.model_validate(_raw(dow={"any": True, "values": [1, 2, 3]}))

    def test_constructor_enforces_bounds(self):
        with pytest.raises(ValidationError):
            CronFields(
                minute=FieldSpec(any=False, values=(0,)),
                hour=FieldSpec(any=False, values=(0,)),
                dom=FieldSpec(any=False, values=(1,)),
                month=FieldSpec(any=False, values=(1,)),
                dow=FieldSpec(any=False, values=(7,)),
            )
