"""Tests for the interactive field editor helpers."""

from core.models.cron import CronFields, FieldSpec
from cron import LIMITS, build_cron, empty_fields, reset_slot, set_every, toggle_slot, toggle_value

HOURS = tuple(range(24))


class TestEmptyFields:

    def test_every_slot_is_any_with_full_range(self):
        fields = empty_fields()

        assert isinstance(fields, CronFields)
        for slot, limit in LIMITS.items():
            spec = getattr(fields, slot)
            assert spec.any
            assert spec.values == tuple(range(limit.min, limit.max + 1))


class TestToggleValue:
    """Tests for flipping a single value."""

    def test_toggle_from_any_starts_fresh_selection(self):
        spec = toggle_value(FieldSpec(any=True, values=HOURS), 9, 0, 23)

        assert spec == FieldSpec(any=False, values=(9,))

    def test_toggle_twice_from_any_returns_to_any(self):
        start = FieldSpec(any=True, values=HOURS)

        once = toggle_value(start, 9, 0, 23)
        twice = toggle_value(once, 9, 0, 23)

        assert twice == start

    def test_toggle_adds_and_removes(self):
        spec = FieldSpec(any=False, values=(1, 5))

        assert toggle_value(spec, 3, 0, 23).values == (1, 3, 5)
        assert toggle_value(spec, 5, 0, 23).values == (1,)

    def test_selecting_every_value_collapses_to_any(self):
        spec = FieldSpec(any=True, values=HOURS)
        for hour in HOURS:
            spec = toggle_value(spec, hour, 0, 23)
            if hour < 23:
                assert spec.any is False
                assert spec.values == tuple(range(hour + 1))

        assert spec == FieldSpec(any=True, values=HOURS)

    def test_out_of_range_value_is_dropped(self):
        spec = toggle_value(FieldSpec(any=False, values=(2,)), 99, 0, 23)

        assert spec.values == (2,)

    def test_out_of_range_from_any_stays_any(self):
        spec = toggle_value(FieldSpec(any=True, values=HOURS), -1, 0, 23)

        assert spec.any

    def test_input_is_not_mutated(self):
        spec = FieldSpec(any=False, values=(1, 2))
        toggle_value(spec, 3, 0, 23)

        assert spec.values == (1, 2)


class TestSetEvery:

    def test_resets_to_full_range(self):
        spec = set_every(FieldSpec(any=False, values=(3,)), 1, 12)

        assert spec == FieldSpec(any=True, values=tuple(range(1, 13)))


class TestSlotHelpers:
    """Tests for editing a named slot of a CronFields."""

    def test_toggle_slot_replaces_only_that_slot(self):
        start = empty_fields()
        fields = toggle_slot(start, "dow", 1)

        assert fields.dow.values == (1,)
        assert fields.minute == start.minute
        assert build_cron(fields) == "* * * * 1"
        assert start.dow.any

    def test_reset_slot(self):
        fields = toggle_slot(toggle_slot(empty_fields(), "minute", 0), "hour", 9)
        fields = reset_slot(fields, "hour")

        assert build_cron(fields) == "0 * * * *"
        assert fields.hour.any
