"""Tests for schedule matching."""

from datetime import datetime

import pytest

from cron import cron_matches, fields_match, parse_cron


class TestCronMatches:

    def test_weekday_morning(self):
        # 2024-01-15 is a Monday
        assert cron_matches("0 9 * * 1-5", datetime(2024, 1, 15, 9, 0))
        assert not cron_matches("0 9 * * 1-5", datetime(2024, 1, 15, 9, 1))
        assert not cron_matches("0 9 * * 1-5", datetime(2024, 1, 14, 9, 0))  # Sunday

    def test_sunday_is_zero(self):
        assert cron_matches("0 9 * * 0", datetime(2024, 1, 14, 9, 0))

    def test_month_restriction(self):
        assert cron_matches("* * * 2 *", datetime(2024, 2, 29, 12, 30))
        assert not cron_matches("* * * 2 *", datetime(2024, 3, 1, 12, 30))

    def test_day_fields_are_ored_when_both_restricted(self):
        # Friday the 13th or any 1st of the month
        expression = "0 0 1 * 5"

        assert cron_matches(expression, datetime(2024, 3, 1, 0, 0))   # Friday and the 1st
        assert cron_matches(expression, datetime(2024, 4, 1, 0, 0))   # Monday the 1st
        assert cron_matches(expression, datetime(2024, 4, 5, 0, 0))   # Friday the 5th
        assert not cron_matches(expression, datetime(2024, 4, 2, 0, 0))

    def test_day_fields_are_anded_when_one_is_any(self):
        assert cron_matches("0 0 15 * *", datetime(2024, 4, 15, 0, 0))
        assert not cron_matches("0 0 15 * *", datetime(2024, 4, 16, 0, 0))

    def test_explicit_full_dow_list_still_restricts(self):
        # 0-6 parses with any=False, so dom OR dow applies and every day matches.
        assert cron_matches("0 0 15 * 0-6", datetime(2024, 4, 16, 0, 0))

    def test_invalid_expression_raises(self):
        with pytest.raises(ValueError, match="Step syntax"):
            cron_matches("*/5 * * * *", datetime(2024, 1, 1))

    def test_fields_match_with_parsed_fields(self):
        fields = parse_cron("30 12 * * *").fields

        assert fields_match(fields, datetime(2030, 6, 1, 12, 30))
        assert not fields_match(fields, datetime(2030, 6, 1, 12, 31))
