"""Tests for time-of-day parsing and shift interval resolution."""

from datetime import datetime, time

import pytest

from compliance.intervals import parse_time_of_day, resolve_interval, time_span_hours
from compliance.types import LeaveRecord, ShiftKind, ShiftTemplate


class TestParseTimeOfDay:
    @pytest.mark.parametrize("value,expected", [
        ("07:00", time(7, 0)),
        ("23:59", time(23, 59)),
        ("00:00", time(0, 0)),
        ("06:30:15", time(6, 30, 15)),
        (" 19:00 ", time(19, 0)),
    ])
    def test_valid(self, value, expected):
        assert parse_time_of_day(value) == expected

    @pytest.mark.parametrize("value", ["24:00", "7:00", "12:60", "noon", "", None, 700])
    def test_invalid(self, value):
        assert parse_time_of_day(value) is None


class TestTimeSpanHours:
    def test_same_day(self):
        assert time_span_hours("07:00", "19:00") == 12.0

    def test_overnight(self):
        assert time_span_hours("19:00", "07:00") == 12.0

    def test_equal_times_are_a_full_day(self):
        assert time_span_hours("08:00", "08:00") == 24.0

    def test_rounding(self):
        assert time_span_hours("08:00", "08:20") == 0.33

    def test_invalid(self):
        assert time_span_hours("bad", "07:00") is None


class TestResolveInterval:
    def test_day_shift(self):
        interval = resolve_interval(ShiftTemplate(kind=ShiftKind.DAY), "2024-01-15")

        assert interval.start == datetime(2024, 1, 15, 7, 0)
        assert interval.end == datetime(2024, 1, 15, 19, 0)
        assert interval.hours == 12.0

    def test_night_shift_ends_next_day(self):
        interval = resolve_interval(ShiftTemplate(kind=ShiftKind.NIGHT), "2024-01-31")

        assert interval.start == datetime(2024, 1, 31, 19, 0)
        assert interval.end == datetime(2024, 2, 1, 7, 0)

    def test_explicit_times_override_kind(self):
        interval = resolve_interval(
            ShiftTemplate(kind=ShiftKind.NIGHT, start_time="00:00", end_time="07:00"), "2024-01-15"
        )

        assert interval.start == datetime(2024, 1, 15, 0, 0)
        assert interval.end == datetime(2024, 1, 15, 7, 0)

    def test_unknown_kind_uses_night_times(self):
        interval = resolve_interval(ShiftTemplate(kind=None), "2024-01-15")

        assert interval.start == datetime(2024, 1, 15, 19, 0)
        assert interval.end == datetime(2024, 1, 16, 7, 0)

    def test_leave_has_no_interval(self):
        assert resolve_interval(LeaveRecord(id="UW"), "2024-01-15") is None

    def test_missing_record(self):
        assert resolve_interval(None, "2024-01-15") is None

    def test_bad_date_key(self):
        assert resolve_interval(ShiftTemplate(kind=ShiftKind.DAY), "2024-02-30") is None

    def test_bad_time(self):
        assert resolve_interval(ShiftTemplate(kind=ShiftKind.DAY, start_time="25:00"), "2024-01-15") is None
