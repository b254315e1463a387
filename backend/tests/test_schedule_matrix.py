"""Tests for the printable schedule grid."""

from datetime import date

import pytest

from compliance.types import LeaveRecord, ShiftKind, ShiftTemplate
from schedule_matrix import build_schedule_matrix, cell_symbol


class TestCellSymbol:
    @pytest.mark.parametrize("record,expected", [
        (None, ""),
        (ShiftTemplate(kind=ShiftKind.DAY), "07-19"),
        (ShiftTemplate(kind=ShiftKind.NIGHT), "19-07"),
        (ShiftTemplate(kind=ShiftKind.DAY, start_time="07:30", end_time="15:00"), "0730-15"),
        (LeaveRecord(id="UW", name="Vacation", symbol="UW"), "UW"),
        (LeaveRecord(id="custom", name="Training"), "Training"),
        (LeaveRecord(id="custom"), "custom"),
        (LeaveRecord(id=""), "?"),
    ])
    def test_symbols(self, record, expected):
        assert cell_symbol(record) == expected


class TestBuildScheduleMatrix:
    @pytest.fixture
    def employees(self):
        return [
            {"id": "b", "name": "zofia", "maxHours": 160},
            {"id": "a", "name": "Adam", "maxHours": 120, "maxHoursQuarter": 360},
        ]

    @pytest.fixture
    def schedule(self, make_shift, make_leave, build_schedule):
        schedule = build_schedule({
            "2024-01-01": make_shift("day"),
            "2024-01-02": make_shift("night", hours=12),
            "2024-01-03": make_leave("UW"),
            "2024-02-05": make_shift("day"),
        }, employee_id="a")
        return build_schedule({"2024-01-31": make_leave("L4")}, employee_id="b", schedule=schedule)

    def test_days(self, employees, schedule):
        matrix = build_schedule_matrix(employees, schedule, date(2024, 1, 20))

        assert len(matrix.days) == 31
        first, saturday, sunday = matrix.days[0], matrix.days[5], matrix.days[6]
        assert (first.day_num, first.day_name, first.date_key) == (1, "Mo", "2024-01-01")
        assert saturday.day_name == "Sa" and saturday.is_weekend and not saturday.is_sunday
        assert sunday.day_name == "Su" and sunday.is_weekend and sunday.is_sunday

    def test_rows_sorted_by_name(self, employees, schedule):
        matrix = build_schedule_matrix(employees, schedule, date(2024, 1, 20))

        assert [row.employee_name for row in matrix.rows] == ["Adam", "zofia"]

    def test_cells_and_hours(self, employees, schedule):
        adam, zofia = build_schedule_matrix(employees, schedule, date(2024, 1, 20)).rows

        assert adam.cells[:4] == ["07-19", "19-07", "UW", ""]
        assert adam.monthly_hours == 24
        assert adam.max_hours == 120
        assert adam.quarterly_hours == 36
        assert adam.max_hours_quarter == 360
        assert zofia.cells[30] == "L4"
        assert zofia.monthly_hours == 0
        assert zofia.max_hours_quarter == 504

    def test_title_and_locale(self, employees, schedule):
        english = build_schedule_matrix(employees, schedule, date(2024, 1, 20))
        polish = build_schedule_matrix(employees, schedule, date(2024, 1, 20), locale="pl")

        assert english.title == "Shift schedule - January 2024"
        assert polish.title == "Grafik zmian - Styczeń 2024"
        assert polish.month_name == "Styczeń 2024"
        assert polish.days[0].day_name == "Pn"
        assert polish.days[6].day_name == "Nd"

    def test_unknown_locale_falls_back_to_english(self, employees, schedule):
        matrix = build_schedule_matrix(employees, schedule, "2024-01-20", locale="de")

        assert matrix.days[0].day_name == "Mo"

    def test_bank_holidays(self, employees, schedule):
        holidays = [{"date": "2024-01-06", "name": "Epiphany"}, {"name": "no date"}, "junk"]

        matrix = build_schedule_matrix(employees, schedule, date(2024, 1, 20), bank_holidays=holidays)

        assert matrix.days[5].is_holiday is True
        assert matrix.days[5].holiday_name == "Epiphany"
        assert sum(d.is_holiday for d in matrix.days) == 1

    def test_invalid_employees_left_out(self, schedule):
        matrix = build_schedule_matrix([{"name": "no id"}, {"id": "a", "name": "Adam"}], schedule, date(2024, 1, 20))

        assert [row.employee_name for row in matrix.rows] == ["Adam"]

    def test_no_employees(self, schedule):
        matrix = build_schedule_matrix(None, schedule, date(2024, 1, 20))

        assert matrix.rows == []
        assert len(matrix.days) == 31

    def test_to_frame(self, employees, schedule):
        frame = build_schedule_matrix(employees, schedule, date(2024, 1, 20)).to_frame()

        assert list(frame.index) == ["Adam", "zofia"]
        assert frame.index.name == "employee"
        assert list(frame.columns[:2]) == ["1 Mo", "2 Tu"]
        assert list(frame.columns[-2:]) == ["month", "quarter"]
        assert frame.loc["Adam", "1 Mo"] == "07-19"
        assert frame.loc["Adam", "month"] == "24/120"
        assert frame.loc["Adam", "quarter"] == "36/360"

    def test_to_dict(self, employees, schedule):
        data = build_schedule_matrix(employees, schedule, date(2024, 1, 20)).to_dict()

        assert data["title"] == "Shift schedule - January 2024"
        assert data["rows"][0]["cells"][0] == "07-19"
        assert data["days"][0]["date_key"] == "2024-01-01"
