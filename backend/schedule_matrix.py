"""Printable schedule grid (days x employees) for the export writers."""

from dataclasses import asdict, dataclass, field
from typing import Optional

import pandas as pd

from compliance.dates import coerce_date, days_of_month, days_of_range, quarter_range
from compliance.engine import ComplianceEngine
from compliance.types import Assignment

DAY_ABBREVIATIONS = {
    "en": ["Mo", "Tu", "We", "Th", "Fr", "Sa", "Su"],
    "pl": ["Pn", "Wt", "Sr", "Cz", "Pt", "So", "Nd"],
}

MONTH_NAMES = {
    "en": [
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ],
    "pl": [
        "Styczeń", "Luty", "Marzec", "Kwiecień", "Maj", "Czerwiec",
        "Lipiec", "Sierpień", "Wrzesień", "Październik", "Listopad", "Grudzień",
    ],
}

TITLE_PREFIX = {
    "en": "Shift schedule",
    "pl": "Grafik zmian",
}


@dataclass
class MatrixDay:
    day_num: int
    day_name: str
    date_key: str
    is_weekend: bool
    is_sunday: bool
    is_holiday: bool
    holiday_name: str = ""


@dataclass
class MatrixRow:
    employee_name: str
    cells: list[str] = field(default_factory=list)
    monthly_hours: float = 0.0
    max_hours: float = 0.0
    quarterly_hours: float = 0.0
    max_hours_quarter: float = 0.0


@dataclass
class ScheduleMatrix:
    title: str
    month_name: str
    days: list[MatrixDay]
    rows: list[MatrixRow]

    def to_dict(self) -> dict:
        return asdict(self)

    def to_frame(self) -> pd.DataFrame:
        """One row per employee, one column per day, then the hour totals."""
        columns = [f"{d.day_num} {d.day_name}" for d in self.days]
        data = [
            row.cells + [
                f"{row.monthly_hours:g}/{row.max_hours:g}",
                f"{row.quarterly_hours:g}/{row.max_hours_quarter:g}",
            ]
            for row in self.rows
        ]
        return pd.DataFrame(
            data,
            index=pd.Index([row.employee_name for row in self.rows], name="employee"),
            columns=columns + ["month", "quarter"],
        )


def _short_time(value: str) -> str:
    # "07:00" -> "07", "07:30" -> "0730"
    return value.replace(":00", "", 1).replace(":", "")


def cell_symbol(record: Optional[Assignment]) -> str:
    """Display symbol for a schedule cell."""
    if record is None:
        return ""
    if record.is_leave:
        return record.symbol or record.name or record.id or "?"
    start, end = record.resolved_times()
    return f"{_short_time(start)}-{_short_time(end)}"


def build_schedule_matrix(
    employees: list,
    schedule: Optional[dict],
    reference_date,
    bank_holidays: Optional[list[dict]] = None,
    locale: str = "en",
) -> ScheduleMatrix:
    """
    Build the printable grid for the month containing reference_date.

    Args:
        employees: Employee dicts (invalid entries are left out)
        schedule: Mapping of date key -> employee id -> shift or leave record
        reference_date: Any day of the month to render
        bank_holidays: Optional list of {"date": "YYYY-MM-DD", "name": ...}
        locale: "en" or "pl" for day and month names

    Returns:
        ScheduleMatrix with rows sorted by employee name
    """
    reference = coerce_date(reference_date)
    if locale not in DAY_ABBREVIATIONS:
        locale = "en"

    context = ComplianceEngine.build_context(schedule, employees or [], reference)

    holidays = {
        h["date"]: h.get("name") or ""
        for h in bank_holidays or []
        if isinstance(h, dict) and h.get("date")
    }

    days = [
        MatrixDay(
            day_num=day.day_num,
            day_name=DAY_ABBREVIATIONS[locale][day.date.weekday()],
            date_key=day.date_key,
            is_weekend=day.is_weekend,
            is_sunday=day.is_sunday,
            is_holiday=day.date_key in holidays,
            holiday_name=holidays.get(day.date_key, ""),
        )
        for day in days_of_month(reference)
    ]
    quarter_keys = [day.date_key for day in days_of_range(*quarter_range(reference))]

    rows = []
    for employee in sorted(context.employees, key=lambda e: e.name.casefold()):
        cells = []
        monthly_hours = 0.0
        for day in days:
            record = context.assignment(day.date_key, employee.id)
            if record is not None and not record.is_leave:
                monthly_hours += record.duration_hours
            cells.append(cell_symbol(record))

        quarterly_hours = 0.0
        for date_key in quarter_keys:
            shift = context.work_shift(date_key, employee.id)
            if shift is not None:
                quarterly_hours += shift.duration_hours

        rows.append(MatrixRow(
            employee_name=employee.name,
            cells=cells,
            monthly_hours=monthly_hours,
            max_hours=employee.max_hours,
            quarterly_hours=quarterly_hours,
            max_hours_quarter=employee.max_hours_quarter,
        ))

    month_name = f"{MONTH_NAMES[locale][reference.month - 1]} {reference.year}"
    return ScheduleMatrix(
        title=f"{TITLE_PREFIX[locale]} - {month_name}",
        month_name=month_name,
        days=days,
        rows=rows,
    )
