import pytest

from compliance.dates import days_of_range
from compliance.engine import ComplianceEngine


@pytest.fixture
def employee():
    """Employee dict as stored by the schedule editor."""
    return {"id": "e1", "name": "Alice", "maxHours": 168, "maxHoursQuarter": 504}


@pytest.fixture
def make_shift():
    """Factory for work shift records."""
    def _make_shift(
        kind: str = "day",
        start_time: str = None,
        end_time: str = None,
        hours: float = None,
    ) -> dict:
        record = {"id": f"{kind}-shift", "name": f"{kind.title()} shift", "type": kind}
        if start_time is not None:
            record["startTime"] = start_time
        if end_time is not None:
            record["endTime"] = end_time
        if hours is not None:
            record["hours"] = hours
        return record
    return _make_shift


@pytest.fixture
def make_leave():
    """Factory for leave records."""
    def _make_leave(code: str) -> dict:
        return {"id": code, "name": code, "type": "leave", "symbol": code, "hours": 0}
    return _make_leave


@pytest.fixture
def build_schedule():
    """Factory turning {date_key: record} into the date -> employee -> record mapping."""
    def _build_schedule(entries: dict, employee_id: str = "e1", schedule: dict = None) -> dict:
        schedule = schedule if schedule is not None else {}
        for date_key, record in entries.items():
            schedule.setdefault(date_key, {})[employee_id] = record
        return schedule
    return _build_schedule


@pytest.fixture
def fill_range(make_leave):
    """Factory marking every day of a range with the same record (vacation by default)."""
    def _fill_range(start, end, record: dict = None) -> dict:
        record = record or make_leave("UW")
        return {day.date_key: record for day in days_of_range(start, end)}
    return _fill_range


@pytest.fixture
def make_context(employee):
    """Factory to create ComplianceContext objects."""
    def _make_context(schedule: dict, reference_date, rules=None, employees: list = None):
        return ComplianceEngine.build_context(
            schedule=schedule,
            employees=employees if employees is not None else [employee],
            reference_date=reference_date,
            rules=rules,
        )
    return _make_context
