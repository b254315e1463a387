"""Compliance validation engine that orchestrates all validators."""

import logging
import math
from datetime import date
from typing import Any, Optional

from .dates import coerce_date
from .types import (
    DEFAULT_MAX_HOURS,
    DEFAULT_MAX_HOURS_QUARTER,
    Assignment,
    ComplianceContext,
    ComplianceResult,
    Employee,
    Issue,
    IssueSeverity,
    LeaveKind,
    LeaveRecord,
    SchedulingRules,
    ShiftKind,
    ShiftTemplate,
    positive_number,
)
from .validators import (
    BaseValidator,
    RestBetweenShiftsValidator,
    MonthlyHoursValidator,
    QuarterlyHoursValidator,
    WeeklyRestValidator,
    SaturdayCompensationValidator,
    SundayCompensationValidator,
    FourthSundayValidator,
    UnmarkedDaysValidator,
)

SUCCESS_MESSAGE = "Verification completed successfully. No issues found."
MISSING_EMPLOYEES_MESSAGE = "No employee list to verify."


class ComplianceEngine:
    """
    Main engine for running compliance validation.

    Runs every enabled validator for each employee and collects the issues
    into a single report.
    """

    def __init__(self):
        """Initialize with all validators."""
        self.validators: list[BaseValidator] = [
            RestBetweenShiftsValidator(),
            MonthlyHoursValidator(),
            WeeklyRestValidator(),
            SaturdayCompensationValidator(),
            SundayCompensationValidator(),
            FourthSundayValidator(),
            UnmarkedDaysValidator(),
            QuarterlyHoursValidator(),
        ]

    def validate(self, context: ComplianceContext) -> ComplianceResult:
        """
        Run all enabled validations.

        Args:
            context: The compliance context with rules, employees and schedule

        Returns:
            ComplianceResult with all issues found, or a single success
            issue when there are none
        """
        result = ComplianceResult()
        enabled = [v for v in self.validators if v.is_enabled(context.rules)]

        for employee in context.employees:
            for validator in enabled:
                found = validator.validate(context, employee)
                if found:
                    logging.debug(f"{type(validator).__name__}: {len(found)} issue(s) for {employee.id}")
                result.extend(found)

        logging.info(
            f"Verified {len(context.employees)} employee(s) for {context.reference_date:%Y-%m}: "
            f"{result.error_count} error(s), {result.warning_count} warning(s)"
        )

        if not result.issues:
            result.add_issue(Issue(severity=IssueSeverity.SUCCESS, message=SUCCESS_MESSAGE))

        return result

    @classmethod
    def build_context(
        cls,
        schedule: Optional[dict],
        employees: list,
        reference_date: date,
        rules: Optional[dict | SchedulingRules] = None,
    ) -> ComplianceContext:
        """
        Build a ComplianceContext from raw data.

        Args:
            schedule: Mapping of date key -> employee id -> shift or leave record
            employees: List of employee dicts with id, name, maxHours, maxHoursQuarter
            reference_date: Any day of the month being verified
            rules: Rules mapping or SchedulingRules

        Returns:
            ComplianceContext ready for validation
        """
        if not isinstance(rules, SchedulingRules):
            rules = SchedulingRules.from_dict(rules)

        employee_list = []
        for raw in employees:
            employee = parse_employee(raw)
            if employee is None:
                logging.debug(f"Skipping invalid employee entry: {raw!r}")
                continue
            employee_list.append(employee)

        if schedule is not None and not isinstance(schedule, dict):
            logging.warning(f"Schedule is not a mapping ({type(schedule).__name__}), treating it as empty")
            schedule = None

        normalized: dict[str, dict[str, Assignment]] = {}
        for date_key, day_entries in (schedule or {}).items():
            if not isinstance(day_entries, dict):
                continue
            day_records = {}
            for employee_id, raw_record in day_entries.items():
                record = parse_assignment(raw_record)
                if record is not None:
                    day_records[str(employee_id)] = record
            if day_records:
                normalized[str(date_key)] = day_records

        return ComplianceContext(
            rules=rules,
            employees=employee_list,
            schedule=normalized,
            reference_date=reference_date,
        )


def parse_employee(raw: Any) -> Optional[Employee]:
    """Build an Employee from a dict, or None when it has no identifier."""
    if isinstance(raw, Employee):
        return raw if raw.id else None
    if not isinstance(raw, dict):
        return None

    employee_id = raw.get("id")
    if employee_id is None or str(employee_id).strip() == "":
        return None
    employee_id = str(employee_id)

    max_hours = raw.get("maxHours", raw.get("max_hours"))
    max_hours_quarter = raw.get("maxHoursQuarter", raw.get("max_hours_quarter"))

    return Employee(
        id=employee_id,
        name=str(raw.get("name") or employee_id),
        max_hours=positive_number(max_hours) or DEFAULT_MAX_HOURS,
        max_hours_quarter=positive_number(max_hours_quarter) or DEFAULT_MAX_HOURS_QUARTER,
    )


def parse_assignment(raw: Any) -> Optional[Assignment]:
    """
    Build a shift or leave record from a schedule entry.

    A mapping is always a record; its ``type`` selects leave or the shift
    kind. A bare leave code such as "WN" is read as that leave. Anything
    else is ignored and the day stays unmarked.
    """
    if isinstance(raw, (ShiftTemplate, LeaveRecord)):
        return raw

    if isinstance(raw, str):
        try:
            kind = LeaveKind(raw)
        except ValueError:
            return None
        return LeaveRecord(id=kind.value, name=kind.display_name, symbol=kind.value)

    if not isinstance(raw, dict) or not raw:
        return None

    record_id = str(raw.get("id") or "")
    name = str(raw.get("name") or "")

    if raw.get("type") == ShiftKind.LEAVE.value:
        return LeaveRecord(id=record_id, name=name, symbol=str(raw.get("symbol") or ""))

    try:
        kind = ShiftKind(raw.get("type"))
    except ValueError:
        kind = None

    start_time = raw.get("startTime", raw.get("start_time"))
    end_time = raw.get("endTime", raw.get("end_time"))
    hours = raw.get("hours")
    if isinstance(hours, bool):
        hours = None
    elif hours is not None:
        try:
            hours = float(hours)
        except (TypeError, ValueError):
            hours = None
        else:
            if not math.isfinite(hours):
                hours = None

    return ShiftTemplate(
        id=record_id,
        name=name,
        kind=kind,
        start_time=start_time if isinstance(start_time, str) and start_time else None,
        end_time=end_time if isinstance(end_time, str) and end_time else None,
        hours=hours,
    )


def verify_schedule(
    schedule: Optional[dict],
    employees: Optional[list],
    reference_date,
    rules: Optional[dict | SchedulingRules] = None,
) -> list[Issue]:
    """
    Verify a schedule against the labor rules.

    This is the entry point for the UI layer. It never raises: unusable
    input is reported as a single error issue.

    Args:
        schedule: Mapping of date key -> employee id -> shift or leave record
        employees: List of employee dicts
        reference_date: Any day of the month being verified (date or string)
        rules: Scheduling rules mapping or SchedulingRules

    Returns:
        Ordered list of issues; a single success issue when nothing is wrong
    """
    if not isinstance(employees, (list, tuple)):
        logging.warning("Verification requested without an employee list")
        return [Issue(severity=IssueSeverity.ERROR, message=MISSING_EMPLOYEES_MESSAGE)]

    try:
        reference = coerce_date(reference_date)
    except ValueError:
        logging.warning(f"Verification requested with invalid reference date {reference_date!r}")
        return [Issue(severity=IssueSeverity.ERROR, message=f"Invalid reference date: {reference_date!r}.")]

    context = ComplianceEngine.build_context(schedule, employees, reference, rules)
    return ComplianceEngine().validate(context).issues
