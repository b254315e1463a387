"""Compliance validators for labor law enforcement."""

from abc import ABC, abstractmethod
from datetime import datetime, time, timedelta

from .dates import (
    days_of_month,
    days_of_range,
    format_date_dmy,
    is_last_month_of_quarter,
    month_range,
    quarter_range,
    to_date_key,
)
from .intervals import resolve_interval
from .types import (
    ComplianceContext,
    Employee,
    Issue,
    IssueSeverity,
    IssueType,
    LeaveKind,
    SchedulingRules,
)


def _fmt(value: float) -> str:
    """Format an hour count without a trailing .0."""
    return f"{value:g}"


class BaseValidator(ABC):
    """Base class for compliance validators."""

    def is_enabled(self, rules: SchedulingRules) -> bool:
        """Whether the rule is switched on in the configuration."""
        return True

    @abstractmethod
    def validate(self, context: ComplianceContext, employee: Employee) -> list[Issue]:
        """Check one employee and return the issues found."""
        pass


class RestBetweenShiftsValidator(BaseValidator):
    """Validates minimum rest between consecutive shifts within the month."""

    def validate(self, context: ComplianceContext, employee: Employee) -> list[Issue]:
        issues = []
        rules = context.rules

        previous_end = None
        previous_kind = None
        previous_date_key = None

        for day in days_of_month(context.reference_date):
            shift = context.work_shift(day.date_key, employee.id)
            if shift is None:
                # Leave or unmarked day counts as rest
                previous_end = None
                previous_kind = None
                previous_date_key = None
                continue

            interval = resolve_interval(shift, day.date_key)
            if interval is None:
                continue

            if previous_end is not None:
                rest_hours = (interval.start - previous_end).total_seconds() / 3600
                required = rules.required_rest_after(previous_kind)

                if rest_hours < required:
                    issues.append(Issue(
                        severity=IssueSeverity.ERROR,
                        issue=IssueType.INSUFFICIENT_REST,
                        employee_id=employee.id,
                        date_keys=(previous_date_key, day.date_key),
                        message=(
                            f"{employee.name} did not get the required rest of {_fmt(required)}h. "
                            f"Rest was only {rest_hours:.1f}h between "
                            f"{format_date_dmy(previous_date_key)} and {format_date_dmy(day.date_key)}."
                        ),
                    ))

            previous_end = interval.end
            previous_kind = shift.kind
            previous_date_key = day.date_key

        return issues


class MonthlyHoursValidator(BaseValidator):
    """Validates the monthly hour cap."""

    def validate(self, context: ComplianceContext, employee: Employee) -> list[Issue]:
        total_hours = 0.0
        for day in days_of_month(context.reference_date):
            shift = context.work_shift(day.date_key, employee.id)
            if shift is not None:
                total_hours += shift.duration_hours

        if total_hours <= employee.max_hours:
            return []

        return [Issue(
            severity=IssueSeverity.ERROR,
            issue=IssueType.MAX_HOURS,
            employee_id=employee.id,
            message=(
                f"Monthly hour limit exceeded for {employee.name}: "
                f"{_fmt(total_hours)}/{_fmt(employee.max_hours)}h."
            ),
        )]


class QuarterlyHoursValidator(BaseValidator):
    """Validates the quarterly hour cap."""

    def is_enabled(self, rules: SchedulingRules) -> bool:
        return rules.check_quarter_hours

    def validate(self, context: ComplianceContext, employee: Employee) -> list[Issue]:
        total_hours = 0.0
        for day in days_of_range(*quarter_range(context.reference_date)):
            shift = context.work_shift(day.date_key, employee.id)
            if shift is not None:
                total_hours += shift.duration_hours

        if total_hours <= employee.max_hours_quarter:
            return []

        return [Issue(
            severity=IssueSeverity.ERROR,
            issue=IssueType.MAX_HOURS_QUARTER,
            employee_id=employee.id,
            message=(
                f"Quarterly hour limit exceeded for {employee.name}: "
                f"{_fmt(total_hours)}/{_fmt(employee.max_hours_quarter)}h."
            ),
        )]


class WeeklyRestValidator(BaseValidator):
    """
    Validates uninterrupted weekly rest.

    The quarter is cut into 7-day windows counted from the quarter's first
    day, so the last window may be shorter. Within each window the longest
    gap between worked shifts (including the window edges) must reach the
    configured weekly rest.
    """

    def validate(self, context: ComplianceContext, employee: Employee) -> list[Issue]:
        issues = []
        required = context.rules.weekly_rest_hours
        quarter_start, quarter_end = quarter_range(context.reference_date)

        week_start = quarter_start
        while week_start <= quarter_end:
            week_end = min(week_start + timedelta(days=6), quarter_end)

            intervals = []
            for day in days_of_range(week_start, week_end):
                interval = resolve_interval(context.work_shift(day.date_key, employee.id), day.date_key)
                if interval is not None:
                    intervals.append(interval)

            if intervals:
                intervals.sort(key=lambda i: i.start)
                period_start = datetime.combine(week_start, time.min)
                period_end = datetime.combine(week_end, time(23, 59, 59, 999000))

                gaps = [intervals[0].start - period_start]
                for prev, curr in zip(intervals, intervals[1:]):
                    gaps.append(curr.start - prev.end)
                gaps.append(period_end - intervals[-1].end)

                max_rest_hours = max(0.0, max(g.total_seconds() for g in gaps) / 3600)

                if max_rest_hours < required:
                    start_key = to_date_key(week_start)
                    end_key = to_date_key(week_end)
                    issues.append(Issue(
                        severity=IssueSeverity.ERROR,
                        issue=IssueType.WEEKLY_REST,
                        blocking=True,
                        employee_id=employee.id,
                        date_keys=(start_key, end_key),
                        message=(
                            f"{employee.name} did not get the required weekly rest of {_fmt(required)}h "
                            f"in the week {format_date_dmy(start_key)} - {format_date_dmy(end_key)}. "
                            f"Longest rest: {max_rest_hours:.1f}h."
                        ),
                    ))

            week_start += timedelta(days=7)

        return issues


class SaturdayCompensationValidator(BaseValidator):
    """Validates that every worked Saturday is matched by a W5 day off in the quarter."""

    def is_enabled(self, rules: SchedulingRules) -> bool:
        return rules.saturday_compensation

    def validate(self, context: ComplianceContext, employee: Employee) -> list[Issue]:
        worked_saturdays = []
        compensation_count = 0

        for day in days_of_range(*quarter_range(context.reference_date)):
            record = context.assignment(day.date_key, employee.id)
            if record is None:
                continue
            if day.is_saturday and not record.is_leave:
                worked_saturdays.append(day.date_key)
            if record.is_leave and record.leave_kind == LeaveKind.FIVE_DAY_WEEK_COMPENSATION:
                compensation_count += 1

        if len(worked_saturdays) <= compensation_count:
            return []

        missing = len(worked_saturdays) - compensation_count
        last_month = is_last_month_of_quarter(context.reference_date)
        return [Issue(
            severity=IssueSeverity.ERROR if last_month else IssueSeverity.WARNING,
            issue=IssueType.SATURDAY_COMPENSATION,
            blocking=last_month,
            employee_id=employee.id,
            date_keys=tuple(worked_saturdays),
            message=(
                f"{employee.name} worked {len(worked_saturdays)} Saturday(s) this quarter "
                f"but has only {compensation_count} W5 day(s). Missing {missing} compensation day(s)."
                + (" (last month of the quarter!)" if last_month else "")
            ),
        )]


class SundayCompensationValidator(BaseValidator):
    """Validates that every worked Sunday has a WN day off nearby."""

    def is_enabled(self, rules: SchedulingRules) -> bool:
        return rules.sunday_compensation_strict and rules.sunday_rule_enabled

    def validate(self, context: ComplianceContext, employee: Employee) -> list[Issue]:
        issues = []
        search_days = context.rules.sunday_rule_days
        last_month = is_last_month_of_quarter(context.reference_date)

        wn_dates = [
            day.date
            for day in days_of_range(*quarter_range(context.reference_date))
            if self._is_wn(context, day.date_key, employee.id)
        ]

        for day in days_of_month(context.reference_date):
            if not day.is_sunday or context.work_shift(day.date_key, employee.id) is None:
                continue

            in_range = any(0 < abs((wn - day.date).days) <= search_days for wn in wn_dates)
            if in_range:
                continue

            if wn_dates:
                issues.append(Issue(
                    severity=IssueSeverity.WARNING,
                    issue=IssueType.SUNDAY_COMPENSATION,
                    employee_id=employee.id,
                    date_keys=(day.date_key,),
                    message=(
                        f"{employee.name} works on Sunday ({format_date_dmy(day.date_key)}) "
                        f"with no WN day within +/- {search_days} days. "
                        f"A WN day exists in the quarter outside that range."
                    ),
                ))
            else:
                issues.append(Issue(
                    severity=IssueSeverity.ERROR if last_month else IssueSeverity.WARNING,
                    issue=IssueType.SUNDAY_COMPENSATION,
                    blocking=last_month,
                    employee_id=employee.id,
                    date_keys=(day.date_key,),
                    message=(
                        f"{employee.name} works on Sunday ({format_date_dmy(day.date_key)}) "
                        f"with no WN day in the quarter."
                        + (" (last month of the quarter!)" if last_month else "")
                    ),
                ))

        return issues

    @staticmethod
    def _is_wn(context: ComplianceContext, date_key: str, employee_id: str) -> bool:
        record = context.assignment(date_key, employee_id)
        return record is not None and record.is_leave and record.leave_kind == LeaveKind.SUNDAY_WORK_DAY_OFF


class FourthSundayValidator(BaseValidator):
    """Validates that at least every fourth Sunday is free."""

    LOOKBACK_DAYS = 28

    def is_enabled(self, rules: SchedulingRules) -> bool:
        return rules.fourth_sunday_rule

    def validate(self, context: ComplianceContext, employee: Employee) -> list[Issue]:
        issues = []
        month_start, month_end = month_range(context.reference_date)
        lookback_start = month_start - timedelta(days=self.LOOKBACK_DAYS)

        sundays = [
            (day, context.work_shift(day.date_key, employee.id) is not None)
            for day in days_of_range(lookback_start, month_end)
            if day.is_sunday
        ]

        for i in range(len(sundays) - 3):
            window = sundays[i:i + 4]
            if not all(working for _, working in window):
                continue

            first, fourth = window[0][0], window[3][0]
            if month_start <= fourth.date <= month_end:
                issues.append(Issue(
                    severity=IssueSeverity.ERROR,
                    issue=IssueType.FOURTH_SUNDAY,
                    employee_id=employee.id,
                    date_keys=(fourth.date_key,),
                    message=(
                        f"{employee.name} works 4 Sundays in a row "
                        f"({format_date_dmy(first.date_key)} - {format_date_dmy(fourth.date_key)}). "
                        f"At least every 4th Sunday must be free."
                    ),
                ))

        return issues


class UnmarkedDaysValidator(BaseValidator):
    """Validates that every day of the quarter carries a shift or a leave."""

    LISTED_DAYS_LIMIT = 5

    def is_enabled(self, rules: SchedulingRules) -> bool:
        return rules.check_unmarked_days

    def validate(self, context: ComplianceContext, employee: Employee) -> list[Issue]:
        unmarked = [
            day.date_key
            for day in days_of_range(*quarter_range(context.reference_date))
            if context.assignment(day.date_key, employee.id) is None
        ]
        if not unmarked:
            return []

        if len(unmarked) <= self.LISTED_DAYS_LIMIT:
            message = (
                f"{employee.name} has unassigned days: "
                f"{', '.join(format_date_dmy(k) for k in unmarked)}."
            )
        else:
            message = (
                f"{employee.name} has {len(unmarked)} unassigned days in the quarter "
                f"(e.g. {', '.join(format_date_dmy(k) for k in unmarked[:3])}...)."
            )

        return [Issue(
            severity=IssueSeverity.WARNING,
            issue=IssueType.UNMARKED_DAY,
            employee_id=employee.id,
            date_keys=tuple(unmarked),
            message=message,
        )]
