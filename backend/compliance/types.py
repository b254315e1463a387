"""Type definitions for the compliance module."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional, Union


STATUTORY_MIN_REST_HOURS = 11.0
DEFAULT_MAX_HOURS = 168.0
DEFAULT_MAX_HOURS_QUARTER = 504.0


class ShiftKind(str, Enum):
    """Kinds of schedule records."""
    DAY = "day"
    NIGHT = "night"
    LEAVE = "leave"


class LeaveKind(str, Enum):
    """Statutory leave codes."""
    SUNDAY_WORK_DAY_OFF = "WN"
    HOLIDAY_COMPENSATION = "WS"
    FIVE_DAY_WEEK_COMPENSATION = "W5"
    SCHEDULE_DAY_OFF = "WH"
    SICK_LEAVE = "L4"
    VACATION = "UW"
    ON_DEMAND_LEAVE = "UZ"
    MATERNITY_LEAVE = "UM"

    @property
    def display_name(self) -> str:
        return LEAVE_KIND_NAMES[self]


LEAVE_KIND_NAMES = {
    LeaveKind.SUNDAY_WORK_DAY_OFF: "Day off for Sunday work",
    LeaveKind.HOLIDAY_COMPENSATION: "Holiday compensation",
    LeaveKind.FIVE_DAY_WEEK_COMPENSATION: "5-day-week compensation",
    LeaveKind.SCHEDULE_DAY_OFF: "Schedule day off",
    LeaveKind.SICK_LEAVE: "Sick leave",
    LeaveKind.VACATION: "Vacation",
    LeaveKind.ON_DEMAND_LEAVE: "On-demand leave",
    LeaveKind.MATERNITY_LEAVE: "Maternity leave",
}

# Default working hours when a shift record carries no times of its own
DEFAULT_SHIFT_TIMES = {
    ShiftKind.DAY: ("07:00", "19:00"),
    ShiftKind.NIGHT: ("19:00", "07:00"),
}


class IssueSeverity(str, Enum):
    """Severity levels for issues."""
    ERROR = "error"
    WARNING = "warning"
    SUCCESS = "success"


class IssueType(str, Enum):
    """Kinds of rule violations."""
    INSUFFICIENT_REST = "insufficient_rest"
    MAX_HOURS = "max_hours"
    MAX_HOURS_QUARTER = "max_hours_quarter"
    WEEKLY_REST = "weekly_rest"
    SATURDAY_COMPENSATION = "saturday_compensation"
    SUNDAY_COMPENSATION = "sunday_compensation"
    FOURTH_SUNDAY = "fourth_sunday"
    UNMARKED_DAY = "unmarked_day"


@dataclass(frozen=True)
class Employee:
    """An employee as seen by the verification run."""
    id: str
    name: str
    max_hours: float = DEFAULT_MAX_HOURS
    max_hours_quarter: float = DEFAULT_MAX_HOURS_QUARTER


@dataclass(frozen=True)
class ShiftTemplate:
    """A worked shift assigned to an employee on one day."""
    id: str = ""
    name: str = ""
    kind: Optional[ShiftKind] = None  # None when the record names no known kind
    start_time: Optional[str] = None  # HH:MM
    end_time: Optional[str] = None  # HH:MM
    hours: Optional[float] = None

    is_leave = False

    def resolved_times(self) -> tuple[str, str]:
        """Start and end time of day, falling back to the kind's defaults."""
        default_start, default_end = DEFAULT_SHIFT_TIMES.get(
            self.kind, DEFAULT_SHIFT_TIMES[ShiftKind.NIGHT]
        )
        return self.start_time or default_start, self.end_time or default_end

    @property
    def duration_hours(self) -> float:
        """Worked hours; derived from the resolved times when not given."""
        if self.hours is not None:
            return self.hours
        from .intervals import time_span_hours

        return time_span_hours(*self.resolved_times()) or 0.0


@dataclass(frozen=True)
class LeaveRecord:
    """A leave marking; carries no worked hours."""
    id: str
    name: str = ""
    symbol: str = ""

    is_leave = True
    kind = ShiftKind.LEAVE
    duration_hours = 0.0

    @property
    def leave_kind(self) -> Optional[LeaveKind]:
        try:
            return LeaveKind(self.id)
        except ValueError:
            return None


Assignment = Union[ShiftTemplate, LeaveRecord]


@dataclass(frozen=True)
class SchedulingRules:
    """Rule configuration for a verification run."""
    hours_after_day: float = 24.0
    hours_after_night: float = 48.0
    sunday_rule_enabled: bool = True
    sunday_rule_days: int = 6
    weekly_rest_hours: float = 35.0
    saturday_compensation: bool = True
    sunday_compensation_strict: bool = True
    fourth_sunday_rule: bool = True
    check_unmarked_days: bool = True
    check_quarter_hours: bool = True

    def required_rest_after(self, kind: Optional[ShiftKind]) -> float:
        """Minimum rest in hours after a shift of the given kind."""
        if kind == ShiftKind.NIGHT:
            return self.hours_after_night
        if kind == ShiftKind.DAY:
            return self.hours_after_day
        return STATUTORY_MIN_REST_HOURS

    @classmethod
    def from_dict(cls, raw: Optional[dict]) -> "SchedulingRules":
        """
        Create from a rules mapping (camelCase or snake_case keys).

        Missing keys take the defaults. Numeric values that are present but
        zero or not numbers fall back to the statutory minimums. Toggles are
        enabled unless explicitly ``False``.
        """
        if not isinstance(raw, dict):
            return cls()

        def pick(camel: str, snake: str):
            if camel in raw:
                return raw[camel]
            return raw.get(snake)

        def number(camel: str, snake: str, default: float, fallback: float) -> float:
            value = pick(camel, snake)
            if value is None:
                return default
            return positive_number(value) or fallback

        def toggle(camel: str, snake: str) -> bool:
            return pick(camel, snake) is not False

        sunday_rule_enabled = pick("sundayRuleEnabled", "sunday_rule_enabled")

        return cls(
            hours_after_day=number("hoursAfterDay", "hours_after_day", cls.hours_after_day, STATUTORY_MIN_REST_HOURS),
            hours_after_night=number("hoursAfterNight", "hours_after_night", cls.hours_after_night, STATUTORY_MIN_REST_HOURS),
            sunday_rule_enabled=True if sunday_rule_enabled is None else bool(sunday_rule_enabled),
            sunday_rule_days=int(number("sundayRuleDays", "sunday_rule_days", cls.sunday_rule_days, 6)),
            weekly_rest_hours=number("weeklyRestHours", "weekly_rest_hours", cls.weekly_rest_hours, 35.0),
            saturday_compensation=toggle("saturdayCompensation", "saturday_compensation"),
            sunday_compensation_strict=toggle("sundayCompensationStrict", "sunday_compensation_strict"),
            fourth_sunday_rule=toggle("fourthSundayRule", "fourth_sunday_rule"),
            check_unmarked_days=toggle("checkUnmarkedDays", "check_unmarked_days"),
            check_quarter_hours=toggle("checkQuarterHours", "check_quarter_hours"),
        )


def positive_number(value: Any) -> Optional[float]:
    """Return value as a float if it is a positive number, else None."""
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if number != number or number <= 0:  # NaN or non-positive
        return None
    return number


@dataclass(frozen=True)
class DayInfo:
    """One calendar day in a scan."""
    date_key: str  # ISO date string
    date: date
    day_num: int
    is_sunday: bool
    is_saturday: bool

    @property
    def is_weekend(self) -> bool:
        return self.is_sunday or self.is_saturday


@dataclass(frozen=True)
class ShiftInterval:
    """Absolute start and end of a worked shift."""
    start: datetime
    end: datetime

    @property
    def hours(self) -> float:
        return (self.end - self.start).total_seconds() / 3600


@dataclass(frozen=True)
class Issue:
    """A single verification finding."""
    severity: IssueSeverity
    message: str
    issue: Optional[IssueType] = None
    employee_id: Optional[str] = None
    date_keys: tuple[str, ...] = ()
    blocking: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "severity": self.severity.value,
            "issue": self.issue.value if self.issue else None,
            "employee_id": self.employee_id,
            "date_keys": list(self.date_keys),
            "message": self.message,
            "blocking": self.blocking,
        }


@dataclass
class ComplianceContext:
    """Normalised, read-only input for one verification run."""
    rules: SchedulingRules
    employees: list[Employee]
    schedule: dict[str, dict[str, Assignment]]  # date key -> employee id -> record
    reference_date: date

    def assignment(self, date_key: str, employee_id: str) -> Optional[Assignment]:
        """The record for an employee on a day, or None when unmarked."""
        return self.schedule.get(date_key, {}).get(employee_id)

    def work_shift(self, date_key: str, employee_id: str) -> Optional[ShiftTemplate]:
        """The worked shift for an employee on a day, ignoring leave."""
        record = self.assignment(date_key, employee_id)
        if record is None or record.is_leave:
            return None
        return record


@dataclass
class ComplianceResult:
    """Result of a verification run."""
    issues: list[Issue] = field(default_factory=list)

    def add_issue(self, issue: Issue):
        self.issues.append(issue)

    def extend(self, issues: list[Issue]):
        self.issues.extend(issues)

    @property
    def error_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == IssueSeverity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == IssueSeverity.WARNING)

    @property
    def has_blocking(self) -> bool:
        """Whether any issue disallows exporting the schedule."""
        return any(i.blocking for i in self.issues)

    @property
    def export_allowed(self) -> bool:
        return not self.has_blocking

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "issues": [i.to_dict() for i in self.issues],
            "error_count": self.error_count,
            "warning_count": self.warning_count,
            "has_blocking": self.has_blocking,
            "export_allowed": self.export_allowed,
        }
