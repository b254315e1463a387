"""Labor law compliance verification for shift schedules."""

from .types import (
    ComplianceContext,
    ComplianceResult,
    Employee,
    Issue,
    IssueSeverity,
    IssueType,
    LeaveKind,
    LeaveRecord,
    SchedulingRules,
    ShiftKind,
    ShiftTemplate,
)
from .engine import ComplianceEngine, verify_schedule
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

__all__ = [
    "ComplianceContext",
    "ComplianceResult",
    "Employee",
    "Issue",
    "IssueSeverity",
    "IssueType",
    "LeaveKind",
    "LeaveRecord",
    "SchedulingRules",
    "ShiftKind",
    "ShiftTemplate",
    "ComplianceEngine",
    "verify_schedule",
    "BaseValidator",
    "RestBetweenShiftsValidator",
    "MonthlyHoursValidator",
    "QuarterlyHoursValidator",
    "WeeklyRestValidator",
    "SaturdayCompensationValidator",
    "SundayCompensationValidator",
    "FourthSundayValidator",
    "UnmarkedDaysValidator",
]
