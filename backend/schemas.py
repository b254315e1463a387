from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Input model accepting the camelCase keys of the persisted JSON."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SchedulingRulesSchema(CamelModel):
    hours_after_day: float | None = None
    hours_after_night: float | None = None
    sunday_rule_enabled: bool | None = None
    sunday_rule_days: int | None = None
    weekly_rest_hours: float | None = None
    saturday_compensation: bool | None = None
    sunday_compensation_strict: bool | None = None
    fourth_sunday_rule: bool | None = None
    check_unmarked_days: bool | None = None
    check_quarter_hours: bool | None = None

    def to_rules_dict(self) -> dict:
        """Only the keys the caller set, camelCase, for the compliance engine."""
        return self.model_dump(by_alias=True, exclude_none=True)


class BankHoliday(BaseModel):
    date: str  # ISO date string: "2025-01-06"
    name: str = ""


class VerifyRequest(CamelModel):
    schedule: dict[str, dict[str, Any]] = {}  # date key -> employee id -> shift/leave record
    employees: list[dict[str, Any]]
    reference_date: date
    rules: SchedulingRulesSchema | None = None


class IssueSchema(BaseModel):
    """Verification finding."""
    severity: str  # "error", "warning", "success"
    issue: str | None = None  # "insufficient_rest", "weekly_rest", etc.
    employee_id: str | None = None
    date_keys: list[str] = []
    message: str
    blocking: bool = False


class VerifyResponse(BaseModel):
    issues: list[IssueSchema]
    error_count: int
    warning_count: int
    has_blocking: bool
    export_allowed: bool


class MatrixRequest(CamelModel):
    schedule: dict[str, dict[str, Any]] = {}
    employees: list[dict[str, Any]]
    reference_date: date
    bank_holidays: list[BankHoliday] = []
    locale: str | None = None


class MatrixDaySchema(BaseModel):
    day_num: int
    day_name: str
    date_key: str
    is_weekend: bool
    is_sunday: bool
    is_holiday: bool
    holiday_name: str = ""


class MatrixRowSchema(BaseModel):
    employee_name: str
    cells: list[str]
    monthly_hours: float
    max_hours: float
    quarterly_hours: float
    max_hours_quarter: float


class MatrixResponse(BaseModel):
    title: str
    month_name: str
    days: list[MatrixDaySchema]
    rows: list[MatrixRowSchema]


class LeaveKindSchema(BaseModel):
    code: str
    name: str


class Snapshot(CamelModel):
    """Persisted application state, as saved by the schedule editor."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    schedule: dict[str, dict[str, Any]] = {}
    employees: list[dict[str, Any]] = []
    scheduling_rules: SchedulingRulesSchema = Field(default_factory=SchedulingRulesSchema)
    bank_holidays: list[BankHoliday] = []
    current_date: str | None = None  # ISO date or timestamp
