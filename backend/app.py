from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

import config
from compliance import ComplianceEngine, LeaveKind, SchedulingRules
from compliance.dates import coerce_date, is_last_month_of_quarter, quarter_range
from compliance.types import ComplianceResult
from run_verification import setup_logging
from schedule_matrix import build_schedule_matrix
from schemas import (
    IssueSchema,
    LeaveKindSchema,
    MatrixRequest,
    MatrixResponse,
    SchedulingRulesSchema,
    VerifyRequest,
    VerifyResponse,
)

setup_logging()

app = FastAPI(title="shiftCompliance")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _result_to_response(result: ComplianceResult) -> VerifyResponse:
    return VerifyResponse(
        issues=[IssueSchema(**issue.to_dict()) for issue in result.issues],
        error_count=result.error_count,
        warning_count=result.warning_count,
        has_blocking=result.has_blocking,
        export_allowed=result.export_allowed,
    )


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/verify", response_model=VerifyResponse)
def verify_ep(request: VerifyRequest) -> VerifyResponse:
    rules = config.apply_rule_defaults(request.rules.to_rules_dict() if request.rules else None)

    context = ComplianceEngine.build_context(
        schedule=request.schedule,
        employees=request.employees,
        reference_date=request.reference_date,
        rules=rules,
    )
    result = ComplianceEngine().validate(context)
    return _result_to_response(result)


@app.post("/matrix", response_model=MatrixResponse)
def matrix_ep(request: MatrixRequest) -> MatrixResponse:
    matrix = build_schedule_matrix(
        employees=request.employees,
        schedule=request.schedule,
        reference_date=request.reference_date,
        bank_holidays=[h.model_dump() for h in request.bank_holidays],
        locale=request.locale or config.MATRIX_LOCALE,
    )
    return MatrixResponse(**matrix.to_dict())


@app.get("/rules/defaults", response_model=SchedulingRulesSchema)
def rule_defaults_ep() -> SchedulingRulesSchema:
    rules = SchedulingRules.from_dict(config.apply_rule_defaults(None))
    return SchedulingRulesSchema(**vars(rules))


@app.get("/leave-kinds", response_model=list[LeaveKindSchema])
def leave_kinds_ep() -> list[LeaveKindSchema]:
    return [LeaveKindSchema(code=kind.value, name=kind.display_name) for kind in LeaveKind]


@app.get("/calendar/quarter")
def quarter_ep(reference_date: str):
    try:
        day = coerce_date(reference_date)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid date format. Use YYYY-MM-DD")

    start, end = quarter_range(day)
    return {
        "start_date": start.isoformat(),
        "end_date": end.isoformat(),
        "is_last_month": is_last_month_of_quarter(day),
    }
