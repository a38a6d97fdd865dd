"""Deadline API router for ad-hoc computations and named deadline rules."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from docket.deadlines.dates import format_date
from docket.deadlines.errors import ComputationLimitExceeded, InvalidArgument


router = APIRouter()


# ---------------------------------------------------------------------------
# Request/Response models
# ---------------------------------------------------------------------------


class ComputeDeadlineRequest(BaseModel):
    """Request body for an ad-hoc deadline computation.

    Fields are loosely typed so that malformed values reach the calculator
    and are reported with its own error messages.
    """

    start_date: Any = None
    duration: Any = None
    unit: Any = "days"
    rules: dict[str, Any] = Field(default_factory=dict)


class ComputeDeadlineResponse(BaseModel):
    start_date: str
    duration: int
    unit: str
    due_date: str
    due_at: str


class ApplyRuleRequest(BaseModel):
    """Request body for evaluating a named deadline rule."""

    start_date: str
    case_id: int | None = None


# ---------------------------------------------------------------------------
# Helpers to get services from app state
# ---------------------------------------------------------------------------


def get_calculator(request: Request):
    calculator = getattr(request.app.state, "deadline_calculator", None)
    if calculator is None:
        raise HTTPException(status_code=503, detail="Deadline calculator not available")
    return calculator


def get_rule_book(request: Request):
    rule_book = getattr(request.app.state, "deadline_rule_book", None)
    if rule_book is None:
        raise HTTPException(status_code=503, detail="Deadline rules not available")
    return rule_book


def run_computation(func, *args: Any, **kwargs: Any) -> Any:
    """Call into the calculator, translating its errors into HTTP errors."""
    try:
        return func(*args, **kwargs)
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ComputationLimitExceeded as e:
        raise HTTPException(status_code=422, detail=str(e))


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.post("/api/deadlines/compute", response_model=ComputeDeadlineResponse)
async def api_compute_deadline(
    body: ComputeDeadlineRequest, request: Request
) -> ComputeDeadlineResponse:
    """Compute a deadline from a start date, duration, unit and rules."""
    calculator = get_calculator(request)
    due = run_computation(
        calculator.compute_deadline,
        body.start_date,
        body.duration,
        body.unit,
        body.rules,
    )
    return ComputeDeadlineResponse(
        start_date=str(body.start_date),
        duration=body.duration,
        unit=str(body.unit),
        due_date=format_date(due),
        due_at=due.isoformat(),
    )


@router.get("/api/deadlines/holidays")
async def api_list_holidays(request: Request) -> list[str]:
    """List the holidays the calculator excludes."""
    calculator = get_calculator(request)
    return sorted(calculator.holidays)


@router.get("/api/deadlines/rules")
async def api_list_rules(request: Request) -> dict[str, Any]:
    """List all named deadline rules."""
    rule_book = get_rule_book(request)
    return {
        name: rule.model_dump(mode="json", by_alias=True, exclude_none=True)
        for name, rule in rule_book.get_rules().items()
    }


@router.post("/api/deadlines/rules/{rule_name}")
async def api_apply_rule(
    rule_name: str, body: ApplyRuleRequest, request: Request
) -> dict[str, Any]:
    """Compute the deadline for a named rule."""
    rule_book = get_rule_book(request)
    if rule_name not in rule_book.get_rules():
        raise HTTPException(status_code=404, detail=f"No deadline rule named {rule_name!r}")

    info = run_computation(
        rule_book.compute, rule_name, body.start_date, case_id=body.case_id
    )
    return info.model_dump(mode="json", by_alias=True, exclude_none=True)
