"""Case API router: case records and deadline attachment."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from docket.cases.models import Case, CaseStatus
from docket.web.deadline_router import (
    get_calculator,
    get_rule_book,
    run_computation,
)

router = APIRouter()


# --- Request/Response models ---


class CaseCreateRequest(BaseModel):
    title: str
    client: str = ""
    status: CaseStatus = CaseStatus.OPEN


class StatusUpdateRequest(BaseModel):
    status: CaseStatus


class AttachDeadlineRequest(BaseModel):
    """Either ``rule_name`` or ``duration`` (with ``unit``/``rules``) is required."""

    start_date: str
    rule_name: str | None = None
    duration: Any = None
    unit: Any = "days"
    rules: dict[str, Any] = Field(default_factory=dict)


def _get_case_store(request: Request):
    store = getattr(request.app.state, "case_store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="Case store not available")
    return store


def _require_case(request: Request, case_id: int) -> Case:
    case = _get_case_store(request).get_case(case_id)
    if case is None:
        raise HTTPException(status_code=404, detail=f"Case {case_id} not found")
    return case


# --- Case endpoints ---


@router.post("/api/cases")
async def api_create_case(body: CaseCreateRequest, request: Request) -> dict[str, Any]:
    store = _get_case_store(request)
    case = store.create_case(title=body.title, client=body.client, status=body.status)
    return case.model_dump(mode="json")


@router.get("/api/cases")
async def api_list_cases(
    request: Request, status: CaseStatus | None = None
) -> list[dict[str, Any]]:
    store = _get_case_store(request)
    cases = store.list_cases() if status is None else store.list_cases_by_status(status)
    return [c.model_dump(mode="json") for c in cases]


@router.get("/api/cases/{case_id}")
async def api_get_case(case_id: int, request: Request) -> dict[str, Any]:
    return _require_case(request, case_id).model_dump(mode="json")


@router.patch("/api/cases/{case_id}/status")
async def api_update_status(
    case_id: int, body: StatusUpdateRequest, request: Request
) -> dict[str, Any]:
    _require_case(request, case_id)
    case = _get_case_store(request).update_status(case_id, body.status)
    return case.model_dump(mode="json")


@router.post("/api/cases/{case_id}/deadline")
async def api_attach_deadline(
    case_id: int, body: AttachDeadlineRequest, request: Request
) -> dict[str, Any]:
    """Compute a deadline and record it on the case."""
    _require_case(request, case_id)

    if body.rule_name is not None:
        rule_book = get_rule_book(request)
        if body.rule_name not in rule_book.get_rules():
            raise HTTPException(
                status_code=404, detail=f"No deadline rule named {body.rule_name!r}"
            )
        info = run_computation(
            rule_book.compute, body.rule_name, body.start_date, case_id=case_id
        )
        due_date = info.due_date
    else:
        calculator = get_calculator(request)
        due = run_computation(
            calculator.compute_deadline,
            body.start_date,
            body.duration,
            body.unit,
            body.rules,
        )
        due_date = due.date()

    case = _get_case_store(request).attach_deadline(case_id, due_date)
    return case.model_dump(mode="json")
