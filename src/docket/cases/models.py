"""Case record models."""

from __future__ import annotations

from datetime import date, datetime, timezone
from enum import StrEnum

from pydantic import BaseModel, Field


class CaseStatus(StrEnum):
    """Lifecycle states for a case."""

    OPEN = "open"
    PENDING = "pending"
    CLOSED = "closed"


class Case(BaseModel):
    """Case metadata, optionally carrying a computed deadline."""

    id: int
    title: str
    client: str = ""
    status: CaseStatus = CaseStatus.OPEN
    deadline: date | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
