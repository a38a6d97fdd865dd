"""FastAPI application for the Docket deadline service.

Provides REST endpoints for deadline computation, named deadline rules and
the case records deadlines are attached to.
"""

from __future__ import annotations

from fastapi import FastAPI
from pydantic import BaseModel

from docket.cases.store import CaseStore
from docket.core.config import Settings
from docket.core.logging import configure_logging
from docket.deadlines.calculator import DeadlineCalculator
from docket.deadlines.presets import DeadlineRuleBook
from docket.web.case_router import router as case_router
from docket.web.deadline_router import router as deadline_router


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str
    version: str = "0.1.0"
    holidays: int = 0
    rules: int = 0


def create_app(
    settings: Settings | None = None,
    calculator: DeadlineCalculator | None = None,
    rule_book: DeadlineRuleBook | None = None,
    case_store: CaseStore | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Uses the factory pattern so tests can create isolated app instances
    with their own holidays and rules.

    Args:
        settings: Application settings. Defaults to Settings().
        calculator: Optional pre-built DeadlineCalculator.
        rule_book: Optional pre-built DeadlineRuleBook.
        case_store: Optional pre-built CaseStore.

    Returns:
        A configured FastAPI instance.
    """
    if settings is None:
        settings = Settings()

    configure_logging(settings)

    app = FastAPI(
        title="Docket Deadline Calculator",
        description="Legal deadline computation with business-day and holiday rules",
        version="0.1.0",
        debug=settings.debug,
    )

    if calculator is None:
        calculator = DeadlineCalculator.from_settings(settings)

    if rule_book is None:
        rule_book = DeadlineRuleBook(calculator, config_path=settings.deadline.rules_path)

    if case_store is None:
        case_store = CaseStore()

    # Store on app state for access in route handlers
    app.state.settings = settings
    app.state.deadline_calculator = calculator
    app.state.deadline_rule_book = rule_book
    app.state.case_store = case_store

    app.include_router(deadline_router)
    app.include_router(case_router)

    @app.get("/api/health", response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(
            status="healthy",
            service="docket-deadlines",
            holidays=len(calculator.holidays),
            rules=len(rule_book.get_rules()),
        )

    return app
