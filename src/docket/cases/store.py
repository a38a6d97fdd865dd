"""In-memory store for case records."""

from __future__ import annotations

from datetime import date, datetime, timezone

from docket.cases.models import Case, CaseStatus


class CaseStore:
    """In-memory dict store for cases with auto-incrementing integer ids.

    Suitable for single-instance deployment; nothing is persisted.
    """

    def __init__(self) -> None:
        self._cases: dict[int, Case] = {}
        self._next_id = 1

    def create_case(
        self,
        title: str,
        client: str = "",
        status: CaseStatus = CaseStatus.OPEN,
    ) -> Case:
        case = Case(id=self._next_id, title=title, client=client, status=status)
        self._cases[case.id] = case
        self._next_id += 1
        return case

    def get_case(self, case_id: int) -> Case | None:
        return self._cases.get(case_id)

    def list_cases(self) -> list[Case]:
        return list(self._cases.values())

    def list_cases_by_status(self, status: CaseStatus) -> list[Case]:
        return [c for c in self._cases.values() if c.status == status]

    def update_status(self, case_id: int, status: CaseStatus) -> Case:
        case = self._require(case_id)
        case.status = status
        case.updated_at = datetime.now(timezone.utc)
        return case

    def attach_deadline(self, case_id: int, deadline: date) -> Case:
        case = self._require(case_id)
        case.deadline = deadline
        case.updated_at = datetime.now(timezone.utc)
        return case

    @property
    def count(self) -> int:
        return len(self._cases)

    def _require(self, case_id: int) -> Case:
        case = self._cases.get(case_id)
        if case is None:
            raise KeyError(f"Case {case_id} not found")
        return case
