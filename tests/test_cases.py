"""Tests for the in-memory CaseStore."""

from __future__ import annotations

from datetime import date

import pytest

from docket.cases.models import CaseStatus
from docket.cases.store import CaseStore


@pytest.fixture
def store():
    return CaseStore()


class TestCaseStore:
    def test_ids_auto_increment(self, store):
        first = store.create_case("Smith v. Jones", client="Smith")
        second = store.create_case("Doe v. Roe")
        assert first.id == 1
        assert second.id == 2
        assert store.count == 2

    def test_defaults(self, store):
        case = store.create_case("Smith v. Jones")
        assert case.status == CaseStatus.OPEN
        assert case.deadline is None
        assert case.client == ""

    def test_get_case(self, store):
        case = store.create_case("Smith v. Jones")
        assert store.get_case(case.id) is case
        assert store.get_case(99) is None

    def test_list_cases(self, store):
        store.create_case("A")
        store.create_case("B")
        assert [c.title for c in store.list_cases()] == ["A", "B"]

    def test_filter_by_status(self, store):
        store.create_case("A")
        store.create_case("B", status=CaseStatus.PENDING)
        store.create_case("C", status=CaseStatus.PENDING)
        pending = store.list_cases_by_status(CaseStatus.PENDING)
        assert [c.title for c in pending] == ["B", "C"]
        assert store.list_cases_by_status(CaseStatus.CLOSED) == []

    def test_update_status(self, store):
        case = store.create_case("A")
        created = case.updated_at
        updated = store.update_status(case.id, CaseStatus.CLOSED)
        assert updated.status == CaseStatus.CLOSED
        assert updated.updated_at >= created
        assert store.list_cases_by_status(CaseStatus.CLOSED) == [updated]

    def test_update_unknown_case(self, store):
        with pytest.raises(KeyError):
            store.update_status(42, CaseStatus.CLOSED)

    def test_attach_deadline(self, store):
        case = store.create_case("A")
        store.attach_deadline(case.id, date(2024, 6, 13))
        assert store.get_case(case.id).deadline == date(2024, 6, 13)

    def test_attach_deadline_unknown_case(self, store):
        with pytest.raises(KeyError):
            store.attach_deadline(42, date(2024, 6, 13))
