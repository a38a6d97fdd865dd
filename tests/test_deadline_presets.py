"""Tests for DeadlineRuleBook and holiday file loading."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

import pytest
from pydantic import ValidationError

from docket.deadlines.calculator import DeadlineCalculator
from docket.deadlines.errors import InvalidArgument
from docket.deadlines.holidays import build_holiday_set, load_holidays
from docket.deadlines.presets import DeadlineInfo, DeadlineRuleBook
from docket.deadlines.rules import Rules, TimeUnit

_CONFIG_DIR = Path(__file__).resolve().parents[1] / "config"


# ---------------------------------------------------------------------------
# Holiday files
# ---------------------------------------------------------------------------


class TestLoadHolidays:
    def test_mixed_entry_shapes(self, tmp_path):
        path = tmp_path / "holidays.yml"
        path.write_text(
            "holidays:\n"
            '  - "2024-06-10"\n'
            "  - 2024-07-04\n"
            '  - {date: "2024-12-25", name: "Christmas Day"}\n'
        )
        assert load_holidays(path) == ["2024-06-10", "2024-07-04", "2024-12-25"]

    def test_missing_file(self, tmp_path):
        assert load_holidays(tmp_path / "nope.yml") == []

    def test_missing_file_logs_warning(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING, logger="docket.deadlines.holidays"):
            load_holidays(tmp_path / "nope.yml")
        assert [r.levelno for r in caplog.records] == [logging.WARNING]
        assert "nope.yml" in caplog.text

    def test_empty_file(self, tmp_path):
        path = tmp_path / "holidays.yml"
        path.write_text("")
        assert load_holidays(path) == []

    def test_malformed_entries_reach_validation(self, tmp_path, caplog):
        path = tmp_path / "holidays.yml"
        path.write_text('holidays:\n  - "06/10/2024"\n  - "2024-06-11"\n')
        with caplog.at_level(logging.WARNING, logger="docket.deadlines.holidays"):
            holidays = build_holiday_set(load_holidays(path))
        assert holidays == frozenset({"2024-06-11"})
        assert "06/10/2024" in caplog.text

    def test_bundled_holiday_file(self):
        holidays = build_holiday_set(load_holidays(_CONFIG_DIR / "holidays.yml"))
        assert "2025-12-25" in holidays
        assert "2026-07-03" in holidays


# ---------------------------------------------------------------------------
# Rule book
# ---------------------------------------------------------------------------


@pytest.fixture
def calculator():
    return DeadlineCalculator(holidays=["2024-06-10", "2024-07-04"])


@pytest.fixture
def rule_book(calculator):
    return DeadlineRuleBook(calculator)


class TestDeadlineRuleBook:
    def test_get_rules(self, rule_book):
        rules = rule_book.get_rules()
        assert "answer_to_complaint" in rules
        assert "motion_opposition" in rules
        assert "notice_of_appeal" in rules
        assert rules["motion_opposition"].rules == Rules(business_days_only=True)
        assert rules["notice_of_appeal"].unit == TimeUnit.MONTHS

    def test_get_rules_returns_copy(self, rule_book):
        rule_book.get_rules().clear()
        assert rule_book.get_rules()

    def test_answer_rolls_past_holiday(self, rule_book):
        # Thu 2024-06-13 + 21 days = Thu 2024-07-04 (holiday) -> Fri 2024-07-05
        info = rule_book.compute("answer_to_complaint", "2024-06-13")
        assert isinstance(info, DeadlineInfo)
        assert info.start_date == date(2024, 6, 13)
        assert info.due_date == date(2024, 7, 5)
        assert info.duration == 21
        assert info.unit == TimeUnit.DAYS

    def test_motion_opposition_counts_business_days(self, rule_book):
        info = rule_book.compute("motion_opposition", "2024-06-07", case_id=7)
        assert info.due_date == date(2024, 6, 24)
        assert info.case_id == 7

    def test_notice_of_appeal_month_end(self, rule_book):
        # 2024-06-30 is a Sunday
        info = rule_book.compute("notice_of_appeal", date(2024, 5, 31))
        assert info.due_date == date(2024, 7, 1)

    def test_records_request_starts_next_business_day(self, rule_book):
        # Sat 6/8 -> origin Tue 6/11; count 6/12, 6/13, 6/14, 6/17, 6/18
        info = rule_book.compute("records_request", "2024-06-08")
        assert info.due_date == date(2024, 6, 18)
        assert info.start_date == date(2024, 6, 8)

    def test_unknown_rule(self, rule_book):
        with pytest.raises(ValueError, match="No deadline rule"):
            rule_book.compute("unknown", "2024-06-07")

    def test_invalid_start_date(self, rule_book):
        with pytest.raises(InvalidArgument):
            rule_book.compute("answer_to_complaint", "June 7")

    def test_custom_config(self, tmp_path, calculator):
        path = tmp_path / "rules.yml"
        path.write_text(
            "deadlines:\n"
            "  311:\n"
            "    duration: 2\n"
            "    unit: weeks\n"
        )
        book = DeadlineRuleBook(calculator, config_path=path)
        assert list(book.get_rules()) == ["311"]
        info = book.compute("311", "2024-06-07")
        assert info.due_date == date(2024, 6, 21)
        assert info.rules == Rules()

    def test_missing_config(self, tmp_path, calculator):
        book = DeadlineRuleBook(calculator, config_path=tmp_path / "missing.yml")
        assert book.get_rules() == {}

    def test_invalid_rule_definition(self, tmp_path, calculator):
        path = tmp_path / "rules.yml"
        path.write_text("deadlines:\n  bad:\n    duration: -3\n")
        with pytest.raises(ValidationError):
            DeadlineRuleBook(calculator, config_path=path)
