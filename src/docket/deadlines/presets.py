"""Named deadline rules loaded from YAML."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from docket.deadlines.calculator import DeadlineCalculator
from docket.deadlines.dates import normalize_date
from docket.deadlines.rules import Rules, TimeUnit


_DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[3] / "config" / "deadline_rules.yml"


class DeadlineRule(BaseModel):
    """A reusable deadline definition, e.g. "answer to complaint: 21 days"."""

    name: str
    duration: int = Field(ge=0)
    unit: TimeUnit = TimeUnit.DAYS
    rules: Rules = Field(default_factory=Rules)
    description: str = ""


class DeadlineInfo(BaseModel):
    """Computed deadline for a named rule."""

    rule_name: str
    case_id: int | None = None
    start_date: date
    duration: int
    unit: TimeUnit
    rules: Rules
    due_date: date


class DeadlineRuleBook:
    """Loads named deadline rules and evaluates them with a calculator."""

    def __init__(
        self,
        calculator: DeadlineCalculator,
        config_path: str | Path | None = None,
    ) -> None:
        self._calculator = calculator
        self._config_path = Path(config_path) if config_path else _DEFAULT_CONFIG_PATH
        self._rules: dict[str, DeadlineRule] = {}
        self._load_config()

    def _load_config(self) -> None:
        if not self._config_path.exists():
            return
        with open(self._config_path) as fh:
            raw = yaml.safe_load(fh) or {}

        for name, rule_data in (raw.get("deadlines") or {}).items():
            name = str(name)  # YAML may parse numeric keys as int
            self._rules[name] = DeadlineRule(name=name, **rule_data)

    def get_rules(self) -> dict[str, DeadlineRule]:
        return dict(self._rules)

    def compute(
        self,
        rule_name: str,
        start_date: Any,
        case_id: int | None = None,
    ) -> DeadlineInfo:
        if rule_name not in self._rules:
            raise ValueError(
                f"No deadline rule named {rule_name!r}. "
                f"Available: {list(self._rules.keys())}"
            )

        rule = self._rules[rule_name]
        due = self._calculator.compute_deadline(
            start_date, rule.duration, rule.unit, rule.rules
        )

        return DeadlineInfo(
            rule_name=rule_name,
            case_id=case_id,
            start_date=normalize_date(start_date).date(),
            duration=rule.duration,
            unit=rule.unit,
            rules=rule.rules,
            due_date=due.date(),
        )
