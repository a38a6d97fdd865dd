"""Calendar rule flags and their precedence resolution."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ValidationError
from pydantic.alias_generators import to_camel

from docket.deadlines.errors import InvalidArgument


class TimeUnit(StrEnum):
    """Units a deadline duration can be expressed in."""

    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"


VALID_UNITS = tuple(unit.value for unit in TimeUnit)


class Rules(BaseModel):
    """Per-call calendar rules.

    Every flag is optional; ``None`` means "not set" and is distinct from
    ``False`` for precedence purposes. Accepts the camelCase wire names
    (``businessDaysOnly``) as well as the field names. Unknown keys are ignored.
    """

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "extra": "ignore",
        "frozen": True,
        "strict": True,
    }

    business_days_only: bool | None = None
    exclude_weekends: bool | None = None
    exclude_holidays: bool | None = None
    adjust_to_next_business_day: bool | None = None
    start_counting_on_next_business_day: bool | None = None


@dataclass(frozen=True)
class ResolvedExclusions:
    """Which non-business-day checks are active."""

    weekends: bool
    holidays: bool


def coerce_rules(rules: Rules | Mapping[str, Any] | None) -> Rules:
    if rules is None:
        return Rules()
    if isinstance(rules, Rules):
        return rules
    if not isinstance(rules, Mapping):
        raise InvalidArgument(f"Rules must be a mapping, got {type(rules).__name__}")
    try:
        return Rules.model_validate(dict(rules))
    except ValidationError as exc:
        raise InvalidArgument(f"Invalid rules: {exc}") from exc


def parse_unit(unit: Any) -> TimeUnit:
    try:
        return TimeUnit(unit)
    except ValueError:
        raise InvalidArgument(
            f"Invalid unit {unit!r}: expected one of {', '.join(VALID_UNITS)}"
        ) from None


def _active(shorthand: bool | None, flag: bool | None) -> bool:
    return shorthand is True or flag is True or (shorthand is None and flag is None)


def resolve_exclusions(rules: Rules) -> ResolvedExclusions:
    """Resolve the exclusions used for counting and start pre-adjustment.

    Precedence, applied to weekends and holidays independently:

    1. ``business_days_only`` true activates the exclusion.
    2. Otherwise the specific flag (``exclude_weekends`` / ``exclude_holidays``)
       being true activates it.
    3. If neither flag is set at all, the exclusion defaults to active.
    """
    return ResolvedExclusions(
        weekends=_active(rules.business_days_only, rules.exclude_weekends),
        holidays=_active(rules.business_days_only, rules.exclude_holidays),
    )


def resolve_adjustment_exclusions(rules: Rules) -> ResolvedExclusions:
    """Resolve the exclusions used when moving a result to the next business day.

    ``business_days_only`` plays no part here; each specific flag defaults to
    true when unset.
    """
    return ResolvedExclusions(
        weekends=rules.exclude_weekends is not False,
        holidays=rules.exclude_holidays is not False,
    )
