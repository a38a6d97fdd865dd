"""Deterministic deadline computation engine."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from docket.core.config import DeadlineConfig, Settings
from docket.deadlines.dates import (
    add_days,
    add_months,
    format_date,
    is_weekend,
    next_day,
    normalize_date,
)
from docket.deadlines.errors import ComputationLimitExceeded, InvalidArgument
from docket.deadlines.holidays import build_holiday_set, load_holidays
from docket.deadlines.rules import (
    ResolvedExclusions,
    Rules,
    TimeUnit,
    coerce_rules,
    parse_unit,
    resolve_adjustment_exclusions,
    resolve_exclusions,
)

logger = logging.getLogger(__name__)

START_ADJUSTMENT = "start_adjustment"
BUSINESS_DAY_COUNT = "business_day_count"
END_ADJUSTMENT = "end_adjustment"


@dataclass(frozen=True)
class CalculatorLimits:
    """Iteration ceilings for the date-stepping loops."""

    start_adjustment: int = 1000
    count_slack: int = 100
    end_adjustment: int = 30

    @classmethod
    def from_config(cls, config: DeadlineConfig) -> CalculatorLimits:
        return cls(
            start_adjustment=config.start_adjustment_limit,
            count_slack=config.count_slack,
            end_adjustment=config.end_adjustment_limit,
        )


DEFAULT_LIMITS = CalculatorLimits()


def _is_non_negative_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


class DeadlineCalculator:
    """Computes deadline dates from a start date, duration, unit and rules.

    The holiday set is validated and frozen at construction; each call to
    :meth:`compute_deadline` is independent of every other.
    """

    def __init__(
        self,
        holidays: Iterable[Any] | None = None,
        limits: CalculatorLimits | None = None,
    ) -> None:
        self._holidays = build_holiday_set(holidays)
        self._limits = limits or DEFAULT_LIMITS

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> DeadlineCalculator:
        """Build a calculator from the holiday file and limits in *settings*."""
        config = (settings or Settings()).deadline
        return cls(
            holidays=load_holidays(Path(config.holidays_path)),
            limits=CalculatorLimits.from_config(config),
        )

    @property
    def holidays(self) -> frozenset[str]:
        return self._holidays

    @property
    def limits(self) -> CalculatorLimits:
        return self._limits

    def is_business_day(self, value: datetime, exclusions: ResolvedExclusions) -> bool:
        if exclusions.weekends and is_weekend(value):
            return False
        if exclusions.holidays and format_date(value) in self._holidays:
            return False
        return True

    def compute_deadline(
        self,
        start_date: Any,
        duration: int,
        unit: str = TimeUnit.DAYS,
        rules: Rules | Mapping[str, Any] | None = None,
    ) -> datetime:
        """Return the deadline as a UTC-noon ``datetime``.

        Args:
            start_date: ``YYYY-MM-DD`` string or a date-like value.
            duration: Non-negative whole number of units.
            unit: ``days``, ``weeks`` or ``months``.
            rules: A :class:`Rules` instance or a mapping of its flags.

        Raises:
            InvalidArgument: If any input is malformed.
            ComputationLimitExceeded: If a stepping loop cannot reach a
                business day within its ceiling.
        """
        if start_date is None or not _is_non_negative_int(duration):
            raise InvalidArgument("start date and non-negative integer duration required")
        time_unit = parse_unit(unit)
        rules = coerce_rules(rules)
        origin = normalize_date(start_date)
        exclusions = resolve_exclusions(rules)

        if rules.business_days_only and time_unit is not TimeUnit.DAYS:
            logger.warning(
                "businessDaysOnly applies only to the 'days' unit; adding %d calendar %s instead",
                duration,
                time_unit.value,
            )

        if rules.start_counting_on_next_business_day:
            origin = self._advance_to_business_day(
                origin, exclusions, self._limits.start_adjustment, START_ADJUSTMENT
            )

        if rules.business_days_only and time_unit is TimeUnit.DAYS:
            result = self._count_business_days(origin, duration, exclusions)
        else:
            result = self._add_calendar_units(origin, duration, time_unit)
            if rules.adjust_to_next_business_day:
                result = self._advance_to_business_day(
                    result,
                    resolve_adjustment_exclusions(rules),
                    self._limits.end_adjustment,
                    END_ADJUSTMENT,
                )

        logger.debug(
            "Deadline %s + %d %s -> %s",
            format_date(origin),
            duration,
            time_unit.value,
            format_date(result),
        )
        return result

    def _advance_to_business_day(
        self,
        current: datetime,
        exclusions: ResolvedExclusions,
        limit: int,
        phase: str,
    ) -> datetime:
        steps = 0
        while not self.is_business_day(current, exclusions):
            if steps >= limit:
                raise ComputationLimitExceeded(phase, limit)
            current = next_day(current)
            steps += 1
        return current

    def _count_business_days(
        self, origin: datetime, duration: int, exclusions: ResolvedExclusions
    ) -> datetime:
        limit = duration + self._limits.count_slack + len(self._holidays)
        current = origin
        counted = 0
        steps = 0
        while counted < duration:
            if steps >= limit:
                raise ComputationLimitExceeded(BUSINESS_DAY_COUNT, limit)
            current = next_day(current)
            steps += 1
            if self.is_business_day(current, exclusions):
                counted += 1
        return current

    @staticmethod
    def _add_calendar_units(origin: datetime, duration: int, unit: TimeUnit) -> datetime:
        if unit is TimeUnit.WEEKS:
            return add_days(origin, duration * 7)
        if unit is TimeUnit.MONTHS:
            return add_months(origin, duration)
        return add_days(origin, duration)
