"""Calendar date normalization.

Every date handled by the calculator is a timezone-aware ``datetime`` pinned
to 12:00 UTC. Whole-day arithmetic on such values never crosses a day boundary,
and any caller reading the calendar day back out gets the same ``YYYY-MM-DD``.
"""

from __future__ import annotations

import calendar
import re
from datetime import date, datetime, timedelta, timezone
from typing import Any

from docket.deadlines.errors import InvalidArgument

DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)

# Monday=0 ... Sunday=6
WEEKEND_DAYS = frozenset({5, 6})

_NOON = 12


def utc_noon(year: int, month: int, day: int) -> datetime:
    """Build the canonical UTC-noon instant for a calendar day."""
    return datetime(year, month, day, _NOON, tzinfo=timezone.utc)


def parse_date(value: str) -> datetime:
    """Parse a strict ``YYYY-MM-DD`` string into a UTC-noon datetime."""
    if not DATE_PATTERN.fullmatch(value):
        raise InvalidArgument(
            f"Invalid start date {value!r}: expected format YYYY-MM-DD"
        )
    year, month, day = (int(part) for part in value.split("-"))
    try:
        return utc_noon(year, month, day)
    except ValueError as exc:
        raise InvalidArgument(f"Invalid start date {value!r}: {exc}") from exc


def is_valid_date_string(value: Any) -> bool:
    """Return True when *value* is a strict ``YYYY-MM-DD`` string naming a real day."""
    if not isinstance(value, str):
        return False
    try:
        parse_date(value)
    except InvalidArgument:
        return False
    return True


def normalize_date(value: Any) -> datetime:
    """Resolve a string or date-like start value into a UTC-noon datetime.

    Date-like values (``date``, ``datetime`` or anything exposing integer
    ``year``/``month``/``day`` attributes) are re-derived from their own
    fields; time of day and UTC offset are dropped.
    """
    if isinstance(value, str):
        return parse_date(value)
    if isinstance(value, date):
        return utc_noon(value.year, value.month, value.day)

    fields = [getattr(value, name, None) for name in ("year", "month", "day")]
    if all(isinstance(f, int) and not isinstance(f, bool) for f in fields):
        try:
            return utc_noon(*fields)
        except ValueError as exc:
            raise InvalidArgument(f"Invalid start date {value!r}: {exc}") from exc

    raise InvalidArgument(
        f"Unsupported start date {value!r}: expected a YYYY-MM-DD string or a date"
    )


def format_date(value: datetime | date) -> str:
    """Serialize a calendar day as ``YYYY-MM-DD``."""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


_OUT_OF_RANGE = "result is outside the supported date range (years 1-9999)"


def next_day(value: datetime) -> datetime:
    return add_days(value, 1)


def add_days(value: datetime, days: int) -> datetime:
    try:
        return value + timedelta(days=days)
    except OverflowError as exc:
        raise InvalidArgument(
            f"Adding {days} days to {format_date(value)}: {_OUT_OF_RANGE}"
        ) from exc


def add_months(value: datetime, months: int) -> datetime:
    """Add calendar months, clamping to the last day of a shorter target month.

    ``2024-01-31 + 1 month`` is ``2024-02-29``; ``2023-01-31 + 1 month`` is
    ``2023-02-28``.
    """
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    try:
        last_day = calendar.monthrange(year, month)[1]
        return utc_noon(year, month, min(value.day, last_day))
    except (OverflowError, ValueError) as exc:
        raise InvalidArgument(
            f"Adding {months} months to {format_date(value)}: {_OUT_OF_RANGE}"
        ) from exc


def is_weekend(value: datetime) -> bool:
    return value.astimezone(timezone.utc).weekday() in WEEKEND_DAYS
