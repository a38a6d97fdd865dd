"""Holiday set construction and holiday file loading."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date
from pathlib import Path
from typing import Any

import yaml

from docket.deadlines.dates import is_valid_date_string

logger = logging.getLogger(__name__)


def build_holiday_set(entries: Iterable[Any] | None) -> frozenset[str]:
    """Validate holiday strings and freeze them into a set.

    Entries that are not strict ``YYYY-MM-DD`` strings naming a real day are
    dropped with a warning.
    """
    valid: set[str] = set()
    for entry in entries or ():
        if is_valid_date_string(entry):
            valid.add(entry)
        else:
            logger.warning("Ignoring invalid holiday entry %r (expected YYYY-MM-DD)", entry)
    return frozenset(valid)


def load_holidays(path: str | Path) -> list[Any]:
    """Read the ``holidays`` list from a YAML file.

    Entries may be plain strings or mappings with a ``date`` key (and an
    optional ``name``). Returns raw values; validation is left to
    :func:`build_holiday_set`. A missing file yields an empty list.
    """
    path = Path(path)
    if not path.exists():
        logger.warning("Holiday file %s not found; using no holidays", path)
        return []
    with open(path) as fh:
        raw = yaml.safe_load(fh) or {}

    entries: list[Any] = []
    for item in raw.get("holidays", []) or []:
        value = item.get("date") if isinstance(item, dict) else item
        # YAML loads unquoted ISO dates as date objects
        if isinstance(value, date):
            value = value.isoformat()
        entries.append(value)
    return entries
