#!/usr/bin/env python3
"""CLI script to compute a single deadline date."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Ensure the project source is importable when running the script directly.
_project_root = Path(__file__).resolve().parent.parent
_src = _project_root / "src"
if str(_src) not in sys.path:
    sys.path.insert(0, str(_src))

from docket.core.config import Settings  # noqa: E402
from docket.core.logging import configure_logging  # noqa: E402
from docket.deadlines.calculator import CalculatorLimits, DeadlineCalculator  # noqa: E402
from docket.deadlines.dates import format_date  # noqa: E402
from docket.deadlines.errors import DeadlineError  # noqa: E402
from docket.deadlines.holidays import load_holidays  # noqa: E402
from docket.deadlines.rules import VALID_UNITS, Rules  # noqa: E402


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Compute a legal deadline from a start date and duration."
    )
    parser.add_argument("start_date", help="Start date as YYYY-MM-DD.")
    parser.add_argument("duration", type=int, help="Non-negative number of units.")
    parser.add_argument("--unit", choices=VALID_UNITS, default="days")
    parser.add_argument(
        "--business-days-only",
        action="store_true",
        help="Count only business days (days unit).",
    )
    parser.add_argument(
        "--include-weekends",
        action="store_true",
        help="Treat Saturdays and Sundays as business days.",
    )
    parser.add_argument(
        "--include-holidays",
        action="store_true",
        help="Treat configured holidays as business days.",
    )
    parser.add_argument(
        "--adjust",
        action="store_true",
        help="Move the result forward to the next business day.",
    )
    parser.add_argument(
        "--start-next-business-day",
        action="store_true",
        help="Begin counting from the next business day.",
    )
    parser.add_argument(
        "--holiday",
        action="append",
        default=[],
        metavar="YYYY-MM-DD",
        help="Holiday to exclude (repeatable).",
    )
    parser.add_argument(
        "--holidays-file",
        type=str,
        default=None,
        help="YAML holiday file. Defaults to the configured holidays path.",
    )
    return parser.parse_args(argv)


def build_rules(args: argparse.Namespace) -> Rules:
    return Rules(
        business_days_only=args.business_days_only or None,
        exclude_weekends=False if args.include_weekends else None,
        exclude_holidays=False if args.include_holidays else None,
        adjust_to_next_business_day=args.adjust or None,
        start_counting_on_next_business_day=args.start_next_business_day or None,
    )


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    settings = Settings()
    configure_logging(settings)

    holidays_file = args.holidays_file or settings.deadline.holidays_path
    holidays = [*load_holidays(holidays_file), *args.holiday]
    calculator = DeadlineCalculator(
        holidays=holidays,
        limits=CalculatorLimits.from_config(settings.deadline),
    )

    try:
        due = calculator.compute_deadline(
            args.start_date, args.duration, args.unit, build_rules(args)
        )
    except DeadlineError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    print(format_date(due))
    return 0


if __name__ == "__main__":
    sys.exit(main())
