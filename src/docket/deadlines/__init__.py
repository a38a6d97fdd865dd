"""Deadline calculation for Docket.

Computes due dates from a start date, a duration and calendar rules covering
weekends, injected holidays, business-day counting and forward adjustment.
"""

from docket.deadlines.calculator import CalculatorLimits, DeadlineCalculator
from docket.deadlines.errors import ComputationLimitExceeded, DeadlineError, InvalidArgument
from docket.deadlines.presets import DeadlineInfo, DeadlineRule, DeadlineRuleBook
from docket.deadlines.rules import ResolvedExclusions, Rules, TimeUnit

__all__ = [
    "CalculatorLimits",
    "ComputationLimitExceeded",
    "DeadlineCalculator",
    "DeadlineError",
    "DeadlineInfo",
    "DeadlineRule",
    "DeadlineRuleBook",
    "InvalidArgument",
    "ResolvedExclusions",
    "Rules",
    "TimeUnit",
]
