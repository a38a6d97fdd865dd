"""Error types raised by the deadline calculator."""

from __future__ import annotations


class DeadlineError(Exception):
    """Base class for deadline calculation errors."""


class InvalidArgument(DeadlineError, ValueError):
    """Raised when a start date, duration, or unit cannot be used.

    Always raised before any date arithmetic begins.
    """


class ComputationLimitExceeded(DeadlineError, RuntimeError):
    """Raised when a bounded date-stepping loop hits its iteration ceiling."""

    def __init__(self, phase: str, limit: int) -> None:
        super().__init__(
            f"{phase.replace('_', ' ')} did not reach a business day within "
            f"{limit} steps; check the holiday and weekend configuration."
        )
        self.phase = phase
        self.limit = limit
