"""Case records that computed deadlines can be attached to."""

from docket.cases.models import Case, CaseStatus
from docket.cases.store import CaseStore

__all__ = ["Case", "CaseStatus", "CaseStore"]
