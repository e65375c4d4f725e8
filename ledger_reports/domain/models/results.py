"""Failure arm of report results and the stable error codes."""

from dataclasses import dataclass, field
from typing import Any

INVALID_INPUT = "INVALID_INPUT"
NO_ACCOUNTS_FOUND = "NO_ACCOUNTS_FOUND"
TRIAL_BALANCE_ERROR = "TRIAL_BALANCE_ERROR"
COMPARATIVE_TRIAL_BALANCE_ERROR = "COMPARATIVE_TRIAL_BALANCE_ERROR"
PERIOD_ACTIVITY_ERROR = "PERIOD_ACTIVITY_ERROR"
PROFIT_LOSS_ERROR = "PROFIT_LOSS_ERROR"
CASH_FLOW_ERROR = "CASH_FLOW_ERROR"


@dataclass(frozen=True)
class ReportFailure:
    """A report that could not be produced.

    Attributes:
        error: Human readable message.
        code: Stable machine readable code.
        details: Optional context (validation errors, failing period, ...).
    """

    error: str
    code: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return False


__all__ = [
    "ReportFailure",
    "INVALID_INPUT",
    "NO_ACCOUNTS_FOUND",
    "TRIAL_BALANCE_ERROR",
    "COMPARATIVE_TRIAL_BALANCE_ERROR",
    "PERIOD_ACTIVITY_ERROR",
    "PROFIT_LOSS_ERROR",
    "CASH_FLOW_ERROR",
]
