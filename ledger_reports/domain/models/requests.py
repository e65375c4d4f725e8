"""Report request models."""

from dataclasses import dataclass
from datetime import date

from ledger_reports.domain.constants import (
    DEFAULT_CASH_FLOW_METHOD,
    DEFAULT_REPORT_FORMAT,
)
from ledger_reports.domain.models.accounts import AccountFilter
from ledger_reports.domain.models.statements import ReportPeriod


@dataclass(frozen=True)
class TrialBalanceRequest:
    """Parameters of a trial balance."""

    tenant_id: str
    company_id: str
    as_of_date: date | None
    include_period_activity: bool = True
    include_zero_balances: bool = False
    account_filter: AccountFilter | None = None
    currency: str | None = None


@dataclass(frozen=True)
class ProfitLossRequest:
    """Parameters of an income statement."""

    tenant_id: str
    company_id: str
    start_date: date | None
    end_date: date | None
    comparative_period: ReportPeriod | None = None
    include_zero_balances: bool = False
    currency: str | None = None
    report_format: str = DEFAULT_REPORT_FORMAT

    @property
    def period(self) -> ReportPeriod:
        return ReportPeriod(self.start_date, self.end_date)


@dataclass(frozen=True)
class CashFlowRequest:
    """Parameters of a statement of cash flows."""

    tenant_id: str
    company_id: str
    start_date: date | None
    end_date: date | None
    comparative_period: ReportPeriod | None = None
    method: str = DEFAULT_CASH_FLOW_METHOD
    currency: str | None = None
    report_format: str = DEFAULT_REPORT_FORMAT

    @property
    def period(self) -> ReportPeriod:
        return ReportPeriod(self.start_date, self.end_date)


__all__ = ["TrialBalanceRequest", "ProfitLossRequest", "CashFlowRequest"]
