"""Domain models package."""

from .accounts import Account, AccountFilter, AccountNumberRange
from .ledger_rows import (
    AccountActivity,
    BalanceActivityRow,
    FiscalCalendar,
    Journal,
    JournalLine,
    PeriodActivityRow,
)
from .requests import CashFlowRequest, ProfitLossRequest, TrialBalanceRequest
from .results import ReportFailure
from .statements import (
    CashFlowMetrics,
    CashFlowReconciliation,
    CashFlowReport,
    CashFlowSectionType,
    ProfitLossMetrics,
    ProfitLossReport,
    ProfitLossSectionType,
    ReconciliationAdjustment,
    ReportPeriod,
    StatementLine,
    StatementMetadata,
    StatementSection,
    WorkingCapitalChange,
)
from .trial_balance import (
    AccountBalanceSnapshot,
    TrialBalanceMetadata,
    TrialBalanceReport,
    TrialBalanceTotals,
)

__all__ = [
    "Account",
    "AccountFilter",
    "AccountNumberRange",
    "AccountActivity",
    "BalanceActivityRow",
    "FiscalCalendar",
    "Journal",
    "JournalLine",
    "PeriodActivityRow",
    "CashFlowRequest",
    "ProfitLossRequest",
    "TrialBalanceRequest",
    "ReportFailure",
    "CashFlowMetrics",
    "CashFlowReconciliation",
    "CashFlowReport",
    "CashFlowSectionType",
    "ProfitLossMetrics",
    "ProfitLossReport",
    "ProfitLossSectionType",
    "ReconciliationAdjustment",
    "ReportPeriod",
    "StatementLine",
    "StatementMetadata",
    "StatementSection",
    "WorkingCapitalChange",
    "AccountBalanceSnapshot",
    "TrialBalanceMetadata",
    "TrialBalanceReport",
    "TrialBalanceTotals",
]
