"""Domain package for ledger report rules and core models."""

from .constants import (
    ACCOUNT_TYPES,
    CASH_CATEGORIES,
    DEFAULT_CURRENCY,
    PROFIT_LOSS_ACCOUNT_TYPES,
)
from .models import (
    Account,
    AccountBalanceSnapshot,
    AccountFilter,
    CashFlowReport,
    ProfitLossReport,
    ReportFailure,
    TrialBalanceReport,
)
from .policies import (
    DEFAULT_CASH_FLOW_CLASSIFICATION,
    DEFAULT_PROFIT_LOSS_CLASSIFICATION,
    NoIncomeTaxPolicy,
)
from .services import (
    build_activity_map,
    compute_trial_balance_totals,
    compute_variance_percent,
    signed_balance,
)

__all__ = [
    "ACCOUNT_TYPES",
    "CASH_CATEGORIES",
    "DEFAULT_CURRENCY",
    "PROFIT_LOSS_ACCOUNT_TYPES",
    "Account",
    "AccountBalanceSnapshot",
    "AccountFilter",
    "CashFlowReport",
    "ProfitLossReport",
    "ReportFailure",
    "TrialBalanceReport",
    "DEFAULT_CASH_FLOW_CLASSIFICATION",
    "DEFAULT_PROFIT_LOSS_CLASSIFICATION",
    "NoIncomeTaxPolicy",
    "build_activity_map",
    "compute_trial_balance_totals",
    "compute_variance_percent",
    "signed_balance",
]
