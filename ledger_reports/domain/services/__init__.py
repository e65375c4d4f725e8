"""Domain services package."""

from .balances import (
    build_snapshot,
    compute_trial_balance_totals,
    is_balanced,
    is_zero_snapshot,
    oriented_amount,
    resolve_fiscal_year_start,
    signed_balance,
)
from .cash_flow import (
    CashBalances,
    build_cash_flow_sections,
    build_reconciliation,
    compute_cash_flow_metrics,
)
from .ledger import (
    build_activity_map,
    compute_cash_balance,
    summarize_balance_activity,
    summarize_period_activity,
)
from .profit_loss import (
    build_profit_loss_sections,
    collect_profit_loss_accounts,
    compute_profit_loss_metrics,
)
from .validation import (
    validate_cash_flow_request,
    validate_profit_loss_request,
    validate_trial_balance_request,
)
from .variance import compute_variance, compute_variance_percent, percent_of

__all__ = [
    "build_snapshot",
    "compute_trial_balance_totals",
    "is_balanced",
    "is_zero_snapshot",
    "oriented_amount",
    "resolve_fiscal_year_start",
    "signed_balance",
    "CashBalances",
    "build_cash_flow_sections",
    "build_reconciliation",
    "compute_cash_flow_metrics",
    "build_activity_map",
    "compute_cash_balance",
    "summarize_balance_activity",
    "summarize_period_activity",
    "build_profit_loss_sections",
    "collect_profit_loss_accounts",
    "compute_profit_loss_metrics",
    "validate_cash_flow_request",
    "validate_profit_loss_request",
    "validate_trial_balance_request",
    "compute_variance",
    "compute_variance_percent",
    "percent_of",
]
