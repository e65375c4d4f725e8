"""Application use cases package."""

from .aggregate_ledger import ActivityAggregation, LedgerAggregator
from .export_trial_balance import (
    ExportTrialBalanceUseCase,
    export_trial_balance,
)
from .get_cash_flow import GetCashFlowUseCase
from .get_profit_loss import GetProfitLossUseCase
from .get_trial_balance import GetTrialBalanceUseCase

__all__ = [
    "ActivityAggregation",
    "LedgerAggregator",
    "ExportTrialBalanceUseCase",
    "export_trial_balance",
    "GetCashFlowUseCase",
    "GetProfitLossUseCase",
    "GetTrialBalanceUseCase",
]
