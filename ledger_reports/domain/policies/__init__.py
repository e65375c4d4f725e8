"""Domain policies package."""

from .adjustments import (
    AdjustmentCategory,
    KeywordClassifier,
    KeywordRule,
    NonCashAdjustmentClassifier,
    WorkingCapitalClassifier,
    WorkingCapitalItem,
    default_non_cash_classifier,
    default_working_capital_classifier,
)
from .classification import (
    DEFAULT_CASH_FLOW_CLASSIFICATION,
    DEFAULT_PROFIT_LOSS_CLASSIFICATION,
    CashFlowClassification,
    ProfitLossClassification,
)
from .tax import FlatRateIncomeTaxPolicy, IncomeTaxPolicy, NoIncomeTaxPolicy

__all__ = [
    "AdjustmentCategory",
    "KeywordClassifier",
    "KeywordRule",
    "NonCashAdjustmentClassifier",
    "WorkingCapitalClassifier",
    "WorkingCapitalItem",
    "default_non_cash_classifier",
    "default_working_capital_classifier",
    "DEFAULT_CASH_FLOW_CLASSIFICATION",
    "DEFAULT_PROFIT_LOSS_CLASSIFICATION",
    "CashFlowClassification",
    "ProfitLossClassification",
    "FlatRateIncomeTaxPolicy",
    "IncomeTaxPolicy",
    "NoIncomeTaxPolicy",
]
