"""Domain constants for ledger reporting."""

from decimal import Decimal

ASSET = "ASSET"
LIABILITY = "LIABILITY"
EQUITY = "EQUITY"
REVENUE = "REVENUE"
EXPENSE = "EXPENSE"

ACCOUNT_TYPES = (ASSET, LIABILITY, EQUITY, REVENUE, EXPENSE)
PROFIT_LOSS_ACCOUNT_TYPES = (REVENUE, EXPENSE)

DEBIT = "DEBIT"
CREDIT = "CREDIT"

POSTED_STATUS = "POSTED"

CASH_CATEGORIES = ("CASH", "CASH_EQUIVALENTS")

# Rounding noise allowed between debit and credit totals.
BALANCE_TOLERANCE = Decimal("0.01")

DEFAULT_CURRENCY = "MYR"

PROFIT_LOSS_REPORT_FORMATS = (
    "STANDARD",
    "COMPARATIVE",
    "MULTI_PERIOD",
    "DEPARTMENTAL",
)
CASH_FLOW_REPORT_FORMATS = ("STANDARD", "COMPARATIVE")
CASH_FLOW_METHODS = ("DIRECT", "INDIRECT")

DEFAULT_REPORT_FORMAT = "STANDARD"
DEFAULT_CASH_FLOW_METHOD = "INDIRECT"


__all__ = [
    "ASSET",
    "LIABILITY",
    "EQUITY",
    "REVENUE",
    "EXPENSE",
    "ACCOUNT_TYPES",
    "PROFIT_LOSS_ACCOUNT_TYPES",
    "DEBIT",
    "CREDIT",
    "POSTED_STATUS",
    "CASH_CATEGORIES",
    "BALANCE_TOLERANCE",
    "DEFAULT_CURRENCY",
    "PROFIT_LOSS_REPORT_FORMATS",
    "CASH_FLOW_REPORT_FORMATS",
    "CASH_FLOW_METHODS",
    "DEFAULT_REPORT_FORMAT",
    "DEFAULT_CASH_FLOW_METHOD",
]
