"""Classifiers for indirect-method cash flow reconciliation items.

The default implementations match account names against keyword rules. Any
object with a ``classify(account)`` method can replace them, for example one
reading a metadata tag from the chart of accounts.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from ledger_reports.domain.constants import ASSET, EXPENSE, LIABILITY
from ledger_reports.domain.models.accounts import Account


class AdjustmentCategory(str, Enum):
    """Non-cash items found in net income."""

    DEPRECIATION_AMORTIZATION = "DEPRECIATION_AMORTIZATION"
    DISPOSAL_GAIN = "DISPOSAL_GAIN"
    DISPOSAL_LOSS = "DISPOSAL_LOSS"
    BAD_DEBT = "BAD_DEBT"
    SHARE_BASED_COMPENSATION = "SHARE_BASED_COMPENSATION"


class WorkingCapitalItem(str, Enum):
    """Working-capital lines tracked by the reconciliation."""

    ACCOUNTS_RECEIVABLE = "ACCOUNTS_RECEIVABLE"
    INVENTORY = "INVENTORY"
    PREPAID_EXPENSES = "PREPAID_EXPENSES"
    ACCOUNTS_PAYABLE = "ACCOUNTS_PAYABLE"
    ACCRUED_LIABILITIES = "ACCRUED_LIABILITIES"


class NonCashAdjustmentClassifier(Protocol):
    """Maps an account to the non-cash adjustment it represents."""

    def classify(self, account: Account) -> AdjustmentCategory | None:
        """Return the adjustment category, or None."""


class WorkingCapitalClassifier(Protocol):
    """Maps an account to the working-capital line it belongs to."""

    def classify(self, account: Account) -> WorkingCapitalItem | None:
        """Return the working-capital item, or None."""


@dataclass(frozen=True)
class KeywordRule:
    """Case-insensitive account name rule.

    Attributes:
        result: Value returned when the rule matches.
        any_of: At least one of these substrings must appear (if given).
        all_of: Every one of these substrings must appear (if given).
        account_types: Account types the rule applies to (empty for any).
    """

    result: Enum
    any_of: tuple[str, ...] = ()
    all_of: tuple[str, ...] = ()
    account_types: tuple[str, ...] = ()

    def matches(self, account: Account) -> bool:
        if (
            self.account_types
            and account.account_type.upper() not in self.account_types
        ):
            return False
        name = (account.name or "").lower()
        if self.all_of and not all(word in name for word in self.all_of):
            return False
        if self.any_of and not any(word in name for word in self.any_of):
            return False
        return bool(self.any_of or self.all_of)


class KeywordClassifier:
    """First-match classifier over an ordered list of keyword rules."""

    def __init__(self, rules: tuple[KeywordRule, ...]) -> None:
        self._rules = rules

    def classify(self, account: Account):
        for rule in self._rules:
            if rule.matches(account):
                return rule.result
        return None


DEFAULT_NON_CASH_RULES = (
    KeywordRule(
        AdjustmentCategory.DISPOSAL_GAIN,
        all_of=("gain", "disposal"),
    ),
    KeywordRule(
        AdjustmentCategory.DISPOSAL_LOSS,
        all_of=("loss", "disposal"),
    ),
    KeywordRule(
        AdjustmentCategory.DEPRECIATION_AMORTIZATION,
        any_of=("depreciation", "amortization"),
        account_types=(EXPENSE,),
    ),
    KeywordRule(
        AdjustmentCategory.BAD_DEBT,
        any_of=("bad debt", "doubtful"),
        account_types=(EXPENSE,),
    ),
    KeywordRule(
        AdjustmentCategory.SHARE_BASED_COMPENSATION,
        any_of=("stock", "share-based"),
        account_types=(EXPENSE,),
    ),
)

DEFAULT_WORKING_CAPITAL_RULES = (
    KeywordRule(
        WorkingCapitalItem.ACCOUNTS_RECEIVABLE,
        any_of=("receivable", "debtors"),
        account_types=(ASSET,),
    ),
    KeywordRule(
        WorkingCapitalItem.INVENTORY,
        any_of=("inventory", "stock"),
        account_types=(ASSET,),
    ),
    KeywordRule(
        WorkingCapitalItem.PREPAID_EXPENSES,
        any_of=("prepaid",),
        account_types=(ASSET,),
    ),
    KeywordRule(
        WorkingCapitalItem.ACCOUNTS_PAYABLE,
        any_of=("payable", "creditors"),
        account_types=(LIABILITY,),
    ),
    KeywordRule(
        WorkingCapitalItem.ACCRUED_LIABILITIES,
        any_of=("accrued",),
        account_types=(LIABILITY,),
    ),
)


def default_non_cash_classifier() -> KeywordClassifier:
    return KeywordClassifier(DEFAULT_NON_CASH_RULES)


def default_working_capital_classifier() -> KeywordClassifier:
    return KeywordClassifier(DEFAULT_WORKING_CAPITAL_RULES)


__all__ = [
    "AdjustmentCategory",
    "WorkingCapitalItem",
    "NonCashAdjustmentClassifier",
    "WorkingCapitalClassifier",
    "KeywordRule",
    "KeywordClassifier",
    "DEFAULT_NON_CASH_RULES",
    "DEFAULT_WORKING_CAPITAL_RULES",
    "default_non_cash_classifier",
    "default_working_capital_classifier",
]
