"""Domain models for chart-of-accounts reference data."""

from dataclasses import dataclass

from ledger_reports.domain.constants import DEBIT


@dataclass(frozen=True)
class Account:
    """Ledger account as read from the chart of accounts.

    Attributes:
        id: Account identifier.
        number: Human account number used for ordering.
        name: Display name.
        account_type: One of ASSET, LIABILITY, EQUITY, REVENUE, EXPENSE.
        category: Free-form classification tag (e.g. CASH, ACCOUNTS_PAYABLE).
        normal_balance: DEBIT or CREDIT.
        level: Depth in the account hierarchy.
        parent_id: Parent account identifier, if any.
        is_header: True for grouping accounts that carry no postings.
    """

    id: str
    number: str
    name: str
    account_type: str
    category: str = ""
    normal_balance: str = DEBIT
    level: int = 0
    parent_id: str | None = None
    is_header: bool = False

    @property
    def is_debit_normal(self) -> bool:
        """Return True when the account increases on the debit side."""
        return self.normal_balance.upper() == DEBIT


@dataclass(frozen=True)
class AccountNumberRange:
    """Inclusive range of account numbers."""

    start: str
    end: str


@dataclass(frozen=True)
class AccountFilter:
    """Optional restrictions applied to the chart of accounts."""

    account_types: tuple[str, ...] = ()
    account_ids: tuple[str, ...] = ()
    account_number_range: AccountNumberRange | None = None


__all__ = ["Account", "AccountFilter", "AccountNumberRange"]
