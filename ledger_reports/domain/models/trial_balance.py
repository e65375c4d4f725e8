"""Domain models for trial balance reports."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from ledger_reports.domain.models.accounts import Account


@dataclass(frozen=True)
class AccountBalanceSnapshot:
    """Opening, period and closing balances of one account.

    Balances are signed by the account's normal balance side. Period columns
    are None when the request did not ask for period activity.
    """

    account: Account
    opening_balance: Decimal
    period_debits: Decimal | None
    period_credits: Decimal | None
    closing_balance: Decimal
    currency: str

    @property
    def account_id(self) -> str:
        return self.account.id

    @property
    def account_number(self) -> str:
        return self.account.number

    @property
    def account_name(self) -> str:
        return self.account.name

    @property
    def account_type(self) -> str:
        return self.account.account_type

    @property
    def account_category(self) -> str:
        return self.account.category

    @property
    def normal_balance(self) -> str:
        return self.account.normal_balance

    @property
    def has_activity(self) -> bool:
        """Return True when the account moved or carries a balance."""
        return (
            bool(self.period_debits)
            or bool(self.period_credits)
            or self.closing_balance != 0
        )


@dataclass(frozen=True)
class TrialBalanceTotals:
    """Aggregate totals of a trial balance, rounded to cents."""

    total_debits: Decimal
    total_credits: Decimal
    total_assets: Decimal
    total_liabilities: Decimal
    total_equity: Decimal
    total_revenue: Decimal
    total_expenses: Decimal
    net_income: Decimal


@dataclass(frozen=True)
class TrialBalanceMetadata:
    """Descriptive figures about a generated trial balance."""

    total_accounts: int
    accounts_with_activity: int
    fiscal_year_start: date
    oldest_transaction: date | None = None
    newest_transaction: date | None = None


@dataclass(frozen=True)
class TrialBalanceReport:
    """Point-in-time snapshot of every selected account."""

    as_of_date: date
    generated_at: datetime
    currency: str
    accounts: tuple[AccountBalanceSnapshot, ...]
    totals: TrialBalanceTotals
    is_balanced: bool
    metadata: TrialBalanceMetadata

    @property
    def success(self) -> bool:
        return True


__all__ = [
    "AccountBalanceSnapshot",
    "TrialBalanceTotals",
    "TrialBalanceMetadata",
    "TrialBalanceReport",
]
