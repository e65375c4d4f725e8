"""Domain models for general-ledger records and aggregated rows."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from ledger_reports.domain.constants import POSTED_STATUS


@dataclass(frozen=True)
class JournalLine:
    """A debit or credit amount posted against one account."""

    account_id: str
    debit_amount: Decimal = Decimal("0")
    credit_amount: Decimal = Decimal("0")


@dataclass(frozen=True)
class Journal:
    """A journal entry with its lines."""

    id: str
    tenant_id: str
    company_id: str
    journal_date: date
    status: str = POSTED_STATUS
    lines: tuple[JournalLine, ...] = field(default_factory=tuple)

    @property
    def is_posted(self) -> bool:
        """Return True when the journal affects official balances."""
        return self.status.strip().upper() == POSTED_STATUS


@dataclass(frozen=True)
class FiscalCalendar:
    """Fiscal year boundaries for a company."""

    tenant_id: str
    company_id: str
    fiscal_year_start: date
    fiscal_year_end: date
    is_active: bool = True


@dataclass(frozen=True)
class BalanceActivityRow:
    """Opening and period sums for an account, relative to a fiscal year.

    Opening sums cover postings strictly before the fiscal-year start; period
    sums cover the fiscal-year start through the as-of date.
    """

    account_id: str
    opening_debits: Decimal
    opening_credits: Decimal
    period_debits: Decimal
    period_credits: Decimal
    oldest_transaction: date | None = None
    newest_transaction: date | None = None


@dataclass(frozen=True)
class PeriodActivityRow:
    """Debit and credit totals for an account inside a date window."""

    account_id: str
    account_type: str
    account_category: str
    normal_balance: str
    total_debits: Decimal
    total_credits: Decimal


@dataclass(frozen=True)
class AccountActivity:
    """Aggregated activity of one account.

    Attributes:
        total_debits: Sum of debit amounts.
        total_credits: Sum of credit amounts.
        net_activity: Activity signed by the normal balance side.
        account_type: Account type carried through from the query.
        account_category: Account category carried through from the query.
    """

    total_debits: Decimal
    total_credits: Decimal
    net_activity: Decimal
    account_type: str = ""
    account_category: str = ""

    @property
    def cash_effect(self) -> Decimal:
        """Return credits minus debits, the movement mirrored in cash."""
        return self.total_credits - self.total_debits


__all__ = [
    "JournalLine",
    "Journal",
    "FiscalCalendar",
    "BalanceActivityRow",
    "PeriodActivityRow",
    "AccountActivity",
]
