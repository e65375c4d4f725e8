"""Application port for general-ledger reads."""

from collections.abc import Sequence
from datetime import date
from decimal import Decimal
from typing import Protocol

from ledger_reports.domain.models import (
    Account,
    AccountFilter,
    BalanceActivityRow,
    PeriodActivityRow,
)


class LedgerQueryError(RuntimeError):
    """Raised when a ledger query cannot be executed."""


class LedgerRepositoryPort(Protocol):
    """Port exposing read access to accounts and posted journal lines.

    Every method is scoped to one tenant and company and only reads journals
    whose status is POSTED. Implementations raise ``LedgerQueryError`` when
    the underlying store fails.
    """

    def fetch_chart_of_accounts(
        self,
        tenant_id: str,
        company_id: str,
        account_filter: AccountFilter | None = None,
    ) -> list[Account]:
        """Return active accounts matching the filter, ordered by number."""

    def fetch_fiscal_year_start(
        self,
        tenant_id: str,
        company_id: str,
        as_of_date: date,
    ) -> date | None:
        """Return the start of the fiscal year containing as_of_date."""

    def fetch_balance_activity(
        self,
        tenant_id: str,
        company_id: str,
        fiscal_year_start: date,
        as_of_date: date,
        account_ids: Sequence[str],
    ) -> list[BalanceActivityRow]:
        """Return opening and period sums per account in one query."""

    def fetch_period_activity(
        self,
        tenant_id: str,
        company_id: str,
        start_date: date,
        end_date: date,
        account_types: Sequence[str] = (),
        categories: Sequence[str] = (),
    ) -> list[PeriodActivityRow]:
        """Return debit and credit totals per account within [start, end]."""

    def fetch_cash_balance(
        self,
        tenant_id: str,
        company_id: str,
        as_of_date: date,
        inclusive: bool,
        categories: Sequence[str],
    ) -> Decimal:
        """Return the cumulative balance of accounts in the cash categories."""


__all__ = ["LedgerRepositoryPort", "LedgerQueryError"]
