"""In-memory ledger repository loaded from a JSON document.

The document mirrors the relational tables::

    {
      "accounts": [{"id", "tenant_id", "company_id", "account_number",
                    "account_name", "account_type", "account_category",
                    "normal_balance", "level", "parent_account_id",
                    "is_header", "is_active"}],
      "journals": [{"id", "tenant_id", "company_id", "journal_date",
                    "status", "lines": [{"account_id", "debit_amount",
                                         "credit_amount"}]}],
      "fiscal_calendars": [{"tenant_id", "company_id", "fiscal_year_start",
                            "fiscal_year_end", "is_active"}]
    }

Inactive accounts are dropped on load, so their postings never reach an
aggregate. The SQL repository applies the same rule in its joins.
"""

from collections.abc import Sequence
from datetime import date
from decimal import Decimal
import json
from pathlib import Path
import threading

from ledger_reports.application.ports.ledger_repository import (
    LedgerQueryError,
    LedgerRepositoryPort,
)
from ledger_reports.domain.constants import DEBIT, POSTED_STATUS
from ledger_reports.domain.models import (
    Account,
    AccountFilter,
    BalanceActivityRow,
    FiscalCalendar,
    Journal,
    JournalLine,
    PeriodActivityRow,
)
from ledger_reports.domain.services.ledger import (
    compute_cash_balance,
    summarize_balance_activity,
    summarize_period_activity,
)
from ledger_reports.infrastructure.logging.logger import get_app_logger
from ledger_reports.utils.decimal_utils import coerce_decimal


def _coerce_date(raw_value) -> date:
    if isinstance(raw_value, date):
        return raw_value
    return date.fromisoformat(str(raw_value)[:10])


class LedgerDocument:
    """Parsed ledger records grouped by tenant and company."""

    def __init__(
        self,
        accounts: dict[tuple[str, str], list[Account]],
        journals: list[Journal],
        calendars: list[FiscalCalendar],
    ) -> None:
        self.accounts = accounts
        self.journals = journals
        self.calendars = calendars

    @classmethod
    def from_dict(cls, payload: dict) -> "LedgerDocument":
        """Build records from a decoded JSON document.

        Raises:
            KeyError, ValueError, TypeError: If a record is malformed.
        """
        accounts: dict[tuple[str, str], list[Account]] = {}
        for raw in payload.get("accounts", []):
            if not raw.get("is_active", True):
                continue
            key = (str(raw["tenant_id"]), str(raw["company_id"]))
            parent = raw.get("parent_account_id")
            accounts.setdefault(key, []).append(
                Account(
                    id=str(raw["id"]),
                    number=str(raw["account_number"]),
                    name=raw.get("account_name", ""),
                    account_type=str(raw["account_type"]).upper(),
                    category=raw.get("account_category") or "",
                    normal_balance=str(
                        raw.get("normal_balance") or DEBIT
                    ).upper(),
                    level=int(raw.get("level") or 0),
                    parent_id=str(parent) if parent is not None else None,
                    is_header=bool(raw.get("is_header", False)),
                )
            )
        for items in accounts.values():
            items.sort(key=lambda account: account.number)

        journals = [
            Journal(
                id=str(raw["id"]),
                tenant_id=str(raw["tenant_id"]),
                company_id=str(raw["company_id"]),
                journal_date=_coerce_date(raw["journal_date"]),
                status=str(raw.get("status") or POSTED_STATUS),
                lines=tuple(
                    JournalLine(
                        account_id=str(line["account_id"]),
                        debit_amount=coerce_decimal(line.get("debit_amount")),
                        credit_amount=coerce_decimal(
                            line.get("credit_amount")
                        ),
                    )
                    for line in raw.get("lines", [])
                ),
            )
            for raw in payload.get("journals", [])
        ]
        calendars = [
            FiscalCalendar(
                tenant_id=str(raw["tenant_id"]),
                company_id=str(raw["company_id"]),
                fiscal_year_start=_coerce_date(raw["fiscal_year_start"]),
                fiscal_year_end=_coerce_date(raw["fiscal_year_end"]),
                is_active=bool(raw.get("is_active", True)),
            )
            for raw in payload.get("fiscal_calendars", [])
        ]
        return cls(accounts, journals, calendars)


class InMemoryLedgerRepository(LedgerRepositoryPort):
    """Repository answering ledger queries from an in-memory document."""

    def __init__(
        self,
        ledger_path: Path | str | None = None,
        logger=None,
        document: LedgerDocument | None = None,
    ) -> None:
        """Initialize the repository.

        Args:
            ledger_path: JSON ledger file, read on first use.
            logger: Optional logger compatible with logging.Logger-like API.
            document: Already parsed records (takes precedence over a path).
        """
        if ledger_path is None and document is None:
            raise ValueError("A ledger path or document is required")
        self._ledger_path = Path(ledger_path) if ledger_path else None
        self._logger = logger or get_app_logger()
        self._document = document
        self._lock = threading.Lock()

    @classmethod
    def from_dict(cls, payload: dict, logger=None) -> "InMemoryLedgerRepository":
        return cls(document=LedgerDocument.from_dict(payload), logger=logger)

    def _load(self) -> LedgerDocument:
        with self._lock:
            if self._document is not None:
                return self._document
            try:
                payload = json.loads(
                    self._ledger_path.read_text(encoding="utf-8")
                )
                self._document = LedgerDocument.from_dict(payload)
            except (OSError, ValueError, KeyError, TypeError) as exc:
                raise LedgerQueryError(
                    f"Failed to load ledger file {self._ledger_path}: {exc}"
                ) from exc
            self._logger.info(
                f"Loaded {len(self._document.journals)} journals from "
                f"{self._ledger_path}"
            )
            return self._document

    def _accounts(self, tenant_id: str, company_id: str) -> list[Account]:
        return self._load().accounts.get((tenant_id, company_id), [])

    def _accounts_by_id(
        self,
        tenant_id: str,
        company_id: str,
    ) -> dict[str, Account]:
        return {
            account.id: account
            for account in self._accounts(tenant_id, company_id)
        }

    def fetch_chart_of_accounts(
        self,
        tenant_id: str,
        company_id: str,
        account_filter: AccountFilter | None = None,
    ) -> list[Account]:
        accounts = self._accounts(tenant_id, company_id)
        if account_filter is None:
            return list(accounts)
        types = {item.upper() for item in account_filter.account_types}
        ids = set(account_filter.account_ids)
        number_range = account_filter.account_number_range
        return [
            account
            for account in accounts
            if (not types or account.account_type in types)
            and (not ids or account.id in ids)
            and (
                number_range is None
                or number_range.start <= account.number <= number_range.end
            )
        ]

    def fetch_fiscal_year_start(
        self,
        tenant_id: str,
        company_id: str,
        as_of_date: date,
    ) -> date | None:
        starts = [
            calendar.fiscal_year_start
            for calendar in self._load().calendars
            if calendar.tenant_id == tenant_id
            and calendar.company_id == company_id
            and calendar.is_active
            and calendar.fiscal_year_start
            <= as_of_date
            <= calendar.fiscal_year_end
        ]
        return max(starts) if starts else None

    def fetch_balance_activity(
        self,
        tenant_id: str,
        company_id: str,
        fiscal_year_start: date,
        as_of_date: date,
        account_ids: Sequence[str],
    ) -> list[BalanceActivityRow]:
        active = self._accounts_by_id(tenant_id, company_id)
        return summarize_balance_activity(
            self._load().journals,
            tenant_id=tenant_id,
            company_id=company_id,
            fiscal_year_start=fiscal_year_start,
            as_of_date=as_of_date,
            account_ids=[item for item in account_ids if item in active],
        )

    def fetch_period_activity(
        self,
        tenant_id: str,
        company_id: str,
        start_date: date,
        end_date: date,
        account_types: Sequence[str] = (),
        categories: Sequence[str] = (),
    ) -> list[PeriodActivityRow]:
        return summarize_period_activity(
            self._load().journals,
            self._accounts_by_id(tenant_id, company_id),
            tenant_id=tenant_id,
            company_id=company_id,
            start_date=start_date,
            end_date=end_date,
            account_types=account_types,
            categories=categories,
        )

    def fetch_cash_balance(
        self,
        tenant_id: str,
        company_id: str,
        as_of_date: date,
        inclusive: bool,
        categories: Sequence[str],
    ) -> Decimal:
        return compute_cash_balance(
            self._load().journals,
            self._accounts_by_id(tenant_id, company_id),
            tenant_id=tenant_id,
            company_id=company_id,
            as_of_date=as_of_date,
            inclusive=inclusive,
            categories=categories,
        )


__all__ = ["InMemoryLedgerRepository", "LedgerDocument"]
