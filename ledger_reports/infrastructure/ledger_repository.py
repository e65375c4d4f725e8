"""SQLAlchemy-backed repository for general-ledger reads."""

from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from sqlalchemy import Date, bindparam, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql.elements import TextClause

from ledger_reports.application.ports.database import DatabaseEnginePort
from ledger_reports.application.ports.ledger_repository import (
    LedgerQueryError,
    LedgerRepositoryPort,
)
from ledger_reports.domain.constants import DEBIT, POSTED_STATUS
from ledger_reports.domain.models import (
    Account,
    AccountFilter,
    BalanceActivityRow,
    PeriodActivityRow,
)
from ledger_reports.domain.services.balances import signed_balance
from ledger_reports.utils.decimal_utils import coerce_decimal

_POSTED_LINES = """
    FROM gl_journal_lines jl
    JOIN gl_journal j ON jl.journal_id = j.id
    JOIN chart_of_accounts coa ON jl.account_id = coa.id
    WHERE j.tenant_id = :tenant_id
      AND j.company_id = :company_id
      AND UPPER(j.status) = :posted_status
      AND coa.is_active = :active
"""


def _parse_date(value) -> date | None:
    """Return a date from a driver value (date, datetime or ISO string)."""
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value if type(value) is date else value.date()
    return date.fromisoformat(str(value)[:10])


def _dates(query: TextClause, *names: str) -> TextClause:
    return query.bindparams(*(bindparam(name, type_=Date) for name in names))


class SqlAlchemyLedgerRepository(LedgerRepositoryPort):
    """Repository backed by SQLAlchemy for ledger reporting queries."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
        """
        self._db_port = db_port

    def fetch_chart_of_accounts(
        self,
        tenant_id: str,
        company_id: str,
        account_filter: AccountFilter | None = None,
    ) -> list[Account]:
        query, params = self._build_accounts_query(
            tenant_id, company_id, account_filter
        )
        rows = self._execute(query, params, "fetch chart of accounts")
        return [
            Account(
                id=str(row.id),
                number=str(row.account_number),
                name=row.account_name,
                account_type=(row.account_type or "").upper(),
                category=row.account_category or "",
                normal_balance=(row.normal_balance or DEBIT).upper(),
                level=int(row.level or 0),
                parent_id=(
                    str(row.parent_account_id)
                    if row.parent_account_id is not None
                    else None
                ),
                is_header=bool(row.is_header),
            )
            for row in rows
        ]

    def fetch_fiscal_year_start(
        self,
        tenant_id: str,
        company_id: str,
        as_of_date: date,
    ) -> date | None:
        query = _dates(
            text(
                """
                SELECT fiscal_year_start
                FROM fiscal_calendars
                WHERE tenant_id = :tenant_id
                  AND company_id = :company_id
                  AND is_active = :active
                  AND fiscal_year_start <= :as_of_date
                  AND fiscal_year_end >= :as_of_date
                ORDER BY fiscal_year_start DESC
                LIMIT 1
                """
            ),
            "as_of_date",
        )
        params = {
            "tenant_id": tenant_id,
            "company_id": company_id,
            "active": True,
            "as_of_date": as_of_date,
        }
        rows = self._execute(query, params, "fetch fiscal calendar")
        if not rows:
            return None
        return _parse_date(rows[0].fiscal_year_start)

    def fetch_balance_activity(
        self,
        tenant_id: str,
        company_id: str,
        fiscal_year_start: date,
        as_of_date: date,
        account_ids: Sequence[str],
    ) -> list[BalanceActivityRow]:
        if not account_ids:
            return []
        query = _dates(
            text(
                """
                SELECT
                  jl.account_id AS account_id,
                  SUM(CASE WHEN j.journal_date < :fiscal_year_start
                      THEN jl.debit_amount ELSE 0 END) AS opening_debits,
                  SUM(CASE WHEN j.journal_date < :fiscal_year_start
                      THEN jl.credit_amount ELSE 0 END) AS opening_credits,
                  SUM(CASE WHEN j.journal_date >= :fiscal_year_start
                      THEN jl.debit_amount ELSE 0 END) AS period_debits,
                  SUM(CASE WHEN j.journal_date >= :fiscal_year_start
                      THEN jl.credit_amount ELSE 0 END) AS period_credits,
                  MIN(j.journal_date) AS oldest_transaction,
                  MAX(j.journal_date) AS newest_transaction
                """
                + _POSTED_LINES
                + """
                  AND j.journal_date <= :as_of_date
                  AND jl.account_id IN :account_ids
                GROUP BY jl.account_id
                ORDER BY jl.account_id
                """
            ),
            "fiscal_year_start",
            "as_of_date",
        ).bindparams(bindparam("account_ids", expanding=True))
        params = {
            "tenant_id": tenant_id,
            "company_id": company_id,
            "posted_status": POSTED_STATUS,
            "active": True,
            "fiscal_year_start": fiscal_year_start,
            "as_of_date": as_of_date,
            "account_ids": list(account_ids),
        }
        rows = self._execute(query, params, "calculate account balances")
        return [
            BalanceActivityRow(
                account_id=str(row.account_id),
                opening_debits=coerce_decimal(row.opening_debits),
                opening_credits=coerce_decimal(row.opening_credits),
                period_debits=coerce_decimal(row.period_debits),
                period_credits=coerce_decimal(row.period_credits),
                oldest_transaction=_parse_date(row.oldest_transaction),
                newest_transaction=_parse_date(row.newest_transaction),
            )
            for row in rows
        ]

    def fetch_period_activity(
        self,
        tenant_id: str,
        company_id: str,
        start_date: date,
        end_date: date,
        account_types: Sequence[str] = (),
        categories: Sequence[str] = (),
    ) -> list[PeriodActivityRow]:
        scope, expanding = self._build_scope_clause(account_types, categories)
        query = _dates(
            text(
                """
                SELECT
                  jl.account_id AS account_id,
                  coa.account_type AS account_type,
                  coa.account_category AS account_category,
                  coa.normal_balance AS normal_balance,
                  SUM(jl.debit_amount) AS total_debits,
                  SUM(jl.credit_amount) AS total_credits
                """
                + _POSTED_LINES
                + """
                  AND j.journal_date >= :start_date
                  AND j.journal_date <= :end_date
                """
                + scope
                + """
                GROUP BY jl.account_id, coa.account_type,
                         coa.account_category, coa.normal_balance
                ORDER BY jl.account_id
                """
            ),
            "start_date",
            "end_date",
        )
        if expanding:
            query = query.bindparams(
                *(bindparam(name, expanding=True) for name in expanding)
            )
        params = {
            "tenant_id": tenant_id,
            "company_id": company_id,
            "posted_status": POSTED_STATUS,
            "active": True,
            "start_date": start_date,
            "end_date": end_date,
        }
        if account_types:
            params["account_types"] = [item.upper() for item in account_types]
        if categories:
            params["categories"] = [item.upper() for item in categories]
        rows = self._execute(query, params, "fetch period activity")
        return [
            PeriodActivityRow(
                account_id=str(row.account_id),
                account_type=(row.account_type or "").upper(),
                account_category=row.account_category or "",
                normal_balance=(row.normal_balance or DEBIT).upper(),
                total_debits=coerce_decimal(row.total_debits),
                total_credits=coerce_decimal(row.total_credits),
            )
            for row in rows
        ]

    def fetch_cash_balance(
        self,
        tenant_id: str,
        company_id: str,
        as_of_date: date,
        inclusive: bool,
        categories: Sequence[str],
    ) -> Decimal:
        if not categories:
            return Decimal("0")
        operator = "<=" if inclusive else "<"
        query = (
            _dates(
                text(
                    """
                    SELECT
                      coa.normal_balance AS normal_balance,
                      SUM(jl.debit_amount) AS total_debits,
                      SUM(jl.credit_amount) AS total_credits
                    """
                    + _POSTED_LINES
                    + f"""
                      AND j.journal_date {operator} :as_of_date
                      AND UPPER(coa.account_category) IN :categories
                    GROUP BY coa.normal_balance
                    """
                ),
                "as_of_date",
            ).bindparams(bindparam("categories", expanding=True))
        )
        params = {
            "tenant_id": tenant_id,
            "company_id": company_id,
            "posted_status": POSTED_STATUS,
            "active": True,
            "as_of_date": as_of_date,
            "categories": [item.upper() for item in categories],
        }
        rows = self._execute(query, params, "calculate cash balance")
        return sum(
            (
                signed_balance(
                    row.normal_balance, row.total_debits, row.total_credits
                )
                for row in rows
            ),
            Decimal("0"),
        )

    def _execute(self, query, params: dict, action: str) -> list:
        """Run a query and wrap driver errors with context.

        Raises:
            LedgerQueryError: If SQLAlchemy reports an error.
        """
        try:
            engine = self._db_port.get_ledger_engine()
            with engine.connect() as conn:
                return conn.execute(query, params).all()
        except SQLAlchemyError as exc:
            raise LedgerQueryError(f"Failed to {action}: {exc}") from exc

    @staticmethod
    def _build_accounts_query(
        tenant_id: str,
        company_id: str,
        account_filter: AccountFilter | None,
    ) -> tuple[TextClause, dict]:
        sql = """
            SELECT id, account_number, account_name, account_type,
                   account_category, parent_account_id, level, is_header,
                   normal_balance
            FROM chart_of_accounts
            WHERE tenant_id = :tenant_id
              AND company_id = :company_id
              AND is_active = :active
        """
        params: dict = {
            "tenant_id": tenant_id,
            "company_id": company_id,
            "active": True,
        }
        expanding: list[str] = []
        if account_filter is not None:
            if account_filter.account_types:
                sql += " AND UPPER(account_type) IN :account_types"
                params["account_types"] = [
                    item.upper() for item in account_filter.account_types
                ]
                expanding.append("account_types")
            if account_filter.account_ids:
                sql += " AND id IN :account_ids"
                params["account_ids"] = list(account_filter.account_ids)
                expanding.append("account_ids")
            if account_filter.account_number_range is not None:
                sql += (
                    " AND account_number BETWEEN :number_from AND :number_to"
                )
                params["number_from"] = account_filter.account_number_range.start
                params["number_to"] = account_filter.account_number_range.end
        sql += " ORDER BY account_number"
        query = text(sql)
        if expanding:
            query = query.bindparams(
                *(bindparam(name, expanding=True) for name in expanding)
            )
        return query, params

    @staticmethod
    def _build_scope_clause(
        account_types: Sequence[str],
        categories: Sequence[str],
    ) -> tuple[str, list[str]]:
        """Return the account scope predicate and its expanding params."""
        if account_types and categories:
            return (
                " AND (UPPER(coa.account_type) IN :account_types"
                " OR UPPER(coa.account_category) IN :categories)",
                ["account_types", "categories"],
            )
        if account_types:
            return (
                " AND UPPER(coa.account_type) IN :account_types",
                ["account_types"],
            )
        if categories:
            return (
                " AND UPPER(coa.account_category) IN :categories",
                ["categories"],
            )
        return "", []


__all__ = ["SqlAlchemyLedgerRepository"]
