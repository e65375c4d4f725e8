"""Tests for the SQLAlchemy ledger repository against SQLite."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from sqlalchemy import (
    Boolean,
    Column,
    Date,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    create_engine,
)

from ledger_reports.application.ports.ledger_repository import (
    LedgerQueryError,
)
from ledger_reports.application.use_cases.get_profit_loss import (
    GetProfitLossUseCase,
)
from ledger_reports.application.use_cases.get_trial_balance import (
    GetTrialBalanceUseCase,
)
from ledger_reports.domain.models import (
    AccountFilter,
    AccountNumberRange,
    ProfitLossRequest,
    TrialBalanceRequest,
)
from ledger_reports.infrastructure.ledger_repository import (
    SqlAlchemyLedgerRepository,
)
from ledger_reports.infrastructure.memory_ledger_repository import (
    InMemoryLedgerRepository,
)

metadata = MetaData()

chart_of_accounts = Table(
    "chart_of_accounts",
    metadata,
    Column("id", String, primary_key=True),
    Column("tenant_id", String),
    Column("company_id", String),
    Column("account_number", String),
    Column("account_name", String),
    Column("account_type", String),
    Column("account_category", String),
    Column("parent_account_id", String, nullable=True),
    Column("level", Integer),
    Column("is_header", Boolean),
    Column("normal_balance", String),
    Column("is_active", Boolean),
)
gl_journal = Table(
    "gl_journal",
    metadata,
    Column("id", String, primary_key=True),
    Column("tenant_id", String),
    Column("company_id", String),
    Column("journal_date", Date),
    Column("status", String),
)
gl_journal_lines = Table(
    "gl_journal_lines",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("journal_id", String),
    Column("account_id", String),
    Column("debit_amount", Numeric(18, 2)),
    Column("credit_amount", Numeric(18, 2)),
)
fiscal_calendars = Table(
    "fiscal_calendars",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("tenant_id", String),
    Column("company_id", String),
    Column("fiscal_year_start", Date),
    Column("fiscal_year_end", Date),
    Column("is_active", Boolean),
)


class _DbPort:
    def __init__(self, engine) -> None:
        self._engine = engine

    def get_ledger_engine(self):
        return self._engine


def _amount(value) -> Decimal:
    return Decimal(str(value or 0))


def _load(engine, payload: dict) -> None:
    metadata.create_all(engine)
    with engine.begin() as conn:
        conn.execute(
            chart_of_accounts.insert(),
            [
                {
                    "id": raw["id"],
                    "tenant_id": raw["tenant_id"],
                    "company_id": raw["company_id"],
                    "account_number": raw["account_number"],
                    "account_name": raw["account_name"],
                    "account_type": raw["account_type"],
                    "account_category": raw["account_category"],
                    "parent_account_id": None,
                    "level": 0,
                    "is_header": False,
                    "normal_balance": raw["normal_balance"],
                    "is_active": raw["is_active"],
                }
                for raw in payload["accounts"]
            ],
        )
        conn.execute(
            gl_journal.insert(),
            [
                {
                    "id": raw["id"],
                    "tenant_id": raw["tenant_id"],
                    "company_id": raw["company_id"],
                    "journal_date": date.fromisoformat(raw["journal_date"]),
                    "status": raw["status"],
                }
                for raw in payload["journals"]
            ],
        )
        conn.execute(
            gl_journal_lines.insert(),
            [
                {
                    "journal_id": raw["id"],
                    "account_id": line["account_id"],
                    "debit_amount": _amount(line.get("debit_amount")),
                    "credit_amount": _amount(line.get("credit_amount")),
                }
                for raw in payload["journals"]
                for line in raw["lines"]
            ],
        )
        conn.execute(
            fiscal_calendars.insert(),
            [
                {
                    "tenant_id": raw["tenant_id"],
                    "company_id": raw["company_id"],
                    "fiscal_year_start": date.fromisoformat(
                        raw["fiscal_year_start"]
                    ),
                    "fiscal_year_end": date.fromisoformat(
                        raw["fiscal_year_end"]
                    ),
                    "is_active": raw["is_active"],
                }
                for raw in payload["fiscal_calendars"]
            ],
        )


@pytest.fixture
def sql_repository_for(tmp_path):
    """Build SQL repositories over SQLite copies of a ledger payload."""
    engines = []

    def _build(payload: dict) -> SqlAlchemyLedgerRepository:
        path = tmp_path / f"ledger_{len(engines)}.db"
        engine = create_engine(f"sqlite:///{path}", future=True)
        engines.append(engine)
        _load(engine, payload)
        return SqlAlchemyLedgerRepository(_DbPort(engine))

    yield _build
    for engine in engines:
        engine.dispose()


@pytest.fixture
def sql_repository(sql_repository_for, sample_ledger):
    return sql_repository_for(sample_ledger)


def test_chart_of_accounts_matches_memory_backend(
    sql_repository, sample_repository
) -> None:
    """Both backends return the same active accounts in number order."""
    sql_accounts = sql_repository.fetch_chart_of_accounts("t1", "c1")

    assert sql_accounts == sample_repository.fetch_chart_of_accounts("t1", "c1")
    assert [account.id for account in sql_accounts][:2] == ["cash", "ar"]
    assert "old" not in {account.id for account in sql_accounts}


def test_chart_of_accounts_filters(sql_repository) -> None:
    """Type, id and number range filters are applied in SQL."""
    accounts = sql_repository.fetch_chart_of_accounts(
        "t1",
        "c1",
        AccountFilter(
            account_types=("expense", "revenue"),
            account_ids=("sales", "cogs", "cash"),
            account_number_range=AccountNumberRange("1000", "4500"),
        ),
    )

    assert [account.id for account in accounts] == ["sales"]


def test_fiscal_year_start(sql_repository) -> None:
    """The active calendar containing the date is used."""
    assert sql_repository.fetch_fiscal_year_start(
        "t1", "c1", date(2024, 5, 1)
    ) == date(2024, 1, 1)
    assert sql_repository.fetch_fiscal_year_start(
        "t1", "c1", date(2025, 5, 1)
    ) is None


def test_balance_activity_matches_memory_backend(
    sql_repository, sample_repository
) -> None:
    """Opening and period sums agree with the in-memory aggregation."""
    account_ids = [
        account.id
        for account in sample_repository.fetch_chart_of_accounts("t1", "c1")
    ]
    args = ("t1", "c1", date(2024, 4, 1), date(2024, 6, 30), account_ids)

    sql_rows = sql_repository.fetch_balance_activity(*args)

    assert sql_rows == sample_repository.fetch_balance_activity(*args)
    cash = next(row for row in sql_rows if row.account_id == "cash")
    assert cash.opening_debits == Decimal("95000")
    assert cash.period_credits == Decimal("25000")
    assert cash.oldest_transaction == date(2024, 1, 2)
    assert sql_repository.fetch_balance_activity(
        "t1", "c1", date(2024, 1, 1), date(2024, 6, 30), []
    ) == []


@pytest.mark.parametrize(
    ("account_types", "categories"),
    [
        ((), ()),
        (("REVENUE", "EXPENSE"), ()),
        ((), ("CASH",)),
        (("EQUITY",), ("CASH", "CASH_EQUIVALENTS")),
    ],
)
def test_period_activity_matches_memory_backend(
    sql_repository, sample_repository, account_types, categories
) -> None:
    """Scope by type, category or both gives the same rows."""
    args = ("t1", "c1", date(2024, 1, 1), date(2024, 3, 31))

    sql_rows = sql_repository.fetch_period_activity(
        *args, account_types=account_types, categories=categories
    )

    assert sql_rows == sample_repository.fetch_period_activity(
        *args, account_types=account_types, categories=categories
    )
    assert sql_rows


def test_cash_balance_matches_memory_backend(
    sql_repository, sample_repository
) -> None:
    """Inclusive and exclusive cash balances agree."""
    for as_of, inclusive in [
        (date(2024, 1, 2), False),
        (date(2024, 1, 2), True),
        (date(2024, 6, 30), True),
    ]:
        args = ("t1", "c1", as_of, inclusive, ("CASH",))
        assert sql_repository.fetch_cash_balance(
            *args
        ) == sample_repository.fetch_cash_balance(*args)
    assert sql_repository.fetch_cash_balance(
        "t1", "c1", date(2024, 6, 30), True, ()
    ) == Decimal("0")


def test_query_errors_are_wrapped(tmp_path) -> None:
    """Driver errors surface as LedgerQueryError with context."""
    engine = create_engine(f"sqlite:///{tmp_path / 'empty.db'}", future=True)
    repository = SqlAlchemyLedgerRepository(_DbPort(engine))

    with pytest.raises(LedgerQueryError, match="Failed to fetch chart"):
        repository.fetch_chart_of_accounts("t1", "c1")
    engine.dispose()


def test_reports_over_sql_backend(sql_repository, fixed_clock, fixed_today):
    """Use cases run unchanged on the SQL backend."""
    trial_balance = GetTrialBalanceUseCase(
        sql_repository,
        logger=MagicMock(),
        clock=fixed_clock,
        today=fixed_today,
    ).execute(TrialBalanceRequest("t1", "c1", date(2024, 3, 31)))
    profit_loss = GetProfitLossUseCase(
        sql_repository,
        logger=MagicMock(),
        clock=fixed_clock,
        today=fixed_today,
    ).execute(
        ProfitLossRequest("t1", "c1", date(2024, 1, 1), date(2024, 3, 31))
    )

    assert trial_balance.is_balanced
    assert trial_balance.totals.total_debits == Decimal("118000.00")
    assert profit_loss.metrics.operating_income == Decimal("19000.00")


def _with_inactive_postings(payload: dict) -> dict:
    payload["journals"].append(
        {
            "id": "j15",
            "tenant_id": "t1",
            "company_id": "c1",
            "journal_date": "2024-02-01",
            "status": "POSTED",
            "lines": [
                {"account_id": "old", "debit_amount": "700.00"},
                {"account_id": "capital", "credit_amount": "700.00"},
            ],
        }
    )
    return payload


def test_inactive_account_postings_are_ignored_by_both_backends(
    sql_repository_for, sample_ledger
) -> None:
    """Postings to inactive accounts never reach an aggregate."""
    payload = _with_inactive_postings(sample_ledger)
    sql_repository = sql_repository_for(payload)
    memory_repository = InMemoryLedgerRepository.from_dict(
        payload, logger=MagicMock()
    )

    for repository in (sql_repository, memory_repository):
        assert repository.fetch_cash_balance(
            "t1", "c1", date(2024, 6, 30), True, ("CASH",)
        ) == Decimal("92000")
        activity = repository.fetch_period_activity(
            "t1", "c1", date(2024, 1, 1), date(2024, 3, 31),
            categories=("CASH",),
        )
        assert [row.account_id for row in activity] == ["cash"]
        assert repository.fetch_balance_activity(
            "t1", "c1", date(2024, 1, 1), date(2024, 6, 30), ["old"]
        ) == []
    assert sql_repository.fetch_period_activity(
        "t1", "c1", date(2024, 1, 1), date(2024, 3, 31)
    ) == memory_repository.fetch_period_activity(
        "t1", "c1", date(2024, 1, 1), date(2024, 3, 31)
    )


def test_lowercase_types_and_categories_are_matched(
    sql_repository_for, sample_ledger, fixed_clock, fixed_today
) -> None:
    """Stored type and category case does not change the scope filters."""
    for raw in sample_ledger["accounts"]:
        raw["account_type"] = raw["account_type"].lower()
        raw["account_category"] = raw["account_category"].lower()
    sql_repository = sql_repository_for(sample_ledger)
    memory_repository = InMemoryLedgerRepository.from_dict(
        sample_ledger, logger=MagicMock()
    )
    args = ("t1", "c1", date(2024, 1, 1), date(2024, 3, 31))

    activity = sql_repository.fetch_period_activity(
        *args, account_types=("REVENUE", "EXPENSE")
    )
    cash_activity = sql_repository.fetch_period_activity(
        *args, categories=("CASH",)
    )
    profit_loss = GetProfitLossUseCase(
        sql_repository,
        logger=MagicMock(),
        clock=fixed_clock,
        today=fixed_today,
    ).execute(
        ProfitLossRequest("t1", "c1", date(2024, 1, 1), date(2024, 3, 31))
    )

    assert activity == memory_repository.fetch_period_activity(
        *args, account_types=("REVENUE", "EXPENSE")
    )
    assert [row.account_id for row in activity] == [
        "cogs",
        "depr",
        "salaries",
        "sales",
    ]
    assert [row.account_id for row in cash_activity] == ["cash"]
    assert sql_repository.fetch_cash_balance(
        "t1", "c1", date(2024, 3, 31), True, ("CASH",)
    ) == Decimal("67000")
    assert profit_loss.metrics.total_revenue == Decimal("40000.00")
    assert profit_loss.metrics.operating_income == Decimal("19000.00")
