"""Shared ledger fixtures.

The sample company buys equipment, sells on credit and for cash, borrows
from a bank and books one month of depreciation in the first quarter, then
trades for cash in the second quarter.
"""

from datetime import date, datetime, timezone
from unittest.mock import MagicMock

import pytest

from ledger_reports.infrastructure.memory_ledger_repository import (
    InMemoryLedgerRepository,
)

TENANT = "t1"
COMPANY = "c1"
TODAY = date(2024, 12, 31)
GENERATED_AT = datetime(2024, 12, 31, 9, 30, tzinfo=timezone.utc)


def _account(account_id, number, name, account_type, category, normal):
    return {
        "id": account_id,
        "tenant_id": TENANT,
        "company_id": COMPANY,
        "account_number": number,
        "account_name": name,
        "account_type": account_type,
        "account_category": category,
        "normal_balance": normal,
        "is_active": True,
    }


def _journal(journal_id, journal_date, debit, credit, amount, **extra):
    journal = {
        "id": journal_id,
        "tenant_id": extra.get("tenant_id", TENANT),
        "company_id": extra.get("company_id", COMPANY),
        "journal_date": journal_date,
        "status": extra.get("status", "POSTED"),
        "lines": [
            {"account_id": debit, "debit_amount": amount, "credit_amount": 0},
            {"account_id": credit, "debit_amount": 0, "credit_amount": amount},
        ],
    }
    return journal


def build_sample_ledger() -> dict:
    accounts = [
        _account("cash", "1000", "Cash at Bank", "ASSET", "CASH", "DEBIT"),
        _account(
            "ar",
            "1100",
            "Accounts Receivable",
            "ASSET",
            "ACCOUNTS_RECEIVABLE",
            "DEBIT",
        ),
        _account(
            "equip",
            "1500",
            "Equipment",
            "ASSET",
            "PROPERTY_PLANT_EQUIPMENT",
            "DEBIT",
        ),
        _account(
            "accum",
            "1510",
            "Accumulated Depreciation",
            "ASSET",
            "ACCUMULATED_DEPRECIATION",
            "CREDIT",
        ),
        _account(
            "ap",
            "2000",
            "Accounts Payable",
            "LIABILITY",
            "ACCOUNTS_PAYABLE",
            "CREDIT",
        ),
        _account("loan", "2500", "Bank Loan", "LIABILITY", "BANK_LOANS", "CREDIT"),
        _account(
            "capital", "3000", "Share Capital", "EQUITY", "SHARE_CAPITAL", "CREDIT"
        ),
        _account(
            "sales", "4000", "Sales Revenue", "REVENUE", "SALES_REVENUE", "CREDIT"
        ),
        _account(
            "cogs",
            "5000",
            "Cost of Goods Sold",
            "EXPENSE",
            "COST_OF_GOODS_SOLD",
            "DEBIT",
        ),
        _account(
            "salaries",
            "6000",
            "Salaries",
            "EXPENSE",
            "ADMINISTRATIVE_EXPENSES",
            "DEBIT",
        ),
        _account(
            "depr",
            "6100",
            "Depreciation Expense",
            "EXPENSE",
            "DEPRECIATION_AMORTIZATION",
            "DEBIT",
        ),
    ]
    inactive = _account(
        "old", "9000", "Closed Account", "ASSET", "CASH", "DEBIT"
    )
    inactive["is_active"] = False
    accounts.append(inactive)

    journals = [
        _journal("j1", "2024-01-02", "cash", "capital", "50000.00"),
        _journal("j2", "2024-01-15", "equip", "cash", "20000.00"),
        _journal("j3", "2024-02-10", "ar", "sales", "30000.00"),
        _journal("j4", "2024-02-20", "cash", "sales", "10000.00"),
        _journal("j5", "2024-03-05", "cogs", "ap", "12000.00"),
        _journal("j6", "2024-03-20", "salaries", "cash", "8000.00"),
        _journal("j7", "2024-03-31", "depr", "accum", "1000.00"),
        _journal("j8", "2024-03-25", "cash", "loan", "15000.00"),
        _journal("j9", "2024-03-28", "cash", "ar", "20000.00"),
        _journal(
            "j10", "2024-03-15", "cash", "sales", "99999.00", status="DRAFT"
        ),
        _journal(
            "j11", "2024-03-15", "cash", "sales", "500.00", company_id="c2"
        ),
        _journal("j12", "2024-04-10", "cash", "sales", "50000.00"),
        _journal("j13", "2024-04-20", "cogs", "cash", "15000.00"),
        _journal("j14", "2024-05-15", "salaries", "cash", "10000.00"),
    ]
    calendars = [
        {
            "tenant_id": TENANT,
            "company_id": COMPANY,
            "fiscal_year_start": "2024-01-01",
            "fiscal_year_end": "2024-12-31",
            "is_active": True,
        }
    ]
    return {
        "accounts": accounts,
        "journals": journals,
        "fiscal_calendars": calendars,
    }


@pytest.fixture
def sample_ledger() -> dict:
    return build_sample_ledger()


@pytest.fixture
def quiet_logger() -> MagicMock:
    return MagicMock()


@pytest.fixture
def sample_repository(sample_ledger, quiet_logger) -> InMemoryLedgerRepository:
    return InMemoryLedgerRepository.from_dict(
        sample_ledger, logger=quiet_logger
    )


@pytest.fixture
def fixed_clock():
    return lambda: GENERATED_AT


@pytest.fixture
def fixed_today():
    return lambda: TODAY
