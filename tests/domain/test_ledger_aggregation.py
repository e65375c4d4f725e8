"""Tests for the pure journal aggregation functions."""

from datetime import date, timedelta
from decimal import Decimal
import random

import pytest

from ledger_reports.domain.models import Account, Journal, JournalLine
from ledger_reports.domain.services.balances import (
    build_snapshot,
    compute_trial_balance_totals,
    is_balanced,
    signed_balance,
)
from ledger_reports.domain.services.ledger import (
    account_in_scope,
    build_activity_map,
    compute_cash_balance,
    summarize_balance_activity,
    summarize_period_activity,
)

ACCOUNTS = {
    "cash": Account(
        id="cash",
        number="1000",
        name="Cash",
        account_type="ASSET",
        category="CASH",
    ),
    "rev": Account(
        id="rev",
        number="4000",
        name="Revenue",
        account_type="REVENUE",
        category="SALES_REVENUE",
        normal_balance="CREDIT",
    ),
    "exp": Account(
        id="exp",
        number="6000",
        name="Rent",
        account_type="EXPENSE",
        category="GENERAL_EXPENSES",
    ),
}


def _journal(journal_id, when, lines, status="POSTED", company_id="c1"):
    return Journal(
        id=journal_id,
        tenant_id="t1",
        company_id=company_id,
        journal_date=when,
        status=status,
        lines=tuple(
            JournalLine(account_id, Decimal(debit), Decimal(credit))
            for account_id, debit, credit in lines
        ),
    )


JOURNALS = [
    _journal("a", date(2023, 12, 20), [("cash", "300", "0"), ("rev", "0", "300")]),
    _journal("b", date(2024, 1, 5), [("cash", "1000", "0"), ("rev", "0", "1000")]),
    _journal("c", date(2024, 2, 1), [("exp", "400", "0"), ("cash", "0", "400")]),
    _journal(
        "d",
        date(2024, 2, 2),
        [("exp", "999", "0"), ("cash", "0", "999")],
        status="draft",
    ),
    _journal(
        "e",
        date(2024, 2, 3),
        [("cash", "50", "0"), ("rev", "0", "50")],
        company_id="other",
    ),
]


def test_account_in_scope_matches_type_or_category() -> None:
    """An account is in scope when its type or category is requested."""
    cash = ACCOUNTS["cash"]

    assert account_in_scope(cash)
    assert account_in_scope(cash, ("ASSET",))
    assert account_in_scope(cash, ("REVENUE",), ("cash",))
    assert not account_in_scope(cash, ("REVENUE", "EXPENSE"))


def test_summarize_balance_activity_splits_opening_and_period() -> None:
    """Postings before the fiscal year start are opening sums."""
    rows = summarize_balance_activity(
        JOURNALS,
        tenant_id="t1",
        company_id="c1",
        fiscal_year_start=date(2024, 1, 1),
        as_of_date=date(2024, 12, 31),
        account_ids=["cash", "rev"],
    )

    by_id = {row.account_id: row for row in rows}
    assert set(by_id) == {"cash", "rev"}
    assert by_id["cash"].opening_debits == Decimal("300")
    assert by_id["cash"].period_debits == Decimal("1000")
    assert by_id["cash"].period_credits == Decimal("400")
    assert by_id["cash"].oldest_transaction == date(2023, 12, 20)
    assert by_id["cash"].newest_transaction == date(2024, 2, 1)
    assert by_id["rev"].opening_credits == Decimal("300")


def test_summarize_period_activity_skips_drafts_and_other_companies() -> None:
    """Only posted journals of the requested company inside the window count."""
    rows = summarize_period_activity(
        JOURNALS,
        ACCOUNTS,
        tenant_id="t1",
        company_id="c1",
        start_date=date(2024, 1, 1),
        end_date=date(2024, 3, 31),
        account_types=("REVENUE", "EXPENSE"),
    )

    activity = build_activity_map(rows)
    assert set(activity) == {"exp", "rev"}
    assert activity["rev"].net_activity == Decimal("1000")
    assert activity["exp"].net_activity == Decimal("400")
    assert activity["exp"].cash_effect == Decimal("-400")
    assert activity["rev"].cash_effect == Decimal("1000")


def test_compute_cash_balance_respects_inclusive_flag() -> None:
    """Exclusive balances ignore postings dated on the as-of date."""
    common = dict(tenant_id="t1", company_id="c1", categories=("CASH",))

    before = compute_cash_balance(
        JOURNALS, ACCOUNTS, as_of_date=date(2024, 1, 5), inclusive=False, **common
    )
    through = compute_cash_balance(
        JOURNALS, ACCOUNTS, as_of_date=date(2024, 1, 5), inclusive=True, **common
    )
    none = compute_cash_balance(
        JOURNALS,
        ACCOUNTS,
        tenant_id="t1",
        company_id="c1",
        as_of_date=date(2024, 12, 31),
        inclusive=True,
        categories=(),
    )

    assert before == Decimal("300")
    assert through == Decimal("1300")
    assert none == Decimal("0")


def _random_ledger(seed: int) -> tuple[dict[str, Account], list[Journal]]:
    rng = random.Random(seed)
    specs = [
        ("1000", "ASSET", "DEBIT"),
        ("1100", "ASSET", "DEBIT"),
        ("2000", "LIABILITY", "CREDIT"),
        ("3000", "EQUITY", "CREDIT"),
        ("4000", "REVENUE", "CREDIT"),
        ("5000", "EXPENSE", "DEBIT"),
    ]
    accounts = {
        number: Account(
            id=number,
            number=number,
            name=f"Account {number}",
            account_type=account_type,
            normal_balance=normal,
        )
        for number, account_type, normal in specs
    }
    journals = []
    start = date(2023, 6, 1)
    for index in range(60):
        amount = Decimal(rng.randint(1, 500_000)) / 100
        debit, credit = rng.sample(list(accounts), 2)
        journals.append(
            _journal(
                f"r{index}",
                start + timedelta(days=rng.randint(0, 400)),
                [(debit, str(amount), "0"), (credit, "0", str(amount))],
            )
        )
    return accounts, journals


@pytest.mark.parametrize("seed", [1, 7, 42, 2024])
def test_random_balanced_ledgers_produce_balanced_trial_balances(seed) -> None:
    """Every balanced ledger yields equal debit and credit totals."""
    accounts, journals = _random_ledger(seed)
    rows = summarize_balance_activity(
        journals,
        tenant_id="t1",
        company_id="c1",
        fiscal_year_start=date(2024, 1, 1),
        as_of_date=date(2024, 6, 30),
        account_ids=list(accounts),
    )
    by_id = {row.account_id: row for row in rows}

    snapshots = [
        build_snapshot(
            account,
            by_id.get(account.id),
            include_period_activity=True,
            currency="MYR",
        )
        for account in accounts.values()
    ]

    for snapshot in snapshots:
        assert snapshot.closing_balance == snapshot.opening_balance + (
            signed_balance(
                snapshot.normal_balance,
                snapshot.period_debits,
                snapshot.period_credits,
            )
        )
    totals = compute_trial_balance_totals(snapshots)
    assert is_balanced(totals)
    assert totals.total_assets == (
        totals.total_liabilities + totals.total_equity + totals.net_income
    )
