"""Pure aggregation of posted journal lines.

These functions mirror the SQL aggregation queries so the same rules can run
over in-memory journals and be tested without a database.
"""

from collections.abc import Iterable, Iterator, Mapping
from datetime import date
from decimal import Decimal

from ledger_reports.domain.models import (
    Account,
    AccountActivity,
    BalanceActivityRow,
    Journal,
    JournalLine,
    PeriodActivityRow,
)
from ledger_reports.domain.services.balances import signed_balance
from ledger_reports.utils.decimal_utils import coerce_decimal


def iter_posted_lines(
    journals: Iterable[Journal],
    tenant_id: str,
    company_id: str,
) -> Iterator[tuple[date, JournalLine]]:
    """Yield (journal date, line) for posted journals of one company."""
    for journal in journals:
        if journal.tenant_id != tenant_id or journal.company_id != company_id:
            continue
        if not journal.is_posted:
            continue
        for line in journal.lines:
            yield journal.journal_date, line


def account_in_scope(
    account: Account,
    account_types: Iterable[str] = (),
    categories: Iterable[str] = (),
) -> bool:
    """Return True when the account matches any requested type or category.

    With no types and no categories every account is in scope.
    """
    types = {item.upper() for item in account_types}
    cats = {item.upper() for item in categories}
    if not types and not cats:
        return True
    return (
        account.account_type.upper() in types
        or (account.category or "").upper() in cats
    )


def summarize_balance_activity(
    journals: Iterable[Journal],
    *,
    tenant_id: str,
    company_id: str,
    fiscal_year_start: date,
    as_of_date: date,
    account_ids: Iterable[str],
) -> list[BalanceActivityRow]:
    """Split each account's postings into opening and period sums.

    Args:
        journals: Ledger journals to scan.
        tenant_id: Tenant identifier.
        company_id: Company identifier.
        fiscal_year_start: First day of the fiscal year holding as_of_date.
        as_of_date: Last day included.
        account_ids: Accounts to aggregate.

    Returns:
        list[BalanceActivityRow]: One row per account with postings, sorted
        by account id.
    """
    wanted = set(account_ids)
    sums: dict[str, list] = {}
    for journal_date, line in iter_posted_lines(journals, tenant_id, company_id):
        if line.account_id not in wanted or journal_date > as_of_date:
            continue
        entry = sums.setdefault(
            line.account_id,
            [Decimal("0"), Decimal("0"), Decimal("0"), Decimal("0"), None, None],
        )
        debit = coerce_decimal(line.debit_amount)
        credit = coerce_decimal(line.credit_amount)
        if journal_date < fiscal_year_start:
            entry[0] += debit
            entry[1] += credit
        else:
            entry[2] += debit
            entry[3] += credit
        if entry[4] is None or journal_date < entry[4]:
            entry[4] = journal_date
        if entry[5] is None or journal_date > entry[5]:
            entry[5] = journal_date
    return [
        BalanceActivityRow(
            account_id=account_id,
            opening_debits=values[0],
            opening_credits=values[1],
            period_debits=values[2],
            period_credits=values[3],
            oldest_transaction=values[4],
            newest_transaction=values[5],
        )
        for account_id, values in sorted(sums.items())
    ]


def summarize_period_activity(
    journals: Iterable[Journal],
    accounts: Mapping[str, Account],
    *,
    tenant_id: str,
    company_id: str,
    start_date: date,
    end_date: date,
    account_types: Iterable[str] = (),
    categories: Iterable[str] = (),
) -> list[PeriodActivityRow]:
    """Sum debits and credits per in-scope account within [start, end]."""
    account_types = tuple(account_types)
    categories = tuple(categories)
    sums: dict[str, list[Decimal]] = {}
    for journal_date, line in iter_posted_lines(journals, tenant_id, company_id):
        if journal_date < start_date or journal_date > end_date:
            continue
        account = accounts.get(line.account_id)
        if account is None:
            continue
        if not account_in_scope(account, account_types, categories):
            continue
        entry = sums.setdefault(line.account_id, [Decimal("0"), Decimal("0")])
        entry[0] += coerce_decimal(line.debit_amount)
        entry[1] += coerce_decimal(line.credit_amount)
    return [
        PeriodActivityRow(
            account_id=account_id,
            account_type=accounts[account_id].account_type,
            account_category=accounts[account_id].category,
            normal_balance=accounts[account_id].normal_balance,
            total_debits=debits,
            total_credits=credits,
        )
        for account_id, (debits, credits) in sorted(sums.items())
    ]


def compute_cash_balance(
    journals: Iterable[Journal],
    accounts: Mapping[str, Account],
    *,
    tenant_id: str,
    company_id: str,
    as_of_date: date,
    inclusive: bool,
    categories: Iterable[str],
) -> Decimal:
    """Return the cumulative balance of cash-category accounts.

    Args:
        inclusive: Include postings dated on as_of_date when True, otherwise
            only postings strictly before it.
    """
    categories = tuple(categories)
    balance = Decimal("0")
    if not categories:
        return balance
    for journal_date, line in iter_posted_lines(journals, tenant_id, company_id):
        if journal_date > as_of_date or (
            not inclusive and journal_date == as_of_date
        ):
            continue
        account = accounts.get(line.account_id)
        if account is None or not account_in_scope(account, (), categories):
            continue
        balance += signed_balance(
            account.normal_balance,
            coerce_decimal(line.debit_amount),
            coerce_decimal(line.credit_amount),
        )
    return balance


def build_activity_map(
    rows: Iterable[PeriodActivityRow],
) -> dict[str, AccountActivity]:
    """Key period rows by account, with net activity signed by normal side."""
    activity: dict[str, AccountActivity] = {}
    for row in rows:
        debits = coerce_decimal(row.total_debits)
        credits = coerce_decimal(row.total_credits)
        previous = activity.get(row.account_id)
        if previous is not None:
            debits += previous.total_debits
            credits += previous.total_credits
        activity[row.account_id] = AccountActivity(
            total_debits=debits,
            total_credits=credits,
            net_activity=signed_balance(row.normal_balance, debits, credits),
            account_type=row.account_type,
            account_category=row.account_category or "",
        )
    return activity


__all__ = [
    "iter_posted_lines",
    "account_in_scope",
    "summarize_balance_activity",
    "summarize_period_activity",
    "compute_cash_balance",
    "build_activity_map",
]
