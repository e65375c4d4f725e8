"""Domain services for account balances and trial balance totals."""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from ledger_reports.domain.constants import (
    ASSET,
    BALANCE_TOLERANCE,
    CREDIT,
    DEBIT,
    EQUITY,
    EXPENSE,
    LIABILITY,
    REVENUE,
)
from ledger_reports.domain.models import (
    Account,
    AccountBalanceSnapshot,
    BalanceActivityRow,
    TrialBalanceTotals,
)
from ledger_reports.utils.decimal_utils import coerce_decimal, round_money


def signed_balance(normal_balance: str, debits, credits) -> Decimal:
    """Return debits and credits netted on the account's normal side.

    Args:
        normal_balance: DEBIT or CREDIT.
        debits: Debit total.
        credits: Credit total.

    Returns:
        Decimal: ``debits - credits`` for DEBIT-normal accounts,
        ``credits - debits`` otherwise.
    """
    debits = coerce_decimal(debits)
    credits = coerce_decimal(credits)
    if (normal_balance or DEBIT).upper() == CREDIT:
        return credits - debits
    return debits - credits


def oriented_amount(normal_balance: str, amount: Decimal, side: str) -> Decimal:
    """Express a normal-side balance as seen from ``side``."""
    if (normal_balance or DEBIT).upper() == side:
        return amount
    return -amount


def resolve_fiscal_year_start(
    as_of_date: date,
    calendar_start: date | None,
) -> date:
    """Return the calendar's fiscal year start or January 1 of as_of_date."""
    if calendar_start is not None:
        return calendar_start
    return date(as_of_date.year, 1, 1)


def build_snapshot(
    account: Account,
    row: BalanceActivityRow | None,
    *,
    include_period_activity: bool,
    currency: str,
) -> AccountBalanceSnapshot:
    """Build the balance snapshot of one account.

    Accounts with no aggregated row get a zero snapshot.

    Args:
        account: Chart of accounts entry.
        row: Opening and period sums for the account, if it has postings.
        include_period_activity: Report period debits and credits when True.
        currency: Report currency code.

    Returns:
        AccountBalanceSnapshot: Opening, period and closing balances.
    """
    if row is None:
        opening_debits = opening_credits = Decimal("0")
        period_debits = period_credits = Decimal("0")
    else:
        opening_debits = coerce_decimal(row.opening_debits)
        opening_credits = coerce_decimal(row.opening_credits)
        period_debits = coerce_decimal(row.period_debits)
        period_credits = coerce_decimal(row.period_credits)

    opening = signed_balance(
        account.normal_balance, opening_debits, opening_credits
    )
    closing = opening + signed_balance(
        account.normal_balance, period_debits, period_credits
    )
    return AccountBalanceSnapshot(
        account=account,
        opening_balance=opening,
        period_debits=period_debits if include_period_activity else None,
        period_credits=period_credits if include_period_activity else None,
        closing_balance=closing,
        currency=currency,
    )


def is_zero_snapshot(snapshot: AccountBalanceSnapshot) -> bool:
    """Return True when the account has no balance and no movement."""
    return (
        snapshot.opening_balance == 0
        and snapshot.closing_balance == 0
        and not snapshot.period_debits
        and not snapshot.period_credits
    )


def compute_trial_balance_totals(
    snapshots: Iterable[AccountBalanceSnapshot],
) -> TrialBalanceTotals:
    """Aggregate debit/credit columns and per-type totals.

    A positive closing balance lands in the account's normal-side column and
    a negative one in the opposite column. Type totals are expressed on the
    natural side of each type (debit for assets and expenses, credit for
    liabilities, equity and revenue).

    Args:
        snapshots: Account snapshots of the trial balance.

    Returns:
        TrialBalanceTotals: Totals rounded to cents.
    """
    total_debits = Decimal("0")
    total_credits = Decimal("0")
    by_type = {
        ASSET: Decimal("0"),
        LIABILITY: Decimal("0"),
        EQUITY: Decimal("0"),
        REVENUE: Decimal("0"),
        EXPENSE: Decimal("0"),
    }
    natural_sides = {
        ASSET: DEBIT,
        LIABILITY: CREDIT,
        EQUITY: CREDIT,
        REVENUE: CREDIT,
        EXPENSE: DEBIT,
    }
    for snapshot in snapshots:
        closing = snapshot.closing_balance
        debit_side = oriented_amount(snapshot.normal_balance, closing, DEBIT)
        if debit_side > 0:
            total_debits += debit_side
        elif debit_side < 0:
            total_credits += -debit_side

        account_type = (snapshot.account_type or "").upper()
        if account_type in by_type:
            by_type[account_type] += oriented_amount(
                snapshot.normal_balance, closing, natural_sides[account_type]
            )

    total_revenue = round_money(by_type[REVENUE])
    total_expenses = round_money(by_type[EXPENSE])
    return TrialBalanceTotals(
        total_debits=round_money(total_debits),
        total_credits=round_money(total_credits),
        total_assets=round_money(by_type[ASSET]),
        total_liabilities=round_money(by_type[LIABILITY]),
        total_equity=round_money(by_type[EQUITY]),
        total_revenue=total_revenue,
        total_expenses=total_expenses,
        net_income=total_revenue - total_expenses,
    )


def is_balanced(totals: TrialBalanceTotals) -> bool:
    """Return True when debit and credit totals agree within a cent."""
    return abs(totals.total_debits - totals.total_credits) < BALANCE_TOLERANCE


__all__ = [
    "signed_balance",
    "oriented_amount",
    "resolve_fiscal_year_start",
    "build_snapshot",
    "is_zero_snapshot",
    "compute_trial_balance_totals",
    "is_balanced",
]
