"""Tests for income statement sections and metrics."""

from decimal import Decimal

from ledger_reports.domain.models import (
    Account,
    AccountActivity,
    ProfitLossSectionType,
)
from ledger_reports.domain.policies import (
    DEFAULT_PROFIT_LOSS_CLASSIFICATION,
    FlatRateIncomeTaxPolicy,
    NoIncomeTaxPolicy,
)
from ledger_reports.domain.services.profit_loss import (
    build_profit_loss_sections,
    collect_profit_loss_accounts,
    compute_profit_loss_metrics,
)
from ledger_reports.domain.services.variance import (
    compute_variance,
    compute_variance_percent,
    percent_of,
)

SALES = Account(
    id="sales",
    number="4000",
    name="Sales",
    account_type="REVENUE",
    category="SALES_REVENUE",
    normal_balance="CREDIT",
)
COGS = Account(
    id="cogs",
    number="5000",
    name="Cost of Goods Sold",
    account_type="EXPENSE",
    category="COST_OF_GOODS_SOLD",
)
ADMIN = Account(
    id="admin",
    number="6000",
    name="Administration",
    account_type="EXPENSE",
    category="ADMINISTRATIVE_EXPENSES",
)
MYSTERY = Account(
    id="mystery",
    number="6900",
    name="Suspense",
    account_type="EXPENSE",
    category="UNMAPPED",
)
CASH = Account(id="cash", number="1000", name="Cash", account_type="ASSET")


def _activity(amount: str) -> AccountActivity:
    value = Decimal(amount)
    return AccountActivity(
        total_debits=Decimal("0"),
        total_credits=value,
        net_activity=value,
    )


def test_variance_helpers() -> None:
    """Percentages are relative to the absolute comparative amount."""
    assert compute_variance(Decimal("150"), Decimal("100")) == Decimal("50")
    assert compute_variance_percent(Decimal("150"), Decimal("100")) == (
        Decimal("50.00")
    )
    assert compute_variance_percent(Decimal("50"), Decimal("-100")) == (
        Decimal("150.00")
    )
    assert compute_variance_percent(Decimal("10"), Decimal("0")) == (
        Decimal("0.00")
    )
    assert percent_of(Decimal("1"), Decimal("3")) == Decimal("33.33")
    assert percent_of(Decimal("1"), Decimal("0")) == Decimal("0.00")


def test_collect_profit_loss_accounts_deduplicates_and_orders() -> None:
    """Only revenue and expense accounts survive, ordered by number."""
    accounts = collect_profit_loss_accounts(
        [ADMIN, CASH, SALES],
        [SALES, COGS],
    )

    assert [account.id for account in accounts] == ["sales", "cogs", "admin"]


def test_standard_income_statement_metrics() -> None:
    """Revenue 100000, COGS 60000 and opex 25000 give a 40% gross margin."""
    accounts = collect_profit_loss_accounts([SALES, COGS, ADMIN, MYSTERY])
    activity = {
        "sales": _activity("100000"),
        "cogs": _activity("60000"),
        "admin": _activity("25000"),
        "mystery": _activity("999"),
    }

    sections = build_profit_loss_sections(
        accounts, activity, None, DEFAULT_PROFIT_LOSS_CLASSIFICATION
    )
    metrics = compute_profit_loss_metrics(
        sections, NoIncomeTaxPolicy(), has_comparative=False
    )

    assert set(sections) == set(ProfitLossSectionType)
    assert sections[ProfitLossSectionType.OTHER_INCOME].lines == ()
    assert sections[ProfitLossSectionType.OTHER_INCOME].subtotal == Decimal("0")
    operating = sections[ProfitLossSectionType.OPERATING_EXPENSE]
    assert [line.account_id for line in operating.lines] == ["admin"]
    assert operating.comparative_subtotal is None
    assert metrics.total_revenue == Decimal("100000.00")
    assert metrics.gross_profit == Decimal("40000.00")
    assert metrics.gross_profit_margin == Decimal("40.00")
    assert metrics.operating_income == Decimal("15000.00")
    assert metrics.operating_margin == Decimal("15.00")
    assert metrics.net_income_before_tax == Decimal("15000.00")
    assert metrics.net_income_after_tax == Decimal("15000.00")
    assert metrics.comparative_total_revenue is None
    assert metrics.revenue_variance is None


def test_comparative_income_statement_and_tax() -> None:
    """Comparative figures and variances are filled when requested."""
    accounts = collect_profit_loss_accounts([SALES, COGS, ADMIN])
    current = {
        "sales": _activity("120000"),
        "cogs": _activity("70000"),
        "admin": _activity("20000"),
    }
    comparative = {
        "sales": _activity("100000"),
        "cogs": _activity("60000"),
    }

    sections = build_profit_loss_sections(
        accounts, current, comparative, DEFAULT_PROFIT_LOSS_CLASSIFICATION
    )
    metrics = compute_profit_loss_metrics(
        sections,
        FlatRateIncomeTaxPolicy(Decimal("0.25")),
        has_comparative=True,
    )

    admin_line = sections[ProfitLossSectionType.OPERATING_EXPENSE].lines[0]
    assert admin_line.comparative_period_amount == Decimal("0")
    assert admin_line.variance == Decimal("20000")
    assert admin_line.variance_percent == Decimal("0.00")
    revenue = sections[ProfitLossSectionType.REVENUE]
    assert revenue.comparative_subtotal == Decimal("100000")
    assert revenue.variance_percent == Decimal("20.00")
    assert metrics.net_income_before_tax == Decimal("30000.00")
    assert metrics.income_tax_expense == Decimal("7500.00")
    assert metrics.net_income_after_tax == Decimal("22500.00")
    assert metrics.comparative_gross_profit == Decimal("40000.00")
    assert metrics.comparative_net_income == Decimal("30000.00")
    assert metrics.revenue_variance == Decimal("20000.00")
    assert metrics.gross_profit_variance == Decimal("10000.00")
    assert metrics.gross_profit_variance_percent == Decimal("25.00")
    assert metrics.net_income_variance == Decimal("-7500.00")
    assert metrics.net_income_variance_percent == Decimal("-25.00")
