"""Domain services for income statement sections and metrics."""

from collections.abc import Iterable, Mapping
from decimal import Decimal

from ledger_reports.domain.constants import PROFIT_LOSS_ACCOUNT_TYPES
from ledger_reports.domain.models import (
    Account,
    AccountActivity,
    ProfitLossMetrics,
    ProfitLossSectionType,
    StatementLine,
    StatementSection,
)
from ledger_reports.domain.policies import (
    IncomeTaxPolicy,
    ProfitLossClassification,
)
from ledger_reports.domain.services.variance import (
    compute_variance,
    compute_variance_percent,
    percent_of,
)
from ledger_reports.utils.decimal_utils import round_money


def collect_profit_loss_accounts(
    *account_groups: Iterable[Account],
) -> list[Account]:
    """Merge REVENUE and EXPENSE accounts from several trial balances.

    The first occurrence of an account id wins; the result is ordered by
    account number then id.
    """
    seen: dict[str, Account] = {}
    for accounts in account_groups:
        for account in accounts:
            if account.account_type.upper() not in PROFIT_LOSS_ACCOUNT_TYPES:
                continue
            seen.setdefault(account.id, account)
    return sorted(seen.values(), key=lambda item: (item.number, item.id))


def build_statement_section(
    section_type,
    lines: Iterable[StatementLine],
    *,
    has_comparative: bool,
) -> StatementSection:
    """Build a section whose subtotal is the sum of its line amounts."""
    lines = tuple(lines)
    subtotal = sum(
        (line.current_period_amount for line in lines), Decimal("0")
    )
    if not has_comparative:
        return StatementSection(
            name=section_type.title,
            section_type=section_type.value,
            lines=lines,
            subtotal=subtotal,
        )
    comparative = sum(
        (line.comparative_period_amount or Decimal("0") for line in lines),
        Decimal("0"),
    )
    return StatementSection(
        name=section_type.title,
        section_type=section_type.value,
        lines=lines,
        subtotal=subtotal,
        comparative_subtotal=comparative,
        variance=compute_variance(subtotal, comparative),
        variance_percent=compute_variance_percent(subtotal, comparative),
    )


def _profit_loss_line(
    account: Account,
    current: AccountActivity | None,
    comparative: AccountActivity | None,
    has_comparative: bool,
) -> StatementLine:
    amount = current.net_activity if current is not None else Decimal("0")
    comparative_amount = None
    variance = None
    variance_percent = None
    if has_comparative:
        comparative_amount = (
            comparative.net_activity if comparative is not None else Decimal("0")
        )
        variance = compute_variance(amount, comparative_amount)
        variance_percent = compute_variance_percent(amount, comparative_amount)
    return StatementLine(
        account_id=account.id,
        account_number=account.number,
        name=account.name,
        account_type=account.account_type,
        account_category=account.category,
        current_period_amount=amount,
        net_activity=amount,
        level=account.level,
        is_header=account.is_header,
        parent_id=account.parent_id,
        comparative_period_amount=comparative_amount,
        variance=variance,
        variance_percent=variance_percent,
    )


def build_profit_loss_sections(
    accounts: Iterable[Account],
    current_activity: Mapping[str, AccountActivity],
    comparative_activity: Mapping[str, AccountActivity] | None,
    classification: ProfitLossClassification,
) -> dict[ProfitLossSectionType, StatementSection]:
    """Classify accounts and build all five income statement sections.

    Args:
        accounts: REVENUE and EXPENSE accounts, already ordered.
        current_activity: Period activity keyed by account id.
        comparative_activity: Comparative activity, or None without a
            comparative period.
        classification: Category to section table.

    Returns:
        dict[ProfitLossSectionType, StatementSection]: Every section, empty
        ones included.
    """
    has_comparative = comparative_activity is not None
    grouped: dict[ProfitLossSectionType, list[StatementLine]] = {
        section: [] for section in ProfitLossSectionType
    }
    for account in accounts:
        section = classification.section_for(
            account.account_type, account.category
        )
        if section is None:
            continue
        grouped[section].append(
            _profit_loss_line(
                account,
                current_activity.get(account.id),
                (comparative_activity or {}).get(account.id),
                has_comparative,
            )
        )
    return {
        section: build_statement_section(
            section, lines, has_comparative=has_comparative
        )
        for section, lines in grouped.items()
    }


def _derive(
    revenue: Decimal,
    cost_of_sales: Decimal,
    operating_expenses: Decimal,
    other_income: Decimal,
    other_expenses: Decimal,
    tax_policy: IncomeTaxPolicy,
) -> dict[str, Decimal]:
    gross_profit = revenue - cost_of_sales
    operating_income = gross_profit - operating_expenses
    before_tax = operating_income + other_income - other_expenses
    income_tax = round_money(tax_policy.income_tax(before_tax))
    return {
        "gross_profit": gross_profit,
        "operating_income": operating_income,
        "net_income_before_tax": before_tax,
        "income_tax_expense": income_tax,
        "net_income_after_tax": before_tax - income_tax,
    }


def compute_profit_loss_metrics(
    sections: Mapping[ProfitLossSectionType, StatementSection],
    tax_policy: IncomeTaxPolicy,
    *,
    has_comparative: bool,
) -> ProfitLossMetrics:
    """Derive income statement metrics from section subtotals.

    Subtotals are rounded to cents first so the metric identities hold
    exactly on the reported figures.
    """
    revenue = round_money(sections[ProfitLossSectionType.REVENUE].subtotal)
    cost_of_sales = round_money(
        sections[ProfitLossSectionType.COST_OF_SALES].subtotal
    )
    operating_expenses = round_money(
        sections[ProfitLossSectionType.OPERATING_EXPENSE].subtotal
    )
    other_income = round_money(
        sections[ProfitLossSectionType.OTHER_INCOME].subtotal
    )
    other_expenses = round_money(
        sections[ProfitLossSectionType.OTHER_EXPENSE].subtotal
    )
    current = _derive(
        revenue,
        cost_of_sales,
        operating_expenses,
        other_income,
        other_expenses,
        tax_policy,
    )
    metrics = dict(
        total_revenue=revenue,
        total_cost_of_sales=cost_of_sales,
        gross_profit=current["gross_profit"],
        gross_profit_margin=percent_of(current["gross_profit"], revenue),
        total_operating_expenses=operating_expenses,
        operating_income=current["operating_income"],
        operating_margin=percent_of(current["operating_income"], revenue),
        total_other_income=other_income,
        total_other_expenses=other_expenses,
        net_income_before_tax=current["net_income_before_tax"],
        income_tax_expense=current["income_tax_expense"],
        net_income_after_tax=current["net_income_after_tax"],
        net_profit_margin=percent_of(current["net_income_after_tax"], revenue),
    )
    if not has_comparative:
        return ProfitLossMetrics(**metrics)

    def comparative_subtotal(section: ProfitLossSectionType) -> Decimal:
        return round_money(sections[section].comparative_subtotal or 0)

    comparative_revenue = comparative_subtotal(ProfitLossSectionType.REVENUE)
    comparative = _derive(
        comparative_revenue,
        comparative_subtotal(ProfitLossSectionType.COST_OF_SALES),
        comparative_subtotal(ProfitLossSectionType.OPERATING_EXPENSE),
        comparative_subtotal(ProfitLossSectionType.OTHER_INCOME),
        comparative_subtotal(ProfitLossSectionType.OTHER_EXPENSE),
        tax_policy,
    )
    pairs = {
        "revenue": (revenue, comparative_revenue),
        "gross_profit": (
            current["gross_profit"],
            comparative["gross_profit"],
        ),
        "operating_income": (
            current["operating_income"],
            comparative["operating_income"],
        ),
        "net_income": (
            current["net_income_after_tax"],
            comparative["net_income_after_tax"],
        ),
    }
    metrics.update(
        comparative_total_revenue=comparative_revenue,
        comparative_gross_profit=comparative["gross_profit"],
        comparative_operating_income=comparative["operating_income"],
        comparative_net_income=comparative["net_income_after_tax"],
    )
    for name, (now, before) in pairs.items():
        metrics[f"{name}_variance"] = compute_variance(now, before)
        metrics[f"{name}_variance_percent"] = compute_variance_percent(
            now, before
        )
    return ProfitLossMetrics(**metrics)


__all__ = [
    "collect_profit_loss_accounts",
    "build_statement_section",
    "build_profit_loss_sections",
    "compute_profit_loss_metrics",
]
