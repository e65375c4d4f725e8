"""Domain services for the statement of cash flows."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal

from ledger_reports.domain.constants import CREDIT, DEBIT, EXPENSE, REVENUE
from ledger_reports.domain.models import (
    Account,
    AccountActivity,
    AccountBalanceSnapshot,
    CashFlowMetrics,
    CashFlowReconciliation,
    CashFlowSectionType,
    ReconciliationAdjustment,
    StatementLine,
    StatementSection,
    WorkingCapitalChange,
)
from ledger_reports.domain.policies import (
    AdjustmentCategory,
    CashFlowClassification,
    NonCashAdjustmentClassifier,
    WorkingCapitalClassifier,
    WorkingCapitalItem,
)
from ledger_reports.domain.services.balances import (
    oriented_amount,
    signed_balance,
)
from ledger_reports.domain.services.profit_loss import build_statement_section
from ledger_reports.domain.services.variance import (
    compute_variance,
    compute_variance_percent,
)
from ledger_reports.utils.decimal_utils import round_money

ADD = "ADD"
SUBTRACT = "SUBTRACT"
INCREASE = "INCREASE"
DECREASE = "DECREASE"

# (description, True for asset-side items)
WORKING_CAPITAL_LINES = {
    WorkingCapitalItem.ACCOUNTS_RECEIVABLE: (
        "Changes in Accounts Receivable",
        True,
    ),
    WorkingCapitalItem.INVENTORY: ("Changes in Inventory", True),
    WorkingCapitalItem.PREPAID_EXPENSES: ("Changes in Prepaid Expenses", True),
    WorkingCapitalItem.ACCOUNTS_PAYABLE: ("Changes in Accounts Payable", False),
    WorkingCapitalItem.ACCRUED_LIABILITIES: (
        "Changes in Accrued Liabilities",
        False,
    ),
}


@dataclass(frozen=True)
class CashBalances:
    """Cumulative cash balances bracketing the report periods."""

    beginning: Decimal
    ending: Decimal
    comparative_beginning: Decimal | None = None
    comparative_ending: Decimal | None = None


def _cash_flow_line(
    account_id: str,
    account: Account | None,
    account_type: str,
    account_category: str,
    current: AccountActivity | None,
    comparative: AccountActivity | None,
    has_comparative: bool,
) -> StatementLine:
    amount = current.cash_effect if current is not None else Decimal("0")
    net_activity = current.net_activity if current is not None else Decimal("0")
    comparative_amount = None
    variance = None
    variance_percent = None
    if has_comparative:
        comparative_amount = (
            comparative.cash_effect if comparative is not None else Decimal("0")
        )
        variance = compute_variance(amount, comparative_amount)
        variance_percent = compute_variance_percent(amount, comparative_amount)
    return StatementLine(
        account_id=account_id,
        account_number=account.number if account else "",
        name=account.name if account else f"Account {account_id}",
        account_type=account_type,
        account_category=account_category,
        current_period_amount=amount,
        net_activity=net_activity,
        level=account.level if account else 0,
        is_header=account.is_header if account else False,
        parent_id=account.parent_id if account else None,
        comparative_period_amount=comparative_amount,
        variance=variance,
        variance_percent=variance_percent,
    )


def build_cash_flow_sections(
    accounts: Mapping[str, Account],
    current_activity: Mapping[str, AccountActivity],
    comparative_activity: Mapping[str, AccountActivity] | None,
    classification: CashFlowClassification,
) -> dict[CashFlowSectionType, StatementSection]:
    """Classify period activity into operating, investing and financing.

    Line amounts are the cash effect of each account (credits minus debits),
    not its net activity by normal balance. Every non-cash account with
    activity gets a line, so non-investing assets such as receivables and
    accumulated depreciation appear under operating activities and the
    section subtotals add up to the net change in cash.

    Args:
        accounts: Account metadata keyed by id, used for names and ordering.
        current_activity: Period activity keyed by account id.
        comparative_activity: Comparative activity, or None.
        classification: Type and category tables.

    Returns:
        dict[CashFlowSectionType, StatementSection]: All three sections.
        Cash accounts are left out since they are what the statement
        explains.
    """
    has_comparative = comparative_activity is not None
    comparative_activity = comparative_activity or {}
    account_ids = set(current_activity) | set(comparative_activity)

    def order(account_id: str):
        account = accounts.get(account_id)
        return (account is None, account.number if account else "", account_id)

    grouped: dict[CashFlowSectionType, list[StatementLine]] = {
        section: [] for section in CashFlowSectionType
    }
    for account_id in sorted(account_ids, key=order):
        current = current_activity.get(account_id)
        comparative = comparative_activity.get(account_id)
        source = current or comparative
        account = accounts.get(account_id)
        account_type = account.account_type if account else source.account_type
        category = account.category if account else source.account_category
        section = classification.section_for(account_type, category)
        if section is None:
            continue
        grouped[section].append(
            _cash_flow_line(
                account_id,
                account,
                account_type,
                category,
                current,
                comparative,
                has_comparative,
            )
        )
    return {
        section: build_statement_section(
            section, lines, has_comparative=has_comparative
        )
        for section, lines in grouped.items()
    }


def compute_cash_flow_metrics(
    sections: Mapping[CashFlowSectionType, StatementSection],
    balances: CashBalances,
    *,
    has_comparative: bool,
) -> CashFlowMetrics:
    """Derive cash flow metrics from section subtotals and cash balances."""
    operating = round_money(sections[CashFlowSectionType.OPERATING].subtotal)
    investing = round_money(sections[CashFlowSectionType.INVESTING].subtotal)
    financing = round_money(sections[CashFlowSectionType.FINANCING].subtotal)
    net_change = operating + investing + financing
    metrics = dict(
        net_cash_from_operating=operating,
        net_cash_from_investing=investing,
        net_cash_from_financing=financing,
        net_change_in_cash=net_change,
        beginning_cash_balance=round_money(balances.beginning),
        ending_cash_balance=round_money(balances.ending),
    )
    if not has_comparative:
        return CashFlowMetrics(**metrics)

    def comparative_subtotal(section: CashFlowSectionType) -> Decimal:
        return round_money(sections[section].comparative_subtotal or 0)

    comparative_operating = comparative_subtotal(CashFlowSectionType.OPERATING)
    comparative_investing = comparative_subtotal(CashFlowSectionType.INVESTING)
    comparative_financing = comparative_subtotal(CashFlowSectionType.FINANCING)
    comparative_net = (
        comparative_operating + comparative_investing + comparative_financing
    )
    metrics.update(
        comparative_net_cash_from_operating=comparative_operating,
        comparative_net_cash_from_investing=comparative_investing,
        comparative_net_cash_from_financing=comparative_financing,
        comparative_net_change_in_cash=comparative_net,
        comparative_beginning_cash_balance=round_money(
            balances.comparative_beginning or 0
        ),
        comparative_ending_cash_balance=round_money(
            balances.comparative_ending or 0
        ),
        operating_cash_variance=operating - comparative_operating,
        investing_cash_variance=investing - comparative_investing,
        financing_cash_variance=financing - comparative_financing,
        net_cash_variance=compute_variance(net_change, comparative_net),
        net_cash_variance_percent=compute_variance_percent(
            net_change, comparative_net
        ),
    )
    return CashFlowMetrics(**metrics)


def compute_net_income(snapshots: Iterable[AccountBalanceSnapshot]) -> Decimal:
    """Return revenue minus expenses from trial balance closing balances."""
    net_income = Decimal("0")
    for snapshot in snapshots:
        account_type = (snapshot.account_type or "").upper()
        if account_type == REVENUE:
            net_income += oriented_amount(
                snapshot.normal_balance, snapshot.closing_balance, CREDIT
            )
        elif account_type == EXPENSE:
            net_income -= oriented_amount(
                snapshot.normal_balance, snapshot.closing_balance, DEBIT
            )
    return round_money(net_income)


def compute_non_cash_adjustments(
    snapshots: Iterable[AccountBalanceSnapshot],
    classifier: NonCashAdjustmentClassifier,
) -> list[ReconciliationAdjustment]:
    """Return add-backs and deductions for non-cash items in net income.

    Disposal gains and losses are netted into a single line.
    """
    depreciation = Decimal("0")
    disposal = Decimal("0")
    bad_debt = Decimal("0")
    share_based = Decimal("0")
    for snapshot in snapshots:
        category = classifier.classify(snapshot.account)
        if category is None:
            continue
        closing = snapshot.closing_balance
        if category == AdjustmentCategory.DEPRECIATION_AMORTIZATION:
            depreciation += oriented_amount(
                snapshot.normal_balance, closing, DEBIT
            )
        elif category == AdjustmentCategory.DISPOSAL_GAIN:
            disposal -= oriented_amount(snapshot.normal_balance, closing, CREDIT)
        elif category == AdjustmentCategory.DISPOSAL_LOSS:
            disposal += oriented_amount(snapshot.normal_balance, closing, DEBIT)
        elif category == AdjustmentCategory.BAD_DEBT:
            bad_debt += oriented_amount(snapshot.normal_balance, closing, DEBIT)
        elif category == AdjustmentCategory.SHARE_BASED_COMPENSATION:
            share_based += oriented_amount(
                snapshot.normal_balance, closing, DEBIT
            )

    adjustments: list[ReconciliationAdjustment] = []
    if depreciation > 0:
        adjustments.append(
            ReconciliationAdjustment(
                description="Depreciation and Amortization",
                amount=round_money(depreciation),
                type=ADD,
            )
        )
    if disposal != 0:
        adjustments.append(
            ReconciliationAdjustment(
                description="Gain/Loss on Asset Disposal",
                amount=round_money(abs(disposal)),
                type=ADD if disposal > 0 else SUBTRACT,
            )
        )
    if bad_debt > 0:
        adjustments.append(
            ReconciliationAdjustment(
                description="Bad Debt Expense",
                amount=round_money(bad_debt),
                type=ADD,
            )
        )
    if share_based > 0:
        adjustments.append(
            ReconciliationAdjustment(
                description="Stock-based Compensation",
                amount=round_money(share_based),
                type=ADD,
            )
        )
    return adjustments


def compute_working_capital_changes(
    snapshots: Iterable[AccountBalanceSnapshot],
    classifier: WorkingCapitalClassifier,
) -> list[WorkingCapitalChange]:
    """Return period changes in working-capital lines.

    An increase in an asset line uses cash (DECREASE); an increase in a
    liability line is a source of cash (INCREASE).
    """
    changes: dict[WorkingCapitalItem, Decimal] = {}
    for snapshot in snapshots:
        item = classifier.classify(snapshot.account)
        if item is None:
            continue
        change = signed_balance(
            snapshot.normal_balance,
            snapshot.period_debits,
            snapshot.period_credits,
        )
        changes[item] = changes.get(item, Decimal("0")) + change

    result: list[WorkingCapitalChange] = []
    for item, (description, is_asset) in WORKING_CAPITAL_LINES.items():
        if item not in changes:
            continue
        change = changes[item]
        if change == 0:
            continue
        if is_asset:
            direction = DECREASE if change > 0 else INCREASE
        else:
            direction = INCREASE if change > 0 else DECREASE
        result.append(
            WorkingCapitalChange(
                description=description,
                amount=round_money(abs(change)),
                type=direction,
            )
        )
    return result


def build_reconciliation(
    snapshots: Iterable[AccountBalanceSnapshot],
    non_cash_classifier: NonCashAdjustmentClassifier,
    working_capital_classifier: WorkingCapitalClassifier,
) -> CashFlowReconciliation:
    """Build the indirect-method bridge from net income to operating cash."""
    snapshots = tuple(snapshots)
    return CashFlowReconciliation(
        net_income=compute_net_income(snapshots),
        adjustments=tuple(
            compute_non_cash_adjustments(snapshots, non_cash_classifier)
        ),
        working_capital_changes=tuple(
            compute_working_capital_changes(
                snapshots, working_capital_classifier
            )
        ),
    )


__all__ = [
    "ADD",
    "SUBTRACT",
    "INCREASE",
    "DECREASE",
    "CashBalances",
    "build_cash_flow_sections",
    "compute_cash_flow_metrics",
    "compute_net_income",
    "compute_non_cash_adjustments",
    "compute_working_capital_changes",
    "build_reconciliation",
]
