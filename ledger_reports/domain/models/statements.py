"""Domain models for profit & loss and cash flow statements."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum


class ProfitLossSectionType(str, Enum):
    """Sections of an income statement."""

    REVENUE = "REVENUE"
    COST_OF_SALES = "COST_OF_SALES"
    OPERATING_EXPENSE = "OPERATING_EXPENSE"
    OTHER_INCOME = "OTHER_INCOME"
    OTHER_EXPENSE = "OTHER_EXPENSE"

    @property
    def title(self) -> str:
        return _PROFIT_LOSS_TITLES[self]


class CashFlowSectionType(str, Enum):
    """IAS 7 activity sections of a cash flow statement."""

    OPERATING = "OPERATING"
    INVESTING = "INVESTING"
    FINANCING = "FINANCING"

    @property
    def title(self) -> str:
        return f"{self.value.title()} Activities"


_PROFIT_LOSS_TITLES = {
    ProfitLossSectionType.REVENUE: "Revenue",
    ProfitLossSectionType.COST_OF_SALES: "Cost of Sales",
    ProfitLossSectionType.OPERATING_EXPENSE: "Operating Expenses",
    ProfitLossSectionType.OTHER_INCOME: "Other Income",
    ProfitLossSectionType.OTHER_EXPENSE: "Other Expenses",
}


@dataclass(frozen=True)
class ReportPeriod:
    """Inclusive date window."""

    start_date: date
    end_date: date

    @property
    def days(self) -> int:
        return (self.end_date - self.start_date).days


@dataclass(frozen=True)
class StatementLine:
    """One account or activity inside a statement section.

    Attributes:
        account_id: Source account identifier.
        account_number: Account number used for ordering.
        name: Display name of the line.
        account_type: Account type of the source account.
        account_category: Category of the source account.
        current_period_amount: Amount counted in the section subtotal.
        net_activity: Period activity signed by the normal balance.
        comparative_period_amount: Same measure for the comparative period.
        variance: Current minus comparative amount.
        variance_percent: Variance relative to the comparative amount.
    """

    account_id: str
    account_number: str
    name: str
    account_type: str
    account_category: str
    current_period_amount: Decimal
    net_activity: Decimal
    level: int = 0
    is_header: bool = False
    parent_id: str | None = None
    comparative_period_amount: Decimal | None = None
    variance: Decimal | None = None
    variance_percent: Decimal | None = None


@dataclass(frozen=True)
class StatementSection:
    """Named bucket of lines with its subtotal and comparative figures."""

    name: str
    section_type: str
    lines: tuple[StatementLine, ...]
    subtotal: Decimal
    comparative_subtotal: Decimal | None = None
    variance: Decimal | None = None
    variance_percent: Decimal | None = None


@dataclass(frozen=True)
class ProfitLossMetrics:
    """Derived income statement figures."""

    total_revenue: Decimal
    total_cost_of_sales: Decimal
    gross_profit: Decimal
    gross_profit_margin: Decimal
    total_operating_expenses: Decimal
    operating_income: Decimal
    operating_margin: Decimal
    total_other_income: Decimal
    total_other_expenses: Decimal
    net_income_before_tax: Decimal
    income_tax_expense: Decimal
    net_income_after_tax: Decimal
    net_profit_margin: Decimal
    comparative_total_revenue: Decimal | None = None
    comparative_gross_profit: Decimal | None = None
    comparative_operating_income: Decimal | None = None
    comparative_net_income: Decimal | None = None
    revenue_variance: Decimal | None = None
    revenue_variance_percent: Decimal | None = None
    gross_profit_variance: Decimal | None = None
    gross_profit_variance_percent: Decimal | None = None
    operating_income_variance: Decimal | None = None
    operating_income_variance_percent: Decimal | None = None
    net_income_variance: Decimal | None = None
    net_income_variance_percent: Decimal | None = None


@dataclass(frozen=True)
class StatementMetadata:
    """Descriptive figures about a generated statement."""

    total_accounts: int
    accounts_with_activity: int
    period_days: int
    based_on_trial_balance: bool = True


@dataclass(frozen=True)
class ProfitLossReport:
    """Income statement for a period."""

    period: ReportPeriod
    comparative_period: ReportPeriod | None
    generated_at: datetime
    currency: str
    report_format: str
    revenue: StatementSection
    cost_of_sales: StatementSection
    operating_expenses: StatementSection
    other_income: StatementSection
    other_expenses: StatementSection
    metrics: ProfitLossMetrics
    metadata: StatementMetadata

    @property
    def success(self) -> bool:
        return True

    @property
    def sections(self) -> tuple[StatementSection, ...]:
        return (
            self.revenue,
            self.cost_of_sales,
            self.operating_expenses,
            self.other_income,
            self.other_expenses,
        )


@dataclass(frozen=True)
class CashFlowMetrics:
    """Derived cash flow figures."""

    net_cash_from_operating: Decimal
    net_cash_from_investing: Decimal
    net_cash_from_financing: Decimal
    net_change_in_cash: Decimal
    beginning_cash_balance: Decimal
    ending_cash_balance: Decimal
    comparative_net_cash_from_operating: Decimal | None = None
    comparative_net_cash_from_investing: Decimal | None = None
    comparative_net_cash_from_financing: Decimal | None = None
    comparative_net_change_in_cash: Decimal | None = None
    comparative_beginning_cash_balance: Decimal | None = None
    comparative_ending_cash_balance: Decimal | None = None
    operating_cash_variance: Decimal | None = None
    investing_cash_variance: Decimal | None = None
    financing_cash_variance: Decimal | None = None
    net_cash_variance: Decimal | None = None
    net_cash_variance_percent: Decimal | None = None


@dataclass(frozen=True)
class ReconciliationAdjustment:
    """Non-cash item added back to or subtracted from net income."""

    description: str
    amount: Decimal
    type: str


@dataclass(frozen=True)
class WorkingCapitalChange:
    """Change in a working-capital line and its effect on cash."""

    description: str
    amount: Decimal
    type: str


@dataclass(frozen=True)
class CashFlowReconciliation:
    """Indirect-method bridge from net income to operating cash."""

    net_income: Decimal
    adjustments: tuple[ReconciliationAdjustment, ...]
    working_capital_changes: tuple[WorkingCapitalChange, ...]


@dataclass(frozen=True)
class CashFlowReport:
    """Statement of cash flows for a period."""

    period: ReportPeriod
    comparative_period: ReportPeriod | None
    generated_at: datetime
    currency: str
    method: str
    report_format: str
    operating_activities: StatementSection
    investing_activities: StatementSection
    financing_activities: StatementSection
    metrics: CashFlowMetrics
    reconciliation: CashFlowReconciliation | None
    metadata: StatementMetadata

    @property
    def success(self) -> bool:
        return True

    @property
    def sections(self) -> tuple[StatementSection, ...]:
        return (
            self.operating_activities,
            self.investing_activities,
            self.financing_activities,
        )


__all__ = [
    "ProfitLossSectionType",
    "CashFlowSectionType",
    "ReportPeriod",
    "StatementLine",
    "StatementSection",
    "ProfitLossMetrics",
    "StatementMetadata",
    "ProfitLossReport",
    "CashFlowMetrics",
    "ReconciliationAdjustment",
    "WorkingCapitalChange",
    "CashFlowReconciliation",
    "CashFlowReport",
]
