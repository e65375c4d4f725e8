"""Versioned lookup tables classifying accounts into statement sections.

The tables are plain data injected into the statement use cases, so a
deployment can ship its own mapping without touching the algorithms.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from ledger_reports.domain.constants import (
    CASH_CATEGORIES,
    EXPENSE,
    LIABILITY,
    REVENUE,
)
from ledger_reports.domain.models.statements import (
    CashFlowSectionType,
    ProfitLossSectionType,
)

REVENUE_SECTIONS = frozenset(
    {ProfitLossSectionType.REVENUE, ProfitLossSectionType.OTHER_INCOME}
)
EXPENSE_SECTIONS = frozenset(
    {
        ProfitLossSectionType.COST_OF_SALES,
        ProfitLossSectionType.OPERATING_EXPENSE,
        ProfitLossSectionType.OTHER_EXPENSE,
    }
)


def _normalize(value: str | None) -> str:
    return (value or "").strip().upper()


def _freeze(mapping: Mapping) -> Mapping:
    return MappingProxyType(
        {_normalize(key): value for key, value in mapping.items()}
    )


@dataclass(frozen=True)
class ProfitLossClassification:
    """Category to income statement section table.

    Attributes:
        version: Identifier of the table revision.
        category_sections: Account category mapped to its section.
    """

    version: str
    category_sections: Mapping[str, ProfitLossSectionType]

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "category_sections", _freeze(self.category_sections)
        )

    def section_for(
        self,
        account_type: str,
        category: str | None,
    ) -> ProfitLossSectionType | None:
        """Return the section of an account, or None when it has none.

        Revenue accounts may only land in revenue sections and expense
        accounts only in expense sections.
        """
        section = self.category_sections.get(_normalize(category))
        if section is None:
            return None
        normalized_type = _normalize(account_type)
        if normalized_type == REVENUE and section in REVENUE_SECTIONS:
            return section
        if normalized_type == EXPENSE and section in EXPENSE_SECTIONS:
            return section
        return None


@dataclass(frozen=True)
class CashFlowClassification:
    """Type and category tables for IAS 7 activity sections.

    Resolution order: cash categories are left out, operating account types
    win, then the category table, then the type table, then liabilities
    default to financing unless their category is an operating liability,
    and anything left is operating.
    """

    version: str
    type_sections: Mapping[str, CashFlowSectionType]
    category_sections: Mapping[str, CashFlowSectionType]
    operating_liability_categories: frozenset[str] = field(
        default_factory=frozenset
    )
    cash_categories: frozenset[str] = frozenset(CASH_CATEGORIES)

    def __post_init__(self) -> None:
        object.__setattr__(self, "type_sections", _freeze(self.type_sections))
        object.__setattr__(
            self, "category_sections", _freeze(self.category_sections)
        )
        object.__setattr__(
            self,
            "operating_liability_categories",
            frozenset(
                _normalize(item) for item in self.operating_liability_categories
            ),
        )
        object.__setattr__(
            self,
            "cash_categories",
            frozenset(_normalize(item) for item in self.cash_categories),
        )

    def is_cash(self, category: str | None) -> bool:
        return _normalize(category) in self.cash_categories

    def section_for(
        self,
        account_type: str,
        category: str | None,
    ) -> CashFlowSectionType | None:
        """Return the activity section of an account (None for cash)."""
        normalized_type = _normalize(account_type)
        normalized_category = _normalize(category)
        if normalized_category in self.cash_categories:
            return None
        type_section = self.type_sections.get(normalized_type)
        if type_section is CashFlowSectionType.OPERATING:
            return type_section
        category_section = self.category_sections.get(normalized_category)
        if category_section is not None:
            return category_section
        if type_section is not None:
            return type_section
        if normalized_type == LIABILITY:
            if normalized_category in self.operating_liability_categories:
                return CashFlowSectionType.OPERATING
            return CashFlowSectionType.FINANCING
        return CashFlowSectionType.OPERATING


_PL = ProfitLossSectionType
_CF = CashFlowSectionType

DEFAULT_PROFIT_LOSS_CLASSIFICATION = ProfitLossClassification(
    version="2024.1",
    category_sections={
        "SALES_REVENUE": _PL.REVENUE,
        "SERVICE_REVENUE": _PL.REVENUE,
        "PRODUCT_REVENUE": _PL.REVENUE,
        "SUBSCRIPTION_REVENUE": _PL.REVENUE,
        "OTHER_OPERATING_REVENUE": _PL.REVENUE,
        "COST_OF_GOODS_SOLD": _PL.COST_OF_SALES,
        "COST_OF_SERVICES": _PL.COST_OF_SALES,
        "DIRECT_MATERIALS": _PL.COST_OF_SALES,
        "DIRECT_LABOR": _PL.COST_OF_SALES,
        "MANUFACTURING_OVERHEAD": _PL.COST_OF_SALES,
        "SELLING_EXPENSES": _PL.OPERATING_EXPENSE,
        "ADMINISTRATIVE_EXPENSES": _PL.OPERATING_EXPENSE,
        "GENERAL_EXPENSES": _PL.OPERATING_EXPENSE,
        "MARKETING_EXPENSES": _PL.OPERATING_EXPENSE,
        "RESEARCH_DEVELOPMENT": _PL.OPERATING_EXPENSE,
        "DEPRECIATION_AMORTIZATION": _PL.OPERATING_EXPENSE,
        "INTEREST_INCOME": _PL.OTHER_INCOME,
        "INVESTMENT_INCOME": _PL.OTHER_INCOME,
        "GAIN_ON_SALE": _PL.OTHER_INCOME,
        "FOREIGN_EXCHANGE_GAIN": _PL.OTHER_INCOME,
        "OTHER_NON_OPERATING_INCOME": _PL.OTHER_INCOME,
        "INTEREST_EXPENSE": _PL.OTHER_EXPENSE,
        "LOSS_ON_SALE": _PL.OTHER_EXPENSE,
        "FOREIGN_EXCHANGE_LOSS": _PL.OTHER_EXPENSE,
        "OTHER_NON_OPERATING_EXPENSE": _PL.OTHER_EXPENSE,
    },
)

DEFAULT_CASH_FLOW_CLASSIFICATION = CashFlowClassification(
    version="2024.1",
    type_sections={
        "REVENUE": _CF.OPERATING,
        "EXPENSE": _CF.OPERATING,
        "FIXED_ASSET": _CF.INVESTING,
        "PROPERTY_PLANT_EQUIPMENT": _CF.INVESTING,
        "INTANGIBLE_ASSET": _CF.INVESTING,
        "INVESTMENT": _CF.INVESTING,
        "LONG_TERM_INVESTMENT": _CF.INVESTING,
        "EQUITY": _CF.FINANCING,
        "SHARE_CAPITAL": _CF.FINANCING,
        "RETAINED_EARNINGS": _CF.FINANCING,
        "LONG_TERM_LIABILITY": _CF.FINANCING,
        "SHORT_TERM_LIABILITY": _CF.FINANCING,
    },
    category_sections={
        "PROPERTY_PLANT_EQUIPMENT": _CF.INVESTING,
        "INTANGIBLE_ASSETS": _CF.INVESTING,
        "INVESTMENTS": _CF.INVESTING,
        "LONG_TERM_INVESTMENTS": _CF.INVESTING,
        "MARKETABLE_SECURITIES": _CF.INVESTING,
        "INVESTMENT_PROPERTY": _CF.INVESTING,
        "SUBSIDIARIES": _CF.INVESTING,
        "ASSOCIATES": _CF.INVESTING,
        "JOINT_VENTURES": _CF.INVESTING,
        "SHARE_CAPITAL": _CF.FINANCING,
        "ADDITIONAL_PAID_IN_CAPITAL": _CF.FINANCING,
        "TREASURY_STOCK": _CF.FINANCING,
        "DIVIDENDS_PAYABLE": _CF.FINANCING,
        "LONG_TERM_DEBT": _CF.FINANCING,
        "NOTES_PAYABLE": _CF.FINANCING,
        "BONDS_PAYABLE": _CF.FINANCING,
        "BANK_LOANS": _CF.FINANCING,
        "MORTGAGE_PAYABLE": _CF.FINANCING,
        "LEASE_LIABILITY": _CF.FINANCING,
        "CONVERTIBLE_DEBT": _CF.FINANCING,
        "PREFERENCE_SHARES": _CF.FINANCING,
    },
    operating_liability_categories=frozenset(
        {
            "ACCOUNTS_PAYABLE",
            "ACCRUED_EXPENSES",
            "TAXES_PAYABLE",
            "WAGES_PAYABLE",
            "INTEREST_PAYABLE",
        }
    ),
)


__all__ = [
    "ProfitLossClassification",
    "CashFlowClassification",
    "DEFAULT_PROFIT_LOSS_CLASSIFICATION",
    "DEFAULT_CASH_FLOW_CLASSIFICATION",
    "REVENUE_SECTIONS",
    "EXPENSE_SECTIONS",
]
