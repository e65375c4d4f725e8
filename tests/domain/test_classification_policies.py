"""Tests for classification tables, adjustment classifiers and tax policies."""

from decimal import Decimal

import pytest

from ledger_reports.domain.models import (
    Account,
    CashFlowSectionType,
    ProfitLossSectionType,
)
from ledger_reports.domain.policies import (
    DEFAULT_CASH_FLOW_CLASSIFICATION,
    DEFAULT_PROFIT_LOSS_CLASSIFICATION,
    AdjustmentCategory,
    FlatRateIncomeTaxPolicy,
    KeywordClassifier,
    KeywordRule,
    NoIncomeTaxPolicy,
    ProfitLossClassification,
    WorkingCapitalItem,
    default_non_cash_classifier,
    default_working_capital_classifier,
)


def _account(name, account_type, category=""):
    return Account(
        id=name.lower(),
        number="1",
        name=name,
        account_type=account_type,
        category=category,
    )


@pytest.mark.parametrize(
    ("account_type", "category", "expected"),
    [
        ("REVENUE", "SALES_REVENUE", ProfitLossSectionType.REVENUE),
        ("REVENUE", "interest_income", ProfitLossSectionType.OTHER_INCOME),
        ("EXPENSE", "COST_OF_GOODS_SOLD", ProfitLossSectionType.COST_OF_SALES),
        (
            "EXPENSE",
            "DEPRECIATION_AMORTIZATION",
            ProfitLossSectionType.OPERATING_EXPENSE,
        ),
        ("EXPENSE", "INTEREST_EXPENSE", ProfitLossSectionType.OTHER_EXPENSE),
        ("EXPENSE", "SALES_REVENUE", None),
        ("REVENUE", "UNMAPPED", None),
        ("ASSET", "SALES_REVENUE", None),
    ],
)
def test_profit_loss_section_for(account_type, category, expected) -> None:
    """Categories map to sections compatible with the account type."""
    assert (
        DEFAULT_PROFIT_LOSS_CLASSIFICATION.section_for(account_type, category)
        is expected
    )


def test_profit_loss_classification_accepts_custom_table() -> None:
    """A deployment can inject its own category table."""
    custom = ProfitLossClassification(
        version="custom-1",
        category_sections={"royalties": ProfitLossSectionType.REVENUE},
    )

    assert custom.section_for("REVENUE", "ROYALTIES") is (
        ProfitLossSectionType.REVENUE
    )
    assert custom.section_for("REVENUE", "SALES_REVENUE") is None


@pytest.mark.parametrize(
    ("account_type", "category", "expected"),
    [
        ("ASSET", "CASH", None),
        ("ASSET", "cash_equivalents", None),
        ("REVENUE", "INVESTMENTS", CashFlowSectionType.OPERATING),
        ("ASSET", "PROPERTY_PLANT_EQUIPMENT", CashFlowSectionType.INVESTING),
        ("ASSET", "ACCOUNTS_RECEIVABLE", CashFlowSectionType.OPERATING),
        ("LIABILITY", "ACCOUNTS_PAYABLE", CashFlowSectionType.OPERATING),
        ("LIABILITY", "BANK_LOANS", CashFlowSectionType.FINANCING),
        ("LIABILITY", "DEFERRED_REVENUE", CashFlowSectionType.FINANCING),
        ("EQUITY", "RETAINED_EARNINGS", CashFlowSectionType.FINANCING),
    ],
)
def test_cash_flow_section_for(account_type, category, expected) -> None:
    """Cash is excluded and the IAS 7 resolution order applies."""
    assert (
        DEFAULT_CASH_FLOW_CLASSIFICATION.section_for(account_type, category)
        is expected
    )


def test_non_cash_classifier_matches_keywords_first_rule_wins() -> None:
    """Disposal rules are checked before generic expense keywords."""
    classifier = default_non_cash_classifier()

    assert classifier.classify(
        _account("Depreciation Expense", "EXPENSE")
    ) is AdjustmentCategory.DEPRECIATION_AMORTIZATION
    assert classifier.classify(
        _account("Gain on Disposal of Vehicles", "REVENUE")
    ) is AdjustmentCategory.DISPOSAL_GAIN
    assert classifier.classify(
        _account("Loss on disposal", "EXPENSE")
    ) is AdjustmentCategory.DISPOSAL_LOSS
    assert classifier.classify(
        _account("Allowance for Doubtful Accounts", "EXPENSE")
    ) is AdjustmentCategory.BAD_DEBT
    assert classifier.classify(
        _account("Accumulated Depreciation", "ASSET")
    ) is None
    assert classifier.classify(_account("Rent", "EXPENSE")) is None


def test_working_capital_classifier_restricts_account_types() -> None:
    """Working-capital keywords only apply to assets and liabilities."""
    classifier = default_working_capital_classifier()

    assert classifier.classify(
        _account("Trade Receivables", "ASSET")
    ) is WorkingCapitalItem.ACCOUNTS_RECEIVABLE
    assert classifier.classify(
        _account("Inventory", "ASSET")
    ) is WorkingCapitalItem.INVENTORY
    assert classifier.classify(
        _account("Accrued Wages", "LIABILITY")
    ) is WorkingCapitalItem.ACCRUED_LIABILITIES
    assert classifier.classify(
        _account("Accounts Payable", "LIABILITY")
    ) is WorkingCapitalItem.ACCOUNTS_PAYABLE
    assert classifier.classify(_account("Notes Payable", "ASSET")) is None


def test_keyword_rule_without_keywords_never_matches() -> None:
    """An empty rule should not classify every account."""
    classifier = KeywordClassifier(
        (KeywordRule(AdjustmentCategory.BAD_DEBT),)
    )

    assert classifier.classify(_account("Anything", "EXPENSE")) is None


def test_tax_policies() -> None:
    """No-tax passes income through and a flat rate taxes profits only."""
    flat = FlatRateIncomeTaxPolicy(Decimal("0.24"))

    assert NoIncomeTaxPolicy().income_tax(Decimal("1000")) == Decimal("0")
    assert flat.income_tax(Decimal("1000")) == Decimal("240.00")
    assert flat.income_tax(Decimal("-500")) == Decimal("0")
    with pytest.raises(ValueError):
        FlatRateIncomeTaxPolicy(Decimal("1.5"))
