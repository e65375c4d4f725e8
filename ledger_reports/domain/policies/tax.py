"""Income tax hooks for the income statement."""

from decimal import Decimal
from typing import Protocol

from ledger_reports.utils.decimal_utils import round_money


class IncomeTaxPolicy(Protocol):
    """Computes income tax expense from pre-tax income."""

    def income_tax(self, net_income_before_tax: Decimal) -> Decimal:
        """Return the tax expense to deduct from pre-tax income."""


class NoIncomeTaxPolicy:
    """Pass-through: after-tax income equals pre-tax income."""

    def income_tax(self, net_income_before_tax: Decimal) -> Decimal:
        return Decimal("0")


class FlatRateIncomeTaxPolicy:
    """Flat rate applied to positive pre-tax income."""

    def __init__(self, rate: Decimal) -> None:
        if rate < 0 or rate > 1:
            raise ValueError(f"Tax rate must be between 0 and 1, got {rate}")
        self._rate = rate

    def income_tax(self, net_income_before_tax: Decimal) -> Decimal:
        if net_income_before_tax <= 0:
            return Decimal("0")
        return round_money(net_income_before_tax * self._rate)


__all__ = ["IncomeTaxPolicy", "NoIncomeTaxPolicy", "FlatRateIncomeTaxPolicy"]
