"""Variance and percentage arithmetic for comparative reports."""

from decimal import Decimal

from ledger_reports.utils.decimal_utils import coerce_decimal, round_money


def compute_variance(current, comparative) -> Decimal:
    """Return current minus comparative."""
    return coerce_decimal(current) - coerce_decimal(comparative)


def compute_variance_percent(current, comparative) -> Decimal:
    """Return the variance relative to the absolute comparative value.

    Returns 0 when the comparative amount is 0.
    """
    comparative = coerce_decimal(comparative)
    if comparative == 0:
        return Decimal("0.00")
    variance = compute_variance(current, comparative)
    return round_money(variance / abs(comparative) * 100)


def percent_of(part, whole) -> Decimal:
    """Return part as a percentage of whole, 0 when whole is 0."""
    whole = coerce_decimal(whole)
    if whole == 0:
        return Decimal("0.00")
    return round_money(coerce_decimal(part) / whole * 100)


__all__ = ["compute_variance", "compute_variance_percent", "percent_of"]
