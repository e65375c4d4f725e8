"""Helpers for Decimal normalization."""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")
ZERO = Decimal("0")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL, JSON documents or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, str) and not value.strip():
        return Decimal("0")
    return Decimal(str(value))


def round_money(value: Decimal) -> Decimal:
    """Round an amount to cents using half-up rounding."""
    return coerce_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


__all__ = ["CENT", "ZERO", "coerce_decimal", "round_money"]
