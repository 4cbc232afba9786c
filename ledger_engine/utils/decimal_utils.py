"""Helpers for Decimal normalization and money rounding."""

from decimal import ROUND_HALF_UP, Decimal

MONEY_PLACES = Decimal("0.01")
RATE_PLACES = Decimal("0.0000000001")
ZERO = Decimal("0")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from callers or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def quantize_money(value) -> Decimal:
    """Round a value to two fractional digits using half-up rounding.

    Args:
        value: Raw numeric value.

    Returns:
        Decimal: Value scaled to cents.
    """
    return coerce_decimal(value).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)


def divide_money(numerator, denominator) -> Decimal:
    """Divide and round the quotient to cents."""
    return quantize_money(coerce_decimal(numerator) / coerce_decimal(denominator))


def divide_rate(numerator, denominator) -> Decimal:
    """Divide keeping ten fractional digits for intermediate rates."""
    quotient = coerce_decimal(numerator) / coerce_decimal(denominator)
    return quotient.quantize(RATE_PLACES, rounding=ROUND_HALF_UP)


def sum_money(values) -> Decimal:
    """Sum an iterable of amounts and round the total to cents."""
    return quantize_money(sum((coerce_decimal(v) for v in values), ZERO))


__all__ = [
    "MONEY_PLACES",
    "RATE_PLACES",
    "ZERO",
    "coerce_decimal",
    "quantize_money",
    "divide_money",
    "divide_rate",
    "sum_money",
]
