"""Installment plan fee calculator."""

from decimal import Decimal

from ledger_engine.domain.errors import ValidationError
from ledger_engine.domain.models.enums import FeeStrategy
from ledger_engine.utils.decimal_utils import (
    coerce_decimal,
    divide_money,
    quantize_money,
    sum_money,
)


def fee_amount(total_amount, fee_rate) -> Decimal:
    """Return the total fee charged on the plan.

    Args:
        total_amount: Financed purchase amount.
        fee_rate: Fee as a fraction of the amount (``0.05`` is 5%).

    Returns:
        Decimal: Fee rounded to cents.
    """
    return quantize_money(coerce_decimal(total_amount) * coerce_decimal(fee_rate))


def total_payment(total_amount, fee_rate) -> Decimal:
    """Return the amount plus the fee."""
    return quantize_money(
        coerce_decimal(total_amount) + fee_amount(total_amount, fee_rate)
    )


def monthly_payment(
    total_amount,
    total_periods: int,
    fee_rate,
    fee_strategy: FeeStrategy,
    period: int,
) -> Decimal:
    """Return the payment due for one 1-based period.

    Args:
        total_amount: Financed purchase amount.
        total_periods: Number of periods in the plan.
        fee_rate: Fee as a fraction of the amount.
        fee_strategy: Where the fee is charged.
        period: 1-based period number.

    Returns:
        Decimal: Payment rounded to cents.

    Raises:
        ValidationError: If the period is out of range.
    """
    if total_periods < 1:
        raise ValidationError("Total periods must be at least 1")
    if period < 1 or period > total_periods:
        raise ValidationError(
            f"Period {period} is outside 1..{total_periods}"
        )
    amount = coerce_decimal(total_amount)
    fee = fee_amount(amount, fee_rate)
    base = divide_money(amount, total_periods)

    if fee_strategy == FeeStrategy.EVENLY_SPLIT:
        return divide_money(amount + fee, total_periods)
    if fee_strategy == FeeStrategy.UPFRONT:
        return quantize_money(base + fee) if period == 1 else base
    if fee_strategy == FeeStrategy.FINAL:
        return quantize_money(base + fee) if period == total_periods else base
    raise ValidationError(f"Unknown fee strategy: {fee_strategy}")


def remaining_amount(
    total_amount,
    total_periods: int,
    fee_rate,
    fee_strategy: FeeStrategy,
    paid_periods: int,
) -> Decimal:
    """Sum the payments still due after ``paid_periods``."""
    return sum_money(
        monthly_payment(
            total_amount, total_periods, fee_rate, fee_strategy, period
        )
        for period in range(paid_periods + 1, total_periods + 1)
    )


__all__ = [
    "fee_amount",
    "total_payment",
    "monthly_payment",
    "remaining_amount",
]
