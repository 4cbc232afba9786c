"""Loan amortization calculator.

Pure functions: Decimal in, Decimal or dataclass out. No state, no I/O.
The monthly rate is ``annual_interest_rate / 100 / 12`` kept at ten
fractional digits; every payment is rounded half-up to cents.
"""

from decimal import Decimal

from ledger_engine.domain.errors import ValidationError
from ledger_engine.domain.models.enums import RepaymentType
from ledger_engine.domain.models.finance import LoanScheduleRow
from ledger_engine.utils.decimal_utils import (
    ZERO,
    coerce_decimal,
    divide_money,
    divide_rate,
    quantize_money,
    sum_money,
)


def monthly_rate(annual_interest_rate) -> Decimal:
    """Convert an annual percentage rate into a monthly fraction.

    Args:
        annual_interest_rate: Annual rate in percent (``12`` means 12%).

    Returns:
        Decimal: Monthly rate with ten fractional digits.
    """
    if annual_interest_rate is None:
        return ZERO
    return divide_rate(divide_rate(annual_interest_rate, 100), 12)


def _check_period(period: int, total_periods: int) -> None:
    if total_periods < 1:
        raise ValidationError("Total periods must be at least 1")
    if period < 1 or period > total_periods:
        raise ValidationError(
            f"Period {period} is outside 1..{total_periods}"
        )


def monthly_repayment(
    loan_amount,
    total_periods: int,
    annual_interest_rate,
    repayment_type: RepaymentType,
    period: int,
) -> Decimal:
    """Return the amount due for one period of the loan.

    Args:
        loan_amount: Principal ``P``.
        total_periods: Number of monthly periods ``n``.
        annual_interest_rate: Annual rate in percent.
        repayment_type: Amortization schedule.
        period: 1-based period number.

    Returns:
        Decimal: Payment for the period, rounded to cents.

    Raises:
        ValidationError: If the period is out of range.
    """
    _check_period(period, total_periods)
    principal = coerce_decimal(loan_amount)
    rate = monthly_rate(annual_interest_rate)
    if rate == 0:
        return divide_money(principal, total_periods)

    if repayment_type == RepaymentType.EQUAL_INTEREST:
        # M = P * r * (1 + r)^n / ((1 + r)^n - 1)
        factor = (1 + rate) ** total_periods
        return divide_money(principal * rate * factor, factor - 1)
    if repayment_type == RepaymentType.EQUAL_PRINCIPAL:
        monthly_principal = divide_money(principal, total_periods)
        remaining_principal = principal - monthly_principal * (period - 1)
        interest = quantize_money(remaining_principal * rate)
        return quantize_money(monthly_principal + interest)
    if repayment_type == RepaymentType.EQUAL_PRINCIPAL_AND_INTEREST:
        total_interest = principal * rate * total_periods
        return divide_money(principal + total_interest, total_periods)
    if repayment_type == RepaymentType.INTEREST_BEFORE_PRINCIPAL:
        monthly_interest = quantize_money(principal * rate)
        if period < total_periods:
            return monthly_interest
        return quantize_money(principal + monthly_interest)
    raise ValidationError(f"Unknown repayment type: {repayment_type}")


def calculate_total_repayment(
    loan_amount,
    total_periods: int,
    annual_interest_rate,
    repayment_type: RepaymentType,
) -> Decimal:
    """Return the total amount repaid over the life of the loan."""
    if total_periods < 1:
        raise ValidationError("Total periods must be at least 1")
    principal = coerce_decimal(loan_amount)
    rate = monthly_rate(annual_interest_rate)
    if rate == 0:
        return quantize_money(
            divide_money(principal, total_periods) * total_periods
        )

    if repayment_type == RepaymentType.EQUAL_INTEREST:
        payment = monthly_repayment(
            principal, total_periods, annual_interest_rate, repayment_type, 1
        )
        return quantize_money(payment * total_periods)
    if repayment_type == RepaymentType.EQUAL_PRINCIPAL:
        return sum_money(
            monthly_repayment(
                principal,
                total_periods,
                annual_interest_rate,
                repayment_type,
                period,
            )
            for period in range(1, total_periods + 1)
        )
    if repayment_type == RepaymentType.EQUAL_PRINCIPAL_AND_INTEREST:
        return quantize_money(principal + principal * rate * total_periods)
    if repayment_type == RepaymentType.INTEREST_BEFORE_PRINCIPAL:
        monthly_interest = quantize_money(principal * rate)
        return quantize_money(
            monthly_interest * (total_periods - 1)
            + principal
            + monthly_interest
        )
    raise ValidationError(f"Unknown repayment type: {repayment_type}")


def remaining_for_repaid_periods(
    loan_amount,
    total_periods: int,
    annual_interest_rate,
    repayment_type: RepaymentType,
    repaid_periods: int,
) -> Decimal:
    """Return what is still owed once ``repaid_periods`` have been paid."""
    if repaid_periods < 0 or repaid_periods > total_periods:
        raise ValidationError(
            "Repaid periods must be between 0 and total periods"
        )
    if repaid_periods == 0 and monthly_rate(annual_interest_rate) == 0:
        return quantize_money(loan_amount)
    return sum_money(
        monthly_repayment(
            loan_amount,
            total_periods,
            annual_interest_rate,
            repayment_type,
            period,
        )
        for period in range(repaid_periods + 1, total_periods + 1)
    )


def count_covered_periods(
    amount,
    loan_amount,
    total_periods: int,
    annual_interest_rate,
    repayment_type: RepaymentType,
    repaid_periods: int,
) -> int:
    """Count whole upcoming periods an amount pays for.

    Periods are consumed in order and counting stops at the first period
    whose cumulative cost would exceed ``amount``.
    """
    budget = coerce_decimal(amount)
    paid = ZERO
    covered = 0
    for period in range(repaid_periods + 1, total_periods + 1):
        payment = monthly_repayment(
            loan_amount,
            total_periods,
            annual_interest_rate,
            repayment_type,
            period,
        )
        if paid + payment > budget:
            break
        paid += payment
        covered += 1
    return covered


def build_schedule(
    loan_amount,
    total_periods: int,
    annual_interest_rate,
    repayment_type: RepaymentType,
) -> list[LoanScheduleRow]:
    """Return the full period-by-period amortization schedule."""
    principal = coerce_decimal(loan_amount)
    rate = monthly_rate(annual_interest_rate)
    balance = principal
    rows: list[LoanScheduleRow] = []
    for period in range(1, total_periods + 1):
        payment = monthly_repayment(
            principal,
            total_periods,
            annual_interest_rate,
            repayment_type,
            period,
        )
        if rate == 0:
            interest = ZERO
        elif repayment_type == RepaymentType.EQUAL_INTEREST:
            interest = quantize_money(balance * rate)
        elif repayment_type == RepaymentType.EQUAL_PRINCIPAL:
            interest = payment - divide_money(principal, total_periods)
        elif repayment_type == RepaymentType.EQUAL_PRINCIPAL_AND_INTEREST:
            interest = payment - divide_money(principal, total_periods)
        else:
            interest = quantize_money(principal * rate)
        principal_part = quantize_money(payment - interest)
        balance -= principal_part
        rows.append(
            LoanScheduleRow(
                period=period,
                payment=payment,
                principal=principal_part,
                interest=quantize_money(interest),
            )
        )
    return rows


__all__ = [
    "monthly_rate",
    "monthly_repayment",
    "calculate_total_repayment",
    "remaining_for_repaid_periods",
    "count_covered_periods",
    "build_schedule",
]
