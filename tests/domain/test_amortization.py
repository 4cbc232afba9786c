"""Tests for the loan amortization calculator."""

from decimal import Decimal

import pytest

from ledger_engine.domain.errors import ValidationError
from ledger_engine.domain.models import RepaymentType
from ledger_engine.domain.services import amortization


def test_monthly_rate_divides_percent_by_twelve() -> None:
    assert amortization.monthly_rate("12") == Decimal("0.0100000000")
    assert amortization.monthly_rate(None) == Decimal("0")


@pytest.mark.parametrize("repayment_type", list(RepaymentType))
def test_zero_rate_is_flat_for_every_type(repayment_type: RepaymentType) -> None:
    payments = [
        amortization.monthly_repayment("1200", 12, "0", repayment_type, period)
        for period in range(1, 13)
    ]

    assert set(payments) == {Decimal("100.00")}
    assert amortization.calculate_total_repayment(
        "1200", 12, "0", repayment_type
    ) == Decimal("1200.00")


def test_equal_interest_schedule_matches_total() -> None:
    """The schedule of 12000 over 12 months at 12% sums to the total."""
    rows = amortization.build_schedule(
        "12000", 12, "12", RepaymentType.EQUAL_INTEREST
    )
    total = amortization.calculate_total_repayment(
        "12000", 12, "12", RepaymentType.EQUAL_INTEREST
    )

    assert len(rows) == 12
    assert rows[0].payment == Decimal("1066.19")
    assert rows[0].interest == Decimal("120.00")
    assert rows[0].principal == Decimal("946.19")
    assert sum(row.payment for row in rows) == total
    assert total == Decimal("12794.28")


def test_equal_principal_payments_decline() -> None:
    first = amortization.monthly_repayment(
        "1200", 12, "12", RepaymentType.EQUAL_PRINCIPAL, 1
    )
    last = amortization.monthly_repayment(
        "1200", 12, "12", RepaymentType.EQUAL_PRINCIPAL, 12
    )

    assert first == Decimal("112.00")
    assert last == Decimal("101.00")
    assert amortization.calculate_total_repayment(
        "1200", 12, "12", RepaymentType.EQUAL_PRINCIPAL
    ) == Decimal("1278.00")


def test_equal_principal_and_interest_is_flat() -> None:
    payment = amortization.monthly_repayment(
        "1200", 12, "12", RepaymentType.EQUAL_PRINCIPAL_AND_INTEREST, 5
    )

    assert payment == Decimal("112.00")
    assert amortization.calculate_total_repayment(
        "1200", 12, "12", RepaymentType.EQUAL_PRINCIPAL_AND_INTEREST
    ) == Decimal("1344.00")


def test_interest_before_principal_pays_principal_last() -> None:
    payments = [
        amortization.monthly_repayment(
            "1200", 12, "12", RepaymentType.INTEREST_BEFORE_PRINCIPAL, period
        )
        for period in range(1, 13)
    ]

    assert payments[:11] == [Decimal("12.00")] * 11
    assert payments[11] == Decimal("1212.00")
    assert amortization.calculate_total_repayment(
        "1200", 12, "12", RepaymentType.INTEREST_BEFORE_PRINCIPAL
    ) == Decimal("1344.00")


@pytest.mark.parametrize("period", [0, 13])
def test_period_out_of_range_raises(period: int) -> None:
    with pytest.raises(ValidationError):
        amortization.monthly_repayment(
            "1200", 12, "12", RepaymentType.EQUAL_INTEREST, period
        )


def test_remaining_for_repaid_periods_sums_upcoming_payments() -> None:
    remaining = amortization.remaining_for_repaid_periods(
        "1200", 12, "12", RepaymentType.EQUAL_PRINCIPAL, 11
    )

    assert remaining == Decimal("101.00")


def test_count_covered_periods_stops_at_first_unaffordable_period() -> None:
    covered = amortization.count_covered_periods(
        "224", "1200", 12, "12", RepaymentType.EQUAL_PRINCIPAL, 0
    )

    # 112.00 + 111.00 fits, adding 110.00 does not.
    assert covered == 2
