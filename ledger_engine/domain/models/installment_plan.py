"""Domain model for credit card installment plans."""

from decimal import Decimal

from ledger_engine.domain.errors import IllegalStateError, ValidationError
from ledger_engine.domain.models.enums import FeeStrategy
from ledger_engine.domain.models.finance import InstallmentScheduleRow
from ledger_engine.domain.services import installments
from ledger_engine.domain.services.validation import (
    require_non_negative,
    require_positive,
)
from ledger_engine.utils.decimal_utils import quantize_money


class InstallmentPlan:
    """A purchase repaid over a fixed number of monthly periods.

    Attributes:
        id: Identity assigned by a repository.
        total_amount: Financed amount, before fees.
        total_periods: Number of periods.
        fee_rate: Fee as a fraction of ``total_amount``.
        fee_strategy: Where the fee is charged.
        paid_periods: Periods already paid.
        linked_account: Credit account carrying the plan's debt.
    """

    def __init__(
        self,
        total_amount,
        total_periods: int,
        fee_rate=Decimal("0"),
        fee_strategy: FeeStrategy = FeeStrategy.EVENLY_SPLIT,
        paid_periods: int = 0,
        linked_account=None,
    ):
        self.id: int | None = None
        self.total_amount = quantize_money(
            require_positive(total_amount, "Total amount")
        )
        self.total_periods = self._check_total_periods(total_periods)
        self.fee_rate = require_non_negative(fee_rate, "Fee rate")
        self.fee_strategy = fee_strategy or FeeStrategy.EVENLY_SPLIT
        self.paid_periods = self._check_paid_periods(paid_periods)
        self.linked_account = linked_account

    def __repr__(self) -> str:
        return (
            f"InstallmentPlan(id={self.id!r}, total_amount={self.total_amount}, "
            f"paid={self.paid_periods}/{self.total_periods})"
        )

    @staticmethod
    def _check_total_periods(total_periods: int) -> int:
        if total_periods is None or total_periods < 1:
            raise ValidationError("Total periods must be at least 1")
        return total_periods

    def _check_paid_periods(self, paid_periods: int) -> int:
        if paid_periods is None or paid_periods < 0:
            raise ValidationError("Paid periods cannot be negative")
        if paid_periods > self.total_periods:
            raise ValidationError("Paid periods cannot exceed total periods")
        return paid_periods

    def update_terms(
        self,
        total_amount=None,
        total_periods: int | None = None,
        fee_rate=None,
        fee_strategy: FeeStrategy | None = None,
        paid_periods: int | None = None,
    ) -> None:
        """Change plan terms; omitted arguments keep their current value.

        Everything is validated before the plan is modified.
        """
        new_amount = (
            quantize_money(require_positive(total_amount, "Total amount"))
            if total_amount is not None
            else self.total_amount
        )
        new_periods = (
            self._check_total_periods(total_periods)
            if total_periods is not None
            else self.total_periods
        )
        new_rate = (
            require_non_negative(fee_rate, "Fee rate")
            if fee_rate is not None
            else self.fee_rate
        )
        new_paid = paid_periods if paid_periods is not None else self.paid_periods
        if new_paid < 0 or new_paid > new_periods:
            raise ValidationError("Paid periods must be between 0 and total periods")

        self.total_amount = new_amount
        self.total_periods = new_periods
        self.fee_rate = new_rate
        if fee_strategy is not None:
            self.fee_strategy = fee_strategy
        self.paid_periods = new_paid

    @property
    def fee(self) -> Decimal:
        return installments.fee_amount(self.total_amount, self.fee_rate)

    @property
    def total_payment(self) -> Decimal:
        """Amount plus fee."""
        return installments.total_payment(self.total_amount, self.fee_rate)

    @property
    def remaining_amount(self) -> Decimal:
        """Sum of the payments for the unpaid periods."""
        return installments.remaining_amount(
            self.total_amount,
            self.total_periods,
            self.fee_rate,
            self.fee_strategy,
            self.paid_periods,
        )

    @property
    def is_fully_paid(self) -> bool:
        return self.paid_periods >= self.total_periods

    def get_monthly_payment(self, period: int) -> Decimal:
        return installments.monthly_payment(
            self.total_amount,
            self.total_periods,
            self.fee_rate,
            self.fee_strategy,
            period,
        )

    def repay_one_period(self) -> Decimal:
        """Mark the next period paid and return its payment.

        Raises:
            IllegalStateError: If every period is already paid.
        """
        if self.is_fully_paid:
            raise IllegalStateError("Installment plan is already fully paid")
        payment = self.get_monthly_payment(self.paid_periods + 1)
        self.paid_periods += 1
        return payment

    def schedule(self) -> list[InstallmentScheduleRow]:
        return [
            InstallmentScheduleRow(
                period=period,
                payment=self.get_monthly_payment(period),
                paid=period <= self.paid_periods,
            )
            for period in range(1, self.total_periods + 1)
        ]


__all__ = ["InstallmentPlan"]
