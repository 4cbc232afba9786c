"""CLI adapter printing a loan amortization schedule.

Configured by environment variables:

* ``LOAN_AMOUNT``: principal (required);
* ``LOAN_PERIODS``: number of monthly periods (required);
* ``LOAN_ANNUAL_RATE``: annual interest rate in percent, default 0;
* ``LOAN_REPAYMENT_TYPE``: repayment type name, default EQUAL_INTEREST.
"""

from decimal import Decimal, InvalidOperation
import os

from ledger_engine.domain.errors import LedgerError
from ledger_engine.domain.models import LoanAccount, RepaymentType
from ledger_engine.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)
from ledger_engine.infrastructure.settings import EngineSettings


def _parse_decimal(name: str, value: str | None, logger) -> Decimal | None:
    """Parse a decimal environment value.

    Args:
        name: Variable name used in warnings.
        value: Raw value.
        logger: Logger used for warnings.

    Returns:
        Decimal | None: Parsed value or None when missing or invalid.
    """
    if not value:
        logger.warning(f"{name} is required.")
        return None
    try:
        return Decimal(value)
    except InvalidOperation:
        logger.warning(f"Invalid {name} '{value}'. Expected a number.")
        return None


def _parse_periods(value: str | None, max_periods: int, logger) -> int | None:
    if not value:
        logger.warning("LOAN_PERIODS is required.")
        return None
    try:
        periods = int(value)
    except ValueError:
        logger.warning(f"Invalid LOAN_PERIODS '{value}'. Expected an integer.")
        return None
    if periods < 1 or periods > max_periods:
        logger.warning(f"LOAN_PERIODS must be between 1 and {max_periods}.")
        return None
    return periods


def _parse_repayment_type(value: str | None, logger) -> RepaymentType | None:
    if not value:
        return RepaymentType.EQUAL_INTEREST
    try:
        return RepaymentType(value.strip().upper())
    except ValueError:
        choices = ", ".join(item.value for item in RepaymentType)
        logger.warning(f"Invalid LOAN_REPAYMENT_TYPE '{value}'. Use one of: {choices}.")
        return None


def main() -> None:
    """Print the schedule and total repayment for the configured loan."""
    logger = get_app_logger()
    get_usage_logger().info("loan_schedule_cli invoked")
    settings = EngineSettings.from_env()

    amount = _parse_decimal("LOAN_AMOUNT", os.getenv("LOAN_AMOUNT"), logger)
    periods = _parse_periods(
        os.getenv("LOAN_PERIODS"), settings.max_loan_periods, logger
    )
    rate = _parse_decimal(
        "LOAN_ANNUAL_RATE", os.getenv("LOAN_ANNUAL_RATE", "0"), logger
    )
    repayment_type = _parse_repayment_type(os.getenv("LOAN_REPAYMENT_TYPE"), logger)
    if amount is None or periods is None or rate is None or repayment_type is None:
        return

    try:
        loan = LoanAccount(
            "Loan",
            loan_amount=amount,
            total_periods=periods,
            annual_interest_rate=rate,
            repayment_type=repayment_type,
            max_periods=settings.max_loan_periods,
        )
        rows = loan.schedule()
        total = loan.calculate_total_repayment()
    except LedgerError as exc:
        logger.error(str(exc))
        return

    print(
        f"Loan schedule (amount={amount}, periods={periods}, "
        f"rate={rate}%, type={repayment_type.value})"
    )
    print("period\tpayment\tprincipal\tinterest")
    for row in rows:
        print(f"{row.period}\t{row.payment}\t{row.principal}\t{row.interest}")
    print(f"Total repayment: {total}")


if __name__ == "__main__":  # pragma: no cover
    main()
