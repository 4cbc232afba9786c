"""Tests for the account variants."""

from decimal import Decimal

import pytest

from ledger_engine.domain.errors import (
    CreditLimitExceededError,
    IllegalStateError,
    OwnershipError,
    UnsupportedOperationError,
    ValidationError,
)
from ledger_engine.domain.models import (
    AccountCategory,
    BasicAccount,
    BorrowingAccount,
    CreditAccount,
    LendingAccount,
    LoanAccount,
    Owner,
    RepaymentType,
)


def test_basic_debit_then_credit_restores_balance() -> None:
    """Debiting and crediting the same amount should leave the balance as is."""
    account = BasicAccount("Wallet", "100.00")

    account.debit("33.33")
    account.credit("33.33")

    assert account.balance == Decimal("100.00")


def test_basic_amounts_are_rounded_half_up() -> None:
    account = BasicAccount("Wallet", "10")

    account.credit("0.005")

    assert account.balance == Decimal("10.01")


def test_basic_account_rejects_credit_category() -> None:
    with pytest.raises(ValidationError):
        BasicAccount("Card", category=AccountCategory.CREDIT)


@pytest.mark.parametrize("amount", ["0", "-5"])
def test_credit_rejects_non_positive_amounts(amount: str) -> None:
    account = BasicAccount("Wallet", "10")

    with pytest.raises(ValidationError):
        account.credit(amount)
    assert account.balance == Decimal("10.00")


def test_set_balance_rejects_negative_values() -> None:
    account = BasicAccount("Wallet", "10")

    with pytest.raises(ValidationError):
        account.set_balance("-1")


def test_hide_sets_flag() -> None:
    account = BasicAccount("Wallet")

    account.hide()

    assert account.hidden is True


def test_owner_is_set_once() -> None:
    """An account cannot move to a second owner."""
    alice = Owner("alice")
    bob = Owner("bob")
    account = BasicAccount("Wallet", owner=alice)

    assert account.owner is alice
    assert account in alice.accounts
    with pytest.raises(OwnershipError):
        bob.add_account(account)


def test_credit_debit_within_balance_keeps_debt() -> None:
    card = CreditAccount("Visa", credit_limit="1000", balance="100")

    card.debit("40")

    assert card.balance == Decimal("60.00")
    assert card.current_debt == Decimal("0.00")


def test_credit_debit_beyond_balance_turns_shortfall_into_debt() -> None:
    card = CreditAccount("Visa", credit_limit="1000", balance="100")

    card.debit("300")

    assert card.balance == Decimal("0.00")
    assert card.current_debt == Decimal("200.00")


def test_credit_debit_over_limit_raises_and_keeps_state() -> None:
    card = CreditAccount("Visa", credit_limit="1000", current_debt="900")

    with pytest.raises(CreditLimitExceededError):
        card.debit("200")

    assert card.current_debt == Decimal("900.00")
    assert card.balance == Decimal("0.00")


def test_credit_debt_never_exceeds_limit() -> None:
    """Repeated debits either succeed within the limit or raise."""
    card = CreditAccount("Visa", credit_limit="500", balance="50")

    for _ in range(20):
        try:
            card.debit("37.10")
        except CreditLimitExceededError:
            pass
        assert card.current_debt <= card.credit_limit


def test_credit_account_rejects_debt_above_limit() -> None:
    with pytest.raises(CreditLimitExceededError):
        CreditAccount("Visa", credit_limit="100", current_debt="150")


def test_credit_account_rejects_bad_bill_day() -> None:
    with pytest.raises(ValidationError):
        CreditAccount("Visa", credit_limit="100", bill_day=32)


def test_repay_debt_debits_source() -> None:
    card = CreditAccount("Visa", credit_limit="1000", current_debt="300")
    wallet = BasicAccount("Wallet", "500")

    card.repay_debt("100", source=wallet)

    assert card.current_debt == Decimal("200.00")
    assert wallet.balance == Decimal("400.00")


def test_repay_debt_leaves_debt_untouched_when_source_fails() -> None:
    card = CreditAccount("Visa", credit_limit="1000", current_debt="300")
    other_card = CreditAccount("Amex", credit_limit="50")

    with pytest.raises(CreditLimitExceededError):
        card.repay_debt("100", source=other_card)

    assert card.current_debt == Decimal("300.00")


def test_loan_refuses_direct_posting() -> None:
    loan = LoanAccount("Car", loan_amount="1200", total_periods=12)

    with pytest.raises(UnsupportedOperationError):
        loan.credit("10")
    with pytest.raises(UnsupportedOperationError):
        loan.debit("10")
    with pytest.raises(UnsupportedOperationError):
        loan.set_balance("10")
    assert loan.balance == Decimal("0.00")
    assert loan.selectable is False


def test_zero_rate_loan_pays_flat_amount() -> None:
    loan = LoanAccount("Car", loan_amount="1200", total_periods=12)

    payments = {loan.get_monthly_repayment(period) for period in range(1, 13)}

    assert payments == {Decimal("100.00")}
    assert loan.remaining_amount == Decimal("1200.00")


def test_equal_interest_loan_full_period_repayment() -> None:
    loan = LoanAccount(
        "Car",
        loan_amount="12000",
        total_periods=12,
        annual_interest_rate="12",
        repayment_type=RepaymentType.EQUAL_INTEREST,
    )

    assert loan.remaining_amount == Decimal("12794.28")

    paid = loan.repay_loan()

    assert paid == Decimal("1066.19")
    assert loan.repaid_periods == 1
    assert loan.remaining_amount == Decimal("11728.09")


def test_partial_repayment_consumes_whole_periods() -> None:
    loan = LoanAccount("Car", loan_amount="1200", total_periods=12)

    paid = loan.repay_loan("250")

    assert paid == Decimal("250.00")
    assert loan.repaid_periods == 2
    assert loan.remaining_amount == Decimal("950.00")
    assert loan.is_ended is False


def test_overpayment_clamps_remaining_and_ends_loan() -> None:
    loan = LoanAccount("Car", loan_amount="1200", total_periods=12)

    loan.repay_loan("1500")

    assert loan.remaining_amount == Decimal("0.00")
    assert loan.repaid_periods == 12
    assert loan.is_ended is True
    with pytest.raises(IllegalStateError):
        loan.repay_loan()


def test_final_period_clears_rounding_residue() -> None:
    loan = LoanAccount("Loan", loan_amount="100", total_periods=3)

    payments = [loan.repay_loan() for _ in range(3)]

    assert payments == [Decimal("33.33"), Decimal("33.33"), Decimal("33.34")]
    assert loan.remaining_amount == Decimal("0.00")
    assert loan.is_ended is True


def test_partial_repayment_leaves_residue_period_open() -> None:
    loan = LoanAccount("Loan", loan_amount="100", total_periods=3)

    loan.repay_loan("99.99")

    assert loan.remaining_amount == Decimal("0.01")
    assert loan.repaid_periods == 2
    assert loan.is_ended is False

    assert loan.repay_loan() == Decimal("0.01")
    assert loan.repaid_periods == 3
    assert loan.is_ended is True


def test_loan_repayment_debits_source() -> None:
    loan = LoanAccount("Car", loan_amount="1200", total_periods=12)
    bank = BasicAccount("Bank", "1000")

    loan.repay_loan(source=bank)

    assert bank.balance == Decimal("900.00")
    assert loan.remaining_amount == Decimal("1100.00")


@pytest.mark.parametrize("periods", [0, 481])
def test_loan_rejects_out_of_range_periods(periods: int) -> None:
    with pytest.raises(ValidationError):
        LoanAccount("Car", loan_amount="1200", total_periods=periods)


def test_loan_rejects_repaid_periods_above_total() -> None:
    with pytest.raises(ValidationError):
        LoanAccount("Car", loan_amount="1200", total_periods=12, repaid_periods=13)


def test_loan_created_fully_repaid_is_ended() -> None:
    loan = LoanAccount("Car", loan_amount="1200", total_periods=12, repaid_periods=12)

    assert loan.is_ended is True
    assert loan.remaining_amount == Decimal("0.00")


def test_borrowing_credit_reduces_owed_amount() -> None:
    borrowing = BorrowingAccount("From Bob", "300")

    borrowing.credit("100")
    assert borrowing.balance == Decimal("200.00")
    borrowing.debit("50")
    assert borrowing.balance == Decimal("250.00")
    assert borrowing.is_ended is False

    borrowing.credit("250")

    assert borrowing.balance == Decimal("0.00")
    assert borrowing.is_ended is True


def test_borrowing_repay_takes_money_from_source() -> None:
    borrowing = BorrowingAccount("From Bob", "300")
    wallet = BasicAccount("Wallet", "500")

    borrowing.repay("300", source=wallet)

    assert wallet.balance == Decimal("200.00")
    assert borrowing.is_ended is True


def test_lending_receive_repayment_credits_destination() -> None:
    lending = LendingAccount("To Carol", "80")
    wallet = BasicAccount("Wallet", "20")

    lending.receive_repayment("80", destination=wallet)

    assert wallet.balance == Decimal("100.00")
    assert lending.balance == Decimal("0.00")
    assert lending.is_ended is True


def test_lending_repayment_into_loan_is_refused() -> None:
    lending = LendingAccount("To Carol", "80")
    loan = LoanAccount("Car", loan_amount="1200", total_periods=12)

    with pytest.raises(UnsupportedOperationError):
        lending.receive_repayment("80", destination=loan)

    assert lending.balance == Decimal("80.00")
