"""Domain models for user accounts.

The account family is closed: basic funds accounts, credit cards, loans and
the two single-party virtual accounts (borrowing and lending). Each variant
decides how ``credit`` and ``debit`` move its balance. Aggregate totals on
the owner are not touched here; application services recompute them once
per operation.
"""

from datetime import date
from decimal import Decimal

from ledger_engine.domain.constants import MAX_LOAN_PERIODS
from ledger_engine.domain.errors import (
    CreditLimitExceededError,
    IllegalStateError,
    OwnershipError,
    UnsupportedOperationError,
    ValidationError,
)
from ledger_engine.domain.models.enums import (
    AccountCategory,
    AccountType,
    RepaymentType,
    TransactionType,
)
from ledger_engine.domain.models.finance import LoanScheduleRow
from ledger_engine.domain.services import amortization
from ledger_engine.domain.services.validation import (
    require_day_of_month,
    require_name,
    require_non_negative,
    require_positive,
)
from ledger_engine.utils.decimal_utils import ZERO, quantize_money, sum_money


class Account:
    """Common state shared by every account variant.

    Attributes:
        id: Identity assigned by a repository, ``None`` until stored.
        name: Display name.
        balance: Current balance rounded to cents.
        account_type: Concrete account kind.
        category: High-level grouping.
        owner: Owner the account belongs to; set once.
        notes: Free text.
        hidden: Hidden accounts are left out of every total.
        included_in_net_asset: Whether the balance counts toward totals.
        selectable: Whether transactions may be posted to it directly.
        outgoing_transactions: Transactions that move money out.
        incoming_transactions: Transactions that move money in.
    """

    supports_direct_posting = True
    requires_funds_check = True

    def __init__(
        self,
        name: str,
        balance=ZERO,
        account_type: AccountType = AccountType.CASH,
        category: AccountCategory = AccountCategory.FUNDS,
        owner=None,
        notes: str | None = None,
        included_in_net_asset: bool = True,
        selectable: bool = True,
    ):
        self.id: int | None = None
        self.name = require_name(name)
        self.balance = quantize_money(require_non_negative(balance, "Balance"))
        self.account_type = account_type
        self.category = category
        self.owner = None
        self.notes = notes
        self.hidden = False
        self.included_in_net_asset = included_in_net_asset
        self.selectable = selectable
        self.outgoing_transactions: list = []
        self.incoming_transactions: list = []
        if owner is not None:
            owner.add_account(self)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(id={self.id!r}, name={self.name!r}, "
            f"balance={self.balance})"
        )

    def attach_owner(self, owner) -> None:
        """Bind the account to ``owner``.

        Raises:
            OwnershipError: If the account already belongs to someone else.
        """
        if self.owner is not None and self.owner is not owner:
            raise OwnershipError("Account already belongs to another owner")
        self.owner = owner

    def credit(self, amount) -> None:
        """Add ``amount`` to the balance."""
        value = require_positive(amount)
        self.balance = quantize_money(self.balance + value)

    def debit(self, amount) -> None:
        """Subtract ``amount`` from the balance."""
        value = require_positive(amount)
        self.balance = quantize_money(self.balance - value)

    def set_balance(self, amount) -> None:
        """Overwrite the balance; negative values are rejected."""
        self.balance = quantize_money(require_non_negative(amount, "Balance"))

    def hide(self) -> None:
        """Exclude the account from totals and listings."""
        self.hidden = True

    def available_funds(self) -> Decimal:
        """Return how much may be debited without a limit error."""
        return self.balance

    @property
    def transactions(self) -> list:
        """Every transaction touching the account, newest first."""
        seen = {id(tx): tx for tx in self.outgoing_transactions}
        for tx in self.incoming_transactions:
            seen.setdefault(id(tx), tx)
        return sorted(seen.values(), key=lambda tx: tx.date, reverse=True)

    def transactions_for_month(self, year: int, month: int) -> list:
        """Return account transactions dated in the given month."""
        return [
            tx
            for tx in self.transactions
            if tx.date.year == year and tx.date.month == month
        ]

    def total_income_for_month(self, year: int, month: int) -> Decimal:
        """Sum incoming income and transfers for the month."""
        return sum_money(
            tx.amount
            for tx in self.incoming_transactions
            if tx.date.year == year
            and tx.date.month == month
            and tx.transaction_type
            in (TransactionType.INCOME, TransactionType.TRANSFER)
        )

    def total_expense_for_month(self, year: int, month: int) -> Decimal:
        """Sum outgoing expenses and transfers for the month."""
        return sum_money(
            tx.amount
            for tx in self.outgoing_transactions
            if tx.date.year == year
            and tx.date.month == month
            and tx.transaction_type
            in (TransactionType.EXPENSE, TransactionType.TRANSFER)
        )


class BasicAccount(Account):
    """Funds, recharge or investment account holding a plain balance."""

    def __init__(
        self,
        name: str,
        balance=ZERO,
        account_type: AccountType = AccountType.CASH,
        category: AccountCategory = AccountCategory.FUNDS,
        owner=None,
        notes: str | None = None,
        included_in_net_asset: bool = True,
        selectable: bool = True,
    ):
        if category in (AccountCategory.CREDIT, AccountCategory.VIRTUAL_ACCOUNT):
            raise ValidationError(
                f"Basic accounts cannot use the {category.value} category"
            )
        super().__init__(
            name,
            balance=balance,
            account_type=account_type,
            category=category,
            owner=owner,
            notes=notes,
            included_in_net_asset=included_in_net_asset,
            selectable=selectable,
        )


class CreditAccount(Account):
    """Credit card style account.

    A debit larger than the balance empties the balance and turns the
    shortfall into debt, up to ``credit_limit``.
    """

    requires_funds_check = False

    def __init__(
        self,
        name: str,
        credit_limit,
        balance=ZERO,
        current_debt=ZERO,
        bill_day: int | None = None,
        due_day: int | None = None,
        account_type: AccountType = AccountType.CREDIT_CARD,
        owner=None,
        notes: str | None = None,
        included_in_net_asset: bool = True,
        selectable: bool = True,
    ):
        super().__init__(
            name,
            balance=balance,
            account_type=account_type,
            category=AccountCategory.CREDIT,
            owner=owner,
            notes=notes,
            included_in_net_asset=included_in_net_asset,
            selectable=selectable,
        )
        self.credit_limit = quantize_money(
            require_non_negative(credit_limit, "Credit limit")
        )
        self.current_debt = quantize_money(
            require_non_negative(current_debt, "Current debt")
        )
        if self.current_debt > self.credit_limit:
            raise CreditLimitExceededError("Current debt exceeds credit limit")
        self.bill_day = require_day_of_month(bill_day, "Bill day")
        self.due_day = require_day_of_month(due_day, "Due day")
        self.installment_plans: list = []

    def available_funds(self) -> Decimal:
        return quantize_money(self.balance + self.credit_limit - self.current_debt)

    def debit(self, amount) -> None:
        """Spend from the balance first, then from the credit line.

        Raises:
            CreditLimitExceededError: If the new debt would pass the limit.
        """
        value = require_positive(amount)
        if value <= self.balance:
            self.balance = quantize_money(self.balance - value)
            return
        new_debt = self.current_debt + (value - self.balance)
        if new_debt > self.credit_limit:
            raise CreditLimitExceededError(
                f"Debit of {value} exceeds the credit limit of '{self.name}'"
            )
        self.current_debt = quantize_money(new_debt)
        self.balance = ZERO

    def set_credit_limit(self, credit_limit) -> None:
        value = quantize_money(require_non_negative(credit_limit, "Credit limit"))
        if value < self.current_debt:
            raise CreditLimitExceededError("Credit limit is below current debt")
        self.credit_limit = value

    def set_current_debt(self, current_debt) -> None:
        value = quantize_money(require_non_negative(current_debt, "Current debt"))
        if value > self.credit_limit:
            raise CreditLimitExceededError("Current debt exceeds credit limit")
        self.current_debt = value

    def repay_debt(self, amount, source: Account | None = None) -> None:
        """Reduce the debt, paying from ``source`` when one is given.

        The source is debited first so a failing debit leaves the debt
        untouched. The debt is not clamped here.
        """
        value = require_positive(amount)
        if source is not None:
            source.debit(value)
        self.current_debt = quantize_money(self.current_debt - value)

    def add_installment_plan(self, plan) -> None:
        """Attach ``plan`` and book its remaining amount as debt."""
        if plan.linked_account is not None and plan.linked_account is not self:
            raise ValidationError("Installment plan is linked to another account")
        if any(existing is plan for existing in self.installment_plans):
            return
        plan.linked_account = self
        self.installment_plans.append(plan)
        self.current_debt = quantize_money(
            self.current_debt + plan.remaining_amount
        )

    def remove_installment_plan(self, plan) -> None:
        """Detach ``plan`` and release its remaining amount from the debt."""
        self._require_plan(plan)
        self.installment_plans.remove(plan)
        self.current_debt = quantize_money(
            self.current_debt - plan.remaining_amount
        )
        plan.linked_account = None

    def repay_installment_plan(self, plan) -> Decimal:
        """Pay the next period of ``plan`` and return the amount paid."""
        self._require_plan(plan)
        paid = plan.repay_one_period()
        self.current_debt = quantize_money(self.current_debt - paid)
        return paid

    def _require_plan(self, plan) -> None:
        if not any(existing is plan for existing in self.installment_plans):
            raise ValidationError("Installment plan does not belong to this account")


class LoanAccount(Account):
    """Amortizing loan.

    The balance stays at zero; what is owed lives in ``remaining_amount``.
    Loans cannot be posted to directly, only repaid.
    """

    supports_direct_posting = False
    requires_funds_check = False

    def __init__(
        self,
        name: str,
        loan_amount,
        total_periods: int,
        annual_interest_rate=ZERO,
        repaid_periods: int = 0,
        repayment_type: RepaymentType = RepaymentType.EQUAL_INTEREST,
        repayment_day: int | None = None,
        receiving_account: Account | None = None,
        owner=None,
        notes: str | None = None,
        included_in_net_asset: bool = True,
        max_periods: int = MAX_LOAN_PERIODS,
    ):
        super().__init__(
            name,
            balance=ZERO,
            account_type=AccountType.LOAN,
            category=AccountCategory.CREDIT,
            owner=owner,
            notes=notes,
            included_in_net_asset=included_in_net_asset,
            selectable=False,
        )
        self.max_periods = max_periods
        self.loan_amount = quantize_money(require_positive(loan_amount, "Loan amount"))
        self.total_periods = self._check_total_periods(total_periods)
        self.annual_interest_rate = require_non_negative(
            annual_interest_rate, "Interest rate"
        )
        self.repaid_periods = self._check_repaid_periods(repaid_periods)
        self.repayment_type = repayment_type or RepaymentType.EQUAL_INTEREST
        self.repayment_day = require_day_of_month(repayment_day, "Repayment day")
        self.receiving_account = receiving_account
        self.is_ended = False
        self.remaining_amount = ZERO
        self.update_remaining_amount()

    def credit(self, amount) -> None:
        raise UnsupportedOperationError("Loan accounts cannot be credited directly")

    def debit(self, amount) -> None:
        raise UnsupportedOperationError("Loan accounts cannot be debited directly")

    def set_balance(self, amount) -> None:
        raise UnsupportedOperationError("Loan account balance is always zero")

    def available_funds(self) -> Decimal:
        return ZERO

    def _check_total_periods(self, total_periods: int) -> int:
        if total_periods is None or total_periods < 1:
            raise ValidationError("Total periods must be at least 1")
        if total_periods > self.max_periods:
            raise ValidationError(
                f"Total periods cannot exceed {self.max_periods}"
            )
        return total_periods

    def _check_repaid_periods(self, repaid_periods: int) -> int:
        if repaid_periods is None or repaid_periods < 0:
            raise ValidationError("Repaid periods cannot be negative")
        if repaid_periods > self.total_periods:
            raise ValidationError("Repaid periods cannot exceed total periods")
        return repaid_periods

    def set_loan_amount(self, loan_amount) -> None:
        self.loan_amount = quantize_money(require_positive(loan_amount, "Loan amount"))

    def set_total_periods(self, total_periods: int) -> None:
        self.total_periods = self._check_total_periods(total_periods)
        if self.repaid_periods > self.total_periods:
            raise ValidationError("Repaid periods cannot exceed total periods")

    def set_repaid_periods(self, repaid_periods: int) -> None:
        self.repaid_periods = self._check_repaid_periods(repaid_periods)

    def set_annual_interest_rate(self, annual_interest_rate) -> None:
        self.annual_interest_rate = require_non_negative(
            annual_interest_rate, "Interest rate"
        )

    def set_repayment_type(self, repayment_type: RepaymentType) -> None:
        if repayment_type is None:
            raise ValidationError("Repayment type cannot be null")
        self.repayment_type = repayment_type

    @property
    def monthly_rate(self) -> Decimal:
        return amortization.monthly_rate(self.annual_interest_rate)

    def get_monthly_repayment(self, period: int) -> Decimal:
        """Return the payment due in the 1-based ``period``."""
        return amortization.monthly_repayment(
            self.loan_amount,
            self.total_periods,
            self.annual_interest_rate,
            self.repayment_type,
            period,
        )

    def next_repayment(self) -> Decimal:
        """Return the payment due for the next period.

        The final period pays whatever is left, so rounding residue from
        earlier periods is cleared.
        """
        if self.repaid_periods + 1 >= self.total_periods:
            return self.remaining_amount
        return self.get_monthly_repayment(self.repaid_periods + 1)

    def calculate_total_repayment(self) -> Decimal:
        return amortization.calculate_total_repayment(
            self.loan_amount,
            self.total_periods,
            self.annual_interest_rate,
            self.repayment_type,
        )

    def remaining_for_repaid_periods(self) -> Decimal:
        return amortization.remaining_for_repaid_periods(
            self.loan_amount,
            self.total_periods,
            self.annual_interest_rate,
            self.repayment_type,
            self.repaid_periods,
        )

    def schedule(self) -> list[LoanScheduleRow]:
        return amortization.build_schedule(
            self.loan_amount,
            self.total_periods,
            self.annual_interest_rate,
            self.repayment_type,
        )

    def update_remaining_amount(self) -> None:
        """Recompute what is owed from the loan terms, then refresh status."""
        self.remaining_amount = self.remaining_for_repaid_periods()
        self.check_and_update_status()

    def check_and_update_status(self) -> None:
        if self.remaining_amount <= 0 or self.repaid_periods >= self.total_periods:
            self.remaining_amount = ZERO
            self.is_ended = True
        else:
            self.is_ended = False

    def repay_loan(self, amount=None, source: Account | None = None) -> Decimal:
        """Repay the next period, or an arbitrary amount.

        Args:
            amount: ``None`` pays exactly the next period. Otherwise the
                amount is applied in full and covers as many whole upcoming
                periods as it can pay for.
            source: Optional account debited for the payment.

        Returns:
            Decimal: The amount paid.

        Raises:
            IllegalStateError: If the loan is already repaid.
        """
        if self.is_ended or self.repaid_periods >= self.total_periods:
            raise IllegalStateError(f"Loan '{self.name}' is already repaid")

        if amount is None:
            paid = self.next_repayment()
            if source is not None:
                source.debit(paid)
            self.repaid_periods += 1
            self.remaining_amount = quantize_money(self.remaining_amount - paid)
        else:
            paid = quantize_money(require_positive(amount))
            covered = amortization.count_covered_periods(
                paid,
                self.loan_amount,
                self.total_periods,
                self.annual_interest_rate,
                self.repayment_type,
                self.repaid_periods,
            )
            if source is not None:
                source.debit(paid)
            self.remaining_amount = max(
                ZERO, quantize_money(self.remaining_amount - paid)
            )
            self.repaid_periods += covered
            if self.remaining_amount > 0:
                # Residue keeps the final period open.
                self.repaid_periods = min(self.repaid_periods, self.total_periods - 1)

        self.check_and_update_status()
        return paid


class BorrowingAccount(Account):
    """Money the owner owes to someone; the balance is the amount owed."""

    requires_funds_check = False

    def __init__(
        self,
        name: str,
        amount=ZERO,
        borrowing_date: date | None = None,
        owner=None,
        notes: str | None = None,
        included_in_net_asset: bool = True,
        selectable: bool = True,
    ):
        super().__init__(
            name,
            balance=amount,
            account_type=AccountType.BORROWING,
            category=AccountCategory.VIRTUAL_ACCOUNT,
            owner=owner,
            notes=notes,
            included_in_net_asset=included_in_net_asset,
            selectable=selectable,
        )
        self.borrowing_date = borrowing_date or date.today()
        self.is_ended = False
        self.check_and_update_status()

    def credit(self, amount) -> None:
        """Repayment: reduce what is owed."""
        value = require_positive(amount)
        self.balance = quantize_money(self.balance - value)
        self.check_and_update_status()

    def debit(self, amount) -> None:
        """Further borrowing: increase what is owed."""
        value = require_positive(amount)
        self.balance = quantize_money(self.balance + value)
        self.check_and_update_status()

    def set_balance(self, amount) -> None:
        super().set_balance(amount)
        self.check_and_update_status()

    def repay(self, amount, source: Account | None = None) -> None:
        """Pay back ``amount``, taking it from ``source`` when given."""
        value = require_positive(amount)
        if source is not None:
            source.debit(value)
        self.credit(value)

    def check_and_update_status(self) -> None:
        self.is_ended = self.balance <= 0


class LendingAccount(Account):
    """Money someone owes the owner; the balance is the amount receivable."""

    def __init__(
        self,
        name: str,
        amount=ZERO,
        lending_date: date | None = None,
        owner=None,
        notes: str | None = None,
        included_in_net_asset: bool = True,
        selectable: bool = True,
    ):
        super().__init__(
            name,
            balance=amount,
            account_type=AccountType.LENDING,
            category=AccountCategory.VIRTUAL_ACCOUNT,
            owner=owner,
            notes=notes,
            included_in_net_asset=included_in_net_asset,
            selectable=selectable,
        )
        self.lending_date = lending_date or date.today()
        self.is_ended = False
        self.check_and_update_status()

    def credit(self, amount) -> None:
        super().credit(amount)
        self.check_and_update_status()

    def debit(self, amount) -> None:
        super().debit(amount)
        self.check_and_update_status()

    def set_balance(self, amount) -> None:
        super().set_balance(amount)
        self.check_and_update_status()

    def receive_repayment(self, amount, destination: Account | None = None) -> None:
        """Collect ``amount`` back, crediting ``destination`` when given."""
        value = require_positive(amount)
        if destination is not None:
            destination.credit(value)
        self.debit(value)

    def check_and_update_status(self) -> None:
        self.is_ended = self.balance <= 0


__all__ = [
    "Account",
    "BasicAccount",
    "CreditAccount",
    "LoanAccount",
    "BorrowingAccount",
    "LendingAccount",
]
