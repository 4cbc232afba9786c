"""Use case for managing accounts and their repayment flows.

Opening a loan, a borrowing or a lending account moves money, so those
commands also record the matching transfer. Repayments do the same. Each
command recomputes the owner's totals once before returning.
"""

from datetime import date

from ledger_engine.application.ports.ledger_repository import LedgerRepositoryPort
from ledger_engine.domain.constants import MAX_LOAN_PERIODS
from ledger_engine.domain.errors import (
    CreditLimitExceededError,
    IllegalStateError,
    OwnershipError,
    RepaymentExceedsDebtError,
    ValidationError,
)
from ledger_engine.domain.models import (
    Account,
    AccountCategory,
    AccountType,
    BasicAccount,
    BorrowingAccount,
    CreditAccount,
    LendingAccount,
    LoanAccount,
    MonthlySummary,
    NetWorthSummary,
    Owner,
    RepaymentType,
    Transfer,
)
from ledger_engine.domain.policies import check_postable, check_sufficient_funds
from ledger_engine.domain.services import linkage
from ledger_engine.domain.services.validation import (
    require_day_of_month,
    require_name,
    require_non_negative,
    require_positive,
)
from ledger_engine.infrastructure.logging.logger import get_app_logger
from ledger_engine.utils.decimal_utils import quantize_money

UNCHANGED = object()


class AccountService:
    """Create, edit, post to, repay and delete accounts."""

    def __init__(
        self,
        repository: LedgerRepositoryPort | None = None,
        logger=None,
        max_loan_periods: int = MAX_LOAN_PERIODS,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Optional store receiving created objects.
            logger: Optional logger compatible with logging.Logger-like API.
            max_loan_periods: Upper bound for a loan's total periods.
        """
        self._repository = repository
        self._logger = logger or get_app_logger()
        self._max_loan_periods = max_loan_periods

    # Creation

    def create_basic_account(
        self,
        owner: Owner,
        name: str,
        balance=0,
        account_type: AccountType = AccountType.CASH,
        category: AccountCategory = AccountCategory.FUNDS,
        notes: str | None = None,
        included_in_net_asset: bool = True,
        selectable: bool = True,
    ) -> BasicAccount:
        account = BasicAccount(
            name,
            balance=balance,
            account_type=account_type,
            category=category,
            notes=notes,
            included_in_net_asset=included_in_net_asset,
            selectable=selectable,
        )
        return self._register(owner, account)

    def create_credit_account(
        self,
        owner: Owner,
        name: str,
        credit_limit,
        balance=0,
        current_debt=0,
        bill_day: int | None = None,
        due_day: int | None = None,
        account_type: AccountType = AccountType.CREDIT_CARD,
        notes: str | None = None,
        included_in_net_asset: bool = True,
        selectable: bool = True,
    ) -> CreditAccount:
        account = CreditAccount(
            name,
            credit_limit=credit_limit,
            balance=balance,
            current_debt=current_debt,
            bill_day=bill_day,
            due_day=due_day,
            account_type=account_type,
            notes=notes,
            included_in_net_asset=included_in_net_asset,
            selectable=selectable,
        )
        return self._register(owner, account)

    def create_loan_account(
        self,
        owner: Owner,
        name: str,
        loan_amount,
        total_periods: int,
        annual_interest_rate=0,
        repaid_periods: int = 0,
        repayment_type: RepaymentType = RepaymentType.EQUAL_INTEREST,
        repayment_day: int | None = None,
        receiving_account: Account | None = None,
        ledger=None,
        on_date: date | None = None,
        notes: str | None = None,
        included_in_net_asset: bool = True,
    ) -> LoanAccount:
        """Open a loan and pay the principal into ``receiving_account``.

        The disbursement is recorded as a transfer from the loan to the
        receiving account.

        Raises:
            ValidationError: If a loan term is out of range.
            UnsupportedOperationError: If the receiving account is a loan.
        """
        check_postable(receiving_account, owner)
        ledger = self._resolve_ledger(owner, ledger)
        loan = LoanAccount(
            name,
            loan_amount=loan_amount,
            total_periods=total_periods,
            annual_interest_rate=annual_interest_rate,
            repaid_periods=repaid_periods,
            repayment_type=repayment_type,
            repayment_day=repayment_day,
            receiving_account=receiving_account,
            notes=notes,
            included_in_net_asset=included_in_net_asset,
            max_periods=self._max_loan_periods,
        )
        owner.add_account(loan)
        if receiving_account is not None:
            receiving_account.credit(loan.loan_amount)
            self._record_transfer(
                loan.loan_amount,
                from_account=loan,
                to_account=receiving_account,
                ledger=ledger,
                on_date=on_date,
                note=f"Loan disbursement: {loan.name}",
            )
        return self._finish_creation(owner, loan)

    def create_borrowing_account(
        self,
        owner: Owner,
        name: str,
        amount,
        to_account: Account | None = None,
        ledger=None,
        borrowing_date: date | None = None,
        notes: str | None = None,
        included_in_net_asset: bool = True,
        selectable: bool = True,
    ) -> BorrowingAccount:
        """Record money borrowed, optionally paid into ``to_account``."""
        value = require_positive(amount)
        check_postable(to_account, owner)
        ledger = self._resolve_ledger(owner, ledger)
        borrowing = BorrowingAccount(
            name,
            amount=value,
            borrowing_date=borrowing_date,
            notes=notes,
            included_in_net_asset=included_in_net_asset,
            selectable=selectable,
        )
        owner.add_account(borrowing)
        if to_account is not None:
            to_account.credit(value)
        self._record_transfer(
            value,
            from_account=borrowing,
            to_account=to_account,
            ledger=ledger,
            on_date=borrowing.borrowing_date,
            note=f"Borrowing: {borrowing.name}",
        )
        return self._finish_creation(owner, borrowing)

    def create_lending_account(
        self,
        owner: Owner,
        name: str,
        amount,
        from_account: Account | None = None,
        ledger=None,
        lending_date: date | None = None,
        notes: str | None = None,
        included_in_net_asset: bool = True,
        selectable: bool = True,
    ) -> LendingAccount:
        """Record money lent, optionally paid out of ``from_account``."""
        value = require_positive(amount)
        check_postable(from_account, owner)
        if from_account is not None:
            check_sufficient_funds(from_account, value)
        ledger = self._resolve_ledger(owner, ledger)
        lending = LendingAccount(
            name,
            amount=value,
            lending_date=lending_date,
            notes=notes,
            included_in_net_asset=included_in_net_asset,
            selectable=selectable,
        )
        owner.add_account(lending)
        if from_account is not None:
            from_account.debit(value)
        self._record_transfer(
            value,
            from_account=from_account,
            to_account=lending,
            ledger=ledger,
            on_date=lending.lending_date,
            note=f"Lending: {lending.name}",
        )
        return self._finish_creation(owner, lending)

    # Editing

    def edit_account(
        self,
        account: Account,
        name: str | None = None,
        notes=UNCHANGED,
        balance=None,
        account_type: AccountType | None = None,
        included_in_net_asset: bool | None = None,
        selectable: bool | None = None,
    ) -> Account:
        """Change the fields every variant shares.

        Omitted arguments keep their current value.
        """
        if name is not None:
            require_name(name)
        if balance is not None:
            account.set_balance(balance)
        if name is not None:
            account.name = name
        if notes is not UNCHANGED:
            account.notes = notes
        if account_type is not None and not isinstance(account, LoanAccount):
            account.account_type = account_type
        if included_in_net_asset is not None:
            account.included_in_net_asset = included_in_net_asset
        if selectable is not None and account.supports_direct_posting:
            account.selectable = selectable
        self._recompute(account)
        self._logger.info(f"Edited account '{account.name}'")
        return account

    def edit_credit_account(
        self,
        account: CreditAccount,
        credit_limit=None,
        current_debt=None,
        bill_day=UNCHANGED,
        due_day=UNCHANGED,
    ) -> CreditAccount:
        """Change credit terms; the new debt must fit the new limit."""
        new_limit = (
            quantize_money(require_non_negative(credit_limit, "Credit limit"))
            if credit_limit is not None
            else account.credit_limit
        )
        new_debt = (
            quantize_money(require_non_negative(current_debt, "Current debt"))
            if current_debt is not None
            else account.current_debt
        )
        if bill_day is not UNCHANGED:
            require_day_of_month(bill_day, "Bill day")
        if due_day is not UNCHANGED:
            require_day_of_month(due_day, "Due day")
        if new_debt > new_limit:
            raise CreditLimitExceededError("Current debt exceeds credit limit")
        # Each setter checks against the other field, so order them.
        if new_limit >= account.current_debt:
            account.set_credit_limit(new_limit)
            account.set_current_debt(new_debt)
        else:
            account.set_current_debt(new_debt)
            account.set_credit_limit(new_limit)
        if bill_day is not UNCHANGED:
            account.bill_day = bill_day
        if due_day is not UNCHANGED:
            account.due_day = due_day
        self._recompute(account)
        self._logger.info(f"Edited credit terms of '{account.name}'")
        return account

    def edit_loan_account(
        self,
        loan: LoanAccount,
        loan_amount=None,
        total_periods: int | None = None,
        repaid_periods: int | None = None,
        annual_interest_rate=None,
        repayment_type: RepaymentType | None = None,
        repayment_day=UNCHANGED,
    ) -> LoanAccount:
        """Change loan terms and recompute the remaining amount."""
        candidate = LoanAccount(
            loan.name,
            loan_amount=loan_amount if loan_amount is not None else loan.loan_amount,
            total_periods=(
                total_periods if total_periods is not None else loan.total_periods
            ),
            annual_interest_rate=(
                annual_interest_rate
                if annual_interest_rate is not None
                else loan.annual_interest_rate
            ),
            repaid_periods=(
                repaid_periods if repaid_periods is not None else loan.repaid_periods
            ),
            repayment_type=repayment_type or loan.repayment_type,
            repayment_day=(
                loan.repayment_day if repayment_day is UNCHANGED else repayment_day
            ),
            max_periods=loan.max_periods,
        )
        loan.set_loan_amount(candidate.loan_amount)
        loan.total_periods = candidate.total_periods
        loan.set_repaid_periods(candidate.repaid_periods)
        loan.set_annual_interest_rate(candidate.annual_interest_rate)
        loan.set_repayment_type(candidate.repayment_type)
        loan.repayment_day = candidate.repayment_day
        loan.update_remaining_amount()
        self._recompute(loan)
        self._logger.info(
            f"Edited loan '{loan.name}': remaining={loan.remaining_amount}"
        )
        return loan

    # Posting

    def credit(self, account: Account, amount) -> Account:
        """Add money to ``account`` outside any transaction."""
        check_postable(account)
        account.credit(amount)
        self._recompute(account)
        return account

    def debit(self, account: Account, amount) -> Account:
        """Take money from ``account`` outside any transaction."""
        value = require_positive(amount)
        check_postable(account)
        check_sufficient_funds(account, value)
        account.debit(value)
        self._recompute(account)
        return account

    def hide_account(self, account: Account) -> Account:
        account.hide()
        self._recompute(account)
        self._logger.info(f"Hid account '{account.name}'")
        return account

    # Repayments

    def repay_debt(
        self,
        account: CreditAccount,
        amount,
        from_account: Account | None = None,
        ledger=None,
        on_date: date | None = None,
    ) -> Transfer:
        """Pay down credit card debt.

        Raises:
            RepaymentExceedsDebtError: If ``amount`` is above the debt.
        """
        value = quantize_money(require_positive(amount))
        if value > account.current_debt:
            raise RepaymentExceedsDebtError(
                f"Repayment {value} exceeds the debt of '{account.name}'"
            )
        self._check_source(account.owner, from_account, value)
        ledger = self._resolve_ledger(account.owner, ledger)
        account.repay_debt(value, from_account)
        transfer = self._record_transfer(
            value,
            from_account=from_account,
            to_account=account,
            ledger=ledger,
            on_date=on_date,
            note=f"Credit repayment: {account.name}",
        )
        self._recompute(account)
        self._logger.info(
            f"Repaid {value} of credit debt on '{account.name}', "
            f"remaining={account.current_debt}"
        )
        return transfer

    def repay_loan(
        self,
        loan: LoanAccount,
        amount=None,
        from_account: Account | None = None,
        ledger=None,
        on_date: date | None = None,
    ) -> Transfer:
        """Repay the next loan period, or an arbitrary amount.

        Raises:
            RepaymentExceedsDebtError: If ``amount`` is above what is owed.
            IllegalStateError: If the loan is already repaid.
        """
        if loan.is_ended:
            raise IllegalStateError(f"Loan '{loan.name}' is already repaid")
        value = None
        if amount is not None:
            value = quantize_money(require_positive(amount))
            if value > loan.remaining_amount:
                raise RepaymentExceedsDebtError(
                    f"Repayment {value} exceeds the remaining amount of '{loan.name}'"
                )
        if from_account is not None:
            due = value if value is not None else loan.next_repayment()
            self._check_source(loan.owner, from_account, due)
        ledger = self._resolve_ledger(loan.owner, ledger)
        paid = loan.repay_loan(value, from_account)
        transfer = self._record_transfer(
            paid,
            from_account=from_account,
            to_account=loan,
            ledger=ledger,
            on_date=on_date,
            note=f"Loan repayment: {loan.name}",
        )
        self._recompute(loan)
        self._logger.info(
            f"Repaid {paid} on loan '{loan.name}': "
            f"periods={loan.repaid_periods}/{loan.total_periods}, "
            f"remaining={loan.remaining_amount}"
        )
        return transfer

    def repay_borrowing(
        self,
        borrowing: BorrowingAccount,
        amount,
        from_account: Account | None = None,
        ledger=None,
        on_date: date | None = None,
    ) -> Transfer:
        """Pay back borrowed money."""
        value = quantize_money(require_positive(amount))
        if value > borrowing.balance:
            raise RepaymentExceedsDebtError(
                f"Repayment {value} exceeds what is owed on '{borrowing.name}'"
            )
        self._check_source(borrowing.owner, from_account, value)
        ledger = self._resolve_ledger(borrowing.owner, ledger)
        borrowing.repay(value, from_account)
        transfer = self._record_transfer(
            value,
            from_account=from_account,
            to_account=borrowing,
            ledger=ledger,
            on_date=on_date,
            note=f"Borrowing repayment: {borrowing.name}",
        )
        self._recompute(borrowing)
        self._logger.info(
            f"Repaid {value} on borrowing '{borrowing.name}', "
            f"remaining={borrowing.balance}"
        )
        return transfer

    def receive_lending(
        self,
        lending: LendingAccount,
        amount,
        to_account: Account | None = None,
        ledger=None,
        on_date: date | None = None,
    ) -> Transfer:
        """Collect money lent out."""
        value = quantize_money(require_positive(amount))
        if value > lending.balance:
            raise RepaymentExceedsDebtError(
                f"Repayment {value} exceeds what is owed on '{lending.name}'"
            )
        check_postable(to_account, lending.owner)
        ledger = self._resolve_ledger(lending.owner, ledger)
        lending.receive_repayment(value, to_account)
        transfer = self._record_transfer(
            value,
            from_account=lending,
            to_account=to_account,
            ledger=ledger,
            on_date=on_date,
            note=f"Lending repayment: {lending.name}",
        )
        self._recompute(lending)
        self._logger.info(
            f"Received {value} on lending '{lending.name}', "
            f"remaining={lending.balance}"
        )
        return transfer

    # Deletion

    def delete_account(
        self,
        account: Account,
        delete_transactions: bool = False,
    ) -> None:
        """Remove ``account`` from its owner.

        Args:
            account: Account to delete.
            delete_transactions: Also remove every transaction touching the
                account. Balances of the other accounts involved are left as
                they are. Otherwise the transactions are kept and only lose
                their reference to the account.
        """
        owner = account.owner
        for transaction in account.transactions:
            if delete_transactions:
                linkage.unlink_transaction(transaction)
                if self._repository is not None:
                    self._repository.remove(transaction)
            else:
                linkage.detach_account(transaction, account)
        if isinstance(account, CreditAccount):
            for plan in list(account.installment_plans):
                account.remove_installment_plan(plan)
                if self._repository is not None:
                    self._repository.remove(plan)
        if owner is not None:
            owner.remove_account(account)
            owner.recompute_totals()
        if self._repository is not None:
            self._repository.remove(account)
        self._logger.info(
            f"Deleted account '{account.name}' "
            f"(delete_transactions={delete_transactions})"
        )

    # Queries

    def monthly_summary(self, account: Account, year: int, month: int) -> MonthlySummary:
        """Return the income and expense totals of ``account`` for a month."""
        return MonthlySummary(
            month=f"{year:04d}-{month:02d}",
            total_income=account.total_income_for_month(year, month),
            total_expense=account.total_expense_for_month(year, month),
        )

    def transactions_for_month(self, account: Account, year: int, month: int) -> list:
        return account.transactions_for_month(year, month)

    def net_worth(self, owner: Owner) -> NetWorthSummary:
        """Recompute and return the owner's totals."""
        summary = owner.recompute_totals()
        self._logger.info(
            f"Net worth for '{owner.username}': assets={summary.total_assets}, "
            f"liabilities={summary.total_liabilities}, net={summary.net_assets}"
        )
        return summary

    # Helpers

    def _register(self, owner: Owner, account: Account):
        owner.add_account(account)
        return self._finish_creation(owner, account)

    def _finish_creation(self, owner: Owner, account: Account):
        owner.recompute_totals()
        if self._repository is not None:
            self._repository.add(account)
        self._logger.info(
            f"Created {account.account_type.value} account '{account.name}' "
            f"for '{owner.username}'"
        )
        return account

    @staticmethod
    def _resolve_ledger(owner: Owner, ledger):
        if ledger is None:
            return owner.default_ledger
        if not owner.owns_ledger(ledger):
            raise OwnershipError("Ledger belongs to another owner")
        return ledger

    @staticmethod
    def _check_source(owner: Owner, from_account: Account | None, amount) -> None:
        if from_account is None:
            return
        check_postable(from_account, owner)
        check_sufficient_funds(from_account, amount)

    @staticmethod
    def _recompute(account: Account) -> None:
        if account.owner is not None:
            account.owner.recompute_totals()

    def _record_transfer(
        self,
        amount,
        from_account: Account | None,
        to_account: Account | None,
        ledger,
        on_date: date | None,
        note: str,
    ) -> Transfer:
        if from_account is None and to_account is None:
            raise ValidationError("A transfer needs at least one account")
        transfer = Transfer(
            amount,
            from_account=from_account,
            to_account=to_account,
            ledger=ledger,
            date=on_date,
            note=note,
        )
        linkage.link_transaction(transfer)
        if self._repository is not None:
            self._repository.add(transfer)
        return transfer


__all__ = ["AccountService", "UNCHANGED"]
