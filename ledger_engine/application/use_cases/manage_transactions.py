"""Use case for creating, deleting and editing ledger transactions.

Every command validates the complete request before touching any balance,
applies the balance effects, keeps the transaction linked to its accounts,
ledger and category, and finally recomputes the owner's totals once.
"""

from datetime import date
from decimal import Decimal

from ledger_engine.application.ports.ledger_repository import LedgerRepositoryPort
from ledger_engine.domain.errors import (
    CreditLimitExceededError,
    OwnershipError,
    UnsupportedOperationError,
    ValidationError,
)
from ledger_engine.domain.models import (
    TRANSACTION_CLASSES,
    CategoryType,
    CreditAccount,
    Ledger,
    Transaction,
    TransactionType,
)
from ledger_engine.domain.policies import check_postable, check_sufficient_funds
from ledger_engine.domain.services import linkage
from ledger_engine.domain.services.validation import require_positive
from ledger_engine.infrastructure.logging.logger import get_app_logger
from ledger_engine.utils.decimal_utils import ZERO, quantize_money

UNCHANGED = object()

_REQUIRED_CATEGORY_TYPES = {
    TransactionType.INCOME: CategoryType.INCOME,
    TransactionType.EXPENSE: CategoryType.EXPENSE,
}


def _ledger_owner(ledger: Ledger):
    if ledger is None:
        raise ValidationError("Ledger cannot be null")
    return ledger.owner


def _check_shape(
    transaction_type: TransactionType,
    ledger: Ledger,
    from_account,
    to_account,
    category,
) -> None:
    """Validate the accounts and category a transaction would use."""
    owner = _ledger_owner(ledger)
    if from_account is None and to_account is None:
        raise ValidationError("A transaction needs at least one account")
    check_postable(from_account, owner)
    check_postable(to_account, owner)

    if transaction_type == TransactionType.INCOME:
        if to_account is None:
            raise ValidationError("Income needs a destination account")
        if from_account is not None:
            raise ValidationError("Income cannot have a source account")
    elif transaction_type == TransactionType.EXPENSE:
        if from_account is None:
            raise ValidationError("Expense needs a source account")
        if to_account is not None:
            raise ValidationError("Expense cannot have a destination account")
    elif from_account is not None and from_account is to_account:
        raise ValidationError("Transfer accounts must be different")

    required_type = _REQUIRED_CATEGORY_TYPES.get(transaction_type)
    if required_type is None:
        if category is not None:
            raise ValidationError("Transfers cannot have a category")
        return
    if category is None:
        raise ValidationError(f"{transaction_type.value.title()} needs a category")
    if category.category_type != required_type:
        raise ValidationError(
            f"{transaction_type.value.title()} needs a "
            f"{required_type.value.lower()} category"
        )
    if not ledger.owns_category(category):
        raise OwnershipError("Category does not belong to the ledger")


def _check_direct_posting(transaction: Transaction) -> None:
    for account in (transaction.from_account, transaction.to_account):
        if account is not None and not account.supports_direct_posting:
            raise UnsupportedOperationError(
                f"Transaction touches '{account.name}', which cannot be posted to"
            )


def check_reversible(transaction: Transaction) -> None:
    """Ensure the balance effects of ``transaction`` can be undone.

    Raises:
        UnsupportedOperationError: If a referenced account refuses direct
            posting, as loans do.
        CreditLimitExceededError: If undoing a credit to a credit account
            would push it past its limit.
        InsufficientFundsError: If the destination no longer holds the
            amount it received.
    """
    _check_direct_posting(transaction)
    if transaction.to_account is not None:
        check_sufficient_funds(transaction.to_account, transaction.amount)


def _check_replacement_funds(
    transaction: Transaction,
    amount: Decimal,
    from_account,
    to_account,
) -> None:
    """Check every account against its net change when an edit is applied.

    Each account is debited what the reversal and the new posting take from
    it, after being refunded what they give back.
    """
    movements = []

    def add(account, debit=ZERO, refund=ZERO):
        if account is None:
            return
        for entry in movements:
            if entry[0] is account:
                entry[1] += debit
                entry[2] += refund
                return
        movements.append([account, debit, refund])

    add(transaction.from_account, refund=transaction.amount)
    add(transaction.to_account, debit=transaction.amount)
    add(from_account, debit=amount)
    add(to_account, refund=amount)
    for account, debit, refund in movements:
        if debit > 0:
            check_sufficient_funds(account, debit, refund)


def apply_effects(amount: Decimal, from_account, to_account) -> None:
    """Debit the source, then credit the destination."""
    if from_account is not None:
        from_account.debit(amount)
    if to_account is not None:
        to_account.credit(amount)


def reverse_effects(transaction: Transaction) -> None:
    """Undo what :func:`apply_effects` did for ``transaction``."""
    if transaction.to_account is not None:
        transaction.to_account.debit(transaction.amount)
    if transaction.from_account is not None:
        transaction.from_account.credit(transaction.amount)


def _recompute(*owners) -> None:
    seen = []
    for owner in owners:
        if owner is not None and not any(owner is other for other in seen):
            seen.append(owner)
            owner.recompute_totals()


class TransactionService:
    """Create, delete and edit transactions."""

    def __init__(
        self,
        repository: LedgerRepositoryPort | None = None,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Optional store receiving created transactions.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._logger = logger or get_app_logger()

    def create_transaction(
        self,
        ledger: Ledger,
        transaction_type: TransactionType,
        amount,
        from_account=None,
        to_account=None,
        category=None,
        date: date | None = None,
        note: str | None = None,
    ) -> Transaction:
        """Record a transaction and apply its balance effects.

        Args:
            ledger: Ledger the transaction is recorded in.
            transaction_type: Income, expense or transfer.
            amount: Positive amount.
            from_account: Account debited, for expenses and transfers.
            to_account: Account credited, for income and transfers.
            category: Category matching the transaction type; transfers
                have none.
            date: Booking date, today when omitted.
            note: Free text.

        Returns:
            Transaction: The linked transaction.

        Raises:
            ValidationError: If the request is malformed.
            LimitError: If the source cannot cover the amount.
            UnsupportedOperationError: If an account refuses direct posting.
        """
        value = quantize_money(require_positive(amount))
        _check_shape(transaction_type, ledger, from_account, to_account, category)
        if from_account is not None:
            self._check_funds(from_account, value)

        transaction = self._build(
            transaction_type,
            value,
            from_account,
            to_account,
            ledger,
            category,
            date,
            note,
        )
        apply_effects(value, from_account, to_account)
        linkage.link_transaction(transaction)
        _recompute(ledger.owner)
        if self._repository is not None:
            self._repository.add(transaction)

        self._logger.info(
            f"Created {transaction_type.value} of {value} in ledger '{ledger.name}'"
        )
        return transaction

    def delete_transaction(self, transaction: Transaction) -> None:
        """Undo the balance effects of ``transaction`` and unlink it.

        Raises:
            UnsupportedOperationError: If it touches a loan account.
            CreditLimitExceededError: If undoing it breaks a credit limit.
            InsufficientFundsError: If the destination already spent the
                money it received.
        """
        check_reversible(transaction)
        owners = (
            transaction.ledger.owner if transaction.ledger is not None else None,
            getattr(transaction.from_account, "owner", None),
            getattr(transaction.to_account, "owner", None),
        )
        reverse_effects(transaction)
        linkage.unlink_transaction(transaction)
        _recompute(*owners)
        if self._repository is not None:
            self._repository.remove(transaction)

        self._logger.info(
            f"Deleted {transaction.transaction_type.value} of {transaction.amount}"
        )

    def edit_transaction(
        self,
        transaction: Transaction,
        amount=None,
        from_account=UNCHANGED,
        to_account=UNCHANGED,
        ledger: Ledger | None = None,
        category=UNCHANGED,
        date: date | None = None,
        note=UNCHANGED,
    ) -> Transaction:
        """Change a transaction and move its balance effects accordingly.

        Omitted arguments keep their current value. The complete new state
        is validated before the old effects are reversed.

        Returns:
            Transaction: The edited transaction.
        """
        new_amount = (
            quantize_money(require_positive(amount))
            if amount is not None
            else transaction.amount
        )
        new_from = (
            transaction.from_account if from_account is UNCHANGED else from_account
        )
        new_to = transaction.to_account if to_account is UNCHANGED else to_account
        new_ledger = ledger if ledger is not None else transaction.ledger
        new_category = transaction.category if category is UNCHANGED else category

        if (
            transaction.ledger is not None
            and new_ledger is not transaction.ledger
            and new_ledger.owner is not transaction.ledger.owner
        ):
            raise OwnershipError("Transactions cannot move to another owner's ledger")
        _check_shape(
            transaction.transaction_type, new_ledger, new_from, new_to, new_category
        )
        _check_direct_posting(transaction)
        if isinstance(transaction.to_account, CreditAccount):
            # The reversal debits the card before anything is re-applied.
            check_sufficient_funds(transaction.to_account, transaction.amount)
        _check_replacement_funds(transaction, new_amount, new_from, new_to)

        old_owners = (
            transaction.ledger.owner if transaction.ledger is not None else None,
            getattr(transaction.from_account, "owner", None),
            getattr(transaction.to_account, "owner", None),
        )
        reverse_effects(transaction)
        apply_effects(new_amount, new_from, new_to)
        transaction.set_amount(new_amount)
        linkage.relink_accounts(transaction, new_from, new_to)
        linkage.relink_ledger(transaction, new_ledger)
        linkage.relink_category(transaction, new_category)
        if date is not None:
            transaction.date = date
        if note is not UNCHANGED:
            transaction.note = note
        _recompute(*old_owners, new_ledger.owner)

        self._logger.info(
            f"Edited {transaction.transaction_type.value} id={transaction.id}: "
            f"amount={new_amount}"
        )
        return transaction

    @staticmethod
    def _check_funds(account, amount: Decimal) -> None:
        check_sufficient_funds(account, amount)

    @staticmethod
    def _build(
        transaction_type: TransactionType,
        amount: Decimal,
        from_account,
        to_account,
        ledger: Ledger,
        category,
        date: date | None,
        note: str | None,
    ) -> Transaction:
        model = TRANSACTION_CLASSES[transaction_type]
        if transaction_type == TransactionType.INCOME:
            return model(
                amount,
                to_account=to_account,
                ledger=ledger,
                category=category,
                date=date,
                note=note,
            )
        if transaction_type == TransactionType.EXPENSE:
            return model(
                amount,
                from_account=from_account,
                ledger=ledger,
                category=category,
                date=date,
                note=note,
            )
        return model(
            amount,
            from_account=from_account,
            to_account=to_account,
            ledger=ledger,
            category=category,
            date=date,
            note=note,
        )


__all__ = [
    "TransactionService",
    "UNCHANGED",
    "apply_effects",
    "reverse_effects",
    "check_reversible",
]
