"""Domain models for ledger transactions.

Constructing a transaction never moves money. Balance effects are applied
by the transaction service, and collection membership is managed by
``ledger_engine.domain.services.linkage``.
"""

from datetime import date

from ledger_engine.domain.errors import ValidationError
from ledger_engine.domain.models.enums import TransactionType
from ledger_engine.domain.services.validation import require_positive
from ledger_engine.utils.decimal_utils import quantize_money


class Transaction:
    """Base transaction.

    Attributes:
        id: Identity assigned by a repository.
        date: Booking date, today when omitted.
        amount: Positive amount rounded to cents.
        note: Free text.
        from_account: Account money leaves, if any.
        to_account: Account money enters, if any.
        ledger: Ledger the transaction is recorded in.
        category: Ledger category classifying the transaction.
    """

    transaction_type: TransactionType

    def __init__(
        self,
        amount,
        from_account=None,
        to_account=None,
        ledger=None,
        category=None,
        date: date | None = None,
        note: str | None = None,
    ):
        self.id: int | None = None
        self.amount = quantize_money(require_positive(amount))
        self.date = date or _today()
        self.note = note
        self.from_account = from_account
        self.to_account = to_account
        self.ledger = ledger
        self.category = category
        self.check_accounts(from_account, to_account)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(id={self.id!r}, amount={self.amount}, "
            f"date={self.date.isoformat()})"
        )

    @classmethod
    def check_accounts(cls, from_account, to_account) -> None:
        """Reject account combinations the variant does not allow."""

    def set_amount(self, amount) -> None:
        self.amount = quantize_money(require_positive(amount))

    def involves(self, account) -> bool:
        return self.from_account is account or self.to_account is account


class Income(Transaction):
    """Money entering ``to_account`` from outside the books."""

    transaction_type = TransactionType.INCOME

    def __init__(
        self,
        amount,
        to_account=None,
        ledger=None,
        category=None,
        date: date | None = None,
        note: str | None = None,
    ):
        super().__init__(
            amount,
            from_account=None,
            to_account=to_account,
            ledger=ledger,
            category=category,
            date=date,
            note=note,
        )

    @classmethod
    def check_accounts(cls, from_account, to_account) -> None:
        if from_account is not None:
            raise ValidationError("Income cannot have a source account")


class Expense(Transaction):
    """Money leaving ``from_account`` to outside the books."""

    transaction_type = TransactionType.EXPENSE

    def __init__(
        self,
        amount,
        from_account=None,
        ledger=None,
        category=None,
        date: date | None = None,
        note: str | None = None,
    ):
        super().__init__(
            amount,
            from_account=from_account,
            to_account=None,
            ledger=ledger,
            category=category,
            date=date,
            note=note,
        )

    @classmethod
    def check_accounts(cls, from_account, to_account) -> None:
        if to_account is not None:
            raise ValidationError("Expense cannot have a destination account")


class Transfer(Transaction):
    """Money moving between two accounts, or in from / out to the outside."""

    transaction_type = TransactionType.TRANSFER

    @classmethod
    def check_accounts(cls, from_account, to_account) -> None:
        if from_account is None and to_account is None:
            raise ValidationError("Transfer needs at least one account")
        if from_account is not None and from_account is to_account:
            raise ValidationError("Transfer accounts must be different")


TRANSACTION_CLASSES = {
    TransactionType.INCOME: Income,
    TransactionType.EXPENSE: Expense,
    TransactionType.TRANSFER: Transfer,
}


def _today() -> date:
    return date.today()


__all__ = [
    "Transaction",
    "Income",
    "Expense",
    "Transfer",
    "TRANSACTION_CLASSES",
]
