"""Rules deciding whether a transaction may touch an account."""

from decimal import Decimal

from ledger_engine.domain.errors import (
    CreditLimitExceededError,
    InsufficientFundsError,
    OwnershipError,
    UnsupportedOperationError,
    ValidationError,
)
from ledger_engine.domain.models.accounts import CreditAccount


def is_postable(account) -> bool:
    """Return whether transactions may be posted to ``account`` directly."""
    return account.supports_direct_posting and account.selectable


def check_postable(account, owner=None) -> None:
    """Reject accounts a transaction cannot use.

    Args:
        account: Account named by the transaction, or ``None``.
        owner: Owner the account must belong to, when given.

    Raises:
        UnsupportedOperationError: If the variant refuses direct posting.
        ValidationError: If the account is hidden or not selectable.
        OwnershipError: If the account belongs to another owner.
    """
    if account is None:
        return
    if not account.supports_direct_posting:
        raise UnsupportedOperationError(
            f"Transactions cannot be posted to '{account.name}'"
        )
    if not account.selectable or account.hidden:
        raise ValidationError(f"Account '{account.name}' is not selectable")
    if owner is not None and account.owner is not owner:
        raise OwnershipError(f"Account '{account.name}' belongs to another owner")


def check_sufficient_funds(
    account, amount: Decimal, refund: Decimal = Decimal("0")
) -> None:
    """Ensure ``account`` can be debited ``amount``.

    Credit accounts may spend their balance plus the unused credit line.
    Borrowing accounts are never short of funds.

    Args:
        account: Account about to be debited.
        amount: Amount of the debit.
        refund: Amount that will be given back to the account before the
            debit, as when an edit reverses the previous posting first.

    Raises:
        CreditLimitExceededError: If a credit account would pass its limit.
        InsufficientFundsError: If another account cannot cover the debit.
    """
    if account.available_funds() + refund >= amount:
        return
    if isinstance(account, CreditAccount):
        raise CreditLimitExceededError(
            f"Debit of {amount} exceeds the credit limit of '{account.name}'"
        )
    if account.requires_funds_check:
        raise InsufficientFundsError(
            f"Insufficient funds in '{account.name}' for {amount}"
        )


__all__ = ["is_postable", "check_postable", "check_sufficient_funds"]
