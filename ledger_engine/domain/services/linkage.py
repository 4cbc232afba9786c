"""Keep transactions and the collections that reference them in sync.

A transaction appears in up to four lists: its source account's outgoing
list, its destination account's incoming list, its ledger's list and its
category's list. Every change to those references goes through this
module so no list is left pointing at a detached transaction.
"""


def _append_once(items: list, item) -> None:
    if not any(existing is item for existing in items):
        items.append(item)


def _remove_if_present(items: list, item) -> None:
    for index, existing in enumerate(items):
        if existing is item:
            del items[index]
            return


def link_transaction(transaction) -> None:
    """Add ``transaction`` to every collection it references."""
    if transaction.from_account is not None:
        _append_once(transaction.from_account.outgoing_transactions, transaction)
    if transaction.to_account is not None:
        _append_once(transaction.to_account.incoming_transactions, transaction)
    if transaction.ledger is not None:
        _append_once(transaction.ledger.transactions, transaction)
    if transaction.category is not None:
        _append_once(transaction.category.transactions, transaction)


def unlink_transaction(transaction) -> None:
    """Remove ``transaction`` from every collection, then clear its references."""
    if transaction.from_account is not None:
        _remove_if_present(transaction.from_account.outgoing_transactions, transaction)
    if transaction.to_account is not None:
        _remove_if_present(transaction.to_account.incoming_transactions, transaction)
    if transaction.ledger is not None:
        _remove_if_present(transaction.ledger.transactions, transaction)
    if transaction.category is not None:
        _remove_if_present(transaction.category.transactions, transaction)
    transaction.from_account = None
    transaction.to_account = None
    transaction.ledger = None
    transaction.category = None


def detach_account(transaction, account) -> None:
    """Drop ``account`` from ``transaction`` while keeping the transaction."""
    if transaction.from_account is account:
        _remove_if_present(account.outgoing_transactions, transaction)
        transaction.from_account = None
    if transaction.to_account is account:
        _remove_if_present(account.incoming_transactions, transaction)
        transaction.to_account = None


def relink_accounts(transaction, from_account, to_account) -> None:
    """Point ``transaction`` at new source and destination accounts."""
    if transaction.from_account is not from_account:
        if transaction.from_account is not None:
            _remove_if_present(
                transaction.from_account.outgoing_transactions, transaction
            )
        transaction.from_account = from_account
        if from_account is not None:
            _append_once(from_account.outgoing_transactions, transaction)
    if transaction.to_account is not to_account:
        if transaction.to_account is not None:
            _remove_if_present(
                transaction.to_account.incoming_transactions, transaction
            )
        transaction.to_account = to_account
        if to_account is not None:
            _append_once(to_account.incoming_transactions, transaction)


def relink_ledger(transaction, ledger) -> None:
    """Move ``transaction`` to another ledger."""
    if transaction.ledger is ledger:
        return
    if transaction.ledger is not None:
        _remove_if_present(transaction.ledger.transactions, transaction)
    transaction.ledger = ledger
    if ledger is not None:
        _append_once(ledger.transactions, transaction)


def relink_category(transaction, category) -> None:
    """Move ``transaction`` to another category."""
    if transaction.category is category:
        return
    if transaction.category is not None:
        _remove_if_present(transaction.category.transactions, transaction)
    transaction.category = category
    if category is not None:
        _append_once(category.transactions, transaction)


def is_linked(transaction) -> bool:
    """Return whether any referenced collection still holds ``transaction``."""
    holders = []
    if transaction.from_account is not None:
        holders.append(transaction.from_account.outgoing_transactions)
    if transaction.to_account is not None:
        holders.append(transaction.to_account.incoming_transactions)
    if transaction.ledger is not None:
        holders.append(transaction.ledger.transactions)
    if transaction.category is not None:
        holders.append(transaction.category.transactions)
    return any(
        existing is transaction for items in holders for existing in items
    )


__all__ = [
    "link_transaction",
    "unlink_transaction",
    "detach_account",
    "relink_accounts",
    "relink_ledger",
    "relink_category",
    "is_linked",
]
