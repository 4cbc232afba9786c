"""Domain services for owner finance aggregates."""

from collections.abc import Iterable
from decimal import Decimal
from logging import Logger

from ledger_engine.domain.models.accounts import (
    Account,
    BorrowingAccount,
    CreditAccount,
    LendingAccount,
    LoanAccount,
)
from ledger_engine.domain.models.finance import NetWorthSummary
from ledger_engine.domain.services.validation import warn_on_negative_balance
from ledger_engine.utils.decimal_utils import ZERO, quantize_money


def _counted(account: Account) -> bool:
    return not account.hidden and account.included_in_net_asset


def compute_total_lending(accounts: Iterable[Account]) -> Decimal:
    """Sum the outstanding receivables of counted, open lending accounts."""
    total = ZERO
    for account in accounts:
        if (
            isinstance(account, LendingAccount)
            and _counted(account)
            and not account.is_ended
            and account.balance > 0
        ):
            total += account.balance
    return quantize_money(total)


def compute_total_borrowing(accounts: Iterable[Account]) -> Decimal:
    """Sum what is still owed on counted, open borrowing accounts."""
    total = ZERO
    for account in accounts:
        if (
            isinstance(account, BorrowingAccount)
            and _counted(account)
            and not account.is_ended
        ):
            total += account.balance
    return quantize_money(total)


def compute_total_assets(
    accounts: Iterable[Account],
    *,
    logger: Logger | None = None,
) -> Decimal:
    """Sum counted account balances except loans, plus outstanding lending.

    Borrowing and lending balances are counted like any other balance, so
    an open lending remainder enters the total twice.
    """
    accounts = list(accounts)
    total = ZERO
    for account in accounts:
        if isinstance(account, LoanAccount) or not _counted(account):
            continue
        warn_on_negative_balance(account, logger)
        total += account.balance
    return quantize_money(total + compute_total_lending(accounts))


def compute_total_liabilities(accounts: Iterable[Account]) -> Decimal:
    """Sum credit debt, open borrowing and unpaid loans."""
    accounts = list(accounts)
    total = ZERO
    for account in accounts:
        if isinstance(account, CreditAccount) and _counted(account):
            total += account.current_debt
        elif (
            isinstance(account, LoanAccount)
            and not account.hidden
            and not account.is_ended
        ):
            total += account.remaining_amount
    return quantize_money(total + compute_total_borrowing(accounts))


def compute_net_worth_summary(
    accounts: Iterable[Account],
    *,
    lending_add_back: bool = True,
    logger: Logger | None = None,
) -> NetWorthSummary:
    """Compute the owner's totals from the account set.

    Args:
        accounts: Every account of the owner.
        lending_add_back: Add total lending to net assets on top of the
            receivable already counted in total assets.
        logger: Logger used for warnings.

    Returns:
        NetWorthSummary: Assets, liabilities and net assets.
    """
    accounts = list(accounts)
    total_assets = compute_total_assets(accounts, logger=logger)
    total_liabilities = compute_total_liabilities(accounts)
    total_lending = compute_total_lending(accounts)
    net_assets = total_assets - total_liabilities
    if lending_add_back:
        net_assets += total_lending
    return NetWorthSummary(
        total_assets=total_assets,
        total_liabilities=total_liabilities,
        net_assets=quantize_money(net_assets),
        total_lending=total_lending,
        total_borrowing=compute_total_borrowing(accounts),
    )


__all__ = [
    "compute_total_lending",
    "compute_total_borrowing",
    "compute_total_assets",
    "compute_total_liabilities",
    "compute_net_worth_summary",
]
