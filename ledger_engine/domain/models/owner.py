"""Domain model for the account owner and their derived totals."""

from ledger_engine.domain.constants import DEFAULT_LEDGER_NAME
from ledger_engine.domain.errors import OwnershipError, ValidationError
from ledger_engine.domain.models.finance import NetWorthSummary
from ledger_engine.domain.models.ledger import Ledger
from ledger_engine.domain.services import finance
from ledger_engine.domain.services.validation import require_name
from ledger_engine.utils.decimal_utils import ZERO


class Owner:
    """A user together with their ledgers, accounts and budgets.

    ``total_assets``, ``total_liabilities`` and ``net_assets`` are derived
    from the accounts and only change through :meth:`recompute_totals`.
    """

    def __init__(self, username: str, lending_add_back: bool = True):
        self.id: int | None = None
        self.username = require_name(username)
        self.lending_add_back = lending_add_back
        self.ledgers: list[Ledger] = []
        self.accounts: list = []
        self.budgets: list = []
        self.total_assets = ZERO
        self.total_liabilities = ZERO
        self.net_assets = ZERO
        self.create_ledger(DEFAULT_LEDGER_NAME)

    def __repr__(self) -> str:
        return f"Owner(id={self.id!r}, username={self.username!r})"

    @property
    def default_ledger(self) -> Ledger:
        return self.ledgers[0]

    def create_ledger(self, name: str) -> Ledger:
        if any(ledger.name == name for ledger in self.ledgers):
            raise ValidationError(f"Ledger '{name}' already exists")
        ledger = Ledger(name, owner=self)
        self.ledgers.append(ledger)
        return ledger

    def owns_ledger(self, ledger) -> bool:
        return any(existing is ledger for existing in self.ledgers)

    def owns_account(self, account) -> bool:
        return any(existing is account for existing in self.accounts)

    def add_account(self, account) -> None:
        account.attach_owner(self)
        if not self.owns_account(account):
            self.accounts.append(account)

    def remove_account(self, account) -> None:
        if not self.owns_account(account):
            raise OwnershipError("Account does not belong to this owner")
        self.accounts.remove(account)

    def net_worth_summary(self) -> NetWorthSummary:
        return finance.compute_net_worth_summary(
            self.accounts, lending_add_back=self.lending_add_back
        )

    def update_total_assets(self, summary: NetWorthSummary) -> None:
        self.total_assets = summary.total_assets

    def update_total_liabilities(self, summary: NetWorthSummary) -> None:
        self.total_liabilities = summary.total_liabilities

    def update_net_assets(self, summary: NetWorthSummary) -> None:
        self.net_assets = summary.net_assets

    def recompute_totals(self) -> NetWorthSummary:
        """Refresh all three totals from one summary and return it."""
        summary = self.net_worth_summary()
        self.update_total_assets(summary)
        self.update_total_liabilities(summary)
        self.update_net_assets(summary)
        return summary


__all__ = ["Owner"]
