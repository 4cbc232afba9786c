"""Repository port for loading and storing domain objects by identity."""

from typing import Protocol

from ledger_engine.domain.models import (
    Account,
    Budget,
    InstallmentPlan,
    Ledger,
    LedgerCategory,
    Owner,
    Transaction,
)


class LedgerRepositoryPort(Protocol):
    """Port for the object store behind the application services.

    Services register objects they create with :meth:`add` and forget the
    ones they delete with :meth:`remove`. Callers resolve identities with
    the typed getters before invoking an operation.
    """

    def add(self, entity) -> int:
        """Store ``entity`` and return its identity.

        Args:
            entity: Owner, ledger, category, account, transaction, budget or
                installment plan.

        Returns:
            int: Identity assigned to the entity.
        """

    def remove(self, entity) -> None:
        """Forget ``entity``."""

    def get_owner(self, owner_id: int) -> Owner:
        """Return the owner with ``owner_id``."""

    def get_ledger(self, ledger_id: int) -> Ledger:
        """Return the ledger with ``ledger_id``."""

    def get_category(self, category_id: int) -> LedgerCategory:
        """Return the category with ``category_id``."""

    def get_account(self, account_id: int) -> Account:
        """Return the account with ``account_id``."""

    def get_transaction(self, transaction_id: int) -> Transaction:
        """Return the transaction with ``transaction_id``."""

    def get_budget(self, budget_id: int) -> Budget:
        """Return the budget with ``budget_id``."""

    def get_installment_plan(self, plan_id: int) -> InstallmentPlan:
        """Return the installment plan with ``plan_id``."""


__all__ = ["LedgerRepositoryPort"]
