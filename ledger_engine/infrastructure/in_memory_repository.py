"""In-memory object store with integer identities.

Every stored entity receives the next integer id from a single counter and
is kept in a per-kind table. Entities keep referencing each other directly;
the store only resolves identities for callers.
"""

from ledger_engine.application.ports.ledger_repository import LedgerRepositoryPort
from ledger_engine.domain.errors import ValidationError
from ledger_engine.domain.models import (
    Account,
    Budget,
    InstallmentPlan,
    Ledger,
    LedgerCategory,
    Owner,
    Transaction,
)

_KINDS = (
    ("owner", Owner),
    ("ledger", Ledger),
    ("category", LedgerCategory),
    ("account", Account),
    ("transaction", Transaction),
    ("budget", Budget),
    ("installment_plan", InstallmentPlan),
)


class EntityNotFoundError(ValidationError):
    """Raised when no entity of the requested kind has the given id."""


class InMemoryLedgerRepository(LedgerRepositoryPort):
    """LedgerRepositoryPort backed by dictionaries."""

    def __init__(self) -> None:
        self._next_id = 1
        self._tables: dict[str, dict[int, object]] = {
            kind: {} for kind, _ in _KINDS
        }

    @staticmethod
    def _kind_of(entity) -> str:
        for kind, model in _KINDS:
            if isinstance(entity, model):
                return kind
        raise ValidationError(f"Cannot store {type(entity).__name__}")

    def add(self, entity) -> int:
        """Store ``entity``, assigning an id on first insert.

        Adding an owner also stores its ledgers, and adding a ledger stores
        its categories, so their ids resolve immediately.
        """
        table = self._tables[self._kind_of(entity)]
        if entity.id is None:
            entity.id = self._next_id
            self._next_id += 1
        table[entity.id] = entity
        if isinstance(entity, Owner):
            for ledger in entity.ledgers:
                self.add(ledger)
        elif isinstance(entity, Ledger):
            for category in entity.categories:
                self.add(category)
        return entity.id

    def remove(self, entity) -> None:
        if entity.id is None:
            return
        self._tables[self._kind_of(entity)].pop(entity.id, None)

    def _get(self, kind: str, entity_id: int):
        try:
            return self._tables[kind][entity_id]
        except KeyError:
            raise EntityNotFoundError(
                f"No {kind.replace('_', ' ')} with id {entity_id}"
            ) from None

    def get_owner(self, owner_id: int) -> Owner:
        return self._get("owner", owner_id)

    def get_ledger(self, ledger_id: int) -> Ledger:
        return self._get("ledger", ledger_id)

    def get_category(self, category_id: int) -> LedgerCategory:
        return self._get("category", category_id)

    def get_account(self, account_id: int) -> Account:
        return self._get("account", account_id)

    def get_transaction(self, transaction_id: int) -> Transaction:
        return self._get("transaction", transaction_id)

    def get_budget(self, budget_id: int) -> Budget:
        return self._get("budget", budget_id)

    def get_installment_plan(self, plan_id: int) -> InstallmentPlan:
        return self._get("installment_plan", plan_id)

    def count(self, kind: str) -> int:
        """Return how many entities of ``kind`` are stored."""
        return len(self._tables[kind])


__all__ = ["InMemoryLedgerRepository", "EntityNotFoundError"]
