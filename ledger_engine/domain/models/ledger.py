"""Domain models for ledgers and their two-level categories."""

from decimal import Decimal

from ledger_engine.domain.errors import ValidationError
from ledger_engine.domain.models.enums import CategoryType, TransactionType
from ledger_engine.domain.services.validation import require_name
from ledger_engine.utils.decimal_utils import sum_money


class LedgerCategory:
    """Classification tag for transactions and budgets.

    Categories nest at most two levels deep: a top-level category and its
    subcategories, which share the parent's type.
    """

    def __init__(
        self,
        name: str,
        category_type: CategoryType,
        ledger=None,
        parent: "LedgerCategory | None" = None,
    ):
        self.id: int | None = None
        self.name = require_name(name)
        self.category_type = category_type
        self.ledger = ledger
        self.parent = parent
        self.children: list[LedgerCategory] = []
        self.transactions: list = []
        self.budgets: list = []

    def __repr__(self) -> str:
        return f"LedgerCategory(id={self.id!r}, name={self.name!r})"

    @property
    def is_top_level(self) -> bool:
        return self.parent is None

    def with_descendants(self) -> list["LedgerCategory"]:
        return [self, *self.children]

    def total_spent(self, start, end) -> Decimal:
        """Sum expenses booked on this category and its children."""
        return sum_money(
            tx.amount
            for category in self.with_descendants()
            for tx in category.transactions
            if tx.transaction_type == TransactionType.EXPENSE
            and start <= tx.date <= end
        )


class Ledger:
    """Named book of transactions and categories belonging to one owner."""

    def __init__(self, name: str, owner=None):
        self.id: int | None = None
        self.name = require_name(name)
        self.owner = owner
        self.transactions: list = []
        self.categories: list[LedgerCategory] = []

    def __repr__(self) -> str:
        return f"Ledger(id={self.id!r}, name={self.name!r})"

    def add_category(
        self,
        name: str,
        category_type: CategoryType,
        parent: LedgerCategory | None = None,
    ) -> LedgerCategory:
        """Create a category in this ledger.

        Raises:
            ValidationError: If the parent belongs to another ledger, is itself
                a subcategory, or has a different type.
        """
        if parent is not None:
            if parent.ledger is not self:
                raise ValidationError("Parent category belongs to another ledger")
            if parent.parent is not None:
                raise ValidationError("Categories can only be nested one level")
            if parent.category_type != category_type:
                raise ValidationError("Subcategory type must match its parent")
        category = LedgerCategory(name, category_type, ledger=self, parent=parent)
        self.categories.append(category)
        if parent is not None:
            parent.children.append(category)
        return category

    def owns_category(self, category) -> bool:
        return any(existing is category for existing in self.categories)

    def transactions_for_month(self, year: int, month: int) -> list:
        """Ledger transactions in the month, newest first."""
        return sorted(
            (
                tx
                for tx in self.transactions
                if tx.date.year == year and tx.date.month == month
            ),
            key=lambda tx: tx.date,
            reverse=True,
        )

    def total_income_for_month(self, year: int, month: int) -> Decimal:
        return sum_money(
            tx.amount
            for tx in self.transactions_for_month(year, month)
            if tx.transaction_type == TransactionType.INCOME
        )

    def total_expense_for_month(self, year: int, month: int) -> Decimal:
        return sum_money(
            tx.amount
            for tx in self.transactions_for_month(year, month)
            if tx.transaction_type == TransactionType.EXPENSE
        )


__all__ = ["Ledger", "LedgerCategory"]
