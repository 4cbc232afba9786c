"""Domain model for spending budgets."""

from datetime import date

from ledger_engine.domain.errors import ValidationError
from ledger_engine.domain.models.enums import BudgetPeriod, CategoryType
from ledger_engine.domain.services import budget_periods
from ledger_engine.domain.services.validation import require_non_negative
from ledger_engine.utils.decimal_utils import quantize_money


class Budget:
    """Spending limit for one window.

    A budget without a category covers everything the owner spends. A
    budget on a top-level category covers that category, and a budget on a
    subcategory covers just the subcategory.

    Attributes:
        id: Identity assigned by a repository.
        amount: Budgeted amount.
        period: Window length.
        category: Scope of the budget, ``None`` for the whole user.
        owner: Owner of a whole-user budget, or of the category's ledger.
        start_date: First day of the window.
        end_date: Last day of the window.
        merged_sources: Budgets already folded in by a merge.
    """

    def __init__(
        self,
        amount,
        period: BudgetPeriod,
        category=None,
        owner=None,
        today: date | None = None,
    ):
        if period is None:
            raise ValidationError("Budget period cannot be null")
        if category is not None and category.category_type == CategoryType.INCOME:
            raise ValidationError("Budgets cannot be set on income categories")
        self.id: int | None = None
        self.amount = quantize_money(require_non_negative(amount, "Budget amount"))
        self.period = period
        self.category = category
        self.owner = owner
        self.start_date = budget_periods.get_start_date_for_period(
            today or date.today(), period
        )
        self.end_date = budget_periods.get_end_date_for_period(
            self.start_date, period
        )
        self.merged_sources: list = []

    def __repr__(self) -> str:
        return (
            f"Budget(id={self.id!r}, scope={self.scope}, amount={self.amount}, "
            f"period={self.period.value}, start={self.start_date.isoformat()})"
        )

    @property
    def scope(self) -> str:
        """``user``, ``category`` or ``subcategory``."""
        if self.category is None:
            return "user"
        if self.category.parent is None:
            return "category"
        return "subcategory"

    @property
    def merged_budget_ids(self) -> list:
        return [source.id for source in self.merged_sources]

    def is_in_period(self, on_date: date) -> bool:
        return budget_periods.is_in_period(self.start_date, self.period, on_date)

    def covers(self, on_date: date) -> bool:
        """Return whether ``on_date`` lies between start and end dates."""
        return self.start_date <= on_date <= self.end_date

    def has_merged(self, source) -> bool:
        return any(merged is source for merged in self.merged_sources)

    def set_amount(self, amount) -> None:
        self.amount = quantize_money(require_non_negative(amount, "Budget amount"))


__all__ = ["Budget"]
