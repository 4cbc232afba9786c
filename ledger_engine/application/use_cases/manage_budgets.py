"""Use case for budgets: creation rules, merging and spending summaries."""

from datetime import date
from decimal import Decimal

from ledger_engine.application.ports.ledger_repository import LedgerRepositoryPort
from ledger_engine.domain.errors import (
    BudgetConflictError,
    OwnershipError,
    ValidationError,
)
from ledger_engine.domain.models import (
    Budget,
    BudgetOverview,
    BudgetPeriod,
    BudgetStatus,
    CategoryType,
    Owner,
    TransactionType,
)
from ledger_engine.domain.services import budget_periods
from ledger_engine.infrastructure.logging.logger import get_app_logger
from ledger_engine.utils.decimal_utils import ZERO, sum_money

USER_BUDGET_LABEL = "Total"


def _scope_budgets(owner: Owner, category) -> list:
    return owner.budgets if category is None else category.budgets


class BudgetService:
    """Create, edit, delete, merge and summarize budgets."""

    def __init__(
        self,
        repository: LedgerRepositoryPort | None = None,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Optional store receiving created budgets.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._logger = logger or get_app_logger()

    def create_budget(
        self,
        owner: Owner,
        amount,
        period: BudgetPeriod,
        category=None,
        today: date | None = None,
    ) -> Budget:
        """Create a budget for the owner or for one expense category.

        Args:
            owner: Owner of the budget.
            amount: Budgeted amount, zero or more.
            period: Monthly or yearly.
            category: Category scope, ``None`` for a whole-user budget.
            today: Creation date deciding the window, today when omitted.

        Returns:
            Budget: The new budget.

        Raises:
            ValidationError: If the amount is negative or the category is an
                income category.
            OwnershipError: If the category belongs to another owner.
            BudgetConflictError: If an active budget already covers the same
                scope and period.
        """
        today = today or date.today()
        if category is not None:
            if category.ledger is None or category.ledger.owner is not owner:
                raise OwnershipError("Category belongs to another owner")
            if category.category_type == CategoryType.INCOME:
                raise ValidationError("Budgets cannot be set on income categories")
        scope_budgets = _scope_budgets(owner, category)
        if budget_periods.find_active_budget(scope_budgets, period, today) is not None:
            raise BudgetConflictError(
                f"An active {period.value.lower()} budget already exists for this scope"
            )
        budget = Budget(amount, period, category=category, owner=owner, today=today)
        scope_budgets.append(budget)
        if self._repository is not None:
            self._repository.add(budget)
        self._logger.info(
            f"Created {period.value} {budget.scope} budget of {budget.amount} "
            f"starting {budget.start_date.isoformat()}"
        )
        return budget

    def edit_budget(self, budget: Budget, amount) -> Budget:
        budget.set_amount(amount)
        self._logger.info(f"Edited budget id={budget.id}: amount={budget.amount}")
        return budget

    def delete_budget(self, budget: Budget) -> None:
        scope_budgets = _scope_budgets(budget.owner, budget.category)
        for index, existing in enumerate(scope_budgets):
            if existing is budget:
                del scope_budgets[index]
                break
        else:
            raise ValidationError("Budget is not registered with its scope")
        if self._repository is not None:
            self._repository.remove(budget)
        self._logger.info(f"Deleted budget id={budget.id}")

    def merge_budget(self, budget: Budget, today: date | None = None) -> Decimal:
        """Fold the active child-scope budgets into ``budget``.

        Returns:
            Decimal: Amount added by this merge; zero when everything was
            already merged.
        """
        added = budget_periods.merge_budget(budget, today or date.today())
        self._logger.info(
            f"Merged {added} into {budget.scope} budget id={budget.id}: "
            f"amount={budget.amount}"
        )
        return added

    def summarize(
        self,
        owner: Owner,
        period: BudgetPeriod = BudgetPeriod.MONTHLY,
        today: date | None = None,
    ) -> BudgetOverview:
        """Compare budgets with spending for the current window.

        The whole-user line uses the active user budget (zero when there is
        none) against every expense in the owner's ledgers. One line follows
        for each top-level expense category holding an active budget.
        """
        today = today or date.today()
        start = budget_periods.get_start_date_for_period(today, period)
        end = budget_periods.get_end_date_for_period(start, period)

        user_budget = budget_periods.find_active_budget(owner.budgets, period, today)
        spent = sum_money(
            tx.amount
            for ledger in owner.ledgers
            for tx in ledger.transactions
            if tx.transaction_type == TransactionType.EXPENSE
            and start <= tx.date <= end
        )
        user_status = BudgetStatus(
            label=USER_BUDGET_LABEL,
            amount=user_budget.amount if user_budget is not None else ZERO,
            spent=spent,
            start_date=start,
            end_date=end,
        )

        category_statuses = []
        for ledger in owner.ledgers:
            for category in ledger.categories:
                if (
                    category.parent is not None
                    or category.category_type != CategoryType.EXPENSE
                ):
                    continue
                budget = budget_periods.find_active_budget(
                    category.budgets, period, today
                )
                if budget is None:
                    continue
                category_statuses.append(
                    BudgetStatus(
                        label=category.name,
                        amount=budget.amount,
                        spent=category.total_spent(start, end),
                        start_date=start,
                        end_date=end,
                    )
                )
        return BudgetOverview(
            user_budget=user_status,
            category_budgets=category_statuses,
        )


__all__ = ["BudgetService", "USER_BUDGET_LABEL"]
