"""Tests for the budget service."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from ledger_engine.application.use_cases.manage_budgets import (
    USER_BUDGET_LABEL,
    BudgetService,
)
from ledger_engine.application.use_cases.manage_transactions import TransactionService
from ledger_engine.domain.errors import (
    BudgetConflictError,
    IllegalStateError,
    OwnershipError,
    ValidationError,
)
from ledger_engine.domain.models import (
    BasicAccount,
    BudgetPeriod,
    CategoryType,
    Owner,
    TransactionType,
)
from ledger_engine.infrastructure.in_memory_repository import InMemoryLedgerRepository

MARCH = date(2024, 3, 15)


@pytest.fixture
def owner():
    return Owner("alice")


@pytest.fixture
def service():
    return BudgetService(logger=MagicMock())


def test_create_user_budget(service, owner) -> None:
    budget = service.create_budget(owner, "1000", BudgetPeriod.MONTHLY, today=MARCH)

    assert budget.scope == "user"
    assert budget.start_date == date(2024, 3, 1)
    assert owner.budgets == [budget]


def test_second_active_budget_conflicts(service, owner) -> None:
    service.create_budget(owner, "1000", BudgetPeriod.MONTHLY, today=MARCH)

    with pytest.raises(BudgetConflictError):
        service.create_budget(owner, "500", BudgetPeriod.MONTHLY, today=MARCH)

    yearly = service.create_budget(owner, "9000", BudgetPeriod.YEARLY, today=MARCH)
    assert yearly.period == BudgetPeriod.YEARLY


def test_new_window_allows_new_budget(service, owner) -> None:
    service.create_budget(owner, "1000", BudgetPeriod.MONTHLY, today=MARCH)

    april = service.create_budget(
        owner, "800", BudgetPeriod.MONTHLY, today=date(2024, 4, 2)
    )

    assert april.start_date == date(2024, 4, 1)
    assert len(owner.budgets) == 2


def test_negative_amount_is_refused(service, owner) -> None:
    with pytest.raises(ValidationError):
        service.create_budget(owner, "-1", BudgetPeriod.MONTHLY, today=MARCH)
    assert owner.budgets == []


def test_income_category_is_refused(service, owner) -> None:
    salary = owner.default_ledger.add_category("Salary", CategoryType.INCOME)

    with pytest.raises(ValidationError):
        service.create_budget(owner, "100", BudgetPeriod.MONTHLY, category=salary)


def test_foreign_category_is_refused(service, owner) -> None:
    other = Owner("bob").default_ledger.add_category("Food", CategoryType.EXPENSE)

    with pytest.raises(OwnershipError):
        service.create_budget(owner, "100", BudgetPeriod.MONTHLY, category=other)


def test_edit_and_delete_budget(owner) -> None:
    repository = InMemoryLedgerRepository()
    service = BudgetService(repository, logger=MagicMock())
    food = owner.default_ledger.add_category("Food", CategoryType.EXPENSE)
    budget = service.create_budget(
        owner, "100", BudgetPeriod.MONTHLY, category=food, today=MARCH
    )

    service.edit_budget(budget, "150")
    assert budget.amount == Decimal("150.00")
    assert repository.get_budget(budget.id) is budget

    service.delete_budget(budget)
    assert food.budgets == []
    assert repository.count("budget") == 0
    with pytest.raises(ValidationError):
        service.delete_budget(budget)


def test_merge_budget_through_service(service, owner) -> None:
    food = owner.default_ledger.add_category("Food", CategoryType.EXPENSE)
    user = service.create_budget(owner, "1000", BudgetPeriod.MONTHLY, today=MARCH)
    service.create_budget(owner, "200", BudgetPeriod.MONTHLY, category=food, today=MARCH)

    assert service.merge_budget(user, today=MARCH) == Decimal("200.00")
    assert service.merge_budget(user, today=MARCH) == Decimal("0.00")
    assert user.amount == Decimal("1200.00")
    with pytest.raises(IllegalStateError):
        service.merge_budget(user, today=date(2024, 5, 1))


def test_summarize_compares_budgets_with_spending(service, owner) -> None:
    ledger = owner.default_ledger
    food = ledger.add_category("Food", CategoryType.EXPENSE)
    lunch = ledger.add_category("Lunch", CategoryType.EXPENSE, parent=food)
    travel = ledger.add_category("Travel", CategoryType.EXPENSE)
    cash = BasicAccount("Cash", "500", owner=owner)
    transactions = TransactionService(logger=MagicMock())
    for amount, category, day in (
        ("40", lunch, date(2024, 3, 5)),
        ("60", travel, date(2024, 3, 10)),
        ("30", food, date(2024, 2, 20)),
    ):
        transactions.create_transaction(
            ledger,
            TransactionType.EXPENSE,
            amount,
            from_account=cash,
            category=category,
            date=day,
        )
    service.create_budget(owner, "1000", BudgetPeriod.MONTHLY, today=MARCH)
    service.create_budget(owner, "200", BudgetPeriod.MONTHLY, category=food, today=MARCH)

    overview = service.summarize(owner, today=MARCH)

    assert overview.user_budget.label == USER_BUDGET_LABEL
    assert overview.user_budget.amount == Decimal("1000.00")
    assert overview.user_budget.spent == Decimal("100.00")
    assert overview.user_budget.remaining == Decimal("900.00")
    assert overview.user_budget.end_date == date(2024, 3, 31)
    assert [status.label for status in overview.category_budgets] == ["Food"]
    assert overview.category_budgets[0].spent == Decimal("40.00")
    assert overview.category_budgets[0].remaining == Decimal("160.00")


def test_summarize_without_budgets(service, owner) -> None:
    overview = service.summarize(owner, today=MARCH)

    assert overview.user_budget.amount == Decimal("0")
    assert overview.user_budget.spent == Decimal("0")
    assert overview.category_budgets == []
