"""Domain models for derived financial figures."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class NetWorthSummary:
    """Summary of net worth figures.

    Attributes:
        total_assets: Included account balances plus outstanding lending.
        total_liabilities: Credit debt, borrowing and unpaid loans.
        net_assets: Assets minus liabilities, with the lending add-back.
        total_lending: Outstanding lending receivables.
        total_borrowing: Outstanding borrowing payables.
    """

    total_assets: Decimal
    total_liabilities: Decimal
    net_assets: Decimal
    total_lending: Decimal
    total_borrowing: Decimal


@dataclass(frozen=True)
class LoanScheduleRow:
    """One period of a loan amortization schedule."""

    period: int
    payment: Decimal
    principal: Decimal
    interest: Decimal


@dataclass(frozen=True)
class InstallmentScheduleRow:
    """One period of an installment plan."""

    period: int
    payment: Decimal
    paid: bool


@dataclass(frozen=True)
class MonthlySummary:
    """Income and expense totals for one account and month."""

    month: str
    total_income: Decimal
    total_expense: Decimal

    @property
    def difference(self) -> Decimal:
        """Return total_income minus total_expense."""
        return self.total_income - self.total_expense


@dataclass(frozen=True)
class BudgetStatus:
    """Budgeted amount versus spending for one scope."""

    label: str
    amount: Decimal
    spent: Decimal
    start_date: date
    end_date: date

    @property
    def remaining(self) -> Decimal:
        """Return the amount still available."""
        return self.amount - self.spent


@dataclass(frozen=True)
class BudgetOverview:
    """Whole-user budget status followed by top-level category statuses."""

    user_budget: BudgetStatus
    category_budgets: list[BudgetStatus]


__all__ = [
    "NetWorthSummary",
    "LoanScheduleRow",
    "InstallmentScheduleRow",
    "MonthlySummary",
    "BudgetStatus",
    "BudgetOverview",
]
