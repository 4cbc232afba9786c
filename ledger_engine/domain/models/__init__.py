"""Domain models package."""

from .enums import (
    AccountCategory,
    AccountType,
    BudgetPeriod,
    CategoryType,
    FeeStrategy,
    RepaymentType,
    TransactionType,
)
from .finance import (
    BudgetOverview,
    BudgetStatus,
    InstallmentScheduleRow,
    LoanScheduleRow,
    MonthlySummary,
    NetWorthSummary,
)
from .accounts import (
    Account,
    BasicAccount,
    BorrowingAccount,
    CreditAccount,
    LendingAccount,
    LoanAccount,
)
from .transactions import TRANSACTION_CLASSES, Expense, Income, Transaction, Transfer
from .installment_plan import InstallmentPlan
from .ledger import Ledger, LedgerCategory
from .budget import Budget
from .owner import Owner

__all__ = [
    "AccountCategory",
    "AccountType",
    "BudgetPeriod",
    "CategoryType",
    "FeeStrategy",
    "RepaymentType",
    "TransactionType",
    "BudgetOverview",
    "BudgetStatus",
    "InstallmentScheduleRow",
    "LoanScheduleRow",
    "MonthlySummary",
    "NetWorthSummary",
    "Account",
    "BasicAccount",
    "BorrowingAccount",
    "CreditAccount",
    "LendingAccount",
    "LoanAccount",
    "Transaction",
    "Income",
    "Expense",
    "Transfer",
    "TRANSACTION_CLASSES",
    "InstallmentPlan",
    "Ledger",
    "LedgerCategory",
    "Budget",
    "Owner",
]
