"""Application use cases package."""

from .manage_accounts import AccountService
from .manage_budgets import BudgetService
from .manage_installment_plans import InstallmentPlanService
from .manage_transactions import TransactionService
from .sync_net_worth import SyncNetWorthResult, SyncNetWorthSnapshotUseCase

__all__ = [
    "AccountService",
    "BudgetService",
    "InstallmentPlanService",
    "TransactionService",
    "SyncNetWorthSnapshotUseCase",
    "SyncNetWorthResult",
]
