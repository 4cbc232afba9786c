"""Composition root for wiring services and infrastructure adapters."""

from dataclasses import dataclass

from ledger_engine.application.ports.database import DatabaseEnginePort
from ledger_engine.application.ports.ledger_repository import LedgerRepositoryPort
from ledger_engine.application.use_cases import (
    AccountService,
    BudgetService,
    InstallmentPlanService,
    TransactionService,
)
from ledger_engine.domain.models import Owner
from ledger_engine.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from ledger_engine.infrastructure.in_memory_repository import InMemoryLedgerRepository
from ledger_engine.infrastructure.logging.logger import get_app_logger
from ledger_engine.infrastructure.settings import EngineSettings


@dataclass(frozen=True)
class LedgerServices:
    """Application services sharing one repository and logger."""

    repository: LedgerRepositoryPort
    accounts: AccountService
    transactions: TransactionService
    installment_plans: InstallmentPlanService
    budgets: BudgetService
    settings: EngineSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_repository() -> LedgerRepositoryPort:
    """Return a fresh in-memory repository."""
    return InMemoryLedgerRepository()


def build_services(
    repository: LedgerRepositoryPort | None = None,
    settings: EngineSettings | None = None,
) -> LedgerServices:
    """Return the application services wired to one repository."""
    resolved_repository = repository or build_repository()
    resolved_settings = settings or EngineSettings.from_env()
    logger = get_app_logger()
    return LedgerServices(
        repository=resolved_repository,
        accounts=AccountService(
            resolved_repository,
            logger=logger,
            max_loan_periods=resolved_settings.max_loan_periods,
        ),
        transactions=TransactionService(resolved_repository, logger=logger),
        installment_plans=InstallmentPlanService(resolved_repository, logger=logger),
        budgets=BudgetService(resolved_repository, logger=logger),
        settings=resolved_settings,
    )


def create_owner(
    username: str,
    services: LedgerServices,
) -> Owner:
    """Create and store an owner configured from the service settings."""
    owner = Owner(username, lending_add_back=services.settings.lending_add_back)
    services.repository.add(owner)
    return owner


__all__ = [
    "LedgerServices",
    "build_database_adapter",
    "build_repository",
    "build_services",
    "create_owner",
]
