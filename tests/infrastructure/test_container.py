"""Tests for the composition root."""

from unittest.mock import MagicMock

from ledger_engine.infrastructure import container as container_module
from ledger_engine.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from ledger_engine.infrastructure.in_memory_repository import InMemoryLedgerRepository
from ledger_engine.infrastructure.settings import EngineSettings


def test_build_services_shares_repository(monkeypatch) -> None:
    """Every service should store into the same repository."""
    monkeypatch.setattr(container_module, "get_app_logger", MagicMock)
    repository = InMemoryLedgerRepository()
    settings = EngineSettings(lending_add_back=False, max_loan_periods=24)

    services = container_module.build_services(repository, settings)

    assert services.repository is repository
    assert services.settings is settings
    assert services.accounts._repository is repository
    assert services.accounts._max_loan_periods == 24
    assert services.transactions._repository is repository
    assert services.installment_plans._repository is repository
    assert services.budgets._repository is repository


def test_build_services_reads_settings_from_env(monkeypatch) -> None:
    monkeypatch.setattr(container_module, "get_app_logger", MagicMock)
    monkeypatch.setattr(
        container_module.EngineSettings,
        "from_env",
        classmethod(lambda cls: cls(max_loan_periods=60)),
    )

    services = container_module.build_services()

    assert isinstance(services.repository, InMemoryLedgerRepository)
    assert services.settings.max_loan_periods == 60


def test_create_owner_uses_settings(monkeypatch) -> None:
    monkeypatch.setattr(container_module, "get_app_logger", MagicMock)
    services = container_module.build_services(
        settings=EngineSettings(lending_add_back=False)
    )

    owner = container_module.create_owner("alice", services)

    assert owner.lending_add_back is False
    assert services.repository.get_owner(owner.id) is owner


def test_build_database_adapter() -> None:
    adapter = container_module.build_database_adapter()

    assert isinstance(adapter, SqlAlchemyDatabaseEngineAdapter)
