"""Tests for the logging helpers."""

import logging
from unittest.mock import MagicMock

import pytest

from ledger_engine.application.use_cases.manage_accounts import AccountService
from ledger_engine.application.use_cases.manage_transactions import TransactionService
from ledger_engine.domain.models import Owner
from ledger_engine.infrastructure.logging import logger as logger_module


def _drop_handlers(name: str) -> None:
    underlying = logging.getLogger(name)
    for handler in list(underlying.handlers):
        handler.close()
        underlying.removeHandler(handler)


@pytest.fixture
def dated_logs(tmp_path, monkeypatch):
    """Send log files to ``tmp_path`` under a fixed date stamp."""
    monkeypatch.setattr(logger_module, "get_project_root", lambda: tmp_path)
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "_today_stamp",
        staticmethod(lambda: "20240101"),
    )
    return tmp_path / "logs"


def test_logger_builder_creates_loan_logger(dated_logs):
    """LoggerBuilder should place a custom logger under its own subdir."""
    _drop_handlers("ledger_engine.loans")
    builder = logger_module.LoggerBuilder()
    loan_logger = (
        builder.name("ledger_engine.loans")
        .subdir("loans")
        .prefix("loan_schedule")
        .level(logging.WARNING)
        .build()
    )

    assert loan_logger.level == logging.WARNING
    assert loan_logger.propagate is False
    file_handlers = [
        h for h in loan_logger.handlers if isinstance(h, logging.FileHandler)
    ]
    assert len(file_handlers) == 1
    assert file_handlers[0].baseFilename == str(
        dated_logs / "loans" / "20240101_loan_schedule.log"
    )
    assert builder.build() is loan_logger
    _drop_handlers("ledger_engine.loans")


def test_default_handlers_use_formatter(tmp_path):
    fmt = logger_module.LoggerBuilder._default_formatter()
    file_handler = logger_module.LoggerBuilder._default_file_handler(
        tmp_path / "ledger.log",
        fmt,
    )
    console_handler = logger_module.LoggerBuilder._default_console_handler(fmt)

    assert file_handler.level == logging.INFO
    assert file_handler.formatter is fmt
    assert console_handler.formatter is fmt
    file_handler.close()


def test_account_service_logs_to_app_log_by_default(dated_logs, monkeypatch):
    """Services built without a logger write to logs/app through AppLogger."""
    monkeypatch.setattr(logger_module.AppLogger, "_instance", None)
    monkeypatch.setattr(logger_module.AppLogger, "_console", False)
    _drop_handlers("ledger_engine.app")

    service = AccountService()
    service.create_basic_account(Owner("alice"), "Wallet", "12.5")

    assert isinstance(service._logger, logger_module.AppLogger)
    for handler in service._logger.logger.handlers:
        handler.flush()
    content = (dated_logs / "app" / "20240101_app.log").read_text(encoding="utf-8")
    assert "| INFO | ledger_engine.app |" in content
    assert "Created CASH account 'Wallet' for 'alice'" in content
    _drop_handlers("ledger_engine.app")


def test_services_share_the_app_logger(monkeypatch):
    fake_logger = MagicMock()
    monkeypatch.setattr(logger_module.LoggerBuilder, "build", lambda self: fake_logger)
    monkeypatch.setattr(logger_module.AppLogger, "_instance", None)

    accounts = AccountService()
    transactions = TransactionService()

    assert accounts._logger is transactions._logger is logger_module.get_app_logger()
    accounts._logger.warning("low balance")
    fake_logger.warning.assert_called_once_with("low balance")


def test_usage_logger_writes_to_its_own_directory(dated_logs, monkeypatch):
    """UsageLogger should log under logs/usage without a console handler."""
    monkeypatch.setattr(logger_module.UsageLogger, "_instance", None)
    _drop_handlers("usage_test")

    usage_logger = logger_module.UsageLogger("usage_test")

    handlers = usage_logger.logger.handlers
    assert [type(h) for h in handlers] == [logging.FileHandler]
    assert handlers[0].baseFilename == str(dated_logs / "usage" / "20240101_usage.log")
    assert logger_module.get_usage_logger() is usage_logger
    _drop_handlers("usage_test")
