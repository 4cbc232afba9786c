"""Tests for the sync_net_worth_cli adapter."""

from datetime import date
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

from ledger_engine.adapters import sync_net_worth_cli


def _patch_logging(monkeypatch):
    fake_logger = MagicMock()
    monkeypatch.setattr(sync_net_worth_cli, "get_app_logger", lambda: fake_logger)
    monkeypatch.setattr(sync_net_worth_cli, "get_usage_logger", MagicMock)
    return fake_logger


def test_main_runs_use_case_and_prints_result(monkeypatch, capsys):
    """The CLI should load the owner, run the export and print the totals."""
    fake_logger = _patch_logging(monkeypatch)
    dummy_adapter = object()
    dummy_services = object()
    owner = SimpleNamespace(username="alice")
    fake_use_case = MagicMock()
    fake_use_case.run.return_value = SimpleNamespace(
        snapshot_date=date(2024, 3, 31),
        account_count=3,
        summary=SimpleNamespace(
            total_assets=Decimal("120.50"),
            total_liabilities=Decimal("1450.00"),
            net_assets=Decimal("-1329.50"),
        ),
    )
    monkeypatch.setenv("LEDGER_OWNER_FILE", "owner.json")
    monkeypatch.setenv("SNAPSHOT_DATE", "2024-03-31")
    monkeypatch.setattr(sync_net_worth_cli, "build_services", lambda: dummy_services)
    monkeypatch.setattr(
        sync_net_worth_cli, "build_database_adapter", lambda: dummy_adapter
    )

    def _fake_load_owner(path, services):
        assert path == "owner.json"
        assert services is dummy_services
        return owner

    def _fake_use_case(db_port, logger):
        assert db_port is dummy_adapter
        assert logger is fake_logger
        return fake_use_case

    monkeypatch.setattr(sync_net_worth_cli, "load_owner", _fake_load_owner)
    monkeypatch.setattr(
        sync_net_worth_cli, "SyncNetWorthSnapshotUseCase", _fake_use_case
    )

    sync_net_worth_cli.main()

    fake_use_case.run.assert_called_once_with(owner, snapshot_date=date(2024, 3, 31))
    out = capsys.readouterr().out
    assert "alice on 2024-03-31" in out
    assert "net_assets=-1329.50" in out
    assert "accounts=3." in out


def test_main_requires_owner_file(monkeypatch, capsys):
    fake_logger = _patch_logging(monkeypatch)
    monkeypatch.delenv("LEDGER_OWNER_FILE", raising=False)
    fake_load_owner = MagicMock()
    monkeypatch.setattr(sync_net_worth_cli, "load_owner", fake_load_owner)

    sync_net_worth_cli.main()

    assert capsys.readouterr().out == ""
    fake_logger.warning.assert_called_once()
    fake_load_owner.assert_not_called()


def test_parse_date_warns_on_invalid_value():
    logger = MagicMock()

    assert sync_net_worth_cli._parse_date("31/03/2024", logger) is None
    assert sync_net_worth_cli._parse_date(None, logger) is None
    assert sync_net_worth_cli._parse_date("2024-03-31", logger) == date(2024, 3, 31)
    logger.warning.assert_called_once()
