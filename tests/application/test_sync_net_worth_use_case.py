"""Tests for the SyncNetWorthSnapshotUseCase."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

from sqlalchemy import create_engine, text

import ledger_engine.application.use_cases.sync_net_worth as sync_module
from ledger_engine.application.use_cases.sync_net_worth import (
    SyncNetWorthSnapshotUseCase,
)
from ledger_engine.domain.models import (
    BasicAccount,
    CreditAccount,
    LoanAccount,
    Owner,
)
from ledger_engine.infrastructure.db import SqlAlchemyDatabaseEngineAdapter

SNAPSHOT_DATE = date(2024, 3, 31)


def _owner() -> Owner:
    owner = Owner("alice")
    BasicAccount("Cash", "120.50", owner=owner)
    CreditAccount("Visa", credit_limit="1000", current_debt="250", owner=owner)
    LoanAccount("Car", loan_amount="1200", total_periods=12, owner=owner)
    return owner


def _build_db_port() -> tuple[MagicMock, MagicMock, MagicMock]:
    """Create a database port mock whose engine hands out two connections."""
    engine = MagicMock()
    create_conn = MagicMock()
    create_ctx = MagicMock()
    create_ctx.__enter__.return_value = create_conn
    replace_conn = MagicMock()
    replace_ctx = MagicMock()
    replace_ctx.__enter__.return_value = replace_conn
    engine.begin.side_effect = [create_ctx, replace_ctx]

    db_port = MagicMock()
    db_port.get_analytics_engine.return_value = engine
    return db_port, create_conn, replace_conn


def test_run_replaces_snapshot_rows() -> None:
    """The use case should create tables, then delete and insert the rows."""
    db_port, create_conn, replace_conn = _build_db_port()
    logger = MagicMock()

    result = SyncNetWorthSnapshotUseCase(db_port=db_port, logger=logger).run(
        _owner(), snapshot_date=SNAPSHOT_DATE
    )

    create_conn.exec_driver_sql.assert_any_call(sync_module.CREATE_SNAPSHOTS_SQL)
    create_conn.exec_driver_sql.assert_any_call(
        sync_module.CREATE_ACCOUNT_BALANCES_SQL
    )
    calls = replace_conn.execute.call_args_list
    assert [call.args[0] for call in calls] == [
        sync_module.DELETE_SNAPSHOT_SQL,
        sync_module.DELETE_ACCOUNT_BALANCES_SQL,
        sync_module.INSERT_SNAPSHOT_SQL,
        sync_module.INSERT_ACCOUNT_BALANCE_SQL,
    ]
    snapshot = calls[2].args[1]
    assert snapshot == {
        "snapshot_date": "2024-03-31",
        "owner": "alice",
        "total_assets": "120.50",
        "total_liabilities": "1450.00",
        "net_assets": "-1329.50",
        "total_lending": "0.00",
        "total_borrowing": "0.00",
    }
    account_rows = calls[3].args[1]
    assert [row["owed"] for row in account_rows] == ["0.00", "250.00", "1200.00"]
    assert account_rows[0]["account_type"] == "CASH"
    assert result.account_count == 3
    assert result.summary.net_assets == Decimal("-1329.50")
    logger.info.assert_called_once()


def test_run_skips_account_insert_without_accounts() -> None:
    db_port, _, replace_conn = _build_db_port()

    result = SyncNetWorthSnapshotUseCase(db_port=db_port, logger=MagicMock()).run(
        Owner("bob"), snapshot_date=SNAPSHOT_DATE
    )

    assert replace_conn.execute.call_count == 3
    assert result.account_count == 0


def test_run_against_sqlite_is_idempotent(tmp_path) -> None:
    """Running twice for the same date should leave a single snapshot."""
    engine = create_engine(f"sqlite:///{tmp_path / 'analytics.db'}")
    use_case = SyncNetWorthSnapshotUseCase(
        db_port=SqlAlchemyDatabaseEngineAdapter(engine),
        logger=MagicMock(),
    )
    owner = _owner()

    use_case.run(owner, snapshot_date=SNAPSHOT_DATE)
    use_case.run(owner, snapshot_date=SNAPSHOT_DATE)

    with engine.connect() as conn:
        snapshots = conn.execute(
            text("SELECT owner, net_assets FROM net_worth_snapshots")
        ).all()
        balances = conn.execute(
            text(
                "SELECT account_name, balance FROM account_balance_snapshots "
                "ORDER BY account_name"
            )
        ).all()
    engine.dispose()

    assert [tuple(row) for row in snapshots] == [("alice", "-1329.50")]
    assert [tuple(row) for row in balances] == [
        ("Car", "0.00"),
        ("Cash", "120.50"),
        ("Visa", "0.00"),
    ]


def test_run_defaults_to_today() -> None:
    db_port, _, _ = _build_db_port()

    result = SyncNetWorthSnapshotUseCase(db_port=db_port, logger=MagicMock()).run(
        Owner("bob")
    )

    assert result.snapshot_date == date.today()
