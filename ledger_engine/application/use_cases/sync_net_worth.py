"""Use case for exporting an owner's net worth into the analytics database.

The job:

* recomputes the owner's totals;
* ensures the snapshot tables exist;
* replaces the rows of the same owner and date with the fresh figures.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any

from sqlalchemy import text
from sqlalchemy.engine import Engine

from ledger_engine.application.ports.database import DatabaseEnginePort
from ledger_engine.domain.models import (
    CreditAccount,
    LoanAccount,
    NetWorthSummary,
    Owner,
)
from ledger_engine.infrastructure.logging.logger import get_app_logger

CREATE_SNAPSHOTS_SQL = """
CREATE TABLE IF NOT EXISTS net_worth_snapshots (
    snapshot_date TEXT NOT NULL,
    owner TEXT NOT NULL,
    total_assets TEXT NOT NULL,
    total_liabilities TEXT NOT NULL,
    net_assets TEXT NOT NULL,
    total_lending TEXT NOT NULL,
    total_borrowing TEXT NOT NULL,
    PRIMARY KEY (snapshot_date, owner)
)
"""

CREATE_ACCOUNT_BALANCES_SQL = """
CREATE TABLE IF NOT EXISTS account_balance_snapshots (
    snapshot_date TEXT NOT NULL,
    owner TEXT NOT NULL,
    account_name TEXT NOT NULL,
    account_type TEXT NOT NULL,
    balance TEXT NOT NULL,
    owed TEXT NOT NULL,
    hidden INTEGER NOT NULL,
    included_in_net_asset INTEGER NOT NULL
)
"""

DELETE_SNAPSHOT_SQL = text(
    """
    DELETE FROM net_worth_snapshots
    WHERE snapshot_date = :snapshot_date AND owner = :owner
    """
)

DELETE_ACCOUNT_BALANCES_SQL = text(
    """
    DELETE FROM account_balance_snapshots
    WHERE snapshot_date = :snapshot_date AND owner = :owner
    """
)

INSERT_SNAPSHOT_SQL = text(
    """
    INSERT INTO net_worth_snapshots (
        snapshot_date,
        owner,
        total_assets,
        total_liabilities,
        net_assets,
        total_lending,
        total_borrowing
    )
    VALUES (
        :snapshot_date,
        :owner,
        :total_assets,
        :total_liabilities,
        :net_assets,
        :total_lending,
        :total_borrowing
    )
    """
)

INSERT_ACCOUNT_BALANCE_SQL = text(
    """
    INSERT INTO account_balance_snapshots (
        snapshot_date,
        owner,
        account_name,
        account_type,
        balance,
        owed,
        hidden,
        included_in_net_asset
    )
    VALUES (
        :snapshot_date,
        :owner,
        :account_name,
        :account_type,
        :balance,
        :owed,
        :hidden,
        :included_in_net_asset
    )
    """
)


@dataclass(frozen=True)
class SyncNetWorthResult:
    """Result of a net worth export.

    Attributes:
        snapshot_date: Date the snapshot was stored under.
        account_count: Number of account rows written.
        summary: Totals written to the snapshot row.
    """

    snapshot_date: date
    account_count: int
    summary: NetWorthSummary


class SyncNetWorthSnapshotUseCase:
    """Write an owner's totals and account balances to analytics tables.

    The use case uses the DatabaseEnginePort to remain decoupled from concrete
    database drivers or configuration details.
    """

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the use case.

        Args:
            db_port: Port providing access to the analytics engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()

    def run(
        self,
        owner: Owner,
        snapshot_date: date | None = None,
    ) -> SyncNetWorthResult:
        """Execute the export.

        Args:
            owner: Owner whose figures are exported.
            snapshot_date: Date key of the snapshot, today when omitted.

        Returns:
            SyncNetWorthResult: What was written.
        """
        snapshot_date = snapshot_date or date.today()
        summary = owner.recompute_totals()
        account_rows = self._build_account_rows(owner, snapshot_date)

        engine = self._db_port.get_analytics_engine()
        self._ensure_tables(engine)
        self._replace_snapshot(engine, owner, snapshot_date, summary, account_rows)

        self._logger.info(
            f"Stored net worth snapshot for '{owner.username}' on "
            f"{snapshot_date.isoformat()}: net={summary.net_assets}, "
            f"accounts={len(account_rows)}"
        )
        return SyncNetWorthResult(
            snapshot_date=snapshot_date,
            account_count=len(account_rows),
            summary=summary,
        )

    @staticmethod
    def _owed(account) -> str:
        if isinstance(account, CreditAccount):
            return str(account.current_debt)
        if isinstance(account, LoanAccount):
            return str(account.remaining_amount)
        return "0.00"

    def _build_account_rows(
        self,
        owner: Owner,
        snapshot_date: date,
    ) -> list[dict[str, Any]]:
        """Convert accounts into insert parameters.

        Decimals are written as strings so every driver stores them exactly.
        """
        return [
            {
                "snapshot_date": snapshot_date.isoformat(),
                "owner": owner.username,
                "account_name": account.name,
                "account_type": account.account_type.value,
                "balance": str(account.balance),
                "owed": self._owed(account),
                "hidden": int(account.hidden),
                "included_in_net_asset": int(account.included_in_net_asset),
            }
            for account in owner.accounts
        ]

    def _ensure_tables(self, engine: Engine) -> None:
        """Create the snapshot tables if they do not exist.

        Args:
            engine: SQLAlchemy engine for the analytics database.
        """
        with engine.begin() as conn:
            conn.exec_driver_sql(CREATE_SNAPSHOTS_SQL)
            conn.exec_driver_sql(CREATE_ACCOUNT_BALANCES_SQL)

    def _replace_snapshot(
        self,
        engine: Engine,
        owner: Owner,
        snapshot_date: date,
        summary: NetWorthSummary,
        account_rows: list[dict[str, Any]],
    ) -> None:
        """Replace the rows stored for the owner and date in one transaction."""
        key = {"snapshot_date": snapshot_date.isoformat(), "owner": owner.username}
        with engine.begin() as conn:
            conn.execute(DELETE_SNAPSHOT_SQL, key)
            conn.execute(DELETE_ACCOUNT_BALANCES_SQL, key)
            conn.execute(
                INSERT_SNAPSHOT_SQL,
                {
                    **key,
                    "total_assets": str(summary.total_assets),
                    "total_liabilities": str(summary.total_liabilities),
                    "net_assets": str(summary.net_assets),
                    "total_lending": str(summary.total_lending),
                    "total_borrowing": str(summary.total_borrowing),
                },
            )
            if account_rows:
                conn.execute(INSERT_ACCOUNT_BALANCE_SQL, account_rows)


__all__ = ["SyncNetWorthSnapshotUseCase", "SyncNetWorthResult"]
