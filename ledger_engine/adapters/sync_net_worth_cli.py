"""CLI adapter exporting a net worth snapshot into the analytics database.

``LEDGER_OWNER_FILE`` names the JSON file describing the owner and their
accounts. ``SNAPSHOT_DATE`` (YYYY-MM-DD) overrides today's date.
"""

from datetime import date
import os

from ledger_engine.application.use_cases.sync_net_worth import (
    SyncNetWorthSnapshotUseCase,
)
from ledger_engine.infrastructure.container import (
    build_database_adapter,
    build_services,
)
from ledger_engine.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)
from ledger_engine.infrastructure.owner_file import load_owner


def _parse_date(value: str | None, logger) -> date | None:
    """Parse an ISO date string into a date.

    Args:
        value: Date string in YYYY-MM-DD format.
        logger: Logger used for warnings.

    Returns:
        date | None: Parsed date or None when invalid.
    """
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        logger.warning(f"Invalid date '{value}'. Expected format YYYY-MM-DD.")
        return None


def main() -> None:
    """Load the owner file and store today's snapshot."""
    logger = get_app_logger()
    get_usage_logger().info("sync_net_worth_cli invoked")
    owner_file = os.getenv("LEDGER_OWNER_FILE")
    if not owner_file:
        logger.warning("LEDGER_OWNER_FILE is required to export a snapshot.")
        return

    snapshot_date = _parse_date(os.getenv("SNAPSHOT_DATE"), logger)
    services = build_services()
    owner = load_owner(owner_file, services)

    use_case = SyncNetWorthSnapshotUseCase(
        db_port=build_database_adapter(),
        logger=logger,
    )
    result = use_case.run(owner, snapshot_date=snapshot_date)
    print(
        f"Stored net worth snapshot for {owner.username} on "
        f"{result.snapshot_date.isoformat()}: "
        f"assets={result.summary.total_assets}, "
        f"liabilities={result.summary.total_liabilities}, "
        f"net_assets={result.summary.net_assets}, "
        f"accounts={result.account_count}."
    )


if __name__ == "__main__":  # pragma: no cover
    main()
