"""Settings helpers for the ledger engine."""

from dataclasses import dataclass
import os
from typing import Optional

import dotenv

from ledger_engine.domain.constants import MAX_LOAN_PERIODS
from ledger_engine.infrastructure.logging.logger import get_app_logger

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class EngineSettings:
    """Settings for the accounting engine and its adapters.

    Attributes:
        lending_add_back: Add outstanding lending to net assets on top of
            the receivable already counted in total assets.
        max_loan_periods: Upper bound accepted for a loan's total periods.
        analytics_db_url: Optional URL of the analytics database.
    """

    lending_add_back: bool = True
    max_loan_periods: int = MAX_LOAN_PERIODS
    analytics_db_url: Optional[str] = None

    @classmethod
    def from_env(cls) -> "EngineSettings":
        """Build settings from environment variables.

        Values from a ``.env`` file are loaded first.

        Returns:
            EngineSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        lending_add_back = cls._parse_bool(
            os.getenv("LEDGER_NET_ASSETS_LENDING_ADD_BACK"),
            default=True,
            name="LEDGER_NET_ASSETS_LENDING_ADD_BACK",
            logger=logger,
        )
        max_loan_periods = cls._parse_periods(
            os.getenv("LEDGER_MAX_LOAN_PERIODS"),
            logger=logger,
        )
        analytics_db_url = os.getenv("ANALYTICS_DB_URL") or None
        return cls(
            lending_add_back=lending_add_back,
            max_loan_periods=max_loan_periods,
            analytics_db_url=analytics_db_url,
        )

    @staticmethod
    def _parse_bool(raw: str | None, default: bool, name: str, logger) -> bool:
        """Interpret a boolean flag.

        Args:
            raw: Raw environment value.
            default: Value used when the variable is unset or unreadable.
            name: Variable name used in warnings.
            logger: Logger used for warnings.

        Returns:
            bool: Parsed flag.
        """
        if raw is None or not raw.strip():
            return default
        value = raw.strip().lower()
        if value in _TRUE_VALUES:
            return True
        if value in _FALSE_VALUES:
            return False
        logger.warning(f"Ignoring invalid boolean {name}={raw!r}")
        return default

    @staticmethod
    def _parse_periods(raw: str | None, logger) -> int:
        """Read the loan period cap, keeping the default on bad input."""
        if raw is None or not raw.strip():
            return MAX_LOAN_PERIODS
        try:
            value = int(raw)
        except ValueError:
            logger.warning(f"Ignoring invalid LEDGER_MAX_LOAN_PERIODS={raw!r}")
            return MAX_LOAN_PERIODS
        if value < 1:
            logger.warning(f"Ignoring non-positive LEDGER_MAX_LOAN_PERIODS={value}")
            return MAX_LOAN_PERIODS
        return value


__all__ = ["EngineSettings"]
