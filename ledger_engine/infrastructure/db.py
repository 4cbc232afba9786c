"""Database infrastructure for the ledger engine.

This module creates and reuses the SQLAlchemy engine connected to the
analytics database that receives net worth snapshots.
"""

import os
from typing import Optional

import dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

from ledger_engine.application.ports.database import DatabaseEnginePort


def _get_env_var(name: str) -> str:
    """Read an environment variable or raise a descriptive error.

    Values from a ``.env`` file are loaded first.

    Args:
        name: Name of the environment variable to read.

    Returns:
        str: The raw value of the environment variable.

    Raises:
        RuntimeError: If the environment variable is missing or empty.
    """
    dotenv.load_dotenv()
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing environment variable: {name}")
    return value


def _create_engine(db_url: str) -> Engine:
    """Create a configured SQLAlchemy engine.

    Args:
        db_url: Fully qualified database URL.

    Returns:
        Engine: Engine with a small connection pool and health checks.
    """
    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
        future=True,
    )


_analytics_engine: Optional[Engine] = None


def get_analytics_engine() -> Engine:
    """Get a singleton SQLAlchemy engine for the analytics database.

    Returns:
        Engine: Lazily initialized engine read from ``ANALYTICS_DB_URL``.
    """
    global _analytics_engine
    if _analytics_engine is None:
        db_url = _get_env_var("ANALYTICS_DB_URL")
        _analytics_engine = _create_engine(db_url)
    return _analytics_engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by a SQLAlchemy engine.

    An explicit ``engine`` is used as is; otherwise the module singleton is
    created from the environment on first use.
    """

    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine

    def get_analytics_engine(self) -> Engine:
        """Get the engine for the analytics database.

        Returns:
            Engine: SQLAlchemy engine connected to the analytics database.
        """
        if self._engine is not None:
            return self._engine
        return get_analytics_engine()


__all__ = ["get_analytics_engine", "SqlAlchemyDatabaseEngineAdapter"]
