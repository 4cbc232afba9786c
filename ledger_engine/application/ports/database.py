"""Database ports for the ledger engine.

This module defines the application-layer protocol for reaching the
analytics database. Infrastructure implementations provide the concrete
adapter.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the analytics database engine.

    Use cases depend on this protocol instead of concrete drivers or
    configuration details.
    """

    def get_analytics_engine(self) -> Engine:
        """Get the engine for the analytics database.

        Returns:
            Engine: SQLAlchemy engine connected to the analytics database.
        """


__all__ = ["DatabaseEnginePort"]
