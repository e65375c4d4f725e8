"""Database ports for ledger reports.

This module defines the application-layer protocol for accessing the ledger
database engine. Infrastructure implementations are expected to provide a
concrete adapter that satisfies it.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the ledger database engine.

    Repositories depend on this protocol instead of concrete drivers or
    configuration details.
    """

    def get_ledger_engine(self) -> Engine:
        """Get the engine for the ledger database.

        Returns:
            Engine: SQLAlchemy engine connected to the ledger store.
        """


__all__ = ["DatabaseEnginePort"]
