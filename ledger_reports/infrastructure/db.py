"""Ledger engine configuration.

``LEDGER_DB_URL`` (read after loading ``.env``) selects the database. One
pooled engine is created on first use and shared by every repository.
"""

import os
from typing import Optional

import dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

from ledger_reports.application.ports.database import DatabaseEnginePort

LEDGER_DB_URL = "LEDGER_DB_URL"


def _get_env_var(name: str) -> str:
    """Return a required setting from the environment or ``.env``.

    Raises:
        RuntimeError: If the variable is unset or blank.
    """
    dotenv.load_dotenv()
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing environment variable: {name}")
    return value


def _create_engine(db_url: str) -> Engine:
    """Build a pooled engine (5 + 5 overflow) that pings before checkout."""
    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
        future=True,
    )


_ledger_engine: Optional[Engine] = None


def get_ledger_engine() -> Engine:
    """Return the shared ledger engine, creating it from LEDGER_DB_URL."""
    global _ledger_engine
    if _ledger_engine is None:
        db_url = _get_env_var(LEDGER_DB_URL)
        _ledger_engine = _create_engine(db_url)
    return _ledger_engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """Serve the module-level ledger engine through ``DatabaseEnginePort``."""

    def get_ledger_engine(self) -> Engine:
        """Return the shared ledger engine."""
        return get_ledger_engine()


__all__ = [
    "get_ledger_engine",
    "SqlAlchemyDatabaseEngineAdapter",
]
