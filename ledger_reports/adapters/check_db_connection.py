"""Simple CLI to validate the ledger database connection.

This adapter is meant for local operations: it instantiates the concrete
database adapter from the infrastructure layer and runs a basic health
check against the ledger database.
"""

from ledger_reports.infrastructure.container import build_database_adapter
from ledger_reports.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Run a basic connectivity check against the configured database."""
    adapter = build_database_adapter()
    logger = get_app_logger()

    ledger_engine = adapter.get_ledger_engine()
    logger.info(f"Ledger DB: {ledger_engine.url}")

    with ledger_engine.connect() as conn:
        conn.exec_driver_sql("SELECT 1")

    logger.info("Ledger connection is working.")


if __name__ == "__main__":  # pragma: no cover
    main()
