"""Factory helpers to select the ledger repository backend."""

from pathlib import Path

from ledger_reports.application.ports.database import DatabaseEnginePort
from ledger_reports.application.ports.ledger_repository import (
    LedgerRepositoryPort,
)
from ledger_reports.infrastructure.ledger_repository import (
    SqlAlchemyLedgerRepository,
)
from ledger_reports.infrastructure.logging.logger import get_app_logger
from ledger_reports.infrastructure.memory_ledger_repository import (
    InMemoryLedgerRepository,
)
from ledger_reports.infrastructure.settings import ReportSettings


def _normalize_ledger_path(
    raw_path: str | Path | None,
    logger,
) -> Path | None:
    """Normalize and validate the JSON ledger path.

    Args:
        raw_path: Raw file path string or Path instance.
        logger: Logger used for warnings.

    Returns:
        Path | None: Normalized path when provided.
    """
    if not raw_path:
        logger.warning(
            "Missing ledger file path; set LEDGER_FILE to enable the backend"
        )
        return None
    path = Path(raw_path).expanduser().resolve()
    if not path.exists():
        logger.warning(f"Ledger file does not exist at {path}")
    return path


def create_ledger_repository(
    db_port: DatabaseEnginePort,
    logger=None,
    backend: str | None = None,
    ledger_path: str | Path | None = None,
    settings: ReportSettings | None = None,
) -> LedgerRepositoryPort:
    """Return a ledger repository implementation based on configuration.

    Args:
        db_port: Port providing access to the ledger engine (SQL backend).
        logger: Optional logger compatible with logging.Logger-like API.
        backend: Optional backend override (sqlalchemy or memory).
        ledger_path: Optional path override for the memory backend.
        settings: Optional settings; read from the environment when omitted.

    Returns:
        LedgerRepositoryPort: Concrete repository implementation.
    """
    resolved_logger = logger or get_app_logger()
    if settings is None and backend is None:
        settings = ReportSettings.from_env()
    selected_backend = (backend or settings.backend).strip().lower()

    if selected_backend == "sqlalchemy":
        return SqlAlchemyLedgerRepository(db_port)

    if selected_backend == "memory":
        if ledger_path is None and settings is None:
            settings = ReportSettings.from_env()
        path = _normalize_ledger_path(
            ledger_path or settings.ledger_file,
            resolved_logger,
        )
        if path is None:
            raise RuntimeError("Memory backend requires a LEDGER_FILE path.")
        return InMemoryLedgerRepository(path, logger=resolved_logger)

    raise ValueError(
        "Unsupported ledger backend: "
        f"{selected_backend}. Expected sqlalchemy or memory."
    )


__all__ = ["create_ledger_repository"]
