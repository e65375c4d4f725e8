"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, urlparse

import dotenv

from ledger_reports.domain.constants import DEFAULT_CURRENCY
from ledger_reports.infrastructure.logging.logger import get_app_logger
from ledger_reports.utils.utils import get_project_root


@dataclass(frozen=True)
class ReportSettings:
    """Settings for selecting the ledger backend and report defaults.

    Attributes:
        backend: Backend identifier (sqlalchemy or memory).
        ledger_file: Optional path to the JSON ledger for the memory backend.
        currency: Currency reported when a request does not specify one.
    """

    backend: str = "sqlalchemy"
    ledger_file: Optional[Path] = None
    currency: str = DEFAULT_CURRENCY

    @classmethod
    def from_env(cls) -> "ReportSettings":
        """Build settings from environment variables.

        Returns:
            ReportSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        backend = os.getenv("LEDGER_BACKEND", "sqlalchemy").strip().lower()
        raw_file = os.getenv("LEDGER_FILE")
        currency = (
            os.getenv("REPORT_CURRENCY", DEFAULT_CURRENCY).strip().upper()
            or DEFAULT_CURRENCY
        )
        logger = get_app_logger()
        if raw_file:
            ledger_file = cls._normalize_path(raw_file, logger=logger)
        else:
            ledger_file = cls._default_ledger_file(logger=logger)
        return cls(backend=backend, ledger_file=ledger_file, currency=currency)

    @staticmethod
    def _normalize_path(raw_path: str, logger) -> Path:
        """Normalize the ledger file path or file URI.

        Args:
            raw_path: Raw file path string.
            logger: Logger used for warnings.

        Returns:
            Path: Normalized filesystem path.
        """
        parsed = urlparse(raw_path)
        if parsed.scheme == "file":
            raw_path = unquote(parsed.path)
        path = Path(raw_path).expanduser().resolve()
        if not path.exists():
            logger.warning(f"Ledger file does not exist at {path}")
        return path

    @staticmethod
    def _default_ledger_file(logger) -> Path | None:
        """Return a default JSON ledger path when available.

        Args:
            logger: Logger used for warnings.

        Returns:
            Path | None: Default path if a single ledger is found in data/.
        """
        data_dir = get_project_root() / "data"
        if not data_dir.exists():
            return None
        matches = sorted(data_dir.glob("*.json"))
        if len(matches) == 1:
            return matches[0].resolve()
        if len(matches) > 1:
            logger.warning(
                "Multiple .json ledgers found in data/. "
                "Set LEDGER_FILE to choose one."
            )
        return None


__all__ = ["ReportSettings"]
