"""Application ports package."""

from .database import DatabaseEnginePort
from .ledger_repository import LedgerQueryError, LedgerRepositoryPort

__all__ = ["DatabaseEnginePort", "LedgerQueryError", "LedgerRepositoryPort"]
