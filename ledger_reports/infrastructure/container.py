"""Composition root for wiring infrastructure adapters."""

from ledger_reports.application.ports.database import DatabaseEnginePort
from ledger_reports.application.ports.ledger_repository import (
    LedgerRepositoryPort,
)
from ledger_reports.application.use_cases.aggregate_ledger import (
    LedgerAggregator,
)
from ledger_reports.application.use_cases.export_trial_balance import (
    ExportTrialBalanceUseCase,
)
from ledger_reports.application.use_cases.get_cash_flow import (
    GetCashFlowUseCase,
)
from ledger_reports.application.use_cases.get_profit_loss import (
    GetProfitLossUseCase,
)
from ledger_reports.application.use_cases.get_trial_balance import (
    GetTrialBalanceUseCase,
)
from ledger_reports.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from ledger_reports.infrastructure.ledger_repository_factory import (
    create_ledger_repository,
)
from ledger_reports.infrastructure.logging.logger import get_app_logger
from ledger_reports.infrastructure.settings import ReportSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_ledger_repository(
    db_port: DatabaseEnginePort | None = None,
    settings: ReportSettings | None = None,
) -> LedgerRepositoryPort:
    """Return the configured ledger repository."""
    resolved_db = db_port or build_database_adapter()
    resolved_settings = settings or ReportSettings.from_env()
    return create_ledger_repository(
        resolved_db,
        logger=get_app_logger(),
        settings=resolved_settings,
    )


def build_trial_balance_use_case(
    repository: LedgerRepositoryPort | None = None,
    settings: ReportSettings | None = None,
) -> GetTrialBalanceUseCase:
    """Return the trial balance use case."""
    resolved_settings = settings or ReportSettings.from_env()
    resolved_repository = repository or build_ledger_repository(
        settings=resolved_settings
    )
    return GetTrialBalanceUseCase(
        resolved_repository,
        logger=get_app_logger(),
        default_currency=resolved_settings.currency,
    )


def build_profit_loss_use_case(
    repository: LedgerRepositoryPort | None = None,
    settings: ReportSettings | None = None,
) -> GetProfitLossUseCase:
    """Return the profit and loss use case sharing one aggregator."""
    resolved_settings = settings or ReportSettings.from_env()
    resolved_repository = repository or build_ledger_repository(
        settings=resolved_settings
    )
    logger = get_app_logger()
    aggregator = LedgerAggregator(resolved_repository, logger=logger)
    return GetProfitLossUseCase(
        resolved_repository,
        logger=logger,
        aggregator=aggregator,
        default_currency=resolved_settings.currency,
    )


def build_cash_flow_use_case(
    repository: LedgerRepositoryPort | None = None,
    settings: ReportSettings | None = None,
) -> GetCashFlowUseCase:
    """Return the cash flow use case sharing one aggregator."""
    resolved_settings = settings or ReportSettings.from_env()
    resolved_repository = repository or build_ledger_repository(
        settings=resolved_settings
    )
    logger = get_app_logger()
    aggregator = LedgerAggregator(resolved_repository, logger=logger)
    return GetCashFlowUseCase(
        resolved_repository,
        logger=logger,
        aggregator=aggregator,
        default_currency=resolved_settings.currency,
    )


def build_export_use_case() -> ExportTrialBalanceUseCase:
    """Return the trial balance export use case."""
    return ExportTrialBalanceUseCase(logger=get_app_logger())


__all__ = [
    "build_database_adapter",
    "build_ledger_repository",
    "build_trial_balance_use_case",
    "build_profit_loss_use_case",
    "build_cash_flow_use_case",
    "build_export_use_case",
]
