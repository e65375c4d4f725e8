"""Use case aggregating posted journal lines per account."""

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from ledger_reports.application.ports.ledger_repository import (
    LedgerQueryError,
    LedgerRepositoryPort,
)
from ledger_reports.domain.models import (
    AccountActivity,
    BalanceActivityRow,
    ReportFailure,
    ReportPeriod,
)
from ledger_reports.domain.models.results import PERIOD_ACTIVITY_ERROR
from ledger_reports.domain.services.ledger import build_activity_map
from ledger_reports.infrastructure.logging.logger import get_app_logger

CURRENT = "current"
COMPARATIVE = "comparative"


@dataclass(frozen=True)
class ActivityAggregation:
    """Activity maps for the report period and the comparative period.

    Attributes:
        current: Activity keyed by account id for the report period.
        comparative: Activity for the comparative period, or None when no
            comparative period was requested.
    """

    current: dict[str, AccountActivity]
    comparative: dict[str, AccountActivity] | None = None


class LedgerAggregator:
    """Turn ledger queries into per-account activity and balances."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        logger=None,
        max_workers: int = 2,
    ) -> None:
        """Initialize the aggregator.

        Args:
            ledger_repository: Port providing ledger reads.
            logger: Optional logger compatible with logging.Logger-like API.
            max_workers: Threads used to fetch current and comparative
                periods side by side.
        """
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()
        self._max_workers = max_workers

    def aggregate_period(
        self,
        tenant_id: str,
        company_id: str,
        period: ReportPeriod,
        account_types: Sequence[str] = (),
        categories: Sequence[str] = (),
    ) -> dict[str, AccountActivity]:
        """Return activity per account for one period.

        Raises:
            LedgerQueryError: If the ledger query fails.
        """
        rows = self._ledger_repository.fetch_period_activity(
            tenant_id,
            company_id,
            period.start_date,
            period.end_date,
            account_types=tuple(account_types),
            categories=tuple(categories),
        )
        self._logger.info(
            f"Fetched {len(rows)} activity rows for "
            f"{period.start_date} to {period.end_date}"
        )
        return build_activity_map(rows)

    def aggregate(
        self,
        tenant_id: str,
        company_id: str,
        period: ReportPeriod,
        comparative_period: ReportPeriod | None = None,
        account_types: Sequence[str] = (),
        categories: Sequence[str] = (),
    ) -> ActivityAggregation | ReportFailure:
        """Aggregate the report period and, optionally, a comparative one.

        Both fetches run concurrently. A failure in either is returned as a
        ``PERIOD_ACTIVITY_ERROR`` naming the failing period; the current
        period is reported first when both fail.

        Args:
            tenant_id: Tenant identifier.
            company_id: Company identifier.
            period: Report period.
            comparative_period: Optional comparative period.
            account_types: Account types in scope.
            categories: Account categories in scope.

        Returns:
            ActivityAggregation | ReportFailure: Activity maps or a failure.
        """
        periods = {CURRENT: period}
        if comparative_period is not None:
            periods[COMPARATIVE] = comparative_period

        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            futures = {
                label: executor.submit(
                    self.aggregate_period,
                    tenant_id,
                    company_id,
                    window,
                    account_types,
                    categories,
                )
                for label, window in periods.items()
            }
            results: dict[str, dict[str, AccountActivity]] = {}
            failures: dict[str, LedgerQueryError] = {}
            for label, future in futures.items():
                try:
                    results[label] = future.result()
                except LedgerQueryError as exc:
                    failures[label] = exc

        for label in (CURRENT, COMPARATIVE):
            if label not in failures:
                continue
            window = periods[label]
            self._logger.error(
                f"Failed to fetch {label} period activity: {failures[label]}"
            )
            return ReportFailure(
                error=(
                    f"Failed to fetch {label} period activity: "
                    f"{failures[label]}"
                ),
                code=PERIOD_ACTIVITY_ERROR,
                details={
                    "period": label,
                    "start_date": window.start_date.isoformat(),
                    "end_date": window.end_date.isoformat(),
                },
            )
        return ActivityAggregation(
            current=results[CURRENT],
            comparative=results.get(COMPARATIVE),
        )

    def aggregate_balances(
        self,
        tenant_id: str,
        company_id: str,
        fiscal_year_start: date,
        as_of_date: date,
        account_ids: Sequence[str],
    ) -> dict[str, BalanceActivityRow]:
        """Return opening and period sums keyed by account id.

        Raises:
            LedgerQueryError: If the ledger query fails.
        """
        if not account_ids:
            return {}
        rows = self._ledger_repository.fetch_balance_activity(
            tenant_id,
            company_id,
            fiscal_year_start,
            as_of_date,
            tuple(account_ids),
        )
        self._logger.info(
            f"Fetched balance activity for {len(rows)} of "
            f"{len(account_ids)} accounts"
        )
        return {row.account_id: row for row in rows}

    def cash_balance(
        self,
        tenant_id: str,
        company_id: str,
        as_of_date: date,
        inclusive: bool,
        categories: Sequence[str],
    ) -> Decimal:
        """Return the cumulative cash balance at a date.

        Raises:
            LedgerQueryError: If the ledger query fails.
        """
        return self._ledger_repository.fetch_cash_balance(
            tenant_id,
            company_id,
            as_of_date,
            inclusive,
            tuple(categories),
        )


__all__ = ["LedgerAggregator", "ActivityAggregation"]
