"""Use case to build a trial balance as of a date."""

from collections.abc import Callable
from datetime import date, datetime, timezone
import time

from ledger_reports.application.ports.ledger_repository import (
    LedgerRepositoryPort,
)
from ledger_reports.application.use_cases.aggregate_ledger import (
    LedgerAggregator,
)
from ledger_reports.domain.constants import DEFAULT_CURRENCY
from ledger_reports.domain.models import (
    ReportFailure,
    TrialBalanceMetadata,
    TrialBalanceReport,
    TrialBalanceRequest,
)
from ledger_reports.domain.models.results import (
    INVALID_INPUT,
    NO_ACCOUNTS_FOUND,
    TRIAL_BALANCE_ERROR,
)
from ledger_reports.domain.services.balances import (
    build_snapshot,
    compute_trial_balance_totals,
    is_balanced,
    is_zero_snapshot,
    resolve_fiscal_year_start,
)
from ledger_reports.domain.services.validation import (
    validate_trial_balance_request,
)
from ledger_reports.infrastructure.logging.logger import get_app_logger


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class GetTrialBalanceUseCase:
    """Build per-account opening, period and closing balances."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        logger=None,
        aggregator: LedgerAggregator | None = None,
        default_currency: str = DEFAULT_CURRENCY,
        clock: Callable[[], datetime] = _utc_now,
        today: Callable[[], date] = date.today,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger_repository: Port providing ledger reads.
            logger: Optional logger compatible with logging.Logger-like API.
            aggregator: Optional aggregator sharing the same repository.
            default_currency: Currency used when the request has none.
            clock: Returns the generation timestamp.
            today: Returns the current date for validation.
        """
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()
        self._aggregator = aggregator or LedgerAggregator(
            ledger_repository, logger=self._logger
        )
        self._default_currency = default_currency
        self._clock = clock
        self._today = today

    def execute(
        self,
        request: TrialBalanceRequest,
    ) -> TrialBalanceReport | ReportFailure:
        """Return the trial balance or a failure describing the problem.

        Args:
            request: Trial balance parameters.

        Returns:
            TrialBalanceReport | ReportFailure: The report on success.
        """
        errors = validate_trial_balance_request(request, self._today())
        if errors:
            self._logger.warning(
                f"Trial balance request rejected: {', '.join(errors)}"
            )
            return ReportFailure(
                error=f"Input validation failed: {', '.join(errors)}",
                code=INVALID_INPUT,
                details={"errors": errors},
            )
        started = time.perf_counter()
        try:
            result = self._build(request)
        except Exception as exc:
            self._logger.error(f"Trial balance generation failed: {exc}")
            return ReportFailure(
                error=str(exc) or "Unknown error occurred",
                code=TRIAL_BALANCE_ERROR,
            )
        if result.success:
            elapsed_ms = int((time.perf_counter() - started) * 1000)
            self._logger.info(
                f"Trial balance as of {request.as_of_date} generated in "
                f"{elapsed_ms} ms: {len(result.accounts)} accounts, "
                f"balanced={result.is_balanced}"
            )
        return result

    def _build(
        self,
        request: TrialBalanceRequest,
    ) -> TrialBalanceReport | ReportFailure:
        currency = request.currency or self._default_currency
        fiscal_year_start = resolve_fiscal_year_start(
            request.as_of_date,
            self._ledger_repository.fetch_fiscal_year_start(
                request.tenant_id,
                request.company_id,
                request.as_of_date,
            ),
        )
        accounts = self._ledger_repository.fetch_chart_of_accounts(
            request.tenant_id,
            request.company_id,
            request.account_filter,
        )
        if not accounts:
            self._logger.warning(
                f"No accounts found for company {request.company_id}"
            )
            return ReportFailure(
                error="No accounts found for the specified criteria",
                code=NO_ACCOUNTS_FOUND,
            )

        rows = self._aggregator.aggregate_balances(
            request.tenant_id,
            request.company_id,
            fiscal_year_start,
            request.as_of_date,
            [account.id for account in accounts],
        )
        snapshots = [
            build_snapshot(
                account,
                rows.get(account.id),
                include_period_activity=request.include_period_activity,
                currency=currency,
            )
            for account in accounts
        ]
        if not request.include_zero_balances:
            snapshots = [
                snapshot
                for snapshot in snapshots
                if not is_zero_snapshot(snapshot)
            ]

        totals = compute_trial_balance_totals(snapshots)
        balanced = is_balanced(totals)
        if not balanced:
            self._logger.warning(
                f"Trial balance out of balance: debits={totals.total_debits}, "
                f"credits={totals.total_credits}"
            )

        kept_ids = {snapshot.account_id for snapshot in snapshots}
        posting_dates = [
            row
            for account_id, row in rows.items()
            if account_id in kept_ids
        ]
        oldest = [
            row.oldest_transaction
            for row in posting_dates
            if row.oldest_transaction is not None
        ]
        newest = [
            row.newest_transaction
            for row in posting_dates
            if row.newest_transaction is not None
        ]
        metadata = TrialBalanceMetadata(
            total_accounts=len(snapshots),
            accounts_with_activity=sum(
                1 for snapshot in snapshots if snapshot.has_activity
            ),
            fiscal_year_start=fiscal_year_start,
            oldest_transaction=min(oldest) if oldest else None,
            newest_transaction=max(newest) if newest else None,
        )
        return TrialBalanceReport(
            as_of_date=request.as_of_date,
            generated_at=self._clock(),
            currency=currency,
            accounts=tuple(snapshots),
            totals=totals,
            is_balanced=balanced,
            metadata=metadata,
        )


__all__ = ["GetTrialBalanceUseCase"]
