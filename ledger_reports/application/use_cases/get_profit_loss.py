"""Use case to generate an income statement for a period."""

from collections.abc import Callable
from datetime import date, datetime, timezone
import time

from ledger_reports.application.ports.ledger_repository import (
    LedgerRepositoryPort,
)
from ledger_reports.application.use_cases.aggregate_ledger import (
    LedgerAggregator,
)
from ledger_reports.application.use_cases.get_trial_balance import (
    GetTrialBalanceUseCase,
)
from ledger_reports.domain.constants import (
    DEFAULT_CURRENCY,
    PROFIT_LOSS_ACCOUNT_TYPES,
)
from ledger_reports.domain.models import (
    ProfitLossReport,
    ProfitLossRequest,
    ProfitLossSectionType,
    ReportFailure,
    StatementMetadata,
    TrialBalanceRequest,
)
from ledger_reports.domain.models.results import (
    COMPARATIVE_TRIAL_BALANCE_ERROR,
    INVALID_INPUT,
    PROFIT_LOSS_ERROR,
    TRIAL_BALANCE_ERROR,
)
from ledger_reports.domain.policies import (
    DEFAULT_PROFIT_LOSS_CLASSIFICATION,
    IncomeTaxPolicy,
    NoIncomeTaxPolicy,
    ProfitLossClassification,
)
from ledger_reports.domain.services.profit_loss import (
    build_profit_loss_sections,
    collect_profit_loss_accounts,
    compute_profit_loss_metrics,
)
from ledger_reports.domain.services.validation import (
    validate_profit_loss_request,
)
from ledger_reports.infrastructure.logging.logger import get_app_logger


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class GetProfitLossUseCase:
    """Classify period revenue and expenses into income statement sections."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        logger=None,
        trial_balance: GetTrialBalanceUseCase | None = None,
        aggregator: LedgerAggregator | None = None,
        classification: ProfitLossClassification = (
            DEFAULT_PROFIT_LOSS_CLASSIFICATION
        ),
        tax_policy: IncomeTaxPolicy | None = None,
        default_currency: str = DEFAULT_CURRENCY,
        clock: Callable[[], datetime] = _utc_now,
        today: Callable[[], date] = date.today,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger_repository: Port providing ledger reads.
            logger: Optional logger compatible with logging.Logger-like API.
            trial_balance: Optional trial balance use case to reuse.
            aggregator: Optional ledger aggregator to reuse.
            classification: Category to section table.
            tax_policy: Income tax hook, no tax by default.
            default_currency: Currency used when the request has none.
            clock: Returns the generation timestamp.
            today: Returns the current date for validation.
        """
        self._logger = logger or get_app_logger()
        self._aggregator = aggregator or LedgerAggregator(
            ledger_repository, logger=self._logger
        )
        self._trial_balance = trial_balance or GetTrialBalanceUseCase(
            ledger_repository,
            logger=self._logger,
            aggregator=self._aggregator,
            default_currency=default_currency,
            clock=clock,
            today=today,
        )
        self._classification = classification
        self._tax_policy = tax_policy or NoIncomeTaxPolicy()
        self._default_currency = default_currency
        self._clock = clock
        self._today = today

    def execute(
        self,
        request: ProfitLossRequest,
    ) -> ProfitLossReport | ReportFailure:
        """Return the income statement or a failure.

        Args:
            request: Income statement parameters.

        Returns:
            ProfitLossReport | ReportFailure: The report on success.
        """
        errors = validate_profit_loss_request(request, self._today())
        if errors:
            self._logger.warning(
                f"Profit and loss request rejected: {', '.join(errors)}"
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
            self._logger.error(f"Profit and loss generation failed: {exc}")
            return ReportFailure(
                error=str(exc) or "Unknown error occurred",
                code=PROFIT_LOSS_ERROR,
            )
        if result.success:
            elapsed_ms = int((time.perf_counter() - started) * 1000)
            self._logger.info(
                f"Profit and loss for {request.start_date} to "
                f"{request.end_date} generated in {elapsed_ms} ms: "
                f"net income {result.metrics.net_income_after_tax} "
                f"(classification {self._classification.version})"
            )
        return result

    def _build(
        self,
        request: ProfitLossRequest,
    ) -> ProfitLossReport | ReportFailure:
        currency = request.currency or self._default_currency
        current_tb = self._trial_balance.execute(
            TrialBalanceRequest(
                tenant_id=request.tenant_id,
                company_id=request.company_id,
                as_of_date=request.end_date,
                include_period_activity=True,
                include_zero_balances=request.include_zero_balances,
                currency=currency,
            )
        )
        if not current_tb.success:
            return ReportFailure(
                error=f"Failed to generate trial balance: {current_tb.error}",
                code=TRIAL_BALANCE_ERROR,
                details={"cause": current_tb.code},
            )

        comparative_tb = None
        comparative_period = request.comparative_period
        if comparative_period is not None:
            comparative_tb = self._trial_balance.execute(
                TrialBalanceRequest(
                    tenant_id=request.tenant_id,
                    company_id=request.company_id,
                    as_of_date=comparative_period.end_date,
                    include_period_activity=True,
                    include_zero_balances=request.include_zero_balances,
                    currency=currency,
                )
            )
            if not comparative_tb.success:
                return ReportFailure(
                    error=(
                        "Failed to generate comparative trial balance: "
                        f"{comparative_tb.error}"
                    ),
                    code=COMPARATIVE_TRIAL_BALANCE_ERROR,
                    details={"cause": comparative_tb.code},
                )

        activity = self._aggregator.aggregate(
            request.tenant_id,
            request.company_id,
            request.period,
            comparative_period,
            account_types=PROFIT_LOSS_ACCOUNT_TYPES,
        )
        if isinstance(activity, ReportFailure):
            return activity

        account_groups = [
            [snapshot.account for snapshot in current_tb.accounts]
        ]
        if comparative_tb is not None:
            account_groups.append(
                [snapshot.account for snapshot in comparative_tb.accounts]
            )
        accounts = collect_profit_loss_accounts(*account_groups)

        sections = build_profit_loss_sections(
            accounts,
            activity.current,
            activity.comparative,
            self._classification,
        )
        metrics = compute_profit_loss_metrics(
            sections,
            self._tax_policy,
            has_comparative=comparative_period is not None,
        )
        metadata = StatementMetadata(
            total_accounts=len(accounts),
            accounts_with_activity=sum(
                1
                for account in accounts
                if account.id in activity.current
                and activity.current[account.id].net_activity != 0
            ),
            period_days=request.period.days,
        )
        return ProfitLossReport(
            period=request.period,
            comparative_period=comparative_period,
            generated_at=self._clock(),
            currency=currency,
            report_format=request.report_format,
            revenue=sections[ProfitLossSectionType.REVENUE],
            cost_of_sales=sections[ProfitLossSectionType.COST_OF_SALES],
            operating_expenses=sections[
                ProfitLossSectionType.OPERATING_EXPENSE
            ],
            other_income=sections[ProfitLossSectionType.OTHER_INCOME],
            other_expenses=sections[ProfitLossSectionType.OTHER_EXPENSE],
            metrics=metrics,
            metadata=metadata,
        )


__all__ = ["GetProfitLossUseCase"]
