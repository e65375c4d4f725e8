"""Use case to generate a statement of cash flows for a period."""

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
from ledger_reports.domain.constants import ACCOUNT_TYPES, DEFAULT_CURRENCY
from ledger_reports.domain.models import (
    CashFlowReport,
    CashFlowRequest,
    CashFlowSectionType,
    ReportFailure,
    StatementMetadata,
    TrialBalanceRequest,
)
from ledger_reports.domain.models.results import (
    CASH_FLOW_ERROR,
    COMPARATIVE_TRIAL_BALANCE_ERROR,
    INVALID_INPUT,
    TRIAL_BALANCE_ERROR,
)
from ledger_reports.domain.policies import (
    DEFAULT_CASH_FLOW_CLASSIFICATION,
    CashFlowClassification,
    NonCashAdjustmentClassifier,
    WorkingCapitalClassifier,
    default_non_cash_classifier,
    default_working_capital_classifier,
)
from ledger_reports.domain.services.cash_flow import (
    CashBalances,
    build_cash_flow_sections,
    build_reconciliation,
    compute_cash_flow_metrics,
)
from ledger_reports.domain.services.validation import (
    validate_cash_flow_request,
)
from ledger_reports.infrastructure.logging.logger import get_app_logger

INDIRECT = "INDIRECT"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class GetCashFlowUseCase:
    """Classify period activity into IAS 7 operating, investing and financing."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        logger=None,
        trial_balance: GetTrialBalanceUseCase | None = None,
        aggregator: LedgerAggregator | None = None,
        classification: CashFlowClassification = (
            DEFAULT_CASH_FLOW_CLASSIFICATION
        ),
        non_cash_classifier: NonCashAdjustmentClassifier | None = None,
        working_capital_classifier: WorkingCapitalClassifier | None = None,
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
            classification: Type and category tables.
            non_cash_classifier: Detects non-cash items for the indirect
                reconciliation (keyword rules by default).
            working_capital_classifier: Detects working-capital accounts for
                the indirect reconciliation (keyword rules by default).
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
        self._non_cash_classifier = (
            non_cash_classifier or default_non_cash_classifier()
        )
        self._working_capital_classifier = (
            working_capital_classifier or default_working_capital_classifier()
        )
        self._default_currency = default_currency
        self._clock = clock
        self._today = today

    def execute(
        self,
        request: CashFlowRequest,
    ) -> CashFlowReport | ReportFailure:
        """Return the cash flow statement or a failure.

        Args:
            request: Cash flow parameters.

        Returns:
            CashFlowReport | ReportFailure: The report on success.
        """
        errors = validate_cash_flow_request(request, self._today())
        if errors:
            self._logger.warning(
                f"Cash flow request rejected: {', '.join(errors)}"
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
            self._logger.error(f"Cash flow generation failed: {exc}")
            return ReportFailure(
                error=str(exc) or "Unknown error occurred",
                code=CASH_FLOW_ERROR,
            )
        if result.success:
            elapsed_ms = int((time.perf_counter() - started) * 1000)
            self._logger.info(
                f"Cash flow ({request.method}) for {request.start_date} to "
                f"{request.end_date} generated in {elapsed_ms} ms: "
                f"net change {result.metrics.net_change_in_cash} "
                f"(classification {self._classification.version})"
            )
        return result

    def _trial_balance_request(
        self,
        request: CashFlowRequest,
        as_of_date: date,
        currency: str,
    ) -> TrialBalanceRequest:
        return TrialBalanceRequest(
            tenant_id=request.tenant_id,
            company_id=request.company_id,
            as_of_date=as_of_date,
            include_period_activity=True,
            include_zero_balances=True,
            currency=currency,
        )

    def _cash_balances(self, request: CashFlowRequest) -> CashBalances:
        cash_categories = tuple(sorted(self._classification.cash_categories))

        def balance(as_of: date, inclusive: bool):
            return self._aggregator.cash_balance(
                request.tenant_id,
                request.company_id,
                as_of,
                inclusive,
                cash_categories,
            )

        comparative = request.comparative_period
        return CashBalances(
            beginning=balance(request.start_date, False),
            ending=balance(request.end_date, True),
            comparative_beginning=(
                balance(comparative.start_date, False) if comparative else None
            ),
            comparative_ending=(
                balance(comparative.end_date, True) if comparative else None
            ),
        )

    def _build(
        self,
        request: CashFlowRequest,
    ) -> CashFlowReport | ReportFailure:
        currency = request.currency or self._default_currency
        current_tb = self._trial_balance.execute(
            self._trial_balance_request(request, request.end_date, currency)
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
                self._trial_balance_request(
                    request, comparative_period.end_date, currency
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
            account_types=ACCOUNT_TYPES,
            categories=tuple(sorted(self._classification.cash_categories)),
        )
        if isinstance(activity, ReportFailure):
            return activity

        accounts = {}
        if comparative_tb is not None:
            accounts.update(
                (snapshot.account_id, snapshot.account)
                for snapshot in comparative_tb.accounts
            )
        accounts.update(
            (snapshot.account_id, snapshot.account)
            for snapshot in current_tb.accounts
        )
        sections = build_cash_flow_sections(
            accounts,
            activity.current,
            activity.comparative,
            self._classification,
        )
        balances = self._cash_balances(request)
        metrics = compute_cash_flow_metrics(
            sections,
            balances,
            has_comparative=comparative_period is not None,
        )
        balance_delta = (
            metrics.ending_cash_balance - metrics.beginning_cash_balance
        )
        if metrics.net_change_in_cash != balance_delta:
            self._logger.warning(
                "Net change in cash from activities "
                f"({metrics.net_change_in_cash}) differs from cash balance "
                f"movement ({balance_delta})"
            )

        reconciliation = None
        if request.method == INDIRECT:
            reconciliation = build_reconciliation(
                current_tb.accounts,
                self._non_cash_classifier,
                self._working_capital_classifier,
            )

        lines = [
            line
            for section in sections.values()
            for line in section.lines
        ]
        metadata = StatementMetadata(
            total_accounts=len(lines),
            accounts_with_activity=sum(
                1 for line in lines if line.current_period_amount != 0
            ),
            period_days=request.period.days,
        )
        return CashFlowReport(
            period=request.period,
            comparative_period=comparative_period,
            generated_at=self._clock(),
            currency=currency,
            method=request.method,
            report_format=request.report_format,
            operating_activities=sections[CashFlowSectionType.OPERATING],
            investing_activities=sections[CashFlowSectionType.INVESTING],
            financing_activities=sections[CashFlowSectionType.FINANCING],
            metrics=metrics,
            reconciliation=reconciliation,
            metadata=metadata,
        )


__all__ = ["GetCashFlowUseCase"]
