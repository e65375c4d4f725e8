"""CLI adapter generating a ledger report from environment settings.

Environment variables:
    REPORT_TYPE: trial_balance, profit_loss or cash_flow.
    REPORT_TENANT_ID, REPORT_COMPANY_ID: Company to report on.
    REPORT_AS_OF_DATE: Trial balance date (defaults to today).
    REPORT_START_DATE, REPORT_END_DATE: Statement period.
    REPORT_COMPARATIVE_START_DATE, REPORT_COMPARATIVE_END_DATE: Optional
        comparative period.
    REPORT_CASH_FLOW_METHOD: DIRECT or INDIRECT.
    REPORT_EXPORT_PATH: Optional CSV destination for trial balances.
"""

from datetime import date
import os
from pathlib import Path

from ledger_reports.domain.constants import DEFAULT_CASH_FLOW_METHOD
from ledger_reports.domain.models import (
    CashFlowRequest,
    ProfitLossRequest,
    ReportPeriod,
    TrialBalanceRequest,
)
from ledger_reports.infrastructure.container import (
    build_cash_flow_use_case,
    build_export_use_case,
    build_profit_loss_use_case,
    build_trial_balance_use_case,
)
from ledger_reports.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)
from ledger_reports.infrastructure.settings import ReportSettings

TRIAL_BALANCE = "trial_balance"
PROFIT_LOSS = "profit_loss"
CASH_FLOW = "cash_flow"


def _parse_date(value: str | None, logger) -> date | None:
    """Parse an ISO date string into a date.

    Args:
        value: Date string in YYYY-MM-DD format.
        logger: Logger used for warnings.

    Returns:
        date | None: Parsed date or None when invalid.
    """
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        logger.warning(
            f"Invalid date '{value}'. Expected format YYYY-MM-DD."
        )
        return None


def _comparative_period(logger) -> ReportPeriod | None:
    start = _parse_date(os.getenv("REPORT_COMPARATIVE_START_DATE"), logger)
    end = _parse_date(os.getenv("REPORT_COMPARATIVE_END_DATE"), logger)
    if start is None and end is None:
        return None
    return ReportPeriod(start, end)


def _print_failure(result) -> None:
    print(f"Report failed [{result.code}]: {result.error}")


def _run_trial_balance(settings: ReportSettings, logger) -> None:
    as_of = _parse_date(os.getenv("REPORT_AS_OF_DATE"), logger) or date.today()
    request = TrialBalanceRequest(
        tenant_id=os.getenv("REPORT_TENANT_ID", ""),
        company_id=os.getenv("REPORT_COMPANY_ID", ""),
        as_of_date=as_of,
    )
    result = build_trial_balance_use_case(settings=settings).execute(request)
    if not result.success:
        _print_failure(result)
        return
    totals = result.totals
    print(f"Trial balance as of {result.as_of_date} ({result.currency})")
    print(
        f"accounts={len(result.accounts)}, debits={totals.total_debits}, "
        f"credits={totals.total_credits}, balanced={result.is_balanced}"
    )
    print(
        f"assets={totals.total_assets}, liabilities={totals.total_liabilities}, "
        f"equity={totals.total_equity}, net_income={totals.net_income}"
    )
    export_path = os.getenv("REPORT_EXPORT_PATH")
    if export_path:
        content = build_export_use_case().execute(result, "CSV")
        Path(export_path).write_text(content, encoding="utf-8")
        print(f"Exported CSV to {export_path}")


def _run_profit_loss(settings: ReportSettings, logger) -> None:
    request = ProfitLossRequest(
        tenant_id=os.getenv("REPORT_TENANT_ID", ""),
        company_id=os.getenv("REPORT_COMPANY_ID", ""),
        start_date=_parse_date(os.getenv("REPORT_START_DATE"), logger),
        end_date=_parse_date(os.getenv("REPORT_END_DATE"), logger),
        comparative_period=_comparative_period(logger),
    )
    result = build_profit_loss_use_case(settings=settings).execute(request)
    if not result.success:
        _print_failure(result)
        return
    metrics = result.metrics
    print(
        f"Profit and loss {result.period.start_date} to "
        f"{result.period.end_date} ({result.currency})"
    )
    for section in result.sections:
        print(f"{section.name}: {section.subtotal}")
    print(
        f"gross_profit={metrics.gross_profit} "
        f"({metrics.gross_profit_margin}%), "
        f"operating_income={metrics.operating_income}, "
        f"net_income={metrics.net_income_after_tax}"
    )


def _run_cash_flow(settings: ReportSettings, logger) -> None:
    request = CashFlowRequest(
        tenant_id=os.getenv("REPORT_TENANT_ID", ""),
        company_id=os.getenv("REPORT_COMPANY_ID", ""),
        start_date=_parse_date(os.getenv("REPORT_START_DATE"), logger),
        end_date=_parse_date(os.getenv("REPORT_END_DATE"), logger),
        comparative_period=_comparative_period(logger),
        method=os.getenv(
            "REPORT_CASH_FLOW_METHOD", DEFAULT_CASH_FLOW_METHOD
        ).strip().upper(),
    )
    result = build_cash_flow_use_case(settings=settings).execute(request)
    if not result.success:
        _print_failure(result)
        return
    metrics = result.metrics
    print(
        f"Cash flow ({result.method}) {result.period.start_date} to "
        f"{result.period.end_date} ({result.currency})"
    )
    for section in result.sections:
        print(f"{section.name}: {section.subtotal}")
    print(
        f"net_change={metrics.net_change_in_cash}, "
        f"beginning_cash={metrics.beginning_cash_balance}, "
        f"ending_cash={metrics.ending_cash_balance}"
    )
    if result.reconciliation is not None:
        print(f"net_income={result.reconciliation.net_income}")
        for adjustment in result.reconciliation.adjustments:
            print(
                f"  {adjustment.type} {adjustment.description}: "
                f"{adjustment.amount}"
            )
        for change in result.reconciliation.working_capital_changes:
            print(f"  {change.type} {change.description}: {change.amount}")


_RUNNERS = {
    TRIAL_BALANCE: _run_trial_balance,
    PROFIT_LOSS: _run_profit_loss,
    CASH_FLOW: _run_cash_flow,
}


def main() -> None:
    """Generate the configured report and print a summary."""
    logger = get_app_logger()
    report_type = os.getenv("REPORT_TYPE", TRIAL_BALANCE).strip().lower()
    runner = _RUNNERS.get(report_type)
    if runner is None:
        logger.warning(
            f"Unsupported REPORT_TYPE '{report_type}'. "
            f"Expected one of: {', '.join(_RUNNERS)}."
        )
        return
    settings = ReportSettings.from_env()
    get_usage_logger().info(
        f"report={report_type} backend={settings.backend} "
        f"company={os.getenv('REPORT_COMPANY_ID', '')}"
    )
    runner(settings, logger)


if __name__ == "__main__":  # pragma: no cover
    main()
