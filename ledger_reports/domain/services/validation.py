"""Domain validation helpers for report requests."""

from collections.abc import Iterable
from datetime import date

from ledger_reports.domain.constants import (
    CASH_FLOW_METHODS,
    CASH_FLOW_REPORT_FORMATS,
    PROFIT_LOSS_REPORT_FORMATS,
)
from ledger_reports.domain.models import (
    CashFlowRequest,
    ProfitLossRequest,
    ReportPeriod,
    TrialBalanceRequest,
)


def _validate_company(tenant_id: str, company_id: str) -> list[str]:
    errors = []
    if not tenant_id:
        errors.append("Tenant ID is required")
    if not company_id:
        errors.append("Company ID is required")
    return errors


def validate_trial_balance_request(
    request: TrialBalanceRequest,
    today: date,
) -> list[str]:
    """Return validation errors for a trial balance request.

    Args:
        request: Request to validate.
        today: Current date; as-of dates after it are rejected.

    Returns:
        list[str]: Error messages, empty when the request is valid.
    """
    errors = _validate_company(request.tenant_id, request.company_id)
    if request.as_of_date is None:
        errors.append("As of date is required")
    elif request.as_of_date > today:
        errors.append("As of date cannot be in the future")

    account_filter = request.account_filter
    if account_filter is not None and account_filter.account_number_range:
        number_range = account_filter.account_number_range
        if not number_range.start or not number_range.end:
            errors.append(
                "Account number range requires both from and to values"
            )
        elif number_range.start > number_range.end:
            errors.append(
                "Account number range from must be less than or equal to to"
            )
    return errors


def _validate_period(
    start_date: date | None,
    end_date: date | None,
    comparative_period: ReportPeriod | None,
    today: date,
) -> list[str]:
    errors = []
    if start_date is None:
        errors.append("Start date is required")
    if end_date is None:
        errors.append("End date is required")
    if start_date is not None and end_date is not None:
        if start_date >= end_date:
            errors.append("Start date must be before end date")
    if end_date is not None and end_date > today:
        errors.append("End date cannot be in the future")
    if comparative_period is not None:
        if (
            comparative_period.start_date is None
            or comparative_period.end_date is None
        ):
            errors.append(
                "Comparative period requires both start and end dates"
            )
        elif comparative_period.start_date >= comparative_period.end_date:
            errors.append(
                "Comparative period start date must be before end date"
            )
    return errors


def validate_profit_loss_request(
    request: ProfitLossRequest,
    today: date,
    report_formats: Iterable[str] = PROFIT_LOSS_REPORT_FORMATS,
) -> list[str]:
    """Return validation errors for an income statement request."""
    errors = _validate_company(request.tenant_id, request.company_id)
    errors.extend(
        _validate_period(
            request.start_date,
            request.end_date,
            request.comparative_period,
            today,
        )
    )
    if request.report_format not in tuple(report_formats):
        errors.append("Invalid report format")
    return errors


def validate_cash_flow_request(
    request: CashFlowRequest,
    today: date,
) -> list[str]:
    """Return validation errors for a cash flow request."""
    errors = _validate_company(request.tenant_id, request.company_id)
    errors.extend(
        _validate_period(
            request.start_date,
            request.end_date,
            request.comparative_period,
            today,
        )
    )
    if request.method not in CASH_FLOW_METHODS:
        errors.append("Invalid method. Must be DIRECT or INDIRECT")
    if request.report_format not in CASH_FLOW_REPORT_FORMATS:
        errors.append("Invalid report format. Must be STANDARD or COMPARATIVE")
    return errors


__all__ = [
    "validate_trial_balance_request",
    "validate_profit_loss_request",
    "validate_cash_flow_request",
]
