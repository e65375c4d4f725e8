"""Use case to export a trial balance to a file format."""

import csv
from decimal import Decimal
import io

from ledger_reports.domain.models import TrialBalanceReport
from ledger_reports.infrastructure.logging.logger import get_app_logger
from ledger_reports.utils.decimal_utils import round_money

CSV = "CSV"
XLSX = "XLSX"
PDF = "PDF"

CSV_HEADERS = (
    "Account Number",
    "Account Name",
    "Account Type",
    "Opening Balance",
    "Period Debits",
    "Period Credits",
    "Closing Balance",
)


def _money(value: Decimal | None) -> str:
    return format(round_money(value or Decimal("0")), "f")


def trial_balance_to_csv(report: TrialBalanceReport) -> str:
    """Render a trial balance as CSV text with every cell quoted.

    Every amount is written with two decimals. Period columns of a report
    generated without period activity are written as 0.00.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for snapshot in report.accounts:
        writer.writerow(
            (
                snapshot.account_number,
                snapshot.account_name,
                snapshot.account_type,
                _money(snapshot.opening_balance),
                _money(snapshot.period_debits),
                _money(snapshot.period_credits),
                _money(snapshot.closing_balance),
            )
        )
    return buffer.getvalue().rstrip("\n")


class ExportTrialBalanceUseCase:
    """Serialize trial balance reports."""

    def __init__(self, logger=None) -> None:
        """Initialize the use case.

        Args:
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._logger = logger or get_app_logger()

    def execute(
        self,
        report: TrialBalanceReport,
        export_format: str = CSV,
    ) -> str:
        """Return the report in the requested format.

        Args:
            report: Trial balance to export.
            export_format: CSV, XLSX or PDF.

        Returns:
            str: Exported content.

        Raises:
            NotImplementedError: For XLSX and PDF.
            ValueError: For any other unknown format.
        """
        normalized = (export_format or "").strip().upper()
        if normalized == CSV:
            content = trial_balance_to_csv(report)
            self._logger.info(
                f"Exported trial balance as of {report.as_of_date} to CSV "
                f"({len(report.accounts)} accounts)"
            )
            return content
        if normalized in (XLSX, PDF):
            raise NotImplementedError(f"{normalized} export not yet implemented")
        raise ValueError(f"Unsupported export format: {export_format}")


def export_trial_balance(
    report: TrialBalanceReport,
    export_format: str = CSV,
    logger=None,
) -> str:
    """Export a trial balance with a one-off use case instance."""
    return ExportTrialBalanceUseCase(logger=logger).execute(
        report, export_format
    )


__all__ = [
    "ExportTrialBalanceUseCase",
    "export_trial_balance",
    "trial_balance_to_csv",
    "CSV_HEADERS",
]
