"""Use case computing the dashboard landing page figures."""

from datetime import date, timedelta

from src.application.results import OperationResult
from src.application.use_cases.balance_accumulator import (
    BusinessBalanceAccumulator,
)
from src.application.use_cases.ledger_repository import ScopedLedgerRepository
from src.domain.errors import LedgerError
from src.domain.models.finance import DashboardSummary, DateRange
from src.domain.models.ledger import RecordKind
from src.domain.services.aggregation import (
    by_category,
    daily_series,
    today_totals,
    totals,
)
from src.domain.services.periods import month_range
from src.infrastructure.logging.logger import get_app_logger


class GetDashboardSummaryUseCase:
    """Compute balances, today's figures, month totals and a daily series."""

    def __init__(
        self,
        ledger: ScopedLedgerRepository,
        accumulator: BusinessBalanceAccumulator,
        logger=None,
        day_count: int = 7,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger: Business-scoped ledger repository.
            accumulator: Source of the current balances.
            logger: Optional logger compatible with logging.Logger-like API.
            day_count: Number of days in the daily series.
        """
        self._ledger = ledger
        self._accumulator = accumulator
        self._logger = logger or get_app_logger()
        self._day_count = day_count

    def execute(
        self,
        today: date | None = None,
    ) -> OperationResult[DashboardSummary]:
        """Return the dashboard summary.

        Args:
            today: Reference day; defaults to the current date.

        Returns:
            OperationResult[DashboardSummary]: Figures for the dashboard
            page, or the failure.
        """
        today = today or date.today()
        try:
            return OperationResult.ok(self._compute(today))
        except LedgerError as exc:
            self._logger.error(
                f"Failed to compute dashboard for business="
                f"{self._ledger.business_id}: {exc}"
            )
            return OperationResult.fail(exc)

    def _compute(self, today: date) -> DashboardSummary:
        period = month_range(today)
        series_start = today - timedelta(days=max(self._day_count, 1) - 1)
        window = DateRange(
            start_date=min(period.start_date, series_start),
            end_date=max(period.end_date, today),
        )
        sales = self._ledger.list(RecordKind.SALE, window)
        expenses = self._ledger.list(RecordKind.EXPENSE, window)

        period_sales = [sale for sale in sales if period.contains(sale.date)]
        period_expenses = [
            expense for expense in expenses if period.contains(expense.date)
        ]
        balances = self._accumulator.current_balances(self._ledger.business_id)
        self._logger.info(
            f"Dashboard computed for business={self._ledger.business_id} "
            f"on {today}"
        )
        return DashboardSummary(
            balances=balances,
            today_sales=today_totals(sales, today),
            today_expenses=today_totals(expenses, today),
            period=period,
            period_totals=totals(period_sales, period_expenses),
            daily_series=daily_series(sales, expenses, self._day_count, today),
            expenses_by_category=by_category(period_expenses),
        )


__all__ = ["GetDashboardSummaryUseCase"]
