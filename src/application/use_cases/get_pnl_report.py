"""Use case assembling profit-and-loss reports for a date range."""

from dataclasses import dataclass
from datetime import date
from threading import Lock

from src.application.ports.report_cache import ReportCachePort
from src.application.results import OperationResult
from src.application.use_cases.ledger_repository import ScopedLedgerRepository
from src.domain.errors import LedgerError
from src.domain.models.finance import DateRange, PnLReport
from src.domain.models.ledger import RecordKind
from src.domain.services.aggregation import (
    by_category,
    by_payment_method,
    totals,
)
from src.domain.services.periods import RangePreset, resolve_date_range
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class ReportResult:
    """A report tagged with the range it was computed for."""

    date_range: DateRange
    report: PnLReport


@dataclass(frozen=True)
class ReportTicket:
    """Tag identifying one issued report request."""

    sequence: int
    date_range: DateRange


class ReportRequestTracker:
    """Track the latest report request so stale results can be dropped.

    Each request is issued a ticket; only the result of the most recently
    issued ticket, computed for the same range, is accepted.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._latest = 0

    def issue(self, date_range: DateRange) -> ReportTicket:
        with self._lock:
            self._latest += 1
            return ReportTicket(sequence=self._latest, date_range=date_range)

    def accept(self, ticket: ReportTicket, result: ReportResult) -> bool:
        """Return True when the result answers the latest request."""
        with self._lock:
            latest = self._latest
        return (
            ticket.sequence == latest
            and result.date_range == ticket.date_range
        )


def build_pnl_report(sales, expenses) -> PnLReport:
    """Reduce period records into a PnLReport."""
    period_totals = totals(sales, expenses)
    return PnLReport(
        total_sales=period_totals.total_sales,
        total_expenses=period_totals.total_expenses,
        net_profit=period_totals.net_profit,
        sales_by_method=by_payment_method(sales),
        expenses_by_method=by_payment_method(expenses),
        expenses_by_category=by_category(expenses),
    )


class GetPnLReportUseCase:
    """Compute the profit-and-loss report of the scoped business.

    Failures from range resolution, validation or persistence are logged
    and returned inside an ``OperationResult``.
    """

    def __init__(
        self,
        ledger: ScopedLedgerRepository,
        cache: ReportCachePort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger: Business-scoped ledger repository.
            cache: Report cache keyed by business and range.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._ledger = ledger
        self._cache = cache
        self._logger = logger or get_app_logger()

    def execute(
        self,
        preset=RangePreset.THIS_MONTH,
        today: date | None = None,
        start_date=None,
        end_date=None,
    ) -> OperationResult[ReportResult]:
        """Return the report for a named or custom range.

        Args:
            preset: Range preset or its wire value.
            today: Reference day for named presets; defaults to today.
            start_date: Custom range start.
            end_date: Custom range end (inclusive).

        Returns:
            OperationResult[ReportResult]: Report tagged with its resolved
            range, or the failure.
        """
        try:
            date_range = resolve_date_range(
                preset,
                today or date.today(),
                start=start_date,
                end=end_date,
            )
        except LedgerError as exc:
            return self._fail(exc)
        return self.execute_for_range(date_range)

    def execute_for_range(
        self,
        date_range: DateRange,
    ) -> OperationResult[ReportResult]:
        try:
            return OperationResult.ok(self._compute(date_range))
        except LedgerError as exc:
            return self._fail(exc)

    def _compute(self, date_range: DateRange) -> ReportResult:
        business_id = self._ledger.business_id
        cache_key = ("pnl", date_range)
        cached = self._cache.get(business_id, cache_key)
        if cached is not None:
            return cached

        # Read before fetching; a mutation committed meanwhile bumps it.
        generation = self._cache.generation(business_id)
        sales = self._ledger.list(RecordKind.SALE, date_range)
        expenses = self._ledger.list(RecordKind.EXPENSE, date_range)
        self._logger.info(
            f"Fetched {len(sales)} sales and {len(expenses)} expenses "
            f"for {date_range.start_date}..{date_range.end_date}"
        )
        result = ReportResult(
            date_range=date_range,
            report=build_pnl_report(sales, expenses),
        )
        if not self._cache.put(
            business_id, cache_key, result, generation=generation
        ):
            self._logger.info(
                f"Ledger of business={business_id} changed while building "
                "the report; result not cached"
            )
        return result

    def _fail(self, exc: LedgerError) -> OperationResult[ReportResult]:
        self._logger.error(
            f"Failed to build report for business="
            f"{self._ledger.business_id}: {exc}"
        )
        return OperationResult.fail(exc)


__all__ = [
    "GetPnLReportUseCase",
    "ReportRequestTracker",
    "ReportResult",
    "ReportTicket",
    "build_pnl_report",
]
