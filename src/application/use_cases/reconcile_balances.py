"""Use case repairing business balances from a full ledger scan."""

from src.application.context import BusinessContext, BusinessLocks
from src.application.ports.report_cache import ReportCachePort
from src.application.results import OperationResult
from src.application.use_cases.balance_accumulator import (
    BusinessBalanceAccumulator,
    ReconciliationResult,
)
from src.domain.errors import LedgerError
from src.infrastructure.logging.logger import get_app_logger


class ReconcileBalancesUseCase:
    """Recompute stored balances while holding the business lock."""

    def __init__(
        self,
        context: BusinessContext,
        accumulator: BusinessBalanceAccumulator,
        cache: ReportCachePort,
        locks: BusinessLocks | None = None,
        logger=None,
    ) -> None:
        self._context = context
        self._accumulator = accumulator
        self._cache = cache
        self._locks = locks or BusinessLocks()
        self._logger = logger or get_app_logger()

    def execute(self) -> OperationResult[ReconciliationResult]:
        business_id = self._context.business_id
        try:
            with self._locks.for_business(business_id):
                result = self._accumulator.reconcile(business_id)
                self._cache.invalidate(business_id)
        except LedgerError as exc:
            self._logger.error(
                f"Reconciliation failed for business={business_id}: {exc}"
            )
            return OperationResult.fail(exc)
        return OperationResult.ok(result)


__all__ = ["ReconcileBalancesUseCase"]
