"""Business-scoped ledger repository coupling records to balances.

The adapter is the only application component writing ledger records. Each
mutation holds the business lock, reads the prior record state from the
store, writes the record, updates the balances through the accumulator and
drops the cached reports of the business.
"""

from dataclasses import replace

from src.application.context import BusinessContext, BusinessLocks
from src.application.ports.ledger_store import LedgerStorePort
from src.application.ports.report_cache import ReportCachePort
from src.application.use_cases.balance_accumulator import (
    BusinessBalanceAccumulator,
)
from src.domain.errors import NotFoundError
from src.domain.models.finance import DateRange
from src.domain.models.ledger import (
    ExpenseDraft,
    LedgerDraft,
    LedgerRecord,
    RecordKind,
)
from src.domain.services.validation import (
    parse_expense_category,
    parse_payment_method,
    parse_record_date,
    validate_amount,
    validate_update_fields,
)
from src.infrastructure.logging.logger import get_app_logger


class ScopedLedgerRepository:
    """CRUD and range reads over the ledger of one business."""

    def __init__(
        self,
        context: BusinessContext,
        store: LedgerStorePort,
        accumulator: BusinessBalanceAccumulator,
        cache: ReportCachePort,
        locks: BusinessLocks | None = None,
        logger=None,
    ) -> None:
        """Initialize the repository.

        Args:
            context: Business every operation is scoped to.
            store: Port persisting ledger records.
            accumulator: Accumulator applying balance effects.
            cache: Report cache invalidated after every mutation.
            locks: Shared per-business lock registry.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._context = context
        self._store = store
        self._accumulator = accumulator
        self._cache = cache
        self._locks = locks or BusinessLocks()
        self._logger = logger or get_app_logger()

    @property
    def context(self) -> BusinessContext:
        return self._context

    @property
    def business_id(self) -> str:
        return self._context.business_id

    def list(
        self,
        kind: RecordKind,
        date_range: DateRange | None = None,
    ) -> list[LedgerRecord]:
        """Return records ordered by date descending.

        Args:
            kind: Record variant to list.
            date_range: Optional inclusive date filter.

        Returns:
            list[LedgerRecord]: Records of the scoped business.
        """
        start_date = date_range.start_date if date_range else None
        end_date = date_range.end_date if date_range else None
        return self._store.fetch_records(
            kind,
            self.business_id,
            start_date=start_date,
            end_date=end_date,
        )

    def get(self, kind: RecordKind, record_id: str) -> LedgerRecord:
        """Return one record or raise NotFoundError."""
        record = self._store.fetch_record(kind, self.business_id, record_id)
        if record is None:
            raise NotFoundError(kind.value.lower(), record_id)
        return record

    def create(self, draft: LedgerDraft) -> LedgerRecord:
        """Store a new record and apply its balance effect."""
        draft = self._checked_draft(draft)
        with self._locks.for_business(self.business_id):
            record = self._store.insert_record(self.business_id, draft)
            try:
                self._accumulator.apply_create(
                    self.business_id,
                    record.kind,
                    record.amount,
                    record.payment_method,
                )
            finally:
                self._cache.invalidate(self.business_id)
        self._logger.info(
            f"Created {record.kind.value.lower()} {record.id} "
            f"for business={self.business_id}"
        )
        return record

    def update(
        self,
        kind: RecordKind,
        record_id: str,
        fields: dict,
    ) -> LedgerRecord:
        """Apply a partial update and move the balance effect accordingly."""
        validated = validate_update_fields(kind, fields)
        with self._locks.for_business(self.business_id):
            prior = self.get(kind, record_id)
            if not validated:
                return prior
            record = self._store.update_record(
                kind,
                self.business_id,
                record_id,
                validated,
            )
            if record is None:
                raise NotFoundError(kind.value.lower(), record_id)
            try:
                self._accumulator.apply_update(
                    self.business_id,
                    kind,
                    prior.amount,
                    prior.payment_method,
                    record.amount,
                    record.payment_method,
                )
            finally:
                self._cache.invalidate(self.business_id)
        self._logger.info(
            f"Updated {kind.value.lower()} {record_id} "
            f"for business={self.business_id}"
        )
        return record

    def delete(self, kind: RecordKind, record_id: str) -> bool:
        """Delete a record and reverse its balance effect."""
        with self._locks.for_business(self.business_id):
            prior = self.get(kind, record_id)
            if not self._store.delete_record(kind, self.business_id, record_id):
                raise NotFoundError(kind.value.lower(), record_id)
            try:
                self._accumulator.apply_delete(
                    self.business_id,
                    kind,
                    prior.amount,
                    prior.payment_method,
                )
            finally:
                self._cache.invalidate(self.business_id)
        self._logger.info(
            f"Deleted {kind.value.lower()} {record_id} "
            f"for business={self.business_id}"
        )
        return True

    @staticmethod
    def _checked_draft(draft: LedgerDraft) -> LedgerDraft:
        checked = replace(
            draft,
            date=parse_record_date(draft.date),
            amount=validate_amount(draft.amount),
            payment_method=parse_payment_method(draft.payment_method),
        )
        if isinstance(checked, ExpenseDraft):
            checked = replace(
                checked,
                category=parse_expense_category(checked.category),
            )
        return checked


__all__ = ["ScopedLedgerRepository"]
