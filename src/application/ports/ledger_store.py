"""Port for persisting sale and expense records."""

from datetime import date
from typing import Protocol

from src.domain.models.ledger import LedgerDraft, LedgerRecord, RecordKind


class LedgerStorePort(Protocol):
    """Port exposing CRUD access to ledger records of one business.

    Every method is scoped by ``business_id``; implementations raise
    ``PersistenceError`` when the store fails.
    """

    def fetch_records(
        self,
        kind: RecordKind,
        business_id: str,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[LedgerRecord]:
        """Return records in the inclusive range, newest date first."""

    def fetch_record(
        self,
        kind: RecordKind,
        business_id: str,
        record_id: str,
    ) -> LedgerRecord | None:
        """Return one record or None when it does not exist."""

    def insert_record(
        self,
        business_id: str,
        draft: LedgerDraft,
    ) -> LedgerRecord:
        """Insert a record with a generated id and timestamps."""

    def update_record(
        self,
        kind: RecordKind,
        business_id: str,
        record_id: str,
        fields: dict,
    ) -> LedgerRecord | None:
        """Apply a partial update; return None when the record is gone."""

    def delete_record(
        self,
        kind: RecordKind,
        business_id: str,
        record_id: str,
    ) -> bool:
        """Delete a record; return False when nothing was deleted."""


__all__ = ["LedgerStorePort"]
