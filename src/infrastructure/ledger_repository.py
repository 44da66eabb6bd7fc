"""SQLAlchemy-backed store for sale and expense records."""

from datetime import date, datetime, timezone
from enum import Enum
from uuid import uuid4

from sqlalchemy import Table, delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.ledger_store import LedgerStorePort
from src.domain.errors import PersistenceError
from src.domain.models.ledger import (
    Expense,
    ExpenseCategory,
    ExpenseDraft,
    LedgerDraft,
    LedgerRecord,
    PaymentMethod,
    RecordKind,
    Sale,
)
from src.infrastructure.schema import expenses, sales
from src.utils.decimal_utils import coerce_decimal


def _table_for(kind: RecordKind) -> Table:
    return sales if kind is RecordKind.SALE else expenses


def _row_to_record(kind: RecordKind, row) -> LedgerRecord:
    if kind is RecordKind.SALE:
        return Sale(
            id=row.id,
            business_id=row.business_id,
            date=row.date,
            amount=coerce_decimal(row.amount),
            payment_method=PaymentMethod(row.payment_method),
            description=row.description,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
    return Expense(
        id=row.id,
        business_id=row.business_id,
        date=row.date,
        category=ExpenseCategory(row.category),
        amount=coerce_decimal(row.amount),
        payment_method=PaymentMethod(row.payment_method),
        notes=row.notes,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _draft_values(draft: LedgerDraft) -> dict:
    values = {
        "date": draft.date,
        "amount": draft.amount,
        "payment_method": draft.payment_method.value,
    }
    if isinstance(draft, ExpenseDraft):
        values["category"] = draft.category.value
        values["notes"] = draft.notes
    else:
        values["description"] = draft.description
    return values


def _column_values(fields: dict) -> dict:
    return {
        name: value.value if isinstance(value, Enum) else value
        for name, value in fields.items()
    }


class SqlAlchemyLedgerStore(LedgerStorePort):
    """Ledger store backed by SQLAlchemy Core tables."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the store.

        Args:
            db_port: Port providing access to the ledger engine.
        """
        self._db_port = db_port

    def fetch_records(
        self,
        kind: RecordKind,
        business_id: str,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[LedgerRecord]:
        table = _table_for(kind)
        query = select(table).where(table.c.business_id == business_id)
        if start_date:
            query = query.where(table.c.date >= start_date)
        if end_date:
            query = query.where(table.c.date <= end_date)
        query = query.order_by(table.c.date.desc(), table.c.created_at.desc())
        try:
            engine = self._db_port.get_ledger_engine()
            with engine.connect() as conn:
                rows = conn.execute(query).all()
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"Failed to fetch {kind.value.lower()} records"
            ) from exc
        return [_row_to_record(kind, row) for row in rows]

    def fetch_record(
        self,
        kind: RecordKind,
        business_id: str,
        record_id: str,
    ) -> LedgerRecord | None:
        table = _table_for(kind)
        query = select(table).where(
            table.c.id == record_id,
            table.c.business_id == business_id,
        )
        try:
            engine = self._db_port.get_ledger_engine()
            with engine.connect() as conn:
                row = conn.execute(query).first()
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"Failed to fetch {kind.value.lower()} {record_id}"
            ) from exc
        return _row_to_record(kind, row) if row else None

    def insert_record(
        self,
        business_id: str,
        draft: LedgerDraft,
    ) -> LedgerRecord:
        table = _table_for(draft.kind)
        now = datetime.now(timezone.utc)
        values = {
            "id": str(uuid4()),
            "business_id": business_id,
            "created_at": now,
            "updated_at": now,
            **_draft_values(draft),
        }
        try:
            engine = self._db_port.get_ledger_engine()
            with engine.begin() as conn:
                conn.execute(insert(table).values(**values))
                row = conn.execute(
                    select(table).where(table.c.id == values["id"])
                ).first()
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"Failed to insert {draft.kind.value.lower()}"
            ) from exc
        return _row_to_record(draft.kind, row)

    def update_record(
        self,
        kind: RecordKind,
        business_id: str,
        record_id: str,
        fields: dict,
    ) -> LedgerRecord | None:
        table = _table_for(kind)
        values = _column_values(fields)
        values["updated_at"] = datetime.now(timezone.utc)
        statement = (
            update(table)
            .where(table.c.id == record_id, table.c.business_id == business_id)
            .values(**values)
        )
        try:
            engine = self._db_port.get_ledger_engine()
            with engine.begin() as conn:
                result = conn.execute(statement)
                if result.rowcount == 0:
                    return None
                row = conn.execute(
                    select(table).where(table.c.id == record_id)
                ).first()
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"Failed to update {kind.value.lower()} {record_id}"
            ) from exc
        return _row_to_record(kind, row)

    def delete_record(
        self,
        kind: RecordKind,
        business_id: str,
        record_id: str,
    ) -> bool:
        table = _table_for(kind)
        statement = delete(table).where(
            table.c.id == record_id,
            table.c.business_id == business_id,
        )
        try:
            engine = self._db_port.get_ledger_engine()
            with engine.begin() as conn:
                result = conn.execute(statement)
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"Failed to delete {kind.value.lower()} {record_id}"
            ) from exc
        return result.rowcount > 0


__all__ = ["SqlAlchemyLedgerStore"]
