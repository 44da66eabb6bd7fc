"""SQLAlchemy-backed repository for businesses and their balances."""

from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

from sqlalchemy import insert, select, update
from sqlalchemy.exc import SQLAlchemyError

from src.application.ports.business_repository import BusinessRepositoryPort
from src.application.ports.database import DatabaseEnginePort
from src.domain.errors import NotFoundError, PersistenceError
from src.domain.models.ledger import (
    Business,
    BusinessBalances,
    BusinessType,
    SubscriptionStatus,
)
from src.infrastructure.schema import businesses
from src.utils.decimal_utils import coerce_decimal


def _row_to_business(row) -> Business:
    return Business(
        id=row.id,
        owner_id=row.owner_id,
        name=row.name,
        type=BusinessType(row.type),
        balances=BusinessBalances(
            cash_balance=coerce_decimal(row.cash_balance),
            bank_balance=coerce_decimal(row.bank_balance),
        ),
        subscription_status=SubscriptionStatus(row.subscription_status),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlAlchemyBusinessRepository(BusinessRepositoryPort):
    """Repository backed by SQLAlchemy for the businesses table."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
        """
        self._db_port = db_port

    def fetch_by_owner(self, owner_id: str) -> Business | None:
        query = (
            select(businesses)
            .where(businesses.c.owner_id == owner_id)
            .order_by(businesses.c.created_at)
            .limit(1)
        )
        row = self._fetch_one(query, f"owner={owner_id}")
        return _row_to_business(row) if row else None

    def fetch_by_id(self, business_id: str) -> Business | None:
        query = select(businesses).where(businesses.c.id == business_id)
        row = self._fetch_one(query, f"id={business_id}")
        return _row_to_business(row) if row else None

    def insert_business(
        self,
        owner_id: str,
        name: str,
        business_type: BusinessType,
    ) -> Business:
        now = datetime.now(timezone.utc)
        business_id = str(uuid4())
        values = {
            "id": business_id,
            "owner_id": owner_id,
            "name": name,
            "type": business_type.value,
            "cash_balance": Decimal("0"),
            "bank_balance": Decimal("0"),
            "subscription_status": SubscriptionStatus.TRIAL.value,
            "created_at": now,
            "updated_at": now,
        }
        try:
            engine = self._db_port.get_ledger_engine()
            with engine.begin() as conn:
                conn.execute(insert(businesses).values(**values))
                row = conn.execute(
                    select(businesses).where(businesses.c.id == business_id)
                ).first()
        except SQLAlchemyError as exc:
            raise PersistenceError("Failed to create business") from exc
        return _row_to_business(row)

    def update_profile(
        self,
        business_id: str,
        name: str,
        business_type: BusinessType,
    ) -> Business | None:
        statement = (
            update(businesses)
            .where(businesses.c.id == business_id)
            .values(
                name=name,
                type=business_type.value,
                updated_at=datetime.now(timezone.utc),
            )
        )
        try:
            engine = self._db_port.get_ledger_engine()
            with engine.begin() as conn:
                result = conn.execute(statement)
                if result.rowcount == 0:
                    return None
                row = conn.execute(
                    select(businesses).where(businesses.c.id == business_id)
                ).first()
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"Failed to update business {business_id}"
            ) from exc
        return _row_to_business(row)

    def fetch_balances(self, business_id: str) -> BusinessBalances:
        query = select(
            businesses.c.cash_balance,
            businesses.c.bank_balance,
        ).where(businesses.c.id == business_id)
        row = self._fetch_one(query, f"id={business_id}")
        if row is None:
            raise NotFoundError("business", business_id)
        return BusinessBalances(
            cash_balance=coerce_decimal(row.cash_balance),
            bank_balance=coerce_decimal(row.bank_balance),
        )

    def adjust_balances(
        self,
        business_id: str,
        cash_delta: Decimal,
        bank_delta: Decimal,
    ) -> BusinessBalances:
        """Shift both balances by a delta inside one transaction.

        The current row is read with ``FOR UPDATE`` where the dialect
        supports it, so concurrent writers see the committed value.
        """
        query = (
            select(businesses.c.cash_balance, businesses.c.bank_balance)
            .where(businesses.c.id == business_id)
            .with_for_update()
        )
        try:
            engine = self._db_port.get_ledger_engine()
            with engine.begin() as conn:
                row = conn.execute(query).first()
                if row is None:
                    raise NotFoundError("business", business_id)
                balances = BusinessBalances(
                    cash_balance=coerce_decimal(row.cash_balance) + cash_delta,
                    bank_balance=coerce_decimal(row.bank_balance) + bank_delta,
                )
                self._write_balances(conn, business_id, balances)
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"Failed to update balances of business {business_id}"
            ) from exc
        return balances

    def overwrite_balances(
        self,
        business_id: str,
        balances: BusinessBalances,
    ) -> BusinessBalances:
        try:
            engine = self._db_port.get_ledger_engine()
            with engine.begin() as conn:
                if not self._write_balances(conn, business_id, balances):
                    raise NotFoundError("business", business_id)
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"Failed to overwrite balances of business {business_id}"
            ) from exc
        return balances

    @staticmethod
    def _write_balances(conn, business_id: str, balances: BusinessBalances) -> bool:
        result = conn.execute(
            update(businesses)
            .where(businesses.c.id == business_id)
            .values(
                cash_balance=balances.cash_balance,
                bank_balance=balances.bank_balance,
                updated_at=datetime.now(timezone.utc),
            )
        )
        return result.rowcount > 0

    def _fetch_one(self, query, description: str):
        try:
            engine = self._db_port.get_ledger_engine()
            with engine.connect() as conn:
                return conn.execute(query).first()
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"Failed to fetch business {description}"
            ) from exc


__all__ = ["SqlAlchemyBusinessRepository"]
