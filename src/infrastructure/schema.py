"""Table definitions of the ledger database."""

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
)
from sqlalchemy.engine import Engine

metadata = MetaData()

businesses = Table(
    "businesses",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("owner_id", String(64), nullable=False, index=True),
    Column("name", String(200), nullable=False),
    Column("type", String(16), nullable=False),
    Column("cash_balance", Numeric(15, 2), nullable=False, default=0),
    Column("bank_balance", Numeric(15, 2), nullable=False, default=0),
    Column("subscription_status", String(16), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)

sales = Table(
    "sales",
    metadata,
    Column("id", String(36), primary_key=True),
    Column(
        "business_id",
        String(36),
        ForeignKey("businesses.id"),
        nullable=False,
    ),
    Column("date", Date, nullable=False),
    Column("amount", Numeric(15, 2), nullable=False),
    Column("payment_method", String(8), nullable=False),
    Column("description", Text, nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)

expenses = Table(
    "expenses",
    metadata,
    Column("id", String(36), primary_key=True),
    Column(
        "business_id",
        String(36),
        ForeignKey("businesses.id"),
        nullable=False,
    ),
    Column("date", Date, nullable=False),
    Column("category", String(16), nullable=False),
    Column("amount", Numeric(15, 2), nullable=False),
    Column("payment_method", String(8), nullable=False),
    Column("notes", Text, nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)

Index("ix_sales_business_date", sales.c.business_id, sales.c.date)
Index("ix_expenses_business_date", expenses.c.business_id, expenses.c.date)


def create_schema(engine: Engine) -> None:
    """Create missing tables and indexes."""
    metadata.create_all(engine)


__all__ = ["metadata", "businesses", "sales", "expenses", "create_schema"]
