"""Domain package for bookkeeping rules and core models."""

from .errors import (
    AuthorizationError,
    LedgerError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from .models import (
    Business,
    BusinessBalances,
    BusinessType,
    Expense,
    ExpenseCategory,
    PaymentMethod,
    PnLReport,
    RecordKind,
    Sale,
)
from .services import (
    by_category,
    by_payment_method,
    daily_series,
    derive_balances,
    resolve_date_range,
    today_totals,
    totals,
)

__all__ = [
    "AuthorizationError",
    "LedgerError",
    "NotFoundError",
    "PersistenceError",
    "ValidationError",
    "Business",
    "BusinessBalances",
    "BusinessType",
    "Expense",
    "ExpenseCategory",
    "PaymentMethod",
    "PnLReport",
    "RecordKind",
    "Sale",
    "by_category",
    "by_payment_method",
    "daily_series",
    "derive_balances",
    "resolve_date_range",
    "today_totals",
    "totals",
]
