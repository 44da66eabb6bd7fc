"""Domain services package."""

from .aggregation import (
    by_category,
    by_payment_method,
    daily_series,
    today_totals,
    totals,
)
from .balances import (
    BalanceDelta,
    apply_create,
    apply_delete,
    apply_update,
    balance_effect,
    derive_balances,
)
from .periods import RangePreset, resolve_date_range
from .validation import (
    build_expense_draft,
    build_sale_draft,
    validate_amount,
    validate_update_fields,
)

__all__ = [
    "by_category",
    "by_payment_method",
    "daily_series",
    "today_totals",
    "totals",
    "BalanceDelta",
    "apply_create",
    "apply_delete",
    "apply_update",
    "balance_effect",
    "derive_balances",
    "RangePreset",
    "resolve_date_range",
    "build_expense_draft",
    "build_sale_draft",
    "validate_amount",
    "validate_update_fields",
]
