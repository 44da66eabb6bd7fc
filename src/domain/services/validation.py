"""Validation helpers for ledger input values.

Every helper raises ``ValidationError`` naming the offending field so callers
can reject input before any persistence or balance call happens.
"""

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum

from src.domain.errors import ValidationError
from src.domain.models.ledger import (
    BusinessType,
    ExpenseCategory,
    ExpenseDraft,
    PaymentMethod,
    RecordKind,
    SaleDraft,
)

_CENT = Decimal("0.01")
# Largest value a Numeric(15, 2) column holds.
_MAX_AMOUNT = Decimal("9999999999999.99")
_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")
_IMMUTABLE_FIELDS = frozenset({"id", "business_id", "created_at", "updated_at"})
_SALE_FIELDS = frozenset({"date", "amount", "payment_method", "description"})
_EXPENSE_FIELDS = frozenset(
    {"date", "category", "amount", "payment_method", "notes"}
)


def validate_amount(value, field: str = "amount") -> Decimal:
    """Return the amount as a strictly positive Decimal.

    Args:
        value: Decimal, int, float or numeric string.
        field: Field name reported on failure.

    Returns:
        Decimal: Validated amount.

    Raises:
        ValidationError: If the value is not a finite number above zero
            that fits a Numeric(15, 2) column.
    """
    if value is None or isinstance(value, bool):
        raise ValidationError(field, "amount is required")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(field, f"not a number: {value!r}") from None
    if not amount.is_finite():
        raise ValidationError(field, "amount must be finite")
    if amount <= 0:
        raise ValidationError(field, "amount must be greater than zero")
    if amount > _MAX_AMOUNT:
        raise ValidationError(field, f"amount must not exceed {_MAX_AMOUNT}")
    if amount != amount.quantize(_CENT):
        raise ValidationError(field, "amount has more than two decimal places")
    return amount


def parse_record_date(value, field: str = "date") -> date:
    """Return a calendar date from a date object or ISO string."""
    if isinstance(value, datetime):
        raise ValidationError(field, "date must not carry a time component")
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValidationError(field, f"expected YYYY-MM-DD, got {value!r}")
    candidate = value.strip()
    if not _ISO_DATE.fullmatch(candidate):
        raise ValidationError(field, f"expected YYYY-MM-DD, got {value!r}")
    try:
        return date.fromisoformat(candidate)
    except ValueError:
        raise ValidationError(field, f"invalid calendar date: {value!r}") from None


def _parse_enum(enum_cls: type[Enum], value, field: str):
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value.strip().upper())
        except ValueError:
            pass
    allowed = ", ".join(member.value for member in enum_cls)
    raise ValidationError(field, f"{value!r} is not one of {allowed}")


def parse_payment_method(value, field: str = "payment_method") -> PaymentMethod:
    """Return the PaymentMethod matching a wire value."""
    return _parse_enum(PaymentMethod, value, field)


def parse_expense_category(value, field: str = "category") -> ExpenseCategory:
    """Return the ExpenseCategory matching a wire value."""
    return _parse_enum(ExpenseCategory, value, field)


def parse_business_type(value, field: str = "type") -> BusinessType:
    """Return the BusinessType matching a wire value."""
    return _parse_enum(BusinessType, value, field)


def clean_text(value, field: str) -> str | None:
    """Strip optional free text; blank values become None."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(field, "expected text")
    cleaned = value.strip()
    return cleaned or None


def require_name(value, field: str = "name") -> str:
    """Return a non-blank display name."""
    cleaned = clean_text(value, field)
    if not cleaned:
        raise ValidationError(field, "name is required")
    return cleaned


def build_sale_draft(
    date_value,
    amount,
    payment_method,
    description=None,
) -> SaleDraft:
    """Validate raw sale input and return a draft ready to persist."""
    return SaleDraft(
        date=parse_record_date(date_value),
        amount=validate_amount(amount),
        payment_method=parse_payment_method(payment_method),
        description=clean_text(description, "description"),
    )


def build_expense_draft(
    date_value,
    category,
    amount,
    payment_method,
    notes=None,
) -> ExpenseDraft:
    """Validate raw expense input and return a draft ready to persist."""
    return ExpenseDraft(
        date=parse_record_date(date_value),
        category=parse_expense_category(category),
        amount=validate_amount(amount),
        payment_method=parse_payment_method(payment_method),
        notes=clean_text(notes, "notes"),
    )


def validate_update_fields(kind: RecordKind, fields: dict) -> dict:
    """Validate a partial update for a ledger record.

    Args:
        kind: Record variant being updated.
        fields: Mapping of field name to raw value.

    Returns:
        dict: Mapping of field name to validated value.

    Raises:
        ValidationError: On unknown, immutable or invalid fields.
    """
    allowed = _SALE_FIELDS if kind is RecordKind.SALE else _EXPENSE_FIELDS
    validated: dict = {}
    for name, value in fields.items():
        if name in _IMMUTABLE_FIELDS:
            raise ValidationError(name, "field cannot be changed")
        if name not in allowed:
            raise ValidationError(
                name, f"unknown field for {kind.value.lower()}"
            )
        if name == "date":
            validated[name] = parse_record_date(value)
        elif name == "amount":
            validated[name] = validate_amount(value)
        elif name == "payment_method":
            validated[name] = parse_payment_method(value)
        elif name == "category":
            validated[name] = parse_expense_category(value)
        else:
            validated[name] = clean_text(value, name)
    return validated


__all__ = [
    "validate_amount",
    "parse_record_date",
    "parse_payment_method",
    "parse_expense_category",
    "parse_business_type",
    "clean_text",
    "require_name",
    "build_sale_draft",
    "build_expense_draft",
    "validate_update_fields",
]
