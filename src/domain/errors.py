"""Domain errors raised by ledger operations."""


class LedgerError(Exception):
    """Base class for bookkeeping errors surfaced to callers."""


class ValidationError(LedgerError):
    """Raised when an input value violates a ledger constraint.

    Attributes:
        field: Name of the offending field.
        message: Human readable reason.
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class PersistenceError(LedgerError):
    """Raised when the underlying store is unreachable or rejects a write."""


class NotFoundError(LedgerError):
    """Raised when a record id no longer exists for the business."""

    def __init__(self, kind: str, record_id: str) -> None:
        super().__init__(f"{kind} not found: {record_id}")
        self.kind = kind
        self.record_id = record_id


class AuthorizationError(LedgerError):
    """Raised when no business can be resolved for the current identity."""


__all__ = [
    "LedgerError",
    "ValidationError",
    "PersistenceError",
    "NotFoundError",
    "AuthorizationError",
]
