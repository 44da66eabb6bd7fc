"""Explicit success/failure results returned to callers."""

from dataclasses import dataclass
from typing import Generic, TypeVar

from src.domain.errors import LedgerError

T = TypeVar("T")


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Outcome of a caller-facing operation.

    Attributes:
        value: Value produced on success.
        error: Error raised on failure.
    """

    value: T | None = None
    error: LedgerError | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @classmethod
    def ok(cls, value: T | None = None) -> "OperationResult[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, error: LedgerError) -> "OperationResult[T]":
        return cls(error=error)


__all__ = ["OperationResult"]
