"""Explicit business context shared by ledger and report use cases."""

from dataclasses import dataclass
from threading import Lock, RLock

from src.domain.errors import AuthorizationError


@dataclass(frozen=True)
class BusinessContext:
    """Identity of the business every operation is scoped to.

    Attributes:
        business_id: Identifier of the business owning the ledger.
        owner_id: Identity that resolved the business.
    """

    business_id: str
    owner_id: str

    def __post_init__(self) -> None:
        if not self.business_id:
            raise AuthorizationError("No business resolved for this identity")


class BusinessLocks:
    """Registry of one re-entrant lock per business id.

    Balance-affecting mutations of a business hold its lock so they apply in
    submission order.
    """

    def __init__(self) -> None:
        self._guard = Lock()
        self._locks: dict[str, RLock] = {}

    def for_business(self, business_id: str) -> RLock:
        """Return the lock serializing mutations of a business."""
        with self._guard:
            lock = self._locks.get(business_id)
            if lock is None:
                lock = RLock()
                self._locks[business_id] = lock
            return lock


__all__ = ["BusinessContext", "BusinessLocks"]
