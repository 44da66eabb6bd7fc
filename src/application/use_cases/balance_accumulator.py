"""Use case maintaining the running cash and bank balances of a business."""

from dataclasses import dataclass
from decimal import Decimal

from src.application.ports.business_repository import BusinessRepositoryPort
from src.application.ports.ledger_store import LedgerStorePort
from src.domain.models.ledger import (
    BusinessBalances,
    PaymentMethod,
    RecordKind,
)
from src.domain.services.balances import (
    BalanceDelta,
    create_delta,
    delete_delta,
    derive_balances,
    update_delta,
)
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class ReconciliationResult:
    """Outcome of recomputing balances from the full ledger.

    Attributes:
        previous: Balances stored before reconciliation.
        derived: Balances implied by the ledger, now stored.
    """

    previous: BusinessBalances
    derived: BusinessBalances

    @property
    def drift(self) -> BalanceDelta:
        """Return stored minus derived balances before the repair."""
        return BalanceDelta(
            cash=self.previous.cash_balance - self.derived.cash_balance,
            bank=self.previous.bank_balance - self.derived.bank_balance,
        )

    @property
    def was_consistent(self) -> bool:
        return self.drift.is_zero


class BusinessBalanceAccumulator:
    """Apply ledger mutations to the stored balances of a business.

    Balances are maintained incrementally; ``reconcile`` recomputes them from
    a full ledger scan when the incremental state is suspected to drift.
    """

    def __init__(
        self,
        business_repository: BusinessRepositoryPort,
        ledger_store: LedgerStorePort,
        logger=None,
    ) -> None:
        """Initialize the accumulator.

        Args:
            business_repository: Port owning the business balances.
            ledger_store: Port used for full ledger scans on reconcile.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._business_repository = business_repository
        self._ledger_store = ledger_store
        self._logger = logger or get_app_logger()

    def current_balances(self, business_id: str) -> BusinessBalances:
        """Return the last committed balances."""
        return self._business_repository.fetch_balances(business_id)

    def apply_create(
        self,
        business_id: str,
        kind: RecordKind,
        amount: Decimal,
        payment_method: PaymentMethod,
    ) -> BusinessBalances:
        """Apply the effect of a new record and return the new balances."""
        return self._persist(
            business_id,
            create_delta(kind, amount, payment_method),
        )

    def apply_update(
        self,
        business_id: str,
        kind: RecordKind,
        old_amount: Decimal,
        old_method: PaymentMethod,
        new_amount: Decimal,
        new_method: PaymentMethod,
    ) -> BusinessBalances:
        """Reverse the old record effect, apply the new one, and persist."""
        return self._persist(
            business_id,
            update_delta(kind, old_amount, old_method, new_amount, new_method),
        )

    def apply_delete(
        self,
        business_id: str,
        kind: RecordKind,
        amount: Decimal,
        payment_method: PaymentMethod,
    ) -> BusinessBalances:
        """Reverse the effect of a deleted record and return the balances."""
        return self._persist(
            business_id,
            delete_delta(kind, amount, payment_method),
        )

    def reconcile(self, business_id: str) -> ReconciliationResult:
        """Recompute balances from every stored record and overwrite them.

        Args:
            business_id: Business whose balances are repaired.

        Returns:
            ReconciliationResult: Stored balances before and after repair.
        """
        sales = self._ledger_store.fetch_records(RecordKind.SALE, business_id)
        expenses = self._ledger_store.fetch_records(
            RecordKind.EXPENSE, business_id
        )
        derived = derive_balances(sales, expenses)
        previous = self._business_repository.fetch_balances(business_id)
        self._business_repository.overwrite_balances(business_id, derived)
        result = ReconciliationResult(previous=previous, derived=derived)
        if result.was_consistent:
            self._logger.info(
                f"Balances consistent for business={business_id} "
                f"({len(sales)} sales, {len(expenses)} expenses)"
            )
        else:
            self._logger.warning(
                f"Balance drift repaired for business={business_id}: "
                f"cash={result.drift.cash}, bank={result.drift.bank}"
            )
        return result

    def _persist(
        self,
        business_id: str,
        delta: BalanceDelta,
    ) -> BusinessBalances:
        if delta.is_zero:
            return self._business_repository.fetch_balances(business_id)
        balances = self._business_repository.adjust_balances(
            business_id,
            cash_delta=delta.cash,
            bank_delta=delta.bank,
        )
        self._logger.info(
            f"Balances updated for business={business_id}: "
            f"cash={balances.cash_balance}, bank={balances.bank_balance}"
        )
        return balances


__all__ = ["BusinessBalanceAccumulator", "ReconciliationResult"]
