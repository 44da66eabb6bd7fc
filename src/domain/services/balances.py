"""Balance rules linking ledger records to business balances.

A sale increases the balance of its payment method by its amount and an
expense decreases it. Updates reverse the old effect before applying the new
one, deletes reverse the effect.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from src.domain.models.ledger import (
    BusinessBalances,
    Expense,
    PaymentMethod,
    RecordKind,
    Sale,
)


@dataclass(frozen=True)
class BalanceDelta:
    """Signed change applied to the cash and bank balances."""

    cash: Decimal = Decimal("0")
    bank: Decimal = Decimal("0")

    def __add__(self, other: "BalanceDelta") -> "BalanceDelta":
        return BalanceDelta(cash=self.cash + other.cash, bank=self.bank + other.bank)

    def __neg__(self) -> "BalanceDelta":
        return BalanceDelta(cash=-self.cash, bank=-self.bank)

    @property
    def is_zero(self) -> bool:
        return self.cash == 0 and self.bank == 0


def balance_effect(
    kind: RecordKind,
    amount: Decimal,
    payment_method: PaymentMethod,
) -> BalanceDelta:
    """Return the balance change produced by one ledger record."""
    signed = amount if kind is RecordKind.SALE else -amount
    if payment_method is PaymentMethod.CASH:
        return BalanceDelta(cash=signed)
    return BalanceDelta(bank=signed)


def create_delta(
    kind: RecordKind,
    amount: Decimal,
    payment_method: PaymentMethod,
) -> BalanceDelta:
    return balance_effect(kind, amount, payment_method)


def update_delta(
    kind: RecordKind,
    old_amount: Decimal,
    old_method: PaymentMethod,
    new_amount: Decimal,
    new_method: PaymentMethod,
) -> BalanceDelta:
    """Return the change that reverses the old record and applies the new."""
    return -balance_effect(kind, old_amount, old_method) + balance_effect(
        kind, new_amount, new_method
    )


def delete_delta(
    kind: RecordKind,
    amount: Decimal,
    payment_method: PaymentMethod,
) -> BalanceDelta:
    return -balance_effect(kind, amount, payment_method)


def apply_delta(balances: BusinessBalances, delta: BalanceDelta) -> BusinessBalances:
    """Return balances shifted by a delta."""
    return BusinessBalances(
        cash_balance=balances.cash_balance + delta.cash,
        bank_balance=balances.bank_balance + delta.bank,
    )


def apply_create(
    balances: BusinessBalances,
    kind: RecordKind,
    amount: Decimal,
    payment_method: PaymentMethod,
) -> BusinessBalances:
    return apply_delta(balances, create_delta(kind, amount, payment_method))


def apply_update(
    balances: BusinessBalances,
    kind: RecordKind,
    old_amount: Decimal,
    old_method: PaymentMethod,
    new_amount: Decimal,
    new_method: PaymentMethod,
) -> BusinessBalances:
    return apply_delta(
        balances,
        update_delta(kind, old_amount, old_method, new_amount, new_method),
    )


def apply_delete(
    balances: BusinessBalances,
    kind: RecordKind,
    amount: Decimal,
    payment_method: PaymentMethod,
) -> BusinessBalances:
    return apply_delta(balances, delete_delta(kind, amount, payment_method))


def derive_balances(
    sales: Iterable[Sale],
    expenses: Iterable[Expense],
) -> BusinessBalances:
    """Recompute balances from a full ledger history.

    Args:
        sales: Every sale recorded for the business.
        expenses: Every expense recorded for the business.

    Returns:
        BusinessBalances: Balances implied by the ledger alone.
    """
    delta = BalanceDelta()
    for record in (*sales, *expenses):
        delta = delta + balance_effect(
            record.kind, record.amount, record.payment_method
        )
    return apply_delta(BusinessBalances(), delta)


__all__ = [
    "BalanceDelta",
    "balance_effect",
    "create_delta",
    "update_delta",
    "delete_delta",
    "apply_delta",
    "apply_create",
    "apply_update",
    "apply_delete",
    "derive_balances",
]
