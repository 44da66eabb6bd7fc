"""Tests for the balance rules."""

from datetime import date
from decimal import Decimal

from src.domain.models.ledger import (
    BusinessBalances,
    Expense,
    ExpenseCategory,
    PaymentMethod,
    RecordKind,
    Sale,
)
from src.domain.services.balances import (
    BalanceDelta,
    apply_create,
    apply_delete,
    apply_update,
    balance_effect,
    derive_balances,
    update_delta,
)

CASH = PaymentMethod.CASH
BANK = PaymentMethod.BANK


def test_balance_effect_signs_by_kind_and_method() -> None:
    assert balance_effect(RecordKind.SALE, Decimal("10"), CASH) == BalanceDelta(
        cash=Decimal("10")
    )
    assert balance_effect(
        RecordKind.EXPENSE, Decimal("4"), BANK
    ) == BalanceDelta(bank=Decimal("-4"))


def test_ledger_sequence_keeps_balances_consistent() -> None:
    """Sale, expense, expense update and sale delete end at cash=0/bank=-50."""
    balances = BusinessBalances()

    balances = apply_create(balances, RecordKind.SALE, Decimal("100"), CASH)
    assert balances.cash_balance == Decimal("100")

    balances = apply_create(balances, RecordKind.EXPENSE, Decimal("30"), BANK)
    assert balances.bank_balance == Decimal("-30")

    balances = apply_update(
        balances,
        RecordKind.EXPENSE,
        Decimal("30"),
        BANK,
        Decimal("50"),
        BANK,
    )
    assert balances.bank_balance == Decimal("-50")

    balances = apply_delete(balances, RecordKind.SALE, Decimal("100"), CASH)
    assert balances == BusinessBalances(
        cash_balance=Decimal("0"),
        bank_balance=Decimal("-50"),
    )


def test_update_moving_payment_method_shifts_between_balances() -> None:
    balances = BusinessBalances(cash_balance=Decimal("25"))

    moved = apply_update(
        balances,
        RecordKind.SALE,
        Decimal("25"),
        CASH,
        Decimal("25"),
        BANK,
    )

    assert moved.cash_balance == Decimal("0")
    assert moved.bank_balance == Decimal("25")


def test_identical_update_is_a_no_op() -> None:
    delta = update_delta(
        RecordKind.EXPENSE,
        Decimal("12.34"),
        CASH,
        Decimal("12.34"),
        CASH,
    )

    assert delta.is_zero


def test_derive_balances_matches_incremental_application() -> None:
    sales = [
        Sale(
            id="s1",
            business_id="b1",
            date=date(2024, 6, 1),
            amount=Decimal("60"),
            payment_method=CASH,
        ),
        Sale(
            id="s2",
            business_id="b1",
            date=date(2024, 6, 2),
            amount=Decimal("40"),
            payment_method=BANK,
        ),
    ]
    expenses = [
        Expense(
            id="e1",
            business_id="b1",
            date=date(2024, 6, 2),
            category=ExpenseCategory.FOOD,
            amount=Decimal("20"),
            payment_method=CASH,
        )
    ]

    derived = derive_balances(sales, expenses)

    incremental = BusinessBalances()
    for record in (*sales, *expenses):
        incremental = apply_create(
            incremental, record.kind, record.amount, record.payment_method
        )
    assert derived == incremental
    assert derived.cash_balance == Decimal("40")
    assert derived.bank_balance == Decimal("40")


def test_derive_balances_of_empty_ledger_is_zero() -> None:
    assert derive_balances([], []) == BusinessBalances()
