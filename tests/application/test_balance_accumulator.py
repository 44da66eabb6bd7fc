"""Tests for the BusinessBalanceAccumulator."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

from src.application.use_cases.balance_accumulator import (
    BusinessBalanceAccumulator,
)
from src.domain.models.ledger import (
    BusinessBalances,
    Expense,
    ExpenseCategory,
    PaymentMethod,
    RecordKind,
    Sale,
)


def _build(repository=None, store=None):
    repository = repository or MagicMock()
    store = store or MagicMock()
    logger = MagicMock()
    accumulator = BusinessBalanceAccumulator(
        business_repository=repository,
        ledger_store=store,
        logger=logger,
    )
    return accumulator, repository, store, logger


def test_apply_create_adjusts_matching_channel() -> None:
    accumulator, repository, _store, _logger = _build()
    repository.adjust_balances.return_value = BusinessBalances(
        cash_balance=Decimal("-12")
    )

    result = accumulator.apply_create(
        "biz-1", RecordKind.EXPENSE, Decimal("12"), PaymentMethod.CASH
    )

    repository.adjust_balances.assert_called_once_with(
        "biz-1",
        cash_delta=Decimal("-12"),
        bank_delta=Decimal("0"),
    )
    assert result.cash_balance == Decimal("-12")


def test_apply_update_reverses_old_and_applies_new() -> None:
    accumulator, repository, _store, _logger = _build()

    accumulator.apply_update(
        "biz-1",
        RecordKind.SALE,
        Decimal("30"),
        PaymentMethod.CASH,
        Decimal("45"),
        PaymentMethod.BANK,
    )

    repository.adjust_balances.assert_called_once_with(
        "biz-1",
        cash_delta=Decimal("-30"),
        bank_delta=Decimal("45"),
    )


def test_apply_update_without_change_skips_write() -> None:
    accumulator, repository, _store, _logger = _build()
    repository.fetch_balances.return_value = BusinessBalances()

    result = accumulator.apply_update(
        "biz-1",
        RecordKind.SALE,
        Decimal("30"),
        PaymentMethod.CASH,
        Decimal("30"),
        PaymentMethod.CASH,
    )

    repository.adjust_balances.assert_not_called()
    assert result == BusinessBalances()


def test_apply_delete_reverses_effect() -> None:
    accumulator, repository, _store, _logger = _build()

    accumulator.apply_delete(
        "biz-1", RecordKind.EXPENSE, Decimal("8"), PaymentMethod.BANK
    )

    repository.adjust_balances.assert_called_once_with(
        "biz-1",
        cash_delta=Decimal("0"),
        bank_delta=Decimal("8"),
    )


def test_reconcile_overwrites_drifted_balances_and_warns() -> None:
    store = MagicMock()
    store.fetch_records.side_effect = [
        [
            Sale(
                id="s1",
                business_id="biz-1",
                date=date(2024, 6, 1),
                amount=Decimal("100"),
                payment_method=PaymentMethod.CASH,
            )
        ],
        [
            Expense(
                id="e1",
                business_id="biz-1",
                date=date(2024, 6, 2),
                category=ExpenseCategory.STAFF,
                amount=Decimal("40"),
                payment_method=PaymentMethod.BANK,
            )
        ],
    ]
    repository = MagicMock()
    repository.fetch_balances.return_value = BusinessBalances(
        cash_balance=Decimal("90"),
        bank_balance=Decimal("-40"),
    )
    accumulator, _repository, _store, logger = _build(repository, store)

    result = accumulator.reconcile("biz-1")

    expected = BusinessBalances(
        cash_balance=Decimal("100"),
        bank_balance=Decimal("-40"),
    )
    repository.overwrite_balances.assert_called_once_with("biz-1", expected)
    assert result.derived == expected
    assert result.drift.cash == Decimal("-10")
    assert result.was_consistent is False
    logger.warning.assert_called_once()


def test_reconcile_of_consistent_balances_logs_info() -> None:
    store = MagicMock()
    store.fetch_records.return_value = []
    repository = MagicMock()
    repository.fetch_balances.return_value = BusinessBalances()
    accumulator, _repository, _store, logger = _build(repository, store)

    result = accumulator.reconcile("biz-1")

    assert result.was_consistent is True
    logger.info.assert_called_once()
    logger.warning.assert_not_called()
