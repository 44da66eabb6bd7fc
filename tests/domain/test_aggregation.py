"""Tests for report aggregation functions."""

from datetime import date
from decimal import Decimal

import pytest

from src.domain.errors import ValidationError
from src.domain.models.finance import DailyPoint, MethodBreakdown, PeriodTotals
from src.domain.models.ledger import (
    Expense,
    ExpenseCategory,
    PaymentMethod,
    Sale,
)
from src.domain.services.aggregation import (
    by_category,
    by_payment_method,
    daily_series,
    today_totals,
    totals,
)


def _sale(amount: str, method=PaymentMethod.CASH, day=date(2024, 6, 3)) -> Sale:
    return Sale(
        id=f"sale-{amount}-{day}",
        business_id="b1",
        date=day,
        amount=Decimal(amount),
        payment_method=method,
    )


def _expense(
    amount: str,
    category=ExpenseCategory.FOOD,
    method=PaymentMethod.CASH,
    day=date(2024, 6, 3),
) -> Expense:
    return Expense(
        id=f"expense-{amount}-{day}",
        business_id="b1",
        date=day,
        category=category,
        amount=Decimal(amount),
        payment_method=method,
    )


def test_totals_and_method_breakdown() -> None:
    sales = [_sale("60"), _sale("40", PaymentMethod.BANK)]
    expenses = [_expense("20")]

    result = totals(sales, expenses)

    assert result == PeriodTotals(
        total_sales=Decimal("100"),
        total_expenses=Decimal("20"),
        net_profit=Decimal("80"),
    )
    assert by_payment_method(sales) == MethodBreakdown(
        cash=Decimal("60"),
        bank=Decimal("40"),
    )


def test_totals_of_empty_collections_are_zero() -> None:
    result = totals([], [])

    assert result.total_sales == 0
    assert result.total_expenses == 0
    assert result.net_profit == 0


def test_net_profit_can_be_negative() -> None:
    result = totals([_sale("10")], [_expense("25.50")])

    assert result.net_profit == Decimal("-15.50")


def test_by_payment_method_reports_zero_for_missing_method() -> None:
    breakdown = by_payment_method([_sale("5", PaymentMethod.BANK)])

    assert breakdown.cash == Decimal("0")
    assert breakdown.bank == Decimal("5")
    assert breakdown.total == Decimal("5")


def test_by_category_contains_only_present_categories() -> None:
    expenses = [
        _expense("15", ExpenseCategory.RENT),
        _expense("5", ExpenseCategory.FOOD),
        _expense("7", ExpenseCategory.RENT),
    ]

    result = by_category(expenses)

    assert list(result) == [ExpenseCategory.FOOD, ExpenseCategory.RENT]
    assert result[ExpenseCategory.RENT] == Decimal("22")
    assert sum(result.values()) == totals([], expenses).total_expenses


def test_daily_series_fills_missing_days_with_zero() -> None:
    sales = [_sale("10", day=date(2024, 6, 2))]

    series = daily_series(sales, [], 3, date(2024, 6, 3))

    assert series == [
        DailyPoint(date(2024, 6, 1), Decimal("0"), Decimal("0")),
        DailyPoint(date(2024, 6, 2), Decimal("10"), Decimal("0")),
        DailyPoint(date(2024, 6, 3), Decimal("0"), Decimal("0")),
    ]


@pytest.mark.parametrize("day_count", [1, 7, 31])
def test_daily_series_length_matches_day_count(day_count: int) -> None:
    series = daily_series([], [], day_count, date(2024, 3, 1))

    assert len(series) == day_count
    assert series[-1].date == date(2024, 3, 1)
    assert all(point.sales_total == 0 for point in series)


def test_daily_series_ignores_records_outside_window() -> None:
    expenses = [
        _expense("3", day=date(2024, 6, 3)),
        _expense("9", day=date(2024, 5, 1)),
    ]

    series = daily_series([], expenses, 2, date(2024, 6, 3))

    assert [point.expenses_total for point in series] == [
        Decimal("0"),
        Decimal("3"),
    ]


def test_daily_series_rejects_non_positive_day_count() -> None:
    with pytest.raises(ValidationError) as excinfo:
        daily_series([], [], 0, date(2024, 6, 3))

    assert excinfo.value.field == "day_count"


def test_today_totals_counts_matching_records() -> None:
    sales = [
        _sale("10"),
        _sale("2.5"),
        _sale("99", day=date(2024, 6, 2)),
    ]

    result = today_totals(sales, date(2024, 6, 3))

    assert result.amount == Decimal("12.5")
    assert result.count == 2


def test_results_do_not_depend_on_record_order() -> None:
    today = date(2024, 6, 3)
    sales = [
        _sale("10", day=today),
        _sale("7.25", PaymentMethod.BANK, day=date(2024, 6, 1)),
        _sale("3", day=date(2024, 6, 2)),
        _sale("40", PaymentMethod.BANK, day=today),
    ]
    expenses = [
        _expense("12", ExpenseCategory.RENT, PaymentMethod.BANK, today),
        _expense("4.5", ExpenseCategory.FOOD, day=date(2024, 6, 2)),
        _expense("6", ExpenseCategory.ELECTRICITY, day=date(2024, 6, 1)),
    ]

    def summarize(sale_list, expense_list):
        return (
            totals(sale_list, expense_list),
            by_payment_method(sale_list),
            by_payment_method(expense_list),
            list(by_category(expense_list).items()),
            daily_series(sale_list, expense_list, 3, today),
            today_totals(sale_list, today),
        )

    expected = summarize(sales, expenses)

    assert summarize(sales[::-1], expenses[::-1]) == expected
    assert summarize(sales[2:] + sales[:2], expenses[1:] + expenses[:1]) == (
        expected
    )
