"""Domain services reducing ledger records into report aggregates.

All functions are pure: they operate on records already fetched and
filtered for one business and return new values without side effects.
"""

from collections.abc import Iterable
from datetime import date, timedelta
from decimal import Decimal

from src.domain.errors import ValidationError
from src.domain.models.finance import (
    DailyPoint,
    MethodBreakdown,
    PeriodTotals,
    TodayTotals,
)
from src.domain.models.ledger import (
    Expense,
    ExpenseCategory,
    LedgerRecord,
    PaymentMethod,
    Sale,
)
from src.utils.decimal_utils import sum_decimals


def totals(
    sales: Iterable[Sale],
    expenses: Iterable[Expense],
) -> PeriodTotals:
    """Compute total sales, total expenses and net profit.

    Args:
        sales: Sales for the period.
        expenses: Expenses for the period.

    Returns:
        PeriodTotals: Totals with ``net_profit = total_sales - total_expenses``.
    """
    total_sales = sum_decimals(sale.amount for sale in sales)
    total_expenses = sum_decimals(expense.amount for expense in expenses)
    return PeriodTotals(
        total_sales=total_sales,
        total_expenses=total_expenses,
        net_profit=total_sales - total_expenses,
    )


def by_payment_method(records: Iterable[LedgerRecord]) -> MethodBreakdown:
    """Sum amounts per payment method; missing methods report zero."""
    cash = Decimal("0")
    bank = Decimal("0")
    for record in records:
        if record.payment_method is PaymentMethod.CASH:
            cash += record.amount
        else:
            bank += record.amount
    return MethodBreakdown(cash=cash, bank=bank)


def by_category(expenses: Iterable[Expense]) -> dict[ExpenseCategory, Decimal]:
    """Sum expense amounts per category.

    Only categories present in the input appear in the result. Keys follow
    the declaration order of ``ExpenseCategory``.
    """
    sums: dict[ExpenseCategory, Decimal] = {}
    for expense in expenses:
        sums[expense.category] = (
            sums.get(expense.category, Decimal("0")) + expense.amount
        )
    return {
        category: sums[category]
        for category in ExpenseCategory
        if category in sums
    }


def daily_series(
    sales: Iterable[Sale],
    expenses: Iterable[Expense],
    day_count: int,
    anchor_date: date,
) -> list[DailyPoint]:
    """Bucket sales and expenses into consecutive calendar days.

    Args:
        sales: Sales to bucket.
        expenses: Expenses to bucket.
        day_count: Number of days in the series, at least one.
        anchor_date: Last day of the series (inclusive).

    Returns:
        list[DailyPoint]: Exactly ``day_count`` points, oldest first. Days
        without records report zero totals.

    Raises:
        ValidationError: If ``day_count`` is lower than one.
    """
    if day_count < 1:
        raise ValidationError("day_count", "series needs at least one day")
    days = [
        anchor_date - timedelta(days=offset)
        for offset in range(day_count - 1, -1, -1)
    ]
    sales_by_day = {day: Decimal("0") for day in days}
    expenses_by_day = {day: Decimal("0") for day in days}
    for sale in sales:
        if sale.date in sales_by_day:
            sales_by_day[sale.date] += sale.amount
    for expense in expenses:
        if expense.date in expenses_by_day:
            expenses_by_day[expense.date] += expense.amount
    return [
        DailyPoint(
            date=day,
            sales_total=sales_by_day[day],
            expenses_total=expenses_by_day[day],
        )
        for day in days
    ]


def today_totals(records: Iterable[LedgerRecord], today: date) -> TodayTotals:
    """Sum and count the records dated exactly ``today``."""
    matching = [record for record in records if record.date == today]
    return TodayTotals(
        amount=sum_decimals(record.amount for record in matching),
        count=len(matching),
    )


__all__ = [
    "totals",
    "by_payment_method",
    "by_category",
    "daily_series",
    "today_totals",
]
