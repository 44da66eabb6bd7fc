"""Pure presentation helpers for the Streamlit pages.

Nothing here performs IO: functions turn domain aggregates into rows that
Altair or ``st.dataframe`` can consume, and filter already loaded records.
"""

from collections.abc import Sequence
from decimal import Decimal

from src.domain.models.finance import DailyPoint
from src.domain.models.ledger import (
    Expense,
    ExpenseCategory,
    PaymentMethod,
    Sale,
)

ALL_OPTION = "All"


def format_currency(value: Decimal, symbol: str = "$") -> str:
    """Format an amount for display, keeping the sign before the symbol."""
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


def format_count(count: int, noun: str) -> str:
    """Return ``"1 sale"`` / ``"3 sales"`` style labels."""
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def daily_series_rows(
    points: Sequence[DailyPoint],
) -> list[dict[str, str | float]]:
    """Flatten a daily series into long-form rows for a grouped bar chart.

    Args:
        points: Daily points ordered oldest first.

    Returns:
        Rows with ``day``, ``series`` and ``amount`` keys, two per point.
    """
    rows: list[dict[str, str | float]] = []
    for point in points:
        day = point.date.isoformat()
        label = point.date.strftime("%a %d")
        rows.append(
            {
                "day": day,
                "label": label,
                "series": "Sales",
                "amount": float(point.sales_total),
            }
        )
        rows.append(
            {
                "day": day,
                "label": label,
                "series": "Expenses",
                "amount": float(point.expenses_total),
            }
        )
    return rows


def category_donut_rows(
    amounts: dict[ExpenseCategory, Decimal],
    symbol: str = "$",
) -> list[dict[str, str | float]]:
    """Prepare donut chart rows with shares of the total.

    Args:
        amounts: Expense totals keyed by category.
        symbol: Currency symbol used in labels.

    Returns:
        Rows sorted by amount descending; empty when there is nothing to plot.
    """
    total = sum(amounts.values(), start=Decimal("0"))
    if total <= 0:
        return []
    rows: list[dict[str, str | float]] = []
    for category, amount in sorted(
        amounts.items(),
        key=lambda item: item[1],
        reverse=True,
    ):
        share = (amount / total) * Decimal("100")
        rows.append(
            {
                "category": category.value.title(),
                "amount": float(amount),
                "amount_label": format_currency(amount, symbol),
                "share_label": f"{share:.1f}%",
            }
        )
    return rows


def _matches_method(record, payment_method: str) -> bool:
    if payment_method == ALL_OPTION:
        return True
    return record.payment_method is PaymentMethod(payment_method)


def filter_sales(
    sales: Sequence[Sale],
    query: str = "",
    payment_method: str = ALL_OPTION,
) -> list[Sale]:
    """Filter sales by description text and payment method."""
    query_lower = query.strip().lower()
    filtered = []
    for sale in sales:
        if not _matches_method(sale, payment_method):
            continue
        if query_lower and query_lower not in (sale.description or "").lower():
            continue
        filtered.append(sale)
    return filtered


def filter_expenses(
    expenses: Sequence[Expense],
    query: str = "",
    payment_method: str = ALL_OPTION,
    category: str = ALL_OPTION,
) -> list[Expense]:
    """Filter expenses by notes or category text, method and category."""
    query_lower = query.strip().lower()
    filtered = []
    for expense in expenses:
        if not _matches_method(expense, payment_method):
            continue
        if (category != ALL_OPTION
                and expense.category is not ExpenseCategory(category)):
            continue
        haystack = f"{expense.notes or ''} {expense.category.value}".lower()
        if query_lower and query_lower not in haystack:
            continue
        filtered.append(expense)
    return filtered


def sale_rows(sales: Sequence[Sale], symbol: str = "$") -> list[dict]:
    return [
        {
            "Date": sale.date.isoformat(),
            "Amount": format_currency(sale.amount, symbol),
            "Method": sale.payment_method.value.title(),
            "Description": sale.description or "-",
        }
        for sale in sales
    ]


def expense_rows(expenses: Sequence[Expense], symbol: str = "$") -> list[dict]:
    return [
        {
            "Date": expense.date.isoformat(),
            "Category": expense.category.value.title(),
            "Amount": format_currency(expense.amount, symbol),
            "Method": expense.payment_method.value.title(),
            "Notes": expense.notes or "-",
        }
        for expense in expenses
    ]


__all__ = [
    "ALL_OPTION",
    "format_currency",
    "format_count",
    "daily_series_rows",
    "category_donut_rows",
    "filter_sales",
    "filter_expenses",
    "sale_rows",
    "expense_rows",
]
