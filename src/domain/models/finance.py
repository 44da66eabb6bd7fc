"""Domain models for period-scoped financial aggregates."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from src.domain.models.ledger import BusinessBalances, ExpenseCategory


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar date range.

    Attributes:
        start_date: First day included in the range.
        end_date: Last day included in the range.
    """

    start_date: date
    end_date: date

    def contains(self, day: date) -> bool:
        """Return True when the day falls inside the range."""
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class PeriodTotals:
    """Sales and expense totals for a period.

    Attributes:
        total_sales: Sum of sale amounts.
        total_expenses: Sum of expense amounts.
        net_profit: Sales minus expenses; may be negative.
    """

    total_sales: Decimal
    total_expenses: Decimal
    net_profit: Decimal


@dataclass(frozen=True)
class MethodBreakdown:
    """Amounts partitioned by payment method."""

    cash: Decimal
    bank: Decimal

    @property
    def total(self) -> Decimal:
        return self.cash + self.bank


@dataclass(frozen=True)
class DailyPoint:
    """Sales and expense totals for one calendar day."""

    date: date
    sales_total: Decimal
    expenses_total: Decimal


@dataclass(frozen=True)
class TodayTotals:
    """Amount and record count for a single day."""

    amount: Decimal
    count: int


@dataclass(frozen=True)
class PnLReport:
    """Profit-and-loss report for a resolved date range."""

    total_sales: Decimal
    total_expenses: Decimal
    net_profit: Decimal
    sales_by_method: MethodBreakdown
    expenses_by_method: MethodBreakdown
    expenses_by_category: dict[ExpenseCategory, Decimal]

    def to_dict(self) -> dict:
        """Return the report using the presentation wire keys."""
        return {
            "totalSales": self.total_sales,
            "totalExpenses": self.total_expenses,
            "netProfit": self.net_profit,
            "salesByMethod": {
                "cash": self.sales_by_method.cash,
                "bank": self.sales_by_method.bank,
            },
            "expensesByMethod": {
                "cash": self.expenses_by_method.cash,
                "bank": self.expenses_by_method.bank,
            },
            "expensesByCategory": {
                category.value: amount
                for category, amount in self.expenses_by_category.items()
            },
        }


@dataclass(frozen=True)
class DashboardSummary:
    """Values rendered on the dashboard landing page."""

    balances: BusinessBalances
    today_sales: TodayTotals
    today_expenses: TodayTotals
    period: DateRange
    period_totals: PeriodTotals
    daily_series: list[DailyPoint]
    expenses_by_category: dict[ExpenseCategory, Decimal]


__all__ = [
    "DateRange",
    "PeriodTotals",
    "MethodBreakdown",
    "DailyPoint",
    "TodayTotals",
    "PnLReport",
    "DashboardSummary",
]
