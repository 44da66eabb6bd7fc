"""Domain models package."""

from .finance import (
    DailyPoint,
    DashboardSummary,
    DateRange,
    MethodBreakdown,
    PeriodTotals,
    PnLReport,
    TodayTotals,
)
from .ledger import (
    Business,
    BusinessBalances,
    BusinessType,
    Expense,
    ExpenseCategory,
    ExpenseDraft,
    LedgerDraft,
    LedgerRecord,
    PaymentMethod,
    RecordKind,
    Sale,
    SaleDraft,
    SubscriptionStatus,
)

__all__ = [
    "Business",
    "BusinessBalances",
    "BusinessType",
    "Expense",
    "ExpenseCategory",
    "ExpenseDraft",
    "LedgerDraft",
    "LedgerRecord",
    "PaymentMethod",
    "RecordKind",
    "Sale",
    "SaleDraft",
    "SubscriptionStatus",
    "DailyPoint",
    "DashboardSummary",
    "DateRange",
    "MethodBreakdown",
    "PeriodTotals",
    "PnLReport",
    "TodayTotals",
]
