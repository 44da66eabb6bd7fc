"""Tests for the GetDashboardSummaryUseCase."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

from src.application.use_cases.get_dashboard_summary import (
    GetDashboardSummaryUseCase,
)
from src.domain.errors import PersistenceError, ValidationError
from src.domain.models.finance import DateRange
from src.domain.models.ledger import (
    BusinessBalances,
    Expense,
    ExpenseCategory,
    PaymentMethod,
    RecordKind,
    Sale,
)

TODAY = date(2024, 6, 3)


def _sale(day: date, amount: str) -> Sale:
    return Sale(
        id=f"s-{day}-{amount}",
        business_id="biz-1",
        date=day,
        amount=Decimal(amount),
        payment_method=PaymentMethod.CASH,
    )


def test_execute_combines_balances_today_month_and_series() -> None:
    sales = [
        _sale(TODAY, "10"),
        _sale(TODAY, "5"),
        _sale(date(2024, 5, 30), "7"),
    ]
    expenses = [
        Expense(
            id="e1",
            business_id="biz-1",
            date=date(2024, 6, 1),
            category=ExpenseCategory.RENT,
            amount=Decimal("3"),
            payment_method=PaymentMethod.BANK,
        )
    ]
    ledger = MagicMock()
    ledger.business_id = "biz-1"
    ledger.list.side_effect = lambda kind, _range: (
        sales if kind is RecordKind.SALE else expenses
    )
    accumulator = MagicMock()
    accumulator.current_balances.return_value = BusinessBalances(
        cash_balance=Decimal("22"),
        bank_balance=Decimal("-3"),
    )
    use_case = GetDashboardSummaryUseCase(
        ledger=ledger,
        accumulator=accumulator,
        logger=MagicMock(),
        day_count=7,
    )

    outcome = use_case.execute(today=TODAY)

    assert outcome.succeeded
    summary = outcome.value

    window = DateRange(date(2024, 5, 28), date(2024, 6, 30))
    ledger.list.assert_any_call(RecordKind.SALE, window)
    assert summary.balances.cash_balance == Decimal("22")
    assert summary.today_sales.amount == Decimal("15")
    assert summary.today_sales.count == 2
    assert summary.today_expenses.count == 0
    assert summary.period == DateRange(date(2024, 6, 1), date(2024, 6, 30))
    assert summary.period_totals.total_sales == Decimal("15")
    assert summary.period_totals.net_profit == Decimal("12")
    assert len(summary.daily_series) == 7
    assert summary.daily_series[2].sales_total == Decimal("7")
    assert summary.expenses_by_category == {ExpenseCategory.RENT: Decimal("3")}


def test_execute_returns_failure_when_ledger_is_unavailable() -> None:
    ledger = MagicMock()
    ledger.business_id = "biz-1"
    ledger.list.side_effect = PersistenceError("database unavailable")
    accumulator = MagicMock()
    logger = MagicMock()
    use_case = GetDashboardSummaryUseCase(
        ledger=ledger,
        accumulator=accumulator,
        logger=logger,
    )

    outcome = use_case.execute(today=TODAY)

    assert outcome.failed
    assert isinstance(outcome.error, PersistenceError)
    accumulator.current_balances.assert_not_called()
    logger.error.assert_called_once()


def test_execute_rejects_non_positive_day_count() -> None:
    use_case = GetDashboardSummaryUseCase(
        ledger=MagicMock(business_id="biz-1", **{"list.return_value": []}),
        accumulator=MagicMock(),
        logger=MagicMock(),
        day_count=0,
    )

    outcome = use_case.execute(today=TODAY)

    assert outcome.failed
    assert isinstance(outcome.error, ValidationError)
    assert outcome.error.field == "day_count"
