"""Streamlit dashboard entry point."""

from collections.abc import Sequence
from datetime import date

import streamlit as st
import altair as alt

from src.adapters.interface.streamlit.charts import (
    ALL_OPTION,
    category_donut_rows,
    daily_series_rows,
    expense_rows,
    filter_expenses,
    filter_sales,
    format_count,
    format_currency,
    sale_rows,
)
from src.adapters.interface.streamlit.money_flow import (
    build_money_flow_model,
    build_plotly_figure,
)
from src.application.context import BusinessContext, BusinessLocks
from src.application.ports.report_cache import ReportCachePort
from src.application.results import OperationResult
from src.application.use_cases.get_pnl_report import (
    ReportRequestTracker,
    ReportResult,
)
from src.domain.errors import LedgerError
from src.domain.models.ledger import (
    Business,
    BusinessType,
    ExpenseCategory,
    PaymentMethod,
)
from src.domain.services.periods import RangePreset, resolve_date_range
from src.infrastructure.container import (
    build_business_locks,
    build_business_lookup,
    build_dashboard_summary,
    build_manage_ledger,
    build_onboarding,
    build_pnl_report,
    build_reconcile,
    build_report_cache,
    build_settings_update,
)
from src.infrastructure.logging.logger import get_usage_logger
from src.infrastructure.settings import LedgerSettings

PAGES = ["Dashboard", "Sales", "Expenses", "Reports", "Settings"]
PRESET_LABELS = {
    RangePreset.TODAY: "Today",
    RangePreset.THIS_WEEK: "This week",
    RangePreset.THIS_MONTH: "This month",
    RangePreset.CUSTOM: "Custom range",
}
PALETTE = [
    "#1b9aaa",
    "#2e7d32",
    "#f4a261",
    "#e76f51",
    "#457b9d",
    "#f6c453",
]


def _check_altair_dependencies() -> tuple[bool, str | None]:
    """Return whether numpy and pandas are usable by Altair."""
    import numpy
    import pandas

    if not hasattr(numpy, "ndarray"):
        return False, "numpy is installed incompletely (no ndarray)."
    if not hasattr(pandas, "Timestamp"):
        return False, "pandas is installed incompletely (no Timestamp)."
    return True, None


@st.cache_resource(show_spinner=False)
def _load_settings() -> LedgerSettings:
    return LedgerSettings.from_env()


@st.cache_resource(show_spinner=False)
def _shared_state() -> tuple[ReportCachePort, BusinessLocks]:
    """Process-wide report cache and business locks."""
    return build_report_cache(), build_business_locks()


def _report_tracker() -> ReportRequestTracker:
    if "report_tracker" not in st.session_state:
        st.session_state["report_tracker"] = ReportRequestTracker()
    return st.session_state["report_tracker"]


def _show_result(result: OperationResult, success_message: str) -> bool:
    """Render the outcome of an operation and return whether it succeeded."""
    if result.succeeded:
        get_usage_logger().info(success_message)
        st.success(success_message)
        return True
    st.error(str(result.error))
    return False


def _render_onboarding(owner_id: str) -> None:
    """Render the business creation form."""
    st.subheader("Set up your business")
    with st.form("onboarding"):
        name = st.text_input("Business name")
        business_type = st.selectbox(
            "Business type",
            [member.value for member in BusinessType],
            format_func=str.title,
        )
        submitted = st.form_submit_button("Create business")
    if submitted:
        result = build_onboarding().execute(owner_id, name, business_type)
        if _show_result(result, f"{name.strip()} is ready."):
            st.rerun()


def _render_category_donut(
    amounts,
    title: str,
    symbol: str,
    chart_size: int = 300,
) -> None:
    """Render a donut chart of expenses by category."""
    data = category_donut_rows(amounts, symbol)
    st.subheader(title)
    if not data:
        st.info("No expenses recorded for this period.")
        return

    hover = alt.selection_point(
        name="hover",
        fields=["category"],
        on="view:mouseover",
        clear="view:mouseout",
        empty=False,
    )
    base = alt.Chart(alt.Data(values=data)).mark_arc(
        innerRadius=chart_size * 0.4,
        cornerRadius=8,
        padAngle=0.02,
    ).encode(
        theta=alt.Theta("amount:Q"),
        color=alt.Color(
            "category:N",
            scale=alt.Scale(range=PALETTE),
            legend=alt.Legend(orient="bottom", title=None, columns=3),
        ),
        opacity=alt.condition(hover, alt.value(1.0), alt.value(0.35)),
        order=alt.Order("amount:Q", sort="descending"),
        tooltip=[
            alt.Tooltip("category:N"),
            alt.Tooltip("amount_label:N"),
            alt.Tooltip("share_label:N"),
        ],
    )
    hover_text = alt.Chart(alt.Data(values=data)).transform_filter(
        hover
    ).mark_text(
        align="center",
        baseline="middle",
        fontSize=16,
        fontWeight="bold",
    ).encode(
        text="amount_label:N"
    )
    chart = alt.layer(base, hover_text).add_params(hover).properties(
        width=chart_size,
        height=chart_size,
    ).configure_view(
        stroke=None
    )
    st.altair_chart(chart, width="stretch")


def _render_daily_chart(points, title: str) -> None:
    st.subheader(title)
    data = daily_series_rows(points)
    chart = alt.Chart(alt.Data(values=data)).mark_bar(
        cornerRadiusTopLeft=4,
        cornerRadiusTopRight=4,
    ).encode(
        x=alt.X("label:N", title=None, sort=None),
        xOffset=alt.XOffset("series:N"),
        y=alt.Y("amount:Q", title=None),
        color=alt.Color(
            "series:N",
            scale=alt.Scale(
                domain=["Sales", "Expenses"],
                range=["#2e7d32", "#e76f51"],
            ),
            legend=alt.Legend(orient="bottom", title=None),
        ),
        tooltip=[
            alt.Tooltip("day:N"),
            alt.Tooltip("series:N"),
            alt.Tooltip("amount:Q", format=",.2f"),
        ],
    ).properties(height=300)
    st.altair_chart(chart, width="stretch")


def _render_dashboard(
    context: BusinessContext,
    settings: LedgerSettings,
    cache: ReportCachePort,
    locks: BusinessLocks,
) -> None:
    """Render balances, today's figures, the daily series and categories."""
    use_case = build_dashboard_summary(
        context,
        cache,
        locks,
        day_count=settings.dashboard_days,
    )
    outcome = use_case.execute(today=date.today())
    if outcome.failed:
        st.error(f"Could not load the dashboard: {outcome.error}")
        return
    summary = outcome.value
    symbol = settings.currency_symbol

    cash_col, bank_col, sales_col, expenses_col = st.columns(4)
    cash_col.metric(
        "Cash balance",
        format_currency(summary.balances.cash_balance, symbol),
    )
    bank_col.metric(
        "Bank balance",
        format_currency(summary.balances.bank_balance, symbol),
    )
    sales_col.metric(
        "Today's sales",
        format_currency(summary.today_sales.amount, symbol),
    )
    sales_col.caption(format_count(summary.today_sales.count, "sale"))
    expenses_col.metric(
        "Today's expenses",
        format_currency(summary.today_expenses.amount, symbol),
    )
    expenses_col.caption(
        format_count(summary.today_expenses.count, "expense")
    )

    month = summary.period_totals
    st.caption(
        f"{summary.period.start_date:%B %Y}: "
        f"sales {format_currency(month.total_sales, symbol)}, "
        f"expenses {format_currency(month.total_expenses, symbol)}, "
        f"net profit {format_currency(month.net_profit, symbol)}"
    )

    chart_left, chart_right = st.columns(2)
    with chart_left:
        _render_daily_chart(
            summary.daily_series,
            f"Last {len(summary.daily_series)} days",
        )
    with chart_right:
        _render_category_donut(
            summary.expenses_by_category,
            "Expenses by category (this month)",
            symbol,
        )


def _edit_target(records: Sequence, label: str, describe) -> str | None:
    """Let the user pick one listed record by id."""
    if not records:
        return None
    options = {describe(record): record.id for record in records}
    choice = st.selectbox(label, ["-"] + list(options))
    return options.get(choice)


def _render_sales(
    context: BusinessContext,
    settings: LedgerSettings,
    cache: ReportCachePort,
    locks: BusinessLocks,
) -> None:
    """Render the sale form and the searchable sales table."""
    ledger = build_manage_ledger(context, cache, locks)
    symbol = settings.currency_symbol
    methods = [member.value for member in PaymentMethod]

    with st.form("add_sale", clear_on_submit=True):
        st.subheader("Record a sale")
        day = st.date_input("Date", value=date.today())
        amount = st.number_input("Amount", min_value=0.0, step=1.0)
        method = st.selectbox("Payment method", methods, format_func=str.title)
        description = st.text_input("Description")
        submitted = st.form_submit_button("Add sale")
    if submitted:
        _show_result(
            ledger.add_sale(day, f"{amount:.2f}", method, description),
            "Sale recorded.",
        )

    listed = ledger.list_sales()
    if listed.failed:
        st.error(str(listed.error))
        return
    sales = listed.value or []

    st.subheader("Sales")
    query = st.text_input("Search description", placeholder="Type to filter")
    method_filter = st.selectbox(
        "Filter by payment method",
        [ALL_OPTION] + methods,
        key="sales_method_filter",
    )
    filtered = filter_sales(sales, query, method_filter)
    st.caption(f"{len(filtered)} of {len(sales)} sales shown")
    st.dataframe(sale_rows(filtered, symbol), width="stretch", hide_index=True)

    sale_id = _edit_target(
        filtered,
        "Edit or delete a sale",
        lambda sale: (
            f"{sale.date} {format_currency(sale.amount, symbol)} "
            f"{sale.payment_method.value.title()} ({sale.id[:8]})"
        ),
    )
    if sale_id is None:
        return
    sale = next(item for item in filtered if item.id == sale_id)
    with st.form("edit_sale"):
        new_day = st.date_input("Date", value=sale.date)
        new_amount = st.number_input(
            "Amount",
            min_value=0.0,
            step=1.0,
            value=float(sale.amount),
        )
        new_method = st.selectbox(
            "Payment method",
            methods,
            index=methods.index(sale.payment_method.value),
            format_func=str.title,
        )
        new_description = st.text_input(
            "Description",
            value=sale.description or "",
        )
        save_col, delete_col = st.columns(2)
        save = save_col.form_submit_button("Save changes")
        remove = delete_col.form_submit_button("Delete sale")
    if save:
        result = ledger.update_sale(
            sale_id,
            {
                "date": new_day,
                "amount": f"{new_amount:.2f}",
                "payment_method": new_method,
                "description": new_description,
            },
        )
        if _show_result(result, "Sale updated."):
            st.rerun()
    elif remove:
        if _show_result(ledger.delete_sale(sale_id), "Sale deleted."):
            st.rerun()


def _render_expenses(
    context: BusinessContext,
    settings: LedgerSettings,
    cache: ReportCachePort,
    locks: BusinessLocks,
) -> None:
    """Render the expense form and the searchable expenses table."""
    ledger = build_manage_ledger(context, cache, locks)
    symbol = settings.currency_symbol
    methods = [member.value for member in PaymentMethod]
    categories = [member.value for member in ExpenseCategory]

    with st.form("add_expense", clear_on_submit=True):
        st.subheader("Record an expense")
        day = st.date_input("Date", value=date.today())
        category = st.selectbox("Category", categories, format_func=str.title)
        amount = st.number_input("Amount", min_value=0.0, step=1.0)
        method = st.selectbox("Payment method", methods, format_func=str.title)
        notes = st.text_input("Notes")
        submitted = st.form_submit_button("Add expense")
    if submitted:
        _show_result(
            ledger.add_expense(day, category, f"{amount:.2f}", method, notes),
            "Expense recorded.",
        )

    listed = ledger.list_expenses()
    if listed.failed:
        st.error(str(listed.error))
        return
    expenses = listed.value or []

    st.subheader("Expenses")
    query = st.text_input("Search notes", placeholder="Type to filter")
    method_col, category_col = st.columns(2)
    method_filter = method_col.selectbox(
        "Filter by payment method",
        [ALL_OPTION] + methods,
        key="expenses_method_filter",
    )
    category_filter = category_col.selectbox(
        "Filter by category",
        [ALL_OPTION] + categories,
    )
    filtered = filter_expenses(expenses, query, method_filter, category_filter)
    st.caption(f"{len(filtered)} of {len(expenses)} expenses shown")
    st.dataframe(
        expense_rows(filtered, symbol),
        width="stretch",
        hide_index=True,
    )

    expense_id = _edit_target(
        filtered,
        "Edit or delete an expense",
        lambda expense: (
            f"{expense.date} {expense.category.value.title()} "
            f"{format_currency(expense.amount, symbol)} ({expense.id[:8]})"
        ),
    )
    if expense_id is None:
        return
    expense = next(item for item in filtered if item.id == expense_id)
    with st.form("edit_expense"):
        new_day = st.date_input("Date", value=expense.date)
        new_category = st.selectbox(
            "Category",
            categories,
            index=categories.index(expense.category.value),
            format_func=str.title,
        )
        new_amount = st.number_input(
            "Amount",
            min_value=0.0,
            step=1.0,
            value=float(expense.amount),
        )
        new_method = st.selectbox(
            "Payment method",
            methods,
            index=methods.index(expense.payment_method.value),
            format_func=str.title,
        )
        new_notes = st.text_input("Notes", value=expense.notes or "")
        save_col, delete_col = st.columns(2)
        save = save_col.form_submit_button("Save changes")
        remove = delete_col.form_submit_button("Delete expense")
    if save:
        result = ledger.update_expense(
            expense_id,
            {
                "date": new_day,
                "category": new_category,
                "amount": f"{new_amount:.2f}",
                "payment_method": new_method,
                "notes": new_notes,
            },
        )
        if _show_result(result, "Expense updated."):
            st.rerun()
    elif remove:
        if _show_result(ledger.delete_expense(expense_id), "Expense deleted."):
            st.rerun()


def _render_reports(
    context: BusinessContext,
    settings: LedgerSettings,
    cache: ReportCachePort,
    locks: BusinessLocks,
) -> None:
    """Render the profit-and-loss report for the selected range."""
    presets = list(PRESET_LABELS)
    preset = st.sidebar.selectbox(
        "Period",
        presets,
        index=presets.index(settings.default_range),
        format_func=PRESET_LABELS.get,
    )
    today = date.today()
    start_date = end_date = None
    if preset is RangePreset.CUSTOM:
        start_date = st.sidebar.date_input("From", value=today.replace(day=1))
        end_date = st.sidebar.date_input("To", value=today)

    try:
        date_range = resolve_date_range(preset, today, start_date, end_date)
    except LedgerError as exc:
        st.error(str(exc))
        return

    # Streamlit stops a superseded rerun before starting the next one, so
    # here accept only rejects results for a range other than the ticket's.
    tracker = _report_tracker()
    ticket = tracker.issue(date_range)
    use_case = build_pnl_report(context, cache, locks)
    outcome = use_case.execute_for_range(date_range)
    if outcome.failed:
        st.error(f"Could not load the report: {outcome.error}")
        return
    result: ReportResult = outcome.value
    if not tracker.accept(ticket, result):
        return

    report = result.report
    symbol = settings.currency_symbol
    st.caption(f"{date_range.start_date} to {date_range.end_date}")
    sales_col, expenses_col, profit_col = st.columns(3)
    sales_col.metric("Total sales", format_currency(report.total_sales, symbol))
    expenses_col.metric(
        "Total expenses",
        format_currency(report.total_expenses, symbol),
    )
    profit_col.metric("Net profit", format_currency(report.net_profit, symbol))

    method_rows = [
        {
            "Method": method.value.title(),
            "Sales": format_currency(
                getattr(report.sales_by_method, method.value.lower()),
                symbol,
            ),
            "Expenses": format_currency(
                getattr(report.expenses_by_method, method.value.lower()),
                symbol,
            ),
        }
        for method in PaymentMethod
    ]
    table_col, donut_col = st.columns(2)
    with table_col:
        st.subheader("By payment method")
        st.dataframe(method_rows, width="stretch", hide_index=True)
    with donut_col:
        _render_category_donut(
            report.expenses_by_category,
            "Expenses by category",
            symbol,
        )

    model = build_money_flow_model(report)
    if not model.is_empty:
        st.subheader("Money flow")
        st.plotly_chart(build_plotly_figure(model), width="stretch")


def _render_settings(
    business: Business,
    context: BusinessContext,
    settings: LedgerSettings,
    cache: ReportCachePort,
    locks: BusinessLocks,
) -> None:
    """Render the business profile form and the reconcile action."""
    types = [member.value for member in BusinessType]
    with st.form("settings"):
        st.subheader("Business profile")
        name = st.text_input("Business name", value=business.name)
        business_type = st.selectbox(
            "Business type",
            types,
            index=types.index(business.type.value),
            format_func=str.title,
        )
        submitted = st.form_submit_button("Save")
    if submitted:
        result = build_settings_update(context).execute(name, business_type)
        if _show_result(result, "Settings saved."):
            st.rerun()

    st.subheader("Balances")
    st.caption(
        f"Subscription: {business.subscription_status.value.title()}"
    )
    if st.button("Recalculate balances from ledger"):
        result = build_reconcile(context, cache, locks).execute()
        if result.failed:
            st.error(str(result.error))
            return
        drift = result.value.drift
        if result.value.was_consistent:
            st.success("Balances already match the ledger.")
        else:
            st.warning(
                "Balances repaired. Drift was "
                f"cash {format_currency(drift.cash, settings.currency_symbol)}, "
                f"bank {format_currency(drift.bank, settings.currency_symbol)}."
            )


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Bookkeeping Dashboard", layout="wide")
    st.title("Bookkeeping Dashboard")

    ok, message = _check_altair_dependencies()
    if not ok:
        st.error(message)
        return

    settings = _load_settings()
    if not settings.owner_id:
        st.error("Set LEDGER_OWNER_ID to sign in.")
        return

    lookup = build_business_lookup().execute(settings.owner_id)
    if lookup.failed:
        st.error(f"Could not load the business: {lookup.error}")
        return
    business = lookup.value
    if business is None:
        _render_onboarding(settings.owner_id)
        return

    context = BusinessContext(business_id=business.id, owner_id=business.owner_id)
    cache, locks = _shared_state()
    st.sidebar.caption(f"{business.name} ({business.type.value.title()})")
    page = st.sidebar.selectbox("Page", PAGES)

    if page == "Dashboard":
        _render_dashboard(context, settings, cache, locks)
    elif page == "Sales":
        _render_sales(context, settings, cache, locks)
    elif page == "Expenses":
        _render_expenses(context, settings, cache, locks)
    elif page == "Reports":
        _render_reports(context, settings, cache, locks)
    else:
        _render_settings(business, context, settings, cache, locks)


if __name__ == "__main__":  # pragma: no cover
    main()
