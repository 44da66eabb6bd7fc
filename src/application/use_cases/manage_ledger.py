"""Use case for recording, editing and removing sales and expenses."""

from src.application.results import OperationResult
from src.application.use_cases.ledger_repository import ScopedLedgerRepository
from src.domain.errors import LedgerError
from src.domain.models.finance import DateRange
from src.domain.models.ledger import Expense, RecordKind, Sale
from src.domain.services.validation import (
    build_expense_draft,
    build_sale_draft,
)
from src.infrastructure.logging.logger import get_app_logger


class ManageLedgerUseCase:
    """Caller-facing ledger operations returning explicit results.

    Errors raised by validation, persistence or lookups are logged and
    returned inside an ``OperationResult``; nothing is retried.
    """

    def __init__(self, ledger: ScopedLedgerRepository, logger=None) -> None:
        """Initialize the use case.

        Args:
            ledger: Business-scoped ledger repository.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._ledger = ledger
        self._logger = logger or get_app_logger()

    def list_sales(
        self,
        date_range: DateRange | None = None,
    ) -> OperationResult[list[Sale]]:
        return self._run(
            "list sales",
            lambda: self._ledger.list(RecordKind.SALE, date_range),
        )

    def list_expenses(
        self,
        date_range: DateRange | None = None,
    ) -> OperationResult[list[Expense]]:
        return self._run(
            "list expenses",
            lambda: self._ledger.list(RecordKind.EXPENSE, date_range),
        )

    def add_sale(
        self,
        date,
        amount,
        payment_method,
        description=None,
    ) -> OperationResult[Sale]:
        """Validate and record a sale.

        Args:
            date: Sale date (date or YYYY-MM-DD string).
            amount: Positive amount.
            payment_method: CASH or BANK.
            description: Optional free text.

        Returns:
            OperationResult[Sale]: Stored sale or the failure.
        """
        return self._run(
            "add sale",
            lambda: self._ledger.create(
                build_sale_draft(date, amount, payment_method, description)
            ),
        )

    def update_sale(self, sale_id: str, updates: dict) -> OperationResult[Sale]:
        return self._run(
            "update sale",
            lambda: self._ledger.update(RecordKind.SALE, sale_id, updates),
        )

    def delete_sale(self, sale_id: str) -> OperationResult[bool]:
        return self._run(
            "delete sale",
            lambda: self._ledger.delete(RecordKind.SALE, sale_id),
        )

    def add_expense(
        self,
        date,
        category,
        amount,
        payment_method,
        notes=None,
    ) -> OperationResult[Expense]:
        """Validate and record an expense.

        Args:
            date: Expense date (date or YYYY-MM-DD string).
            category: One of the expense categories.
            amount: Positive amount.
            payment_method: CASH or BANK.
            notes: Optional free text.

        Returns:
            OperationResult[Expense]: Stored expense or the failure.
        """
        return self._run(
            "add expense",
            lambda: self._ledger.create(
                build_expense_draft(date, category, amount, payment_method, notes)
            ),
        )

    def update_expense(
        self,
        expense_id: str,
        updates: dict,
    ) -> OperationResult[Expense]:
        return self._run(
            "update expense",
            lambda: self._ledger.update(RecordKind.EXPENSE, expense_id, updates),
        )

    def delete_expense(self, expense_id: str) -> OperationResult[bool]:
        return self._run(
            "delete expense",
            lambda: self._ledger.delete(RecordKind.EXPENSE, expense_id),
        )

    def _run(self, action: str, operation) -> OperationResult:
        try:
            return OperationResult.ok(operation())
        except LedgerError as exc:
            self._logger.error(
                f"Failed to {action} for business="
                f"{self._ledger.business_id}: {exc}"
            )
            return OperationResult.fail(exc)


__all__ = ["ManageLedgerUseCase"]
