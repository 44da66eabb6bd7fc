"""Domain models for businesses and their ledger records."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum


class BusinessType(str, Enum):
    """Kind of hospitality business."""

    HOTEL = "HOTEL"
    RESTAURANT = "RESTAURANT"


class PaymentMethod(str, Enum):
    """Channel through which a sale was received or an expense paid."""

    CASH = "CASH"
    BANK = "BANK"


class ExpenseCategory(str, Enum):
    """Closed set of expense categories."""

    FOOD = "FOOD"
    STAFF = "STAFF"
    ELECTRICITY = "ELECTRICITY"
    RENT = "RENT"
    MAINTENANCE = "MAINTENANCE"
    OTHER = "OTHER"


class SubscriptionStatus(str, Enum):
    """Billing status of a business account."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    TRIAL = "TRIAL"
    CANCELLED = "CANCELLED"


class RecordKind(str, Enum):
    """Tag distinguishing the two ledger record variants."""

    SALE = "SALE"
    EXPENSE = "EXPENSE"


@dataclass(frozen=True)
class BusinessBalances:
    """Running cash and bank balances of a business.

    Attributes:
        cash_balance: Balance of the CASH channel.
        bank_balance: Balance of the BANK channel.
    """

    cash_balance: Decimal = Decimal("0")
    bank_balance: Decimal = Decimal("0")

    def for_method(self, payment_method: PaymentMethod) -> Decimal:
        """Return the balance tracked for a payment method."""
        if payment_method is PaymentMethod.CASH:
            return self.cash_balance
        return self.bank_balance


@dataclass(frozen=True)
class Business:
    """A single-location hospitality business owned by one identity."""

    id: str
    owner_id: str
    name: str
    type: BusinessType
    balances: BusinessBalances
    subscription_status: SubscriptionStatus = SubscriptionStatus.TRIAL
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def cash_balance(self) -> Decimal:
        return self.balances.cash_balance

    @property
    def bank_balance(self) -> Decimal:
        return self.balances.bank_balance


@dataclass(frozen=True)
class SaleDraft:
    """Validated sale values that have not been persisted yet."""

    date: date
    amount: Decimal
    payment_method: PaymentMethod
    description: str | None = None
    kind: RecordKind = field(default=RecordKind.SALE, init=False)


@dataclass(frozen=True)
class ExpenseDraft:
    """Validated expense values that have not been persisted yet."""

    date: date
    category: ExpenseCategory
    amount: Decimal
    payment_method: PaymentMethod
    notes: str | None = None
    kind: RecordKind = field(default=RecordKind.EXPENSE, init=False)


@dataclass(frozen=True)
class Sale:
    """Stored sale owned by a business."""

    id: str
    business_id: str
    date: date
    amount: Decimal
    payment_method: PaymentMethod
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    kind: RecordKind = field(default=RecordKind.SALE, init=False)


@dataclass(frozen=True)
class Expense:
    """Stored expense owned by a business."""

    id: str
    business_id: str
    date: date
    category: ExpenseCategory
    amount: Decimal
    payment_method: PaymentMethod
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    kind: RecordKind = field(default=RecordKind.EXPENSE, init=False)


LedgerDraft = SaleDraft | ExpenseDraft
LedgerRecord = Sale | Expense


__all__ = [
    "BusinessType",
    "PaymentMethod",
    "ExpenseCategory",
    "SubscriptionStatus",
    "RecordKind",
    "BusinessBalances",
    "Business",
    "SaleDraft",
    "ExpenseDraft",
    "Sale",
    "Expense",
    "LedgerDraft",
    "LedgerRecord",
]
