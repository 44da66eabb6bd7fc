"""Port for reading and writing businesses and their balances."""

from decimal import Decimal
from typing import Protocol

from src.domain.models.ledger import Business, BusinessBalances, BusinessType


class BusinessRepositoryPort(Protocol):
    """Port exposing business rows and their running balances."""

    def fetch_by_owner(self, owner_id: str) -> Business | None:
        """Return the business owned by an identity, if any."""

    def fetch_by_id(self, business_id: str) -> Business | None:
        """Return a business by id, if any."""

    def insert_business(
        self,
        owner_id: str,
        name: str,
        business_type: BusinessType,
    ) -> Business:
        """Create a business with zero balances."""

    def update_profile(
        self,
        business_id: str,
        name: str,
        business_type: BusinessType,
    ) -> Business | None:
        """Update the display name and type of a business."""

    def fetch_balances(self, business_id: str) -> BusinessBalances:
        """Return the last committed balances of a business."""

    def adjust_balances(
        self,
        business_id: str,
        cash_delta: Decimal,
        bank_delta: Decimal,
    ) -> BusinessBalances:
        """Shift both balances inside one transaction and return them."""

    def overwrite_balances(
        self,
        business_id: str,
        balances: BusinessBalances,
    ) -> BusinessBalances:
        """Replace both balances and return them."""


__all__ = ["BusinessRepositoryPort"]
