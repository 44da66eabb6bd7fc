"""Port for caching computed reports per business."""

from collections.abc import Hashable
from typing import Any, Protocol


class ReportCachePort(Protocol):
    """Port exposing a report cache partitioned by business id."""

    def get(self, business_id: str, key: Hashable) -> Any | None:
        """Return a cached value or None."""

    def generation(self, business_id: str) -> int:
        """Return a counter that changes on every invalidation."""

    def put(
        self,
        business_id: str,
        key: Hashable,
        value: Any,
        generation: int | None = None,
    ) -> bool:
        """Store a value for a business.

        When ``generation`` is given the value is stored only if no
        invalidation happened since that generation was read.
        """

    def invalidate(self, business_id: str) -> None:
        """Drop every cached value of a business."""


__all__ = ["ReportCachePort"]
