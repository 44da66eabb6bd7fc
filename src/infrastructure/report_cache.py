"""In-process report cache partitioned by business id."""

from collections.abc import Hashable
from threading import Lock
from typing import Any

from src.application.ports.report_cache import ReportCachePort


class InMemoryReportCache(ReportCachePort):
    """Thread-safe dictionary cache of computed reports.

    Each business carries a generation counter bumped by ``invalidate``;
    a ``put`` tagged with an older generation is dropped so a report
    computed before a mutation never outlives it.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._entries: dict[str, dict[Hashable, Any]] = {}
        self._generations: dict[str, int] = {}

    def get(self, business_id: str, key: Hashable) -> Any | None:
        with self._lock:
            return self._entries.get(business_id, {}).get(key)

    def generation(self, business_id: str) -> int:
        with self._lock:
            return self._generations.get(business_id, 0)

    def put(
        self,
        business_id: str,
        key: Hashable,
        value: Any,
        generation: int | None = None,
    ) -> bool:
        with self._lock:
            current = self._generations.get(business_id, 0)
            if generation is not None and generation != current:
                return False
            self._entries.setdefault(business_id, {})[key] = value
            return True

    def invalidate(self, business_id: str) -> None:
        with self._lock:
            self._entries.pop(business_id, None)
            self._generations[business_id] = (
                self._generations.get(business_id, 0) + 1
            )


__all__ = ["InMemoryReportCache"]
