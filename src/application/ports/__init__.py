"""Application ports package."""

from .business_repository import BusinessRepositoryPort
from .database import DatabaseEnginePort
from .ledger_store import LedgerStorePort
from .report_cache import ReportCachePort

__all__ = [
    "BusinessRepositoryPort",
    "DatabaseEnginePort",
    "LedgerStorePort",
    "ReportCachePort",
]
