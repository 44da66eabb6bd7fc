"""Composition root for wiring infrastructure adapters."""

from src.application.context import BusinessContext, BusinessLocks
from src.application.ports.business_repository import BusinessRepositoryPort
from src.application.ports.database import DatabaseEnginePort
from src.application.ports.ledger_store import LedgerStorePort
from src.application.ports.report_cache import ReportCachePort
from src.application.use_cases.balance_accumulator import (
    BusinessBalanceAccumulator,
)
from src.application.use_cases.get_business import GetBusinessUseCase
from src.application.use_cases.get_dashboard_summary import (
    GetDashboardSummaryUseCase,
)
from src.application.use_cases.get_pnl_report import GetPnLReportUseCase
from src.application.use_cases.ledger_repository import ScopedLedgerRepository
from src.application.use_cases.manage_ledger import ManageLedgerUseCase
from src.application.use_cases.onboard_business import OnboardBusinessUseCase
from src.application.use_cases.reconcile_balances import (
    ReconcileBalancesUseCase,
)
from src.application.use_cases.update_business_settings import (
    UpdateBusinessSettingsUseCase,
)
from src.infrastructure.business_repository import (
    SqlAlchemyBusinessRepository,
)
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.ledger_repository import SqlAlchemyLedgerStore
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.report_cache import InMemoryReportCache


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_business_repository(
    db_port: DatabaseEnginePort | None = None,
) -> BusinessRepositoryPort:
    """Return the business repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyBusinessRepository(resolved_db)


def build_ledger_store(
    db_port: DatabaseEnginePort | None = None,
) -> LedgerStorePort:
    """Return the ledger record store."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyLedgerStore(resolved_db)


def build_report_cache() -> ReportCachePort:
    """Return a report cache; callers share one instance per process."""
    return InMemoryReportCache()


def build_business_locks() -> BusinessLocks:
    """Return a lock registry; callers share one instance per process."""
    return BusinessLocks()


def build_accumulator(
    db_port: DatabaseEnginePort | None = None,
) -> BusinessBalanceAccumulator:
    """Return the balance accumulator."""
    resolved_db = db_port or build_database_adapter()
    return BusinessBalanceAccumulator(
        business_repository=build_business_repository(resolved_db),
        ledger_store=build_ledger_store(resolved_db),
        logger=get_app_logger(),
    )


def build_ledger_repository(
    context: BusinessContext,
    cache: ReportCachePort,
    locks: BusinessLocks,
    db_port: DatabaseEnginePort | None = None,
) -> ScopedLedgerRepository:
    """Return the ledger repository scoped to a business."""
    resolved_db = db_port or build_database_adapter()
    return ScopedLedgerRepository(
        context=context,
        store=build_ledger_store(resolved_db),
        accumulator=build_accumulator(resolved_db),
        cache=cache,
        locks=locks,
        logger=get_app_logger(),
    )


def build_business_lookup(
    db_port: DatabaseEnginePort | None = None,
) -> GetBusinessUseCase:
    return GetBusinessUseCase(
        business_repository=build_business_repository(db_port),
        logger=get_app_logger(),
    )


def build_onboarding(
    db_port: DatabaseEnginePort | None = None,
) -> OnboardBusinessUseCase:
    return OnboardBusinessUseCase(
        business_repository=build_business_repository(db_port),
        logger=get_app_logger(),
    )


def build_settings_update(
    context: BusinessContext,
    db_port: DatabaseEnginePort | None = None,
) -> UpdateBusinessSettingsUseCase:
    return UpdateBusinessSettingsUseCase(
        context=context,
        business_repository=build_business_repository(db_port),
        logger=get_app_logger(),
    )


def build_manage_ledger(
    context: BusinessContext,
    cache: ReportCachePort,
    locks: BusinessLocks,
    db_port: DatabaseEnginePort | None = None,
) -> ManageLedgerUseCase:
    ledger = build_ledger_repository(context, cache, locks, db_port)
    return ManageLedgerUseCase(ledger=ledger, logger=get_app_logger())


def build_pnl_report(
    context: BusinessContext,
    cache: ReportCachePort,
    locks: BusinessLocks,
    db_port: DatabaseEnginePort | None = None,
) -> GetPnLReportUseCase:
    ledger = build_ledger_repository(context, cache, locks, db_port)
    return GetPnLReportUseCase(
        ledger=ledger,
        cache=cache,
        logger=get_app_logger(),
    )


def build_dashboard_summary(
    context: BusinessContext,
    cache: ReportCachePort,
    locks: BusinessLocks,
    db_port: DatabaseEnginePort | None = None,
    day_count: int = 7,
) -> GetDashboardSummaryUseCase:
    resolved_db = db_port or build_database_adapter()
    return GetDashboardSummaryUseCase(
        ledger=build_ledger_repository(context, cache, locks, resolved_db),
        accumulator=build_accumulator(resolved_db),
        logger=get_app_logger(),
        day_count=day_count,
    )


def build_reconcile(
    context: BusinessContext,
    cache: ReportCachePort,
    locks: BusinessLocks,
    db_port: DatabaseEnginePort | None = None,
) -> ReconcileBalancesUseCase:
    return ReconcileBalancesUseCase(
        context=context,
        accumulator=build_accumulator(db_port),
        cache=cache,
        locks=locks,
        logger=get_app_logger(),
    )


__all__ = [
    "build_database_adapter",
    "build_business_repository",
    "build_ledger_store",
    "build_report_cache",
    "build_business_locks",
    "build_accumulator",
    "build_ledger_repository",
    "build_business_lookup",
    "build_onboarding",
    "build_settings_update",
    "build_manage_ledger",
    "build_pnl_report",
    "build_dashboard_summary",
    "build_reconcile",
]
