"""Application use cases package."""

from .balance_accumulator import (
    BusinessBalanceAccumulator,
    ReconciliationResult,
)
from .get_business import GetBusinessUseCase
from .get_dashboard_summary import GetDashboardSummaryUseCase
from .get_pnl_report import (
    GetPnLReportUseCase,
    ReportRequestTracker,
    ReportResult,
)
from .ledger_repository import ScopedLedgerRepository
from .manage_ledger import ManageLedgerUseCase
from .onboard_business import OnboardBusinessUseCase
from .reconcile_balances import ReconcileBalancesUseCase
from .update_business_settings import UpdateBusinessSettingsUseCase

__all__ = [
    "BusinessBalanceAccumulator",
    "ReconciliationResult",
    "GetBusinessUseCase",
    "GetDashboardSummaryUseCase",
    "GetPnLReportUseCase",
    "ReportRequestTracker",
    "ReportResult",
    "ScopedLedgerRepository",
    "ManageLedgerUseCase",
    "OnboardBusinessUseCase",
    "ReconcileBalancesUseCase",
    "UpdateBusinessSettingsUseCase",
]
