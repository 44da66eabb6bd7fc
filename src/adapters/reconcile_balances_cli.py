"""CLI adapter recomputing the balances of the configured owner's business.

This module wires the ReconcileBalancesUseCase through the composition root
and prints the drift that was repaired, if any.
"""

import sys

from src.application.context import BusinessContext
from src.infrastructure.container import (
    build_business_locks,
    build_business_lookup,
    build_reconcile,
    build_report_cache,
)
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import LedgerSettings


def main() -> int:
    """Run the reconciliation and return a process exit code."""
    logger = get_app_logger()
    settings = LedgerSettings.from_env()
    if not settings.owner_id:
        print("LEDGER_OWNER_ID is not set.", file=sys.stderr)
        return 2

    lookup = build_business_lookup().execute(settings.owner_id)
    if lookup.failed:
        logger.error(f"Business lookup failed: {lookup.error}")
        print(f"Business lookup failed: {lookup.error}", file=sys.stderr)
        return 1
    business = lookup.value
    if business is None:
        print(
            f"No business found for owner {settings.owner_id}.",
            file=sys.stderr,
        )
        return 1

    context = BusinessContext(business_id=business.id, owner_id=business.owner_id)
    use_case = build_reconcile(
        context,
        build_report_cache(),
        build_business_locks(),
    )
    result = use_case.execute()
    if result.failed:
        logger.error(f"Reconciliation failed: {result.error}")
        print(f"Reconciliation failed: {result.error}", file=sys.stderr)
        return 1

    outcome = result.value
    if outcome.was_consistent:
        print(f"Balances of {business.name} already match the ledger.")
    else:
        print(
            f"Repaired balances of {business.name}: "
            f"cash drift {outcome.drift.cash}, bank drift {outcome.drift.bank}."
        )
    print(
        f"Cash {outcome.derived.cash_balance}, "
        f"bank {outcome.derived.bank_balance}."
    )
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
