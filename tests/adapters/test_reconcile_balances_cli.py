"""Tests for the reconcile_balances_cli adapter."""

from decimal import Decimal
from unittest.mock import MagicMock

from src.adapters import reconcile_balances_cli
from src.application.results import OperationResult
from src.application.use_cases.balance_accumulator import ReconciliationResult
from src.domain.errors import PersistenceError
from src.domain.models.ledger import Business, BusinessBalances, BusinessType
from src.infrastructure.settings import LedgerSettings


def _patch(
    monkeypatch,
    owner_id="owner-1",
    business=None,
    result=None,
    lookup_result=None,
):
    lookup = MagicMock()
    lookup.execute.return_value = lookup_result or OperationResult.ok(business)
    reconcile = MagicMock()
    reconcile.execute.return_value = result
    build_reconcile = MagicMock(return_value=reconcile)
    monkeypatch.setattr(
        reconcile_balances_cli.LedgerSettings,
        "from_env",
        classmethod(lambda cls: LedgerSettings(owner_id=owner_id)),
    )
    monkeypatch.setattr(
        reconcile_balances_cli, "build_business_lookup", lambda: lookup
    )
    monkeypatch.setattr(
        reconcile_balances_cli, "build_reconcile", build_reconcile
    )
    monkeypatch.setattr(
        reconcile_balances_cli, "get_app_logger", lambda: MagicMock()
    )
    return build_reconcile


BUSINESS = Business(
    id="biz-1",
    owner_id="owner-1",
    name="Blue Lagoon",
    type=BusinessType.HOTEL,
    balances=BusinessBalances(),
)


def test_main_prints_repaired_drift(monkeypatch, capsys) -> None:
    outcome = ReconciliationResult(
        previous=BusinessBalances(cash_balance=Decimal("90")),
        derived=BusinessBalances(cash_balance=Decimal("100")),
    )
    build_reconcile = _patch(
        monkeypatch,
        business=BUSINESS,
        result=OperationResult.ok(outcome),
    )

    exit_code = reconcile_balances_cli.main()

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "cash drift -10" in out
    assert "Cash 100" in out
    context = build_reconcile.call_args.args[0]
    assert context.business_id == "biz-1"


def test_main_reports_consistent_balances(monkeypatch, capsys) -> None:
    outcome = ReconciliationResult(
        previous=BusinessBalances(),
        derived=BusinessBalances(),
    )
    _patch(monkeypatch, business=BUSINESS, result=OperationResult.ok(outcome))

    assert reconcile_balances_cli.main() == 0
    assert "already match" in capsys.readouterr().out


def test_main_without_owner_exits_with_usage_error(monkeypatch, capsys) -> None:
    _patch(monkeypatch, owner_id=None)

    assert reconcile_balances_cli.main() == 2
    assert "LEDGER_OWNER_ID" in capsys.readouterr().err


def test_main_without_business_or_on_failure(monkeypatch, capsys) -> None:
    _patch(monkeypatch, business=None)
    assert reconcile_balances_cli.main() == 1

    _patch(
        monkeypatch,
        business=BUSINESS,
        result=OperationResult.fail(PersistenceError("db down")),
    )
    assert reconcile_balances_cli.main() == 1
    assert "db down" in capsys.readouterr().err


def test_main_reports_lookup_failure(monkeypatch, capsys) -> None:
    build_reconcile = _patch(
        monkeypatch,
        lookup_result=OperationResult.fail(PersistenceError("db down")),
    )

    assert reconcile_balances_cli.main() == 1
    assert "Business lookup failed: db down" in capsys.readouterr().err
    build_reconcile.assert_not_called()
