"""Tests for the init_db_cli adapter."""

from unittest.mock import MagicMock

from sqlalchemy import create_engine, inspect
from sqlalchemy.pool import StaticPool

from src.adapters import init_db_cli


def test_main_creates_ledger_tables(monkeypatch, capsys) -> None:
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    adapter = MagicMock()
    adapter.get_ledger_engine.return_value = engine
    monkeypatch.setattr(init_db_cli, "build_database_adapter", lambda: adapter)
    monkeypatch.setattr(init_db_cli, "get_app_logger", lambda: MagicMock())

    init_db_cli.main()
    init_db_cli.main()

    tables = set(inspect(engine).get_table_names())
    assert {"businesses", "sales", "expenses"} <= tables
    assert "Ledger tables are ready." in capsys.readouterr().out
