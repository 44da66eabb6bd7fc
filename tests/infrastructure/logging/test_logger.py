"""Tests for the logging helpers."""

import logging
from unittest.mock import MagicMock

from src.infrastructure.logging import logger as logger_module


def test_logger_builder_writes_into_dated_log_file(tmp_path, monkeypatch):
    """Built loggers write to logs/<subdir>/<stamp>_<prefix>.log."""
    monkeypatch.setattr(logger_module, "get_project_root", lambda: tmp_path)
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "_today_stamp",
        staticmethod(lambda: "20240603"),
    )

    builder = (
        logger_module.LoggerBuilder()
        .name("ledger.test")
        .subdir("reports")
        .prefix("report_logs")
        .console(False)
        .level(logging.DEBUG)
    )
    built = builder.build()

    assert built.name == "ledger.test"
    assert built.level == logging.DEBUG
    assert built.propagate is False
    assert len(built.handlers) == 1
    expected = tmp_path / "logs" / "reports" / "20240603_report_logs.log"
    assert built.handlers[0].baseFilename == str(expected)
    assert builder.build() is built
    for handler in list(built.handlers):
        handler.close()
        built.removeHandler(handler)


def test_custom_handler_factories_receive_formatter(tmp_path, monkeypatch):
    monkeypatch.setattr(logger_module, "get_project_root", lambda: tmp_path)
    fmt = logging.Formatter("%(message)s")
    file_handler = logging.NullHandler()
    console_handler = logging.NullHandler()
    file_factory = MagicMock(return_value=file_handler)
    console_factory = MagicMock(return_value=console_handler)

    built = (
        logger_module.LoggerBuilder()
        .name("ledger.factories")
        .formatter(lambda: fmt)
        .file_handler(file_factory)
        .console_handler(console_factory)
        .build()
    )

    assert file_factory.call_args.args[1] is fmt
    console_factory.assert_called_once_with(fmt)
    assert built.handlers == [file_handler, console_handler]
    for handler in list(built.handlers):
        built.removeHandler(handler)


def test_default_handlers_log_at_info(tmp_path):
    fmt = logger_module.LoggerBuilder._default_formatter()
    file_handler = logger_module.LoggerBuilder._default_file_handler(
        tmp_path / "ledger.log",
        fmt,
    )
    console_handler = logger_module.LoggerBuilder._default_console_handler(fmt)

    assert file_handler.level == logging.INFO
    assert file_handler.formatter is fmt
    assert console_handler.level == logging.INFO
    assert console_handler.formatter is fmt
    file_handler.close()


def test_logger_singleton_delegates_to_underlying_logger(monkeypatch):
    fake_logger = MagicMock()
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "build",
        lambda self: fake_logger,
    )
    monkeypatch.setattr(logger_module.Logger, "_instance", None)

    logger = logger_module.Logger("ledger")
    logger.info("sale recorded")
    logger.warning("drift %s", "cash")
    logger.error("store down")
    logger.debug("dbg")
    logger.critical("crit")

    fake_logger.info.assert_called_with("sale recorded")
    fake_logger.warning.assert_called_with("drift %s", "cash")
    fake_logger.error.assert_called_with("store down")
    fake_logger.debug.assert_called_with("dbg")
    fake_logger.critical.assert_called_with("crit")
    assert logger_module.Logger("other") is logger


def test_app_and_usage_loggers_are_distinct_singletons(monkeypatch):
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "build",
        lambda self: MagicMock(),
    )
    monkeypatch.setattr(logger_module.AppLogger, "_instance", None)
    monkeypatch.setattr(logger_module.UsageLogger, "_instance", None)

    app_logger = logger_module.get_app_logger()
    usage_logger = logger_module.get_usage_logger()

    assert logger_module.get_app_logger() is app_logger
    assert logger_module.get_usage_logger() is usage_logger
    assert app_logger is not usage_logger
    assert app_logger.logger is not usage_logger.logger
