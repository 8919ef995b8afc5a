"""Tests for the logging helpers."""

import logging
from unittest.mock import MagicMock

from gnc_ledger.infrastructure.logging import logger as logger_module


def test_logger_builder_writes_under_project_logs(tmp_path, monkeypatch):
    """LoggerBuilder should place the log file under logs/<subdir>."""
    monkeypatch.setattr(logger_module, "get_project_root", lambda: tmp_path)
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "_today_stamp",
        staticmethod(lambda: "20240101"),
    )

    builder = (
        logger_module.LoggerBuilder()
        .name("ledger-test-builder")
        .subdir("loads")
        .prefix("book")
        .console(False)
        .level(logging.WARNING)
    )
    built = builder.build()

    assert built.name == "ledger-test-builder"
    assert built.level == logging.WARNING
    assert built.propagate is False
    assert len(built.handlers) == 1
    expected_path = tmp_path / "logs" / "loads" / "20240101_book.log"
    assert built.handlers[0].baseFilename == str(expected_path)
    assert builder.build() is built
    built.handlers[0].close()


def test_custom_handler_factories_are_used(tmp_path, monkeypatch):
    monkeypatch.setattr(logger_module, "get_project_root", lambda: tmp_path)
    fmt = logging.Formatter("%(message)s")
    file_handler = logging.NullHandler()
    console_handler = logging.NullHandler()

    built = (
        logger_module.LoggerBuilder()
        .name("ledger-test-factories")
        .formatter(lambda: fmt)
        .file_handler(lambda path, formatter: file_handler)
        .console_handler(lambda formatter: console_handler)
        .build()
    )

    assert built.handlers == [file_handler, console_handler]


def test_default_handlers_use_formatter(tmp_path):
    """Default handlers should apply the provided formatter."""
    fmt = logger_module.LoggerBuilder._default_formatter()
    file_handler = logger_module.LoggerBuilder._default_file_handler(
        tmp_path / "ledger.log",
        fmt,
    )
    console_handler = logger_module.LoggerBuilder._default_console_handler(fmt)

    assert isinstance(file_handler, logging.FileHandler)
    assert file_handler.level == logging.INFO
    assert file_handler.formatter is fmt
    assert isinstance(console_handler, logging.StreamHandler)
    assert console_handler.formatter is fmt
    file_handler.close()


def test_logger_singleton_delegates_to_underlying_logger(monkeypatch):
    """Logger methods should call the wrapped logger."""
    fake_logger = MagicMock()
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "build",
        lambda self: fake_logger,
    )
    monkeypatch.setattr(logger_module.Logger, "_instance", None)

    wrapped = logger_module.Logger("ledger")
    wrapped.info("loaded %s", "book")
    wrapped.warning("warn")
    wrapped.error("err")
    wrapped.debug("dbg")
    wrapped.critical("crit")

    fake_logger.info.assert_called_with("loaded %s", "book")
    fake_logger.warning.assert_called_with("warn")
    fake_logger.error.assert_called_with("err")
    fake_logger.debug.assert_called_with("dbg")
    fake_logger.critical.assert_called_with("crit")
    assert logger_module.Logger("other") is wrapped


def test_get_app_logger_is_a_singleton(monkeypatch):
    fake_logger = MagicMock()
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "build",
        lambda self: fake_logger,
    )
    monkeypatch.setattr(logger_module.AppLogger, "_instance", None)

    first = logger_module.get_app_logger()
    second = logger_module.get_app_logger()

    assert first is second
    assert isinstance(first, logger_module.AppLogger)
    assert first.logger is fake_logger
