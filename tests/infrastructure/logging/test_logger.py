"""Tests for the logging helpers."""

import logging
from unittest.mock import MagicMock

import pytest

from src.infrastructure.logging import logger as logger_module


@pytest.fixture
def fixed_log_root(tmp_path, monkeypatch):
    """Write log files under tmp_path with a fixed date stamp."""
    monkeypatch.setattr(logger_module, "get_project_root", lambda: tmp_path)
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "_today_stamp",
        staticmethod(lambda: "20240101"),
    )
    return tmp_path


def _file_handlers(logger: logging.Logger) -> list[logging.FileHandler]:
    return [h for h in logger.handlers if isinstance(h, logging.FileHandler)]


def test_builder_writes_daily_file_under_subdir(fixed_log_root):
    """LoggerBuilder should place files in logs/<subdir>/<date>_<prefix>.log."""
    builder = (
        logger_module.LoggerBuilder()
        .name("ledger_audit")
        .subdir("audit")
        .prefix("audit_logs")
        .console(False)
        .level(logging.WARNING)
    )
    audit_logger = builder.build()

    assert audit_logger.level == logging.WARNING
    assert audit_logger.propagate is False
    [handler] = _file_handlers(audit_logger)
    expected = fixed_log_root / "logs" / "audit" / "20240101_audit_logs.log"
    assert handler.baseFilename == str(expected)
    assert builder.build() is audit_logger
    assert len(audit_logger.handlers) == 1


def test_builder_without_subdir_uses_logs_root(fixed_log_root):
    root_logger = (
        logger_module.LoggerBuilder()
        .name("ledger_root_only")
        .prefix("root_logs")
        .build()
    )

    [handler] = _file_handlers(root_logger)
    assert handler.baseFilename == str(
        fixed_log_root / "logs" / "20240101_root_logs.log"
    )
    assert any(
        type(h) is logging.StreamHandler for h in root_logger.handlers
    )


def test_default_handlers_share_formatter(tmp_path):
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
    assert fmt._fmt == logger_module.LOG_FORMAT
    file_handler.close()


def test_logger_delegates_each_level(monkeypatch):
    """Logger wrappers should forward every level to the built logger."""
    built = MagicMock()
    monkeypatch.setattr(logger_module.LoggerBuilder, "build", lambda self: built)
    monkeypatch.setattr(logger_module.Logger, "_instance", None)

    wrapper = logger_module.Logger("ledger_test")
    for level in ("info", "warning", "error", "debug", "critical"):
        getattr(wrapper, level)(f"{level} message")
        getattr(built, level).assert_called_once_with(f"{level} message")

    assert logger_module.Logger("ignored") is wrapper


def test_get_app_logger_returns_singleton(monkeypatch):
    built = MagicMock()
    monkeypatch.setattr(logger_module.LoggerBuilder, "build", lambda self: built)
    monkeypatch.setattr(logger_module.AppLogger, "_instance", None)

    first = logger_module.get_app_logger()
    second = logger_module.get_app_logger()

    assert first is second
    assert first.logger is built
