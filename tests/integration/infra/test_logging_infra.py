from __future__ import annotations

"""
Integration tests for Logging Infrastructure.

Verifies the queue-based bootstrap, replacement on reconfiguration, the
store-aware record context and the rotating diagnostics file.
"""

import logging
from logging.handlers import QueueHandler
from pathlib import Path

import pytest

from objsnoop.infra.logging import (
    LoggingConfig,
    StoreContextFilter,
    configure_logging,
    logging_config_from,
    shutdown_logging,
    store_context,
)
from objsnoop.infra.logging.config import CONSOLE_FMT, DEBUG_CONSOLE_FMT


@pytest.fixture(autouse=True)
def reset_logging() -> None:
    """Remove the objsnoop installation after each test."""
    yield
    shutdown_logging()


def _queue_handlers() -> list:
    return [h for h in logging.getLogger().handlers if isinstance(h, QueueHandler)]


def test_reconfiguration_replaces_installation() -> None:
    """TC-01: Verify that repeated setup never stacks queue handlers."""
    configure_logging(LoggingConfig(level="INFO"))
    configure_logging(LoggingConfig(level="DEBUG"))

    assert len(_queue_handlers()) == 1
    assert logging.getLogger().level == logging.DEBUG

    shutdown_logging()
    assert _queue_handlers() == []


def test_file_records_carry_store_id(tmp_path: Path) -> None:
    """TC-02: Verify file entries name the store being inspected."""
    log_file = tmp_path / "logs" / "objsnoop.log"
    configure_logging(LoggingConfig(level="DEBUG", log_file=str(log_file)))
    logger = logging.getLogger("objsnoop.test")

    with store_context("site-plan"):
        logger.info("inside")
    logger.info("outside")

    # Stopping the listener flushes the queue
    shutdown_logging()

    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert any("| site-plan | objsnoop.test | inside" in line for line in lines)
    assert any("| - | objsnoop.test | outside" in line for line in lines)


def test_log_rotation(tmp_path: Path) -> None:
    """TC-03: Verify file rotation when the size limit is exceeded."""
    log_file = tmp_path / "rotate.log"
    configure_logging(LoggingConfig(
        level="DEBUG",
        log_file=str(log_file),
        max_bytes=100,
        backup_count=1,
    ))
    logger = logging.getLogger("objsnoop.rotate")

    for _ in range(10):
        logger.debug("This is a long log message to trigger rotation." * 5)
    shutdown_logging()

    assert log_file.exists()
    assert (tmp_path / "rotate.log.1").exists(), "Rotation backup file was not created."


def test_unwritable_log_file_keeps_console(tmp_path: Path, capsys) -> None:
    """TC-04: Verify a bad log path only produces a warning."""
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    configure_logging(LoggingConfig(log_file=str(blocker / "objsnoop.log")))

    assert "Cannot open log file" in capsys.readouterr().err
    assert len(_queue_handlers()) == 1


def test_store_filter_keeps_explicit_store() -> None:
    """TC-05: Verify records given a store explicitly are left untouched."""
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
    record.store = "explicit"

    with store_context("ambient"):
        assert StoreContextFilter().filter(record) is True

    assert record.store == "explicit"


def test_config_from_application_settings() -> None:
    """TC-06: Verify the console format follows the configured level."""
    quiet = logging_config_from({"log_level": "WARNING"})
    verbose = logging_config_from({"log_level": "DEBUG"}, "/tmp/x.log")

    assert quiet.level_int == logging.WARNING
    assert quiet.console_fmt == CONSOLE_FMT
    assert quiet.log_file is None
    assert verbose.console_fmt == DEBUG_CONSOLE_FMT
    assert verbose.log_file == "/tmp/x.log"
    assert LoggingConfig(level="bogus").level_int == logging.INFO
