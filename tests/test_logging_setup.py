from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from switch_library_indexer.config.logging_setup import configure_logging


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_configure_logging_given_level_when_configured_then_installs_console_and_error_file(
    tmp_path: Path, restore_root_logger: logging.Logger
):
    error_log = tmp_path / "logs" / "app_errors.log"

    configure_logging("debug", error_log)

    root = restore_root_logger
    assert root.level == logging.DEBUG
    file_handlers = [h for h in root.handlers if isinstance(h, RotatingFileHandler)]
    assert len(file_handlers) == 1
    assert file_handlers[0].level == logging.WARNING
    assert error_log.parent.is_dir()
    assert logging.getLogger("filelock").level == logging.WARNING


def test_configure_logging_given_warning_when_logged_then_written_to_error_file(
    tmp_path: Path, restore_root_logger: logging.Logger
):
    error_log = tmp_path / "logs" / "app_errors.log"
    configure_logging("info", error_log)

    logging.getLogger("switch_library_indexer.test").info("plain info")
    logging.getLogger("switch_library_indexer.test").warning("stale cache")
    for handler in restore_root_logger.handlers:
        handler.flush()

    content = error_log.read_text("utf-8")
    assert "WARNING [switch_library_indexer.test] stale cache" in content
    assert "plain info" not in content


def test_configure_logging_given_error_file_level_when_configured_then_file_keeps_only_errors(
    tmp_path: Path, restore_root_logger: logging.Logger
):
    error_log = tmp_path / "logs" / "app_errors.log"
    configure_logging("info", error_log, error_log_level="error")

    logger = logging.getLogger("switch_library_indexer.test")
    logger.warning("stale cache")
    logger.error("store unavailable")
    for handler in restore_root_logger.handlers:
        handler.flush()

    file_handlers = [
        h for h in restore_root_logger.handlers if isinstance(h, RotatingFileHandler)
    ]
    assert file_handlers[0].level == logging.ERROR
    content = error_log.read_text("utf-8")
    assert "store unavailable" in content
    assert "stale cache" not in content


def test_configure_logging_given_unknown_level_names_when_configured_then_defaults_apply(
    tmp_path: Path, restore_root_logger: logging.Logger
):
    configure_logging("loud", tmp_path / "app_errors.log", error_log_level="")

    root = restore_root_logger
    assert root.level == logging.INFO
    file_handlers = [h for h in root.handlers if isinstance(h, RotatingFileHandler)]
    assert file_handlers[0].level == logging.WARNING
