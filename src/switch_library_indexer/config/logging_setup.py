from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
ERROR_LOG_MAX_BYTES = 10 * 1024 * 1024
ERROR_LOG_BACKUPS = 5

# chatty third-party loggers kept at WARNING regardless of the configured level
QUIET_LOGGERS = ("filelock",)


def _to_level(name: str, default: int) -> int:
    value = logging.getLevelName(str(name or "").strip().upper())
    return value if isinstance(value, int) else default


def configure_logging(
    level: str,
    error_log_path: Path,
    error_log_level: str = "warning",
) -> None:
    """Route records to the console and to a rotating error log.

    The console follows ``level``; the error log only keeps records at or
    above ``error_log_level``. Unknown level names fall back to INFO and
    WARNING respectively.
    """
    console_level = _to_level(level, logging.INFO)
    file_level = _to_level(error_log_level, logging.WARNING)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(formatter)

    error_log_path.parent.mkdir(parents=True, exist_ok=True)
    error_file = RotatingFileHandler(
        error_log_path,
        maxBytes=ERROR_LOG_MAX_BYTES,
        backupCount=ERROR_LOG_BACKUPS,
        encoding="utf-8",
    )
    error_file.setLevel(file_level)
    error_file.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(min(console_level, file_level))
    root.addHandler(console)
    root.addHandler(error_file)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
