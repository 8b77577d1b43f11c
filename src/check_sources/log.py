# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for check-sources."""

from __future__ import annotations

import logging
import os
from pathlib import Path

DEFAULT_LOG_LEVEL = os.getenv("CHECK_SOURCES_LOG_LEVEL", "WARNING").upper()
PACKAGE_LOGGER = "check_sources"
LOG_FILE_FORMAT = "[%(asctime)s] %(message)s"
LOG_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"
QUIET_LOGGERS = ("httpx", "httpcore")


def attach_log_file(path: str | os.PathLike[str]) -> logging.Handler:
    """
    Append package log events to `path`, one timestamped line per event.

    Missing parent directories are created; OSError propagates to the caller.
    """
    log_path = Path(path)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter(LOG_FILE_FORMAT, datefmt=LOG_FILE_DATEFMT))

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.addHandler(handler)
    if package_logger.getEffectiveLevel() > logging.INFO:
        package_logger.setLevel(logging.INFO)
    return handler


def setup_logging(
    level: str | None = None,
    *,
    verbose: bool = False,
    log_file: str | os.PathLike[str] | None = None,
) -> None:
    """Configure standard logging for CLI/library use."""
    effective_level = "INFO" if verbose else (level or DEFAULT_LOG_LEVEL).upper()
    numeric_level = getattr(logging, effective_level, logging.WARNING)

    # The console handler filters on its own level so a log file can still
    # receive INFO events while stderr stays quiet.
    console = logging.StreamHandler()
    console.setLevel(numeric_level)
    logging.basicConfig(
        level=numeric_level,
        format="%(levelname)s %(name)s: %(message)s",
        handlers=[console],
    )
    # httpx logs every request at INFO; keep -V output to our own events.
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    if log_file:
        attach_log_file(log_file)


__all__ = ["attach_log_file", "setup_logging"]
