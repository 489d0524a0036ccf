"""
================================================================================
Logging Setup
================================================================================

Centralized Loguru configuration shared by every harness component.

The sink fans out to the console and to an append-only log file
(`logs/debug.log` by default). It is initialized lazily, once per process;
Loguru flushes and closes its handlers on interpreter exit.

Line format:
    [2024-05-01 12:00:00] INFO: SearchPage:search_for 'ducks' started.

Usage:
    from searchsuites.common import get_logger

    log = get_logger("SearchPage")
    log.info("started.")

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, Union

from loguru import logger

from .config_loader import PROJECT_ROOT, ConfigLoader


DEFAULT_LOG_FILE = PROJECT_ROOT / "logs" / "debug.log"

LOG_FORMAT = (
    "[{time:YYYY-MM-DD HH:mm:ss}] {level}: "
    "{extra[context]}:{function} {message}"
)

_logger_initialized: bool = False


def init_logger(
    level: Optional[str] = None,
    log_file: Optional[Union[str, Path]] = None,
) -> None:
    """
    Initializes the global Loguru logger with the harness configuration.

    Safe to call repeatedly; only the first call has an effect.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               Defaults to `logging.level` from config.
        log_file: Path of the append-only log file.
                  Defaults to `logging.file` from config, then logs/debug.log.
    """
    global _logger_initialized

    if _logger_initialized:
        return

    config = ConfigLoader()
    log_level = (level or config.get("logging.level", "DEBUG")).upper()
    log_path = Path(log_file or config.get("logging.file", "") or DEFAULT_LOG_FILE)
    if not log_path.is_absolute():
        log_path = PROJECT_ROOT / log_path

    logger.remove()
    logger.configure(extra={"context": "main"})
    logger.add(
        sys.stderr,
        level=log_level,
        format=LOG_FORMAT,
        colorize=False,
        backtrace=True,
        diagnose=False,
    )

    log_path.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        str(log_path),
        level=log_level,
        format=LOG_FORMAT,
        mode="a",
        encoding="utf-8",
    )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {log_level} (file: {log_path})")


def get_logger(context: str = "main"):
    """
    Returns the configured Loguru logger bound to `context`.

    Ensures the logger is initialized before returning.

    Args:
        context: Component name printed in front of every message.
    """
    if not _logger_initialized:
        init_logger()
    return logger.bind(context=context)


def reset_logger() -> None:
    """Drop all handlers so the next get_logger() call re-initializes."""
    global _logger_initialized
    logger.remove()
    _logger_initialized = False


__all__ = [
    "init_logger",
    "get_logger",
    "reset_logger",
    "LOG_FORMAT",
    "DEFAULT_LOG_FILE",
]
