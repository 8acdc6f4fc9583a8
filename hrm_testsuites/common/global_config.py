"""
================================================================================
Logging Setup
================================================================================

Centralized Loguru configuration for the suite and the test runner.
Settings come from the `logging` section of the suite configuration
(LOGGING_LEVEL, LOGGING_FILE, ... override it from the environment).

Author: Automation Team
License: MIT
================================================================================
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from hrm_testsuites.ui_testing.framework.config_loader import ConfigLoader


DEFAULT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"

_logger_initialized: bool = False


def init_logger(
    level: Optional[str] = None,
    format_str: Optional[str] = None,
    log_file: Optional[str] = None,
    config: Optional[ConfigLoader] = None,
    force: bool = False,
) -> None:
    """
    Initializes the global Loguru logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to config value.
        format_str: Custom log format string. Defaults to config value.
        log_file: Optional file sink. Defaults to config value (empty disables it).
        config: ConfigLoader to read defaults from
        force: Re-initialize even if already done
    """
    global _logger_initialized

    if _logger_initialized and not force:
        return

    config = config or ConfigLoader()
    log_level = (level or config.get("logging.level", "INFO")).upper()
    log_format = format_str or config.get("logging.format", DEFAULT_FORMAT)
    log_file = log_file if log_file is not None else config.get("logging.file", "")

    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level,
        format=log_format,
        colorize=True,
        backtrace=True,
        diagnose=False,
    )

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=log_level,
            format=log_format.replace("{level: <8}", "{level}"),
            rotation=config.get("logging.rotation", "10 MB"),
            retention=config.get("logging.retention", "7 days"),
            compression="zip",
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {log_level}")


def get_logger():
    """Return the configured Loguru logger, initializing it if needed."""
    if not _logger_initialized:
        init_logger()
    return logger
