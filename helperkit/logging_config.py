"""
Centralized logging configuration for helperkit.

Library modules only call ``logging.getLogger(__name__)``; handlers are
installed by ``setup_logging``, which the CLI calls once at startup.
Logs are stored in ~/.helperkit/logs/ with rotation.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional


# Global flag to prevent duplicate initialization
_logging_initialized = False

LOGGER_NAMESPACE = "helperkit"
LOG_DIR = Path.home() / ".helperkit" / "logs"
LOG_FILE_NAME = "helperkit.log"


def get_log_dir() -> Path:
    """Get the log directory, creating it if necessary."""
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    return LOG_DIR


def get_log_file_path() -> Path:
    """Get the path to the main log file."""
    return LOG_DIR / LOG_FILE_NAME


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    console: bool = True,
    force: bool = False,
    debug_mode: bool = False,
) -> logging.Logger:
    """
    Configure logging for the helperkit namespace.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional custom log file path. If None, uses the default
            file under LOG_DIR.
        console: Whether to log to stderr
        force: Force reconfiguration even if already initialized
        debug_mode: Enable verbose debug logging

    Returns:
        The helperkit logger
    """
    global _logging_initialized

    root_logger = logging.getLogger(LOGGER_NAMESPACE)

    if _logging_initialized and not force:
        return root_logger

    if debug_mode:
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, level.upper(), logging.INFO)

    root_logger.setLevel(log_level)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
    else:
        log_path = get_log_dir() / LOG_FILE_NAME

    log_path.parent.mkdir(parents=True, exist_ok=True)

    # Rotating file handler: 5MB max, keep 3 backups
    file_handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG if debug_mode else log_level)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    _logging_initialized = True

    root_logger.debug(f"Logging initialized: level={level}, file={log_path}")

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a specific module.

    Usage:
        from helperkit.logging_config import get_logger
        logger = get_logger(__name__)
    """
    return logging.getLogger(name)
