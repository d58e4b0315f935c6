"""
Error types and user-facing error reporting for helperkit.

Argument problems raise ``InvalidArgumentError`` (or ``MissingArgumentError``
for ``None`` values). Filesystem state problems use Python's own ``OSError``
subclasses so callers can catch them the usual way.
"""

import logging
import traceback
from typing import Any, Optional, Tuple

logger = logging.getLogger(__name__)


class HelperKitError(Exception):
    """Base class for errors raised by helperkit."""


class InvalidArgumentError(HelperKitError, ValueError):
    """Raised when an argument has an invalid value."""

    def __init__(self, argument_name: str, message: str, value: Any = None):
        self.argument_name = argument_name
        self.value = value
        super().__init__(f"{message} (argument: {argument_name})")


class MissingArgumentError(InvalidArgumentError, TypeError):
    """Raised when a required argument is None."""

    def __init__(self, argument_name: str, message: Optional[str] = None):
        super().__init__(argument_name, message or f"Provided {argument_name} is None")


class InvalidExtensionError(HelperKitError, ValueError):
    """Raised when a file does not carry one of the accepted extensions."""


class SchemaMismatchError(HelperKitError, ValueError):
    """Raised when an XML document does not match its schema."""


# Checked in order, so subclasses come before their bases.
ERROR_MESSAGES = [
    (MissingArgumentError, lambda e: (
        "Missing value",
        f"A required value was not provided.\n\n{e}"
    )),
    (InvalidArgumentError, lambda e: (
        "Invalid value",
        f"One of the provided values is not valid.\n\n{e}"
    )),
    (InvalidExtensionError, lambda e: (
        "Unsupported file type",
        f"The file does not have an accepted extension.\n\n{e}"
    )),
    (SchemaMismatchError, lambda e: (
        "Document does not match schema",
        f"The XML document failed schema validation.\n\n{e}"
    )),
    (FileExistsError, lambda e: (
        "Already exists",
        f"The target already exists and would be overwritten.\n\n{e}"
    )),
    (FileNotFoundError, lambda e: (
        "Not found",
        f"The file or directory could not be found. It may have been moved or deleted.\n\n{e}"
    )),
    (NotADirectoryError, lambda e: (
        "Not a directory",
        f"Expected a directory but got a file.\n\n{e}"
    )),
    (IsADirectoryError, lambda e: (
        "Not a file",
        f"Expected a file but got a directory.\n\n{e}"
    )),
    (PermissionError, lambda e: (
        "Permission denied",
        "Unable to access this location. Please check that you have permission "
        "to read/write to it."
    )),
    (OSError, lambda e: (
        "Disk error",
        "Unable to read or write files. Please check:\n\n"
        "• You have enough disk space\n"
        "• The drive isn't disconnected\n"
        "• You have write permission to the target folder"
    )),
]


def get_friendly_message(error: Exception) -> Tuple[str, str]:
    """Get user-friendly title and message for an error"""
    for error_type, msg_func in ERROR_MESSAGES:
        if isinstance(error, error_type):
            return msg_func(error)

    from .logging_config import get_log_file_path

    return (
        "Something went wrong",
        f"An unexpected error occurred:\n\n{str(error)[:200]}\n\n"
        "Please try again. If the problem persists, check the log file:\n"
        f"{get_log_file_path()}"
    )


def handle_error(error: Exception, context: str = "") -> Tuple[str, str]:
    """Log error and return friendly message"""
    logger.error(f"Error in {context}: {error}")
    logger.debug("".join(traceback.format_exception(type(error), error, error.__traceback__)))

    return get_friendly_message(error)
