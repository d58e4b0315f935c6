"""
helperkit
=========

Small, independent helper utilities: filesystem validation and directory
copy/move/clean, a terminal progress bar with ETA estimation, XML schema
validation, culture scopes, and exception serialization.
"""

__version__ = "0.1.0"
__author__ = "helperkit"

# Export key classes for convenience
from .error_handler import (
    HelperKitError,
    InvalidArgumentError,
    InvalidExtensionError,
    MissingArgumentError,
    SchemaMismatchError,
)
from .progress import ProgressBar, track
from .culture import CultureContext
from .diagnostics import ExceptionNode
