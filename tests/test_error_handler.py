"""
Tests for helperkit/error_handler.py

Tests the error hierarchy, exception-to-friendly-message mapping and the
logging done by handle_error.
"""

import pytest

from helperkit.error_handler import (
    HelperKitError,
    InvalidArgumentError,
    InvalidExtensionError,
    MissingArgumentError,
    SchemaMismatchError,
    get_friendly_message,
    handle_error,
)


# ---------------------------------------------------------------------------
# Error hierarchy
# ---------------------------------------------------------------------------

class TestErrorHierarchy:
    def test_invalid_argument_details(self):
        err = InvalidArgumentError("steps", "Invalid value of steps: -1", -1)
        assert err.argument_name == "steps"
        assert err.value == -1
        assert "steps" in str(err)
        assert isinstance(err, ValueError)
        assert isinstance(err, HelperKitError)

    def test_missing_argument_is_also_type_error(self):
        err = MissingArgumentError("label")
        assert isinstance(err, InvalidArgumentError)
        assert isinstance(err, TypeError)
        assert "label" in str(err)

    def test_domain_errors_are_value_errors(self):
        assert issubclass(InvalidExtensionError, ValueError)
        assert issubclass(SchemaMismatchError, ValueError)


# ---------------------------------------------------------------------------
# get_friendly_message
# ---------------------------------------------------------------------------

class TestGetFriendlyMessage:
    def test_missing_argument_before_invalid_argument(self):
        title, _ = get_friendly_message(MissingArgumentError("value"))
        assert title == "Missing value"

    def test_invalid_argument(self):
        title, msg = get_friendly_message(InvalidArgumentError("steps", "negative"))
        assert title == "Invalid value"
        assert "negative" in msg

    def test_extension(self):
        title, _ = get_friendly_message(InvalidExtensionError("bad .txt"))
        assert "file type" in title.lower()

    def test_schema_mismatch(self):
        title, _ = get_friendly_message(SchemaMismatchError("mismatch"))
        assert "schema" in title.lower()

    def test_file_not_found(self):
        title, msg = get_friendly_message(FileNotFoundError("Directory does not exist: /x"))
        assert "not found" in title.lower()
        assert "/x" in msg

    def test_file_exists(self):
        title, _ = get_friendly_message(FileExistsError("exists"))
        assert "exists" in title.lower()

    def test_not_a_directory(self):
        title, _ = get_friendly_message(NotADirectoryError("file"))
        assert "directory" in title.lower()

    def test_permission_error(self):
        title, _ = get_friendly_message(PermissionError("denied"))
        assert "permission" in title.lower()

    def test_generic_os_error(self):
        title, _ = get_friendly_message(OSError("disk full"))
        assert "disk" in title.lower()

    def test_default_fallback_points_to_log(self):
        title, msg = get_friendly_message(RuntimeError("something totally unexpected"))
        assert title == "Something went wrong"
        assert "something totally unexpected" in msg
        assert "helperkit.log" in msg


# ---------------------------------------------------------------------------
# handle_error
# ---------------------------------------------------------------------------

class TestHandleError:
    def test_returns_friendly_tuple_and_logs(self, caplog):
        with caplog.at_level("ERROR", logger="helperkit.error_handler"):
            title, msg = handle_error(FileNotFoundError("test.xml"), "loading schema")
        assert "not found" in title.lower()
        assert "loading schema" in caplog.text
