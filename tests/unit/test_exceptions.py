"""Unit tests for the exception hierarchy in dbcontext_factory.exception.

Verifies error codes, messages, details and the inheritance chain.
"""

from pathlib import Path

import pytest

from dbcontext_factory.exception import (
    CommandLineFormatError,
    ConfigurationLoadError,
    DbContextFactoryException,
    MalformedSourceError,
    MissingConnectionStringError,
    MissingRequiredSourceError,
)

# ---------------------------------------------------------------------------
# DbContextFactoryException - base class contract
# ---------------------------------------------------------------------------


class TestDbContextFactoryException:
    """Tests for the DbContextFactoryException base class."""

    def test_stores_message(self) -> None:
        """The message is available on the message attribute and str()."""
        exception = DbContextFactoryException("something broke")

        assert exception.message == "something broke"
        assert str(exception) == "something broke"

    def test_default_error_code_is_internal_error(self) -> None:
        """Defaults to 'INTERNAL_ERROR' when no code is given."""
        assert DbContextFactoryException("error").code == "INTERNAL_ERROR"

    def test_default_details_is_empty_dict(self) -> None:
        """Details default to an empty dict."""
        assert DbContextFactoryException("error").details == {}

    def test_supports_exception_chaining(self) -> None:
        """The original cause is preserved with 'raise ... from'."""
        with pytest.raises(DbContextFactoryException) as exc_info:
            try:
                raise ValueError("root cause")
            except ValueError as e:
                raise DbContextFactoryException("wrapped") from e

        assert isinstance(exc_info.value.__cause__, ValueError)


# ---------------------------------------------------------------------------
# Configuration load errors
# ---------------------------------------------------------------------------


class TestConfigurationLoadErrors:
    """Tests for the settings file error types."""

    def test_missing_required_source(self) -> None:
        """MissingRequiredSourceError carries code and path."""
        exception = MissingRequiredSourceError("/app/appsettings.json")

        assert exception.code == "MISSING_REQUIRED_SOURCE"
        assert exception.path == Path("/app/appsettings.json")
        assert exception.details == {"path": "/app/appsettings.json"}
        assert "/app/appsettings.json" in exception.message

    def test_malformed_source(self) -> None:
        """MalformedSourceError carries the parse error text."""
        exception = MalformedSourceError("/app/appsettings.json", "Expecting value")

        assert exception.code == "MALFORMED_SOURCE"
        assert exception.error == "Expecting value"
        assert exception.details["error"] == "Expecting value"
        assert "Expecting value" in exception.message

    @pytest.mark.parametrize(
        "exception",
        [
            MissingRequiredSourceError("a.json"),
            MalformedSourceError("a.json", "bad"),
        ],
    )
    def test_inherit_from_configuration_load_error(self, exception) -> None:
        """Both file errors are ConfigurationLoadError and the base type."""
        assert isinstance(exception, ConfigurationLoadError)
        assert isinstance(exception, DbContextFactoryException)

    def test_configuration_load_error_default_code(self) -> None:
        """ConfigurationLoadError defaults to CONFIGURATION_LOAD_ERROR."""
        exception = ConfigurationLoadError("unreadable", path="a.json")

        assert exception.code == "CONFIGURATION_LOAD_ERROR"


# ---------------------------------------------------------------------------
# Other errors
# ---------------------------------------------------------------------------


class TestOtherErrors:
    """Tests for command-line and connection-string errors."""

    def test_command_line_format_error(self) -> None:
        """CommandLineFormatError records the offending token."""
        exception = CommandLineFormatError("bad switch", token="-x=1")

        assert exception.code == "COMMAND_LINE_FORMAT_ERROR"
        assert exception.details == {"token": "-x=1"}

    def test_missing_connection_string(self) -> None:
        """MissingConnectionStringError names the connection."""
        exception = MissingConnectionStringError("Default")

        assert exception.code == "MISSING_CONNECTION_STRING"
        assert exception.details == {"name": "Default"}
        assert exception.message == "Connection string not found: Default"
