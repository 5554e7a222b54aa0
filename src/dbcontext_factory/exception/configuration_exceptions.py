"""Custom exceptions for dbcontext_factory.

All custom exceptions inherit from DbContextFactoryException so callers can
catch a single type.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union


class DbContextFactoryException(Exception):
    """Base exception for all dbcontext_factory errors."""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize exception.

        Args:
            message: Human-readable error message
            code: Error code for programmatic handling
            details: Additional error context
        """
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)


# Settings file errors
class ConfigurationLoadError(DbContextFactoryException):
    """A settings source could not be loaded."""

    def __init__(self, message: str, path: Union[str, Path], **kwargs):
        details = kwargs.pop("details", {})
        details["path"] = str(path)
        self.path = Path(path)

        super().__init__(
            message=message,
            code=kwargs.pop("code", "CONFIGURATION_LOAD_ERROR"),
            details=details,
            **kwargs,
        )


class MissingRequiredSourceError(ConfigurationLoadError):
    """The required base settings file does not exist."""

    def __init__(self, path: Union[str, Path], **kwargs):
        super().__init__(
            message=f"Required settings file not found: {path}",
            path=path,
            code="MISSING_REQUIRED_SOURCE",
            **kwargs,
        )


class MalformedSourceError(ConfigurationLoadError):
    """A settings file exists but is not a valid key-value document."""

    def __init__(self, path: Union[str, Path], error: str, **kwargs):
        details = kwargs.pop("details", {})
        details["error"] = error
        self.error = error

        super().__init__(
            message=f"Could not parse settings file {path}: {error}",
            path=path,
            code="MALFORMED_SOURCE",
            details=details,
            **kwargs,
        )


# Command line errors
class CommandLineFormatError(DbContextFactoryException):
    """A command-line token or switch mapping is not well formed."""

    def __init__(self, message: str, token: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", {})
        if token is not None:
            details["token"] = token

        super().__init__(
            message=message,
            code="COMMAND_LINE_FORMAT_ERROR",
            details=details,
            **kwargs,
        )


# Context errors
class MissingConnectionStringError(DbContextFactoryException):
    """The resolved configuration has no connection string with this name."""

    def __init__(self, name: str, **kwargs):
        super().__init__(
            message=f"Connection string not found: {name}",
            code="MISSING_CONNECTION_STRING",
            details={"name": name},
            **kwargs,
        )
