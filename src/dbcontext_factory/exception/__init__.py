"""Exception package.

Every error raised by dbcontext_factory derives from DbContextFactoryException.
"""

from dbcontext_factory.exception.configuration_exceptions import (
    CommandLineFormatError,
    ConfigurationLoadError,
    DbContextFactoryException,
    MalformedSourceError,
    MissingConnectionStringError,
    MissingRequiredSourceError,
)

__all__ = [
    "CommandLineFormatError",
    "ConfigurationLoadError",
    "DbContextFactoryException",
    "MalformedSourceError",
    "MissingConnectionStringError",
    "MissingRequiredSourceError",
]
