"""Configuration resolution for design-time context factories.

Merges environment variables, command-line arguments and the
appsettings.json / appsettings.<environment>.json files into one
ResolvedConfiguration.
"""

from .factory_settings import FactorySettings, get_settings
from .resolved_configuration import ResolvedConfiguration
from .resolver import ConfigurationResolver, resolve_configuration

__all__ = [
    "ConfigurationResolver",
    "FactorySettings",
    "ResolvedConfiguration",
    "get_settings",
    "resolve_configuration",
]
