"""Shared constants for dbcontext_factory."""

BASE_SETTINGS_FILE = "appsettings.json"

ENVIRONMENT_VARIABLE = "ASPNETCORE_ENVIRONMENT"
ENVIRONMENT_KEY = "environment"
DEFAULT_ENVIRONMENT = "Production"

KEY_DELIMITER = "."
CONNECTION_STRINGS_SECTION = "ConnectionStrings"
DEFAULT_CONNECTION_NAME = "Default"

SETTINGS_ENV_PREFIX = "DBCONTEXT_FACTORY_"
