"""Settings of the configuration resolver itself.

FactorySettings only changes how resolution behaves (diagnostic output, file
and variable names). It never contributes keys to the resolved configuration.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from dbcontext_factory.constants import (
    BASE_SETTINGS_FILE,
    DEFAULT_ENVIRONMENT,
    ENVIRONMENT_KEY,
    ENVIRONMENT_VARIABLE,
    SETTINGS_ENV_PREFIX,
)


class FactorySettings(BaseSettings):
    """Immutable options for ConfigurationResolver.

    All options can be overridden via environment variables with the
    DBCONTEXT_FACTORY_ prefix. For example, logging_disabled can be set via
    DBCONTEXT_FACTORY_LOGGING_DISABLED=true.

    Attributes:
        logging_disabled: Suppress diagnostic output during resolution
        base_file_name: Required settings file, relative to the working directory
        environment_variable: Variable consulted for the environment name
        default_environment: Environment name used when no source names one
        environment_key: Command-line key that selects the environment
    """

    model_config = SettingsConfigDict(
        env_prefix=SETTINGS_ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    logging_disabled: bool = Field(default=False)

    base_file_name: str = Field(default=BASE_SETTINGS_FILE)
    environment_variable: str = Field(default=ENVIRONMENT_VARIABLE)
    default_environment: str = Field(default=DEFAULT_ENVIRONMENT)
    environment_key: str = Field(default=ENVIRONMENT_KEY)

    def environment_file_name(self, environment_name: str) -> str:
        """Return the optional settings file name for an environment.

        The name is derived from base_file_name, so "appsettings.json" and
        "Staging" give "appsettings.Staging.json".
        """
        stem, dot, suffix = self.base_file_name.rpartition(".")
        if not dot:
            return f"{self.base_file_name}.{environment_name}"
        return f"{stem}.{environment_name}.{suffix}"


_factory_settings: Optional[FactorySettings] = None


def get_settings() -> FactorySettings:
    """Get singleton instance of the resolver settings.

    Settings are loaded once and cached for the process lifetime.

    Returns:
        FactorySettings instance
    """
    global _factory_settings

    if _factory_settings is None:
        _factory_settings = FactorySettings()

    return _factory_settings
