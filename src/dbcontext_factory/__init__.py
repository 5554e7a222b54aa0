"""dbcontext-factory - design-time database context factories.

Builds database-access contexts for design-time tooling (migrations, schema
inspection) from a layered configuration:

- Environment variables
- Command-line arguments
- appsettings.json (required)
- appsettings.<environment>.json (optional)

The environment name comes from ``--environment``, then
ASPNETCORE_ENVIRONMENT, then "Production".

Version: 1.0.0
"""

from dbcontext_factory.config import (
    ConfigurationResolver,
    FactorySettings,
    ResolvedConfiguration,
    resolve_configuration,
)
from dbcontext_factory.context import (
    ContextFactory,
    DesignTimeContextFactory,
    SQLAlchemySessionFactory,
)

__version__ = "1.0.0"

__all__ = [
    "ConfigurationResolver",
    "ContextFactory",
    "DesignTimeContextFactory",
    "FactorySettings",
    "ResolvedConfiguration",
    "SQLAlchemySessionFactory",
    "resolve_configuration",
]
