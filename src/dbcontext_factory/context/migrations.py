"""Database migration utilities using Alembic.

The Alembic ``sqlalchemy.url`` option is filled from the resolved
configuration, so migrations run against the database selected by the
environment name, environment variables and command-line arguments.
"""

from pathlib import Path
from typing import Iterable, Optional, Union

from alembic import command
from alembic.config import Config
from sqlalchemy import MetaData
from sqlalchemy.engine import Engine

from dbcontext_factory.config import (
    FactorySettings,
    ResolvedConfiguration,
    resolve_configuration,
)
from dbcontext_factory.constants import DEFAULT_CONNECTION_NAME
from dbcontext_factory.context.factory import require_connection_string

PathLike = Union[str, Path]


def create_all_tables(engine: Engine, metadata: MetaData) -> None:
    """Create all tables of ``metadata``.

    For development only. Production should use Alembic migrations.
    """
    with engine.begin() as conn:
        metadata.create_all(conn)


def drop_all_tables(engine: Engine, metadata: MetaData) -> None:
    """Drop all tables of ``metadata``.

    WARNING: This deletes all data. Use with caution.
    """
    with engine.begin() as conn:
        metadata.drop_all(conn)


def build_alembic_config(
    configuration: ResolvedConfiguration,
    connection_name: str = DEFAULT_CONNECTION_NAME,
    alembic_ini_path: Optional[PathLike] = None,
    script_location: Optional[PathLike] = None,
) -> Config:
    """Get Alembic configuration pointing at the resolved database.

    Args:
        configuration: Resolved configuration holding the connection string
        connection_name: Name under ConnectionStrings
        alembic_ini_path: alembic.ini to load; defaults to ./alembic.ini when present
        script_location: Overrides the ini's script_location

    Returns:
        Alembic Config instance

    Raises:
        MissingConnectionStringError: No URL under the connection name
    """
    if alembic_ini_path is None:
        default_ini = Path.cwd() / "alembic.ini"
        alembic_ini_path = default_ini if default_ini.is_file() else None

    config = Config(str(alembic_ini_path)) if alembic_ini_path else Config()

    if script_location is not None:
        config.set_main_option("script_location", str(script_location))

    url = require_connection_string(configuration, connection_name)
    # ConfigParser interpolation
    config.set_main_option("sqlalchemy.url", url.replace("%", "%%"))
    config.attributes["environment_name"] = configuration.environment_name
    return config


def _config_for(
    args: Optional[Iterable[str]],
    connection_name: str,
    settings: Optional[FactorySettings],
    alembic_ini_path: Optional[PathLike],
    script_location: Optional[PathLike],
) -> Config:
    configuration = resolve_configuration(args, settings=settings)
    return build_alembic_config(
        configuration, connection_name, alembic_ini_path, script_location
    )


def run_migrations_upgrade(
    args: Optional[Iterable[str]] = None,
    revision: str = "head",
    connection_name: str = DEFAULT_CONNECTION_NAME,
    settings: Optional[FactorySettings] = None,
    alembic_ini_path: Optional[PathLike] = None,
    script_location: Optional[PathLike] = None,
) -> None:
    """Run database migrations upgrade.

    Args:
        args: Command-line arguments used for configuration resolution
        revision: Target revision (default: head)
    """
    config = _config_for(
        args, connection_name, settings, alembic_ini_path, script_location
    )
    command.upgrade(config, revision)


def run_migrations_downgrade(
    revision: str,
    args: Optional[Iterable[str]] = None,
    connection_name: str = DEFAULT_CONNECTION_NAME,
    settings: Optional[FactorySettings] = None,
    alembic_ini_path: Optional[PathLike] = None,
    script_location: Optional[PathLike] = None,
) -> None:
    """Run database migrations downgrade.

    Args:
        revision: Target revision
        args: Command-line arguments used for configuration resolution
    """
    config = _config_for(
        args, connection_name, settings, alembic_ini_path, script_location
    )
    command.downgrade(config, revision)


def generate_migration(
    message: str,
    args: Optional[Iterable[str]] = None,
    autogenerate: bool = True,
    connection_name: str = DEFAULT_CONNECTION_NAME,
    settings: Optional[FactorySettings] = None,
    alembic_ini_path: Optional[PathLike] = None,
    script_location: Optional[PathLike] = None,
) -> None:
    """Generate new migration file.

    Args:
        message: Migration message
        args: Command-line arguments used for configuration resolution
        autogenerate: Whether to autogenerate from model changes
    """
    config = _config_for(
        args, connection_name, settings, alembic_ini_path, script_location
    )
    command.revision(config, message=message, autogenerate=autogenerate)
