"""SQLAlchemy session factory driven by the resolved configuration.

The database URL is read from ``ConnectionStrings.<connection_name>``, which
can come from any layer: ``ConnectionStrings__Default`` in the environment,
``--ConnectionStrings:Default=...`` on the command line, or the settings
files.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import NullPool

from dbcontext_factory.config import ConfigurationResolver, FactorySettings
from dbcontext_factory.constants import DEFAULT_CONNECTION_NAME
from dbcontext_factory.context.factory import require_connection_string

logger = logging.getLogger(__name__)


class SQLAlchemySessionFactory:
    """ContextFactory producing SQLAlchemy sessions.

    Attributes:
        connection_name: Name under ConnectionStrings holding the URL
        engine_options: Extra keyword arguments for create_engine
        resolver: ConfigurationResolver used for every call
    """

    def __init__(
        self,
        connection_name: str = DEFAULT_CONNECTION_NAME,
        settings: Optional[FactorySettings] = None,
        engine_options: Optional[Dict[str, Any]] = None,
        resolver: Optional[ConfigurationResolver] = None,
    ):
        self.connection_name = connection_name
        self.engine_options = dict(engine_options or {})
        self.resolver = resolver or ConfigurationResolver(settings=settings)

    def connection_url(self, args: Optional[Iterable[str]] = None) -> str:
        """Resolve configuration and return the database URL.

        Raises:
            MissingConnectionStringError: No URL under the connection name
        """
        configuration = self.resolver.resolve(args)
        return require_connection_string(configuration, self.connection_name)

    def create_engine(self, args: Optional[Iterable[str]] = None) -> Engine:
        """Create an engine for the resolved connection string.

        Engines use NullPool unless engine_options names another poolclass, so
        connections close with their session and nothing stays pooled between
        design-time calls.
        """
        options = {
            "echo": False,
            "pool_pre_ping": True,
            "poolclass": NullPool,
            **self.engine_options,
        }
        engine = create_engine(self.connection_url(args), **options)
        logger.debug(
            "Created engine for %s", engine.url.render_as_string(hide_password=True)
        )
        return engine

    def create_context(self, args: Optional[Iterable[str]] = None) -> Session:
        """Create a new session bound to a fresh engine.

        Closing the session releases its connection. Call
        ``session.get_bind().dispose()`` when a pooling poolclass was configured.
        """
        factory = sessionmaker(
            self.create_engine(args),
            class_=Session,
            expire_on_commit=False,
        )
        return factory()

    @contextmanager
    def session(self, args: Optional[Iterable[str]] = None) -> Iterator[Session]:
        """Session context manager that commits on success.

        Yields:
            Session instance

        Example:
            with factory.session(sys.argv[1:]) as session:
                session.execute(text("SELECT 1"))
        """
        session = self.create_context(args)
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
            session.get_bind().dispose()
