"""Database-access context factories.

Provides the ContextFactory contract, a resolver-backed factory taking a
builder callable, a SQLAlchemy session factory and Alembic helpers.
"""

from .factory import ContextFactory, DesignTimeContextFactory, require_connection_string
from .sqlalchemy_factory import SQLAlchemySessionFactory

__all__ = [
    "ContextFactory",
    "DesignTimeContextFactory",
    "SQLAlchemySessionFactory",
    "require_connection_string",
]
