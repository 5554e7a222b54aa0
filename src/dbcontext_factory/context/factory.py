"""Context factory contract and the resolver-backed implementation."""

from typing import (
    Callable,
    Generic,
    Iterable,
    Optional,
    Protocol,
    TypeVar,
    runtime_checkable,
)

from dbcontext_factory.config import (
    ConfigurationResolver,
    FactorySettings,
    ResolvedConfiguration,
)
from dbcontext_factory.exception import MissingConnectionStringError

ContextT = TypeVar("ContextT")
ContextT_co = TypeVar("ContextT_co", covariant=True)


@runtime_checkable
class ContextFactory(Protocol[ContextT_co]):
    """Anything that builds a database-access context from process arguments."""

    def create_context(self, args: Optional[Iterable[str]] = None) -> ContextT_co:
        ...


class DesignTimeContextFactory(Generic[ContextT]):
    """ContextFactory that resolves configuration and hands it to a builder.

    Example:
        factory = DesignTimeContextFactory(
            lambda configuration: MyContext(configuration["Database.Url"])
        )
        context = factory.create_context(["--environment=Staging"])

    Attributes:
        builder: Callable turning a ResolvedConfiguration into a context
        resolver: ConfigurationResolver used for every call
    """

    def __init__(
        self,
        builder: Callable[[ResolvedConfiguration], ContextT],
        settings: Optional[FactorySettings] = None,
        resolver: Optional[ConfigurationResolver] = None,
    ):
        self.builder = builder
        self.resolver = resolver or ConfigurationResolver(settings=settings)

    def create_context(self, args: Optional[Iterable[str]] = None) -> ContextT:
        configuration = self.resolver.resolve(args)
        return self.builder(configuration)


def require_connection_string(configuration: ResolvedConfiguration, name: str) -> str:
    """Return ``ConnectionStrings.<name>`` or raise MissingConnectionStringError."""
    connection_string = configuration.get_connection_string(name)
    if not connection_string:
        raise MissingConnectionStringError(name)
    return connection_string
