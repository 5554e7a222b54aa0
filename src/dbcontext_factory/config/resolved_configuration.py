"""Read-only view over the merged configuration layers."""

from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Tuple

from dbcontext_factory.constants import CONNECTION_STRINGS_SECTION, KEY_DELIMITER


class ResolvedConfiguration(Mapping[str, Any]):
    """Final merged key-value view produced by one resolve() call.

    Layers are applied lowest precedence first, so a later layer overrides
    an earlier one on key collision. Lookups ignore case. Iteration follows
    the order in which keys first appeared; the reported key spelling is the
    one used by the winning layer.

    Attributes:
        environment_name: Environment selected for this resolution
        sources: Names of the loaded layers, lowest precedence first
    """

    def __init__(
        self,
        layers: Iterable[Tuple[str, Mapping[str, Any]]],
        environment_name: str,
    ):
        items: Dict[str, Tuple[str, Any]] = {}
        sources = []
        for source_name, data in layers:
            sources.append(source_name)
            for key, value in data.items():
                items[key.casefold()] = (key, value)

        self._items = items
        self.environment_name = environment_name
        self.sources: Tuple[str, ...] = tuple(sources)

    def __getitem__(self, key: str) -> Any:
        if not isinstance(key, str):
            raise KeyError(key)
        try:
            return self._items[key.casefold()][1]
        except KeyError:
            raise KeyError(key) from None

    def __iter__(self) -> Iterator[str]:
        return (key for key, _ in self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return (
            f"ResolvedConfiguration(environment_name={self.environment_name!r}, "
            f"items={self.as_dict()!r})"
        )

    def as_dict(self) -> Dict[str, Any]:
        """Return a plain dict copy of the merged values."""
        return dict(self._items.values())

    def get_section(self, prefix: str) -> Dict[str, Any]:
        """Return the entries below ``prefix`` with the prefix stripped.

        Example:
            {"Logging.Level": "Debug"} -> get_section("logging") == {"Level": "Debug"}
        """
        # compare whole segments; casefolding may change string length
        depth = prefix.count(KEY_DELIMITER) + 1
        folded = prefix.casefold()
        section: Dict[str, Any] = {}
        for key, value in self._items.values():
            segments = key.split(KEY_DELIMITER, depth)
            if len(segments) <= depth or not segments[depth]:
                continue
            if KEY_DELIMITER.join(segments[:depth]).casefold() == folded:
                section[segments[depth]] = value
        return section

    def get_connection_string(self, name: str) -> Optional[str]:
        """Shorthand for ``ConnectionStrings.<name>``."""
        value = self.get(f"{CONNECTION_STRINGS_SECTION}{KEY_DELIMITER}{name}")
        return None if value is None else str(value)
