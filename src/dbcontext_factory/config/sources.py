"""Configuration sources merged by ConfigurationResolver.

Each source exposes a ``name`` used in diagnostics and a ``load()`` method
returning a flat mapping of dotted keys to values. Keys are compared without
regard to case; inside a single source the last assignment wins.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from dbcontext_factory.constants import KEY_DELIMITER
from dbcontext_factory.exception import (
    MalformedSourceError,
    MissingRequiredSourceError,
)

logger = logging.getLogger(__name__)


def normalize_key(key: str) -> str:
    """Convert host-style key separators (``__`` and ``:``) to dots."""
    return key.replace("__", KEY_DELIMITER).replace(":", KEY_DELIMITER)


class SourceData(Dict[str, Any]):
    """Flat layer mapping whose keys are unique ignoring case.

    Setting a key replaces any entry spelled with different case; the new
    spelling is kept.
    """

    def __init__(self) -> None:
        super().__init__()
        self._spellings: Dict[str, str] = {}

    def __setitem__(self, key: str, value: Any) -> None:
        folded = key.casefold()
        existing = self._spellings.get(folded)
        if existing is not None and existing != key:
            super().__delitem__(existing)
        self._spellings[folded] = key
        super().__setitem__(key, value)

    def __delitem__(self, key: str) -> None:
        super().__delitem__(key)
        del self._spellings[key.casefold()]

    def lookup(self, key: str, default: Any = None) -> Any:
        """Case-insensitive read."""
        existing = self._spellings.get(key.casefold())
        return default if existing is None else self[existing]


def lookup(data: Mapping[str, Any], key: str, default: Any = None) -> Any:
    """Case-insensitive read from a flat source mapping."""
    if isinstance(data, SourceData):
        return data.lookup(key, default)
    folded = key.casefold()
    for existing, value in data.items():
        if existing.casefold() == folded:
            return value
    return default


class EnvironmentVariablesSource:
    """All variables of the process environment as one flat layer."""

    name = "environment variables"

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self.environ = environ

    def load(self) -> SourceData:
        environ = os.environ if self.environ is None else self.environ
        data = SourceData()
        for key, value in environ.items():
            data[normalize_key(key)] = value
        return data


class JsonFileSource:
    """A JSON settings document flattened into dotted keys.

    Nested objects produce ``parent.child`` keys and arrays produce
    ``parent.0``, ``parent.1``... A ``:`` inside a property name is also a
    hierarchy separator, so ``{"ConnectionStrings:Default": ...}`` and
    ``{"ConnectionStrings": {"Default": ...}}`` give the same key. Empty
    objects and arrays keep their key with a ``None`` value. Scalar JSON
    types are preserved.

    Attributes:
        path: Location of the document
        optional: Whether a missing file is silently skipped
    """

    def __init__(self, path: Union[str, Path], optional: bool = False):
        self.path = Path(path)
        self.optional = optional

    @property
    def name(self) -> str:
        return f"json file {self.path}"

    def load(self) -> SourceData:
        """Read and flatten the document.

        Returns:
            Flat key-value mapping (empty for a missing optional file)

        Raises:
            MissingRequiredSourceError: Required file does not exist
            MalformedSourceError: File cannot be read or is not a JSON object
        """
        if not self.path.is_file():
            if self.optional:
                logger.debug("Optional settings file %s not present", self.path)
                return SourceData()
            raise MissingRequiredSourceError(self.path)

        try:
            text = self.path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            raise MalformedSourceError(self.path, str(e)) from e

        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedSourceError(self.path, str(e)) from e

        if not isinstance(document, dict):
            raise MalformedSourceError(
                self.path,
                "top-level JSON value must be an object, "
                f"got {type(document).__name__}",
            )

        data = SourceData()
        _flatten(document, "", data)
        return data


def _flatten(value: Any, prefix: str, data: SourceData) -> None:
    if isinstance(value, dict):
        children = (
            (key.replace(":", KEY_DELIMITER), item) for key, item in value.items()
        )
    elif isinstance(value, list):
        children = ((str(index), item) for index, item in enumerate(value))
    else:
        data[prefix] = value
        return

    empty = True
    for key, child in children:
        empty = False
        _flatten(child, f"{prefix}{KEY_DELIMITER}{key}" if prefix else key, data)

    if empty and prefix:
        data[prefix] = None
