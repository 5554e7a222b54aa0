"""Root-level pytest configuration and shared fixtures.

Adds the src/ directory to sys.path so dbcontext_factory can be imported
without installation. Provides helpers for writing settings files into an
isolated working directory.
"""

import json
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dbcontext_factory.config import ConfigurationResolver, FactorySettings  # noqa: E402


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def write_json(directory: Path, name: str, document: Any) -> Path:
    """Write ``document`` as JSON to ``directory/name``.

    Args:
        directory: Target directory.
        name: File name, e.g. "appsettings.json".
        document: JSON-serializable value.

    Returns:
        Path of the written file.
    """
    path = directory / name
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


def make_resolver(
    environ: Optional[Dict[str, str]] = None,
    logging_disabled: bool = True,
    lines: Optional[List[str]] = None,
    **kwargs: Any,
) -> ConfigurationResolver:
    """Build a ConfigurationResolver isolated from the real environment.

    Args:
        environ: Environment mapping to use instead of os.environ.
        logging_disabled: Whether diagnostic lines are suppressed.
        lines: Optional list collecting diagnostic lines.

    Returns:
        Configured ConfigurationResolver.
    """
    settings = FactorySettings(logging_disabled=logging_disabled)
    log = lines.append if lines is not None else None
    return ConfigurationResolver(
        settings=settings,
        log=log,
        environ={} if environ is None else environ,
        **kwargs,
    )


# ---------------------------------------------------------------------------
# Pytest fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Provide an empty working directory and chdir into it."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def settings_file(workdir: Path) -> Callable[[str, Any], Path]:
    """Provide a writer for settings files in the working directory."""

    def _write(name: str, document: Any) -> Path:
        return write_json(workdir, name, document)

    return _write
