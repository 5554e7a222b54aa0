"""Layered configuration resolution.

Layers, lowest precedence first:

1. Environment variables of the current process
2. Command-line arguments
3. Required base settings file (appsettings.json) in the working directory
4. Optional environment file (appsettings.<environment>.json), same directory

The environment name comes from the ``environment`` command-line key, then
the ASPNETCORE_ENVIRONMENT variable, then "Production". The command line is
parsed once and the result serves both the environment lookup and layer 2.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Iterable, Mapping, Optional

from dbcontext_factory.config.command_line import CommandLineSource
from dbcontext_factory.config.factory_settings import FactorySettings, get_settings
from dbcontext_factory.config.resolved_configuration import ResolvedConfiguration
from dbcontext_factory.config.sources import (
    EnvironmentVariablesSource,
    JsonFileSource,
    lookup,
)

logger = logging.getLogger(__name__)

DiagnosticSink = Callable[[str], None]


def log_to_logger(line: str) -> None:
    """Default diagnostic sink: the module logger at INFO."""
    logger.info(line)


class ConfigurationResolver:
    """Build a ResolvedConfiguration from arguments and ambient state.

    The resolver holds no mutable state. The working directory and process
    environment are read on every call and never modified.

    Attributes:
        settings: Resolver options (logging, file and variable names)
        log: Sink receiving diagnostic lines when logging is enabled
        environ: Environment mapping to read instead of os.environ
        switch_mappings: Short command-line switches mapped to keys
    """

    def __init__(
        self,
        settings: Optional[FactorySettings] = None,
        log: Optional[DiagnosticSink] = None,
        environ: Optional[Mapping[str, str]] = None,
        switch_mappings: Optional[Mapping[str, str]] = None,
    ):
        self.settings = settings or get_settings()
        self.log = log or log_to_logger
        self.environ = environ
        self.switch_mappings = dict(switch_mappings or {})

    def resolve(
        self, raw_arguments: Optional[Iterable[str]] = None
    ) -> ResolvedConfiguration:
        """Merge all layers for one invocation.

        Args:
            raw_arguments: Process arguments; None is treated as empty

        Returns:
            The merged configuration with its environment name

        Raises:
            MissingRequiredSourceError: Base settings file is absent
            MalformedSourceError: A settings file is unreadable or not a JSON object
            CommandLineFormatError: An argument cannot be parsed
        """
        arguments = list(raw_arguments or [])

        self._emit(" ---> Preparing service host configuration...")
        if arguments:
            self._emit(" ---> Command line arguments:")
            for argument in arguments:
                self._emit(f"   -> {argument}")
            self._emit("")

        base_path = Path.cwd()
        self._emit(f" ---> Root path is {base_path}/")

        command_line = CommandLineSource(arguments, self.switch_mappings)
        command_line_data = command_line.load()
        environment_name = self._environment_name(command_line_data)
        self._emit(f" ---> Environment is {environment_name}")

        environment_variables = EnvironmentVariablesSource(self.environ)
        base_file = JsonFileSource(base_path / self.settings.base_file_name)
        environment_file = JsonFileSource(
            base_path / self.settings.environment_file_name(environment_name),
            optional=True,
        )

        layers = [
            (environment_variables.name, environment_variables.load()),
            (command_line.name, command_line_data),
            (base_file.name, base_file.load()),
        ]
        if environment_file.path.is_file():
            layers.append((environment_file.name, environment_file.load()))

        return ResolvedConfiguration(layers, environment_name)

    def resolve_environment_name(
        self, raw_arguments: Optional[Iterable[str]] = None
    ) -> str:
        """Determine the active environment without loading any file."""
        command_line = CommandLineSource(raw_arguments, self.switch_mappings)
        return self._environment_name(command_line.load())

    def _environment_name(self, command_line_data: Mapping[str, str]) -> str:
        from_command_line = lookup(command_line_data, self.settings.environment_key)
        if from_command_line:
            return from_command_line

        environ = os.environ if self.environ is None else self.environ
        from_environment = environ.get(self.settings.environment_variable)
        if from_environment:
            return from_environment

        return self.settings.default_environment

    def _emit(self, line: str) -> None:
        if self.settings.logging_disabled:
            return
        try:
            self.log(line)
        except Exception:
            logger.debug("Diagnostic sink failed for line %r", line, exc_info=True)


def resolve_configuration(
    raw_arguments: Optional[Iterable[str]] = None,
    settings: Optional[FactorySettings] = None,
    log: Optional[DiagnosticSink] = None,
) -> ResolvedConfiguration:
    """Resolve configuration with a one-off ConfigurationResolver."""
    return ConfigurationResolver(settings=settings, log=log).resolve(raw_arguments)
