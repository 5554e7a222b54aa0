"""Command-line argument source.

Accepted token forms:

    --key=value   /key=value   key=value
    --key value   /key value
    -k value      -k=value      (only with a switch mapping for ``-k``)

Bare tokens without ``=`` are ignored, as is a trailing ``--key`` with no
value. Keys may use ``:`` or ``__`` as hierarchy separators.
"""

from typing import Dict, Iterable, Mapping, Optional

from dbcontext_factory.config.sources import SourceData, normalize_key
from dbcontext_factory.exception import CommandLineFormatError


class CommandLineSource:
    """Parse process arguments into a flat key-value layer.

    Attributes:
        args: Raw argument tokens
        switch_mappings: Case-insensitive map of switch (``-e``) to key
    """

    name = "command line"

    def __init__(
        self,
        args: Optional[Iterable[str]] = None,
        switch_mappings: Optional[Mapping[str, str]] = None,
    ):
        self.args = list(args or [])
        self.switch_mappings = _validate_switch_mappings(switch_mappings or {})

    def load(self) -> SourceData:
        """Parse all tokens.

        Returns:
            Flat key-value mapping, last occurrence of a key wins

        Raises:
            CommandLineFormatError: Unmapped single-dash token carrying ``=``
        """
        data = SourceData()
        tokens = iter(self.args)

        for token in tokens:
            key_start = 0
            if token.startswith("--"):
                key_start = 2
            elif token.startswith("-"):
                key_start = 1
            elif token.startswith("/"):
                token = f"--{token[1:]}"
                key_start = 2

            separator = token.find("=")
            if separator < 0:
                if key_start == 0:
                    continue
                key = self._mapped_key(token)
                if key is None:
                    if key_start == 1:
                        continue
                    key = token[key_start:]
                value = next(tokens, None)
                if value is None:
                    continue
            else:
                key = self._mapped_key(token[:separator])
                if key is None:
                    if key_start == 1:
                        raise CommandLineFormatError(
                            f"Short switch '{token[:separator]}' has no key mapping",
                            token=token,
                        )
                    key = token[key_start:separator]
                value = token[separator + 1 :]

            if key:
                data[normalize_key(key)] = value

        return data

    def _mapped_key(self, switch: str) -> Optional[str]:
        return self.switch_mappings.get(switch.casefold())


def _validate_switch_mappings(switch_mappings: Mapping[str, str]) -> Dict[str, str]:
    validated: Dict[str, str] = {}
    for switch, key in switch_mappings.items():
        if not switch.startswith("-"):
            raise CommandLineFormatError(
                f"Switch mapping '{switch}' must start with '-' or '--'",
                token=switch,
            )
        folded = switch.casefold()
        if folded in validated:
            raise CommandLineFormatError(
                f"Switch mapping '{switch}' is duplicated", token=switch
            )
        validated[folded] = key
    return validated
