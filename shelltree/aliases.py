"""Persistent alias storage.

Aliases are kept in a YAML mapping document, alias name -> single-line
expansion. The whole mapping is rewritten every time an alias is defined.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

import aiofiles
import aiofiles.os
import yaml

from .models import ShellError

if TYPE_CHECKING:
    import logging

__all__ = ["AliasStore"]


class AliasStore:
    """In-memory alias table backed by a YAML file."""

    def __init__(self, path: Path | str, log: logging.Logger) -> None:
        """Initialize the store.

        Args:
            path: Location of the YAML document
            log: Logger instance
        """
        self.path = Path(path)
        self.log = log
        self._aliases: dict[str, str] = {}

    def items(self) -> Iterator[tuple[str, str]]:
        """Iterate over (name, expansion) pairs in definition order."""
        yield from list(self._aliases.items())

    def set(self, name: str, tokens: Sequence[str]) -> str:
        """Store the expansion of `name` in memory only, replacing any previous one.

        Returns:
            The expansion as stored
        """
        expansion = " ".join(tokens)
        self._aliases[name] = expansion
        return expansion

    async def store(self, name: str, tokens: Sequence[str]) -> str:
        """Write the table with `name` added, then keep it in memory.

        The in-memory table is left untouched if the write fails.

        Returns:
            The expansion as stored
        """
        expansion = " ".join(tokens)
        table = {**self._aliases, name: expansion}
        await self._write(table)
        self._aliases = table
        return expansion

    async def load(self) -> None:
        """Read the alias document, a missing file means no aliases.

        Raises:
            ShellError: If the file can't be read or is not a YAML mapping
        """
        if not await aiofiles.os.path.exists(self.path):
            self.log.debug("No alias file at %s", self.path)
            self._aliases = {}
            return
        try:
            async with aiofiles.open(self.path, encoding="utf-8") as f:
                text = await f.read()
            data = yaml.safe_load(text) or {}
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            self.log.critical("Problem reading %s: %s", self.path, e)
            raise ShellError from e
        if not isinstance(data, dict):
            self.log.critical("%s must contain a mapping of alias names to commands", self.path)
            raise ShellError
        self._aliases = {str(name): str(expansion) for name, expansion in data.items() if expansion is not None}
        self.log.info("Loaded %d aliases from %s", len(self._aliases), self.path)

    async def _write(self, table: dict[str, str]) -> None:
        await aiofiles.os.makedirs(self.path.parent, exist_ok=True)
        document = yaml.safe_dump(table, default_flow_style=False, sort_keys=False, allow_unicode=True)
        async with aiofiles.open(self.path, "w", encoding="utf-8") as f:
            await f.write(document)
        self.log.debug("Saved %d aliases to %s", len(table), self.path)
