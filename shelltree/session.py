"""The interpreter session.

A `Session` owns the command tree, the alias store, the configuration and
the output sink. It executes input lines statement by statement: a failing
statement is reported and the next one still runs.
"""

from __future__ import annotations

import importlib
import os
import sys
import traceback
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from .aliases import AliasStore
from .completions import TreeCompleter
from .constants import ALIAS_COMMAND
from .logging_setup import get_logger
from .models import CommandError, ShellError
from .terminal import Terminal
from .tokenizer import split_statements, tokenize
from .tree import CommandHandler, CommandNode

if TYPE_CHECKING:
    from .config import Configuration

__all__ = ["Session"]


class Session:
    """Interactive interpreter state and line execution."""

    def __init__(
        self,
        config: Configuration,
        terminal: Terminal | None = None,
        aliases: AliasStore | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            config: The full configuration
            terminal: Output sink (built from the [terminal] section when omitted)
            aliases: Alias store (built from the [aliases] section when omitted)
        """
        self.config = config
        self.log = get_logger("session")
        self.root = CommandNode("")
        self.terminal = terminal or Terminal(config.section("terminal"))
        self.terminal.completer = TreeCompleter(self.root)
        if aliases is None:
            alias_file = config.section("aliases").get_str("file")
            aliases = AliasStore(Path(os.path.expandvars(alias_file)).expanduser(), self.log)
        self.aliases = aliases
        self.print_stacktrace = config.section("display").get_bool("print_stacktrace")
        self._busy = 0

    def add_command(
        self,
        name: str,
        arg_desc: str | None = None,
        description: str | None = None,
        handler: CommandHandler | None = None,
    ) -> CommandNode:
        """Register a root command.

        Raises:
            CommandConfigurationError: If `name` is already registered
        """
        node = self.root.add_command(name, arg_desc, description, handler)
        self.log.debug("Registered %s", name)
        return node

    async def dispatch(self, tokens: Sequence[str]) -> None:
        """Resolve `tokens` from the root and run the matching handler."""
        await self.root.handle(tokens)

    async def send_command(self, line: str) -> None:
        """Execute every statement of `line` in order.

        Input stays disabled until the whole line has completed, including
        lines re-entered by aliases.
        """
        self._suspend()
        try:
            for statement in split_statements(line):
                await self._run_statement(statement)
        finally:
            self._resume()

    async def _run_statement(self, statement: str) -> None:
        args = tokenize(statement)
        try:
            await self.dispatch(args)
        except Exception as e:  # pylint: disable=broad-except
            self.log.debug("Statement %r failed", statement, exc_info=True)
            message = str(e) or type(e).__name__
            self.terminal.error(message, traceback.format_exc() if self.print_stacktrace else None)

    def _suspend(self) -> None:
        if self._busy == 0:
            self.terminal.set_enabled(False)
        self._busy += 1

    def _resume(self) -> None:
        self._busy -= 1
        if self._busy == 0:
            self.terminal.set_enabled(True)

    async def define_alias(self, name: str, tokens: Sequence[str], persist: bool = True) -> None:
        """Create or replace the root command `name` expanding to `tokens`.

        The expansion is resolved when the alias runs, so aliases may refer
        to other aliases or to commands registered later.

        Args:
            name: The alias name
            tokens: The command tokens the alias replays
            persist: Write the alias table to disk
        """
        if not name:
            raise CommandError(f"Usage: {ALIAS_COMMAND} <alias> <command...>")
        if name == ALIAS_COMMAND:
            raise CommandError(f"{ALIAS_COMMAND} can't be redefined")
        if persist:
            expansion = await self.aliases.store(name, tokens)
        else:
            expansion = self.aliases.set(name, tokens)
        replay = list(tokens)

        async def _run_alias(run_args: list[str]) -> None:
            await self.send_command(" ".join(replay + run_args))

        self.root.remove_command(name)
        self.root.add_command(name, None, f"Alias for '{expansion}'", _run_alias)
        self.log.debug("Alias %s -> %s", name, expansion)

    async def load_aliases(self) -> None:
        """Load persisted aliases and register them as root commands.

        Raises:
            ShellError: If the alias file can't be read or holds an invalid alias name
        """
        await self.aliases.load()
        for name, expansion in self.aliases.items():
            try:
                await self.define_alias(name, expansion.split(" "), persist=False)
            except CommandError as e:
                self.log.critical("Invalid alias %r in %s: %s", name, self.aliases.path, e)
                raise ShellError from e

    def load_extensions(self) -> None:
        """Import configured extension modules and call their `register(session)`.

        Raises:
            ShellError: If an extension can't be imported or fails to register
        """
        settings = self.config.section("shelltree")
        sys.path.extend(str(Path(p).expanduser()) for p in settings.get("extension_paths", []))
        for name in settings.get("extensions", []):
            try:
                module = importlib.import_module(name)
            except ModuleNotFoundError as e:
                self.log.critical("Unable to locate extension called '%s'", name)
                raise ShellError from e
            register = getattr(module, "register", None)
            if register is None:
                self.log.critical("Extension '%s' has no register() function", name)
                raise ShellError
            try:
                register(self)
            except CommandError as e:
                self.log.critical("Error loading extension %s: %s", name, e)
                raise ShellError from e
            self.log.info("Extension %s loaded", name)

    async def enter_loop(self) -> None:
        """Accept input lines until the terminal stops."""
        self.terminal.set_input_callback(self.send_command)
        self.terminal.set_enabled(True)
        await self.terminal.run()

    def stop(self) -> None:
        """Stop accepting input after the current line."""
        self.terminal.stop()
