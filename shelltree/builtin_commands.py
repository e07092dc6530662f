"""Built-in commands available at the root of every session."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .constants import ALIAS_COMMAND
from .help import find_help_target, render_help
from .models import CommandError, HelpPathError

if TYPE_CHECKING:
    from .session import Session

__all__ = ["register_builtins"]


def register_builtins(session: Session) -> None:
    """Register print, command, help and exit on `session`."""

    def run_print(args: list[str]) -> None:
        session.terminal.info(" ".join(args))

    async def run_command(args: list[str]) -> None:
        if not args:
            raise CommandError(f"Usage: {ALIAS_COMMAND} <alias> <command...>")
        await session.define_alias(args[0], args[1:])
        session.terminal.success(f"Created alias {args[0]}")

    def run_help(args: list[str]) -> None:
        try:
            target = find_help_target(session.root, args)
        except HelpPathError as e:
            session.terminal.warn(str(e))
            return
        for line in render_help(target):
            session.terminal.highlight(line)

    def run_exit(args: list[str]) -> None:
        session.stop()

    session.add_command("print", "messages", "Prints out messages to the screen", run_print)
    session.add_command(ALIAS_COMMAND, "alias command", "Creates a command alias", run_command)
    session.add_command("help", "command, [args]?", "Prints this help message", run_help)
    session.add_command("exit", "", "Leaves the interactive prompt", run_exit)
