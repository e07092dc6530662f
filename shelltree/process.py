"""Helpers for command handlers that shell out to external programs."""

__all__ = ["ProcessFailedError", "run_process"]

import asyncio
import contextlib
from pathlib import Path

from .logging_setup import get_logger
from .models import CommandError

log = get_logger("process")


class ProcessFailedError(CommandError):
    """An external program exited with a non-zero status."""

    def __init__(self, command: str, returncode: int) -> None:
        self.command = command
        self.returncode = returncode
        super().__init__(f"{command} failed with exit code {returncode}")


async def run_process(command: str, cwd: Path | str | None = None) -> int:
    """Run a shell command, inheriting the terminal, and wait for it.

    Args:
        command: Shell command to run
        cwd: Working directory

    Returns:
        The exit code (always 0)

    Raises:
        ProcessFailedError: If the command exits with a non-zero status
    """
    log.debug("Running %s (cwd=%s)", command, cwd)
    proc = await asyncio.create_subprocess_shell(command, cwd=cwd)
    try:
        returncode = await proc.wait()
    except asyncio.CancelledError:
        with contextlib.suppress(ProcessLookupError):
            proc.kill()
        await proc.wait()
        raise
    if returncode != 0:
        raise ProcessFailedError(command, returncode)
    return returncode
