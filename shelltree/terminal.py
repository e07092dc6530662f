"""The output sink and interactive input surface.

`Terminal` prints leveled messages and reads input lines with prompt_toolkit.
While disabled (a line is being executed) it refuses new input.
"""

from __future__ import annotations

import sys
import time
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory, InMemoryHistory
from prompt_toolkit.patch_stdout import patch_stdout

from .ansi import TerminalStyles, paint
from .logging_setup import get_logger

if TYPE_CHECKING:
    from prompt_toolkit.completion import Completer

    from .config import Configuration

__all__ = ["InputCallback", "Terminal"]

InputCallback = Callable[[str], Awaitable[None]]


class Terminal:  # pylint: disable=too-many-instance-attributes
    """Leveled output plus a line-oriented input loop."""

    def __init__(
        self,
        config: Configuration | None = None,
        stream: TextIO | None = None,
        name: str = "shelltree",
    ) -> None:
        """Initialize the terminal.

        Args:
            config: The [terminal] configuration section
            stream: Where messages are written (sys.stdout when omitted)
            name: Source name shown in front of messages
        """
        self.log = get_logger("terminal")
        self.name = name
        self._stream = stream
        self.display_timestamps = config.get_bool("display_timestamps") if config is not None else False
        self.display_names = config.get_bool("display_names", True) if config is not None else True
        self.prompt = config.get_str("prompt", "> ") if config is not None else "> "
        self.history_file = config.get_str("history_file") if config is not None else ""
        self.completer: Completer | None = None
        self.enabled = False
        self._input_callback: InputCallback | None = None
        self._stopped = False

    @property
    def stream(self) -> TextIO:
        """Return the output stream, resolved lazily so patched stdout is honored."""
        return self._stream if self._stream is not None else sys.stdout

    def _prefix(self) -> str:
        parts = []
        if self.display_timestamps:
            parts.append(time.strftime("[%H:%M:%S]"))
        if self.display_names:
            parts.append(f"[{self.name}]")
        return " ".join(parts) + " " if parts else ""

    def _print(self, text: str, style: tuple[str, ...] = ()) -> None:
        stream = self.stream
        print(paint(text, style, stream), file=stream, flush=True)

    def _write(self, message: str, style: tuple[str, ...] = ()) -> None:
        self._print(f"{self._prefix()}{message}", style)

    def info(self, message: str) -> None:
        """Print an informational message."""
        self._write(message)

    def success(self, message: str) -> None:
        """Print a success message."""
        self._write(message, TerminalStyles.SUCCESS)

    def warn(self, message: str) -> None:
        """Print a warning."""
        self._write(message, TerminalStyles.WARNING)

    def error(self, message: str, trace: str | None = None) -> None:
        """Print an error, followed by `trace` when given."""
        self._write(message, TerminalStyles.ERROR)
        if trace:
            self._print(trace.rstrip("\n"), TerminalStyles.TRACE)

    def highlight(self, message: str) -> None:
        """Print a highlighted line, no source prefix."""
        self._print(message, TerminalStyles.HIGHLIGHT)

    def set_enabled(self, enabled: bool) -> None:
        """Enable or disable the input surface."""
        self.enabled = enabled

    def set_input_callback(self, callback: InputCallback) -> None:
        """Register the coroutine receiving every accepted input line."""
        self._input_callback = callback

    def stop(self) -> None:
        """End the input loop once the current line completes."""
        self._stopped = True

    async def submit(self, line: str) -> bool:
        """Feed one input line to the registered callback.

        Returns:
            False if the line was refused because input is disabled
        """
        if not self.enabled:
            self.warn("A command is still running, input ignored")
            return False
        if self._input_callback is None:
            self.log.warning("No input callback registered, dropping %r", line)
            return False
        await self._input_callback(line)
        return True

    def make_prompt_session(self) -> PromptSession:
        """Build the prompt_toolkit session, with file history when configured."""
        if self.history_file:
            history_path = Path(self.history_file).expanduser()
            history_path.parent.mkdir(parents=True, exist_ok=True)
            history: FileHistory | InMemoryHistory = FileHistory(str(history_path))
        else:
            history = InMemoryHistory()
        return PromptSession(history=history, completer=self.completer)

    async def run(self, prompt_session: PromptSession | None = None) -> None:
        """Read lines until EOF, Ctrl-C or `stop`.

        Args:
            prompt_session: Session to read from (built from the configuration when omitted)
        """
        session = prompt_session or self.make_prompt_session()
        self._stopped = False
        with patch_stdout():
            while not self._stopped:
                try:
                    line = await session.prompt_async(self.prompt)
                except (EOFError, KeyboardInterrupt):
                    break
                await self.submit(line)
        self.log.debug("Input loop ended")
