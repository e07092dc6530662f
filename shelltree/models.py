"""Error taxonomy and process exit codes."""

from enum import IntEnum

__all__ = [
    "CommandConfigurationError",
    "CommandError",
    "ExitCode",
    "HelpPathError",
    "ShellError",
    "UnknownCommandError",
]


class ShellError(BaseException):
    """Used for errors which already triggered logging."""


class CommandError(Exception):
    """Base class for errors reported to the user by the interpreter."""


class CommandConfigurationError(CommandError):
    """A command name was registered twice under the same parent."""


class UnknownCommandError(CommandError):
    """No handler could consume the given tokens.

    Attributes:
        path: full name of the deepest resolved node ("" for the root)
        token: the first unconsumed token, if any
    """

    def __init__(self, path: str, token: str | None) -> None:
        self.path = path
        self.token = token
        parts = [p for p in (path, token) if p]
        super().__init__(f"No command {' '.join(parts)}".rstrip())


class ExitCode(IntEnum):
    """Exit codes for the shelltree process."""

    SUCCESS = 0
    USAGE_ERROR = 1  # Missing flag value
    STARTUP_ERROR = 2  # Invalid configuration or alias file


class HelpPathError(CommandError):
    """A help path segment does not name a child command."""

    def __init__(self, path: str, token: str) -> None:
        self.path = path
        self.token = token
        super().__init__(f"{path or 'root'} has no child command {token}")
