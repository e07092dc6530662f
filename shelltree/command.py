"""Shelltree - process entry point.

Usage: shelltree [--debug <logfile>] [--config <path>] [statements...]

Without statements, runs the interactive prompt. Otherwise runs the
statements as a single input line and exits.
"""

import asyncio
import sys

from .builtin_commands import register_builtins
from .config_loader import ConfigLoader
from .logging_setup import get_logger, init_logger
from .models import CommandConfigurationError, ExitCode, ShellError
from .session import Session

__all__ = ["main", "run", "use_param"]


def use_param(txt: str, argv: list[str] | None = None) -> str:
    """Check if parameter `txt` is in argv (sys.argv by default).

    If found, removes it from argv & returns the argument value.

    Raises:
        ShellError: If the flag is given without a value
    """
    if argv is None:
        argv = sys.argv
    v = ""
    if txt in argv:
        i = argv.index(txt)
        if i + 1 >= len(argv):
            print(f"Missing value for {txt}", file=sys.stderr)
            sys.exit(ExitCode.USAGE_ERROR)
        v = argv[i + 1]
        del argv[i : i + 2]
    return v


async def build_session(config_filename: str = "") -> Session:
    """Load the configuration and create a session ready to accept input.

    Raises:
        ShellError: On invalid configuration, extensions or alias file
    """
    log = get_logger("startup")
    config = ConfigLoader(log).load(config_filename)
    session = Session(config)
    register_builtins(session)
    session.load_extensions()
    await session.load_aliases()
    log.debug("[ initialized ]".center(80, "="))
    return session


async def run(config_filename: str, statements: list[str]) -> None:
    """Run the session, interactively when `statements` is empty."""
    session = await build_session(config_filename)
    if statements:
        await session.send_command(" ".join(statements))
    else:
        await session.enter_loop()


def main() -> None:
    """Run the command."""
    debug_flag = use_param("--debug")
    if debug_flag:
        init_logger(filename=debug_flag, force_debug=True)
    else:
        init_logger()
    log = get_logger("startup")

    config_override = use_param("--config")

    try:
        asyncio.run(run(config_override, sys.argv[1:]))
    except KeyboardInterrupt:
        pass
    except CommandConfigurationError as e:
        log.critical("Invalid command registration: %s", e)
        sys.exit(ExitCode.STARTUP_ERROR)
    except ShellError:
        log.critical("Startup failed.")
        sys.exit(ExitCode.STARTUP_ERROR)


if __name__ == "__main__":
    main()
