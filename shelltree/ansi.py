"""ANSI styling for terminal messages and log records.

Colors are disabled when NO_COLOR is set or the stream is not a TTY,
FORCE_COLOR enables them regardless.
"""

import os
import sys
from typing import TextIO

__all__ = ["LogStyles", "TerminalStyles", "make_style", "paint", "should_colorize"]

_CSI = "\x1b["
RESET = f"{_CSI}0m"

BOLD = "1"
DIM = "2"

RED = "31"
GREEN = "32"
YELLOW = "33"
MAGENTA = "35"


def should_colorize(stream: TextIO | None = None) -> bool:
    """Tell whether ANSI sequences may be written to `stream` (sys.stderr by default)."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    if stream is None:
        stream = sys.stderr
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def make_style(*codes: str) -> tuple[str, str]:
    """Return the (prefix, suffix) pair applying `codes`, as used by formatters."""
    return (f"{_CSI}{';'.join(codes)}m" if codes else "", RESET)


def paint(text: str, style: tuple[str, ...], stream: TextIO | None = None) -> str:
    """Wrap `text` in `style` if `stream` accepts colors."""
    if not style or not should_colorize(stream):
        return text
    prefix, suffix = make_style(*style)
    return f"{prefix}{text}{suffix}"


class LogStyles:
    """Log record levels."""

    WARNING = (YELLOW, DIM)
    ERROR = (RED, DIM)
    CRITICAL = (RED, BOLD)


class TerminalStyles:
    """Output sink levels."""

    SUCCESS = (GREEN,)
    WARNING = (YELLOW,)
    ERROR = (RED,)
    TRACE = (RED, DIM)
    HIGHLIGHT = (MAGENTA,)
