"""Shared constants for shelltree."""

import os
from pathlib import Path

__all__ = [
    "ALIAS_COMMAND",
    "ALIAS_FILE",
    "CONFIG_FILE",
    "DEFAULT_CONFIG",
    "HISTORY_FILE",
    "STATEMENT_SEPARATOR",
]

# Config file paths - use XDG_CONFIG_HOME with fallback to ~/.config
_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
_xdg_state_home = Path(os.environ.get("XDG_STATE_HOME") or Path.home() / ".local" / "state")

CONFIG_FILE = _xdg_config_home / "shelltree" / "config.toml"
ALIAS_FILE = _xdg_config_home / "shelltree" / "commands.yaml"
HISTORY_FILE = _xdg_state_home / "shelltree" / "history"

# Chains statements on one input line
STATEMENT_SEPARATOR = "&&"

# Lines starting with this word are never split into statements
ALIAS_COMMAND = "command"

DEFAULT_CONFIG: dict[str, dict] = {
    "shelltree": {
        "extensions": [],
        "extension_paths": [],
    },
    "display": {
        "print_stacktrace": False,
    },
    "terminal": {
        "display_timestamps": False,
        "display_names": True,
        "prompt": "> ",
        "history_file": str(HISTORY_FILE),
    },
    "aliases": {
        "file": str(ALIAS_FILE),
    },
}
