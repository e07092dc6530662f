"""Configuration file loading utilities.

This module handles loading the TOML configuration file and merging it
over the built-in defaults.
"""

from __future__ import annotations

import copy
import os
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .config import Configuration
from .constants import CONFIG_FILE, DEFAULT_CONFIG
from .models import ShellError

if TYPE_CHECKING:
    import logging

__all__ = ["ConfigLoader", "merge"]


def merge(merged: dict[str, Any], obj2: dict[str, Any]) -> dict[str, Any]:
    """Merge the content of obj2 into merged.

    Args:
        merged (dict): Dictionary to merge into
        obj2 (dict): Dictionary to merge from

    Returns:
        `merged` dictionary with the merged content

    Eg:
        merge({"a": {"b": 1}}, {"a": {"c": 2}}) == {"a": {"b": 1, "c": 2}}

    """
    for key, value in obj2.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigLoader:
    """Loads the TOML configuration file over the built-in defaults."""

    def __init__(self, log: logging.Logger) -> None:
        """Initialize the config loader.

        Args:
            log: Logger instance for status and error messages
        """
        self.log = log

    def load(self, config_filename: str = "") -> Configuration:
        """Load configuration from file.

        Args:
            config_filename: Optional path to the config file.
                           If empty, uses default CONFIG_FILE location.

        Returns:
            The defaults merged with the file content.

        Raises:
            ShellError: If the file has syntax errors.
        """
        fname = Path(os.path.expandvars(config_filename)).expanduser() if config_filename else CONFIG_FILE
        config = copy.deepcopy(DEFAULT_CONFIG)
        merge(config, self._load_config_file(fname))
        return Configuration(config, logger=self.log)

    def _load_config_file(self, fname: Path) -> dict[str, Any]:
        """Load a single configuration file, an absent file yields no overrides.

        Raises:
            ShellError: If the file has syntax errors
        """
        if not fname.exists():
            self.log.info("No configuration at %s, using defaults", fname)
            return {}
        self.log.info("Loading %s", fname)
        with fname.open("rb") as f:
            try:
                return tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                self.log.critical("Problem reading %s: %s", fname, e)
                raise ShellError from e
