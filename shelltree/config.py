"""Configuration wrapper providing typed access to TOML settings."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import logging

__all__ = ["BOOL_FALSE_STRINGS", "BOOL_TRUE_STRINGS", "Configuration", "coerce_to_bool"]

# Type alias for config values
ConfigValueType = float | bool | str | list | dict

BOOL_TRUE_STRINGS = frozenset({"true", "yes", "on", "1", "enabled"})
BOOL_FALSE_STRINGS = frozenset({"false", "no", "off", "0", "disabled"})


def coerce_to_bool(value: ConfigValueType | None, default: bool = False) -> bool | None:
    """Coerce a value to boolean, handling loose typing.

    Args:
        value: The value to coerce
        default: Default value if value is None

    Returns:
        The boolean value, None for a string that is not a known boolean word

    Behavior:
        - None → default
        - Empty string → False
        - "true", "yes", "on", "1", "enabled" → True
        - "false", "no", "off", "0", "disabled" → False
        - Any other string → None
        - Non-string values → bool(value)
    """
    if value is None:
        return default
    if isinstance(value, str):
        word = value.strip().lower()
        if not word or word in BOOL_FALSE_STRINGS:
            return False
        if word in BOOL_TRUE_STRINGS:
            return True
        return None
    return bool(value)


class Configuration(dict):
    """Configuration wrapper providing typed access and nested sections."""

    def __init__(
        self,
        *args: Any,  # noqa: ANN401
        logger: logging.Logger,
        **kwargs: Any,  # noqa: ANN401
    ):
        """Initialize the configuration object.

        Args:
            *args: Arguments for dict
            logger: Logger instance to use for warnings
            **kwargs: Keyword arguments for dict
        """
        super().__init__(*args, **kwargs)
        self.log = logger

    def section(self, name: str) -> Configuration:
        """Return the sub-table `name` as a Configuration (empty if missing or not a table).

        Args:
            name: The section name, e.g. "terminal"
        """
        value = dict.get(self, name)
        if value is not None and not isinstance(value, dict):
            self.log.warning("Expected a table for [%s], got %r", name, value)
            value = None
        return Configuration(value or {}, logger=self.log)

    def get_bool(self, name: str, default: bool = False) -> bool:
        """Get a boolean value, handling loose typing.

        Unknown words are reported and replaced by `default`.

        Args:
            name: The key name
            default: Default value if key is missing or invalid
        """
        value = self.get(name)
        result = coerce_to_bool(value, default)
        if result is None:
            self.log.warning("Invalid boolean value for %s: %s", name, value)
            return default
        return result

    def get_str(self, name: str, default: str = "") -> str:
        """Get a string value.

        Args:
            name: The key name
            default: Default value if key is missing
        """
        value = self.get(name)
        if value is None:
            return default
        return str(value)
