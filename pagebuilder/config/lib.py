"""Centralized environment configuration management for pagebuilder.

Provides a unified interface for all environment variables with:
- Single `get_environment()` function for all configuration
- Type-safe enum with metadata (default, type, description)
- Consistent resolution: override > environment > default

Example:
    >>> from pagebuilder.config import EnvVar, get_environment
    >>>
    >>> unit = get_environment(EnvVar.PAGEBUILDER_DEFAULT_UNIT)  # "px"
    >>> level = get_environment(EnvVar.PAGEBUILDER_LOG_LEVEL, override="DEBUG")
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, overload

# =============================================================================
# Environment Variable Configuration
# =============================================================================


@dataclass(frozen=True)
class EnvConfig:
    """Metadata for an environment variable.

    Attributes:
        name: Environment variable name (e.g., "PAGEBUILDER_LOG_LEVEL").
        default: Default value if not set in environment.
        var_type: Python type for value conversion (str, int, bool).
        description: Human-readable description.
        category: Grouping category for documentation.
        choices: Allowed values for str variables (None = any).
    """

    name: str
    default: Any
    var_type: type
    description: str = ""
    category: str = "general"
    choices: tuple[str, ...] | None = None


class EnvVar(Enum):
    """All environment variables used by pagebuilder.

    Each member contains an EnvConfig with name, default, type, and description.
    Use with `get_environment()` for type-safe access.

    Categories:
        - logging: Log output configuration
        - compiler: Utility-class compilation
        - editor: Editing behaviour at the caller boundary
    """

    PAGEBUILDER_LOG_LEVEL = EnvConfig(
        name="PAGEBUILDER_LOG_LEVEL",
        default="INFO",
        var_type=str,
        description="Log level used by the CLI (DEBUG, INFO, WARNING, ERROR)",
        category="logging",
        choices=("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"),
    )
    PAGEBUILDER_DEFAULT_UNIT = EnvConfig(
        name="PAGEBUILDER_DEFAULT_UNIT",
        default="px",
        var_type=str,
        description="Unit appended to bare numeric lengths before escaping",
        category="compiler",
        choices=("px", "rem", "em"),
    )
    PAGEBUILDER_DROP_POSITION = EnvConfig(
        name="PAGEBUILDER_DROP_POSITION",
        default="after",
        var_type=str,
        description="Default placement of a dragged element (before, after)",
        category="editor",
        choices=("before", "after"),
    )
    PAGEBUILDER_VALIDATE_SNAPSHOTS = EnvConfig(
        name="PAGEBUILDER_VALIDATE_SNAPSHOTS",
        default=False,
        var_type=bool,
        description="Run full tree validation after every editor mutation",
        category="editor",
    )


# =============================================================================
# Type Conversion Helpers
# =============================================================================


def _parse_bool(value: str) -> bool | None:
    """Parse string to boolean.

    Recognizes: true/false, 1/0, yes/no (case-insensitive).
    Returns None for unrecognized values.
    """
    normalized = value.lower().strip()
    if normalized in ("true", "1", "yes"):
        return True
    if normalized in ("false", "0", "no"):
        return False
    return None


def _convert_value(value: str | None, config: EnvConfig) -> Any:
    """Convert string value to the variable's type.

    Args:
        value: Raw string value from environment (or None).
        config: Metadata of the variable being resolved.

    Returns:
        Converted value, or the default if conversion fails or value is None.
    """
    if value is None:
        return config.default

    if config.var_type is str:
        if config.choices is None:
            return value
        for choice in config.choices:
            if choice.lower() == value.strip().lower():
                return choice
        return config.default

    if config.var_type is int:
        try:
            return int(value)
        except ValueError:
            return config.default

    if config.var_type is bool:
        result = _parse_bool(value)
        return result if result is not None else config.default

    return value


# =============================================================================
# Main Interface
# =============================================================================


@overload
def get_environment(env_var: EnvVar, override: int) -> int: ...
@overload
def get_environment(env_var: EnvVar, override: str) -> str: ...
@overload
def get_environment(env_var: EnvVar, override: bool) -> bool: ...
@overload
def get_environment(env_var: EnvVar, override: None = None) -> Any: ...


def get_environment(env_var: EnvVar, override: Any = None) -> Any:
    """Get environment variable value with type conversion.

    Resolution priority:
        1. Explicit override parameter (highest)
        2. Environment variable value
        3. Default from EnvConfig (lowest)

    Args:
        env_var: Environment variable enum member.
        override: Optional override value (bypasses env lookup).

    Returns:
        Value converted to the appropriate type (str, int or bool).

    Example:
        >>> get_environment(EnvVar.PAGEBUILDER_DEFAULT_UNIT)
        'px'
        >>> get_environment(EnvVar.PAGEBUILDER_DEFAULT_UNIT, override="rem")
        'rem'
    """
    config: EnvConfig = env_var.value

    if override is not None:
        return override

    raw_value = os.environ.get(config.name)
    return _convert_value(raw_value, config)


def get_environment_info(env_var: EnvVar) -> EnvConfig:
    """Get metadata for an environment variable.

    Args:
        env_var: Environment variable enum member.

    Returns:
        EnvConfig with name, default, type, and description.
    """
    return env_var.value


def list_environment_variables(category: str | None = None) -> list[EnvVar]:
    """List all environment variables, optionally filtered by category.

    Args:
        category: Filter by category (logging, compiler, editor).
                 None returns all variables.

    Returns:
        List of EnvVar enum members.
    """
    if category is None:
        return list(EnvVar)

    return [var for var in EnvVar if var.value.category == category]


def get_default_unit(override: str | None = None) -> str:
    """Get the unit appended to bare numeric lengths."""
    return get_environment(EnvVar.PAGEBUILDER_DEFAULT_UNIT, override)


def get_log_level(override: str | None = None) -> str:
    """Get the configured log level name."""
    return get_environment(EnvVar.PAGEBUILDER_LOG_LEVEL, override)


def get_drop_position(override: str | None = None) -> str:
    """Get the default placement of a dragged element ("before" or "after")."""
    return get_environment(EnvVar.PAGEBUILDER_DROP_POSITION, override)


def get_validate_snapshots(override: bool | None = None) -> bool:
    """Check whether editor mutations run full tree validation."""
    return get_environment(EnvVar.PAGEBUILDER_VALIDATE_SNAPSHOTS, override)


__all__ = [
    # Core types
    "EnvConfig",
    "EnvVar",
    # Main interface
    "get_environment",
    "get_environment_info",
    # Convenience functions
    "get_default_unit",
    "get_drop_position",
    "get_log_level",
    "get_validate_snapshots",
    # Introspection
    "list_environment_variables",
]
