"""Centralized configuration management for pagebuilder.

Provides unified access to all configuration via the `get_environment()` function.

Example:
    >>> from pagebuilder.config import EnvVar, get_environment
    >>>
    >>> unit = get_environment(EnvVar.PAGEBUILDER_DEFAULT_UNIT)  # "px"
    >>> for var in list_environment_variables("editor"):
    ...     info = get_environment_info(var)
    ...     print(f"{info.name}: {info.description}")

Environment Variable Categories:
    logging: Log output configuration
    compiler: Utility-class compilation
    editor: Editing behaviour at the caller boundary
"""

from .lib import (
    # Core types
    EnvConfig,
    EnvVar,
    # Convenience functions
    get_default_unit,
    get_drop_position,
    # Main interface
    get_environment,
    get_environment_info,
    get_log_level,
    get_validate_snapshots,
    # Introspection
    list_environment_variables,
)

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
