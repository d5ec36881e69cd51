"""Error taxonomy shared by every pagebuilder module."""

from .lib import (
    CompilationError,
    ConfigurationError,
    ElementNotFoundError,
    PageBuilderError,
    StructuralViolation,
)

__all__ = [
    "PageBuilderError",
    "ConfigurationError",
    "CompilationError",
    "StructuralViolation",
    "ElementNotFoundError",
]
