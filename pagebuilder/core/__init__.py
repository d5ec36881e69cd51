"""Core ambient services: logging and the error taxonomy."""

from .errors import (
    CompilationError,
    ConfigurationError,
    ElementNotFoundError,
    PageBuilderError,
    StructuralViolation,
)
from .log import get_logger, setup_logging

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    # Errors
    "PageBuilderError",
    "ConfigurationError",
    "CompilationError",
    "StructuralViolation",
    "ElementNotFoundError",
]
