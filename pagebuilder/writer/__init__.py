"""Breakpoint style writer.

Example usage:
    >>> from pagebuilder.writer import update_element_style
    >>> result = update_element_style(element, {"width": "auto"}, "md", apply)
    >>> result.compiled
    True
"""

from .lib import (
    StyleApplier,
    StyleWriteResult,
    hand_authored_classes,
    update_element_style,
)

__all__ = [
    "StyleApplier",
    "StyleWriteResult",
    "hand_authored_classes",
    "update_element_style",
]
