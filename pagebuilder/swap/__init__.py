"""Drag-and-drop relocation of elements between parents.

Example usage:
    >>> from pagebuilder.swap import DropPosition, relocate
    >>> result = relocate(tree, "cta", "banner", DropPosition.BEFORE)
    >>> tree = result.tree if result.applied else tree
"""

from .lib import DropPosition, SwapResult, relocate, resolve_drop_position

__all__ = [
    "DropPosition",
    "SwapResult",
    "relocate",
    "resolve_drop_position",
]
