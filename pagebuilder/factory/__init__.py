"""Element creation from per-kind strategies and templates.

This module provides:
- A strategy registry keyed by ElementType
- ElementFactory for new elements and recursive template clones
- Module-level `create_element` conveniences

Example usage:
    >>> from pagebuilder.factory import create_element
    >>> frame = create_element("Frame", page_id="page-1")
    >>> frame.tailwind_styles
    "w-[100%] bg-[var(--bg-surface,#ffffff)] rounded-[8px] p-[16px] m-['0 auto']"
"""

from .lib import (
    BuilderState,
    ElementFactory,
    Strategy,
    build_element,
    create_element,
    create_element_from_template,
    get_strategy,
    list_strategies,
    register_strategy,
)
from . import strategies  # noqa: F401  (registers the built-in strategies)

__all__ = [
    "BuilderState",
    "Strategy",
    "build_element",
    # Registry
    "register_strategy",
    "get_strategy",
    "list_strategies",
    # Factory
    "ElementFactory",
    "create_element",
    "create_element_from_template",
]
