"""Utility-class compiler and class merging.

This module provides:
- Deterministic compilation of style declarations to utility classes
- Multi-breakpoint compilation with `{breakpoint}:` variants
- Arbitrary-value escaping
- Last-wins merging of class strings

Example usage:
    >>> from pagebuilder.compiler import compile_utility_classes, merge_classes
    >>> compile_utility_classes({"default": {"width": "auto"}, "md": {"display": "flex"}})
    'w-auto md:flex'
"""

from .lib import (
    ALIGN_ITEMS_MAP,
    DISPLAY_MAP,
    FLEX_DIRECTION_MAP,
    FONT_WEIGHT_MAP,
    JUSTIFY_CONTENT_MAP,
    PROPERTY_FAMILIES,
    SUPPORTED_PROPERTIES,
    TEXT_ALIGN_MAP,
    TEXT_DECORATION_MAP,
    TEXT_TRANSFORM_MAP,
    CompiledClass,
    compile_class_list,
    compile_declarations,
    compile_utility_classes,
    escape_arbitrary,
    is_css_variable,
    split_classes,
)
from .merge import (
    PROPERTY_CONFLICT_GROUPS,
    compiled_conflict_key,
    conflict_group,
    conflict_key,
    merge_classes,
    merge_with_compiled,
)

__all__ = [
    # Tables
    "DISPLAY_MAP",
    "FLEX_DIRECTION_MAP",
    "JUSTIFY_CONTENT_MAP",
    "ALIGN_ITEMS_MAP",
    "TEXT_ALIGN_MAP",
    "TEXT_TRANSFORM_MAP",
    "TEXT_DECORATION_MAP",
    "FONT_WEIGHT_MAP",
    "PROPERTY_FAMILIES",
    "SUPPORTED_PROPERTIES",
    # Escaping
    "escape_arbitrary",
    "is_css_variable",
    "split_classes",
    # Compilation
    "compile_declarations",
    "compile_utility_classes",
    "compile_class_list",
    "CompiledClass",
    # Merging
    "conflict_group",
    "conflict_key",
    "merge_classes",
    "merge_with_compiled",
    "compiled_conflict_key",
    "PROPERTY_CONFLICT_GROUPS",
]
