"""Schema module - authoritative source for element kinds and breakpoints.

This module provides:
- Element type definitions with rich metadata
- Container / editable classification
- Breakpoint ordering for responsive styles
- Alias resolution and raw-dict validation

Example usage:
    >>> from pagebuilder.schema import ElementType, is_container_type
    >>> is_container_type(ElementType.FRAME)
    True
    >>> errors = validate_element_dict({"id": "root", "type": "Frame", "pageId": "p"})
"""

from .lib import (
    BREAKPOINT_ORDER,
    CONTAINER_ELEMENT_TYPES,
    EDITABLE_ELEMENT_TYPES,
    ELEMENT_REGISTRY,
    Breakpoint,
    ElementCategory,
    ElementMeta,
    ElementType,
    SchemaValidationError,
    export_element_enum_schema,
    get_element_meta,
    get_elements_by_category,
    is_container_type,
    is_editable_type,
    is_valid_element_dict,
    resolve_alias,
    validate_breakpoint,
    validate_element_dict,
    validate_element_type,
)

__all__ = [
    # Enums
    "Breakpoint",
    "BREAKPOINT_ORDER",
    "ElementCategory",
    "ElementType",
    # Metadata
    "ElementMeta",
    "ELEMENT_REGISTRY",
    "CONTAINER_ELEMENT_TYPES",
    "EDITABLE_ELEMENT_TYPES",
    # Lookup functions
    "get_element_meta",
    "get_elements_by_category",
    "is_container_type",
    "is_editable_type",
    "resolve_alias",
    "export_element_enum_schema",
    # Validation
    "SchemaValidationError",
    "validate_element_type",
    "validate_breakpoint",
    "validate_element_dict",
    "is_valid_element_dict",
]
