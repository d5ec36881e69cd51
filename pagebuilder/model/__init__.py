"""Page document model: immutable elements, templates and style maps.

Example usage:
    >>> from pagebuilder.model import Element
    >>> el = Element(id="a", type="Text", page_id="p", content="Hi")
    >>> el.model_dump(by_alias=True)["pageId"]
    'p'
"""

from .lib import (
    DeclarationValue,
    Declarations,
    Element,
    ElementTemplate,
    ResponsiveStyles,
    apply_updates,
    dump_tree,
    export_json_schema,
    is_container_template,
    load_tree,
    normalize_styles,
)

__all__ = [
    # Types
    "DeclarationValue",
    "Declarations",
    "ResponsiveStyles",
    # Models
    "Element",
    "ElementTemplate",
    "is_container_template",
    # Updates
    "apply_updates",
    "normalize_styles",
    # Serialization
    "load_tree",
    "dump_tree",
    "export_json_schema",
]
