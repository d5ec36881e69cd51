"""Page document model.

Defines the immutable `Element` node, the `ElementTemplate` blueprint used
by the factory, and the responsive style map both of them carry. Instances
are frozen: every edit produces a new instance via `model_copy`, so a tree
snapshot can be shared freely between callers.

Persisted pages use camelCase keys (`parentId`, `tailwindStyles`); the
models accept either spelling on input and emit camelCase with
`model_dump(by_alias=True)`.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from pagebuilder.schema import BREAKPOINT_ORDER, ElementType, validate_breakpoint

DeclarationValue = str | int | float
Declarations = dict[str, DeclarationValue]
ResponsiveStyles = dict[str, Declarations]


def normalize_styles(value: Any) -> ResponsiveStyles:
    """Validate a responsive style map and normalize its keys.

    Breakpoint keys become plain strings in canonical order; declaration
    values must be strings or numbers.

    Args:
        value: Mapping of breakpoint to declaration mapping (or None).

    Returns:
        New ResponsiveStyles dictionary.

    Raises:
        ValueError: If a key is not a breakpoint or a value is not scalar.
    """
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValueError("styles must be a mapping of breakpoint to declarations")

    normalized: dict[str, Declarations] = {}
    for key, declarations in value.items():
        bp = validate_breakpoint(key)
        if bp is None:
            raise ValueError(f"Unknown breakpoint: {key!r}")
        if not isinstance(declarations, Mapping):
            raise ValueError(f"Declarations for '{bp.value}' must be a mapping")
        for prop, decl in declarations.items():
            if isinstance(decl, bool) or not isinstance(decl, (str, int, float)):
                raise ValueError(
                    f"Declaration '{prop}' at '{bp.value}' must be a string "
                    f"or number, got {type(decl).__name__}"
                )
        normalized[bp.value] = dict(declarations)

    return {bp: normalized[bp] for bp in BREAKPOINT_ORDER if bp in normalized}


class Element(BaseModel):
    """A node of the page tree.

    Attributes:
        id: Globally unique identifier within the page.
        type: Element kind from the closed ElementType set.
        parent_id: Id of the containing element, None for roots.
        page_id: Owning page.
        content: Text content for text-bearing kinds.
        src: Media source URL.
        href: Link target.
        styles: Per-breakpoint structured declarations.
        tailwind_styles: Space-separated utility classes derived from styles
            merged with hand-authored classes.
        settings: Kind-specific configuration (form method, CMS binding, ...).
        elements: Ordered children; non-empty only for container kinds.
    """

    id: str = Field(..., description="Unique identifier for the element")
    type: ElementType = Field(..., description="Element kind")
    parent_id: str | None = Field(
        default=None, description="Id of the containing element, None for roots"
    )
    page_id: str = Field(..., description="Owning page identifier")

    # Content
    content: str | None = Field(default=None, description="Text content")
    src: str | None = Field(default=None, description="Media source URL")
    href: str | None = Field(default=None, description="Link target")

    # Presentation
    styles: ResponsiveStyles = Field(
        default_factory=dict,
        description="Per-breakpoint style declarations",
    )
    tailwind_styles: str = Field(
        default="",
        description="Compiled utility classes merged with hand-authored ones",
    )
    settings: dict[str, Any] | None = Field(
        default=None, description="Kind-specific configuration"
    )

    # Structure
    elements: list["Element"] = Field(
        default_factory=list,
        description="Ordered child elements",
    )

    model_config = {
        "use_enum_values": True,
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    @field_validator("styles", mode="before")
    @classmethod
    def _check_styles(cls, value: Any) -> ResponsiveStyles:
        return normalize_styles(value)


class ElementTemplate(BaseModel):
    """Blueprint for creating an element (and its children) with fresh ids.

    `elements` is None for leaf templates; a list (possibly empty) marks a
    container template whose children are cloned recursively.
    """

    type: ElementType = Field(..., description="Element kind")
    content: str | None = Field(default=None, description="Text content")
    src: str | None = Field(default=None, description="Media source URL")
    href: str | None = Field(default=None, description="Link target")
    styles: ResponsiveStyles | None = Field(
        default=None, description="Per-breakpoint style declarations"
    )
    tailwind_styles: str | None = Field(
        default=None, description="Utility classes; compiled from styles if absent"
    )
    settings: dict[str, Any] | None = Field(
        default=None, description="Kind-specific configuration"
    )
    elements: list["ElementTemplate"] | None = Field(
        default=None, description="Child templates (container templates only)"
    )

    model_config = {
        "use_enum_values": True,
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    @field_validator("styles", mode="before")
    @classmethod
    def _check_styles(cls, value: Any) -> ResponsiveStyles | None:
        if value is None:
            return None
        return normalize_styles(value)


def is_container_template(template: ElementTemplate) -> bool:
    """Check whether a template declares a children list."""
    return template.elements is not None


# =============================================================================
# Updates
# =============================================================================

_IMMUTABLE_FIELDS = frozenset({"id", "parent_id", "elements"})


def _field_name(key: str) -> str:
    if key in Element.model_fields:
        return key
    for name, info in Element.model_fields.items():
        if info.alias == key:
            return name
    raise ValueError(f"Unknown element field: {key!r}")


def apply_updates(element: Element, updates: Mapping[str, Any]) -> Element:
    """Return a copy of `element` with shallow field updates applied.

    Keys may use field names or their camelCase aliases. `styles` is
    validated; `type` is coerced to its enum value.

    Args:
        element: Element to copy.
        updates: Field values to replace.

    Returns:
        New Element; children are shared with the original.

    Raises:
        ValueError: For unknown fields, or attempts to change `id`,
            `parent_id` or `elements` (use the tree operations for structure).
    """
    normalized: dict[str, Any] = {}
    for key, value in updates.items():
        name = _field_name(key)
        if name in _IMMUTABLE_FIELDS:
            raise ValueError(f"Field '{name}' cannot be updated in place")
        if name == "styles":
            value = normalize_styles(value)
        elif name == "type":
            value = ElementType(value).value
        normalized[name] = value
    return element.model_copy(update=normalized)


# =============================================================================
# Serialization
# =============================================================================


def load_tree(data: Mapping[str, Any] | Iterable[Mapping[str, Any]]) -> list[Element]:
    """Build a root forest from nested camelCase (or snake_case) dicts.

    Args:
        data: A single element dict or a list of root element dicts.

    Returns:
        List of root Elements.

    Raises:
        pydantic.ValidationError: If any element is malformed.
    """
    if isinstance(data, Mapping):
        data = [data]
    return [Element.model_validate(item) for item in data]


def dump_tree(tree: list[Element]) -> list[dict[str, Any]]:
    """Serialize a root forest to nested camelCase JSON-compatible dicts."""
    return [el.model_dump(mode="json", by_alias=True) for el in tree]


def export_json_schema() -> dict[str, Any]:
    """Export the Element JSON Schema.

    Returns:
        JSON Schema dict describing the persisted (camelCase) element shape.

    Example:
        >>> schema = export_json_schema()
        >>> "Element" in schema["$defs"]
        True
    """
    return Element.model_json_schema(by_alias=True)


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
