"""Authoritative Schema Module for page-builder elements.

This module serves as the single source of truth for element kinds and
breakpoints. It provides:
- The closed set of element types with rich metadata
- Container / editable classification used by tree operations
- Breakpoint enum and canonical ordering
- Alias resolution and raw-dict validation

All element-kind queries should route through this module.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Breakpoint(str, Enum):
    """Viewport-width tiers gating which style override applies.

    The declaration order is the canonical compile order: DEFAULT applies
    to every viewport and carries no class prefix, the others emit
    `{breakpoint}:` prefixed tokens.
    """

    DEFAULT = "default"
    SM = "sm"
    MD = "md"
    LG = "lg"
    XL = "xl"


BREAKPOINT_ORDER: tuple[str, ...] = tuple(bp.value for bp in Breakpoint)


class ElementCategory(str, Enum):
    """High-level element groupings."""

    LAYOUT = "layout"
    TEXT = "text"
    MEDIA = "media"
    FORM = "form"
    CMS = "cms"


class ElementType(str, Enum):
    """Closed set of element kinds a page can contain.

    Values keep the PascalCase spelling used in persisted page JSON.
    """

    # Inline / Leaf
    TEXT = "Text"
    SPAN = "Span"
    HEADING = "Heading"
    LABEL = "Label"
    BLOCKQUOTE = "Blockquote"
    CODE = "Code"
    SEPARATOR = "Separator"
    ICON = "Icon"

    # Media
    IMAGE = "Image"
    VIDEO = "Video"
    AUDIO = "Audio"
    IFRAME = "IFrame"

    # Interactive
    LINK = "Link"
    BUTTON = "Button"

    # Form
    INPUT = "Input"
    TEXTAREA = "Textarea"
    CHECKBOX = "Checkbox"
    RADIO = "Radio"
    PROGRESS = "Progress"
    LIST = "List"
    SELECT = "Select"
    FORM = "Form"

    # Table
    TABLE = "Table"

    # Container / Layout
    FRAME = "Frame"
    SECTION = "Section"
    NAV = "Nav"
    HEADER = "Header"
    FOOTER = "Footer"
    ARTICLE = "Article"
    ASIDE = "Aside"
    CAROUSEL = "Carousel"

    # CMS
    CMS_CONTENT_LIST = "CMSContentList"
    CMS_CONTENT_ITEM = "CMSContentItem"
    CMS_CONTENT_GRID = "CMSContentGrid"


@dataclass(frozen=True)
class ElementMeta:
    """Rich metadata definition for an element kind.

    Attributes:
        type: The element kind.
        category: Grouping used by palettes and filters.
        description: Human-readable summary.
        is_container: Whether the kind may hold child elements.
        is_editable: Whether its content is edited inline.
        html_tag: Tag a renderer would typically emit.
        aliases: Alternative names accepted by `resolve_alias`.
    """

    type: ElementType
    category: ElementCategory
    description: str
    is_container: bool = False
    is_editable: bool = False
    html_tag: str = "div"
    aliases: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Convert metadata to dictionary for schema export."""
        return {
            "type": self.type.value,
            "category": self.category.value,
            "description": self.description,
            "is_container": self.is_container,
            "is_editable": self.is_editable,
            "html_tag": self.html_tag,
            "aliases": list(self.aliases),
        }


def _leaf(
    element_type: ElementType,
    category: ElementCategory,
    description: str,
    html_tag: str,
    aliases: tuple[str, ...] = (),
    editable: bool = False,
) -> ElementMeta:
    return ElementMeta(
        type=element_type,
        category=category,
        description=description,
        is_editable=editable,
        html_tag=html_tag,
        aliases=aliases,
    )


def _container(
    element_type: ElementType,
    category: ElementCategory,
    description: str,
    html_tag: str,
    aliases: tuple[str, ...] = (),
) -> ElementMeta:
    return ElementMeta(
        type=element_type,
        category=category,
        description=description,
        is_container=True,
        html_tag=html_tag,
        aliases=aliases,
    )


ELEMENT_REGISTRY: dict[ElementType, ElementMeta] = {
    # === INLINE / LEAF ===
    ElementType.TEXT: _leaf(
        ElementType.TEXT,
        ElementCategory.TEXT,
        "Block of plain text",
        "p",
        aliases=("paragraph", "p"),
        editable=True,
    ),
    ElementType.SPAN: _leaf(
        ElementType.SPAN,
        ElementCategory.TEXT,
        "Inline run of text",
        "span",
        editable=True,
    ),
    ElementType.HEADING: _leaf(
        ElementType.HEADING,
        ElementCategory.TEXT,
        "Section heading (h1-h6)",
        "h2",
        aliases=("title", "h1", "h2", "h3"),
        editable=True,
    ),
    ElementType.LABEL: _leaf(
        ElementType.LABEL,
        ElementCategory.TEXT,
        "Form field label",
        "label",
        editable=True,
    ),
    ElementType.BLOCKQUOTE: _leaf(
        ElementType.BLOCKQUOTE,
        ElementCategory.TEXT,
        "Quoted passage with optional citation",
        "blockquote",
        aliases=("quote",),
        editable=True,
    ),
    ElementType.CODE: _leaf(
        ElementType.CODE,
        ElementCategory.TEXT,
        "Preformatted source code",
        "pre",
        aliases=("pre", "snippet"),
        editable=True,
    ),
    ElementType.SEPARATOR: _leaf(
        ElementType.SEPARATOR,
        ElementCategory.LAYOUT,
        "Horizontal rule between content",
        "hr",
        aliases=("hr", "divider"),
    ),
    ElementType.ICON: _leaf(
        ElementType.ICON,
        ElementCategory.MEDIA,
        "Named vector icon",
        "svg",
        aliases=("glyph",),
    ),
    # === MEDIA ===
    ElementType.IMAGE: _leaf(
        ElementType.IMAGE,
        ElementCategory.MEDIA,
        "Raster or vector image",
        "img",
        aliases=("img", "picture", "photo"),
    ),
    ElementType.VIDEO: _leaf(
        ElementType.VIDEO,
        ElementCategory.MEDIA,
        "Embedded video player",
        "video",
    ),
    ElementType.AUDIO: _leaf(
        ElementType.AUDIO,
        ElementCategory.MEDIA,
        "Embedded audio player",
        "audio",
    ),
    ElementType.IFRAME: _leaf(
        ElementType.IFRAME,
        ElementCategory.MEDIA,
        "Embedded third-party document",
        "iframe",
        aliases=("embed",),
    ),
    # === INTERACTIVE ===
    ElementType.LINK: _leaf(
        ElementType.LINK,
        ElementCategory.TEXT,
        "Hyperlink",
        "a",
        aliases=("a", "anchor"),
        editable=True,
    ),
    ElementType.BUTTON: _leaf(
        ElementType.BUTTON,
        ElementCategory.FORM,
        "Clickable action trigger",
        "button",
        aliases=("btn", "cta"),
        editable=True,
    ),
    # === FORM ===
    ElementType.INPUT: _leaf(
        ElementType.INPUT,
        ElementCategory.FORM,
        "Single-line text field",
        "input",
        aliases=("textfield", "field"),
        editable=True,
    ),
    ElementType.TEXTAREA: _leaf(
        ElementType.TEXTAREA,
        ElementCategory.FORM,
        "Multi-line text field",
        "textarea",
        editable=True,
    ),
    ElementType.CHECKBOX: _leaf(
        ElementType.CHECKBOX,
        ElementCategory.FORM,
        "Binary toggle with label",
        "input",
    ),
    ElementType.RADIO: _leaf(
        ElementType.RADIO,
        ElementCategory.FORM,
        "Exclusive choice with label",
        "input",
    ),
    ElementType.PROGRESS: _leaf(
        ElementType.PROGRESS,
        ElementCategory.FORM,
        "Progress bar",
        "progress",
    ),
    ElementType.SELECT: _leaf(
        ElementType.SELECT,
        ElementCategory.FORM,
        "Dropdown selector",
        "select",
        aliases=("dropdown",),
        editable=True,
    ),
    ElementType.LIST: _container(
        ElementType.LIST,
        ElementCategory.LAYOUT,
        "Ordered collection of child elements",
        "ul",
        aliases=("ul", "ol"),
    ),
    ElementType.FORM: _container(
        ElementType.FORM,
        ElementCategory.FORM,
        "Form wrapping input controls",
        "form",
    ),
    # === TABLE ===
    ElementType.TABLE: _container(
        ElementType.TABLE,
        ElementCategory.LAYOUT,
        "Tabular data with configurable columns",
        "table",
        aliases=("grid",),
    ),
    # === CONTAINER / LAYOUT ===
    ElementType.FRAME: _container(
        ElementType.FRAME,
        ElementCategory.LAYOUT,
        "Generic layout container",
        "div",
        aliases=("div", "container", "box", "wrapper"),
    ),
    ElementType.SECTION: _container(
        ElementType.SECTION,
        ElementCategory.LAYOUT,
        "Page section",
        "section",
    ),
    ElementType.NAV: _container(
        ElementType.NAV,
        ElementCategory.LAYOUT,
        "Navigation bar",
        "nav",
        aliases=("navbar", "navigation"),
    ),
    ElementType.HEADER: _container(
        ElementType.HEADER,
        ElementCategory.LAYOUT,
        "Page or section header",
        "header",
    ),
    ElementType.FOOTER: _container(
        ElementType.FOOTER,
        ElementCategory.LAYOUT,
        "Page or section footer",
        "footer",
    ),
    ElementType.ARTICLE: _container(
        ElementType.ARTICLE,
        ElementCategory.LAYOUT,
        "Self-contained article",
        "article",
    ),
    ElementType.ASIDE: _container(
        ElementType.ASIDE,
        ElementCategory.LAYOUT,
        "Side content",
        "aside",
        aliases=("sidebar",),
    ),
    ElementType.CAROUSEL: _container(
        ElementType.CAROUSEL,
        ElementCategory.MEDIA,
        "Sliding sequence of child slides",
        "div",
        aliases=("slider", "slideshow"),
    ),
    # === CMS ===
    ElementType.CMS_CONTENT_LIST: _container(
        ElementType.CMS_CONTENT_LIST,
        ElementCategory.CMS,
        "List bound to a CMS content type",
        "div",
    ),
    ElementType.CMS_CONTENT_ITEM: _container(
        ElementType.CMS_CONTENT_ITEM,
        ElementCategory.CMS,
        "Single CMS item resolved by slug",
        "div",
    ),
    ElementType.CMS_CONTENT_GRID: _container(
        ElementType.CMS_CONTENT_GRID,
        ElementCategory.CMS,
        "Grid bound to a CMS content type",
        "div",
    ),
}


CONTAINER_ELEMENT_TYPES: frozenset[ElementType] = frozenset(
    meta.type for meta in ELEMENT_REGISTRY.values() if meta.is_container
)

EDITABLE_ELEMENT_TYPES: frozenset[ElementType] = frozenset(
    meta.type for meta in ELEMENT_REGISTRY.values() if meta.is_editable
)


def get_element_meta(element_type: ElementType | str) -> ElementMeta:
    """Get rich metadata for an element type.

    Args:
        element_type: The element type (enum member or its value).

    Returns:
        ElementMeta with full metadata for the type.

    Raises:
        KeyError: If the type is not a known element kind.
    """
    resolved = validate_element_type(element_type)
    if resolved is None:
        raise KeyError(f"Unknown element type: {element_type}")
    return ELEMENT_REGISTRY[resolved]


def is_container_type(element_type: ElementType | str) -> bool:
    """Check whether an element kind may hold children."""
    resolved = validate_element_type(element_type)
    return resolved is not None and resolved in CONTAINER_ELEMENT_TYPES


def is_editable_type(element_type: ElementType | str) -> bool:
    """Check whether an element kind supports inline content editing."""
    resolved = validate_element_type(element_type)
    return resolved is not None and resolved in EDITABLE_ELEMENT_TYPES


def get_elements_by_category(category: ElementCategory) -> list[ElementType]:
    """Get all element types in a category.

    Args:
        category: The category to filter by.

    Returns:
        List of ElementType values in the category.
    """
    return [
        meta.type for meta in ELEMENT_REGISTRY.values() if meta.category == category
    ]


def resolve_alias(alias: str) -> ElementType | None:
    """Resolve an element alias to its canonical type.

    Args:
        alias: The alias string to resolve (case-insensitive).

    Returns:
        The canonical ElementType, or None if not found.
    """
    alias_lower = alias.lower().strip()

    for et in ElementType:
        if et.value.lower() == alias_lower:
            return et

    for meta in ELEMENT_REGISTRY.values():
        if alias_lower in meta.aliases:
            return meta.type

    return None


def validate_element_type(value: ElementType | str) -> ElementType | None:
    """Validate and convert a value to ElementType.

    Only exact values are accepted here; aliases go through `resolve_alias`.

    Args:
        value: Enum member or string value to validate.

    Returns:
        ElementType if valid, None otherwise.
    """
    if isinstance(value, ElementType):
        return value
    try:
        return ElementType(value)
    except ValueError:
        return None


def validate_breakpoint(value: Breakpoint | str) -> Breakpoint | None:
    """Validate and convert a value to Breakpoint.

    Args:
        value: Enum member or string value to validate.

    Returns:
        Breakpoint if valid, None otherwise.
    """
    if isinstance(value, Breakpoint):
        return value
    try:
        return Breakpoint(value)
    except ValueError:
        return None


def export_element_enum_schema() -> dict[str, Any]:
    """Export a mapping of element type values to their metadata."""
    return {et.value: ELEMENT_REGISTRY[et].to_dict() for et in ElementType}


# === SCHEMA VALIDATION ===


@dataclass
class SchemaValidationError:
    """Represents a schema validation error in a raw element dict."""

    path: str
    message: str
    error_type: str


def validate_element_dict(
    data: dict[str, Any],
    path: str = "root",
    parent_id: str | None = None,
) -> list[SchemaValidationError]:
    """Validate a raw (camelCase JSON) element dictionary.

    Checks required fields, the element type, breakpoint keys, scalar
    declaration values, children placement and parent linkage. Ids are
    checked for uniqueness among siblings here; whole-tree uniqueness is
    the job of `pagebuilder.validation`.

    Args:
        data: Dictionary representing an element.
        path: Current path in the tree for error reporting.
        parent_id: Id of the containing element, None at the root.

    Returns:
        List of validation errors found.
    """
    errors: list[SchemaValidationError] = []

    for required in ("id", "type", "pageId"):
        if required not in data:
            errors.append(
                SchemaValidationError(
                    path, f"Missing required field '{required}'", "missing_field"
                )
            )

    element_type = None
    if "type" in data:
        element_type = validate_element_type(data["type"])
        if element_type is None:
            errors.append(
                SchemaValidationError(
                    path, f"Invalid element type: {data['type']}", "invalid_enum"
                )
            )

    if data.get("parentId") != parent_id:
        errors.append(
            SchemaValidationError(
                path,
                f"parentId must be {parent_id!r}, got {data.get('parentId')!r}",
                "parent_mismatch",
            )
        )

    styles = data.get("styles", {})
    if not isinstance(styles, dict):
        errors.append(
            SchemaValidationError(path, "styles must be an object", "invalid_type")
        )
    else:
        for bp, declarations in styles.items():
            if validate_breakpoint(bp) is None:
                errors.append(
                    SchemaValidationError(
                        f"{path}.styles",
                        f"Unknown breakpoint: {bp}",
                        "invalid_enum",
                    )
                )
                continue
            if not isinstance(declarations, dict):
                errors.append(
                    SchemaValidationError(
                        f"{path}.styles.{bp}",
                        "declarations must be an object",
                        "invalid_type",
                    )
                )
                continue
            for prop, value in declarations.items():
                if isinstance(value, bool) or not isinstance(
                    value, (str, int, float)
                ):
                    errors.append(
                        SchemaValidationError(
                            f"{path}.styles.{bp}.{prop}",
                            f"declaration value must be string or number, "
                            f"got {type(value).__name__}",
                            "invalid_type",
                        )
                    )

    children = data.get("elements", [])
    if not isinstance(children, list):
        errors.append(
            SchemaValidationError(path, "elements must be a list", "invalid_type")
        )
        return errors

    if children and element_type is not None and not is_container_type(element_type):
        errors.append(
            SchemaValidationError(
                path,
                f"Element type '{element_type.value}' cannot have children "
                f"(found {len(children)})",
                "leaf_with_children",
            )
        )

    seen_ids: set[str] = set()
    for i, child in enumerate(children):
        child_path = f"{path}.elements[{i}]"
        if not isinstance(child, dict):
            errors.append(
                SchemaValidationError(
                    child_path, "Child must be an object", "invalid_type"
                )
            )
            continue

        child_id = child.get("id")
        if child_id and child_id in seen_ids:
            errors.append(
                SchemaValidationError(
                    child_path, f"Duplicate id: {child_id}", "duplicate_id"
                )
            )
        if child_id:
            seen_ids.add(child_id)

        errors.extend(validate_element_dict(child, child_path, data.get("id")))

    return errors


def is_valid_element_dict(data: dict[str, Any]) -> bool:
    """Check if a raw element dictionary is valid.

    Args:
        data: Dictionary to validate.

    Returns:
        True if valid, False otherwise.
    """
    return len(validate_element_dict(data)) == 0


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
