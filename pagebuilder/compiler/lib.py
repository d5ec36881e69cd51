"""Utility-class compiler.

Turns structured style declarations into atomic utility-class strings
following Tailwind conventions. Property families are evaluated in a fixed
order so identical input always yields a byte-identical class string,
regardless of the iteration order of the declaration mapping.

Value handling per family:
- Categorical (display, flex-direction, ...): fixed lookup table, with an
  arbitrary-token fallback for unmapped values.
- Length (width, padding, font-size, ...): always an arbitrary token; bare
  numbers get the default unit. `width`/`height` "auto" map to `w-auto` /
  `h-auto`.
- Color: always arbitrary, the value preserved exactly.
"""

import re
from collections.abc import Callable, Mapping
from typing import Any, NamedTuple

from pagebuilder.config import get_default_unit
from pagebuilder.core.errors import CompilationError
from pagebuilder.core.log import get_logger
from pagebuilder.schema import BREAKPOINT_ORDER, Breakpoint, validate_breakpoint

logger = get_logger("pagebuilder.compiler")

# =============================================================================
# Lookup Tables
# =============================================================================

DISPLAY_MAP: dict[str, str] = {
    "flex": "flex",
    "grid": "grid",
    "none": "hidden",
    "inline-block": "inline-block",
    "block": "block",
    "inline": "inline",
    "inline-flex": "inline-flex",
    "inline-grid": "inline-grid",
    "contents": "contents",
    "flow-root": "flow-root",
}

FLEX_DIRECTION_MAP: dict[str, str] = {
    "column": "flex-col",
    "column-reverse": "flex-col-reverse",
    "row": "flex-row",
    "row-reverse": "flex-row-reverse",
}

JUSTIFY_CONTENT_MAP: dict[str, str] = {
    "center": "justify-center",
    "flex-start": "justify-start",
    "start": "justify-start",
    "flex-end": "justify-end",
    "end": "justify-end",
    "space-between": "justify-between",
    "space-around": "justify-around",
    "space-evenly": "justify-evenly",
}

ALIGN_ITEMS_MAP: dict[str, str] = {
    "center": "items-center",
    "flex-start": "items-start",
    "start": "items-start",
    "flex-end": "items-end",
    "end": "items-end",
    "stretch": "items-stretch",
    "baseline": "items-baseline",
}

TEXT_ALIGN_MAP: dict[str, str] = {
    "center": "text-center",
    "right": "text-right",
    "left": "text-left",
    "justify": "text-justify",
    "start": "text-left",
    "end": "text-right",
}

TEXT_TRANSFORM_MAP: dict[str, str] = {
    "uppercase": "uppercase",
    "lowercase": "lowercase",
    "capitalize": "capitalize",
    "none": "normal-case",
}

TEXT_DECORATION_MAP: dict[str, str] = {
    "underline": "underline",
    "overline": "overline",
    "line-through": "line-through",
    "lineThrough": "line-through",
    "none": "no-underline",
}

FONT_WEIGHT_MAP: dict[int, str] = {
    100: "font-thin",
    200: "font-extralight",
    300: "font-light",
    400: "font-normal",
    500: "font-medium",
    600: "font-semibold",
    700: "font-bold",
    800: "font-extrabold",
    900: "font-black",
}

_FONT_WEIGHT_KEYWORDS: dict[str, str] = {
    "normal": "font-normal",
    "400": "font-normal",
    "bold": "font-bold",
    "700": "font-bold",
}

# Checked in order: "sans-serif" must resolve to sans, not serif.
_GENERIC_FONT_FAMILIES: tuple[tuple[str, str], ...] = (
    ("monospace", "font-mono"),
    ("sans", "font-sans"),
    ("serif", "font-serif"),
)

# =============================================================================
# Escaping
# =============================================================================

_CSS_VAR_RE = re.compile(r"^var\(\s*--[a-zA-Z0-9\-_]+\s*\)$")
_NEWLINE_RE = re.compile(r"\r?\n|\r")
_WHITESPACE_RE = re.compile(r"\s+")
_COMMA_SPACE_RE = re.compile(r",\s+")
_NEEDS_QUOTES_RE = re.compile(r"[\s'\"]")


def is_css_variable(value: str) -> bool:
    """Check whether a value is exactly a custom-property reference."""
    return bool(_CSS_VAR_RE.match(value.strip()))


def escape_arbitrary(raw: Any) -> str:
    """Escape a value for use inside an arbitrary-value token.

    Whitespace runs collapse to one space, literal brackets are removed and
    spaces after commas are dropped. A bare `var(--name)` passes through;
    anything still holding whitespace or quotes is wrapped in single quotes.

    Args:
        raw: Declaration value (stringified).

    Returns:
        Escaped text, or an empty string when nothing remains.

    Example:
        >>> escape_arbitrary("var(--bg, #fff)")
        'var(--bg,#fff)'
        >>> escape_arbitrary("center  center")
        "'center center'"
    """
    cleaned = _NEWLINE_RE.sub(" ", str(raw))
    cleaned = _WHITESPACE_RE.sub(" ", cleaned)
    cleaned = cleaned.replace("[", "").replace("]", "").strip()
    cleaned = _COMMA_SPACE_RE.sub(",", cleaned)

    if not cleaned:
        return ""
    if is_css_variable(cleaned):
        return cleaned
    if _NEEDS_QUOTES_RE.search(cleaned):
        escaped = cleaned.replace("'", "\\'")
        return f"'{escaped}'"
    return cleaned


def split_classes(class_string: str | None) -> list[str]:
    """Split a class string on whitespace outside arbitrary-value brackets.

    Example:
        >>> split_classes("w-auto m-['0 auto']")
        ['w-auto', "m-['0 auto']"]
    """
    if not class_string:
        return []

    tokens: list[str] = []
    current: list[str] = []
    depth = 0
    for ch in class_string:
        if ch == "[":
            depth += 1
        elif ch == "]":
            depth = max(depth - 1, 0)
        elif ch.isspace() and depth == 0:
            if current:
                tokens.append("".join(current))
                current = []
            continue
        current.append(ch)
    if current:
        tokens.append("".join(current))
    return tokens


def _format_number(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_empty(value: Any) -> bool:
    return value is None or value == ""


def _arbitrary(prefix: str, text: str) -> str | None:
    safe = escape_arbitrary(text)
    return f"{prefix}-[{safe}]" if safe else None


# =============================================================================
# Family Handlers
# =============================================================================

Handler = Callable[[Any, str], str | None]


def _length(prefix: str, auto_token: str | None = None) -> Handler:
    def handle(value: Any, unit: str) -> str | None:
        if auto_token and value == "auto":
            return auto_token
        text = f"{_format_number(value)}{unit}" if _is_number(value) else str(value)
        return _arbitrary(prefix, text)

    return handle


def _color(prefix: str) -> Handler:
    def handle(value: Any, unit: str) -> str | None:
        return _arbitrary(prefix, _format_number(value) if _is_number(value) else value)

    return handle


def _categorical(table: dict[str, str], fallback: Callable[[str], str | None]) -> Handler:
    def handle(value: Any, unit: str) -> str | None:
        text = (_format_number(value) if _is_number(value) else str(value)).strip()
        return table.get(text) or fallback(text)

    return handle


def _prefixed(prefix: str) -> Callable[[str], str | None]:
    return lambda text: _arbitrary(prefix, text)


def _css_property(name: str) -> Callable[[str], str | None]:
    # Unmapped values use the arbitrary-property form `[name:value]`.
    def fallback(text: str) -> str | None:
        safe = escape_arbitrary(text)
        if not safe:
            return None
        return f"[{name}:{safe}]"

    return fallback


def _opacity(value: Any, unit: str) -> str | None:
    if _is_number(value):
        if 1 < value <= 100:
            value = value / 100
        text = _format_number(value)
    else:
        text = str(value)
    return _arbitrary("opacity", text)


def _font_weight(value: Any, unit: str) -> str | None:
    if _is_number(value):
        if float(value).is_integer() and int(value) in FONT_WEIGHT_MAP:
            return FONT_WEIGHT_MAP[int(value)]
        return _arbitrary("font", _format_number(value))
    text = str(value).strip()
    return _FONT_WEIGHT_KEYWORDS.get(text) or _arbitrary("font", text)


def _font_style(value: Any, unit: str) -> str | None:
    if str(value).strip() in ("italic", "oblique"):
        return "italic"
    return None


def _font_family(value: Any, unit: str) -> str | None:
    text = str(value).strip()
    if is_css_variable(text):
        return _arbitrary("font", text)
    lowered = text.lower()
    for needle, token in _GENERIC_FONT_FAMILIES:
        if needle in lowered:
            return token
    return _arbitrary("font", text)


def _z_index(value: Any, unit: str) -> str | None:
    return _arbitrary("z", _format_number(value) if _is_number(value) else value)


# Fixed evaluation order; each entry maps a camelCase property to its handler.
PROPERTY_FAMILIES: tuple[tuple[str, Handler], ...] = (
    # Sizing
    ("width", _length("w", auto_token="w-auto")),
    ("height", _length("h", auto_token="h-auto")),
    # Color
    ("backgroundColor", _color("bg")),
    ("color", _color("text")),
    # Border
    ("borderRadius", _length("rounded")),
    ("borderWidth", _length("border")),
    ("borderColor", _color("border")),
    ("opacity", _opacity),
    # Spacing
    ("padding", _length("p")),
    ("paddingTop", _length("pt")),
    ("paddingBottom", _length("pb")),
    ("paddingLeft", _length("pl")),
    ("paddingRight", _length("pr")),
    ("margin", _length("m")),
    ("marginTop", _length("mt")),
    ("marginBottom", _length("mb")),
    ("marginLeft", _length("ml")),
    ("marginRight", _length("mr")),
    # Layout
    ("display", _categorical(DISPLAY_MAP, _css_property("display"))),
    ("flexDirection", _categorical(FLEX_DIRECTION_MAP, _prefixed("flex"))),
    ("justifyContent", _categorical(JUSTIFY_CONTENT_MAP, _prefixed("justify"))),
    ("alignItems", _categorical(ALIGN_ITEMS_MAP, _prefixed("items"))),
    ("gap", _length("gap")),
    ("rowGap", _length("gap-y")),
    ("columnGap", _length("gap-x")),
    # Typography
    ("fontSize", _length("text")),
    ("fontWeight", _font_weight),
    ("lineHeight", _length("leading")),
    ("letterSpacing", _length("tracking")),
    ("textAlign", _categorical(TEXT_ALIGN_MAP, _prefixed("text"))),
    (
        "textTransform",
        _categorical(TEXT_TRANSFORM_MAP, _css_property("text-transform")),
    ),
    (
        "textDecoration",
        _categorical(TEXT_DECORATION_MAP, _css_property("text-decoration")),
    ),
    ("fontStyle", _font_style),
    ("fontFamily", _font_family),
    # Positioning
    ("zIndex", _z_index),
    ("top", _length("top")),
    ("bottom", _length("bottom")),
    ("left", _length("left")),
    ("right", _length("right")),
    # Background
    ("backgroundPosition", _color("bg")),
)

SUPPORTED_PROPERTIES: frozenset[str] = frozenset(name for name, _ in PROPERTY_FAMILIES)


# =============================================================================
# Compilation
# =============================================================================


def _to_camel(name: str) -> str:
    head, *rest = name.split("-")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _normalize_declarations(declarations: Mapping[str, Any]) -> dict[str, Any]:
    """Map kebab-case keys to camelCase and reject non-scalar values."""
    camel: dict[str, Any] = {}
    kebab: dict[str, Any] = {}
    for prop, value in declarations.items():
        if not isinstance(prop, str):
            raise CompilationError(
                f"Declaration names must be strings, got {type(prop).__name__}",
                property_name=str(prop),
            )
        if value is not None and (
            isinstance(value, bool) or not isinstance(value, (str, int, float))
        ):
            raise CompilationError(
                f"Unsupported value for '{prop}': {type(value).__name__}",
                property_name=prop,
                value=value,
            )
        if prop.startswith("--"):
            continue
        if "-" in prop:
            kebab[_to_camel(prop)] = value
        else:
            camel[prop] = value

    # camelCase spelling wins when both are present
    return {**kebab, **camel}


class CompiledClass(NamedTuple):
    """One compiled utility class and the declaration it came from."""

    token: str
    breakpoint: str
    property: str


def _compile_tokens(declarations: Any, unit: str) -> list[tuple[str, str]]:
    if declarations is None:
        return []
    if not isinstance(declarations, Mapping):
        raise CompilationError(
            f"Declarations must be a mapping, got {type(declarations).__name__}",
            value=declarations,
        )

    normalized = _normalize_declarations(declarations)

    tokens: list[tuple[str, str]] = []
    for prop, handler in PROPERTY_FAMILIES:
        value = normalized.get(prop)
        if _is_empty(value):
            continue
        token = handler(value, unit)
        if token:
            tokens.append((prop, token))
    return tokens


def compile_declarations(
    declarations: Mapping[str, Any] | None,
    unit: str | None = None,
) -> str:
    """Compile one breakpoint's declarations to a utility-class string.

    Args:
        declarations: Property to value mapping (camelCase or kebab-case).
        unit: Unit for bare numeric lengths. Defaults to
            PAGEBUILDER_DEFAULT_UNIT.

    Returns:
        Space-joined tokens, or an empty string if nothing applies.

    Raises:
        CompilationError: If the mapping or one of its values has an
            unsupported shape.

    Example:
        >>> compile_declarations({"paddingTop": 16, "width": "auto"})
        'w-auto pt-[16px]'
    """
    tokens = _compile_tokens(declarations, get_default_unit(unit))
    return " ".join(token for _, token in tokens)


def compile_class_list(
    styles: Mapping[str, Any] | None,
    unit: str | None = None,
) -> list[CompiledClass]:
    """Compile a responsive style map, keeping each token's origin.

    Same output order as `compile_utility_classes`; every entry records
    the breakpoint and the camelCase property that produced the token.

    Raises:
        CompilationError: On an unknown breakpoint or malformed declarations.
    """
    if styles is None:
        return []
    if not isinstance(styles, Mapping):
        raise CompilationError(
            f"Styles must be a mapping, got {type(styles).__name__}",
            value=styles,
        )

    by_breakpoint: dict[str, Any] = {}
    for key, declarations in styles.items():
        bp = validate_breakpoint(key)
        if bp is None:
            raise CompilationError(f"Unknown breakpoint: {key!r}", value=key)
        by_breakpoint[bp.value] = declarations

    unit = get_default_unit(unit)
    classes: list[CompiledClass] = []
    for bp in BREAKPOINT_ORDER:
        if bp not in by_breakpoint:
            continue
        prefix = "" if bp == Breakpoint.DEFAULT.value else f"{bp}:"
        classes.extend(
            CompiledClass(f"{prefix}{token}", bp, prop)
            for prop, token in _compile_tokens(by_breakpoint[bp], unit)
        )

    logger.debug(f"Compiled {len(by_breakpoint)} breakpoint(s) to {len(classes)} classes")
    return classes


def compile_utility_classes(
    styles: Mapping[str, Any] | None,
    unit: str | None = None,
) -> str:
    """Compile a responsive style map to a single class string.

    Each breakpoint compiles independently in canonical order
    (default, sm, md, lg, xl). Tokens from every breakpoint except
    `default` get a `{breakpoint}:` prefix.

    Args:
        styles: Breakpoint to declarations mapping.
        unit: Unit for bare numeric lengths.

    Returns:
        Space-joined class string.

    Raises:
        CompilationError: On an unknown breakpoint or malformed declarations.

    Example:
        >>> compile_utility_classes({"md": {"display": "flex"}})
        'md:flex'
    """
    return " ".join(c.token for c in compile_class_list(styles, unit))


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
]
