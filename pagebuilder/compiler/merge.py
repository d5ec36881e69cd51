"""Last-wins utility-class merging.

Combines class strings so that, when two tokens set the same underlying
CSS property under the same variants, only the later token survives.
Tokens are keyed by (variants, important flag, conflict group); tokens
whose group is unknown conflict only with identical tokens.

Example:
    >>> merge_classes("p-[4px] text-[#000] md:flex", "p-[8px] text-[24px]")
    'text-[#000] md:flex p-[8px] text-[24px]'
"""

import re
from collections.abc import Callable

from .lib import CompiledClass, split_classes

__all__ = [
    "PROPERTY_CONFLICT_GROUPS",
    "compiled_conflict_key",
    "conflict_group",
    "conflict_key",
    "merge_classes",
    "merge_with_compiled",
]

# =============================================================================
# Value Classification
# =============================================================================

_LENGTH_RE = re.compile(
    r"^-?(\d+\.?\d*|\.\d+)"
    r"(px|rem|em|%|vh|vw|vmin|vmax|dvh|svh|lvh|ch|ex|lh|pt|pc|in|cm|mm)?$"
)
_LENGTH_FUNCTIONS = ("calc(", "clamp(", "min(", "max(")
_POSITION_WORDS = frozenset({"top", "bottom", "left", "right", "center"})


def _arbitrary_value(rest: str) -> str | None:
    if len(rest) >= 2 and rest.startswith("[") and rest.endswith("]"):
        return _unquote(rest[1:-1])
    return None


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
        return value[1:-1].replace("\\'", "'")
    return value


def _is_length(value: str) -> bool:
    if value.startswith("length:"):
        return True
    return bool(_LENGTH_RE.match(value)) or value.startswith(_LENGTH_FUNCTIONS)


def _is_position(value: str) -> bool:
    words = value.replace("_", " ").split()
    return bool(words) and all(w in _POSITION_WORDS or _is_length(w) for w in words)


# =============================================================================
# Ambiguous Families
# =============================================================================

_FONT_SIZES = frozenset(
    {"xs", "sm", "base", "lg", "xl"} | {f"{n}xl" for n in range(2, 10)}
)
_TEXT_ALIGNS = frozenset({"left", "center", "right", "justify", "start", "end"})
_FONT_WEIGHTS = frozenset(
    {
        "thin",
        "extralight",
        "light",
        "normal",
        "medium",
        "semibold",
        "bold",
        "extrabold",
        "black",
    }
)
_FONT_FAMILIES = frozenset({"sans", "serif", "mono"})
_BORDER_STYLES = frozenset({"solid", "dashed", "dotted", "double", "hidden", "none"})
_BORDER_SIDES = frozenset({"x", "y", "t", "r", "b", "l", "s", "e"})
_ROUNDED_SIDES = frozenset(
    {"t", "r", "b", "l", "tl", "tr", "br", "bl", "s", "e", "ss", "se", "es", "ee"}
)
_BG_POSITIONS = frozenset(
    {
        "bottom",
        "center",
        "left",
        "left-bottom",
        "left-top",
        "right",
        "right-bottom",
        "right-top",
        "top",
    }
)


def _text_group(rest: str) -> str:
    if rest in _TEXT_ALIGNS:
        return "text-align"
    if rest in _FONT_SIZES:
        return "font-size"
    if rest in ("ellipsis", "clip"):
        return "text-overflow"
    value = _arbitrary_value(rest)
    if value is not None and _is_length(value):
        return "font-size"
    return "text-color"


def _font_group(rest: str) -> str:
    if rest in _FONT_WEIGHTS:
        return "font-weight"
    if rest in _FONT_FAMILIES:
        return "font-family"
    value = _arbitrary_value(rest)
    if value is not None and (value.isdigit() or value.startswith("number:")):
        return "font-weight"
    return "font-family"


def _border_group(rest: str) -> str:
    if rest == "" or rest.isdigit():
        return "border-width"
    if rest in _BORDER_STYLES:
        return "border-style"
    if rest in ("collapse", "separate"):
        return "border-collapse"

    side, _, tail = rest.partition("-")
    if side in _BORDER_SIDES:
        tail_value = _arbitrary_value(tail)
        if tail == "" or tail.isdigit() or (tail_value and _is_length(tail_value)):
            return f"border-width-{side}"
        return f"border-color-{side}"

    value = _arbitrary_value(rest)
    if value is not None and _is_length(value):
        return "border-width"
    return "border-color"


def _bg_group(rest: str) -> str:
    if rest in ("fixed", "local", "scroll"):
        return "bg-attachment"
    if rest in _BG_POSITIONS:
        return "bg-position"
    if rest in ("auto", "cover", "contain"):
        return "bg-size"
    if rest == "no-repeat" or rest.startswith("repeat"):
        return "bg-repeat"
    if rest == "none" or rest.startswith("gradient-"):
        return "bg-image"

    value = _arbitrary_value(rest)
    if value is not None:
        if value.startswith("url(") or "gradient(" in value:
            return "bg-image"
        if _is_position(value):
            return "bg-position"
    return "bg-color"


def _rounded_group(rest: str) -> str:
    side = rest.split("-", 1)[0]
    return f"rounded-{side}" if side in _ROUNDED_SIDES else "rounded"


def _flex_group(rest: str) -> str:
    if rest in ("row", "row-reverse", "col", "col-reverse"):
        return "flex-direction"
    if rest in ("wrap", "wrap-reverse", "nowrap"):
        return "flex-wrap"
    return "flex"


# =============================================================================
# Group Tables
# =============================================================================

_EXACT_GROUPS: dict[str, str] = {
    **dict.fromkeys(
        (
            "block",
            "inline-block",
            "inline",
            "flex",
            "inline-flex",
            "grid",
            "inline-grid",
            "contents",
            "flow-root",
            "hidden",
            "table",
            "list-item",
        ),
        "display",
    ),
    **dict.fromkeys(
        ("static", "fixed", "absolute", "relative", "sticky"), "position"
    ),
    **dict.fromkeys(
        ("uppercase", "lowercase", "capitalize", "normal-case"), "text-transform"
    ),
    **dict.fromkeys(
        ("underline", "overline", "line-through", "no-underline"), "text-decoration"
    ),
    **dict.fromkeys(("italic", "not-italic"), "font-style"),
    **dict.fromkeys(("visible", "invisible", "collapse"), "visibility"),
    "truncate": "text-overflow",
}

# Arbitrary properties that share a group with named utilities.
_PROPERTY_GROUPS: dict[str, str] = {
    "display": "display",
    "position": "position",
    "text-transform": "text-transform",
    "text-decoration": "text-decoration",
    "font-style": "font-style",
}

# Longer prefixes precede the shorter ones they start with.
_PREFIX_GROUPS: tuple[tuple[str, str | Callable[[str], str]], ...] = (
    # Sizing
    ("min-w", "min-w"),
    ("max-w", "max-w"),
    ("min-h", "min-h"),
    ("max-h", "max-h"),
    ("size", "size"),
    ("w", "w"),
    ("h", "h"),
    # Ambiguous families
    ("text", _text_group),
    ("font", _font_group),
    ("border", _border_group),
    ("bg", _bg_group),
    ("rounded", _rounded_group),
    ("flex", _flex_group),
    ("opacity", "opacity"),
    # Spacing
    ("px", "px"),
    ("py", "py"),
    ("pt", "pt"),
    ("pr", "pr"),
    ("pb", "pb"),
    ("pl", "pl"),
    ("ps", "ps"),
    ("pe", "pe"),
    ("p", "p"),
    ("mx", "mx"),
    ("my", "my"),
    ("mt", "mt"),
    ("mr", "mr"),
    ("mb", "mb"),
    ("ml", "ml"),
    ("ms", "ms"),
    ("me", "me"),
    ("m", "m"),
    ("space-x", "space-x"),
    ("space-y", "space-y"),
    # Layout
    ("gap-x", "gap-x"),
    ("gap-y", "gap-y"),
    ("gap", "gap"),
    ("justify-items", "justify-items"),
    ("justify-self", "justify-self"),
    ("justify", "justify-content"),
    ("items", "align-items"),
    ("self", "align-self"),
    ("content", "align-content"),
    ("grid-cols", "grid-cols"),
    ("grid-rows", "grid-rows"),
    ("basis", "basis"),
    ("grow", "grow"),
    ("shrink", "shrink"),
    ("order", "order"),
    ("overflow-x", "overflow-x"),
    ("overflow-y", "overflow-y"),
    ("overflow", "overflow"),
    # Typography
    ("leading", "line-height"),
    ("tracking", "letter-spacing"),
    ("whitespace", "whitespace"),
    # Positioning
    ("inset-x", "inset-x"),
    ("inset-y", "inset-y"),
    ("inset", "inset"),
    ("top", "top"),
    ("bottom", "bottom"),
    ("left", "left"),
    ("right", "right"),
    ("z", "z"),
    # Effects
    ("shadow", "shadow"),
    ("cursor", "cursor"),
)


def _split_variants(token: str) -> tuple[list[str], str]:
    """Split `md:hover:bg-[#fff]` into (["md", "hover"], "bg-[#fff]")."""
    variants: list[str] = []
    depth = 0
    start = 0
    for i, ch in enumerate(token):
        if ch in "[(":
            depth += 1
        elif ch in "])":
            depth = max(depth - 1, 0)
        elif ch == ":" and depth == 0:
            variants.append(token[start:i])
            start = i + 1
    return variants, token[start:]


def conflict_group(base: str) -> str | None:
    """Get the conflict group of a variant-free utility class.

    Args:
        base: Class without variant prefixes (e.g. "text-[24px]").

    Returns:
        Group name ("font-size", "bg-color", ...) or None when unknown.
    """
    base = base.lstrip("!")
    if base.startswith("-"):
        base = base[1:]

    if base.startswith("[") and base.endswith("]") and ":" in base:
        prop = base[1:].split(":", 1)[0]
        return _PROPERTY_GROUPS.get(prop, "property:" + prop)

    if base in _EXACT_GROUPS:
        return _EXACT_GROUPS[base]

    for prefix, group in _PREFIX_GROUPS:
        if base == prefix or base.startswith(prefix + "-"):
            rest = base[len(prefix) + 1 :]
            return group(rest) if callable(group) else group
    return None


def conflict_key(token: str) -> tuple[tuple[str, ...], bool, str]:
    """Build the key under which two tokens conflict."""
    variants, base = _split_variants(token)
    important = base.startswith("!")
    group = conflict_group(base)
    if group is None:
        group = "token:" + base
    return tuple(sorted(variants)), important, group


def merge_classes(*class_strings: str | None) -> str:
    """Merge utility-class strings with last-wins conflict resolution.

    Args:
        *class_strings: Space-separated class strings; None and empty
            strings are skipped.

    Returns:
        Merged class string preserving the relative order of survivors.
    """
    tokens = [token for s in class_strings for token in split_classes(s)]

    claimed: set[tuple[tuple[str, ...], bool, str]] = set()
    kept: list[str] = []
    for token in reversed(tokens):
        key = conflict_key(token)
        if key in claimed:
            continue
        claimed.add(key)
        kept.append(token)

    return " ".join(reversed(kept))


# =============================================================================
# Compiled Classes
# =============================================================================

# Conflict group of every token the compiler emits, keyed by its property.
PROPERTY_CONFLICT_GROUPS: dict[str, str] = {
    # Sizing
    "width": "w",
    "height": "h",
    # Color
    "backgroundColor": "bg-color",
    "color": "text-color",
    # Border
    "borderRadius": "rounded",
    "borderWidth": "border-width",
    "borderColor": "border-color",
    "opacity": "opacity",
    # Spacing
    "padding": "p",
    "paddingTop": "pt",
    "paddingBottom": "pb",
    "paddingLeft": "pl",
    "paddingRight": "pr",
    "margin": "m",
    "marginTop": "mt",
    "marginBottom": "mb",
    "marginLeft": "ml",
    "marginRight": "mr",
    # Layout
    "display": "display",
    "flexDirection": "flex-direction",
    "justifyContent": "justify-content",
    "alignItems": "align-items",
    "gap": "gap",
    "rowGap": "gap-y",
    "columnGap": "gap-x",
    # Typography
    "fontSize": "font-size",
    "fontWeight": "font-weight",
    "lineHeight": "line-height",
    "letterSpacing": "letter-spacing",
    "textAlign": "text-align",
    "textTransform": "text-transform",
    "textDecoration": "text-decoration",
    "fontStyle": "font-style",
    "fontFamily": "font-family",
    # Positioning
    "zIndex": "z",
    "top": "top",
    "bottom": "bottom",
    "left": "left",
    "right": "right",
    # Background
    "backgroundPosition": "bg-position",
}


def compiled_conflict_key(
    compiled: CompiledClass,
) -> tuple[tuple[str, ...], bool, str]:
    """Build the conflict key of a compiled class from its property."""
    variants, _ = _split_variants(compiled.token)
    return tuple(sorted(variants)), False, PROPERTY_CONFLICT_GROUPS[compiled.property]


def merge_with_compiled(
    hand_authored: str | None, compiled: list[CompiledClass]
) -> str:
    """Append compiled classes to hand-authored ones, compiled first in priority.

    Every compiled class is kept. A hand-authored token is dropped when it
    repeats a compiled token or sets the same property under the same
    variants as one.

    Args:
        hand_authored: Space-separated classes not derived from styles.
        compiled: Output of `compile_class_list`.

    Returns:
        Surviving hand-authored tokens followed by all compiled tokens.

    Example:
        >>> merge_with_compiled(
        ...     "text-lg shadow-sm",
        ...     compile_class_list({"default": {"fontSize": "var(--fs)"}}),
        ... )
        'shadow-sm text-[var(--fs)]'
    """
    tokens = {c.token for c in compiled}
    keys = {compiled_conflict_key(c) for c in compiled}
    kept = [
        token
        for token in split_classes(hand_authored)
        if token not in tokens and conflict_key(token) not in keys
    ]
    return " ".join([*kept, *(c.token for c in compiled)])
