"""Style resolution over responsive style maps.

Responsive styles are stored per breakpoint without cascading. This module
answers the two questions callers ask of them: "what is declared at exactly
this breakpoint" (property panels) and "what applies when every breakpoint
is overlaid in order" (previews). It also holds the content placeholder
helper used by CMS-bound elements.
"""

import re
from collections.abc import Iterator, Mapping, Sequence
from datetime import date, datetime
from typing import Any

from pagebuilder.model import Declarations, ResponsiveStyles
from pagebuilder.schema import BREAKPOINT_ORDER, Breakpoint, validate_breakpoint


def _key(breakpoint: Breakpoint | str) -> str:
    bp = validate_breakpoint(breakpoint)
    if bp is None:
        raise ValueError(f"Unknown breakpoint: {breakpoint!r}")
    return bp.value


def resolve_breakpoint(
    styles: ResponsiveStyles | None, breakpoint: Breakpoint | str
) -> Declarations:
    """Get the declarations stored at exactly one breakpoint.

    No cascade is applied: a property declared only at `default` is absent
    from the `md` result.

    Args:
        styles: Responsive style map (may be None).
        breakpoint: Breakpoint to read.

    Returns:
        Copy of the declaration map, empty when the breakpoint is absent.

    Raises:
        ValueError: If `breakpoint` is not a known breakpoint.
    """
    key = _key(breakpoint)
    for bp, declarations in iter_breakpoints(styles):
        if bp == key:
            return declarations
    return {}


def iter_breakpoints(
    styles: ResponsiveStyles | None,
) -> Iterator[tuple[str, Declarations]]:
    """Yield (breakpoint, declarations) pairs in canonical order.

    Unknown keys are skipped.
    """
    if not styles:
        return
    by_key = {
        _key(bp): declarations
        for bp, declarations in styles.items()
        if validate_breakpoint(bp) is not None
    }
    for bp in BREAKPOINT_ORDER:
        if bp in by_key:
            yield bp, dict(by_key[bp] or {})


def resolve_flattened(styles: ResponsiveStyles | None) -> Declarations:
    """Overlay every breakpoint's declarations in canonical order.

    Later breakpoints win on conflicting properties.

    Example:
        >>> resolve_flattened({"md": {"gap": 8}, "default": {"gap": 4, "width": 1}})
        {'gap': 8, 'width': 1}
    """
    merged: Declarations = {}
    for _bp, declarations in iter_breakpoints(styles):
        merged.update(declarations)
    return merged


def with_breakpoint(
    styles: ResponsiveStyles | None,
    breakpoint: Breakpoint | str,
    declarations: Mapping[str, Any],
) -> ResponsiveStyles:
    """Return a new style map with one breakpoint fully replaced.

    Other breakpoints are kept as-is; the result is in canonical order.

    Args:
        styles: Existing responsive style map.
        breakpoint: Breakpoint to replace.
        declarations: New declarations (not merged with the old ones).

    Returns:
        New ResponsiveStyles; the input is not modified.
    """
    key = _key(breakpoint)
    result: dict[str, Declarations] = dict(iter_breakpoints(styles))
    result[key] = dict(declarations)
    return {bp: result[bp] for bp in BREAKPOINT_ORDER if bp in result}


# =============================================================================
# Content Placeholders
# =============================================================================

_PLACEHOLDER_RE = re.compile(r"\{\{([^}]+)\}\}")
_MISSING = object()


def _lookup(data: Any, path: str) -> Any:
    value = data
    for part in path.split("."):
        if isinstance(value, Mapping) and part in value:
            value = value[part]
        elif (
            isinstance(value, Sequence)
            and not isinstance(value, str)
            and part.isdigit()
            and int(part) < len(value)
        ):
            value = value[int(part)]
        else:
            return _MISSING
    return value


def _format_date(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).date().isoformat()
    except ValueError:
        return value


def _to_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def replace_placeholders(text: str, data: Any) -> str:
    """Substitute `{{field.path}}` placeholders from a data record.

    A `|date` filter renders the value as an ISO calendar date. Placeholders
    whose path cannot be resolved (or resolves to None) are left untouched.

    Args:
        text: Template text, e.g. an element's `content`.
        data: Mapping the paths are resolved against.

    Returns:
        Text with resolvable placeholders replaced.

    Example:
        >>> replace_placeholders("By {{author.name}}", {"author": {"name": "Ada"}})
        'By Ada'
    """
    if not data or not isinstance(data, Mapping):
        return text

    def substitute(match: re.Match) -> str:
        field, _, filter_name = match.group(1).partition("|")
        value = _lookup(data, field.strip())
        if value is _MISSING or value is None:
            return match.group(0)
        if filter_name.strip() == "date" and value:
            value = _format_date(value)
        return _to_text(value)

    return _PLACEHOLDER_RE.sub(substitute, text)


__all__ = [
    "iter_breakpoints",
    "resolve_breakpoint",
    "resolve_flattened",
    "with_breakpoint",
    "replace_placeholders",
]
