"""Breakpoint style writer.

Orchestrates one style edit: replace the declarations of a single
breakpoint, recompile every breakpoint, merge the result with the
element's hand-authored classes and commit both fields through a
caller-supplied `apply` callback.

Hand-authored classes are the tokens of the current `tailwind_styles`
that the element's current styles do not compile to. Every freshly
compiled class is kept; a hand-authored token survives only when it sets
a different property (or variant) than every compiled class.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from pagebuilder.compiler import (
    compile_class_list,
    compile_utility_classes,
    merge_with_compiled,
    split_classes,
)
from pagebuilder.core.errors import CompilationError
from pagebuilder.core.log import get_logger
from pagebuilder.model import Element, ResponsiveStyles
from pagebuilder.schema import Breakpoint
from pagebuilder.styles import with_breakpoint

logger = get_logger("pagebuilder.writer")

StyleApplier = Callable[[str, dict[str, Any]], Any]


@dataclass(frozen=True)
class StyleWriteResult:
    """Outcome of a style write.

    Attributes:
        styles: Responsive styles that were committed.
        tailwind_styles: Class string after the write (unchanged on failure).
        compiled: False when compilation failed and only styles were committed.
        error: The compilation failure, if any.
    """

    styles: ResponsiveStyles
    tailwind_styles: str
    compiled: bool = True
    error: CompilationError | None = None


def hand_authored_classes(element: Element) -> list[str]:
    """List the tokens of `tailwind_styles` not derived from `styles`.

    When the current styles no longer compile, every token is treated as
    hand-authored.
    """
    try:
        derived = set(split_classes(compile_utility_classes(element.styles)))
    except CompilationError:
        derived = set()
    return [t for t in split_classes(element.tailwind_styles) if t not in derived]


def update_element_style(
    element: Element,
    declarations: Mapping[str, Any],
    breakpoint: Breakpoint | str,
    apply: StyleApplier,
) -> StyleWriteResult:
    """Replace one breakpoint's declarations and commit recompiled classes.

    The declaration map at `breakpoint` is fully replaced; callers wanting
    to keep earlier values must spread them into `declarations`.

    Args:
        element: Element being edited.
        declarations: New declarations for `breakpoint`.
        breakpoint: Breakpoint to replace.
        apply: Callback receiving `(element_id, updates)`; `updates` holds
            `styles` and, when compilation succeeds, `tailwind_styles`.

    Returns:
        StyleWriteResult describing what was committed.

    Raises:
        ValueError: If `breakpoint` is not a known breakpoint.

    Example:
        >>> update_element_style(text, {"color": "#111"}, "default", apply)
        StyleWriteResult(styles={'default': {'color': '#111'}}, ...)
    """
    styles = with_breakpoint(element.styles, breakpoint, declarations)

    try:
        compiled = compile_class_list(styles)
    except CompilationError as e:
        logger.error(
            f"Failed to compile styles for element {element.id} "
            f"at '{breakpoint}': {e}"
        )
        apply(element.id, {"styles": styles})
        return StyleWriteResult(
            styles=styles,
            tailwind_styles=element.tailwind_styles,
            compiled=False,
            error=e,
        )

    hand_authored = " ".join(hand_authored_classes(element))
    tailwind_styles = merge_with_compiled(hand_authored, compiled)
    apply(element.id, {"styles": styles, "tailwind_styles": tailwind_styles})

    logger.debug(f"Updated styles of element {element.id} at '{breakpoint}'")
    return StyleWriteResult(styles=styles, tailwind_styles=tailwind_styles)


__all__ = [
    "StyleApplier",
    "StyleWriteResult",
    "hand_authored_classes",
    "update_element_style",
]
