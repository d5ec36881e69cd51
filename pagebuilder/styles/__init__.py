"""Style resolution for responsive style maps and content placeholders."""

from .lib import (
    iter_breakpoints,
    replace_placeholders,
    resolve_breakpoint,
    resolve_flattened,
    with_breakpoint,
)

__all__ = [
    # Resolution
    "iter_breakpoints",
    "resolve_breakpoint",
    "resolve_flattened",
    "with_breakpoint",
    # Content
    "replace_placeholders",
]
