"""pagebuilder: document core of a visual page builder."""

from pagebuilder.compiler import (
    compile_declarations,
    compile_utility_classes,
    merge_classes,
)
from pagebuilder.editor import EditorSession
from pagebuilder.factory import (
    ElementFactory,
    create_element,
    create_element_from_template,
)
from pagebuilder.model import Element, ElementTemplate, dump_tree, load_tree
from pagebuilder.schema import Breakpoint, ElementType
from pagebuilder.styles import resolve_breakpoint, resolve_flattened
from pagebuilder.swap import DropPosition, SwapResult, relocate
from pagebuilder.tree import delete_by_id, find, insert_after, update_by_id
from pagebuilder.validation import ValidationError, is_valid, validate_tree
from pagebuilder.writer import StyleWriteResult, update_element_style

__all__ = [
    # Model
    "Element",
    "ElementTemplate",
    "ElementType",
    "Breakpoint",
    "load_tree",
    "dump_tree",
    # Factory
    "ElementFactory",
    "create_element",
    "create_element_from_template",
    # Tree
    "find",
    "update_by_id",
    "delete_by_id",
    "insert_after",
    # Styles
    "resolve_breakpoint",
    "resolve_flattened",
    "compile_declarations",
    "compile_utility_classes",
    "merge_classes",
    "update_element_style",
    "StyleWriteResult",
    # Swap
    "relocate",
    "DropPosition",
    "SwapResult",
    # Validation
    "validate_tree",
    "is_valid",
    "ValidationError",
    # Session
    "EditorSession",
]
