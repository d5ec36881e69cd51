"""Exceptions raised inside the document core.

Creation and compilation failures are absorbed at the public boundary
(factory, style writer) and only surface as log records; structural
violations are raised or returned before a new snapshot exists.
"""


class PageBuilderError(Exception):
    """Base exception for pagebuilder errors."""


class ConfigurationError(PageBuilderError):
    """Raised when an element cannot be created.

    Attributes:
        code: Machine-readable reason ("missing_page_id", "unknown_type",
            "missing_strategy", "invalid_template", "build_failed").
        context: Extra diagnostic values for the log record.
    """

    def __init__(
        self,
        message: str,
        code: str = "build_failed",
        context: dict | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.context = context or {}


class CompilationError(PageBuilderError):
    """Raised when a declaration map cannot be compiled to utility classes.

    Attributes:
        property_name: Declaration that failed, when known.
        value: Offending value, when known.
    """

    def __init__(
        self,
        message: str,
        property_name: str | None = None,
        value: object = None,
    ):
        super().__init__(message)
        self.property_name = property_name
        self.value = value


class StructuralViolation(PageBuilderError):
    """Raised when an edit would break a tree invariant.

    Attributes:
        kind: Violation category ("cycle", "duplicate_id", "self_target",
            "missing_node", "leaf_parent", "parent_mismatch",
            "invalid_position").
        node_id: Node the violation was detected on.
    """

    def __init__(self, message: str, kind: str, node_id: str | None = None):
        super().__init__(message)
        self.kind = kind
        self.node_id = node_id


class ElementNotFoundError(PageBuilderError, LookupError):
    """Raised when an id-addressed operation names an absent element."""

    def __init__(self, element_id: str):
        super().__init__(f"Element '{element_id}' not found in tree")
        self.element_id = element_id


__all__ = [
    "PageBuilderError",
    "ConfigurationError",
    "CompilationError",
    "StructuralViolation",
    "ElementNotFoundError",
]
