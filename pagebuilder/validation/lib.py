"""Tree validation and static analysis.

This module provides validation functions for element trees, detecting
structural issues before a snapshot is committed.
"""

from dataclasses import dataclass

from pagebuilder.model import Element
from pagebuilder.schema import is_container_type


@dataclass
class ValidationError:
    """Represents a validation error in an element tree.

    Attributes:
        node_id: ID of the element with the error.
        message: Human-readable error description.
        error_type: Category of the error.
    """

    node_id: str
    message: str
    error_type: str


def validate_tree(tree: list[Element]) -> list[ValidationError]:
    """Validate a root forest for structural issues.

    Performs the following checks:
        - Unique ID enforcement (no duplicate IDs)
        - Parent linkage (parent_id matches the actual container)
        - Children only under container kinds
        - Cycle detection (no element is nested inside itself)

    Args:
        tree: Root elements of the page.

    Returns:
        list[ValidationError]: List of validation errors (empty if valid).

    Example:
        >>> errors = validate_tree(tree)
        >>> if errors:
        ...     for e in errors:
        ...         print(f"{e.node_id}: {e.message}")
    """
    errors: list[ValidationError] = []

    # Collect all IDs and check for duplicates
    id_counts: dict[str, int] = {}
    _collect_ids(tree, id_counts)

    for node_id, count in id_counts.items():
        if count > 1:
            errors.append(
                ValidationError(
                    node_id=node_id,
                    message=f"Duplicate ID '{node_id}' appears {count} times",
                    error_type="duplicate_id",
                )
            )

    errors.extend(_validate_parent_links(tree))
    errors.extend(_validate_containers(tree))
    errors.extend(_detect_cycles(tree))

    return errors


def is_valid(tree: list[Element]) -> bool:
    """Check if an element tree is valid.

    Convenience function that returns True if no validation errors exist.

    Args:
        tree: Root elements of the page.

    Returns:
        bool: True if the tree is valid, False otherwise.
    """
    return not validate_tree(tree)


def _collect_ids(tree: list[Element], id_counts: dict[str, int]) -> None:
    """Recursively collect all element IDs and count occurrences."""
    for element in tree:
        id_counts[element.id] = id_counts.get(element.id, 0) + 1
        _collect_ids(element.elements, id_counts)


def _validate_parent_links(tree: list[Element]) -> list[ValidationError]:
    """Check every parent_id against the element's actual container.

    Args:
        tree: Root elements of the page.

    Returns:
        list[ValidationError]: Parent mismatch errors found.
    """
    errors: list[ValidationError] = []

    def _check(elements: list[Element], parent_id: str | None) -> None:
        for element in elements:
            if element.parent_id != parent_id:
                errors.append(
                    ValidationError(
                        node_id=element.id,
                        message=(
                            f"Element '{element.id}' has parentId "
                            f"{element.parent_id!r}, expected {parent_id!r}"
                        ),
                        error_type="parent_mismatch",
                    )
                )
            _check(element.elements, element.id)

    _check(tree, None)
    return errors


def _validate_containers(tree: list[Element]) -> list[ValidationError]:
    """Check that only container kinds hold children."""
    errors: list[ValidationError] = []

    def _check(elements: list[Element]) -> None:
        for element in elements:
            if element.elements and not is_container_type(element.type):
                errors.append(
                    ValidationError(
                        node_id=element.id,
                        message=(
                            f"Element type '{element.type}' cannot have children "
                            f"(found {len(element.elements)})"
                        ),
                        error_type="leaf_with_children",
                    )
                )
            _check(element.elements)

    _check(tree)
    return errors


def _detect_cycles(tree: list[Element]) -> list[ValidationError]:
    """Detect elements nested under an ancestor with the same id.

    Frozen models cannot form object cycles, so a cycle shows up as an id
    repeated along a single root-to-leaf path.

    Args:
        tree: Root elements of the page.

    Returns:
        list[ValidationError]: Cycle errors found.
    """
    errors: list[ValidationError] = []

    def _check(elements: list[Element], path: set[str]) -> None:
        for element in elements:
            if element.id in path:
                errors.append(
                    ValidationError(
                        node_id=element.id,
                        message=f"Cycle detected: element '{element.id}' is its own ancestor",
                        error_type="cycle",
                    )
                )
                continue
            path.add(element.id)
            _check(element.elements, path)
            path.remove(element.id)

    _check(tree, set())
    return errors


__all__ = [
    "ValidationError",
    "validate_tree",
    "is_valid",
]
