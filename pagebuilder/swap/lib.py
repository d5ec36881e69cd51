"""Swap/reorder engine.

Relocates a dragged element next to a hovered element, possibly under a
different parent. Every invariant is checked against the input snapshot
before the move, and the produced snapshot is validated again before it
is returned; a rejected move hands back the input tree unchanged.
"""

from dataclasses import dataclass
from enum import Enum

from pagebuilder.config import get_drop_position
from pagebuilder.core.errors import StructuralViolation
from pagebuilder.core.log import get_logger
from pagebuilder.model import Element
from pagebuilder.tree import (
    Tree,
    delete_by_id,
    find,
    find_parent,
    insert_at_position,
    is_ancestor,
    update_by_id,
)
from pagebuilder.validation import validate_tree

logger = get_logger("pagebuilder.swap")


class DropPosition(str, Enum):
    """Placement of the dragged element relative to the hovered one."""

    BEFORE = "before"
    AFTER = "after"


@dataclass(frozen=True)
class SwapResult:
    """Outcome of a relocation.

    Attributes:
        tree: New snapshot when applied, otherwise the input tree.
        applied: Whether the move happened.
        violation: Reason the move was rejected.
    """

    tree: Tree
    applied: bool
    violation: StructuralViolation | None = None


def resolve_drop_position(offset: float, extent: float) -> DropPosition:
    """Map a pointer offset inside the hovered box to a drop position.

    Args:
        offset: Pointer distance from the box's leading edge.
        extent: Box size along the same axis.

    Returns:
        BEFORE for the first half of the box, AFTER otherwise.
    """
    if extent > 0 and offset < extent / 2:
        return DropPosition.BEFORE
    return DropPosition.AFTER


def _resolve_position(position: DropPosition | str | None) -> DropPosition:
    value = position or get_drop_position()
    try:
        return DropPosition(value)
    except ValueError as e:
        raise StructuralViolation(
            f"Unknown drop position: {value!r}", kind="invalid_position"
        ) from e


def _check_move(tree: Tree, dragged_id: str, hovered_id: str) -> Element:
    if dragged_id == hovered_id:
        raise StructuralViolation(
            "Cannot drop an element onto itself",
            kind="self_target",
            node_id=dragged_id,
        )
    dragged = find(tree, dragged_id)
    hovered = find(tree, hovered_id)
    for element_id, found in ((dragged_id, dragged), (hovered_id, hovered)):
        if found is None:
            raise StructuralViolation(
                f"Element '{element_id}' not found in tree",
                kind="missing_node",
                node_id=element_id,
            )
    if is_ancestor(tree, dragged_id, hovered_id):
        raise StructuralViolation(
            f"Element '{dragged_id}' cannot be moved inside its own descendant "
            f"'{hovered_id}'",
            kind="cycle",
            node_id=dragged_id,
        )
    return dragged


def _move(
    tree: Tree, dragged: Element, hovered_id: str, position: DropPosition
) -> Tree:
    pruned = delete_by_id(tree, dragged.id)
    parent = find_parent(pruned, hovered_id)
    parent_id = parent.id if parent else None
    node = (
        dragged
        if dragged.parent_id == parent_id
        else dragged.model_copy(update={"parent_id": parent_id})
    )

    def place(siblings: Tree) -> Tree:
        index = next(i for i, el in enumerate(siblings) if el.id == hovered_id)
        if position == DropPosition.AFTER:
            index += 1
        return insert_at_position(siblings, node, index)

    if parent is None:
        return place(pruned)
    return update_by_id(
        pruned,
        parent.id,
        lambda p: p.model_copy(update={"elements": place(p.elements)}),
    )


def _check_result(tree: Tree, dragged_id: str) -> None:
    for error in validate_tree(tree):
        if error.error_type in ("duplicate_id", "parent_mismatch"):
            raise StructuralViolation(
                f"Move of '{dragged_id}' produced an invalid tree: {error.message}",
                kind=error.error_type,
                node_id=error.node_id,
            )


def relocate(
    tree: Tree,
    dragged_id: str,
    hovered_id: str,
    position: DropPosition | str | None = None,
) -> SwapResult:
    """Move `dragged_id` next to `hovered_id`.

    The dragged subtree leaves its current parent and joins the hovered
    element's parent (the root forest when the hovered element is a root).

    Args:
        tree: Current snapshot.
        dragged_id: Element being moved.
        hovered_id: Element the drop lands next to.
        position: BEFORE or AFTER the hovered element. Defaults to
            PAGEBUILDER_DROP_POSITION.

    Returns:
        SwapResult with the new snapshot, or the input tree and the
        violation when the move is rejected.

    Example:
        >>> result = relocate(tree, "cta", "banner", DropPosition.BEFORE)
        >>> result.applied
        True
    """
    try:
        drop = _resolve_position(position)
        dragged = _check_move(tree, dragged_id, hovered_id)
        moved = _move(tree, dragged, hovered_id, drop)
        _check_result(moved, dragged_id)
    except StructuralViolation as e:
        logger.warning(
            f"Rejected move of '{dragged_id}' to '{hovered_id}' [{e.kind}]: {e}"
        )
        return SwapResult(tree=tree, applied=False, violation=e)

    logger.debug(f"Moved '{dragged_id}' {drop.value} '{hovered_id}'")
    return SwapResult(tree=moved, applied=True)


__all__ = [
    "DropPosition",
    "SwapResult",
    "relocate",
    "resolve_drop_position",
]
