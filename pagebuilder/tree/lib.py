"""Element tree operations.

Pure functions over a root forest (`list[Element]`). Every mutation returns
a new forest: ancestors on the edited path are shallow-copied, untouched
subtrees are reused by identity, and a call that changes nothing returns
the input list itself.

Example:
    >>> tree = add_child([], None, frame)
    >>> tree = add_child(tree, frame.id, text)
    >>> find(tree, text.id) is not None
    True
"""

from collections.abc import Callable, Iterator

from pagebuilder.core.errors import ElementNotFoundError, StructuralViolation
from pagebuilder.model import Element
from pagebuilder.schema import is_container_type

Tree = list[Element]
Updater = Callable[[Element], Element]


def _with_children(element: Element, children: Tree) -> Element:
    return element.model_copy(update={"elements": children})


def _relinked(node: Element, parent_id: str | None) -> Element:
    if node.parent_id == parent_id:
        return node
    return node.model_copy(update={"parent_id": parent_id})


def _iter(tree: Tree) -> Iterator[Element]:
    for element in tree:
        yield element
        if element.elements:
            yield from _iter(element.elements)


def _check_new_ids(tree: Tree, node: Element) -> None:
    existing = set(get_all_ids(tree))
    for el in _iter([node]):
        if el.id in existing:
            raise StructuralViolation(
                f"Element id '{el.id}' already exists in tree",
                kind="duplicate_id",
                node_id=el.id,
            )


# =============================================================================
# Queries
# =============================================================================


def find(tree: Tree, element_id: str) -> Element | None:
    """Find an element anywhere in the tree (depth-first, first match)."""
    for element in _iter(tree):
        if element.id == element_id:
            return element
    return None


def exists(tree: Tree, element_id: str) -> bool:
    """Check whether an id is present in the tree."""
    return find(tree, element_id) is not None


def find_parent(tree: Tree, child_id: str) -> Element | None:
    """Find the container holding `child_id`.

    Returns:
        The parent element, or None when the child is a root or absent.
    """
    for element in _iter(tree):
        if any(child.id == child_id for child in element.elements):
            return element
    return None


def flatten(tree: Tree) -> list[Element]:
    """List every element in pre-order."""
    return list(_iter(tree))


def count_elements(tree: Tree) -> int:
    """Count every element in the tree, nested ones included."""
    return sum(1 for _ in _iter(tree))


def get_all_ids(tree: Tree) -> list[str]:
    """List every id in pre-order."""
    return [element.id for element in _iter(tree)]


def get_depth(tree: Tree, element_id: str) -> int:
    """Get the nesting depth of an element (roots are 0, absent is -1)."""
    path = get_path(tree, element_id)
    return len(path) - 1 if path else -1


def get_path(tree: Tree, element_id: str) -> list[str]:
    """Get the ids from the root down to `element_id` inclusive.

    Returns:
        List of ids, empty if the element is absent.
    """
    for element in tree:
        if element.id == element_id:
            return [element.id]
        if element.elements:
            sub_path = get_path(element.elements, element_id)
            if sub_path:
                return [element.id, *sub_path]
    return []


def is_ancestor(tree: Tree, ancestor_id: str, element_id: str) -> bool:
    """Check whether `ancestor_id` strictly contains `element_id`."""
    return ancestor_id in get_path(tree, element_id)[:-1]


# =============================================================================
# Mutations
# =============================================================================


def _update(tree: Tree, element_id: str, updater: Updater) -> Tree | None:
    for i, element in enumerate(tree):
        if element.id == element_id:
            replaced = list(tree)
            replaced[i] = updater(element)
            return replaced
        if element.elements:
            children = _update(element.elements, element_id, updater)
            if children is not None:
                replaced = list(tree)
                replaced[i] = _with_children(element, children)
                return replaced
    return None


def update_by_id(tree: Tree, element_id: str, updater: Updater) -> Tree:
    """Replace one element with `updater(element)`.

    Args:
        tree: Root forest.
        element_id: Id of the element to replace.
        updater: Function producing the replacement element.

    Returns:
        New forest sharing every untouched subtree, or `tree` itself when
        the id is absent.
    """
    result = _update(tree, element_id, updater)
    return tree if result is None else result


def _delete(tree: Tree, element_id: str) -> Tree | None:
    for i, element in enumerate(tree):
        if element.id == element_id:
            return [*tree[:i], *tree[i + 1 :]]
        if element.elements:
            children = _delete(element.elements, element_id)
            if children is not None:
                replaced = list(tree)
                replaced[i] = _with_children(element, children)
                return replaced
    return None


def delete_by_id(tree: Tree, element_id: str) -> Tree:
    """Remove an element (and its subtree) at any depth.

    Returns:
        New forest, or `tree` itself when the id is absent.
    """
    result = _delete(tree, element_id)
    return tree if result is None else result


def _insert_after(
    tree: Tree, target_id: str, node: Element, parent_id: str | None
) -> Tree | None:
    for i, element in enumerate(tree):
        if element.id == target_id:
            return [*tree[: i + 1], _relinked(node, parent_id), *tree[i + 1 :]]

    for i, element in enumerate(tree):
        if element.elements:
            children = _insert_after(element.elements, target_id, node, element.id)
            if children is not None:
                replaced = list(tree)
                replaced[i] = _with_children(element, children)
                return replaced
    return None


def insert_after(tree: Tree, target_id: str, node: Element) -> Tree:
    """Insert `node` as the next sibling of `target_id`.

    Each level is searched before descending into its containers. The
    node's `parent_id` is re-linked to the target's parent when it differs.

    Args:
        tree: Root forest.
        target_id: Id of the sibling to insert after.
        node: Element (with its subtree) to insert.

    Returns:
        New forest containing `node`.

    Raises:
        ElementNotFoundError: If `target_id` is not in the tree.
        StructuralViolation: If `node` or one of its descendants reuses an
            id already present in the tree.
    """
    _check_new_ids(tree, node)
    result = _insert_after(tree, target_id, node, None)
    if result is None:
        raise ElementNotFoundError(target_id)
    return result


def insert_at_position(
    siblings: Tree, element: Element, position: int | None = None
) -> Tree:
    """Insert into a sibling list at `position`, appending when out of range."""
    if position is not None and 0 <= position <= len(siblings):
        return [*siblings[:position], element, *siblings[position:]]
    return [*siblings, element]


def add_child(
    tree: Tree,
    parent_id: str | None,
    child: Element,
    position: int | None = None,
) -> Tree:
    """Add `child` under a container, or as a root when `parent_id` is None.

    Args:
        tree: Root forest.
        parent_id: Container id, None for the root level.
        child: Element to add; its `parent_id` is re-linked.
        position: Index among the new siblings; appended when omitted.

    Returns:
        New forest containing `child`.

    Raises:
        ElementNotFoundError: If `parent_id` is not in the tree.
        StructuralViolation: If the parent cannot hold children or an id
            is already in use.
    """
    _check_new_ids(tree, child)
    child = _relinked(child, parent_id)

    if parent_id is None:
        return insert_at_position(tree, child, position)

    parent = find(tree, parent_id)
    if parent is None:
        raise ElementNotFoundError(parent_id)
    if not is_container_type(parent.type):
        raise StructuralViolation(
            f"Element '{parent_id}' of type '{parent.type}' cannot have children",
            kind="leaf_parent",
            node_id=parent_id,
        )

    return update_by_id(
        tree,
        parent_id,
        lambda p: _with_children(p, insert_at_position(p.elements, child, position)),
    )


def swap_siblings(
    tree: Tree, parent_id: str | None, first_id: str, second_id: str
) -> Tree:
    """Swap the positions of two children of the same parent.

    Args:
        tree: Root forest.
        parent_id: Shared parent id, None for two roots.
        first_id: Id of one sibling.
        second_id: Id of the other sibling.

    Returns:
        New forest, or `tree` itself when either id is not a child of
        `parent_id`.
    """
    if parent_id is None:
        siblings = tree
    else:
        parent = find(tree, parent_id)
        if parent is None:
            return tree
        siblings = parent.elements

    ids = [el.id for el in siblings]
    if first_id not in ids or second_id not in ids:
        return tree

    i, j = ids.index(first_id), ids.index(second_id)
    swapped = list(siblings)
    swapped[i], swapped[j] = swapped[j], swapped[i]

    if parent_id is None:
        return swapped
    return update_by_id(tree, parent_id, lambda p: _with_children(p, swapped))


def map_recursively(tree: Tree, fn: Updater) -> Tree:
    """Apply `fn` to every element, parents before their children.

    Returns:
        New forest, or `tree` itself when `fn` changed nothing.
    """
    result: Tree = []
    changed = False
    for element in tree:
        updated = fn(element)
        if updated.elements:
            children = map_recursively(updated.elements, fn)
            if children is not updated.elements:
                updated = _with_children(updated, children)
        changed = changed or updated is not element
        result.append(updated)
    return result if changed else tree


__all__ = [
    "Tree",
    "Updater",
    # Queries
    "find",
    "exists",
    "find_parent",
    "flatten",
    "count_elements",
    "get_all_ids",
    "get_depth",
    "get_path",
    "is_ancestor",
    # Mutations
    "update_by_id",
    "delete_by_id",
    "insert_after",
    "insert_at_position",
    "add_child",
    "swap_siblings",
    "map_recursively",
]
