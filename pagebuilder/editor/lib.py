"""Editor session.

Holds the current page snapshot and the selected element id, and routes
every edit through the pure tree, factory, writer and swap operations.
Each mutation computes a complete new snapshot first and only then swaps
it in, so a failing edit leaves the session untouched.
"""

from collections.abc import Mapping
from typing import Any

from pagebuilder.config import get_validate_snapshots
from pagebuilder.core.errors import (
    CompilationError,
    ElementNotFoundError,
    StructuralViolation,
)
from pagebuilder.core.log import get_logger
from pagebuilder.factory import ElementFactory
from pagebuilder.model import Element, ElementTemplate, apply_updates, normalize_styles
from pagebuilder.schema import Breakpoint, ElementType
from pagebuilder.styles import with_breakpoint
from pagebuilder.swap import DropPosition, SwapResult, relocate
from pagebuilder.tree import (
    Tree,
    add_child,
    delete_by_id,
    find,
    find_parent,
    get_all_ids,
    swap_siblings,
    update_by_id,
)
from pagebuilder.validation import validate_tree
from pagebuilder.writer import StyleWriteResult, update_element_style

logger = get_logger("pagebuilder.editor")


class EditorSession:
    """Mutable holder of one page's tree snapshot and selection.

    Args:
        page_id: Page the session edits.
        tree: Initial root forest; empty when omitted.
        factory: Element factory; a uuid-based one when omitted.
        validate_snapshots: Run full tree validation on every commit.
            Defaults to PAGEBUILDER_VALIDATE_SNAPSHOTS.

    Example:
        >>> session = EditorSession("page-1")
        >>> frame = session.create_element("Frame")
        >>> text = session.create_element("Text", parent_id=frame.id)
        >>> session.selected().id == text.id
        True
    """

    def __init__(
        self,
        page_id: str,
        tree: Tree | None = None,
        factory: ElementFactory | None = None,
        validate_snapshots: bool | None = None,
    ):
        self.page_id = page_id
        self._tree: Tree = list(tree) if tree else []
        self._factory = factory or ElementFactory()
        self._validate = get_validate_snapshots(validate_snapshots)
        self._selected_id: str | None = None

    @property
    def tree(self) -> Tree:
        """Current snapshot."""
        return self._tree

    @property
    def selected_id(self) -> str | None:
        return self._selected_id

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    def select(self, element_id: str | None) -> None:
        """Select an element, or clear the selection with None.

        Raises:
            ElementNotFoundError: If the id is not in the current tree.
        """
        if element_id is not None and find(self._tree, element_id) is None:
            raise ElementNotFoundError(element_id)
        self._selected_id = element_id

    def selected(self) -> Element | None:
        """Get the selected element from the current snapshot."""
        if self._selected_id is None:
            return None
        return find(self._tree, self._selected_id)

    # -------------------------------------------------------------------------
    # Creation
    # -------------------------------------------------------------------------

    def create_element(
        self,
        element_type: ElementType | str,
        parent_id: str | None = None,
        position: int | None = None,
    ) -> Element | None:
        """Create an element, add it to the tree and select it.

        Returns:
            The new element, or None if the factory rejected the request.

        Raises:
            ElementNotFoundError: If `parent_id` is not in the tree.
            StructuralViolation: If the parent cannot hold children.
        """
        element = self._factory.create(element_type, self.page_id, parent_id)
        if element is None:
            return None
        return self._insert(element, parent_id, position)

    def insert_template(
        self,
        template: ElementTemplate,
        parent_id: str | None = None,
        position: int | None = None,
    ) -> Element | None:
        """Clone a template into the tree and select its root."""
        element = self._factory.create_from_template(template, self.page_id, parent_id)
        if element is None:
            return None
        return self._insert(element, parent_id, position)

    def _insert(
        self, element: Element, parent_id: str | None, position: int | None
    ) -> Element:
        self._commit(add_child(self._tree, parent_id, element, position))
        self.select(element.id)
        logger.debug(f"Inserted {element.type} element {element.id}")
        return element

    # -------------------------------------------------------------------------
    # Updates
    # -------------------------------------------------------------------------

    def update_element(self, element_id: str, updates: Mapping[str, Any]) -> Element:
        """Apply shallow field updates to one element.

        Returns:
            The updated element.

        Raises:
            ElementNotFoundError: If the id is not in the tree.
            ValueError: If `updates` names an unknown or structural field.
        """
        self._require(element_id)
        tree = update_by_id(
            self._tree, element_id, lambda el: apply_updates(el, updates)
        )
        self._commit(tree)
        return find(tree, element_id)

    def update_style(
        self,
        element_id: str,
        declarations: Mapping[str, Any],
        breakpoint: Breakpoint | str = Breakpoint.DEFAULT,
    ) -> StyleWriteResult:
        """Replace one breakpoint's declarations of an element.

        Declarations the page model cannot store (non-scalar values) are
        not committed; the failure is logged and reported as compiled=False
        with the snapshot unchanged.

        Raises:
            ElementNotFoundError: If the id is not in the tree.
            ValueError: If `breakpoint` is not a known breakpoint.
        """
        element = self._require(element_id)
        styles = with_breakpoint(element.styles, breakpoint, declarations)
        try:
            normalize_styles(styles)
        except ValueError as e:
            logger.error(f"Rejected styles for element {element_id}: {e}")
            return StyleWriteResult(
                styles=element.styles,
                tailwind_styles=element.tailwind_styles,
                compiled=False,
                error=CompilationError(str(e), value=dict(declarations)),
            )

        pending: list[Tree] = []

        def apply(target_id: str, updates: dict[str, Any]) -> None:
            pending.append(
                update_by_id(self._tree, target_id, lambda el: apply_updates(el, updates))
            )

        result = update_element_style(element, declarations, breakpoint, apply)
        if pending:
            self._commit(pending[-1])
        return result

    # -------------------------------------------------------------------------
    # Structure
    # -------------------------------------------------------------------------

    def delete_element(self, element_id: str) -> bool:
        """Remove an element and its subtree.

        Clears the selection when it pointed into the removed subtree.

        Returns:
            True if something was removed.
        """
        element = find(self._tree, element_id)
        if element is None:
            return False

        self._commit(delete_by_id(self._tree, element_id))
        if self._selected_id in get_all_ids([element]):
            self._selected_id = None
        logger.debug(f"Deleted element {element_id}")
        return True

    def move_element(
        self,
        dragged_id: str,
        hovered_id: str,
        position: DropPosition | str | None = None,
    ) -> SwapResult:
        """Relocate an element next to another; see `relocate`."""
        result = relocate(self._tree, dragged_id, hovered_id, position)
        if result.applied:
            self._commit(result.tree)
        return result

    def swap_elements(self, first_id: str, second_id: str) -> bool:
        """Swap two siblings in place.

        Returns:
            False when either id is missing or the two are not siblings.
        """
        first = find(self._tree, first_id)
        second = find(self._tree, second_id)
        if first is None or second is None or first_id == second_id:
            return False

        first_parent = find_parent(self._tree, first_id)
        second_parent = find_parent(self._tree, second_id)
        parent_id = first_parent.id if first_parent else None
        if parent_id != (second_parent.id if second_parent else None):
            return False

        self._commit(swap_siblings(self._tree, parent_id, first_id, second_id))
        return True

    # -------------------------------------------------------------------------

    def _require(self, element_id: str) -> Element:
        element = find(self._tree, element_id)
        if element is None:
            raise ElementNotFoundError(element_id)
        return element

    def _commit(self, tree: Tree) -> None:
        if self._validate:
            errors = validate_tree(tree)
            if errors:
                first = errors[0]
                raise StructuralViolation(
                    f"Rejected invalid snapshot: {first.message}",
                    kind=first.error_type,
                    node_id=first.node_id,
                )
        self._tree = tree


__all__ = ["EditorSession"]
