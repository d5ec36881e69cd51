"""Element tree operations over immutable root forests.

Example usage:
    >>> from pagebuilder.tree import find, insert_after, delete_by_id
    >>> tree = insert_after(tree, "header", new_section)
    >>> find(tree, new_section.id).parent_id
    'root'
"""

from .lib import (
    Tree,
    Updater,
    add_child,
    count_elements,
    delete_by_id,
    exists,
    find,
    find_parent,
    flatten,
    get_all_ids,
    get_depth,
    get_path,
    insert_after,
    insert_at_position,
    is_ancestor,
    map_recursively,
    swap_siblings,
    update_by_id,
)

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
