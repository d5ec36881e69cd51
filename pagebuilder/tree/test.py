"""Unit tests for element tree operations."""

import pytest

from pagebuilder.core.errors import ElementNotFoundError, StructuralViolation
from pagebuilder.model import Element, apply_updates
from pagebuilder.validation import validate_tree

from .lib import (
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


def _text(id: str, parent_id: str | None = None) -> Element:
    return Element(id=id, type="Text", page_id="page-1", parent_id=parent_id)


class TestQueries:
    """Tests for read-only traversal."""

    @pytest.mark.unit
    def test_find_nested(self, sample_tree):
        found = find(sample_tree, "cta")
        assert found is not None
        assert found.content == "Go"

    @pytest.mark.unit
    def test_find_missing(self, sample_tree):
        assert find(sample_tree, "nope") is None
        assert not exists(sample_tree, "nope")
        assert exists(sample_tree, "banner")

    @pytest.mark.unit
    def test_find_parent(self, sample_tree):
        assert find_parent(sample_tree, "intro").id == "content"
        assert find_parent(sample_tree, "root") is None
        assert find_parent(sample_tree, "nope") is None

    @pytest.mark.unit
    def test_flatten_preorder(self, sample_tree):
        assert get_all_ids(sample_tree) == [
            "root",
            "header",
            "title",
            "content",
            "intro",
            "cta",
            "footer",
            "banner",
        ]
        assert len(flatten(sample_tree)) == count_elements(sample_tree) == 8

    @pytest.mark.unit
    def test_depth_and_path(self, sample_tree):
        assert get_depth(sample_tree, "root") == 0
        assert get_depth(sample_tree, "intro") == 2
        assert get_depth(sample_tree, "nope") == -1
        assert get_path(sample_tree, "cta") == ["root", "content", "cta"]
        assert get_path(sample_tree, "nope") == []

    @pytest.mark.unit
    def test_is_ancestor(self, sample_tree):
        assert is_ancestor(sample_tree, "root", "cta")
        assert is_ancestor(sample_tree, "content", "cta")
        assert not is_ancestor(sample_tree, "cta", "cta")
        assert not is_ancestor(sample_tree, "header", "cta")


class TestUpdateById:
    """Tests for id-addressed replacement."""

    @pytest.mark.unit
    def test_updates_nested_element(self, sample_tree):
        result = update_by_id(
            sample_tree, "intro", lambda el: apply_updates(el, {"content": "Hello"})
        )
        assert find(result, "intro").content == "Hello"
        assert find(sample_tree, "intro").content == "Welcome"

    @pytest.mark.unit
    def test_structural_sharing(self, sample_tree):
        result = update_by_id(
            sample_tree, "intro", lambda el: apply_updates(el, {"content": "Hello"})
        )
        root, banner = result
        assert banner is sample_tree[1]
        assert root is not sample_tree[0]
        assert root.elements[0] is sample_tree[0].elements[0]
        assert root.elements[1].elements[1] is sample_tree[0].elements[1].elements[1]

    @pytest.mark.unit
    def test_missing_id_returns_same_tree(self, sample_tree):
        assert update_by_id(sample_tree, "nope", lambda el: el) is sample_tree


class TestDeleteById:
    """Tests for subtree removal."""

    @pytest.mark.unit
    def test_delete_subtree(self, sample_tree):
        result = delete_by_id(sample_tree, "content")
        assert not exists(result, "content")
        assert not exists(result, "intro")
        assert count_elements(result) == 5

    @pytest.mark.unit
    def test_delete_root(self, sample_tree):
        result = delete_by_id(sample_tree, "banner")
        assert [el.id for el in result] == ["root"]
        assert result[0] is sample_tree[0]

    @pytest.mark.unit
    def test_delete_missing_is_noop(self, sample_tree):
        assert delete_by_id(sample_tree, "nope") is sample_tree


class TestInsertAfter:
    """Tests for sibling insertion."""

    @pytest.mark.unit
    def test_insert_then_find(self, sample_tree):
        node = _text("new")
        result = insert_after(sample_tree, "intro", node)
        assert find(result, "new") is not None
        assert [el.id for el in find(result, "content").elements] == [
            "intro",
            "new",
            "cta",
        ]

    @pytest.mark.unit
    def test_parent_relinked(self, sample_tree):
        result = insert_after(sample_tree, "intro", _text("new", parent_id="elsewhere"))
        assert find(result, "new").parent_id == "content"
        assert validate_tree(result) == []

    @pytest.mark.unit
    def test_insert_at_root_level(self, sample_tree):
        result = insert_after(sample_tree, "root", _text("new", parent_id="content"))
        assert [el.id for el in result] == ["root", "new", "banner"]
        assert result[1].parent_id is None

    @pytest.mark.unit
    def test_insert_delete_round_trip(self, sample_tree):
        inserted = insert_after(sample_tree, "title", _text("new", parent_id="header"))
        assert delete_by_id(inserted, "new") == sample_tree

    @pytest.mark.unit
    def test_unchanged_node_kept(self, sample_tree):
        node = _text("new", parent_id="content")
        result = insert_after(sample_tree, "intro", node)
        assert find(result, "new") is node

    @pytest.mark.unit
    def test_missing_target_raises(self, sample_tree):
        with pytest.raises(ElementNotFoundError) as exc_info:
            insert_after(sample_tree, "nope", _text("new"))
        assert exc_info.value.element_id == "nope"

    @pytest.mark.unit
    def test_duplicate_id_raises(self, sample_tree):
        with pytest.raises(StructuralViolation) as exc_info:
            insert_after(sample_tree, "intro", _text("cta"))
        assert exc_info.value.kind == "duplicate_id"


class TestAddChild:
    """Tests for appending under containers."""

    @pytest.mark.unit
    def test_append_to_container(self, sample_tree):
        result = add_child(sample_tree, "footer", _text("legal"))
        footer = find(result, "footer")
        assert [el.id for el in footer.elements] == ["legal"]
        assert footer.elements[0].parent_id == "footer"

    @pytest.mark.unit
    def test_root_level(self, sample_tree):
        result = add_child(sample_tree, None, _text("top", parent_id="root"))
        assert result[-1].id == "top"
        assert result[-1].parent_id is None

    @pytest.mark.unit
    def test_position(self, sample_tree):
        result = add_child(sample_tree, "content", _text("first"), position=0)
        assert [el.id for el in find(result, "content").elements] == [
            "first",
            "intro",
            "cta",
        ]

    @pytest.mark.unit
    def test_leaf_parent_rejected(self, sample_tree):
        with pytest.raises(StructuralViolation) as exc_info:
            add_child(sample_tree, "intro", _text("x"))
        assert exc_info.value.kind == "leaf_parent"

    @pytest.mark.unit
    def test_missing_parent(self, sample_tree):
        with pytest.raises(ElementNotFoundError):
            add_child(sample_tree, "nope", _text("x"))


class TestSiblingHelpers:
    """Tests for positional helpers."""

    @pytest.mark.unit
    def test_insert_at_position(self):
        a, b, c = _text("a"), _text("b"), _text("c")
        assert [el.id for el in insert_at_position([a, b], c, 1)] == ["a", "c", "b"]
        assert [el.id for el in insert_at_position([a, b], c, 9)] == ["a", "b", "c"]
        assert [el.id for el in insert_at_position([a, b], c)] == ["a", "b", "c"]

    @pytest.mark.unit
    def test_swap_nested_siblings(self, sample_tree):
        result = swap_siblings(sample_tree, "content", "intro", "cta")
        assert [el.id for el in find(result, "content").elements] == ["cta", "intro"]

    @pytest.mark.unit
    def test_swap_roots(self, sample_tree):
        result = swap_siblings(sample_tree, None, "root", "banner")
        assert [el.id for el in result] == ["banner", "root"]

    @pytest.mark.unit
    def test_swap_non_siblings_is_noop(self, sample_tree):
        assert swap_siblings(sample_tree, "content", "intro", "title") is sample_tree
        assert swap_siblings(sample_tree, "nope", "intro", "cta") is sample_tree


class TestMapRecursively:
    """Tests for whole-tree mapping."""

    @pytest.mark.unit
    def test_applies_everywhere(self, sample_tree):
        result = map_recursively(
            sample_tree, lambda el: apply_updates(el, {"page_id": "page-2"})
        )
        assert {el.page_id for el in flatten(result)} == {"page-2"}

    @pytest.mark.unit
    def test_identity_returns_same_tree(self, sample_tree):
        assert map_recursively(sample_tree, lambda el: el) is sample_tree
