"""Unit tests for the swap/reorder engine."""

import logging

import pytest

from pagebuilder.tree import find, get_all_ids
from pagebuilder.validation import validate_tree

from .lib import DropPosition, relocate, resolve_drop_position


def _child_ids(tree, parent_id):
    return [el.id for el in find(tree, parent_id).elements]


class TestRelocate:
    """Tests for relocate."""

    @pytest.mark.unit
    def test_move_to_root_before(self, sample_tree):
        result = relocate(sample_tree, "cta", "banner", DropPosition.BEFORE)

        assert result.applied
        assert result.violation is None
        assert [el.id for el in result.tree] == ["root", "cta", "banner"]
        assert find(result.tree, "cta").parent_id is None
        assert _child_ids(result.tree, "content") == ["intro"]

    @pytest.mark.unit
    def test_move_across_parents_after(self, sample_tree):
        result = relocate(sample_tree, "intro", "title", "after")

        assert result.applied
        assert _child_ids(result.tree, "header") == ["title", "intro"]
        assert find(result.tree, "intro").parent_id == "header"
        assert _child_ids(result.tree, "content") == ["cta"]

    @pytest.mark.unit
    def test_reorder_within_parent(self, sample_tree):
        result = relocate(sample_tree, "intro", "cta", DropPosition.AFTER)
        assert _child_ids(result.tree, "content") == ["cta", "intro"]

    @pytest.mark.unit
    def test_move_keeps_subtree(self, sample_tree):
        result = relocate(sample_tree, "content", "banner", DropPosition.AFTER)

        moved = result.tree[-1]
        assert moved.id == "content"
        assert [el.id for el in moved.elements] == ["intro", "cta"]
        assert _child_ids(result.tree, "root") == ["header", "footer"]

    @pytest.mark.unit
    def test_ids_unique_and_parents_consistent(self, sample_tree):
        moves = [
            ("cta", "banner", "before"),
            ("header", "cta", "after"),
            ("intro", "title", "before"),
            ("footer", "root", "before"),
        ]
        tree = sample_tree
        for dragged, hovered, position in moves:
            result = relocate(tree, dragged, hovered, position)
            assert result.applied
            tree = result.tree

            ids = get_all_ids(tree)
            assert len(ids) == len(set(ids)) == len(get_all_ids(sample_tree))
            assert validate_tree(tree) == []

    @pytest.mark.unit
    def test_default_position_from_environment(self, sample_tree, monkeypatch):
        monkeypatch.setenv("PAGEBUILDER_DROP_POSITION", "before")
        result = relocate(sample_tree, "cta", "intro")
        assert _child_ids(result.tree, "content") == ["cta", "intro"]

    @pytest.mark.unit
    def test_input_not_modified(self, sample_tree):
        before = get_all_ids(sample_tree)
        relocate(sample_tree, "cta", "banner", DropPosition.BEFORE)
        assert get_all_ids(sample_tree) == before
        assert _child_ids(sample_tree, "content") == ["intro", "cta"]


class TestRelocateRejections:
    """Tests for moves that would break tree invariants."""

    @pytest.mark.unit
    def test_into_own_descendant(self, sample_tree, caplog):
        with caplog.at_level(logging.WARNING, logger="pagebuilder.swap"):
            result = relocate(sample_tree, "root", "title", DropPosition.AFTER)

        assert not result.applied
        assert result.tree is sample_tree
        assert result.violation.kind == "cycle"
        assert "Rejected move" in caplog.text

    @pytest.mark.unit
    def test_onto_itself(self, sample_tree):
        result = relocate(sample_tree, "cta", "cta")
        assert result.violation.kind == "self_target"
        assert result.tree is sample_tree

    @pytest.mark.unit
    @pytest.mark.parametrize("dragged,hovered", [("nope", "cta"), ("cta", "nope")])
    def test_missing_node(self, sample_tree, dragged, hovered):
        result = relocate(sample_tree, dragged, hovered)
        assert not result.applied
        assert result.violation.kind == "missing_node"
        assert result.violation.node_id == "nope"

    @pytest.mark.unit
    def test_unknown_position(self, sample_tree):
        result = relocate(sample_tree, "cta", "banner", "sideways")
        assert not result.applied
        assert result.tree is sample_tree
        assert result.violation.kind == "invalid_position"


class TestResolveDropPosition:
    """Tests for the pointer heuristic."""

    @pytest.mark.unit
    def test_first_half_is_before(self):
        assert resolve_drop_position(10, 100) == DropPosition.BEFORE

    @pytest.mark.unit
    def test_second_half_is_after(self):
        assert resolve_drop_position(50, 100) == DropPosition.AFTER
        assert resolve_drop_position(90, 100) == DropPosition.AFTER

    @pytest.mark.unit
    def test_empty_box_is_after(self):
        assert resolve_drop_position(0, 0) == DropPosition.AFTER
