"""Tests for the validation module."""

import pytest

from pagebuilder.model import Element

from .lib import ValidationError, is_valid, validate_tree


def _el(id, type="Frame", parent_id=None, *children):
    return Element(
        id=id, type=type, page_id="page-1", parent_id=parent_id, elements=list(children)
    )


class TestValidateTree:
    """Test suite for validate_tree function."""

    @pytest.mark.unit
    def test_valid_tree(self, sample_tree):
        """Sample tree has no errors."""
        assert validate_tree(sample_tree) == []
        assert is_valid(sample_tree)

    @pytest.mark.unit
    def test_empty_forest(self):
        assert validate_tree([]) == []

    @pytest.mark.unit
    def test_duplicate_ids(self):
        """Duplicate IDs are reported once per id."""
        tree = [_el("root", "Frame", None, _el("a", "Text", "root"), _el("a", "Text", "root"))]
        errors = validate_tree(tree)
        assert [(e.node_id, e.error_type) for e in errors] == [("a", "duplicate_id")]
        assert "2 times" in errors[0].message

    @pytest.mark.unit
    def test_parent_mismatch(self):
        tree = [_el("root", "Frame", None, _el("a", "Text", "other"))]
        errors = validate_tree(tree)
        assert len(errors) == 1
        assert errors[0].error_type == "parent_mismatch"
        assert errors[0].node_id == "a"

    @pytest.mark.unit
    def test_root_with_parent_id(self):
        errors = validate_tree([_el("a", "Text", "ghost")])
        assert [e.error_type for e in errors] == ["parent_mismatch"]

    @pytest.mark.unit
    def test_leaf_with_children(self):
        tree = [_el("t", "Text", None, _el("c", "Text", "t"))]
        errors = validate_tree(tree)
        assert [e.error_type for e in errors] == ["leaf_with_children"]

    @pytest.mark.unit
    def test_cycle_by_id(self):
        """An element nested under its own id is a cycle."""
        tree = [_el("a", "Frame", None, _el("a", "Frame", "a"))]
        kinds = {e.error_type for e in validate_tree(tree)}
        assert kinds == {"duplicate_id", "cycle"}
        assert not is_valid(tree)

    @pytest.mark.unit
    def test_error_fields(self):
        error = ValidationError(node_id="x", message="m", error_type="cycle")
        assert (error.node_id, error.message, error.error_type) == ("x", "m", "cycle")
