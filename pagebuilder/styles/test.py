"""Unit tests for style resolution."""

from datetime import datetime

import pytest

from pagebuilder.schema import Breakpoint

from .lib import (
    iter_breakpoints,
    replace_placeholders,
    resolve_breakpoint,
    resolve_flattened,
    with_breakpoint,
)

STYLES = {
    "md": {"gap": 8, "display": "grid"},
    "default": {"gap": 4, "width": "100%"},
    "xl": {"width": "auto"},
}


class TestResolveBreakpoint:
    """Tests for exact-breakpoint resolution."""

    @pytest.mark.unit
    def test_exact_declarations(self):
        assert resolve_breakpoint(STYLES, "md") == {"gap": 8, "display": "grid"}

    @pytest.mark.unit
    def test_no_cascade(self):
        """Properties declared only at default are not visible at md."""
        assert "width" not in resolve_breakpoint(STYLES, Breakpoint.MD)

    @pytest.mark.unit
    def test_absent_breakpoint(self):
        assert resolve_breakpoint(STYLES, "sm") == {}
        assert resolve_breakpoint(None, "default") == {}

    @pytest.mark.unit
    def test_returns_copy(self):
        result = resolve_breakpoint(STYLES, "default")
        result["gap"] = 99
        assert STYLES["default"]["gap"] == 4

    @pytest.mark.unit
    def test_unknown_breakpoint(self):
        with pytest.raises(ValueError):
            resolve_breakpoint(STYLES, "2xl")


class TestFlattened:
    """Tests for overlay resolution."""

    @pytest.mark.unit
    def test_later_breakpoints_win(self):
        assert resolve_flattened(STYLES) == {
            "gap": 8,
            "width": "auto",
            "display": "grid",
        }

    @pytest.mark.unit
    def test_empty(self):
        assert resolve_flattened(None) == {}
        assert resolve_flattened({}) == {}

    @pytest.mark.unit
    def test_canonical_iteration(self):
        assert [bp for bp, _ in iter_breakpoints(STYLES)] == ["default", "md", "xl"]


class TestWithBreakpoint:
    """Tests for full-replace writes."""

    @pytest.mark.unit
    def test_full_replace(self):
        result = with_breakpoint(STYLES, "md", {"padding": 2})
        assert result["md"] == {"padding": 2}
        assert result["default"] == STYLES["default"]
        assert STYLES["md"] == {"gap": 8, "display": "grid"}

    @pytest.mark.unit
    def test_new_breakpoint_in_order(self):
        result = with_breakpoint(STYLES, Breakpoint.SM, {"gap": 1})
        assert list(result) == ["default", "sm", "md", "xl"]

    @pytest.mark.unit
    def test_from_nothing(self):
        assert with_breakpoint(None, "default", {}) == {"default": {}}


class TestReplacePlaceholders:
    """Tests for CMS content placeholders."""

    @pytest.mark.unit
    def test_nested_path(self):
        data = {"title": "Hello", "author": {"name": "Ada"}}
        assert replace_placeholders("{{title}} by {{author.name}}", data) == "Hello by Ada"

    @pytest.mark.unit
    def test_unknown_path_left_as_is(self):
        assert replace_placeholders("{{missing.path}}!", {"a": 1}) == "{{missing.path}}!"

    @pytest.mark.unit
    def test_no_data(self):
        assert replace_placeholders("{{title}}", None) == "{{title}}"

    @pytest.mark.unit
    def test_list_index(self):
        assert replace_placeholders("{{tags.1}}", {"tags": ["a", "b"]}) == "b"

    @pytest.mark.unit
    def test_date_filter(self):
        data = {"createdAt": "2024-03-05T10:00:00Z", "at": datetime(2023, 1, 2, 9)}
        assert replace_placeholders("{{createdAt|date}}", data) == "2024-03-05"
        assert replace_placeholders("{{at|date}}", data) == "2023-01-02"

    @pytest.mark.unit
    def test_unparseable_date_kept(self):
        assert replace_placeholders("{{d|date}}", {"d": "soon"}) == "soon"

    @pytest.mark.unit
    def test_scalars_stringified(self):
        assert replace_placeholders("{{n}} {{ok}}", {"n": 3, "ok": True}) == "3 true"
