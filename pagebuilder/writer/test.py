"""Unit tests for the breakpoint style writer."""

import logging

import pytest

from pagebuilder.core.errors import CompilationError
from pagebuilder.model import Element

from .lib import hand_authored_classes, update_element_style


class Recorder:
    """Collects `apply` calls."""

    def __init__(self):
        self.calls: list[tuple[str, dict]] = []

    def __call__(self, element_id, updates):
        self.calls.append((element_id, updates))


@pytest.fixture(autouse=True)
def _default_unit(monkeypatch):
    monkeypatch.delenv("PAGEBUILDER_DEFAULT_UNIT", raising=False)


class TestHandAuthoredClasses:
    """Tests for separating derived and hand-authored tokens."""

    @pytest.mark.unit
    def test_derived_tokens_removed(self, styled_text):
        assert hand_authored_classes(styled_text) == ["shadow-lg", "hover:underline"]

    @pytest.mark.unit
    def test_no_styles(self):
        element = Element(
            id="a", type="Text", page_id="page-1", tailwind_styles="font-bold  italic"
        )
        assert hand_authored_classes(element) == ["font-bold", "italic"]

    @pytest.mark.unit
    def test_token_matching_compiled_output_counts_as_derived(self):
        element = Element(
            id="a",
            type="Text",
            page_id="page-1",
            styles={"default": {"fontStyle": "italic"}},
            tailwind_styles="italic shadow-sm",
        )
        assert hand_authored_classes(element) == ["shadow-sm"]


class TestUpdateElementStyle:
    """Tests for update_element_style."""

    @pytest.mark.unit
    def test_full_replace_and_merge(self, styled_text):
        apply = Recorder()
        result = update_element_style(
            styled_text, {"color": "#111111", "fontSize": 24}, "default", apply
        )

        assert result.compiled
        assert result.error is None
        assert result.styles == {"default": {"color": "#111111", "fontSize": 24}}
        assert result.tailwind_styles == (
            "shadow-lg hover:underline text-[#111111] text-[24px]"
        )
        assert apply.calls == [
            (
                "styled",
                {"styles": result.styles, "tailwind_styles": result.tailwind_styles},
            )
        ]

    @pytest.mark.unit
    def test_other_breakpoints_kept(self, styled_text):
        apply = Recorder()
        result = update_element_style(styled_text, {"display": "flex"}, "md", apply)

        assert result.styles == {
            "default": {"color": "#000000", "padding": 4},
            "md": {"display": "flex"},
        }
        assert result.tailwind_styles == (
            "shadow-lg hover:underline text-[#000000] p-[4px] md:flex"
        )

    @pytest.mark.unit
    def test_compiled_value_wins_conflict(self):
        element = Element(
            id="a",
            type="Frame",
            page_id="page-1",
            tailwind_styles="bg-red-500 rounded-md",
        )
        apply = Recorder()
        result = update_element_style(
            element, {"backgroundColor": "#ffffff"}, "default", apply
        )
        assert result.tailwind_styles == "rounded-md bg-[#ffffff]"

    @pytest.mark.unit
    @pytest.mark.parametrize("font_size", ["large", "inherit", "var(--fs)"])
    def test_font_size_keeps_text_color(self, font_size):
        element = Element(id="a", type="Text", page_id="page-1")
        result = update_element_style(
            element, {"color": "#111111", "fontSize": font_size}, "default", Recorder()
        )
        assert result.tailwind_styles == f"text-[#111111] text-[{font_size}]"

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("declarations", "expected"),
        [
            (
                {"color": "#111111", "textAlign": "match-parent"},
                "text-[#111111] text-[match-parent]",
            ),
            (
                {"fontWeight": "bolder", "fontFamily": "Inter"},
                "font-[bolder] font-[Inter]",
            ),
            (
                {"backgroundColor": "#ffffff", "backgroundPosition": "var(--pos)"},
                "bg-[#ffffff] bg-[var(--pos)]",
            ),
        ],
    )
    def test_every_compiled_class_kept(self, declarations, expected):
        element = Element(id="a", type="Frame", page_id="page-1")
        result = update_element_style(element, declarations, "default", Recorder())
        assert result.tailwind_styles == expected

    @pytest.mark.unit
    def test_hand_authored_dropped_by_compiled_property(self):
        element = Element(
            id="a", type="Text", page_id="page-1", tailwind_styles="text-lg shadow-sm"
        )
        result = update_element_style(
            element, {"fontSize": "var(--fs)"}, "default", Recorder()
        )
        assert result.tailwind_styles == "shadow-sm text-[var(--fs)]"

    @pytest.mark.unit
    def test_hand_authored_variant_kept(self):
        element = Element(
            id="a", type="Text", page_id="page-1", tailwind_styles="md:text-lg"
        )
        result = update_element_style(element, {"fontSize": 14}, "default", Recorder())
        assert result.tailwind_styles == "md:text-lg text-[14px]"

    @pytest.mark.unit
    def test_compilation_failure_commits_styles_only(self, styled_text, caplog):
        apply = Recorder()
        with caplog.at_level(logging.ERROR, logger="pagebuilder.writer"):
            result = update_element_style(
                styled_text, {"color": {"light": "#fff"}}, "default", apply
            )

        assert not result.compiled
        assert isinstance(result.error, CompilationError)
        assert result.tailwind_styles == styled_text.tailwind_styles
        assert apply.calls == [("styled", {"styles": result.styles})]
        assert "Failed to compile" in caplog.text

    @pytest.mark.unit
    def test_unknown_breakpoint(self, styled_text):
        with pytest.raises(ValueError):
            update_element_style(styled_text, {"color": "red"}, "xxl", Recorder())
