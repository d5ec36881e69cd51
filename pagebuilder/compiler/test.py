"""Unit tests for the utility-class compiler and class merging."""

import pytest

from pagebuilder.core.errors import CompilationError

from .lib import (
    PROPERTY_FAMILIES,
    CompiledClass,
    compile_class_list,
    compile_declarations,
    compile_utility_classes,
    escape_arbitrary,
    is_css_variable,
    split_classes,
)
from .merge import (
    PROPERTY_CONFLICT_GROUPS,
    compiled_conflict_key,
    conflict_group,
    conflict_key,
    merge_classes,
    merge_with_compiled,
)


@pytest.fixture(autouse=True)
def _default_unit(monkeypatch):
    monkeypatch.delenv("PAGEBUILDER_DEFAULT_UNIT", raising=False)


class TestEscaping:
    """Tests for arbitrary-value escaping."""

    @pytest.mark.unit
    def test_plain_value_unchanged(self):
        assert escape_arbitrary("#ff0000") == "#ff0000"

    @pytest.mark.unit
    def test_comma_spaces_compressed(self):
        assert escape_arbitrary("var(--bg, #fff)") == "var(--bg,#fff)"
        assert escape_arbitrary("rgba(0, 0, 0, 0.5)") == "rgba(0,0,0,0.5)"

    @pytest.mark.unit
    def test_css_variable_passthrough(self):
        assert escape_arbitrary("var(--color-primary)") == "var(--color-primary)"
        assert is_css_variable(" var( --x ) ")
        assert not is_css_variable("var(--x, red)")

    @pytest.mark.unit
    def test_whitespace_is_quoted(self):
        assert escape_arbitrary("center center") == "'center center'"
        assert escape_arbitrary("a\n   b") == "'a b'"

    @pytest.mark.unit
    def test_quotes_escaped(self):
        assert escape_arbitrary("it's") == "'it\\'s'"

    @pytest.mark.unit
    def test_brackets_stripped(self):
        assert escape_arbitrary("[10px]") == "10px"

    @pytest.mark.unit
    def test_blank_is_empty(self):
        assert escape_arbitrary("   ") == ""
        assert escape_arbitrary("[]") == ""


class TestCompileDeclarations:
    """Tests for single-breakpoint compilation."""

    @pytest.mark.unit
    def test_width_auto(self):
        assert compile_declarations({"width": "auto"}) == "w-auto"
        assert compile_declarations({"height": "auto"}) == "h-auto"

    @pytest.mark.unit
    def test_background_color(self):
        assert compile_declarations({"backgroundColor": "#ff0000"}) == "bg-[#ff0000]"

    @pytest.mark.unit
    def test_numeric_padding_gets_pixels(self):
        assert compile_declarations({"paddingTop": 16}) == "pt-[16px]"

    @pytest.mark.unit
    def test_string_length_verbatim(self):
        assert compile_declarations({"margin": "0 auto"}) == "m-['0 auto']"
        assert compile_declarations({"width": "100%"}) == "w-[100%]"

    @pytest.mark.unit
    def test_float_formatting(self):
        assert compile_declarations({"width": 12.5}) == "w-[12.5px]"
        assert compile_declarations({"width": 12.0}) == "w-[12px]"

    @pytest.mark.unit
    @pytest.mark.parametrize("weight", [700, "bold", "700", 700.0])
    def test_font_weight_bold(self, weight):
        assert compile_declarations({"fontWeight": weight}) == "font-bold"

    @pytest.mark.unit
    def test_font_weight_table_and_fallback(self):
        assert compile_declarations({"fontWeight": 600}) == "font-semibold"
        assert compile_declarations({"fontWeight": "normal"}) == "font-normal"
        assert compile_declarations({"fontWeight": "600"}) == "font-[600]"
        assert compile_declarations({"fontWeight": 450}) == "font-[450]"

    @pytest.mark.unit
    def test_opacity_percentages(self):
        assert compile_declarations({"opacity": 50}) == "opacity-[0.5]"
        assert compile_declarations({"opacity": 100}) == "opacity-[1]"
        assert compile_declarations({"opacity": 0.3}) == "opacity-[0.3]"
        assert compile_declarations({"opacity": 1}) == "opacity-[1]"
        assert compile_declarations({"opacity": "0.8"}) == "opacity-[0.8]"

    @pytest.mark.unit
    def test_background_position_quoted(self):
        result = compile_declarations({"backgroundPosition": "center center"})
        assert result == "bg-['center center']"

    @pytest.mark.unit
    def test_categorical_tables(self):
        declarations = {
            "display": "flex",
            "flexDirection": "column",
            "justifyContent": "space-between",
            "alignItems": "flex-start",
            "textAlign": "end",
            "textTransform": "none",
            "textDecoration": "lineThrough",
        }
        assert compile_declarations(declarations) == (
            "flex flex-col justify-between items-start text-right "
            "normal-case line-through"
        )

    @pytest.mark.unit
    def test_categorical_fallbacks(self):
        assert compile_declarations({"justifyContent": "stretch"}) == "justify-[stretch]"
        assert compile_declarations({"display": "table-cell"}) == "[display:table-cell]"
        assert (
            compile_declarations({"textTransform": "full-width"})
            == "[text-transform:full-width]"
        )

    @pytest.mark.unit
    def test_display_none_hidden(self):
        assert compile_declarations({"display": "none"}) == "hidden"

    @pytest.mark.unit
    def test_font_family(self):
        assert compile_declarations({"fontFamily": "Georgia, serif"}) == "font-serif"
        assert compile_declarations({"fontFamily": "Inter, sans-serif"}) == "font-sans"
        assert compile_declarations({"fontFamily": "Menlo, monospace"}) == "font-mono"
        assert (
            compile_declarations({"fontFamily": "var(--font-body)"})
            == "font-[var(--font-body)]"
        )
        assert compile_declarations({"fontFamily": "Inter"}) == "font-[Inter]"

    @pytest.mark.unit
    def test_font_style(self):
        assert compile_declarations({"fontStyle": "oblique"}) == "italic"
        assert compile_declarations({"fontStyle": "normal"}) == ""

    @pytest.mark.unit
    def test_gaps_and_offsets(self):
        declarations = {"gap": 8, "rowGap": "4px", "columnGap": 2, "zIndex": 10, "top": 0}
        assert compile_declarations(declarations) == (
            "gap-[8px] gap-y-[4px] gap-x-[2px] z-[10] top-[0px]"
        )

    @pytest.mark.unit
    def test_fixed_family_order(self):
        """Output order does not depend on mapping order."""
        forward = {"width": 10, "color": "#111", "fontSize": 24, "padding": 4}
        backward = dict(reversed(list(forward.items())))
        expected = "w-[10px] text-[#111] p-[4px] text-[24px]"
        assert compile_declarations(forward) == expected
        assert compile_declarations(backward) == expected

    @pytest.mark.unit
    def test_kebab_case_properties(self):
        result = compile_declarations({"background-color": "#fff", "padding-top": 4})
        assert result == "bg-[#fff] pt-[4px]"

    @pytest.mark.unit
    def test_camel_case_wins_over_kebab(self):
        result = compile_declarations({"backgroundColor": "#000", "background-color": "#fff"})
        assert result == "bg-[#000]"

    @pytest.mark.unit
    def test_empty_values_skipped(self):
        assert compile_declarations({"width": None, "color": "", "margin": "  "}) == ""

    @pytest.mark.unit
    def test_unknown_properties_ignored(self):
        assert compile_declarations({"cursor": "pointer", "--brand": "#fff"}) == ""

    @pytest.mark.unit
    def test_none_and_empty(self):
        assert compile_declarations(None) == ""
        assert compile_declarations({}) == ""

    @pytest.mark.unit
    def test_unit_override(self):
        assert compile_declarations({"width": 2}, unit="rem") == "w-[2rem]"

    @pytest.mark.unit
    def test_unit_from_environment(self, monkeypatch):
        monkeypatch.setenv("PAGEBUILDER_DEFAULT_UNIT", "em")
        assert compile_declarations({"width": 2}) == "w-[2em]"


class TestCompilationErrors:
    """Malformed declarations raise CompilationError."""

    @pytest.mark.unit
    def test_non_mapping(self):
        with pytest.raises(CompilationError):
            compile_declarations(["width"])

    @pytest.mark.unit
    def test_nested_value(self):
        with pytest.raises(CompilationError) as exc_info:
            compile_declarations({"width": {"min": 1}})
        assert exc_info.value.property_name == "width"

    @pytest.mark.unit
    def test_bool_value(self):
        with pytest.raises(CompilationError):
            compile_declarations({"opacity": True})

    @pytest.mark.unit
    def test_unknown_breakpoint(self):
        with pytest.raises(CompilationError):
            compile_utility_classes({"2xl": {"width": 1}})

    @pytest.mark.unit
    def test_non_mapping_styles(self):
        with pytest.raises(CompilationError):
            compile_utility_classes("w-auto")


class TestCompileUtilityClasses:
    """Tests for multi-breakpoint compilation."""

    @pytest.mark.unit
    def test_breakpoint_prefix(self):
        assert "md:flex" in compile_utility_classes({"md": {"display": "flex"}}).split()

    @pytest.mark.unit
    def test_canonical_breakpoint_order(self):
        styles = {
            "lg": {"width": "auto"},
            "default": {"height": "auto"},
            "sm": {"display": "none"},
        }
        assert compile_utility_classes(styles) == "h-auto sm:hidden lg:w-auto"

    @pytest.mark.unit
    def test_every_token_prefixed(self):
        result = compile_utility_classes({"xl": {"padding": 4, "margin": 2}})
        assert result == "xl:p-[4px] xl:m-[2px]"

    @pytest.mark.unit
    def test_deterministic(self):
        styles = {
            "default": {"color": "#111111", "fontSize": 24, "display": "grid"},
            "md": {"gap": "1rem"},
        }
        assert compile_utility_classes(styles) == compile_utility_classes(styles)

    @pytest.mark.unit
    def test_quoted_value_keeps_prefix_once(self):
        result = compile_utility_classes({"md": {"margin": "0 auto", "width": "auto"}})
        assert result == "md:w-auto md:m-['0 auto']"
        assert split_classes(result) == ["md:w-auto", "md:m-['0 auto']"]

    @pytest.mark.unit
    def test_empty(self):
        assert compile_utility_classes(None) == ""
        assert compile_utility_classes({}) == ""
        assert compile_utility_classes({"default": {}}) == ""


class TestMergeClasses:
    """Tests for last-wins class merging."""

    @pytest.mark.unit
    def test_later_wins(self):
        assert merge_classes("p-[4px]", "p-[8px]") == "p-[8px]"

    @pytest.mark.unit
    def test_color_and_size_coexist(self):
        assert merge_classes("text-[#111111] text-[24px]") == "text-[#111111] text-[24px]"

    @pytest.mark.unit
    def test_palette_tokens_conflict(self):
        assert merge_classes("text-sm", "text-[24px]") == "text-[24px]"
        assert merge_classes("text-[#000]", "text-red-500") == "text-red-500"

    @pytest.mark.unit
    def test_border_width_and_color(self):
        assert merge_classes("border-[2px] border-[#000]") == "border-[2px] border-[#000]"
        assert merge_classes("border-2", "border-[3px]") == "border-[3px]"

    @pytest.mark.unit
    def test_variants_scope_conflicts(self):
        assert merge_classes("md:flex flex", "md:hidden") == "flex md:hidden"

    @pytest.mark.unit
    def test_variant_order_irrelevant(self):
        assert conflict_key("hover:md:p-2") == conflict_key("md:hover:p-4")

    @pytest.mark.unit
    def test_unknown_tokens_dedupe_only(self):
        assert merge_classes("card card shadow-lg foo") == "card shadow-lg foo"

    @pytest.mark.unit
    def test_side_spacing_distinct(self):
        assert merge_classes("p-4 px-2") == "p-4 px-2"

    @pytest.mark.unit
    def test_negative_values(self):
        assert merge_classes("-mt-2", "mt-4") == "mt-4"

    @pytest.mark.unit
    def test_important_modifier_distinct(self):
        assert merge_classes("!p-2 p-4") == "!p-2 p-4"

    @pytest.mark.unit
    def test_arbitrary_property_joins_named_group(self):
        assert merge_classes("flex", "[display:grid]") == "[display:grid]"

    @pytest.mark.unit
    def test_background_position_vs_color(self):
        merged = merge_classes("bg-['center center'] bg-[#fff]")
        assert merged == "bg-['center center'] bg-[#fff]"

    @pytest.mark.unit
    def test_skips_empty_inputs(self):
        assert merge_classes(None, "", "w-auto") == "w-auto"

    @pytest.mark.unit
    def test_conflict_groups(self):
        assert conflict_group("text-[24px]") == "font-size"
        assert conflict_group("text-[#111]") == "text-color"
        assert conflict_group("text-center") == "text-align"
        assert conflict_group("font-[600]") == "font-weight"
        assert conflict_group("font-[Inter]") == "font-family"
        assert conflict_group("rounded-t-lg") == "rounded-t"
        assert conflict_group("gap-y-[4px]") == "gap-y"
        assert conflict_group("card") is None


class TestCompiledClasses:
    """Tests for compiled classes tagged with their property."""

    @pytest.mark.unit
    def test_class_list_records_origin(self):
        classes = compile_class_list(
            {"md": {"fontSize": 18}, "default": {"color": "#000"}}
        )
        assert classes == [
            CompiledClass("text-[#000]", "default", "color"),
            CompiledClass("md:text-[18px]", "md", "fontSize"),
        ]

    @pytest.mark.unit
    def test_class_list_matches_string_output(self):
        styles = {"default": {"width": "auto", "padding": 4}, "lg": {"display": "none"}}
        tokens = [c.token for c in compile_class_list(styles)]
        assert " ".join(tokens) == compile_utility_classes(styles)

    @pytest.mark.unit
    def test_every_property_has_conflict_group(self):
        assert set(PROPERTY_CONFLICT_GROUPS) == {name for name, _ in PROPERTY_FAMILIES}

    @pytest.mark.unit
    def test_compiled_key_uses_property(self):
        compiled = CompiledClass("md:text-[large]", "md", "fontSize")
        assert compiled_conflict_key(compiled) == (("md",), False, "font-size")

    @pytest.mark.unit
    def test_merge_keeps_every_compiled_class(self):
        compiled = compile_class_list(
            {"default": {"color": "#111", "fontSize": "inherit"}}
        )
        merged = merge_with_compiled("text-[#000] text-sm italic", compiled)
        assert merged == "italic text-[#111] text-[inherit]"

    @pytest.mark.unit
    def test_merge_drops_repeated_token(self):
        compiled = compile_class_list({"default": {"fontSize": "large"}})
        assert merge_with_compiled("text-[large]", compiled) == "text-[large]"


class TestSplitClasses:
    """Tests for bracket-aware class splitting."""

    @pytest.mark.unit
    def test_plain_split(self):
        assert split_classes("  w-auto\th-auto \n flex ") == ["w-auto", "h-auto", "flex"]

    @pytest.mark.unit
    def test_quoted_arbitrary_value_intact(self):
        assert split_classes("bg-['center center'] p-[4px]") == [
            "bg-['center center']",
            "p-[4px]",
        ]

    @pytest.mark.unit
    def test_empty(self):
        assert split_classes("") == []
        assert split_classes(None) == []
