"""Unit tests for the element factory."""

import logging

import pytest

from pagebuilder.core.errors import ConfigurationError
from pagebuilder.model import ElementTemplate
from pagebuilder.schema import ElementType
from pagebuilder.tree import get_all_ids
from pagebuilder.validation import validate_tree

from . import (
    BuilderState,
    ElementFactory,
    build_element,
    create_element,
    create_element_from_template,
    get_strategy,
    list_strategies,
)


@pytest.fixture
def factory(id_factory):
    return ElementFactory(id_factory=id_factory)


class TestStrategyRegistry:
    """Tests for strategy registration and lookup."""

    @pytest.mark.unit
    def test_every_type_has_strategy(self):
        assert set(list_strategies()) == set(ElementType)

    @pytest.mark.unit
    def test_get_strategy_accepts_string(self):
        strategy = get_strategy("Text")
        element = strategy(
            BuilderState(id="t1", type=ElementType.TEXT, page_id="page-1")
        )
        assert element.content == "Text"

    @pytest.mark.unit
    def test_get_strategy_unknown_type(self):
        with pytest.raises(ConfigurationError) as exc_info:
            get_strategy("Marquee")
        assert exc_info.value.code == "unknown_type"

    @pytest.mark.unit
    def test_build_element_uses_defaults(self):
        state = BuilderState(id="b1", type=ElementType.BUTTON, page_id="page-1")
        element = build_element(
            state,
            content="Click me",
            styles={"default": {"color": "#fff"}},
            settings={"x": 1},
        )
        assert element.content == "Click me"
        assert element.styles == {"default": {"color": "#fff"}}
        assert element.settings == {"x": 1}
        assert element.tailwind_styles == ""

    @pytest.mark.unit
    def test_empty_parent_id_becomes_root(self):
        state = BuilderState(
            id="t1", type=ElementType.TEXT, page_id="page-1", parent_id=""
        )
        assert build_element(state).parent_id is None


class TestCreate:
    """Tests for ElementFactory.create."""

    @pytest.mark.unit
    def test_create_text(self, factory):
        element = factory.create("Text", page_id="page-1")
        assert element is not None
        assert element.id == "id-1"
        assert element.type == ElementType.TEXT
        assert element.content == "Text"
        assert element.parent_id is None
        assert element.elements == []

    @pytest.mark.unit
    def test_create_with_parent(self, factory):
        element = factory.create(ElementType.SECTION, "page-1", parent_id="root")
        assert element.parent_id == "root"
        assert element.page_id == "page-1"

    @pytest.mark.unit
    def test_default_ids_are_unique(self):
        first = create_element("Frame", "page-1")
        second = create_element("Frame", "page-1")
        assert first.id != second.id

    @pytest.mark.unit
    def test_tailwind_compiled_from_defaults(self, factory):
        heading = factory.create("Heading", "page-1")
        assert heading.settings == {"level": 2}
        assert heading.tailwind_styles == (
            "text-[var(--text-heading,#0f172a)] text-[24px] font-bold leading-[1.3]"
        )

    @pytest.mark.unit
    def test_defaults_per_kind(self, factory):
        assert factory.create("Button", "page-1").content == "Click me"
        assert factory.create("Code", "page-1").settings["language"] == "javascript"
        assert factory.create("Carousel", "page-1").settings == {"autoplay": True}
        icon = factory.create("Icon", "page-1")
        assert icon.settings["iconName"] == "star"
        assert icon.settings["size"] == 24
        link = factory.create("Link", "page-1")
        assert (link.content, link.href) == ("Link", "#")
        assert len(factory.create("Table", "page-1").settings["columns"]) == 3

    @pytest.mark.unit
    def test_every_type_creates(self, factory):
        for element_type in ElementType:
            element = factory.create(element_type, "page-1")
            assert element is not None, element_type
            assert element.type == element_type

    @pytest.mark.unit
    @pytest.mark.parametrize("page_id", ["", "   "])
    def test_missing_page_id_returns_none(self, factory, page_id, caplog):
        with caplog.at_level(logging.ERROR, logger="pagebuilder.factory"):
            assert factory.create("Text", page_id) is None
        assert "missing_page_id" in caplog.text

    @pytest.mark.unit
    def test_unknown_type_returns_none(self, factory, caplog):
        with caplog.at_level(logging.ERROR, logger="pagebuilder.factory"):
            assert factory.create("Marquee", "page-1") is None
        assert "unknown_type" in caplog.text


class TestCreateFromTemplate:
    """Tests for recursive template cloning."""

    @pytest.mark.unit
    def test_nested_template_gets_fresh_ids(self, factory):
        template = ElementTemplate(
            type="Frame",
            elements=[
                ElementTemplate(
                    type="Section",
                    elements=[ElementTemplate(type="Text", content="Nested")],
                ),
                ElementTemplate(type="Button"),
            ],
        )
        root = factory.create_from_template(template, "page-1")

        ids = get_all_ids([root])
        assert len(ids) == 4
        assert len(set(ids)) == 4
        assert validate_tree([root]) == []

        section, button = root.elements
        assert section.parent_id == root.id
        assert button.parent_id == root.id
        assert section.elements[0].parent_id == section.id
        assert section.elements[0].content == "Nested"

    @pytest.mark.unit
    def test_template_values_copied_verbatim(self, factory):
        template = ElementTemplate(
            type="Image",
            src="https://example.com/a.png",
            styles={"default": {"width": 320}},
            settings={"objectFit": "contain"},
        )
        image = factory.create_from_template(template, "page-1", parent_id="root")
        assert image.src == "https://example.com/a.png"
        assert image.styles == {"default": {"width": 320}}
        assert image.settings == {"objectFit": "contain"}
        assert image.tailwind_styles == "w-[320px]"
        assert image.parent_id == "root"
        assert image.content is None

    @pytest.mark.unit
    def test_kind_defaults_not_applied(self, factory):
        heading = factory.create_from_template(
            ElementTemplate(type="Heading", styles={}), "page-1"
        )
        assert heading.content is None
        assert heading.styles == {}
        assert heading.settings == {}
        assert heading.tailwind_styles == ""

    @pytest.mark.unit
    def test_declared_fields_only(self, factory):
        button = factory.create_from_template(
            ElementTemplate(type="Button", content="Buy", href="/cart"), "page-1"
        )
        assert (button.content, button.href) == ("Buy", "/cart")
        assert button.styles == {}
        assert button.tailwind_styles == ""

    @pytest.mark.unit
    def test_template_classes_kept(self, factory):
        template = ElementTemplate(
            type="Text",
            styles={"default": {"color": "#111111"}},
            tailwind_styles="text-[#111111] shadow-sm",
        )
        element = factory.create_from_template(template, "page-1")
        assert element.tailwind_styles == "text-[#111111] shadow-sm"

    @pytest.mark.unit
    def test_leaf_template_with_children_rejected(self, factory, caplog):
        template = ElementTemplate(
            type="Text", elements=[ElementTemplate(type="Span")]
        )
        with caplog.at_level(logging.ERROR, logger="pagebuilder.factory"):
            assert factory.create_from_template(template, "page-1") is None
        assert "invalid_template" in caplog.text

    @pytest.mark.unit
    def test_module_level_helper(self):
        template = ElementTemplate(type="Frame", elements=[])
        element = create_element_from_template(template, "page-1")
        assert element is not None
        assert element.elements == []
