"""Unit tests for the page document model."""

import pytest
from pydantic import ValidationError

from pagebuilder.schema import ElementType

from .lib import (
    Element,
    ElementTemplate,
    apply_updates,
    dump_tree,
    export_json_schema,
    is_container_template,
    load_tree,
    normalize_styles,
)


class TestElement:
    """Tests for the Element model."""

    @pytest.mark.unit
    def test_defaults(self):
        el = Element(id="a", type=ElementType.TEXT, page_id="p")
        assert el.parent_id is None
        assert el.styles == {}
        assert el.tailwind_styles == ""
        assert el.elements == []
        assert el.type == ElementType.TEXT
        assert el.type == "Text"

    @pytest.mark.unit
    def test_frozen(self):
        el = Element(id="a", type="Text", page_id="p")
        with pytest.raises(ValidationError):
            el.content = "changed"

    @pytest.mark.unit
    def test_accepts_camel_case(self):
        el = Element.model_validate(
            {
                "id": "a",
                "type": "Button",
                "pageId": "p",
                "parentId": "root",
                "tailwindStyles": "w-auto",
            }
        )
        assert el.page_id == "p"
        assert el.parent_id == "root"
        assert el.tailwind_styles == "w-auto"

    @pytest.mark.unit
    def test_dump_by_alias(self):
        el = Element(id="a", type="Text", page_id="p", tailwind_styles="w-auto")
        data = el.model_dump(mode="json", by_alias=True)
        assert data["pageId"] == "p"
        assert data["tailwindStyles"] == "w-auto"
        assert data["type"] == "Text"
        assert "page_id" not in data

    @pytest.mark.unit
    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            Element(id="a", type="Widget", page_id="p")

    @pytest.mark.unit
    def test_unknown_breakpoint_rejected(self):
        with pytest.raises(ValidationError):
            Element(id="a", type="Text", page_id="p", styles={"2xl": {}})

    @pytest.mark.unit
    def test_bool_declaration_rejected(self):
        with pytest.raises(ValidationError):
            Element(id="a", type="Text", page_id="p", styles={"default": {"x": True}})

    @pytest.mark.unit
    def test_styles_in_canonical_order(self):
        el = Element(
            id="a",
            type="Text",
            page_id="p",
            styles={"lg": {"gap": 1}, "default": {"gap": 2}, "sm": {}},
        )
        assert list(el.styles) == ["default", "sm", "lg"]

    @pytest.mark.unit
    def test_nested_children(self):
        el = Element.model_validate(
            {
                "id": "root",
                "type": "Frame",
                "pageId": "p",
                "elements": [{"id": "c", "type": "Text", "pageId": "p", "parentId": "root"}],
            }
        )
        assert isinstance(el.elements[0], Element)
        assert el.elements[0].parent_id == "root"


class TestNormalizeStyles:
    """Tests for responsive style normalization."""

    @pytest.mark.unit
    def test_none_is_empty(self):
        assert normalize_styles(None) == {}

    @pytest.mark.unit
    def test_non_mapping(self):
        with pytest.raises(ValueError):
            normalize_styles(["default"])

    @pytest.mark.unit
    def test_returns_copies(self):
        source = {"default": {"width": "10px"}}
        result = normalize_styles(source)
        assert result == source
        assert result["default"] is not source["default"]


class TestTemplate:
    """Tests for ElementTemplate."""

    @pytest.mark.unit
    def test_leaf_template(self):
        tpl = ElementTemplate(type="Text", content="Hello")
        assert not is_container_template(tpl)

    @pytest.mark.unit
    def test_container_template(self):
        tpl = ElementTemplate.model_validate(
            {"type": "Frame", "elements": [{"type": "Text", "content": "x"}]}
        )
        assert is_container_template(tpl)
        assert is_container_template(ElementTemplate(type="Frame", elements=[]))
        assert isinstance(tpl.elements[0], ElementTemplate)


class TestApplyUpdates:
    """Tests for shallow element updates."""

    @pytest.mark.unit
    def test_update_by_field_name_and_alias(self):
        el = Element(id="a", type="Text", page_id="p")
        updated = apply_updates(el, {"content": "New", "tailwindStyles": "m-auto"})
        assert updated.content == "New"
        assert updated.tailwind_styles == "m-auto"
        assert el.content is None

    @pytest.mark.unit
    def test_children_shared(self):
        child = Element(id="c", type="Text", page_id="p", parent_id="a")
        el = Element(id="a", type="Frame", page_id="p", elements=[child])
        updated = apply_updates(el, {"content": "x"})
        assert updated.elements[0] is child

    @pytest.mark.unit
    def test_styles_validated(self):
        el = Element(id="a", type="Text", page_id="p")
        with pytest.raises(ValueError):
            apply_updates(el, {"styles": {"huge": {}}})

    @pytest.mark.unit
    def test_id_immutable(self):
        el = Element(id="a", type="Text", page_id="p")
        with pytest.raises(ValueError):
            apply_updates(el, {"id": "b"})

    @pytest.mark.unit
    def test_unknown_field(self):
        el = Element(id="a", type="Text", page_id="p")
        with pytest.raises(ValueError):
            apply_updates(el, {"colour": "red"})


class TestSerialization:
    """Tests for tree load/dump helpers."""

    @pytest.mark.unit
    def test_load_single_dict(self):
        tree = load_tree({"id": "a", "type": "Text", "pageId": "p"})
        assert [el.id for el in tree] == ["a"]

    @pytest.mark.unit
    def test_round_trip(self):
        data = [
            {
                "id": "root",
                "type": "Frame",
                "pageId": "p",
                "styles": {"default": {"width": "auto"}},
                "elements": [
                    {"id": "c", "type": "Text", "pageId": "p", "parentId": "root"}
                ],
            }
        ]
        dumped = dump_tree(load_tree(data))
        assert dumped[0]["elements"][0]["parentId"] == "root"
        assert dumped[0]["styles"] == {"default": {"width": "auto"}}

    @pytest.mark.unit
    def test_json_schema(self):
        schema = export_json_schema()
        body = schema.get("$defs", {}).get("Element", schema)
        assert body["title"] == "Element"
        assert "pageId" in body["properties"]
