"""Unit tests for the Schema module."""

import pytest

from .lib import (
    BREAKPOINT_ORDER,
    CONTAINER_ELEMENT_TYPES,
    ELEMENT_REGISTRY,
    Breakpoint,
    ElementCategory,
    ElementType,
    export_element_enum_schema,
    get_element_meta,
    get_elements_by_category,
    is_container_type,
    is_editable_type,
    is_valid_element_dict,
    resolve_alias,
    validate_breakpoint,
    validate_element_dict,
    validate_element_type,
)


def _node(id, type="Frame", parent_id=None, elements=None, **extra):
    data = {"id": id, "type": type, "pageId": "page-1", "parentId": parent_id}
    if elements is not None:
        data["elements"] = elements
    data.update(extra)
    return data


class TestElementRegistry:
    """Tests for ELEMENT_REGISTRY completeness."""

    @pytest.mark.unit
    def test_all_element_types_registered(self):
        """Every ElementType has metadata in registry."""
        for et in ElementType:
            assert et in ELEMENT_REGISTRY, f"Missing metadata for {et}"
            assert ELEMENT_REGISTRY[et].type == et

    @pytest.mark.unit
    def test_registry_has_34_entries(self):
        assert len(ELEMENT_REGISTRY) == 34

    @pytest.mark.unit
    def test_container_kinds(self):
        """Exactly the layout-bearing kinds may hold children."""
        expected = {
            "Frame",
            "Form",
            "List",
            "Section",
            "Carousel",
            "CMSContentList",
            "CMSContentItem",
            "CMSContentGrid",
            "Table",
            "Nav",
            "Header",
            "Footer",
            "Article",
            "Aside",
        }
        assert {et.value for et in CONTAINER_ELEMENT_TYPES} == expected

    @pytest.mark.unit
    def test_meta_to_dict(self):
        d = get_element_meta(ElementType.BUTTON).to_dict()
        assert d["type"] == "Button"
        assert d["category"] == "form"
        assert d["is_container"] is False
        assert isinstance(d["aliases"], list)

    @pytest.mark.unit
    def test_get_meta_accepts_string(self):
        assert get_element_meta("Frame").is_container is True

    @pytest.mark.unit
    def test_get_meta_unknown_raises(self):
        with pytest.raises(KeyError):
            get_element_meta("Widget")

    @pytest.mark.unit
    def test_elements_by_category(self):
        cms = get_elements_by_category(ElementCategory.CMS)
        assert set(cms) == {
            ElementType.CMS_CONTENT_LIST,
            ElementType.CMS_CONTENT_ITEM,
            ElementType.CMS_CONTENT_GRID,
        }

    @pytest.mark.unit
    def test_enum_schema_export(self):
        exported = export_element_enum_schema()
        assert set(exported) == {et.value for et in ElementType}
        assert exported["Frame"]["html_tag"] == "div"


class TestClassification:
    """Tests for container / editable predicates."""

    @pytest.mark.unit
    def test_is_container(self):
        assert is_container_type(ElementType.FRAME)
        assert is_container_type("Section")
        assert not is_container_type(ElementType.TEXT)
        assert not is_container_type("Widget")

    @pytest.mark.unit
    def test_is_editable(self):
        assert is_editable_type(ElementType.TEXT)
        assert is_editable_type("Button")
        assert not is_editable_type(ElementType.IMAGE)
        assert not is_editable_type(ElementType.FRAME)


class TestResolution:
    """Tests for alias and enum resolution."""

    @pytest.mark.unit
    def test_resolve_canonical_value(self):
        assert resolve_alias("frame") == ElementType.FRAME
        assert resolve_alias("CMSCONTENTLIST") == ElementType.CMS_CONTENT_LIST

    @pytest.mark.unit
    def test_resolve_alias(self):
        assert resolve_alias("div") == ElementType.FRAME
        assert resolve_alias("  IMG ") == ElementType.IMAGE
        assert resolve_alias("btn") == ElementType.BUTTON

    @pytest.mark.unit
    def test_resolve_unknown(self):
        assert resolve_alias("spaceship") is None

    @pytest.mark.unit
    def test_validate_element_type(self):
        assert validate_element_type("Text") == ElementType.TEXT
        assert validate_element_type(ElementType.LINK) == ElementType.LINK
        assert validate_element_type("text") is None

    @pytest.mark.unit
    def test_breakpoint_order(self):
        assert BREAKPOINT_ORDER == ("default", "sm", "md", "lg", "xl")
        assert validate_breakpoint("md") == Breakpoint.MD
        assert validate_breakpoint("2xl") is None


class TestElementDictValidation:
    """Tests for raw nested dict validation."""

    @pytest.mark.unit
    def test_valid_tree(self):
        data = _node(
            "root",
            elements=[
                _node("a", "Text", parent_id="root", content="Hi"),
                _node(
                    "b",
                    "Section",
                    parent_id="root",
                    styles={"default": {"padding": "8px"}, "md": {"gap": 4}},
                ),
            ],
        )
        assert validate_element_dict(data) == []
        assert is_valid_element_dict(data)

    @pytest.mark.unit
    def test_missing_fields(self):
        errors = validate_element_dict({"type": "Frame"})
        kinds = {(e.error_type, e.message) for e in errors}
        assert ("missing_field", "Missing required field 'id'") in kinds
        assert ("missing_field", "Missing required field 'pageId'") in kinds

    @pytest.mark.unit
    def test_invalid_type(self):
        errors = validate_element_dict(_node("root", "Widget"))
        assert [e.error_type for e in errors] == ["invalid_enum"]

    @pytest.mark.unit
    def test_unknown_breakpoint(self):
        errors = validate_element_dict(_node("root", styles={"2xl": {"gap": "1px"}}))
        assert errors[0].path == "root.styles"
        assert errors[0].error_type == "invalid_enum"

    @pytest.mark.unit
    def test_non_scalar_declaration(self):
        errors = validate_element_dict(
            _node("root", styles={"default": {"padding": {"top": 1}, "flag": True}})
        )
        paths = sorted(e.path for e in errors)
        assert paths == ["root.styles.default.flag", "root.styles.default.padding"]

    @pytest.mark.unit
    def test_leaf_with_children(self):
        data = _node("t", "Text", elements=[_node("c", "Text", parent_id="t")])
        errors = validate_element_dict(data)
        assert [e.error_type for e in errors] == ["leaf_with_children"]

    @pytest.mark.unit
    def test_parent_mismatch_is_path_annotated(self):
        data = _node("root", elements=[_node("a", "Text", parent_id="elsewhere")])
        errors = validate_element_dict(data)
        assert len(errors) == 1
        assert errors[0].path == "root.elements[0]"
        assert errors[0].error_type == "parent_mismatch"

    @pytest.mark.unit
    def test_duplicate_sibling_ids(self):
        data = _node(
            "root",
            elements=[
                _node("a", "Text", parent_id="root"),
                _node("a", "Text", parent_id="root"),
            ],
        )
        errors = validate_element_dict(data)
        assert [e.error_type for e in errors] == ["duplicate_id"]
        assert errors[0].path == "root.elements[1]"
