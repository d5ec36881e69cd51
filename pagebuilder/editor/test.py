"""Unit tests for the editor session."""

import logging

import pytest

from pagebuilder.core.errors import (
    CompilationError,
    ElementNotFoundError,
    StructuralViolation,
)
from pagebuilder.factory import ElementFactory
from pagebuilder.model import Element, ElementTemplate
from pagebuilder.tree import find, get_all_ids
from pagebuilder.validation import validate_tree

from .lib import EditorSession


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch):
    monkeypatch.delenv("PAGEBUILDER_DEFAULT_UNIT", raising=False)
    monkeypatch.delenv("PAGEBUILDER_DROP_POSITION", raising=False)


@pytest.fixture
def session(id_factory):
    return EditorSession(
        "page-1", factory=ElementFactory(id_factory=id_factory), validate_snapshots=True
    )


class TestCreation:
    """Tests for creating and inserting elements."""

    @pytest.mark.unit
    def test_create_selects_new_element(self, session):
        frame = session.create_element("Frame")
        assert session.tree == [frame]
        assert session.selected_id == frame.id

        text = session.create_element("Text", parent_id=frame.id)
        assert text.parent_id == frame.id
        assert session.selected() == text
        assert [el.id for el in session.tree[0].elements] == [text.id]

    @pytest.mark.unit
    def test_create_at_position(self, session):
        frame = session.create_element("Frame")
        first = session.create_element("Text", parent_id=frame.id)
        second = session.create_element("Text", parent_id=frame.id, position=0)
        assert [el.id for el in find(session.tree, frame.id).elements] == [
            second.id,
            first.id,
        ]

    @pytest.mark.unit
    def test_factory_failure_leaves_session_untouched(self, session):
        assert session.create_element("Marquee") is None
        assert session.tree == []
        assert session.selected() is None

    @pytest.mark.unit
    def test_leaf_parent_rejected(self, session):
        text = session.create_element("Text")
        with pytest.raises(StructuralViolation):
            session.create_element("Span", parent_id=text.id)
        assert get_all_ids(session.tree) == [text.id]

    @pytest.mark.unit
    def test_missing_parent(self, session):
        with pytest.raises(ElementNotFoundError):
            session.create_element("Text", parent_id="nope")

    @pytest.mark.unit
    def test_insert_template(self, session):
        template = ElementTemplate(
            type="Section",
            elements=[ElementTemplate(type="Heading"), ElementTemplate(type="Text")],
        )
        section = session.insert_template(template)
        assert session.selected_id == section.id
        assert len(get_all_ids(session.tree)) == 3
        assert validate_tree(session.tree) == []


class TestUpdates:
    """Tests for field and style updates."""

    @pytest.mark.unit
    def test_update_element(self, session):
        text = session.create_element("Text")
        updated = session.update_element(text.id, {"content": "Hello"})
        assert updated.content == "Hello"
        assert find(session.tree, text.id).content == "Hello"

    @pytest.mark.unit
    def test_update_structural_field_rejected(self, session):
        text = session.create_element("Text")
        with pytest.raises(ValueError):
            session.update_element(text.id, {"parentId": "elsewhere"})

    @pytest.mark.unit
    def test_update_missing(self, session):
        with pytest.raises(ElementNotFoundError):
            session.update_element("nope", {"content": "x"})

    @pytest.mark.unit
    def test_frame_text_style_flow(self, session):
        frame = session.create_element("Frame")
        text = session.create_element("Text", parent_id=frame.id)

        result = session.update_style(
            text.id, {"color": "#111111", "fontSize": 24}, "default"
        )

        assert result.compiled
        stored = find(session.tree, text.id)
        assert stored.styles == {"default": {"color": "#111111", "fontSize": 24}}
        assert "text-[#111111]" in stored.tailwind_styles.split()
        assert "text-[24px]" in stored.tailwind_styles.split()
        assert stored.parent_id == frame.id

    @pytest.mark.unit
    def test_update_style_keeps_hand_authored(self, session):
        text = session.create_element("Text")
        session.update_element(text.id, {"tailwindStyles": "shadow-lg"})
        session.update_style(text.id, {"width": "auto"}, "md")
        assert find(session.tree, text.id).tailwind_styles == "shadow-lg md:w-auto"

    @pytest.mark.unit
    def test_update_style_unstorable_value_absorbed(self, session, caplog):
        text = session.create_element("Text")
        session.update_style(text.id, {"color": "#111111"}, "default")
        before = session.tree

        with caplog.at_level(logging.ERROR, logger="pagebuilder.editor"):
            result = session.update_style(
                text.id, {"color": {"light": "#fff"}}, "default"
            )

        assert not result.compiled
        assert isinstance(result.error, CompilationError)
        assert result.tailwind_styles == "text-[#111111]"
        assert session.tree is before
        assert "Rejected styles" in caplog.text

    @pytest.mark.unit
    def test_update_style_unknown_breakpoint(self, session):
        text = session.create_element("Text")
        with pytest.raises(ValueError):
            session.update_style(text.id, {"color": "red"}, "xxl")


class TestStructure:
    """Tests for delete, move and swap."""

    @pytest.mark.unit
    def test_delete_clears_selection(self, session):
        frame = session.create_element("Frame")
        text = session.create_element("Text", parent_id=frame.id)
        assert session.selected_id == text.id

        assert session.delete_element(frame.id)
        assert session.tree == []
        assert session.selected_id is None

    @pytest.mark.unit
    def test_delete_keeps_unrelated_selection(self, session):
        first = session.create_element("Text")
        second = session.create_element("Text")
        session.select(first.id)
        session.delete_element(second.id)
        assert session.selected_id == first.id

    @pytest.mark.unit
    def test_delete_missing(self, session):
        assert session.delete_element("nope") is False

    @pytest.mark.unit
    def test_move_element(self, sample_tree):
        session = EditorSession("page-1", tree=sample_tree, validate_snapshots=True)
        result = session.move_element("cta", "banner", "before")
        assert result.applied
        assert [el.id for el in session.tree] == ["root", "cta", "banner"]

    @pytest.mark.unit
    def test_rejected_move_keeps_snapshot(self, sample_tree):
        session = EditorSession("page-1", tree=sample_tree)
        before = session.tree
        result = session.move_element("root", "intro")
        assert not result.applied
        assert session.tree is before

    @pytest.mark.unit
    def test_swap_siblings(self, sample_tree):
        session = EditorSession("page-1", tree=sample_tree)
        assert session.swap_elements("intro", "cta")
        assert [el.id for el in find(session.tree, "content").elements] == [
            "cta",
            "intro",
        ]

    @pytest.mark.unit
    def test_swap_non_siblings_refused(self, sample_tree):
        session = EditorSession("page-1", tree=sample_tree)
        assert not session.swap_elements("intro", "title")
        assert session.tree == sample_tree


class TestSelection:
    """Tests for explicit selection."""

    @pytest.mark.unit
    def test_select_unknown(self, sample_tree):
        session = EditorSession("page-1", tree=sample_tree)
        with pytest.raises(ElementNotFoundError):
            session.select("nope")

    @pytest.mark.unit
    def test_clear_selection(self, sample_tree):
        session = EditorSession("page-1", tree=sample_tree)
        session.select("cta")
        assert session.selected().content == "Go"
        session.select(None)
        assert session.selected() is None


class TestSnapshotValidation:
    """Tests for PAGEBUILDER_VALIDATE_SNAPSHOTS."""

    @pytest.mark.unit
    def test_invalid_snapshot_rejected(self, monkeypatch):
        monkeypatch.setenv("PAGEBUILDER_VALIDATE_SNAPSHOTS", "true")
        # child claims a different parent than the one holding it
        broken = Element(
            id="a",
            type="Frame",
            page_id="page-1",
            elements=[Element(id="b", type="Text", page_id="page-1", parent_id="x")],
        )
        session = EditorSession("page-1", tree=[broken])

        with pytest.raises(StructuralViolation) as exc_info:
            session.update_element("b", {"content": "hi"})
        assert exc_info.value.kind == "parent_mismatch"
        assert session.tree == [broken]
