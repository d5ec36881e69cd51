"""Root pytest configuration and fixtures.

This module provides:
- Environment setup (loads .env)
- Sample page trees shared by the package tests
- Deterministic id factories
"""

from __future__ import annotations

import itertools
from collections.abc import Callable
from typing import TYPE_CHECKING

import pytest
from dotenv import load_dotenv

if TYPE_CHECKING:
    from pagebuilder.model import Element

# Load environment variables from .env file
load_dotenv()


PAGE_ID = "page-1"


# =============================================================================
# Identity Fixtures
# =============================================================================


@pytest.fixture
def page_id() -> str:
    """Page identifier used by the sample trees."""
    return PAGE_ID


@pytest.fixture
def id_factory() -> Callable[[], str]:
    """Create a deterministic id source yielding "id-1", "id-2", ...

    Returns:
        Zero-argument callable usable as an ElementFactory id_factory.
    """
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


# =============================================================================
# Tree Fixtures
# =============================================================================


@pytest.fixture
def sample_tree() -> list[Element]:
    """Create a small page tree for testing.

    Layout:
        root (Frame)
            header (Header)
                title (Heading)
            content (Section)
                intro (Text)
                cta (Button)
            footer (Footer)
        banner (Section)

    Returns:
        Root forest with consistent parent links.
    """
    from pagebuilder.model import Element

    def el(id: str, type: str, parent_id: str | None, *children: Element, **extra):
        return Element(
            id=id,
            type=type,
            parent_id=parent_id,
            page_id=PAGE_ID,
            elements=list(children),
            **extra,
        )

    return [
        el(
            "root",
            "Frame",
            None,
            el("header", "Header", "root", el("title", "Heading", "header", content="Hi")),
            el(
                "content",
                "Section",
                "root",
                el("intro", "Text", "content", content="Welcome"),
                el("cta", "Button", "content", content="Go"),
            ),
            el("footer", "Footer", "root"),
        ),
        el("banner", "Section", None),
    ]


@pytest.fixture
def styled_text() -> Element:
    """Create a Text element with compiled and hand-authored classes.

    Returns:
        Element whose tailwind_styles hold the compiled default styles plus
        the hand-authored "shadow-lg" and "hover:underline" tokens.
    """
    from pagebuilder.model import Element

    return Element(
        id="styled",
        type="Text",
        page_id=PAGE_ID,
        content="Styled",
        styles={"default": {"color": "#000000", "padding": 4}},
        tailwind_styles="text-[#000000] p-[4px] shadow-lg hover:underline",
    )
