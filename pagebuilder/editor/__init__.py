"""Editing session over one page's element tree.

Example usage:
    >>> from pagebuilder.editor import EditorSession
    >>> session = EditorSession("page-1")
    >>> frame = session.create_element("Frame")
    >>> session.update_style(frame.id, {"display": "flex"}, "md")
"""

from .lib import EditorSession

__all__ = ["EditorSession"]
