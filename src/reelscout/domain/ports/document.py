"""Minimal parsed-document interface used by the extraction strategies.

Strategies only ever talk to ``DocumentNode``; the HTML library behind it
is an infrastructure detail.
"""

from __future__ import annotations

from typing import Protocol


class DocumentNode(Protocol):
    """An element (or the document root) of a parsed HTML page."""

    @property
    def tag(self) -> str:
        """Lower-case tag name (``"[document]"`` for the root)."""
        ...

    def select(self, selector: str) -> list[DocumentNode]:
        """All descendants matching a CSS selector, in document order."""
        ...

    def select_one(self, selector: str) -> DocumentNode | None: ...

    def attr(self, name: str, default: str = "") -> str:
        """Attribute value; multi-valued attributes are space-joined."""
        ...

    def text(self) -> str:
        """Concatenated text of the node and its descendants, unstripped."""
        ...

    def children(self) -> list[DocumentNode]:
        """Direct child elements (text nodes excluded)."""
        ...

    def has_class(self, name: str) -> bool: ...
