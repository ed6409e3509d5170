"""BeautifulSoup implementation of the ``DocumentNode`` port.

Wraps ``bs4.Tag`` objects so that extraction strategies stay independent
of the parser API.  Also provides the small fallback-chain helpers the
strategies share: the first selector that yields a non-empty value wins.
"""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag

from reelscout.domain.ports.document import DocumentNode


class SoupNode:
    """``DocumentNode`` backed by a BeautifulSoup tag."""

    __slots__ = ("_tag",)

    def __init__(self, tag: Tag) -> None:
        self._tag = tag

    @property
    def tag(self) -> str:
        return self._tag.name or ""

    def select(self, selector: str) -> list[DocumentNode]:
        return [SoupNode(t) for t in self._tag.select(selector)]

    def select_one(self, selector: str) -> DocumentNode | None:
        match = self._tag.select_one(selector)
        return SoupNode(match) if match is not None else None

    def attr(self, name: str, default: str = "") -> str:
        value = self._tag.get(name)
        if value is None:
            return default
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    def text(self) -> str:
        return self._tag.get_text()

    def children(self) -> list[DocumentNode]:
        return [SoupNode(c) for c in self._tag.children if isinstance(c, Tag)]

    def has_class(self, name: str) -> bool:
        return name in (self._tag.get("class") or [])

    def __repr__(self) -> str:
        return f"SoupNode(<{self.tag}>)"


def parse_document(html: str) -> DocumentNode:
    """Parse an HTML string with the ``lxml`` parser."""
    return SoupNode(BeautifulSoup(html, "lxml"))


def first_text(root: DocumentNode, selector: str, *fallback_selectors: str) -> str:
    """Stripped text of the first match of the first selector with text."""
    for sel in (selector, *fallback_selectors):
        match = root.select_one(sel)
        if match is not None:
            text = match.text().strip()
            if text:
                return text
    return ""


def first_attr(
    root: DocumentNode,
    selector: str,
    attr: str,
    *fallback_selectors: str,
) -> str:
    """Attribute of the first match of the first selector carrying it."""
    for sel in (selector, *fallback_selectors):
        match = root.select_one(sel)
        if match is not None:
            value = match.attr(attr).strip()
            if value:
                return value
    return ""


def image_source(root: DocumentNode) -> str:
    """``src`` (or lazy-load ``data-src``) of the first image below *root*."""
    img = root.select_one("img")
    if img is None:
        return ""
    return (img.attr("src") or img.attr("data-src")).strip()
