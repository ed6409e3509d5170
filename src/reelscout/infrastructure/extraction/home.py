"""Home page extraction.

``.update`` blocks announce recently updated categories (link in
``.black a``), ``.touch`` blocks are plain category links.  Movies of an
update block are listed as anchors each followed by a green ``[quality]``
font.
"""

from __future__ import annotations

from reelscout.domain.entities.catalog import HomeCategory, HomePage, MovieSummary
from reelscout.domain.ports.document import DocumentNode
from reelscout.infrastructure.extraction.chain import collapse_whitespace

# How many following siblings may separate a movie anchor from its quality.
_QUALITY_LOOKAHEAD = 3


def _category_link(block: DocumentNode, selector: str) -> HomeCategory | None:
    anchor = block.select_one(selector)
    if anchor is None:
        return None
    title = collapse_whitespace(anchor.text())
    href = anchor.attr("href").strip()
    if not (title and href):
        return None
    return HomeCategory(title=title, url=href)


def home_page(root: DocumentNode) -> HomePage:
    blocks = [_category_link(b, ".black a") for b in root.select(".update")]
    links = [_category_link(b, "a") for b in root.select(".touch")]
    return HomePage(
        update_blocks=[b for b in blocks if b is not None],
        category_links=[c for c in links if c is not None],
    )


def _sibling_quality(siblings: list[DocumentNode]) -> str:
    for node in siblings[:_QUALITY_LOOKAHEAD]:
        if node.tag == "font" and node.attr("color") == "green":
            return node.text().replace("[", "").replace("]", "").strip()
    return "Unknown"


def _block_movies(node: DocumentNode) -> list[MovieSummary]:
    movies: list[MovieSummary] = []
    children = node.children()
    for index, child in enumerate(children):
        if child.has_class("black"):
            continue
        if child.tag == "a":
            href = child.attr("href").strip()
            title = collapse_whitespace(child.text())
            if title and "/movie" in href:
                movies.append(
                    MovieSummary(
                        title=title,
                        url=href,
                        quality=_sibling_quality(children[index + 1 :]),
                    )
                )
            continue
        movies.extend(_block_movies(child))
    return movies


def update_block(root: DocumentNode, category_filter: str) -> HomeCategory | None:
    """First ``.update`` block whose title contains *category_filter*."""
    needle = category_filter.strip().lower()
    for block in root.select(".update"):
        link = _category_link(block, ".black a")
        if link is None or needle not in link.title.lower():
            continue
        return HomeCategory(title=link.title, url=link.url, movies=_block_movies(block))
    return None
