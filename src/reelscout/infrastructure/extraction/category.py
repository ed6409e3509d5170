"""Category page strategies.

Subcategory markers are checked first; a page that has them is a
subcategory listing and reports no movies.  Otherwise the movie chain
runs: grid items, media cards, then a bare ``/movie`` anchor scan.
"""

from __future__ import annotations

import re

from reelscout.domain.entities.catalog import MovieSummary, SubCategory
from reelscout.domain.ports.document import DocumentNode
from reelscout.infrastructure.extraction.cards import parse_cards
from reelscout.infrastructure.extraction.chain import Strategy, collapse_whitespace
from reelscout.infrastructure.html.soup_document import image_source

_YEAR_IN_PARENS_RE = re.compile(r"\((\d{4})\)")
_YEAR_STRIP_RE = re.compile(r"\s*\(\d{4}\)\s*")

_TITLE_SELECTORS = (".head", "h1", "title", ".page-title", ".category-title")
_PLACEHOLDER_TITLE = "Category"


def sub_categories(root: DocumentNode) -> list[SubCategory]:
    out: list[SubCategory] = []
    for anchor in root.select('.touch a[href*="/category/"]'):
        title = collapse_whitespace(anchor.text())
        href = anchor.attr("href").strip()
        if title and href:
            out.append(
                SubCategory(title=title, url=href, thumbnail=image_source(anchor))
            )
    return out


def grid_items(root: DocumentNode) -> list[MovieSummary]:
    out: list[MovieSummary] = []
    for item in root.select(".movie-item, .post-item, .entry-item"):
        link = item.select_one('a[href*="/movie"]')
        if link is None:
            continue
        href = link.attr("href").strip()
        title = link.attr("title").strip() or collapse_whitespace(link.text())
        if not (title and href):
            continue
        year_match = _YEAR_IN_PARENS_RE.search(item.text())
        out.append(
            MovieSummary(
                title=_YEAR_STRIP_RE.sub(" ", title).strip(),
                url=href,
                year=year_match.group(1) if year_match else "",
                quality="HD",
                thumbnail=image_source(item),
            )
        )
    return out


def media_cards(root: DocumentNode) -> list[MovieSummary]:
    return parse_cards(root, require_movie_link=True)


def movie_anchors(root: DocumentNode) -> list[MovieSummary]:
    out: list[MovieSummary] = []
    for anchor in root.select('a[href*="/movie"]'):
        href = anchor.attr("href").strip()
        title = collapse_whitespace(anchor.text()) or anchor.attr("title").strip()
        if href and len(title) > 3:
            out.append(
                MovieSummary(title=title, url=href, thumbnail=image_source(anchor))
            )
    return out


MOVIE_STRATEGIES: tuple[Strategy[MovieSummary], ...] = (
    Strategy("grid_items", grid_items),
    Strategy("media_cards", media_cards),
    Strategy("movie_anchors", movie_anchors),
)


def _clean_title(raw: str, brand: str) -> str:
    tokens = [re.escape(brand)] if brand else []
    tokens += ["download", "movies?"]
    cleaned = re.sub("|".join(tokens), "", raw, flags=re.IGNORECASE)
    return collapse_whitespace(cleaned)


def _title_from_url(url: str) -> str:
    match = re.search(r"/([^/]+?)(?:\.html?)?/?$", url)
    if not match:
        return ""
    words = re.sub(r"[-_]+", " ", match.group(1)).split()
    return " ".join(w[:1].upper() + w[1:] for w in words)


def category_title(root: DocumentNode, source_url: str = "", brand: str = "") -> str:
    """Page title via the fallback chain, cleaned of site boilerplate.

    Falls back to the last URL path segment when every source is empty
    or only the ``Category`` placeholder.
    """
    candidates: list[str] = []
    for selector in _TITLE_SELECTORS:
        node = root.select_one(selector)
        candidates.append(node.text() if node is not None else "")
    path = root.select_one(".path")
    if path is not None:
        candidates.append(path.text().split("»")[-1])

    title = ""
    for candidate in candidates:
        candidate = candidate.strip()
        if candidate and candidate != _PLACEHOLDER_TITLE:
            title = candidate
            break

    title = _clean_title(title, brand)
    if (not title or title == _PLACEHOLDER_TITLE) and source_url:
        title = _title_from_url(source_url) or title
    return title or _PLACEHOLDER_TITLE
