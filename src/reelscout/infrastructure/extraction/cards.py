"""Parser for ``.filmyvideo`` media cards.

The same card markup appears on category pages, as related movies on
detail pages and inside home page category listings.  Two title layouts
exist: the second ``.informationn`` paragraph (``Title (2023) (HD)``) and
a ``font[size="2"]`` element with the quality in a red ``small``.
"""

from __future__ import annotations

import re

from reelscout.domain.entities.catalog import MovieSummary
from reelscout.domain.ports.document import DocumentNode
from reelscout.infrastructure.extraction.chain import collapse_whitespace
from reelscout.infrastructure.html.soup_document import first_text, image_source

CARD_SELECTOR = ".filmyvideo"

_TITLE_YEAR_RE = re.compile(r"^(.+?)\s*\((\d{4})\)")
_TRAILING_PAREN_RE = re.compile(r"\s*\([^)]*\)\s*$")
_PARENS_RE = re.compile(r"[()]")


def card_href(card: DocumentNode) -> str:
    """The card's own ``href`` or that of its first nested anchor."""
    href = card.attr("href").strip()
    if href:
        return href
    anchor = card.select_one("a[href]")
    return anchor.attr("href").strip() if anchor is not None else ""


def split_title_year(text: str) -> tuple[str, str]:
    """``"Name (2023) (HD)"`` -> ``("Name", "2023")``."""
    text = collapse_whitespace(text)
    match = _TITLE_YEAR_RE.match(text)
    if match:
        return match.group(1).strip(), match.group(2)
    return _TRAILING_PAREN_RE.sub("", text).strip(), ""


def _card_quality(node: DocumentNode) -> str:
    small = node.select_one('font[color="red"] small')
    if small is None:
        return ""
    return _PARENS_RE.sub("", small.text()).strip()


def _labeled_green(card: DocumentNode, label: str) -> str:
    for paragraph in card.select("p.black"):
        if label in paragraph.text().lower():
            return first_text(paragraph, 'font[color="green"]')
    return ""


def parse_card(
    card: DocumentNode,
    *,
    default_quality: str = "Unknown",
    default_meta: str = "N/A",
) -> MovieSummary | None:
    """Parse one media card; ``None`` when it has no title or link."""
    href = card_href(card)
    if not href:
        return None

    title = year = quality = ""
    paragraphs = card.select(".informationn p")
    if len(paragraphs) > 1:
        title_node = paragraphs[1]
        title, year = split_title_year(title_node.text())
        quality = _card_quality(title_node)
    else:
        title_node = card.select_one('font[size="2"]')
        if title_node is not None:
            quality = _card_quality(title_node)
            raw = title_node.text()
            small = title_node.select_one('font[color="red"] small')
            if small is not None:
                raw = raw.replace(small.text(), "")
            title, year = split_title_year(raw)

    if not title:
        return None

    starcast = first_text(card, '.artist font[color="green"]') or _labeled_green(
        card, "starcast"
    )
    length = first_text(card, '.duration font[color="green"]') or _labeled_green(
        card, "length"
    )

    return MovieSummary(
        title=title,
        url=href,
        year=year,
        quality=quality or default_quality,
        starcast=starcast or default_meta,
        length=length or default_meta,
        thumbnail=image_source(card),
    )


def parse_cards(
    root: DocumentNode,
    *,
    require_movie_link: bool = False,
    default_quality: str = "Unknown",
) -> list[MovieSummary]:
    movies: list[MovieSummary] = []
    for card in root.select(CARD_SELECTOR):
        movie = parse_card(card, default_quality=default_quality)
        if movie is None:
            continue
        if require_movie_link and "/movie" not in movie.url:
            continue
        movies.append(movie)
    return movies
