"""Extractor facade: raw HTML -> domain entities.

Pure and network-free.  Strategy selection happens on raw hrefs; URLs are
made absolute afterwards and result sets are de-duplicated by absolute
URL, first occurrence wins.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, TypeVar

import structlog

from reelscout.domain.entities.catalog import (
    CategoryPage,
    DownloadLink,
    HomeCategory,
    HomePage,
    MovieDetail,
    MovieSummary,
    PageKind,
    ServerListing,
    SubCategory,
)
from reelscout.domain.ports.document import DocumentNode
from reelscout.infrastructure.common.urls import UrlNormalizer
from reelscout.infrastructure.extraction import category, home, movie, servers
from reelscout.infrastructure.extraction.cards import parse_cards
from reelscout.infrastructure.extraction.chain import dedupe_by, run_chain
from reelscout.infrastructure.html.soup_document import parse_document

log = structlog.get_logger(__name__)

_Linked = TypeVar("_Linked", MovieSummary, SubCategory, DownloadLink, HomeCategory)


class Extractor:
    """Turns HTML of a given page kind into typed entities."""

    def __init__(self, urls: UrlNormalizer, brand: str = "") -> None:
        self._urls = urls
        self._brand = brand

    def extract(self, html: str, page_kind: PageKind, source_url: str = "") -> Any:
        root = parse_document(html)
        if page_kind is PageKind.CATEGORY:
            return self._category(root, source_url)
        if page_kind is PageKind.MOVIE_DETAIL:
            return self._movie_detail(root)
        if page_kind is PageKind.SERVER_LISTING:
            return self._server_listing(root)
        if page_kind is PageKind.HOME:
            return self._home(root)
        raise ValueError(f"Unsupported page kind: {page_kind!r}")

    # ------------------------------------------------------------------
    # Typed entry points
    # ------------------------------------------------------------------

    def category(self, html: str, source_url: str = "") -> CategoryPage:
        return self._category(parse_document(html), source_url)

    def movie_detail(self, html: str) -> MovieDetail:
        return self._movie_detail(parse_document(html))

    def server_listing(self, html: str) -> ServerListing:
        return self._server_listing(parse_document(html))

    def home(self, html: str) -> HomePage:
        return self._home(parse_document(html))

    def feed_movies(self, html: str) -> list[MovieSummary]:
        """Media cards of a category page as shown in the home feed."""
        cards = parse_cards(parse_document(html), default_quality="HD")
        return self._normalize(cards)

    def update_block(self, html: str, category_filter: str) -> HomeCategory | None:
        block = home.update_block(parse_document(html), category_filter)
        if block is None:
            return None
        return replace(
            self._absolute(block),
            movies=self._normalize(block.movies),
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _absolute(self, item: _Linked) -> _Linked:
        changes: dict[str, str] = {"url": self._urls.absolute(item.url)}
        thumbnail = getattr(item, "thumbnail", None)
        if thumbnail is not None:
            changes["thumbnail"] = self._urls.absolute(thumbnail)
        return replace(item, **changes)

    def _normalize(self, items: list[_Linked]) -> list[_Linked]:
        return dedupe_by([self._absolute(i) for i in items], key=lambda i: i.url)

    def _category(self, root: DocumentNode, source_url: str) -> CategoryPage:
        title = category.category_title(root, source_url, self._brand)
        subs = category.sub_categories(root)
        if subs:
            log.debug("category_has_sub_categories", count=len(subs))
            return CategoryPage(
                title=title,
                source_url=source_url,
                sub_categories=self._normalize(subs),
            )
        result = run_chain(root, category.MOVIE_STRATEGIES, chain="category")
        return CategoryPage(
            title=title,
            source_url=source_url,
            movies=self._normalize(result.items),
        )

    def _movie_detail(self, root: DocumentNode) -> MovieDetail:
        detail = movie.movie_detail(root)
        return replace(
            detail,
            thumbnail=self._urls.absolute(detail.thumbnail),
            download_links=self._normalize(detail.download_links),
            related_movies=self._normalize(detail.related_movies),
        )

    def _server_listing(self, root: DocumentNode) -> ServerListing:
        result = run_chain(root, servers.SERVER_STRATEGIES, chain="servers")
        links = dedupe_by(
            [replace(s, url=self._urls.absolute(s.url)) for s in result.items],
            key=lambda s: s.url,
        )
        return ServerListing(
            servers=servers.sort_servers(links),
            file_info=servers.file_info(root),
        )

    def _home(self, root: DocumentNode) -> HomePage:
        page = home.home_page(root)
        return HomePage(
            update_blocks=self._normalize(page.update_blocks),
            category_links=self._normalize(page.category_links),
        )
