"""Port for turning fetched HTML into catalog entities."""

from __future__ import annotations

from typing import Protocol

from reelscout.domain.entities.catalog import (
    CategoryPage,
    HomeCategory,
    HomePage,
    MovieDetail,
    MovieSummary,
    ServerListing,
)


class PageExtractorPort(Protocol):
    """Pure HTML -> entity extraction.

    Never performs I/O and never raises for missing content.
    """

    def category(self, html: str, source_url: str = "") -> CategoryPage: ...

    def movie_detail(self, html: str) -> MovieDetail: ...

    def server_listing(self, html: str) -> ServerListing: ...

    def home(self, html: str) -> HomePage: ...

    def feed_movies(self, html: str) -> list[MovieSummary]: ...

    def update_block(self, html: str, category_filter: str) -> HomeCategory | None: ...
