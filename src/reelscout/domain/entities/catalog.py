"""Domain entities for scraped catalog pages.

Pure value objects with no framework dependencies and no I/O.  Every entity is
produced fresh per request and never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class PageKind(str, Enum):
    """Kind of page handed to the extractor."""

    HOME = "home"
    CATEGORY = "category"
    MOVIE_DETAIL = "movie_detail"
    SERVER_LISTING = "server_listing"


@dataclass(frozen=True)
class SubCategory:
    """Link to a nested category listing."""

    title: str
    url: str
    thumbnail: str = ""


@dataclass(frozen=True)
class MovieSummary:
    """A movie card as shown on listing pages."""

    title: str
    url: str
    year: str = ""
    quality: str = "HD"
    starcast: str = "N/A"
    length: str = "N/A"
    thumbnail: str = ""


# Related movies on a detail page share the listing card shape.
RelatedMovie = MovieSummary


@dataclass(frozen=True)
class CategoryPage:
    """Result of extracting a category page.

    A page carries movies or subcategories, never both: when subcategories
    are present, ``movies`` is empty.
    """

    title: str
    source_url: str
    movies: list[MovieSummary] = field(default_factory=list)
    sub_categories: list[SubCategory] = field(default_factory=list)

    @property
    def has_sub_categories(self) -> bool:
        return bool(self.sub_categories)


@dataclass(frozen=True)
class DownloadLink:
    title: str
    url: str
    size: str = ""  # e.g. "1.2 GB"


@dataclass(frozen=True)
class MovieDetail:
    """Full metadata of a movie detail page."""

    title: str = ""
    starcast: str = ""
    genres: str = ""
    quality: str = ""
    length: str = ""
    release_date: str = ""
    story: str = ""
    thumbnail: str = ""
    breadcrumb: list[str] = field(default_factory=list)
    download_links: list[DownloadLink] = field(default_factory=list)
    related_movies: list[RelatedMovie] = field(default_factory=list)


@dataclass(frozen=True)
class ServerLink:
    """One download server offered on a download page."""

    title: str
    url: str
    server_number: str | None = None  # numeric string, drives sort order


@dataclass(frozen=True)
class FileInfo:
    name: str = ""
    size: str = ""


@dataclass(frozen=True)
class ServerListing:
    servers: list[ServerLink] = field(default_factory=list)
    file_info: FileInfo = field(default_factory=FileInfo)

    @property
    def total_servers(self) -> int:
        return len(self.servers)


@dataclass(frozen=True)
class HomeCategory:
    """A category block of the site's home page."""

    title: str
    url: str
    movies: list[MovieSummary] = field(default_factory=list)


@dataclass(frozen=True)
class HomePage:
    """Category blocks (``.update``) and plain category links (``.touch``)."""

    update_blocks: list[HomeCategory] = field(default_factory=list)
    category_links: list[HomeCategory] = field(default_factory=list)
