"""Catalog use cases: category listing, movie detail and server listing.

Each one fetches a single page and hands the HTML to the extractor.  A
failed fetch is retried once with the alternate canonical URL form where
the site has one; if that fails too, the *original* error propagates.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from reelscout.domain.entities import (
    CategoryPage,
    FetchOptions,
    MovieDetail,
    ServerListing,
)
from reelscout.domain.exceptions import (
    MissingParameter,
    UpstreamFetchFailure,
    UpstreamNetworkError,
)
from reelscout.domain.ports import FetcherPort, PageExtractorPort, UrlNormalizerPort

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class MovieDetailResponse:
    detail: MovieDetail
    source_url: str  # URL variant that was actually fetched


@dataclass(frozen=True)
class ServerListingResponse:
    listing: ServerListing
    source_url: str


def _require(url: str | None, slug: str | None) -> None:
    if not (url or slug):
        raise MissingParameter("url", "Please provide a url or slug parameter")


class CategoryListingUseCase:
    """Lists the movies (or subcategories) of a category page."""

    def __init__(
        self,
        fetcher: FetcherPort,
        extractor: PageExtractorPort,
        urls: UrlNormalizerPort,
        fetch_options: FetchOptions | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._extractor = extractor
        self._urls = urls
        self._options = fetch_options

    async def execute(
        self,
        url: str | None = None,
        *,
        slug: str | None = None,
    ) -> CategoryPage:
        _require(url, slug)
        target = url or self._urls.category_url_from_slug(slug or "")

        try:
            result = await self._fetcher.fetch(target, options=self._options)
        except UpstreamFetchFailure as exc:
            alternate = self._urls.category_alternate(target)
            if alternate is None:
                raise
            log.info("category_retry_alternate", url=target, alternate=alternate)
            try:
                result = await self._fetcher.fetch(alternate, options=self._options)
            except UpstreamFetchFailure:
                log.warning("category_alternate_failed", url=alternate)
                raise exc from None
            target = alternate

        page = self._extractor.category(result.body or "", source_url=target)
        log.info(
            "category_extracted",
            url=target,
            movies=len(page.movies),
            sub_categories=len(page.sub_categories),
        )
        return page


class MovieDetailUseCase:
    """Fetches a movie page, trying the ``/movie/`` <-> ``/movies/`` variant."""

    def __init__(
        self,
        fetcher: FetcherPort,
        extractor: PageExtractorPort,
        urls: UrlNormalizerPort,
        fetch_options: FetchOptions | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._extractor = extractor
        self._urls = urls
        self._options = fetch_options

    async def execute(
        self,
        url: str | None = None,
        *,
        slug: str | None = None,
    ) -> MovieDetailResponse:
        _require(url, slug)
        target = url or self._urls.movie_url_from_slug(slug or "")

        first_error: UpstreamFetchFailure | None = None
        for candidate in self._urls.movie_variants(target):
            try:
                result = await self._fetcher.fetch(candidate, options=self._options)
            except UpstreamFetchFailure as exc:
                log.info("movie_variant_failed", url=candidate, error=str(exc))
                first_error = first_error or exc
                continue
            detail = self._extractor.movie_detail(result.body or "")
            log.info(
                "movie_extracted",
                url=candidate,
                download_links=len(detail.download_links),
                related=len(detail.related_movies),
            )
            return MovieDetailResponse(detail=detail, source_url=candidate)

        if first_error is None:
            raise UpstreamNetworkError(target, "No movie URL variants to fetch")
        raise first_error


class ServerListingUseCase:
    """Lists the download servers offered on a download page."""

    def __init__(
        self,
        fetcher: FetcherPort,
        extractor: PageExtractorPort,
        fetch_options: FetchOptions | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._extractor = extractor
        self._options = fetch_options

    async def execute(self, url: str | None) -> ServerListingResponse:
        if not url:
            raise MissingParameter("url", "Server URL is required")
        result = await self._fetcher.fetch(url, options=self._options)
        listing = self._extractor.server_listing(result.body or "")
        log.info("servers_extracted", url=url, servers=listing.total_servers)
        return ServerListingResponse(listing=listing, source_url=url)
