"""Home feed: recently updated categories with their movie cards."""

from __future__ import annotations

import asyncio
from dataclasses import replace

import structlog

from reelscout.domain.entities import FetchOptions, HomeCategory
from reelscout.domain.exceptions import MissingParameter, UpstreamFetchFailure
from reelscout.domain.ports import FetcherPort, PageExtractorPort, UrlNormalizerPort

log = structlog.get_logger(__name__)


class HomeFeedUseCase:
    """Builds the home feed.

    Flow:
        1. Fetch the home page, extract ``.update`` blocks and ``.touch`` links
        2. Fetch every update block's category page in parallel
           (bounded by a semaphore, each under its own timeout)
        3. Drop categories that failed, timed out or have no movies
        4. Append the plain category links (without movies)
    """

    def __init__(
        self,
        fetcher: FetcherPort,
        extractor: PageExtractorPort,
        urls: UrlNormalizerPort,
        *,
        fetch_options: FetchOptions | None = None,
        category_timeout_seconds: float = 5.0,
        max_concurrent: int = 10,
    ) -> None:
        self._fetcher = fetcher
        self._extractor = extractor
        self._urls = urls
        self._options = fetch_options
        self._category_timeout = category_timeout_seconds
        self._max_concurrent = max_concurrent
        base = fetch_options or FetchOptions()
        self._category_options = replace(base, timeout=category_timeout_seconds)

    @property
    def home_url(self) -> str:
        return f"{self._urls.origin}/"

    async def execute(self) -> list[HomeCategory]:
        result = await self._fetcher.fetch(self.home_url, options=self._options)
        page = self._extractor.home(result.body or "")

        populated = await self._populate(page.update_blocks)
        feed = [*populated, *page.category_links]
        log.info(
            "home_feed_built",
            update_blocks=len(page.update_blocks),
            populated=len(populated),
            category_links=len(page.category_links),
        )
        return feed

    async def category(self, category_filter: str) -> HomeCategory | None:
        """Movies of the first update block whose title contains the filter."""
        if not category_filter.strip():
            raise MissingParameter("category", "Category filter is required")
        result = await self._fetcher.fetch(self.home_url, options=self._options)
        block = self._extractor.update_block(result.body or "", category_filter)
        if block is None:
            log.info("home_category_not_found", category=category_filter)
        return block

    async def _populate(self, blocks: list[HomeCategory]) -> list[HomeCategory]:
        """Fetch category pages in parallel with bounded concurrency."""
        semaphore = asyncio.Semaphore(self._max_concurrent)

        async def _fetch_one(block: HomeCategory) -> HomeCategory | None:
            async with semaphore:
                try:
                    return await asyncio.wait_for(
                        self._fetch_category(block),
                        timeout=self._category_timeout,
                    )
                except TimeoutError:
                    log.warning(
                        "home_category_timeout",
                        url=block.url,
                        timeout=self._category_timeout,
                    )
                except UpstreamFetchFailure as exc:
                    log.warning(
                        "home_category_failed",
                        url=block.url,
                        error=str(exc),
                    )
                return None

        results = await asyncio.gather(*(_fetch_one(b) for b in blocks))
        return [r for r in results if r is not None and r.movies]

    async def _fetch_category(self, block: HomeCategory) -> HomeCategory:
        result = await self._fetcher.fetch(block.url, options=self._category_options)
        movies = self._extractor.feed_movies(result.body or "")
        return replace(block, movies=movies)
