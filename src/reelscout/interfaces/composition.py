"""Composition root: dependency injection via FastAPI lifespan."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, cast

import structlog
from fastapi import FastAPI

from reelscout.application.use_cases import (
    CategoryListingUseCase,
    HomeFeedUseCase,
    MovieDetailUseCase,
    ResolveLinkUseCase,
    ServerListingUseCase,
)
from reelscout.domain.entities import FetchOptions
from reelscout.infrastructure.common.urls import UrlNormalizer
from reelscout.infrastructure.config.schema import AppConfig
from reelscout.infrastructure.extraction.extractor import Extractor
from reelscout.infrastructure.http.fetcher import HttpxFetcher, create_http_client
from reelscout.infrastructure.resolution.resolver import LinkResolver
from reelscout.interfaces.app_state import AppState

log = structlog.get_logger(__name__)


def _fetch_options(config: AppConfig) -> FetchOptions:
    return FetchOptions(
        follow_redirects=True,
        max_redirects=config.http_max_redirects,
        timeout=config.http_timeout_seconds,
    )


def wire_use_cases(state: AppState) -> None:
    """Build the use cases from the infrastructure already on *state*."""
    config = state.config
    options = _fetch_options(config)

    state.category_uc = CategoryListingUseCase(
        state.fetcher, state.extractor, state.urls, options
    )
    state.movie_uc = MovieDetailUseCase(
        state.fetcher, state.extractor, state.urls, options
    )
    state.servers_uc = ServerListingUseCase(state.fetcher, state.extractor, options)
    state.resolve_uc = ResolveLinkUseCase(
        state.resolver,
        timeout_seconds=config.resolver_timeout_seconds,
        warning_seconds=config.resolver_warning_seconds,
    )
    state.home_feed_uc = HomeFeedUseCase(
        state.fetcher,
        state.extractor,
        state.urls,
        fetch_options=options,
        category_timeout_seconds=config.home_feed_category_timeout_seconds,
        max_concurrent=config.home_feed_max_concurrent,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan Hook: initialize and clean up all resources.

    Order matters:
        1. HTTP client (shared, cookie-less)
        2. URL normalizer, fetcher, extractor, resolver
        3. Use cases
    """
    state = cast(AppState, app.state)
    config = state.config
    options = _fetch_options(config)

    state.http_client = create_http_client()
    log.info("http_client_initialized", timeout=config.http_timeout_seconds)

    state.urls = UrlNormalizer(config.site_base_url)
    state.fetcher = HttpxFetcher(
        state.http_client,
        origin=config.site_base_url,
        default_options=options,
        user_agent=config.http_user_agent,
    )
    state.extractor = Extractor(state.urls, brand=config.site_brand)
    state.resolver = LinkResolver(
        state.fetcher,
        state.urls,
        signals=config.direct_link_signals,
        fetch_options=options,
    )
    wire_use_cases(state)
    log.info(
        "app_startup_complete",
        site=config.site_base_url,
        direct_link_signals=len(config.direct_link_signals),
    )

    try:
        yield
    finally:
        await state.http_client.aclose()
        log.info("http_client_closed")
        log.info("app_shutdown_complete")
