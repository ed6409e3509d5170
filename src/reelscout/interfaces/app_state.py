"""Application state container for FastAPI dependency injection."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
from starlette.datastructures import State

from reelscout.infrastructure.config import AppConfig

if TYPE_CHECKING:
    from reelscout.application.use_cases import (
        CategoryListingUseCase,
        HomeFeedUseCase,
        MovieDetailUseCase,
        ResolveLinkUseCase,
        ServerListingUseCase,
    )
    from reelscout.domain.ports import FetcherPort, PageExtractorPort
    from reelscout.infrastructure.common.urls import UrlNormalizer
    from reelscout.infrastructure.resolution.resolver import LinkResolver


class AppState(State):
    """FastAPI application state with all DI resources.

    Lifecycle managed by composition.py::lifespan().
    """

    # Configuration
    config: AppConfig

    # Infrastructure
    http_client: httpx.AsyncClient
    urls: UrlNormalizer
    fetcher: FetcherPort
    extractor: PageExtractorPort
    resolver: LinkResolver

    # Use cases
    category_uc: CategoryListingUseCase
    movie_uc: MovieDetailUseCase
    servers_uc: ServerListingUseCase
    resolve_uc: ResolveLinkUseCase
    home_feed_uc: HomeFeedUseCase
