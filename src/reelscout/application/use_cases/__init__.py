from .catalog import (
    CategoryListingUseCase,
    MovieDetailResponse,
    MovieDetailUseCase,
    ServerListingResponse,
    ServerListingUseCase,
)
from .home_feed import HomeFeedUseCase
from .resolve_link import ResolveLinkUseCase

__all__ = [
    "CategoryListingUseCase",
    "HomeFeedUseCase",
    "MovieDetailResponse",
    "MovieDetailUseCase",
    "ResolveLinkUseCase",
    "ServerListingResponse",
    "ServerListingUseCase",
]
