from .catalog import (
    CategoryPage,
    DownloadLink,
    FileInfo,
    HomeCategory,
    HomePage,
    MovieDetail,
    MovieSummary,
    PageKind,
    RelatedMovie,
    ServerLink,
    ServerListing,
    SubCategory,
)
from .resolution import (
    LINK_EXPIRED_MESSAGE,
    RESOLUTION_TIMEOUT_MESSAGE,
    FetchOptions,
    FetchResult,
    ResolutionResult,
    ResolutionStrategy,
)

__all__ = [
    "LINK_EXPIRED_MESSAGE",
    "RESOLUTION_TIMEOUT_MESSAGE",
    "CategoryPage",
    "DownloadLink",
    "FetchOptions",
    "FetchResult",
    "FileInfo",
    "HomeCategory",
    "HomePage",
    "MovieDetail",
    "MovieSummary",
    "PageKind",
    "RelatedMovie",
    "ResolutionResult",
    "ResolutionStrategy",
    "ServerLink",
    "ServerListing",
    "SubCategory",
]
