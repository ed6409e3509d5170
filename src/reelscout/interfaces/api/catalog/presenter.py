"""Entity -> JSON payload conversion (camelCase keys)."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from reelscout.application.use_cases import (
    MovieDetailResponse,
    ServerListingResponse,
)
from reelscout.domain.entities import (
    CategoryPage,
    DownloadLink,
    FileInfo,
    HomeCategory,
    MovieSummary,
    ResolutionResult,
    ServerLink,
    SubCategory,
)


def scraped_at() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _movie(movie: MovieSummary) -> dict[str, Any]:
    return {
        "title": movie.title,
        "year": movie.year,
        "quality": movie.quality,
        "starcast": movie.starcast,
        "length": movie.length,
        "thumbnail": movie.thumbnail,
        "url": movie.url,
    }


def _sub_category(sub: SubCategory) -> dict[str, Any]:
    return {"title": sub.title, "url": sub.url, "thumbnail": sub.thumbnail}


def _download_link(link: DownloadLink) -> dict[str, Any]:
    return {"title": link.title, "url": link.url, "size": link.size}


def _server(server: ServerLink) -> dict[str, Any]:
    out: dict[str, Any] = {"title": server.title, "url": server.url}
    if server.server_number is not None:
        out["serverNumber"] = server.server_number
    return out


def _file_info(info: FileInfo) -> dict[str, Any]:
    return {"name": info.name, "size": info.size}


def category_payload(page: CategoryPage) -> dict[str, Any]:
    return {
        "success": True,
        "categoryTitle": page.title,
        "totalMovies": len(page.movies),
        "totalSubCategories": len(page.sub_categories),
        "movies": [_movie(m) for m in page.movies],
        "subCategories": [_sub_category(s) for s in page.sub_categories],
        "hasSubCategories": page.has_sub_categories,
        "sourceUrl": page.source_url,
        "scrapedAt": scraped_at(),
    }


def movie_payload(response: MovieDetailResponse) -> dict[str, Any]:
    detail = response.detail
    return {
        "success": True,
        "data": {
            "title": detail.title,
            "starcast": detail.starcast,
            "genres": detail.genres,
            "quality": detail.quality,
            "length": detail.length,
            "releaseDate": detail.release_date,
            "story": detail.story,
            "thumbnail": detail.thumbnail,
            "downloadLinks": [_download_link(d) for d in detail.download_links],
            "relatedMovies": [_movie(m) for m in detail.related_movies],
            "breadcrumb": list(detail.breadcrumb),
        },
        "sourceUrl": response.source_url,
        "scrapedAt": scraped_at(),
    }


def servers_payload(response: ServerListingResponse) -> dict[str, Any]:
    listing = response.listing
    return {
        "success": True,
        "servers": [_server(s) for s in listing.servers],
        "totalServers": listing.total_servers,
        "fileInfo": _file_info(listing.file_info),
        "sourceUrl": response.source_url,
        "scrapedAt": scraped_at(),
    }


def resolution_payload(result: ResolutionResult) -> dict[str, Any]:
    if result.link_expired:
        return {"success": False, "error": result.message, "isResolved": False}
    out: dict[str, Any] = {
        "success": True,
        "originalUrl": result.original_url,
        "resolvedUrl": result.resolved_url,
        "isResolved": result.is_resolved,
        "strategy": result.strategy,
    }
    if result.message:
        out["message"] = result.message
    out["scrapedAt"] = scraped_at()
    return out


def _home_category(category: HomeCategory) -> dict[str, Any]:
    return {
        "category": category.title,
        "categoryUrl": category.url,
        "movies": [
            {
                "title": m.title,
                "url": m.url,
                "quality": m.quality,
                "thumbnail": m.thumbnail,
            }
            for m in category.movies
        ],
    }


def home_feed_payload(categories: list[HomeCategory]) -> dict[str, Any]:
    return {
        "success": True,
        "totalCategories": len(categories),
        "data": [_home_category(c) for c in categories],
        "scrapedAt": scraped_at(),
    }


def home_category_payload(category: HomeCategory) -> dict[str, Any]:
    return {
        "success": True,
        "category": category.title,
        "totalMovies": len(category.movies),
        "movies": [
            {"title": m.title, "url": m.url, "quality": m.quality}
            for m in category.movies
        ],
        "scrapedAt": scraped_at(),
    }


def error_payload(error: str, message: str | None = None) -> dict[str, Any]:
    out: dict[str, Any] = {"success": False, "error": error}
    if message is not None:
        out["message"] = message
    return out
