"""Tests for the catalog router (status codes and payload shape)."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from reelscout.application.use_cases import MovieDetailResponse, ServerListingResponse
from reelscout.domain.entities import (
    LINK_EXPIRED_MESSAGE,
    CategoryPage,
    DownloadLink,
    FileInfo,
    HomeCategory,
    MovieDetail,
    MovieSummary,
    ResolutionResult,
    ServerLink,
    ServerListing,
    SubCategory,
)
from reelscout.domain.exceptions import (
    MissingParameter,
    UpstreamHttpError,
    UpstreamTimeout,
)
from reelscout.interfaces.api.catalog import router

BASE = "https://www.filmyzilla13.com"


def _make_app() -> FastAPI:
    """Create a minimal FastAPI app with the catalog router."""
    app = FastAPI()
    app.include_router(router, prefix="/api/v1")

    app.state.category_uc = AsyncMock()
    app.state.movie_uc = AsyncMock()
    app.state.servers_uc = AsyncMock()
    app.state.resolve_uc = AsyncMock()
    app.state.home_feed_uc = AsyncMock()
    return app


@pytest.fixture()
def app() -> FastAPI:
    return _make_app()


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


# ---------------------------------------------------------------------------
# /category
# ---------------------------------------------------------------------------


class TestCategory:
    def test_success(self, app: FastAPI, client: TestClient) -> None:
        app.state.category_uc.execute.return_value = CategoryPage(
            title="Bollywood",
            source_url=f"{BASE}/category/1.html",
            movies=[MovieSummary(title="Jawan", url=f"{BASE}/movie/1.html")],
        )

        resp = client.get("/api/v1/category", params={"url": f"{BASE}/category/1.html"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["categoryTitle"] == "Bollywood"
        assert body["totalMovies"] == 1
        assert body["hasSubCategories"] is False
        assert body["movies"][0]["title"] == "Jawan"
        assert body["sourceUrl"] == f"{BASE}/category/1.html"
        assert body["scrapedAt"].endswith("Z")
        app.state.category_uc.execute.assert_awaited_once_with(
            f"{BASE}/category/1.html", slug=None
        )

    def test_sub_categories(self, app: FastAPI, client: TestClient) -> None:
        app.state.category_uc.execute.return_value = CategoryPage(
            title="TV",
            source_url="u",
            sub_categories=[SubCategory(title="Friends", url="s")],
        )

        body = client.get("/api/v1/category", params={"slug": "tv"}).json()

        assert body["hasSubCategories"] is True
        assert body["totalSubCategories"] == 1
        assert body["movies"] == []
        assert body["subCategories"][0] == {
            "title": "Friends",
            "url": "s",
            "thumbnail": "",
        }

    def test_missing_parameter(self, app: FastAPI, client: TestClient) -> None:
        app.state.category_uc.execute.side_effect = MissingParameter(
            "url", "Please provide a url or slug parameter"
        )

        resp = client.get("/api/v1/category")

        assert resp.status_code == 400
        assert resp.json() == {
            "success": False,
            "error": "Please provide a url or slug parameter",
        }

    def test_upstream_failure(self, app: FastAPI, client: TestClient) -> None:
        app.state.category_uc.execute.side_effect = UpstreamHttpError("u", 404)

        resp = client.get("/api/v1/category", params={"url": "u"})

        assert resp.status_code == 500
        assert resp.json() == {
            "success": False,
            "error": "Failed to scrape category data",
            "message": "Request failed with status code 404",
        }


# ---------------------------------------------------------------------------
# /movie and /servers
# ---------------------------------------------------------------------------


class TestMovie:
    def test_success(self, app: FastAPI, client: TestClient) -> None:
        app.state.movie_uc.execute.return_value = MovieDetailResponse(
            detail=MovieDetail(
                title="Jawan",
                release_date="2023",
                story="Story",
                download_links=[DownloadLink("720p", "d", "1 GB")],
                breadcrumb=["Bollywood", "Jawan"],
            ),
            source_url=f"{BASE}/movies/1.html",
        )

        resp = client.get("/api/v1/movie", params={"slug": "1.html"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["data"]["title"] == "Jawan"
        assert body["data"]["releaseDate"] == "2023"
        assert body["data"]["story"] == "Story"
        assert body["data"]["downloadLinks"] == [
            {"title": "720p", "url": "d", "size": "1 GB"}
        ]
        assert body["data"]["breadcrumb"] == ["Bollywood", "Jawan"]
        assert body["sourceUrl"] == f"{BASE}/movies/1.html"
        app.state.movie_uc.execute.assert_awaited_once_with(None, slug="1.html")

    def test_upstream_failure(self, app: FastAPI, client: TestClient) -> None:
        app.state.movie_uc.execute.side_effect = UpstreamTimeout(
            "u", "timeout of 15s exceeded"
        )

        resp = client.get("/api/v1/movie", params={"url": "u"})

        assert resp.status_code == 500
        assert resp.json()["error"] == "Failed to scrape movie details"
        assert resp.json()["message"] == "timeout of 15s exceeded"


class TestServers:
    def test_success(self, app: FastAPI, client: TestClient) -> None:
        app.state.servers_uc.execute.return_value = ServerListingResponse(
            listing=ServerListing(
                servers=[ServerLink("Server 1", "a", "1"), ServerLink("Fast", "b")],
                file_info=FileInfo(name="x.mkv", size="1 GB"),
            ),
            source_url="u",
        )

        body = client.get("/api/v1/servers", params={"url": "u"}).json()

        assert body["totalServers"] == 2
        assert body["servers"] == [
            {"title": "Server 1", "url": "a", "serverNumber": "1"},
            {"title": "Fast", "url": "b"},
        ]
        assert body["fileInfo"] == {"name": "x.mkv", "size": "1 GB"}

    def test_missing_url(self, app: FastAPI, client: TestClient) -> None:
        app.state.servers_uc.execute.side_effect = MissingParameter(
            "url", "Server URL is required"
        )

        resp = client.get("/api/v1/servers")

        assert resp.status_code == 400
        assert resp.json()["error"] == "Server URL is required"


# ---------------------------------------------------------------------------
# /resolve
# ---------------------------------------------------------------------------


class TestResolve:
    def test_resolved(self, app: FastAPI, client: TestClient) -> None:
        app.state.resolve_uc.execute.return_value = ResolutionResult(
            original_url="u",
            resolved_url="https://cdn.example.net/v.mp4",
            is_resolved=True,
            strategy="scraped",
        )

        body = client.get("/api/v1/resolve", params={"url": "u"}).json()

        assert body["success"] is True
        assert body["resolvedUrl"] == "https://cdn.example.net/v.mp4"
        assert body["isResolved"] is True
        assert body["strategy"] == "scraped"
        assert "message" not in body

    def test_expired_link_is_200(self, app: FastAPI, client: TestClient) -> None:
        app.state.resolve_uc.execute.return_value = ResolutionResult.unresolved(
            "u", LINK_EXPIRED_MESSAGE
        )

        resp = client.get("/api/v1/resolve", params={"url": "u"})

        assert resp.status_code == 200
        assert resp.json() == {
            "success": False,
            "error": LINK_EXPIRED_MESSAGE,
            "isResolved": False,
        }

    def test_upstream_failure(self, app: FastAPI, client: TestClient) -> None:
        app.state.resolve_uc.execute.side_effect = UpstreamHttpError("u", 503)

        resp = client.get("/api/v1/resolve", params={"url": "u"})

        assert resp.status_code == 500
        assert resp.json()["error"] == "Failed to resolve video link"


# ---------------------------------------------------------------------------
# /movies and /movies/{category}
# ---------------------------------------------------------------------------


class TestHomeFeed:
    def test_feed(self, app: FastAPI, client: TestClient) -> None:
        app.state.home_feed_uc.execute.return_value = [
            HomeCategory(
                title="Bollywood",
                url="c",
                movies=[MovieSummary(title="Jawan", url="m", thumbnail="t")],
            ),
            HomeCategory(title="TV Shows", url="tv"),
        ]

        body = client.get("/api/v1/movies").json()

        assert body["totalCategories"] == 2
        assert body["data"][0] == {
            "category": "Bollywood",
            "categoryUrl": "c",
            "movies": [
                {"title": "Jawan", "url": "m", "quality": "HD", "thumbnail": "t"}
            ],
        }
        assert body["data"][1]["movies"] == []

    def test_feed_failure(self, app: FastAPI, client: TestClient) -> None:
        app.state.home_feed_uc.execute.side_effect = UpstreamTimeout("h", "t")

        resp = client.get("/api/v1/movies")

        assert resp.status_code == 500
        assert resp.json()["error"] == "Failed to scrape data"

    def test_category_found(self, app: FastAPI, client: TestClient) -> None:
        app.state.home_feed_uc.category.return_value = HomeCategory(
            title="Bollywood",
            url="c",
            movies=[MovieSummary(title="Jawan", url="m", quality="HDRip")],
        )

        body = client.get("/api/v1/movies/bollywood").json()

        assert body["category"] == "Bollywood"
        assert body["totalMovies"] == 1
        assert body["movies"] == [{"title": "Jawan", "url": "m", "quality": "HDRip"}]
        app.state.home_feed_uc.category.assert_awaited_once_with("bollywood")

    def test_category_not_found(self, app: FastAPI, client: TestClient) -> None:
        app.state.home_feed_uc.category.return_value = None

        resp = client.get("/api/v1/movies/anime")

        assert resp.status_code == 404
        assert resp.json() == {"success": False, "error": "Category not found"}
