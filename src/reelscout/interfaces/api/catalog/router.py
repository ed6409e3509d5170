"""Catalog endpoints: category, movie, servers, resolve and home feed.

Status conventions:
    400  a required parameter is missing
    200  success, including degraded results (empty lists, unresolved link)
    500  the upstream page could not be fetched, alternates included
"""

from __future__ import annotations

from typing import Any, cast

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from reelscout.domain.exceptions import MissingParameter, UpstreamFetchFailure
from reelscout.interfaces.api.catalog import presenter
from reelscout.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(tags=["catalog"])


def _state(request: Request) -> AppState:
    return cast(AppState, request.app.state)


def _bad_request(exc: MissingParameter) -> JSONResponse:
    log.info("request_missing_parameter", parameter=exc.parameter)
    return JSONResponse(presenter.error_payload(str(exc)), status_code=400)


def _upstream_failed(error: str, exc: UpstreamFetchFailure) -> JSONResponse:
    log.error("upstream_fetch_failed", url=exc.url, error=str(exc))
    return JSONResponse(
        presenter.error_payload(error, str(exc)),
        status_code=500,
    )


@router.get("/category")
async def get_category(
    request: Request,
    url: str | None = None,
    slug: str | None = None,
) -> Any:
    """Movies or subcategories of a category page."""
    try:
        page = await _state(request).category_uc.execute(url, slug=slug)
    except MissingParameter as exc:
        return _bad_request(exc)
    except UpstreamFetchFailure as exc:
        return _upstream_failed("Failed to scrape category data", exc)
    return presenter.category_payload(page)


@router.get("/movie")
async def get_movie(
    request: Request,
    url: str | None = None,
    slug: str | None = None,
) -> Any:
    """Detail metadata, download links and related movies of a movie page."""
    try:
        response = await _state(request).movie_uc.execute(url, slug=slug)
    except MissingParameter as exc:
        return _bad_request(exc)
    except UpstreamFetchFailure as exc:
        return _upstream_failed("Failed to scrape movie details", exc)
    return presenter.movie_payload(response)


@router.get("/servers")
async def get_servers(request: Request, url: str | None = None) -> Any:
    """Download servers offered on a download page, sorted by number."""
    try:
        response = await _state(request).servers_uc.execute(url)
    except MissingParameter as exc:
        return _bad_request(exc)
    except UpstreamFetchFailure as exc:
        return _upstream_failed("Failed to scrape download servers", exc)
    return presenter.servers_payload(response)


@router.get("/resolve")
async def resolve_link(request: Request, url: str | None = None) -> Any:
    """Resolve a download/server URL to a direct media URL.

    An expired link (upstream 404) is reported with status 200 and
    ``success: false``.
    """
    try:
        result = await _state(request).resolve_uc.execute(url)
    except MissingParameter as exc:
        return _bad_request(exc)
    except UpstreamFetchFailure as exc:
        return _upstream_failed("Failed to resolve video link", exc)
    return presenter.resolution_payload(result)


@router.get("/movies")
async def get_home_feed(request: Request) -> Any:
    """Recently updated categories with movie cards, plus category links."""
    try:
        categories = await _state(request).home_feed_uc.execute()
    except UpstreamFetchFailure as exc:
        return _upstream_failed("Failed to scrape data", exc)
    return presenter.home_feed_payload(categories)


@router.get("/movies/{category}")
async def get_home_category(request: Request, category: str) -> Any:
    """Movies listed in the home page block matching *category*."""
    try:
        block = await _state(request).home_feed_uc.category(category)
    except MissingParameter as exc:
        return _bad_request(exc)
    except UpstreamFetchFailure as exc:
        return _upstream_failed("Failed to scrape category data", exc)
    if block is None:
        return JSONResponse(
            presenter.error_payload("Category not found"),
            status_code=404,
        )
    return presenter.home_category_payload(block)
