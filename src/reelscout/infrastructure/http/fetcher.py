"""httpx-backed implementation of ``FetcherPort``.

Redirects are followed manually, one hop at a time, so that the
per-call ``max_redirects`` limit holds and ``Set-Cookie`` values from
intermediate hops can be forwarded.  The client itself never stores
cookies: its jar rejects everything, cookies only travel as explicit
``Cookie`` headers.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from http.cookiejar import CookieJar, DefaultCookiePolicy
from urllib.parse import urljoin

import httpx
import structlog

from reelscout.domain.entities.resolution import FetchOptions, FetchResult
from reelscout.domain.exceptions import (
    UpstreamHttpError,
    UpstreamNetworkError,
    UpstreamTimeout,
)

log = structlog.get_logger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/121.0.0.0 Safari/537.36"
)

DEFAULT_BROWSER_HEADERS = {
    "User-Agent": DEFAULT_USER_AGENT,
    "Accept": (
        "text/html,application/xhtml+xml,application/xml;q=0.9,"
        "image/avif,image/webp,*/*;q=0.8"
    ),
    "Accept-Language": "en-US,en;q=0.5",
}

_REDIRECT_STATUSES = frozenset({301, 302, 303, 307, 308})


def create_http_client() -> httpx.AsyncClient:
    """Shared client without cookie persistence or automatic redirects."""
    jar = CookieJar(policy=DefaultCookiePolicy(allowed_domains=[]))
    return httpx.AsyncClient(cookies=jar, follow_redirects=False)


def cookie_header(set_cookies: Iterable[str]) -> str:
    """Turn raw ``Set-Cookie`` values into a ``Cookie`` header value.

    Only the leading ``name=value`` pair of each value is kept; attributes
    such as ``Path`` or ``Expires`` are dropped.
    """
    pairs: list[str] = []
    for raw in set_cookies:
        pair = raw.split(";", 1)[0].strip()
        if "=" in pair:
            pairs.append(pair)
    return "; ".join(pairs)


def _merge_cookie(existing: str | None, extra: str) -> str:
    if not existing:
        return extra
    if not extra:
        return existing
    return f"{existing}; {extra}"


class HttpxFetcher:
    """Performs GET requests with browser-like headers.

    Args:
        client: Shared ``httpx.AsyncClient`` (see ``create_http_client``).
        origin: Content site origin, sent as the default ``Referer``.
        default_options: Options used when a call passes none.
        user_agent: Browser User-Agent sent with every request.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        origin: str,
        default_options: FetchOptions | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._client = client
        self._user_agent = user_agent
        self._referer = origin.rstrip("/") + "/"
        self._default_options = default_options or FetchOptions()

    @property
    def default_options(self) -> FetchOptions:
        return self._default_options

    def _request_headers(self, headers: Mapping[str, str] | None) -> dict[str, str]:
        merged = {
            **DEFAULT_BROWSER_HEADERS,
            "User-Agent": self._user_agent,
            "Referer": self._referer,
        }
        if headers:
            merged.update(headers)
        return merged

    async def fetch(
        self,
        url: str,
        headers: Mapping[str, str] | None = None,
        options: FetchOptions | None = None,
    ) -> FetchResult:
        opts = options or self._default_options
        request_headers = self._request_headers(headers)
        cookies: list[str] = []
        current = url

        try:
            for _hop in range(opts.max_redirects + 1):
                request = self._client.build_request(
                    "GET",
                    current,
                    headers=request_headers,
                    timeout=opts.timeout,
                )
                response = await self._client.send(
                    request, stream=True, follow_redirects=False
                )
                try:
                    hop_cookies = response.headers.get_list("set-cookie")
                    cookies.extend(hop_cookies)

                    location = response.headers.get("location")
                    if (
                        opts.follow_redirects
                        and response.status_code in _REDIRECT_STATUSES
                        and location
                    ):
                        current = urljoin(current, location)
                        if hop_cookies:
                            request_headers["Cookie"] = _merge_cookie(
                                request_headers.get("Cookie"),
                                cookie_header(hop_cookies),
                            )
                        continue

                    if response.status_code >= 400:
                        log.warning(
                            "fetch_http_error",
                            url=current,
                            status=response.status_code,
                        )
                        raise UpstreamHttpError(current, response.status_code)

                    body: str | None = None
                    if not opts.stream_only:
                        await response.aread()
                        body = response.text

                    return FetchResult(
                        final_url=str(response.url),
                        status_code=response.status_code,
                        body=body,
                        cookies=tuple(cookies),
                        headers=dict(response.headers),
                    )
                finally:
                    await response.aclose()
        except httpx.TimeoutException as exc:
            log.warning("fetch_timeout", url=current, timeout=opts.timeout)
            raise UpstreamTimeout(
                current, f"timeout of {opts.timeout:g}s exceeded"
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            log.warning("fetch_network_error", url=current, error=str(exc))
            raise UpstreamNetworkError(current, str(exc) or type(exc).__name__) from exc

        log.warning("fetch_too_many_redirects", url=url, limit=opts.max_redirects)
        raise UpstreamNetworkError(
            url, f"Maximum number of redirects exceeded ({opts.max_redirects})"
        )
