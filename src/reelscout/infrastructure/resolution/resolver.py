"""Link resolver: download/server page URL -> direct media URL.

Flow::

    url is direct?  -> fast-path (no network)
    fetch server page (404 -> link expired)
    for each candidate (button, alternates, anchor scan):
        follow redirects with stream_only, forwarding page cookies
        final URL direct? -> scraped
    otherwise       -> fallback

Candidate failures are logged and skipped; only a failure to fetch the
server page itself propagates.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass

import structlog

from reelscout.domain.entities.resolution import (
    LINK_EXPIRED_MESSAGE,
    FetchOptions,
    ResolutionResult,
)
from reelscout.domain.exceptions import UpstreamFetchFailure, UpstreamHttpError
from reelscout.domain.ports.document import DocumentNode
from reelscout.domain.ports.fetcher import FetcherPort
from reelscout.infrastructure.common.urls import UrlNormalizer
from reelscout.infrastructure.http.fetcher import cookie_header
from reelscout.infrastructure.html.soup_document import parse_document
from reelscout.infrastructure.resolution.signals import (
    DEFAULT_DIRECT_LINK_SIGNALS,
    is_direct_link,
    match_signal,
)

log = structlog.get_logger(__name__)

_ALTERNATE_HREF_SELECTORS = (
    'a[href*="getfile"]',
    'a[href*="downloadfile"]',
    'a[href*="/downloads/"]',
)
_ALTERNATE_TEXTS = ("start download now", "download now", "click to download")


@dataclass(frozen=True)
class Candidate:
    strategy: str
    href: str


def _button_candidates(root: DocumentNode) -> list[Candidate]:
    button = root.select_one("a.newdl[href]")
    if button is None:
        return []
    return [Candidate("newdl_button", button.attr("href").strip())]


def _alternate_candidates(root: DocumentNode) -> list[Candidate]:
    out: list[Candidate] = []
    for selector in _ALTERNATE_HREF_SELECTORS:
        anchor = root.select_one(selector)
        if anchor is not None:
            out.append(Candidate(selector, anchor.attr("href").strip()))
    anchors = root.select("a[href]")
    for phrase in _ALTERNATE_TEXTS:
        for anchor in anchors:
            if phrase in anchor.text().lower():
                out.append(Candidate(f"text:{phrase}", anchor.attr("href").strip()))
                break
    return out


CANDIDATE_STRATEGIES: tuple[Callable[[DocumentNode], list[Candidate]], ...] = (
    _button_candidates,
    _alternate_candidates,
)


class LinkResolver:
    """Resolves indirect download links without downloading the payload."""

    def __init__(
        self,
        fetcher: FetcherPort,
        urls: UrlNormalizer,
        *,
        signals: Mapping[str, str] | None = None,
        fetch_options: FetchOptions | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._urls = urls
        self._signals = dict(signals or DEFAULT_DIRECT_LINK_SIGNALS)
        self._page_options = fetch_options or FetchOptions()
        self._follow_options = FetchOptions(
            follow_redirects=True,
            max_redirects=self._page_options.max_redirects,
            timeout=self._page_options.timeout,
            stream_only=True,
        )

    def is_direct_link(self, url: str) -> bool:
        return is_direct_link(url, self._signals)

    async def resolve(self, url: str) -> ResolutionResult:
        if self.is_direct_link(url):
            log.info(
                "resolve_fast_path",
                url=url,
                signal=match_signal(url, self._signals),
            )
            return ResolutionResult.fast_path(url)

        try:
            page = await self._fetcher.fetch(url, options=self._page_options)
        except UpstreamHttpError as exc:
            if exc.status_code == 404:
                log.info("resolve_link_expired", url=url)
                return ResolutionResult.unresolved(url, LINK_EXPIRED_MESSAGE)
            raise

        headers = {"Referer": url}
        cookies = cookie_header(page.cookies)
        if cookies:
            headers["Cookie"] = cookies

        root = parse_document(page.body or "")
        tried: set[str] = set()
        for strategy in CANDIDATE_STRATEGIES:
            for candidate in strategy(root):
                target = self._urls.absolute(candidate.href)
                if not target or target in tried:
                    continue
                tried.add(target)
                final_url = await self._follow(candidate, target, headers)
                if final_url and self.is_direct_link(final_url):
                    log.info(
                        "resolve_scraped",
                        url=url,
                        candidate=candidate.strategy,
                        resolved_url=final_url,
                    )
                    return ResolutionResult(
                        original_url=url,
                        resolved_url=final_url,
                        is_resolved=True,
                        strategy="scraped",
                    )

        direct = self._scan_anchors(root)
        if direct:
            log.info(
                "resolve_scraped",
                url=url,
                candidate="anchor_scan",
                resolved_url=direct,
            )
            return ResolutionResult(
                original_url=url,
                resolved_url=direct,
                is_resolved=True,
                strategy="scraped",
            )

        log.info("resolve_fallback", url=url, candidates_tried=len(tried))
        return ResolutionResult.unresolved(url)

    async def _follow(
        self,
        candidate: Candidate,
        target: str,
        headers: Mapping[str, str],
    ) -> str | None:
        try:
            result = await self._fetcher.fetch(
                target, headers=headers, options=self._follow_options
            )
        except UpstreamFetchFailure as exc:
            log.warning(
                "resolve_candidate_failed",
                candidate=candidate.strategy,
                url=target,
                error=str(exc),
            )
            return None
        return result.final_url

    def _scan_anchors(self, root: DocumentNode) -> str:
        for anchor in root.select("a[href]"):
            href = anchor.attr("href").strip()
            if self.is_direct_link(href):
                return self._urls.absolute(href)
        return ""
