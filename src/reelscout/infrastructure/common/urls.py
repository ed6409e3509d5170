"""URL normalisation for the content site.

Resolves relative hrefs against the site origin and derives the alternate
canonical forms used for a single retry when a page fetch fails:

- categories may live with or without a ``/category/`` prefix;
- movie pages may live under ``/movie/`` or ``/movies/``.
"""

from __future__ import annotations

import re
from urllib.parse import urlparse

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")
_CATEGORY_MARKER = "/category/"
_MOVIE_SINGULAR = "/movie/"
_MOVIE_PLURAL = "/movies/"


class UrlNormalizer:
    """Origin-bound URL helpers.  Immutable after construction."""

    def __init__(self, origin: str) -> None:
        self._origin = origin.rstrip("/")

    @property
    def origin(self) -> str:
        return self._origin

    def absolute(self, href: str) -> str:
        """Make *href* absolute.

        Scheme-prefixed URLs are returned unchanged, anything else is
        prefixed with the origin.  An empty href stays empty.
        """
        href = href.strip()
        if not href:
            return ""
        if _SCHEME_RE.match(href):
            return href
        if href.startswith("//"):
            return f"https:{href}"
        if not href.startswith("/"):
            href = f"/{href}"
        return f"{self._origin}{href}"

    def category_alternate(self, url: str) -> str | None:
        """Alternate form of a category URL with a ``/category/`` prefix.

        Returns ``None`` when the URL already contains the marker.
        """
        if _CATEGORY_MARKER in url:
            return None
        path = url.replace(self._origin, "", 1).lstrip("/")
        return f"{self._origin}/category/{path}"

    def movie_variants(self, url: str) -> list[str]:
        """The URL itself followed by its singular/plural counterpart."""
        if _MOVIE_PLURAL in url:
            return [url, url.replace(_MOVIE_PLURAL, _MOVIE_SINGULAR, 1)]
        if _MOVIE_SINGULAR in url:
            return [url, url.replace(_MOVIE_SINGULAR, _MOVIE_PLURAL, 1)]
        return [url]

    def category_url_from_slug(self, slug: str) -> str:
        if slug.startswith("http"):
            return slug
        clean = re.sub(r"^/*(category/)?", "", slug)
        return f"{self._origin}/category/{clean}"

    def movie_url_from_slug(self, slug: str) -> str:
        """Build a movie URL; ``.html`` slugs live under ``/movie/``."""
        if slug.startswith("http"):
            return slug
        clean = re.sub(r"^/*(movies?/|category/)?", "", slug)
        path = _MOVIE_SINGULAR if ".html" in clean else _MOVIE_PLURAL
        return f"{self._origin}{path}{clean}"

    @staticmethod
    def last_path_segment(url: str) -> str:
        """Last non-empty path segment, without an ``.htm(l)`` extension."""
        path = urlparse(url).path if _SCHEME_RE.match(url) else url
        segments = [s for s in path.split("/") if s]
        if not segments:
            return ""
        return re.sub(r"\.html?$", "", segments[-1])

    def slug_from_url(self, url: str) -> str:
        """Path of a site URL without leading/trailing slashes."""
        if url.startswith(self._origin):
            url = url[len(self._origin) :]
        elif _SCHEME_RE.match(url):
            url = urlparse(url).path
        return url.strip("/")
