"""Shared test fixtures for the reelscout test suite."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

import pytest

from reelscout.domain.entities import FetchOptions, FetchResult
from reelscout.domain.exceptions import UpstreamFetchFailure
from reelscout.infrastructure.common.urls import UrlNormalizer
from reelscout.infrastructure.extraction.extractor import Extractor

BASE_URL = "https://www.filmyzilla13.com"

# ---------------------------------------------------------------------------
# HTML pages
# ---------------------------------------------------------------------------

SUBCATEGORY_PAGE = """
<html><head><title>Popular TV Shows</title></head><body>
<div class="head">Popular TV Shows</div>
<div class="touch">
  <a href="/category/123/the-office.html"><img src="/thumb/office.jpg">The Office</a>
</div>
<div class="touch">
  <a href="https://www.filmyzilla13.com/category/124/friends.html">Friends</a>
</div>
<div class="filmyvideo">
  <a href="/movie/1/ignored.html"><img src="/t/ignored.jpg"></a>
  <div class="informationn"><p>x</p><p>Ignored (2020)</p></div>
</div>
</body></html>
"""

CARD_CATEGORY_PAGE = """
<html><head><title>Filmyzilla</title></head><body>
<div class="head">Bollywood Latest Movies</div>
<div class="filmyvideo">
  <a href="/movie/501/jawan-2023.html"><img src="/thumbs/jawan.jpg"></a>
  <div class="informationn">
    <p>New</p>
    <p>Jawan (2023) <font color="red"><small>(HD)</small></font></p>
    <p class="artist">Starcast: <font color="green">Shah Rukh Khan</font></p>
    <p class="duration">Length: <font color="green">2h 49m</font></p>
  </div>
</div>
<div class="filmyvideo">
  <a href="/movie/502/pathaan.html"><img src="/thumbs/pathaan.jpg"></a>
  <div class="informationn"><p>New</p><p>Pathaan (2023)</p></div>
</div>
<div class="filmyvideo">
  <a href="/movie/501/jawan-2023.html"><img src="/thumbs/jawan.jpg"></a>
  <div class="informationn"><p>New</p><p>Jawan (2023)</p></div>
</div>
<div class="filmyvideo">
  <a href="/category/7/trailers.html"><img src="/thumbs/trailer.jpg"></a>
  <div class="informationn"><p>New</p><p>Trailers (2023)</p></div>
</div>
</body></html>
"""

GRID_CATEGORY_PAGE = """
<html><head><title>Filmyzilla Download Hollywood Movies</title></head><body>
<div class="movie-item">
  <a href="/movie/9/inception.html" title="Inception (2010)">
    <img data-src="/i/inception.jpg">
  </a>
  <span>Inception (2010)</span>
</div>
<div class="post-item">
  <a href="https://www.filmyzilla13.com/movie/10/tenet.html">Tenet</a>
</div>
<div class="entry-item"><a href="/category/3/other.html">No movie link</a></div>
</body></html>
"""

ANCHOR_CATEGORY_PAGE = """
<html><body>
<div class="list">
  <a href="/movies/11/dune-part-two.html">Dune Part Two</a>
  <a href="/movies/11/dune-part-two.html">Dune Part Two</a>
  <a href="/movie/12/up.html">Up</a>
  <a href="/category/13/abc.html">Not a movie</a>
</div>
</body></html>
"""

MOVIE_PAGE = """
<html><head><title>Jawan (2023) Full Movie Download</title></head><body>
<div class="path"><a href="/">Home</a> &raquo;
  <a href="/category/1/bollywood.html">Bollywood Movies</a> &raquo; Jawan (2023)</div>
<div class="head">Jawan (2023)</div>
<div class="imglarge"><img src="/poster/jawan.jpg"></div>
<p class="info">Starcast: <font color="green">Shah Rukh Khan, Nayanthara</font></p>
<p class="info">Genres: <font color="green">Action, Thriller</font></p>
<p class="info">Quality: <font color="green">HDRip</font></p>
<p class="info">Length: <font color="green">2h 49m</font></p>
<p class="info">Release Date: <font color="green">7 September 2023</font></p>
<p class="black">Movie Story: <font color="green">A man sets out to rectify wrongs.</font></p>
<p class="black">Starcast: <font color="green">Someone Else</font></p>
<div class="touch">
  <a href="/server/777/jawan-720p.html"><font color="red">Jawan 720p HDRip</font></a>
  <br><small>(<span style="color:#339900">1.2 GB</span>)</small>
</div>
<div class="touch">
  <a href="/servers/778/jawan-480p.html">Jawan 480p</a><small>(450 MB)</small>
</div>
<div class="touch"><a href="/category/2/other.html">Not a download</a></div>
<a class="filmyvideo" href="/movie/600/pathaan.html"><img src="/t/pathaan.jpg"><font
  size="2">Pathaan (2023) <font color="red"><small>(HD)</small></font></font></a>
</body></html>
"""

SERVER_PAGE = """
<html><head><title>Download Jawan</title></head><body>
<div class="head">Jawan (2023) 720p HDRip.mkv</div>
<div class="whole">File: Jawan.2023.720p.HDRip.mkv</div>
<div class="bld">Size of file: 1.2 GB</div>
<a class="newdl" href="/downloads/servers_2/abc">Start Download Now - Server 2</a>
<a class="newdl" href="/downloads/servers_1/abc">Start Download Now - Server 1</a>
<a class="newdl" href="https://files.example.net/file">Start Download Now</a>
<a class="newdl" href="/downloads/servers_1/abc">Server 1 mirror</a>
</body></html>
"""

FAST_SERVER_PAGE = """
<html><body>
<div class="head">Tenet</div>
<a class="fast" href="/download/fast/1">Fast Download</a>
<a class="fastl" href="/download/fast/2">Fast Download 2</a>
</body></html>
"""

GENERIC_SERVER_PAGE = """
<html><body>
<a href="/download/55/file.html">Download Now - Link A</a>
<a href="/servers_4/x">Mirror</a>
<a href="https://files.example.org/video.mp4">Direct MP4</a>
</body></html>
"""

HOME_PAGE = """
<html><body>
<div class="update">
  <div class="black"><a href="/category/1/bollywood-latest.html">Bollywood Latest</a></div>
  <a href="/movie/501/jawan.html">Jawan (2023)</a> <font color="green">[HDRip]</font><br>
  <a href="/movie/502/pathaan.html">Pathaan (2023)</a><br><font color="green">[720p]</font>
  <a href="/movie/503/dunki.html">Dunki</a><br><br><br><font color="green">[CAM]</font>
</div>
<div class="update">
  <div class="black"><a href="/category/2/hollywood.html">Hollywood Dubbed</a></div>
  <a href="/movie/601/dune.html">Dune</a> <font color="green">[HD]</font>
</div>
<div class="touch"><a href="/category/9/tv-shows.html">TV Shows</a></div>
<div class="touch"><a href="/category/10/web-series.html">Web Series</a></div>
</body></html>
"""


@pytest.fixture()
def subcategory_html() -> str:
    return SUBCATEGORY_PAGE


@pytest.fixture()
def card_category_html() -> str:
    return CARD_CATEGORY_PAGE


@pytest.fixture()
def grid_category_html() -> str:
    return GRID_CATEGORY_PAGE


@pytest.fixture()
def anchor_category_html() -> str:
    return ANCHOR_CATEGORY_PAGE


@pytest.fixture()
def movie_html() -> str:
    return MOVIE_PAGE


@pytest.fixture()
def server_html() -> str:
    return SERVER_PAGE


@pytest.fixture()
def fast_server_html() -> str:
    return FAST_SERVER_PAGE


@pytest.fixture()
def generic_server_html() -> str:
    return GENERIC_SERVER_PAGE


@pytest.fixture()
def home_html() -> str:
    return HOME_PAGE


# ---------------------------------------------------------------------------
# Infrastructure fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def base_url() -> str:
    return BASE_URL


@pytest.fixture()
def urls() -> UrlNormalizer:
    return UrlNormalizer(BASE_URL)


@pytest.fixture()
def extractor(urls: UrlNormalizer) -> Extractor:
    return Extractor(urls, brand="filmyzilla")


# ---------------------------------------------------------------------------
# Fake fetcher
# ---------------------------------------------------------------------------


@dataclass
class FakeFetcher:
    """In-memory ``FetcherPort``: maps URL -> result or exception.

    Records every call so tests can assert on headers and options.
    """

    pages: dict[str, FetchResult | Exception] = field(default_factory=dict)
    calls: list[tuple[str, dict[str, str], FetchOptions | None]] = field(
        default_factory=list
    )

    def add_page(
        self,
        url: str,
        body: str = "",
        *,
        final_url: str | None = None,
        cookies: tuple[str, ...] = (),
    ) -> None:
        self.pages[url] = FetchResult(
            final_url=final_url or url,
            status_code=200,
            body=body,
            cookies=cookies,
        )

    def add_redirect(self, url: str, final_url: str) -> None:
        self.pages[url] = FetchResult(final_url=final_url, status_code=200)

    def add_error(self, url: str, error: UpstreamFetchFailure) -> None:
        self.pages[url] = error

    @property
    def urls(self) -> list[str]:
        return [c[0] for c in self.calls]

    async def fetch(
        self,
        url: str,
        headers: Mapping[str, str] | None = None,
        options: FetchOptions | None = None,
    ) -> FetchResult:
        self.calls.append((url, dict(headers or {}), options))
        page = self.pages.get(url)
        if page is None:
            raise AssertionError(f"unexpected fetch: {url}")
        if isinstance(page, Exception):
            raise page
        return page


@pytest.fixture()
def fake_fetcher() -> FakeFetcher:
    return FakeFetcher()
