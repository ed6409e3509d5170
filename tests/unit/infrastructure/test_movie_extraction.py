"""Tests for movie detail extraction."""

from __future__ import annotations

from reelscout.infrastructure.extraction import movie
from reelscout.infrastructure.extraction.extractor import Extractor
from reelscout.infrastructure.html.soup_document import parse_document

BASE = "https://www.filmyzilla13.com"


class TestMovieDetail:
    def test_metadata(self, extractor: Extractor, movie_html: str) -> None:
        detail = extractor.movie_detail(movie_html)

        assert detail.title == "Jawan (2023)"
        assert detail.starcast == "Shah Rukh Khan, Nayanthara"
        assert detail.genres == "Action, Thriller"
        assert detail.quality == "HDRip"
        assert detail.length == "2h 49m"
        assert detail.release_date == "7 September 2023"
        assert detail.story == "A man sets out to rectify wrongs."
        assert detail.thumbnail == f"{BASE}/poster/jawan.jpg"

    def test_breadcrumb(self, extractor: Extractor, movie_html: str) -> None:
        detail = extractor.movie_detail(movie_html)
        assert detail.breadcrumb == ["Bollywood Movies", "Jawan (2023)"]

    def test_download_links(self, extractor: Extractor, movie_html: str) -> None:
        links = extractor.movie_detail(movie_html).download_links

        assert [(d.title, d.size) for d in links] == [
            ("Jawan 720p HDRip", "1.2 GB"),
            ("Jawan 480p", "450 MB"),
        ]
        assert links[0].url == f"{BASE}/server/777/jawan-720p.html"
        assert links[1].url == f"{BASE}/servers/778/jawan-480p.html"

    def test_related_movies(self, extractor: Extractor, movie_html: str) -> None:
        related = extractor.movie_detail(movie_html).related_movies

        assert len(related) == 1
        assert related[0].title == "Pathaan"
        assert related[0].year == "2023"
        assert related[0].quality == "HD"
        assert related[0].starcast == "N/A"
        assert related[0].url == f"{BASE}/movie/600/pathaan.html"
        assert related[0].thumbnail == f"{BASE}/t/pathaan.jpg"

    def test_empty_page(self, extractor: Extractor) -> None:
        detail = extractor.movie_detail("<html><body></body></html>")
        assert detail.title == ""
        assert detail.thumbnail == ""
        assert detail.download_links == []
        assert detail.related_movies == []
        assert detail.breadcrumb == []


class TestLabeledFields:
    def test_first_non_empty_wins(self) -> None:
        root = parse_document(
            '<p class="info">Starcast: <font color="green"></font></p>'
            '<p class="info">Starcast: <font color="green">A</font></p>'
            '<p class="black">Starcast: <font color="green">B</font></p>'
        )
        assert movie.labeled_fields(root) == {"starcast": "A"}

    def test_one_field_per_paragraph(self) -> None:
        root = parse_document(
            '<p class="info">Quality and Length: <font color="green">HD</font></p>'
        )
        assert movie.labeled_fields(root) == {"quality": "HD"}


class TestBreadcrumb:
    def test_last_segment_not_duplicated(self) -> None:
        root = parse_document(
            '<div class="path"><a href="/">Home</a> » '
            '<a href="/c/1">Bollywood</a></div>'
        )
        assert movie.breadcrumb(root) == ["Bollywood"]

    def test_no_path(self) -> None:
        assert movie.breadcrumb(parse_document("<div></div>")) == []
