"""Movie detail page extraction."""

from __future__ import annotations

import re

from reelscout.domain.entities.catalog import DownloadLink, MovieDetail
from reelscout.domain.ports.document import DocumentNode
from reelscout.infrastructure.extraction.cards import parse_cards
from reelscout.infrastructure.extraction.chain import collapse_whitespace
from reelscout.infrastructure.html.soup_document import first_attr, first_text

# Checked in this order per paragraph; a paragraph feeds one field only.
LABELED_FIELDS: tuple[tuple[str, str], ...] = (
    ("starcast", "starcast"),
    ("genres", "genres"),
    ("quality", "quality"),
    ("length", "length"),
    ("release date", "release_date"),
    ("movie story", "story"),
)

_SIZE_IN_PARENS_RE = re.compile(r"\(([^)]+(?:MB|GB|KB)[^)]*)\)", re.IGNORECASE)


def labeled_fields(root: DocumentNode) -> dict[str, str]:
    """Map of field name to green-font value; first non-empty match wins."""
    fields: dict[str, str] = {}
    for paragraph in root.select("p.info, p.black"):
        text = paragraph.text().lower()
        for label, name in LABELED_FIELDS:
            if label not in text:
                continue
            if not fields.get(name):
                value = first_text(paragraph, 'font[color="green"]')
                if value:
                    fields[name] = value
            break
    return fields


def breadcrumb(root: DocumentNode) -> list[str]:
    crumbs = [
        text
        for text in (collapse_whitespace(a.text()) for a in root.select(".path a"))
        if text and text != "Home"
    ]
    path = root.select_one(".path")
    if path is not None:
        parts = [
            collapse_whitespace(part)
            for part in path.text().split("»")
            if part.strip() and part.strip() != "Home"
        ]
        if parts and (not crumbs or crumbs[-1] != parts[-1]):
            crumbs.append(parts[-1])
    return crumbs


def _link_size(container: DocumentNode) -> str:
    small = container.select_one("small")
    if small is None:
        return ""
    span = small.select_one('span[style*="color:#339900"]')
    if span is not None:
        return span.text().strip()
    match = _SIZE_IN_PARENS_RE.search(small.text())
    return match.group(1).strip() if match else ""


def download_links(root: DocumentNode) -> list[DownloadLink]:
    out: list[DownloadLink] = []
    for container in root.select(".touch"):
        anchor = container.select_one('a[href*="/server/"]') or container.select_one(
            'a[href*="/servers/"]'
        )
        if anchor is None:
            continue
        href = anchor.attr("href").strip()
        title = first_text(anchor, 'font[color="red"]') or collapse_whitespace(
            anchor.text()
        )
        if title and href:
            out.append(DownloadLink(title=title, url=href, size=_link_size(container)))
    return out


def movie_detail(root: DocumentNode) -> MovieDetail:
    """Detail fields with raw (not yet absolute) URLs."""
    fields = labeled_fields(root)
    return MovieDetail(
        title=first_text(root, ".head", "h1", "title"),
        starcast=fields.get("starcast", ""),
        genres=fields.get("genres", ""),
        quality=fields.get("quality", ""),
        length=fields.get("length", ""),
        release_date=fields.get("release_date", ""),
        story=fields.get("story", ""),
        thumbnail=first_attr(root, ".imglarge img", "src", ".video img"),
        breadcrumb=breadcrumb(root),
        download_links=download_links(root),
        related_movies=parse_cards(root),
    )
