"""Server listing (download page) strategies.

Server numbers come from ``Server <N>`` in the anchor text or from
``servers_<N>`` / ``server<N>`` in the href.  Button and generic links
fall back to their 1-based position; fast links and raw media files stay
unnumbered and therefore sort last.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from reelscout.domain.entities.catalog import FileInfo, ServerLink
from reelscout.domain.ports.document import DocumentNode
from reelscout.infrastructure.extraction.chain import Strategy, collapse_whitespace
from reelscout.infrastructure.html.soup_document import first_text

_TEXT_NUMBER_RE = re.compile(r"server\s*(\d+)", re.IGNORECASE)
_HREF_NUMBER_RE = re.compile(r"servers?[_\s]*(\d+)", re.IGNORECASE)
_TITLE_PREFIX_RE = re.compile(
    r"^\s*(?:start\s+download\s+now|download\s+now|click\s+here)\s*-?\s*",
    re.IGNORECASE,
)
_RAW_FILE_RE = re.compile(r"\.(?:mp4|mkv|avi)(?:$|[?#])", re.IGNORECASE)
_SIZE_RE = re.compile(r"([\d.]+\s*(?:MB|GB|KB))", re.IGNORECASE)
_FILE_PREFIX_RE = re.compile(r"^\s*File:\s*", re.IGNORECASE)

_GENERIC_SELECTOR = ", ".join(
    (
        'a[href*="/downloads/"]',
        'a[href*="/download/"]',
        'a[href*="/server"]',
        'a[href*="servers"]',
        'a[href$=".mp4"]',
        'a[href$=".mkv"]',
        'a[href$=".avi"]',
    )
)


def server_number(text: str, href: str) -> str | None:
    match = _TEXT_NUMBER_RE.search(text) or _HREF_NUMBER_RE.search(href)
    return match.group(1) if match else None


def clean_title(text: str) -> str:
    return _TITLE_PREFIX_RE.sub("", collapse_whitespace(text)).strip()


def _link(
    text: str,
    href: str,
    number: str | None,
    fallback_label: str,
) -> ServerLink:
    title = clean_title(text) or fallback_label
    return ServerLink(title=title, url=href, server_number=number)


def newdl_buttons(root: DocumentNode) -> list[ServerLink]:
    out: list[ServerLink] = []
    for position, anchor in enumerate(root.select("a.newdl"), start=1):
        text = anchor.text()
        href = anchor.attr("href").strip()
        if not href:
            continue
        number = server_number(text, href) or str(position)
        out.append(_link(text, href, number, f"Server {number}"))
    return out


def fast_links(root: DocumentNode) -> list[ServerLink]:
    out: list[ServerLink] = []
    for position, node in enumerate(root.select(".fast, .fastl"), start=1):
        text = node.text()
        href = node.attr("href").strip()
        if href and text.strip():
            out.append(_link(text, href, None, f"Fast Server {position}"))
    return out


def generic_links(root: DocumentNode) -> list[ServerLink]:
    out: list[ServerLink] = []
    for position, anchor in enumerate(root.select(_GENERIC_SELECTOR), start=1):
        text = anchor.text()
        href = anchor.attr("href").strip()
        if not href:
            continue
        if _RAW_FILE_RE.search(href):
            number = server_number(text, "")
        else:
            number = server_number(text, href) or str(position)
        out.append(_link(text, href, number, f"Download Link {position}"))
    return out


SERVER_STRATEGIES: tuple[Strategy[ServerLink], ...] = (
    Strategy("newdl_buttons", newdl_buttons),
    Strategy("fast_links", fast_links),
    Strategy("generic_links", generic_links),
)


def sort_servers(servers: Sequence[ServerLink]) -> list[ServerLink]:
    """Ascending by server number; unnumbered entries keep their order last."""
    return sorted(
        servers,
        key=lambda s: (
            s.server_number is None,
            int(s.server_number) if s.server_number else 0,
        ),
    )


def file_info(root: DocumentNode) -> FileInfo:
    size = name = ""
    for block in root.select(".whole, .bld"):
        text = block.text()
        if not size:
            match = _SIZE_RE.search(text)
            if match:
                size = collapse_whitespace(match.group(1))
        if not name and "File:" in text:
            name = collapse_whitespace(_FILE_PREFIX_RE.sub("", text))
    if not name:
        name = first_text(root, ".head", "title")
    return FileInfo(name=name, size=size)
