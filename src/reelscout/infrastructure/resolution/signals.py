"""Direct-link detection.

A URL counts as directly playable when it contains any of the configured
signal substrings.  The table is data so new CDN hosts can be added in
configuration without code changes.
"""

from __future__ import annotations

from collections.abc import Mapping

DEFAULT_DIRECT_LINK_SIGNALS: dict[str, str] = {
    "workers.dev": "edge worker host",
    ".mkv": "matroska video",
    ".mp4": "mp4 video",
    ".m3u8": "hls playlist",
    "cdn.": "cdn host",
    "stream.": "streaming host",
}


def match_signal(
    url: str,
    signals: Mapping[str, str] = DEFAULT_DIRECT_LINK_SIGNALS,
) -> str | None:
    """First signal contained in *url*, or ``None``."""
    for signal in signals:
        if signal in url:
            return signal
    return None


def is_direct_link(
    url: str,
    signals: Mapping[str, str] = DEFAULT_DIRECT_LINK_SIGNALS,
) -> bool:
    return bool(url) and match_signal(url, signals) is not None
