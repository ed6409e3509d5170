"""Port for fetching pages from the content site."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol, runtime_checkable

from reelscout.domain.entities.resolution import FetchOptions, FetchResult


@runtime_checkable
class FetcherPort(Protocol):
    """Performs a single HTTP GET with browser-like headers.

    Raises ``UpstreamTimeout``, ``UpstreamHttpError`` or
    ``UpstreamNetworkError`` on failure.
    """

    async def fetch(
        self,
        url: str,
        headers: Mapping[str, str] | None = None,
        options: FetchOptions | None = None,
    ) -> FetchResult: ...
