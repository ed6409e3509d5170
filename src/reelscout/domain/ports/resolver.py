"""Port for resolving indirect download links."""

from __future__ import annotations

from typing import Protocol

from reelscout.domain.entities.resolution import ResolutionResult


class LinkResolverPort(Protocol):
    async def resolve(self, url: str) -> ResolutionResult:
        """Resolve *url* to a direct media URL.

        Unresolvable links are a regular result (strategy ``fallback``).
        Raises ``UpstreamFetchFailure`` only when the server page itself
        cannot be fetched.
        """
        ...
