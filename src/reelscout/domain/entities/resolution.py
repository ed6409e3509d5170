"""Domain entities for link resolution and page fetching."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

ResolutionStrategy = Literal["fast-path", "scraped", "fallback"]

LINK_EXPIRED_MESSAGE = "File Not Found or Link Expired"
RESOLUTION_TIMEOUT_MESSAGE = (
    "Resolution took too long. The server might be down or busy."
)


@dataclass(frozen=True)
class ResolutionResult:
    """Outcome of resolving a download/server URL to a direct media URL."""

    original_url: str
    resolved_url: str
    is_resolved: bool
    strategy: ResolutionStrategy
    message: str | None = None  # user-facing reason for degraded outcomes

    @classmethod
    def fast_path(cls, url: str) -> ResolutionResult:
        return cls(
            original_url=url,
            resolved_url=url,
            is_resolved=True,
            strategy="fast-path",
        )

    @classmethod
    def unresolved(cls, url: str, message: str | None = None) -> ResolutionResult:
        return cls(
            original_url=url,
            resolved_url=url,
            is_resolved=False,
            strategy="fallback",
            message=message,
        )

    @property
    def link_expired(self) -> bool:
        return self.message == LINK_EXPIRED_MESSAGE


@dataclass(frozen=True)
class FetchOptions:
    """Per-call fetch policy.

    ``stream_only`` follows redirects and returns as soon as the final
    response headers arrive; the body is never read.
    """

    follow_redirects: bool = True
    max_redirects: int = 10
    timeout: float = 15.0  # seconds
    stream_only: bool = False


@dataclass(frozen=True)
class FetchResult:
    final_url: str
    status_code: int
    body: str | None = None  # None in stream_only mode
    cookies: tuple[str, ...] = ()  # raw Set-Cookie values, in arrival order
    headers: dict[str, str] = field(default_factory=dict)
