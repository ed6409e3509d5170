"""Error taxonomy for fetching and request validation.

Absence of content is not an error: extraction returns empty results and
an unresolvable link is a regular ``ResolutionResult``.
"""

from __future__ import annotations


class ReelscoutError(Exception):
    """Base class for all reelscout errors."""


class MissingParameter(ReelscoutError):
    """Raised when a caller omits a required input (maps to HTTP 400)."""

    def __init__(self, parameter: str, message: str | None = None) -> None:
        self.parameter = parameter
        super().__init__(message or f"Missing required parameter: {parameter}")


class UpstreamFetchFailure(ReelscoutError):
    """Base class for failures while fetching a page from the content site."""

    def __init__(self, url: str, message: str) -> None:
        self.url = url
        super().__init__(message)


class UpstreamTimeout(UpstreamFetchFailure):
    """No response within the configured timeout."""


class UpstreamHttpError(UpstreamFetchFailure):
    """Upstream answered with a status code >= 400."""

    def __init__(self, url: str, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(url, f"Request failed with status code {status_code}")


class UpstreamNetworkError(UpstreamFetchFailure):
    """Connection-level failure (DNS, refused, reset, redirect loop)."""
